"""
Per-user commerce state: profiles, carts, wishlists and orders.
"""
