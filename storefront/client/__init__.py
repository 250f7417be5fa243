"""
Storefront client state.

Responsibilities:
- Talk to the storefront API over HTTP with a Firebase bearer token.
- Hold the shopper's cart locally and mirror it to the server once logged in.
- Keep the server-backed wishlist and its product details in memory.
"""
