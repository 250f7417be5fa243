from __future__ import annotations

from typing import Any

from ..store.base import PRODUCTS, WISHLISTS, DocumentStore, now_iso


def get_wishlist(store: DocumentStore, uid: str) -> dict[str, Any]:
    doc = store.get(WISHLISTS, uid) or {}
    return {
        "productIds": list(doc.get("productIds") or []),
        "addedAt": dict(doc.get("addedAt") or {}),
    }


def add_to_wishlist(store: DocumentStore, uid: str, product_id: str) -> dict[str, Any] | None:
    """Add a product with set semantics; returns ``None`` for unknown products."""
    if store.get(PRODUCTS, product_id) is None:
        return None
    existing = store.get(WISHLISTS, uid)
    if product_id not in ((existing or {}).get("productIds") or []):
        timestamp = now_iso()
        store.array_union(WISHLISTS, uid, "productIds", [product_id])
        fields: dict[str, Any] = {
            "userId": uid,
            "addedAt": {product_id: timestamp},
            "updatedAt": timestamp,
        }
        if existing is None:
            fields["createdAt"] = timestamp
        store.set(WISHLISTS, uid, fields, merge=True)
    return get_wishlist(store, uid)


def remove_from_wishlist(store: DocumentStore, uid: str, product_id: str) -> dict[str, Any]:
    if store.get(WISHLISTS, uid) is not None:
        store.array_remove(WISHLISTS, uid, "productIds", [product_id])
        store.delete_map_key(WISHLISTS, uid, "addedAt", product_id)
        store.update(WISHLISTS, uid, {"updatedAt": now_iso()})
    return get_wishlist(store, uid)


def clear_wishlist(store: DocumentStore, uid: str) -> None:
    if store.get(WISHLISTS, uid) is not None:
        store.update(WISHLISTS, uid, {"productIds": [], "addedAt": {}, "updatedAt": now_iso()})
