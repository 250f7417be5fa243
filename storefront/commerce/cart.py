"""
Server-held carts.

One document per user in the ``cart`` collection. Every write reads the
current item list, changes it and writes it back, so concurrent writers
can lose updates.
"""
from __future__ import annotations

from typing import Any

from ..catalog.models import PLACEHOLDER_IMAGE, normalize_product
from ..store.base import CART, PRODUCTS, DocumentStore, now_iso


def _load_items(store: DocumentStore, uid: str) -> list[dict[str, Any]]:
    doc = store.get(CART, uid)
    return list(doc.get("items") or []) if doc else []


def _save_items(store: DocumentStore, uid: str, items: list[dict[str, Any]]) -> None:
    store.set(CART, uid, {"userId": uid, "items": items, "updatedAt": now_iso()})


def get_cart(store: DocumentStore, uid: str) -> list[dict[str, Any]]:
    """Return cart lines joined with current product name, price and image."""
    lines: list[dict[str, Any]] = []
    for item in _load_items(store, uid):
        doc = store.get(PRODUCTS, item["productId"])
        product = normalize_product(doc) if doc else {}
        lines.append({
            "productId": item["productId"],
            "quantity": item["quantity"],
            "name": product.get("name", "Product"),
            "price": product.get("price", 0.0),
            "image": product.get("image") or PLACEHOLDER_IMAGE,
        })
    return lines


def add_item(
    store: DocumentStore, uid: str, product_id: str, quantity: int = 1,
) -> list[dict[str, Any]] | None:
    """Add ``quantity`` of a product; returns ``None`` for unknown products."""
    if store.get(PRODUCTS, product_id) is None:
        return None
    items = _load_items(store, uid)
    for item in items:
        if item["productId"] == product_id:
            item["quantity"] += quantity
            break
    else:
        items.append({"productId": product_id, "quantity": quantity})
    _save_items(store, uid, items)
    return get_cart(store, uid)


def set_quantity(
    store: DocumentStore, uid: str, product_id: str, quantity: int,
) -> list[dict[str, Any]] | None:
    """Replace a line's quantity; returns ``None`` when the product is not in the cart."""
    items = _load_items(store, uid)
    for item in items:
        if item["productId"] == product_id:
            item["quantity"] = max(1, quantity)
            break
    else:
        return None
    _save_items(store, uid, items)
    return get_cart(store, uid)


def remove_item(store: DocumentStore, uid: str, product_id: str) -> list[dict[str, Any]]:
    items = [i for i in _load_items(store, uid) if i["productId"] != product_id]
    _save_items(store, uid, items)
    return get_cart(store, uid)


def clear_cart(store: DocumentStore, uid: str) -> None:
    _save_items(store, uid, [])
