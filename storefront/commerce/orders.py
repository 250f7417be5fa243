from __future__ import annotations

import logging
from typing import Any

from ..store.base import ORDERS, DocumentStore, now_iso
from .cart import clear_cart, get_cart

logger = logging.getLogger(__name__)


def list_orders(store: DocumentStore, uid: str, limit: int = 10) -> list[dict[str, Any]]:
    """Return the user's orders, newest first."""
    orders = store.list(ORDERS, filters={"userId": uid})
    orders.sort(key=lambda o: str(o.get("createdAt") or ""), reverse=True)
    return orders[:limit]


def get_order(store: DocumentStore, uid: str, order_id: str) -> dict[str, Any] | None:
    order = store.get(ORDERS, order_id)
    if order is None or order.get("userId") != uid:
        return None
    return order


def checkout(store: DocumentStore, uid: str) -> dict[str, Any] | None:
    """Turn the user's cart into a pending order; ``None`` when the cart is empty."""
    lines = get_cart(store, uid)
    if not lines:
        return None

    items = [
        {
            "productId": line["productId"],
            "name": line["name"],
            "price": line["price"],
            "quantity": line["quantity"],
        }
        for line in lines
    ]
    data = {
        "userId": uid,
        "items": items,
        "total": round(sum(i["price"] * i["quantity"] for i in items), 2),
        "status": "pending",
        "createdAt": now_iso(),
    }
    order_id = store.add(ORDERS, data)
    clear_cart(store, uid)
    logger.info("Created order %s for user %s (%d items)", order_id, uid, len(items))
    return {"id": order_id, **data}
