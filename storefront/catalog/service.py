from __future__ import annotations

from typing import Any

from ..config import DEFAULT_SETTINGS, Settings
from ..llm.groq_client import generate_description
from ..store.base import PRODUCTS, DocumentStore, now_iso
from .models import PLACEHOLDER_IMAGE, ProductCreate, ProductQuery, ProductUpdate, normalize_product
from .query import query_products


def fetch_products(
    store: DocumentStore,
    category: str | None = None,
    limit: int | None = None,
) -> list[dict[str, Any]]:
    """Load normalized products, optionally restricted to one category."""
    filters = {"category": category} if category and category != "all" else None
    return [normalize_product(p) for p in store.list(PRODUCTS, filters=filters, limit=limit)]


def list_products(
    store: DocumentStore,
    query: ProductQuery,
    settings: Settings = DEFAULT_SETTINGS,
) -> list[dict[str, Any]]:
    products = fetch_products(store, query.category, limit=settings.product_fetch_limit)
    return query_products(products, query)


def get_product(store: DocumentStore, product_id: str) -> dict[str, Any] | None:
    doc = store.get(PRODUCTS, product_id)
    return normalize_product(doc) if doc else None


def create_product(store: DocumentStore, body: ProductCreate) -> dict[str, Any]:
    description = body.description
    if not description and body.short_description:
        description = generate_description(body.name, body.category, body.short_description)

    timestamp = now_iso()
    data = {
        "name": body.name,
        "price": body.price,
        "category": body.category,
        "description": description or body.short_description or "",
        "stock": body.stock,
        "image": body.image or PLACEHOLDER_IMAGE,
        "rating": 0.0,
        "reviews": 0,
        "createdAt": timestamp,
        "updatedAt": timestamp,
    }
    product_id = store.add(PRODUCTS, data)
    return {"id": product_id, **data}


def update_product(
    store: DocumentStore, product_id: str, body: ProductUpdate,
) -> dict[str, Any] | None:
    if store.get(PRODUCTS, product_id) is None:
        return None
    updates = body.model_dump(exclude_none=True)
    updates["updatedAt"] = now_iso()
    store.update(PRODUCTS, product_id, updates)
    return get_product(store, product_id)


def delete_product(store: DocumentStore, product_id: str) -> bool:
    if store.get(PRODUCTS, product_id) is None:
        return False
    store.delete(PRODUCTS, product_id)
    return True
