"""
Product listing queries.

Stored products are loaded into a small DataFrame of derived columns so that
filters and sorts run against normalized values; the original documents are
returned in the resulting order.
"""
from __future__ import annotations

from typing import Any

import pandas as pd

from .models import (
    SORT_PRICE_HIGH,
    SORT_PRICE_LOW,
    SORT_RATING,
    ProductQuery,
    normalize_product,
    normalize_sort,
)

_EPOCH = pd.Timestamp(0, tz="UTC")


def _frame(products: list[dict[str, Any]]) -> pd.DataFrame:
    created = pd.to_datetime(
        pd.Series([p.get("createdAt") for p in products], dtype="object"),
        errors="coerce",
        utc=True,
        format="ISO8601",
    )
    return pd.DataFrame({
        "name": [str(p.get("name") or "").lower() for p in products],
        "description": [str(p.get("description") or "").lower() for p in products],
        "category": [str(p.get("category") or "") for p in products],
        "price": [p["price"] for p in products],
        "rating": [p["rating"] for p in products],
        "created_at": created.fillna(_EPOCH),
    })


def query_products(
    products: list[dict[str, Any]], query: ProductQuery,
) -> list[dict[str, Any]]:
    """Filter, sort and paginate an in-memory product list."""
    if not products:
        return []

    products = [normalize_product(p) for p in products]
    df = _frame(products)

    # --- Filters ---
    mask = pd.Series(True, index=df.index)

    if query.category and query.category != "all":
        mask = mask & (df["category"] == query.category)

    if query.search:
        term = query.search.strip().lower()
        mask = mask & (
            df["name"].str.contains(term, regex=False)
            | df["description"].str.contains(term, regex=False)
            | df["category"].str.lower().str.contains(term, regex=False)
        )

    if query.min_price is not None:
        mask = mask & (df["price"] >= query.min_price)
    if query.max_price is not None:
        mask = mask & (df["price"] <= query.max_price)

    filtered = df.loc[mask]

    # --- Sort, then paginate ---
    sort = normalize_sort(query.sort)
    if sort == SORT_PRICE_LOW:
        ordered = filtered.sort_values("price", ascending=True, kind="stable")
    elif sort == SORT_PRICE_HIGH:
        ordered = filtered.sort_values("price", ascending=False, kind="stable")
    elif sort == SORT_RATING:
        ordered = filtered.sort_values("rating", ascending=False, kind="stable")
    else:
        ordered = filtered.sort_values("created_at", ascending=False, kind="stable")

    return [products[i] for i in ordered.head(query.limit).index]
