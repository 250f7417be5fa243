from __future__ import annotations

import logging
from typing import Any

import pandas as pd

from ..store.base import PRODUCTS, DocumentStore, now_iso
from .config import DEFAULT_SEED_CONFIG, SeedConfig

logger = logging.getLogger(__name__)

SEED_COLUMNS = [
    "id",
    "name",
    "price",
    "category",
    "description",
    "stock",
    "image",
    "rating",
    "reviews",
    "createdAt",
]


def load_sample_products(config: SeedConfig = DEFAULT_SEED_CONFIG) -> list[dict[str, Any]]:
    """Read every configured source and return normalized product dicts."""
    frames: list[pd.DataFrame] = []
    for path in config.sources:
        if not path.is_file():
            logger.warning("Seed source %s not found, skipping", path)
            continue
        frames.append(pd.read_json(path, dtype=False, convert_dates=False))

    if not frames:
        return []

    df = pd.concat(frames, ignore_index=True)
    for col in SEED_COLUMNS:
        if col not in df.columns:
            df[col] = None

    df["price"] = pd.to_numeric(df["price"], errors="coerce").fillna(0.0).astype(float)
    df["stock"] = pd.to_numeric(df["stock"], errors="coerce").fillna(config.default_stock).astype(int)
    df["rating"] = pd.to_numeric(df["rating"], errors="coerce").fillna(config.default_rating).astype(float)
    df["reviews"] = pd.to_numeric(df["reviews"], errors="coerce").fillna(0).astype(int)

    df["category"] = df["category"].where(df["category"].notna(), config.default_category)
    df["description"] = df["description"].fillna("").astype(str)
    df["image"] = df["image"].where(df["image"].notna(), config.default_image)
    timestamp = now_iso()
    df["createdAt"] = df["createdAt"].where(df["createdAt"].notna(), timestamp)

    df = df[SEED_COLUMNS].astype(object).where(df[SEED_COLUMNS].notna(), None)
    records = df.to_dict(orient="records")
    for record in records:
        record["updatedAt"] = timestamp
    return records


def seed_products(store: DocumentStore, config: SeedConfig = DEFAULT_SEED_CONFIG) -> int:
    """Write the sample catalog into ``store``; returns the number of products written."""
    products = load_sample_products(config)
    for product in products:
        product_id = product.pop("id", None)
        if product_id:
            store.set(PRODUCTS, str(product_id), product)
        else:
            store.add(PRODUCTS, product)
    return len(products)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    from ..firebase import get_firebase_app
    from ..store.provider import get_store

    if get_firebase_app() is None:
        raise SystemExit("Firebase Admin is not configured; nothing to seed.")
    count = seed_products(get_store())
    print(f"Seeding complete. Wrote {count} products.")
