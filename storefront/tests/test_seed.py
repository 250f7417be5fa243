import json
from pathlib import Path

from storefront.data_ingestion.config import DEFAULT_SEED_CONFIG, SeedConfig
from storefront.data_ingestion.seed import load_sample_products, seed_products
from storefront.store.memory import MemoryStore


def test_bundled_catalog_loads():
    products = load_sample_products()
    assert len(products) == 12
    assert all(isinstance(p["price"], float) for p in products)
    assert {p["id"] for p in products} >= {"sample-1", "sample-12"}


def test_seed_defaults_fill_missing_fields(tmp_path: Path):
    source = tmp_path / "extra.json"
    source.write_text(json.dumps([
        {"id": "x-1", "name": "Mystery Box", "price": "12.50"},
        {"name": "Unnamed Gadget", "price": 3, "category": "Electronics", "stock": 2, "rating": 3.5},
    ]))
    cfg = SeedConfig(sources=(source,))

    first, second = load_sample_products(cfg)

    assert first["price"] == 12.5
    assert first["category"] == cfg.default_category
    assert first["stock"] == cfg.default_stock
    assert first["rating"] == cfg.default_rating
    assert first["reviews"] == 0
    assert first["image"] == cfg.default_image
    assert first["createdAt"]
    assert second["id"] is None
    assert second["stock"] == 2


def test_seed_products_writes_store(tmp_path: Path):
    source = tmp_path / "extra.json"
    source.write_text(json.dumps([
        {"id": "x-1", "name": "Mystery Box", "price": 10},
        {"name": "Unnamed Gadget", "price": 3},
    ]))
    store = MemoryStore()

    count = seed_products(store, SeedConfig(sources=DEFAULT_SEED_CONFIG.sources + (source,)))

    assert count == 14
    assert store.get("products", "x-1")["name"] == "Mystery Box"
    assert len(store.list("products")) == 14


def test_missing_source_is_skipped(tmp_path: Path):
    assert load_sample_products(SeedConfig(sources=(tmp_path / "nope.json",))) == []
