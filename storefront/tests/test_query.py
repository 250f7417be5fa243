from __future__ import annotations

from dataclasses import replace

from storefront.catalog.models import ProductQuery, coerce_number, normalize_sort
from storefront.catalog.query import query_products
from storefront.catalog.service import list_products
from storefront.config import DEFAULT_SETTINGS


def _product(pid, name="Item", price=10, **extra):
    return {"id": pid, "name": name, "price": price, "category": "Misc", **extra}


def _ids(products):
    return [p["id"] for p in products]


def test_price_low_coerces_string_prices():
    products = [_product("a", price=30), _product("b", price="10"), _product("c", price=20)]
    result = query_products(products, ProductQuery(sort="price-low"))
    assert [p["price"] for p in result] == [10, 20, 30]
    assert all(isinstance(p["price"], float) for p in result)


def test_price_high_and_alias():
    products = [_product("a", price=30), _product("b", price="10"), _product("c", price=20)]
    assert _ids(query_products(products, ProductQuery(sort="price-high"))) == ["a", "c", "b"]
    assert _ids(query_products(products, ProductQuery(sort="price_low_to_high"))) == ["b", "c", "a"]


def test_unparseable_price_becomes_zero():
    products = [_product("a", price="n/a"), _product("b", price=5)]
    result = query_products(products, ProductQuery(sort="price-low"))
    assert _ids(result) == ["a", "b"]
    assert result[0]["price"] == 0.0


def test_search_matches_name_or_description():
    products = [
        _product("phone", name="Smartphone X"),
        _product("charger", name="Cable", description="Works as a phone charger"),
        _product("tablet", name="Tablet", description="Big screen"),
    ]
    result = query_products(products, ProductQuery(search="PHONE"))
    assert set(_ids(result)) == {"phone", "charger"}


def test_category_filter_is_exact_and_all_is_noop():
    products = [
        _product("a", category="Electronics"),
        _product("b", category="electronics"),
        _product("c", category="Home"),
    ]
    assert _ids(query_products(products, ProductQuery(category="Electronics"))) == ["a"]
    assert len(query_products(products, ProductQuery(category="all"))) == 3


def test_price_bounds_are_inclusive():
    products = [_product("a", price=10), _product("b", price="20"), _product("c", price=30)]
    result = query_products(products, ProductQuery(min_price=10, max_price=20, sort="price-low"))
    assert _ids(result) == ["a", "b"]


def test_newest_is_default_and_missing_dates_sort_last():
    products = [
        _product("old", createdAt="2023-01-01T00:00:00Z"),
        _product("undated"),
        _product("new", createdAt="2024-06-01T12:00:00+00:00"),
        _product("bad", createdAt="not a date"),
    ]
    result = query_products(products, ProductQuery())
    assert _ids(result)[:2] == ["new", "old"]
    assert set(_ids(result)[2:]) == {"undated", "bad"}


def test_unknown_sort_falls_back_to_newest():
    products = [
        _product("old", createdAt="2023-01-01T00:00:00Z"),
        _product("new", createdAt="2024-01-01T00:00:00Z"),
    ]
    assert _ids(query_products(products, ProductQuery(sort="popularity"))) == ["new", "old"]


def test_rating_sort_is_stable_on_ties():
    products = [
        _product("a", rating=4.0),
        _product("b", rating="4.5"),
        _product("c", rating=4.0),
    ]
    assert _ids(query_products(products, ProductQuery(sort="rating"))) == ["b", "a", "c"]


def test_limit_applies_after_sort():
    products = [_product(str(i), price=i) for i in range(10, 0, -1)]
    result = query_products(products, ProductQuery(sort="price-low", limit=3))
    assert [p["price"] for p in result] == [1, 2, 3]


def test_empty_input():
    assert query_products([], ProductQuery()) == []


def test_helpers():
    assert coerce_number("12.5") == 12.5
    assert coerce_number(None) == 0.0
    assert coerce_number(float("nan")) == 0.0
    assert normalize_sort("price_high_to_low") == "price-high"
    assert normalize_sort("whatever") == "newest"


def test_list_products_sorts_only_within_fetch_cap(store):
    capped = replace(DEFAULT_SETTINGS, product_fetch_limit=3)

    cheapest = list_products(store, ProductQuery(sort="price-low", limit=2), capped)
    assert _ids(cheapest) == ["sample-3", "sample-2"]

    newest = list_products(store, ProductQuery(), capped)
    assert _ids(newest) == ["sample-1", "sample-2", "sample-3"]

    uncapped = list_products(store, ProductQuery(sort="price-low", limit=2))
    assert _ids(uncapped) == ["sample-3", "sample-10"]
