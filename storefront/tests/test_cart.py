from __future__ import annotations

from fastapi.testclient import TestClient

from storefront.app import app

client = TestClient(app)

USER = {"Authorization": "Bearer user-token"}
OTHER = {"Authorization": "Bearer other-token"}


def _items(resp):
    return [(i["productId"], i["quantity"]) for i in resp.json()["data"]["items"]]


def test_empty_cart():
    resp = client.get("/cart", headers=USER)
    assert resp.status_code == 200
    assert resp.json() == {"success": True, "data": {"items": []}}


def test_add_joins_product_details():
    resp = client.post("/cart", json={"productId": "sample-3", "quantity": 2}, headers=USER)
    assert resp.status_code == 200
    [line] = resp.json()["data"]["items"]
    assert line == {
        "productId": "sample-3",
        "quantity": 2,
        "name": "Fast Charging Cable",
        "price": 14.99,
        "image": "https://via.placeholder.com/400",
    }


def test_add_existing_product_increments():
    client.post("/cart", json={"productId": "sample-1"}, headers=USER)
    resp = client.post("/cart", json={"productId": "sample-1", "quantity": 3}, headers=USER)
    assert _items(resp) == [("sample-1", 4)]


def test_add_keeps_insertion_order():
    client.post("/cart", json={"productId": "sample-2"}, headers=USER)
    resp = client.post("/cart", json={"productId": "sample-1"}, headers=USER)
    assert _items(resp) == [("sample-2", 1), ("sample-1", 1)]


def test_add_unknown_product():
    resp = client.post("/cart", json={"productId": "ghost"}, headers=USER)
    assert resp.status_code == 404


def test_add_rejects_non_positive_quantity():
    resp = client.post("/cart", json={"productId": "sample-1", "quantity": 0}, headers=USER)
    assert resp.status_code == 400


def test_update_replaces_quantity():
    client.post("/cart", json={"productId": "sample-1", "quantity": 5}, headers=USER)
    resp = client.put("/cart/sample-1", json={"quantity": 2}, headers=USER)
    assert _items(resp) == [("sample-1", 2)]


def test_update_missing_line():
    resp = client.put("/cart/sample-1", json={"quantity": 2}, headers=USER)
    assert resp.status_code == 404
    assert resp.json()["message"] == "Product not in cart"


def test_remove_and_clear():
    client.post("/cart", json={"productId": "sample-1"}, headers=USER)
    client.post("/cart", json={"productId": "sample-2"}, headers=USER)
    resp = client.delete("/cart/sample-1", headers=USER)
    assert _items(resp) == [("sample-2", 1)]
    resp = client.delete("/cart", headers=USER)
    assert resp.json()["data"]["items"] == []
    assert client.get("/cart", headers=USER).json()["data"]["items"] == []


def test_carts_are_per_user():
    client.post("/cart", json={"productId": "sample-1"}, headers=USER)
    assert client.get("/cart", headers=OTHER).json()["data"]["items"] == []


def test_deleted_product_still_listed_as_placeholder(store):
    client.post("/cart", json={"productId": "sample-1"}, headers=USER)
    store.delete("products", "sample-1")
    [line] = client.get("/cart", headers=USER).json()["data"]["items"]
    assert line["name"] == "Product"
    assert line["price"] == 0.0
