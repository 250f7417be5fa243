from __future__ import annotations

import asyncio
import json

import httpx

from storefront.client.api import StorefrontClient
from storefront.client.cart import CartState
from storefront.client.session import ClientSession


class FakeServer:
    """Records requests and answers the cart API from canned data."""

    def __init__(self, server_items=None, fail_writes=False, fail_products=(), wishlist_ids=()):
        self.server_items = server_items or []
        self.fail_writes = fail_writes
        self.fail_products = set(fail_products)
        self.wishlist_ids = list(wishlist_ids)
        self.calls: list[tuple[str, str, dict | None]] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content) if request.content else None
        self.calls.append((request.method, request.url.path, payload))
        if request.method == "GET" and request.url.path == "/cart":
            return httpx.Response(200, json={"success": True, "data": {"items": self.server_items}})
        if request.method == "GET" and request.url.path == "/wishlist":
            data = {"productIds": self.wishlist_ids, "addedAt": {}}
            return httpx.Response(200, json={"success": True, "data": data})
        if request.method == "GET" and request.url.path.startswith("/products/"):
            return httpx.Response(500, json={"success": False, "message": "Internal server error"})
        if self.fail_writes or (payload or {}).get("productId") in self.fail_products:
            return httpx.Response(500, json={"success": False, "message": "Internal server error"})
        return httpx.Response(200, json={"success": True, "data": {"items": []}})

    def writes(self):
        return [c for c in self.calls if c[0] != "GET"]


def _cart(server: FakeServer, **kwargs) -> CartState:
    api = StorefrontClient("http://testserver", transport=httpx.MockTransport(server.handler))
    return CartState(api, **kwargs)


def _lines(cart: CartState):
    return [(item.id, item.qty) for item in cart.items]


def test_login_sync_server_cart_replaces_local():
    server = FakeServer(server_items=[{"productId": "p1", "quantity": 2}])

    async def scenario():
        cart = _cart(server)
        cart.api.set_token("user-token")
        await cart.sync_on_login()
        await cart.api.aclose()
        return cart

    cart = asyncio.run(scenario())
    assert _lines(cart) == [("p1", 2)]
    assert server.writes() == []


def test_login_sync_pushes_local_items_when_server_empty():
    server = FakeServer()

    async def scenario():
        cart = _cart(server)
        await cart.add({"id": "p2", "name": "Mug", "price": "8.5"}, 1)
        assert server.calls == []
        cart.api.set_token("user-token")
        await cart.sync_on_login()
        await cart.api.aclose()
        return cart

    cart = asyncio.run(scenario())
    assert server.writes() == [("POST", "/cart", {"productId": "p2", "quantity": 1})]
    assert _lines(cart) == [("p2", 1)]


def test_login_push_is_sequential_in_cart_order():
    server = FakeServer()

    async def scenario():
        cart = _cart(server)
        await cart.add({"id": "a"}, 2)
        await cart.add({"id": "b"})
        cart.api.set_token("user-token")
        await cart.sync_on_login()
        await cart.api.aclose()

    asyncio.run(scenario())
    assert [c[2]["productId"] for c in server.writes()] == ["a", "b"]


def test_local_cart_math():
    async def scenario():
        cart = _cart(FakeServer())
        await cart.add({"id": "a", "price": 10}, 2)
        await cart.add({"id": "a", "price": 10}, 1)
        await cart.add({"id": "b", "price": "2.5"}, 0)
        await cart.update_qty("b", -4)
        await cart.api.aclose()
        return cart

    cart = asyncio.run(scenario())
    assert _lines(cart) == [("a", 3), ("b", 1)]
    assert cart.total == 32.5
    assert cart.count == 4


def test_authenticated_mutations_are_mirrored():
    server = FakeServer()

    async def scenario():
        cart = _cart(server)
        cart.api.set_token("user-token")
        await cart.add({"id": "a"}, 2)
        await cart.update_qty("a", 5)
        await cart.remove("a")
        await cart.clear()
        await cart.api.aclose()

    asyncio.run(scenario())
    assert [(m, p) for m, p, _ in server.writes()] == [
        ("POST", "/cart"),
        ("PUT", "/cart/a"),
        ("DELETE", "/cart/a"),
        ("DELETE", "/cart"),
    ]
    assert server.writes()[1][2] == {"quantity": 5}


def test_sync_failures_are_reported_not_raised():
    server = FakeServer(fail_writes=True)
    seen = []

    async def scenario():
        cart = _cart(server, on_sync_error=seen.append)
        cart.api.set_token("user-token")
        await cart.add({"id": "a"})
        await cart.api.aclose()
        return cart

    cart = asyncio.run(scenario())
    assert _lines(cart) == [("a", 1)]
    assert len(cart.sync_errors) == 1
    assert seen == cart.sync_errors
    failure = cart.sync_errors[0]
    assert failure.operation == "add"
    assert failure.error.status_code == 500


def test_reset_drops_local_state():
    async def scenario():
        cart = _cart(FakeServer())
        await cart.add({"id": "a"})
        await cart.api.aclose()
        return cart

    cart = asyncio.run(scenario())
    cart.reset()
    assert cart.items == []


def test_login_push_stops_at_first_failure():
    server = FakeServer(fail_products={"b"})

    async def scenario():
        cart = _cart(server)
        await cart.add({"id": "a"}, 2)
        await cart.add({"id": "b"})
        await cart.add({"id": "c"})
        cart.api.set_token("user-token")
        await cart.sync_on_login()
        await cart.api.aclose()
        return cart

    cart = asyncio.run(scenario())
    assert [c[2]["productId"] for c in server.writes()] == ["a", "b"]
    assert [(f.operation, f.product_id) for f in cart.sync_errors] == [("push", "b")]
    assert _lines(cart) == [("a", 2), ("b", 1), ("c", 1)]


def test_login_survives_wishlist_detail_failure():
    server = FakeServer(server_items=[{"productId": "p1", "quantity": 2}], wishlist_ids=["p1"])
    seen = []

    async def scenario():
        api = StorefrontClient("http://testserver", transport=httpx.MockTransport(server.handler))
        session = ClientSession(api, on_sync_error=seen.append)
        await session.login("user-token")
        await session.close()
        return session

    session = asyncio.run(scenario())
    assert session.authenticated
    assert _lines(session.cart) == [("p1", 2)]
    assert session.wishlist.items == []
    assert [(f.operation, f.error.status_code) for f in session.load_errors] == [("wishlist-load", 500)]
    assert seen == session.load_errors
