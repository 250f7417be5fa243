from __future__ import annotations

from typing import Any

import httpx


class ApiError(Exception):
    """Raised for HTTP failures and non-2xx API responses."""

    def __init__(self, status_code: int | None, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class NotAuthenticatedError(ApiError):
    def __init__(self, message: str = "User must be logged in") -> None:
        super().__init__(401, message)


class StorefrontClient:
    """Thin async wrapper over the storefront REST API."""

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        token: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._token = token
        self._http = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    @property
    def authenticated(self) -> bool:
        return self._token is not None

    def set_token(self, token: str | None) -> None:
        self._token = token

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "StorefrontClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        headers = {}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        try:
            response = await self._http.request(method, path, headers=headers, **kwargs)
        except httpx.HTTPError as exc:
            raise ApiError(None, f"{method} {path} failed: {exc}") from exc

        try:
            body = response.json() if response.content else {}
        except ValueError:
            body = {}
        if response.is_error:
            raise ApiError(response.status_code, body.get("message") or response.reason_phrase)
        return body

    # ── Catalog ──────────────────────────────────────────────────────

    async def get_products(self, **params: Any) -> list[dict[str, Any]]:
        body = await self._request("GET", "/products", params=params)
        return body.get("data", [])

    async def get_product(self, product_id: str) -> dict[str, Any]:
        body = await self._request("GET", f"/products/{product_id}")
        return body["data"]

    # ── Cart ─────────────────────────────────────────────────────────

    async def get_cart(self) -> list[dict[str, Any]]:
        body = await self._request("GET", "/cart")
        return (body.get("data") or {}).get("items", [])

    async def add_to_cart(self, product_id: str, quantity: int) -> None:
        await self._request("POST", "/cart", json={"productId": product_id, "quantity": quantity})

    async def update_cart_item(self, product_id: str, quantity: int) -> None:
        await self._request("PUT", f"/cart/{product_id}", json={"quantity": quantity})

    async def remove_cart_item(self, product_id: str) -> None:
        await self._request("DELETE", f"/cart/{product_id}")

    async def clear_cart(self) -> None:
        await self._request("DELETE", "/cart")

    # ── Wishlist ─────────────────────────────────────────────────────

    async def get_wishlist(self) -> dict[str, Any]:
        body = await self._request("GET", "/wishlist")
        return body.get("data") or {"productIds": [], "addedAt": {}}

    async def add_to_wishlist(self, product_id: str) -> dict[str, Any]:
        body = await self._request("POST", "/wishlist", json={"productId": product_id})
        return body.get("data") or {}

    async def remove_from_wishlist(self, product_id: str) -> dict[str, Any]:
        body = await self._request("DELETE", f"/wishlist/{product_id}")
        return body.get("data") or {}

    async def clear_wishlist(self) -> None:
        await self._request("DELETE", "/wishlist")
