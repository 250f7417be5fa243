from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from .api import ApiError, NotAuthenticatedError, StorefrontClient

logger = logging.getLogger(__name__)


@dataclass
class WishlistState:
    """Server-backed wishlist with product details cached for display.

    Every operation requires a logged-in client. Server errors propagate so
    the caller can show them.
    """

    api: StorefrontClient
    items: list[dict[str, Any]] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.items)

    def _require_login(self, action: str) -> None:
        if not self.api.authenticated:
            raise NotAuthenticatedError(f"User must be logged in to {action} wishlist")

    def contains(self, product_id: str) -> bool:
        return any(item["id"] == product_id for item in self.items)

    async def _fetch_detail(self, product_id: str) -> dict[str, Any] | None:
        try:
            return await self.api.get_product(product_id)
        except ApiError as exc:
            if exc.status_code == 404:
                return None
            raise

    async def load(self) -> list[dict[str, Any]]:
        self._require_login("view")
        data = await self.api.get_wishlist()
        product_ids = data.get("productIds", [])
        added_at = data.get("addedAt", {})

        details = await asyncio.gather(*(self._fetch_detail(pid) for pid in product_ids))

        self.items = [
            {**product, "addedToWishlist": added_at.get(product["id"])}
            for product in details
            if product is not None
        ]
        return self.items

    async def add(self, product: dict[str, Any]) -> None:
        self._require_login("add to")
        if self.contains(product["id"]):
            return
        data = await self.api.add_to_wishlist(product["id"])
        self.items.append({
            **product,
            "addedToWishlist": data.get("addedAt", {}).get(product["id"]),
        })

    async def remove(self, product_id: str) -> None:
        self._require_login("remove from")
        await self.api.remove_from_wishlist(product_id)
        self.items = [item for item in self.items if item["id"] != product_id]

    async def toggle(self, product: dict[str, Any]) -> bool:
        """Add or remove based on local state; returns True when now wishlisted.

        The decision uses this session's view only, so two sessions toggling
        the same product at once can disagree with the server.
        """
        if self.contains(product["id"]):
            await self.remove(product["id"])
            return False
        await self.add(product)
        return True

    async def clear(self) -> None:
        self._require_login("clear")
        await self.api.clear_wishlist()
        self.items = []

    def reset(self) -> None:
        self.items = []
