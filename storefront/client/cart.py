from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable

from ..catalog.models import PLACEHOLDER_IMAGE, coerce_number
from .api import ApiError, StorefrontClient

logger = logging.getLogger(__name__)


@dataclass
class CartItem:
    id: str
    name: str
    price: float
    image: str
    qty: int


@dataclass(frozen=True)
class SyncFailure:
    operation: str
    product_id: str | None
    error: ApiError


def _positive_qty(value: Any) -> int:
    return max(1, int(coerce_number(value)))


@dataclass
class CartState:
    """Shopper cart held client-side and mirrored to the server when logged in.

    Mirroring is best-effort: failures never raise, they are appended to
    ``sync_errors`` and handed to ``on_sync_error`` when one is set.
    """

    api: StorefrontClient
    on_sync_error: Callable[[SyncFailure], None] | None = None
    items: list[CartItem] = field(default_factory=list)
    sync_errors: list[SyncFailure] = field(default_factory=list)

    @property
    def total(self) -> float:
        return sum(item.price * item.qty for item in self.items)

    @property
    def count(self) -> int:
        return sum(item.qty for item in self.items)

    def find(self, product_id: str) -> CartItem | None:
        return next((item for item in self.items if item.id == product_id), None)

    def _record(self, operation: str, product_id: str | None, exc: ApiError) -> None:
        logger.warning("Cart %s for %s failed to sync: %s", operation, product_id, exc.message)
        failure = SyncFailure(operation, product_id, exc)
        self.sync_errors.append(failure)
        if self.on_sync_error is not None:
            self.on_sync_error(failure)

    async def _mirror(
        self,
        operation: str,
        product_id: str | None,
        method: Callable[..., Awaitable[Any]],
        *args: Any,
    ) -> bool:
        if not self.api.authenticated:
            return False
        try:
            await method(*args)
        except ApiError as exc:
            self._record(operation, product_id, exc)
            return False
        return True

    async def add(self, product: dict[str, Any], qty: int = 1) -> None:
        product_id = str(product.get("id") or product.get("_id") or uuid.uuid4().hex)
        add_qty = _positive_qty(qty)
        existing = self.find(product_id)
        if existing:
            existing.qty += add_qty
        else:
            self.items.append(CartItem(
                id=product_id,
                name=product.get("name") or "Product",
                price=coerce_number(product.get("price")),
                image=product.get("image") or PLACEHOLDER_IMAGE,
                qty=add_qty,
            ))
        await self._mirror("add", product_id, self.api.add_to_cart, product_id, add_qty)

    async def update_qty(self, product_id: str, qty: int) -> None:
        item = self.find(product_id)
        if item is None:
            return
        item.qty = _positive_qty(qty)
        await self._mirror("update", product_id, self.api.update_cart_item, product_id, item.qty)

    async def remove(self, product_id: str) -> None:
        self.items = [item for item in self.items if item.id != product_id]
        await self._mirror("remove", product_id, self.api.remove_cart_item, product_id)

    async def clear(self) -> None:
        self.items = []
        await self._mirror("clear", None, self.api.clear_cart)

    async def sync_on_login(self) -> None:
        """Reconcile with the server cart right after login.

        A non-empty server cart replaces the local one. Otherwise local items
        are pushed one at a time and the push stops at the first failure, leaving
        the server cart partially synced.
        """
        try:
            server_items = await self.api.get_cart()
        except ApiError as exc:
            self._record("fetch", None, exc)
            return

        if server_items:
            self.items = [
                CartItem(
                    id=str(si.get("productId") or si.get("id")),
                    name=si.get("name") or "Product",
                    price=coerce_number(si.get("price")),
                    image=si.get("image") or PLACEHOLDER_IMAGE,
                    qty=_positive_qty(si.get("quantity")),
                )
                for si in server_items
            ]
            return

        for item in list(self.items):
            if not await self._mirror("push", item.id, self.api.add_to_cart, item.id, item.qty):
                break

    def reset(self) -> None:
        """Drop local state on logout; the server cart is left untouched."""
        self.items = []
        self.sync_errors = []
