from __future__ import annotations

import logging
from typing import Callable

from .api import ApiError, StorefrontClient
from .cart import CartState, SyncFailure
from .wishlist import WishlistState

logger = logging.getLogger(__name__)


class ClientSession:
    """Owns the cart and wishlist state for one shopper session.

    UI code receives the session (or its ``cart``/``wishlist``) explicitly;
    state lives exactly as long as the session object.
    """

    def __init__(
        self,
        api: StorefrontClient,
        on_sync_error: Callable[[SyncFailure], None] | None = None,
    ) -> None:
        self.api = api
        self.on_sync_error = on_sync_error
        self.cart = CartState(api, on_sync_error=on_sync_error)
        self.wishlist = WishlistState(api)
        self.load_errors: list[SyncFailure] = []

    @property
    def authenticated(self) -> bool:
        return self.api.authenticated

    async def login(self, token: str) -> None:
        """Attach the token and reconcile cart and wishlist with the server.

        Sync and load failures are recorded, never raised, so the session is
        always usable once this returns.
        """
        self.api.set_token(token)
        await self.cart.sync_on_login()
        await self._load_wishlist()
        logger.info(
            "Session started with %d cart items and %d wishlist items",
            len(self.cart.items), self.wishlist.count,
        )

    async def _load_wishlist(self) -> None:
        try:
            await self.wishlist.load()
        except ApiError as exc:
            logger.warning("Wishlist failed to load after login: %s", exc.message)
            self.wishlist.reset()
            failure = SyncFailure("wishlist-load", None, exc)
            self.load_errors.append(failure)
            if self.on_sync_error is not None:
                self.on_sync_error(failure)

    def logout(self) -> None:
        self.api.set_token(None)
        self.load_errors = []
        self.cart.reset()
        self.wishlist.reset()

    async def close(self) -> None:
        await self.api.aclose()
