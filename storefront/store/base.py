from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

PRODUCTS = "products"
USERS = "users"
WISHLISTS = "wishlists"
CART = "cart"
ORDERS = "orders"


class StoreError(Exception):
    """Raised when the backing store rejects an operation."""


class DocumentNotFoundError(StoreError):
    def __init__(self, collection: str, doc_id: str) -> None:
        super().__init__(f"{collection}/{doc_id} not found")
        self.collection = collection
        self.doc_id = doc_id


class DocumentStore(ABC):
    """Minimal Firestore-shaped document API.

    Documents are plain dicts. Reads return a copy that carries the document
    id under ``"id"``; writes never persist that key.
    """

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> dict[str, Any] | None:
        ...

    @abstractmethod
    def add(self, collection: str, data: dict[str, Any]) -> str:
        """Create a document with a generated id and return the id."""

    @abstractmethod
    def set(
        self, collection: str, doc_id: str, data: dict[str, Any], merge: bool = False,
    ) -> None:
        """Create or overwrite a document. ``merge`` deep-merges nested maps."""

    @abstractmethod
    def update(self, collection: str, doc_id: str, updates: dict[str, Any]) -> None:
        """Shallow-update an existing document; raise ``DocumentNotFoundError`` otherwise."""

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        ...

    @abstractmethod
    def list(
        self,
        collection: str,
        filters: dict[str, Any] | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """Return documents whose fields equal every value in ``filters``."""

    @abstractmethod
    def array_union(
        self, collection: str, doc_id: str, field: str, values: list[Any],
    ) -> None:
        """Atomically add ``values`` to an array field, creating the document if needed."""

    @abstractmethod
    def array_remove(
        self, collection: str, doc_id: str, field: str, values: list[Any],
    ) -> None:
        """Atomically remove ``values`` from an array field of an existing document."""

    @abstractmethod
    def delete_map_key(self, collection: str, doc_id: str, field: str, key: str) -> None:
        """Drop ``key`` from a map field of an existing document."""


def strip_id(data: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in data.items() if k != "id"}


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()
