from __future__ import annotations

import logging

from firebase_admin import firestore

from ..firebase import get_firebase_app
from .base import DocumentStore
from .memory import MemoryStore

logger = logging.getLogger(__name__)

_store: DocumentStore | None = None


def _build_store() -> DocumentStore:
    firebase_app = get_firebase_app()
    if firebase_app is not None:
        from .firestore import FirestoreStore

        return FirestoreStore(firestore.client(app=firebase_app))

    from ..data_ingestion.seed import seed_products

    store = MemoryStore()
    count = seed_products(store)
    logger.info("Serving %d sample products from the in-memory store", count)
    return store


def get_store() -> DocumentStore:
    """Return the process-wide store, building it on first call."""
    global _store
    if _store is None:
        _store = _build_store()
    return _store


def set_store(store: DocumentStore | None) -> None:
    """Replace the process-wide store; ``None`` rebuilds it on next access."""
    global _store
    _store = store
