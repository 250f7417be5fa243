from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from storefront.data_ingestion.seed import seed_products
from storefront.store.memory import MemoryStore
from storefront.store.provider import set_store

# Bearer tokens accepted by the fake verifier, mapped to decoded claims.
FAKE_TOKENS = {
    "user-token": {"uid": "user-1", "email": "user@example.com"},
    "other-token": {"uid": "user-2", "email": "other@example.com"},
    "admin-token": {"uid": "admin-1", "email": "admin@example.com", "admin": True},
}


def _fake_verify(token: str) -> dict:
    if token not in FAKE_TOKENS:
        raise ValueError("Invalid ID token")
    return dict(FAKE_TOKENS[token])


@pytest.fixture(autouse=True)
def store(monkeypatch):
    """Fresh seeded in-memory store, fake Firebase auth and no live LLM per test."""
    memory = MemoryStore()
    seed_products(memory)
    set_store(memory)

    monkeypatch.setattr("storefront.auth.dependencies.verify_token", _fake_verify)
    monkeypatch.setattr("storefront.auth.dependencies.auth_configured", lambda: True)
    monkeypatch.setattr(
        "storefront.llm.groq_client.Groq",
        MagicMock(side_effect=RuntimeError("LLM disabled in tests")),
    )

    yield memory
    set_store(None)
