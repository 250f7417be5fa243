from __future__ import annotations

from typing import Any

from ..store.base import USERS, DocumentStore, now_iso


def get_profile(store: DocumentStore, uid: str) -> dict[str, Any] | None:
    return store.get(USERS, uid)


def ensure_profile(store: DocumentStore, user: dict[str, Any]) -> dict[str, Any]:
    """Return the caller's profile, creating an empty one on first access."""
    profile = store.get(USERS, user["uid"])
    if profile is None:
        store.set(USERS, user["uid"], {
            "email": user.get("email"),
            "browsing_history": [],
            "createdAt": now_iso(),
        })
        profile = store.get(USERS, user["uid"])
    return profile


def record_view(store: DocumentStore, uid: str, product_id: str) -> None:
    store.array_union(USERS, uid, "browsing_history", [product_id])
