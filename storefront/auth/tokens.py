from __future__ import annotations

from typing import Any

from firebase_admin import auth

from ..firebase import get_firebase_app


def auth_configured() -> bool:
    return get_firebase_app() is not None


def verify_token(id_token: str) -> dict[str, Any]:
    """Verify a Firebase ID token and return its decoded claims.

    Raises whatever firebase-admin raises for invalid, expired or revoked tokens.
    """
    return auth.verify_id_token(id_token, app=get_firebase_app())
