from __future__ import annotations

import logging
from typing import Any

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .tokens import auth_configured, verify_token

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)

NOT_CONFIGURED = "Authentication not configured. Set Firebase Admin env variables."
NO_TOKEN = "No token provided. Authorization required."


def _user_from_claims(claims: dict[str, Any]) -> dict[str, Any]:
    return {
        "uid": claims["uid"],
        "email": claims.get("email"),
        "email_verified": bool(claims.get("email_verified", False)),
        "admin": bool(claims.get("admin", False)),
    }


def require_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> dict[str, Any]:
    """Raise 401 unless a valid bearer token is presented."""
    if not auth_configured():
        raise HTTPException(status_code=401, detail=NOT_CONFIGURED)
    if credentials is None or not credentials.credentials:
        raise HTTPException(status_code=401, detail=NO_TOKEN)
    try:
        claims = verify_token(credentials.credentials)
    except Exception as exc:
        logger.info("Rejected bearer token: %s", exc)
        raise HTTPException(status_code=401, detail=str(exc) or "Authentication failed") from exc
    return _user_from_claims(claims)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> dict[str, Any] | None:
    """Return the caller when a valid token is presented, or ``None``."""
    if credentials is None or not auth_configured():
        return None
    try:
        return _user_from_claims(verify_token(credentials.credentials))
    except Exception:
        logger.debug("Ignoring invalid bearer token on public route", exc_info=True)
        return None


def require_admin(user: dict[str, Any] = Depends(require_user)) -> dict[str, Any]:
    """Raise 401 if not logged in, 403 if the token lacks the admin claim."""
    if not user["admin"]:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
