from __future__ import annotations

import logging

import firebase_admin
from firebase_admin import credentials

from .config import DEFAULT_SETTINGS, Settings

logger = logging.getLogger(__name__)

_app: firebase_admin.App | None = None
_initialized = False


def get_firebase_app(settings: Settings = DEFAULT_SETTINGS) -> firebase_admin.App | None:
    """Return the Firebase Admin app, or ``None`` when credentials are missing."""
    global _app, _initialized
    if _initialized:
        return _app
    _initialized = True

    if not settings.firebase_configured:
        logger.warning("Firebase Admin not configured; using the in-memory store and disabling auth")
        return None

    try:
        cert = credentials.Certificate({
            "type": "service_account",
            "project_id": settings.firebase_project_id,
            "private_key": settings.firebase_private_key,
            "client_email": settings.firebase_client_email,
            "token_uri": "https://oauth2.googleapis.com/token",
        })
        _app = firebase_admin.initialize_app(
            cert, {"projectId": settings.firebase_project_id},
        )
    except ValueError:
        logger.exception("Failed to initialize Firebase Admin")
        _app = None
    return _app
