from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in ("1", "true", "yes", "on")


def _env_list(name: str, default: str) -> list[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


@dataclass(frozen=True)
class Settings:
    firebase_project_id: str = os.getenv("FIREBASE_PROJECT_ID", "")
    firebase_client_email: str = os.getenv("FIREBASE_CLIENT_EMAIL", "")
    firebase_private_key: str = os.getenv("FIREBASE_PRIVATE_KEY", "").replace("\\n", "\n")

    # Upper bound on rows pulled from the store before in-memory sort/paginate
    product_fetch_limit: int = int(os.getenv("PRODUCT_FETCH_LIMIT", "1000"))
    default_page_size: int = 100
    recommendation_pool_size: int = int(os.getenv("RECOMMENDATION_POOL_SIZE", "100"))
    assistant_pool_size: int = int(os.getenv("ASSISTANT_POOL_SIZE", "200"))

    cors_origins: list[str] = field(default_factory=lambda: _env_list("CORS_ORIGINS", "*"))
    expose_error_details: bool = _env_flag("EXPOSE_ERROR_DETAILS")
    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def firebase_configured(self) -> bool:
        return bool(
            self.firebase_project_id
            and self.firebase_client_email
            and self.firebase_private_key
        )


DEFAULT_SETTINGS = Settings()
