from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class LLMConfig:
    """Groq settings for catalog ranking and product copy.

    The service works without an API key: ranking is skipped and
    descriptions come from a template.
    """

    api_key: str = os.getenv("GROQ_API_KEY", "")
    model: str = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
    timeout: float = float(os.getenv("GROQ_TIMEOUT", "10"))
    enabled: bool = _env_bool("LLM_ENABLED", True)

    # Ranking: at most this many candidates go into the prompt table
    max_candidates: int = 30
    ranking_max_tokens: int = 1024
    ranking_temperature: float = 0.2

    description_max_tokens: int = 300
    description_temperature: float = 0.7

    @property
    def available(self) -> bool:
        return self.enabled and bool(self.api_key)


DEFAULT_LLM_CONFIG = LLMConfig()
