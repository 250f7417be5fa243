from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from ..llm.groq_client import rank_products

logger = logging.getLogger(__name__)

Ranker = Callable[[dict[str, Any], list[dict[str, Any]], Optional[dict[str, Any]]], list[str]]


def _popularity(product: dict[str, Any]) -> float:
    """Rating weighted by review count."""
    return float(product.get("rating") or 0) * float(product.get("reviews") or 0)


def rank_fallback(
    candidates: list[dict[str, Any]],
    anchor_id: str | None = None,
) -> list[dict[str, Any]]:
    """Deterministic ranking used when no personalised signal is available.

    The anchor is excluded. When the anchor is among the candidates and has a
    category, same-category products come first. Each group is ordered by
    ``rating * reviews``, keeping input order on ties.
    """
    anchor = next((c for c in candidates if c["id"] == anchor_id), None) if anchor_id else None
    pool = [c for c in candidates if c["id"] != anchor_id]

    if anchor and anchor.get("category"):
        same = [c for c in pool if c.get("category") == anchor["category"]]
        other = [c for c in pool if c.get("category") != anchor["category"]]
    else:
        same, other = [], pool

    return (
        sorted(same, key=_popularity, reverse=True)
        + sorted(other, key=_popularity, reverse=True)
    )


def get_recommendations(
    candidates: list[dict[str, Any]],
    profile: dict[str, Any] | None = None,
    anchor_id: str | None = None,
    limit: int = 8,
    ranker: Ranker = rank_products,
) -> list[dict[str, Any]]:
    """Return up to ``limit`` products, personalised when a profile is given."""
    fallback = rank_fallback(candidates, anchor_id)

    ranked_ids: list[str] = []
    if profile is not None and fallback:
        anchor = next((c for c in candidates if c["id"] == anchor_id), None)
        try:
            ranked_ids = ranker(profile, fallback, anchor)
        except Exception:
            logger.warning("Personalised ranking failed, using fallback ranking", exc_info=True)
            ranked_ids = []

    by_id = {c["id"]: c for c in fallback}
    results: list[dict[str, Any]] = []
    seen: set[str] = set()

    for pid in ranked_ids:
        if pid in by_id and pid not in seen:
            results.append(by_id[pid])
            seen.add(pid)

    for product in fallback:
        if len(results) >= limit:
            break
        if product["id"] not in seen:
            results.append(product)
            seen.add(product["id"])

    return results[:limit]
