from __future__ import annotations

import json
import logging
from typing import Any

from groq import Groq

from .config import DEFAULT_LLM_CONFIG, LLMConfig

logger = logging.getLogger(__name__)

RANKING_PROMPT = (
    "You are a product recommendation engine for an online store. "
    "Given a shopper's browsing history and a list of candidate products, "
    "order the candidates from most to least relevant for this shopper.\n\n"
    "Return ONLY valid JSON in this exact format:\n"
    '{"product_ids": ["<id>", "<id>"]}\n'
    "Include only ids from the provided list."
)

DESCRIPTION_PROMPT = (
    "You write concise, SEO-friendly product descriptions for an online store. "
    "Write two or three sentences of plain text, no markdown, no headings, "
    "and do not invent technical specifications."
)


def _build_ranking_message(
    profile: dict[str, Any],
    candidates: list[dict[str, Any]],
    anchor: dict[str, Any] | None,
) -> str:
    by_id = {str(c["id"]): c for c in candidates}
    lines = ["## Shopper"]
    history = [by_id[pid]["name"] for pid in profile.get("browsing_history", []) if pid in by_id]
    if history:
        lines.append(f"- Recently viewed: {', '.join(history[-10:])}")
    else:
        lines.append("- No browsing history yet")
    if anchor:
        lines.append(f"- Currently viewing: {anchor.get('name')} ({anchor.get('category')})")

    lines.append("\n## Candidate Products")
    lines.append("| ID | Name | Category | Price | Rating | Reviews |")
    lines.append("|---|---|---|---|---|---|")
    for c in candidates:
        lines.append(
            f"| {c['id']} | {c.get('name', '')} | {c.get('category', '')} "
            f"| {c.get('price', 0)} | {c.get('rating', 0)} | {c.get('reviews', 0)} |"
        )
    return "\n".join(lines)


def rank_products(
    profile: dict[str, Any],
    candidates: list[dict[str, Any]],
    anchor: dict[str, Any] | None = None,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> list[str]:
    """
    Call Groq LLM to order candidate products for a shopper.

    Returns product ids, best first.
    Returns an empty list on any failure (timeout, bad JSON, API error).
    """
    if not config.available:
        return []

    if not candidates:
        return []

    candidates = candidates[: config.max_candidates]

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": RANKING_PROMPT},
                {
                    "role": "user",
                    "content": _build_ranking_message(profile, candidates, anchor),
                },
            ],
            max_tokens=config.ranking_max_tokens,
            temperature=config.ranking_temperature,
            response_format={"type": "json_object"},
        )

        content = response.choices[0].message.content or ""
        parsed = json.loads(content)

        known = {str(c["id"]) for c in candidates}
        ranked: list[str] = []
        for pid in parsed.get("product_ids", []):
            pid = str(pid)
            if pid in known and pid not in ranked:
                ranked.append(pid)
        return ranked

    except Exception:
        logger.warning("Groq ranking call failed, falling back to heuristic ranking", exc_info=True)
        return []


def template_description(name: str, category: str, short_description: str | None = None) -> str:
    text = f"{name} is a dependable pick in our {category} range."
    if short_description:
        text += f" {short_description.strip().rstrip('.')}."
    return text + " Built for everyday use and backed by our easy returns."


def generate_description(
    name: str,
    category: str,
    short_description: str | None = None,
    config: LLMConfig = DEFAULT_LLM_CONFIG,
) -> str:
    """Return an LLM-written description, or a template one when the LLM is unavailable."""
    if not config.available:
        return template_description(name, category, short_description)

    details = f"Product: {name}\nCategory: {category}"
    if short_description:
        details += f"\nNotes: {short_description}"

    try:
        client = Groq(api_key=config.api_key, timeout=config.timeout)
        response = client.chat.completions.create(
            model=config.model,
            messages=[
                {"role": "system", "content": DESCRIPTION_PROMPT},
                {"role": "user", "content": details},
            ],
            max_tokens=config.description_max_tokens,
            temperature=config.description_temperature,
        )
        content = (response.choices[0].message.content or "").strip()
        if content:
            return content
        logger.warning("Groq returned an empty description for %r", name)
    except Exception:
        logger.warning("Groq description call failed, using template", exc_info=True)

    return template_description(name, category, short_description)
