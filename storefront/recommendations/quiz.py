from __future__ import annotations

from typing import Any

from ..catalog.models import coerce_number
from .models import QuizAnswers, ScoredProduct

BUDGET_RELAX_LOW = 0.8
BUDGET_RELAX_HIGH = 1.2


def _in_range(price: float, low: float, high: float) -> bool:
    return low <= price <= high


def _purpose_reason(purpose: str) -> str:
    if purpose.lower() == "office":
        return "Popular for office use"
    return f"Great for {purpose}"


def score_products(
    products: list[dict[str, Any]], answers: QuizAnswers,
) -> list[ScoredProduct]:
    """Score catalog products against smart-assistant answers.

    Category and minimum rating are hard filters. The budget filter widens to
    80%-120% of the range when nothing fits it exactly. Results are ordered by
    score, highest first, keeping catalog order on ties.
    """
    min_price, max_price = answers.budget
    category = answers.category
    purpose = answers.purpose
    purpose_lower = purpose.lower()
    brand_lower = answers.brand.lower()

    candidates = [
        p for p in products
        if (not category or category == "all" or p.get("category") == category)
        and coerce_number(p.get("rating")) >= answers.min_rating
    ]

    in_budget = [
        p for p in candidates
        if _in_range(coerce_number(p.get("price")), min_price, max_price)
    ]
    if in_budget:
        candidates = in_budget
    else:
        candidates = [
            p for p in candidates
            if _in_range(
                coerce_number(p.get("price")),
                min_price * BUDGET_RELAX_LOW,
                max_price * BUDGET_RELAX_HIGH,
            )
        ]

    scored: list[ScoredProduct] = []
    for p in candidates:
        score = 0.0
        reasons: list[str] = []
        price = coerce_number(p.get("price"))
        rating = coerce_number(p.get("rating"))
        name = str(p.get("name") or "").lower()
        desc = str(p.get("description") or "").lower()

        if category and category != "all" and p.get("category") == category:
            score += 4
            reasons.append(f"Fits your category: {category}")

        if _in_range(price, min_price, max_price):
            score += 3
            reasons.append("Recommended because it fits your budget")
        else:
            score += 1
            reasons.append("Close to your budget")

        if purpose_lower and (purpose_lower in name or purpose_lower in desc):
            score += 2
            reasons.append(_purpose_reason(purpose))

        if answers.prefer_brand and brand_lower and (brand_lower in name or brand_lower in desc):
            score += 2
            reasons.append("Matches your brand/keyword preference")

        score += (rating / 5) * 2
        if rating >= 4.5:
            reasons.append("Best rated")
        elif rating >= 4.0:
            reasons.append("Well rated")

        if coerce_number(p.get("stock")) > 0:
            score += 1
            reasons.append("In stock and ready to ship")

        scored.append(ScoredProduct(product=p, score=score, reasons=reasons))

    return sorted(scored, key=lambda s: s.score, reverse=True)
