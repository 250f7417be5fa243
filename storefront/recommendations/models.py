from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator


class QuizAnswers(BaseModel):
    category: str = "all"
    budget: list[float] = Field(default_factory=lambda: [0.0, 1500.0], min_length=2, max_length=2)
    purpose: str = ""
    min_rating: float = Field(default=0.0, ge=0.0, le=5.0)
    prefer_brand: bool = False
    brand: str = ""

    @field_validator("budget")
    @classmethod
    def _ordered_budget(cls, value: list[float]) -> list[float]:
        low, high = value
        if low < 0 or high < low:
            raise ValueError("budget must be [min, max] with 0 <= min <= max")
        return value


class AssistantRequest(QuizAnswers):
    limit: int = Field(default=5, ge=1, le=50)


class ScoredProduct(BaseModel):
    product: dict[str, Any]
    score: float
    reasons: list[str]


class DescriptionRequest(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    shortDescription: str | None = None
