from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PLACEHOLDER_IMAGE = "https://via.placeholder.com/400"

SORT_NEWEST = "newest"
SORT_PRICE_LOW = "price-low"
SORT_PRICE_HIGH = "price-high"
SORT_RATING = "rating"

_SORT_ALIASES = {
    "price_low_to_high": SORT_PRICE_LOW,
    "price_high_to_low": SORT_PRICE_HIGH,
}


def coerce_number(value: Any) -> float:
    """Parse a possibly-string numeric field; anything unparseable becomes 0."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value) if value == value else 0.0  # NaN check
    try:
        parsed = float(str(value).strip())
    except (TypeError, ValueError):
        return 0.0
    return parsed if parsed == parsed else 0.0


def normalize_product(doc: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of a stored product with numeric fields coerced."""
    product = dict(doc)
    product["price"] = coerce_number(doc.get("price"))
    product["rating"] = coerce_number(doc.get("rating"))
    product["stock"] = max(0, int(coerce_number(doc.get("stock"))))
    product["reviews"] = max(0, int(coerce_number(doc.get("reviews"))))
    return product


def normalize_sort(sort: str | None) -> str:
    key = (sort or SORT_NEWEST).strip()
    key = _SORT_ALIASES.get(key, key)
    if key in (SORT_PRICE_LOW, SORT_PRICE_HIGH, SORT_RATING):
        return key
    return SORT_NEWEST


class ProductQuery(BaseModel):
    category: str | None = None
    search: str | None = None
    min_price: float | None = None
    max_price: float | None = None
    sort: str = SORT_NEWEST
    limit: int = Field(default=100, ge=1)


class ProductCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    price: float = Field(..., gt=0)
    category: str = Field(..., min_length=1)
    description: str | None = None
    short_description: str | None = Field(default=None, alias="shortDescription")
    stock: int = Field(default=0, ge=0)
    image: str | None = None


class ProductUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1)
    price: float | None = Field(default=None, ge=0)
    category: str | None = Field(default=None, min_length=1)
    description: str | None = None
    stock: int | None = Field(default=None, ge=0)
    image: str | None = None
    rating: float | None = Field(default=None, ge=0.0, le=5.0)
    reviews: int | None = Field(default=None, ge=0)
