from __future__ import annotations

from pydantic import BaseModel, Field


class CartAddRequest(BaseModel):
    productId: str = Field(..., min_length=1)
    quantity: int = Field(default=1, ge=1)


class CartUpdateRequest(BaseModel):
    quantity: int = Field(..., ge=1)


class WishlistAddRequest(BaseModel):
    productId: str = Field(..., min_length=1)
