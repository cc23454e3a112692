# backend/schemas/catalog.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.base import ORMBase, InputBase


# Wishlist requests carry the anonymous browser session token
class WishlistAdd(InputBase):
    session_id: str = Field(min_length=1)
    product_id: int


class WishlistItemOut(ORMBase):
    id: int
    session_id: str
    product_id: int
    created_at: datetime


class WishlistRemoveResult(ORMBase):
    success: bool


class ReviewCreate(InputBase):
    customer_name: str = Field(min_length=1)
    customer_email: Optional[str] = None
    rating: int = Field(ge=1, le=5)
    review_text: Optional[str] = None


class ReviewOut(ORMBase):
    id: int
    product_id: int
    customer_name: str
    rating: int
    review_text: Optional[str] = None
    is_verified: bool
    created_at: datetime
