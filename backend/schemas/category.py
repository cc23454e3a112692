# backend/schemas/category.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from schemas.base import ORMBase, InputBase


class CategoryCreate(InputBase):
    name: str = Field(min_length=1)
    code: str = Field(min_length=1, max_length=10, pattern=r"^[A-Za-z0-9]+$")
    description: Optional[str] = None
    image: Optional[str] = None


class CategoryUpdate(InputBase):
    name: Optional[str] = Field(default=None, min_length=1)
    code: Optional[str] = Field(default=None, min_length=1, max_length=10, pattern=r"^[A-Za-z0-9]+$")
    description: Optional[str] = None
    image: Optional[str] = None


class CategoryOut(ORMBase):
    id: int
    name: str
    code: str
    description: Optional[str] = None
    image: Optional[str] = None
    created_at: datetime


# Catalog sidebar entry
class CategoryWithCount(CategoryOut):
    product_count: int
