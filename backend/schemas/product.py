# backend/schemas/product.py
from datetime import datetime
from decimal import Decimal
from typing import Optional, List, Literal

from pydantic import Field

from schemas.base import ORMBase, InputBase
from schemas.catalog import ReviewOut

BarcodeType = Literal["code128", "code39", "ean13", "qr"]


# Shared base attributes for product payloads
class ProductBase(InputBase):
    description: Optional[str] = None
    details: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    weight: Optional[float] = Field(default=None, ge=0)
    length: Optional[float] = Field(default=None, ge=0)
    width: Optional[float] = Field(default=None, ge=0)
    height: Optional[float] = Field(default=None, ge=0)
    image_url: Optional[str] = None
    barcode_data: Optional[str] = None
    tags: Optional[str] = None


# Schema for creating a new product. A missing sku is generated from the category.
class ProductCreate(ProductBase):
    name: str = Field(min_length=1)
    sku: Optional[str] = None
    category: str = Field(min_length=1)
    price: Decimal = Field(ge=0, max_digits=10, decimal_places=2)
    stock_quantity: int = Field(default=0, ge=0)
    barcode_type: BarcodeType = "code128"
    is_active: bool = True
    is_featured: bool = False


# Schema for partial product updates
class ProductUpdate(ProductBase):
    """PATCH payload - every field optional, unset fields are left alone."""
    name: Optional[str] = Field(default=None, min_length=1)
    sku: Optional[str] = None
    category: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, ge=0, max_digits=10, decimal_places=2)
    stock_quantity: Optional[int] = Field(default=None, ge=0)
    barcode_type: Optional[BarcodeType] = None
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None


class ProductImageOut(ORMBase):
    id: int
    product_id: int
    image_url: str
    alt: Optional[str] = None
    is_primary: bool
    sort_order: int


# Full product representation
class ProductOut(ORMBase):
    id: int
    name: str
    sku: str
    category: str
    price: float
    stock_quantity: int
    stock_status: str
    description: Optional[str] = None
    details: Optional[str] = None
    brand: Optional[str] = None
    model: Optional[str] = None
    weight: Optional[float] = None
    length: Optional[float] = None
    width: Optional[float] = None
    height: Optional[float] = None
    image_url: Optional[str] = None
    barcode_type: str
    barcode_data: Optional[str] = None
    is_active: bool
    is_featured: bool
    tags: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# Public product page: gallery, reviews and the computed rating
class ProductDetailOut(ProductOut):
    images: List[ProductImageOut] = []
    reviews: List[ReviewOut] = []
    average_rating: float = 0.0


class SkuRequest(InputBase):
    category: str = Field(min_length=1)


class SkuResponse(ORMBase):
    sku: str
