# backend/schemas/receipt.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Literal

from pydantic import Field

from schemas.base import ORMBase, InputBase

PaymentMethod = Literal["cash", "card", "other"]


# One sold line. unit_price defaults to the product's current price.
class ReceiptItemCreate(InputBase):
    product_id: int
    quantity: int = Field(ge=1)
    unit_price: Optional[Decimal] = Field(default=None, ge=0)


# Header + items. Totals are always computed server-side.
class ReceiptCreate(InputBase):
    receipt_number: Optional[str] = None
    customer_name: Optional[str] = None
    business_name: str = Field(min_length=1)
    business_address: Optional[str] = None
    business_phone: Optional[str] = None
    # Fractions in [0, 1], at most 4 decimal places like the stored columns
    tax_rate: Decimal = Field(default=Decimal("0"), ge=0, le=1, decimal_places=4)
    discount_rate: Decimal = Field(default=Decimal("0"), ge=0, le=1, decimal_places=4)
    payment_method: PaymentMethod = "cash"
    items: List[ReceiptItemCreate] = Field(min_length=1)


class ReceiptItemOut(ORMBase):
    id: int
    product_id: Optional[int] = None
    product_name: str
    product_sku: str
    quantity: int
    unit_price: float
    total_price: float


class ReceiptOut(ORMBase):
    id: int
    receipt_number: str
    customer_name: Optional[str] = None
    business_name: str
    business_address: Optional[str] = None
    business_phone: Optional[str] = None
    subtotal: float
    tax_rate: float
    tax_amount: float
    discount_rate: float
    discount_amount: float
    total_amount: float
    payment_method: str
    created_at: datetime


class ReceiptDetailOut(ReceiptOut):
    items: List[ReceiptItemOut]
