# backend/models/receipt.py
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey, CheckConstraint, func
from sqlalchemy.orm import relationship
from database import Base

# A completed sale. Totals are computed server-side and never change afterwards.
class Receipt(Base):
    __tablename__ = "receipts"

    id = Column(Integer, primary_key=True, index=True)
    receipt_number = Column(String, unique=True, nullable=False, index=True)

    customer_name = Column(String, nullable=True)
    business_name = Column(String, nullable=False)
    business_address = Column(String, nullable=True)
    business_phone = Column(String, nullable=True)

    subtotal = Column(Numeric(12, 4), nullable=False)
    tax_rate = Column(Numeric(6, 4), nullable=False)
    tax_amount = Column(Numeric(12, 4), nullable=False)
    discount_rate = Column(Numeric(6, 4), nullable=False, default=0)
    discount_amount = Column(Numeric(12, 4), nullable=False, default=0)
    total_amount = Column(Numeric(12, 4), nullable=False)
    payment_method = Column(String, nullable=False, default="cash")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    items = relationship(
        "ReceiptItem", back_populates="receipt",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="ReceiptItem.id",
    )


# Line item snapshot. product_id is only a weak reference: deleting the
# product nulls it out and leaves the name/sku/price snapshot intact.
class ReceiptItem(Base):
    __tablename__ = "receipt_items"

    id = Column(Integer, primary_key=True, index=True)
    receipt_id = Column(Integer, ForeignKey("receipts.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="SET NULL"), nullable=True)
    product_name = Column(String, nullable=False)
    product_sku = Column(String, nullable=False)
    quantity = Column(Integer, CheckConstraint("quantity >= 1"), nullable=False)
    unit_price = Column(Numeric(12, 4), nullable=False)
    total_price = Column(Numeric(12, 4), nullable=False)

    receipt = relationship("Receipt", back_populates="items")
