# backend/models/product.py
from sqlalchemy import (
    Column, Integer, String, Text, Float, Numeric, Boolean, DateTime,
    ForeignKey, CheckConstraint, func,
)
from sqlalchemy.orm import relationship
from database import Base

# Stock level at or below which a product needs restocking
LOW_STOCK_THRESHOLD = 10

BARCODE_TYPES = ("code128", "code39", "ean13", "qr")


def stock_status_for(quantity: int) -> str:
    if quantity <= 0:
        return "out_of_stock"
    if quantity <= LOW_STOCK_THRESHOLD:
        return "low_stock"
    return "in_stock"


# Model Product
# A single catalog item. The SKU is unique across the whole store and, when
# generated, has the form CODE-###-YYYY.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    sku = Column(String, unique=True, nullable=False, index=True)
    category = Column(String, ForeignKey("categories.code"), nullable=False, index=True)

    price = Column(Numeric(10, 2), CheckConstraint("price >= 0"), nullable=False)
    stock_quantity = Column(Integer, CheckConstraint("stock_quantity >= 0"), nullable=False, default=0)

    description = Column(Text, nullable=True)
    details = Column(Text, nullable=True)
    brand = Column(String, nullable=True)
    model = Column(String, nullable=True)

    # Dimensions
    weight = Column(Float, nullable=True)
    length = Column(Float, nullable=True)
    width = Column(Float, nullable=True)
    height = Column(Float, nullable=True)

    image_url = Column(String, nullable=True)
    barcode_type = Column(String, nullable=False, default="code128")
    barcode_data = Column(String, nullable=True)

    is_active = Column(Boolean, nullable=False, default=True, index=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    tags = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    images = relationship(
        "ProductImage", back_populates="product",
        cascade="all, delete-orphan", passive_deletes=True,
        order_by="ProductImage.sort_order",
    )
    reviews = relationship(
        "ProductReview", back_populates="product",
        cascade="all, delete-orphan", passive_deletes=True,
    )

    @property
    def stock_status(self) -> str:
        return stock_status_for(self.stock_quantity or 0)


# Additional gallery images, owned by the product
class ProductImage(Base):
    __tablename__ = "product_images"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    image_url = Column(String, nullable=False)
    alt = Column(String, nullable=True)
    is_primary = Column(Boolean, nullable=False, default=False)
    sort_order = Column(Integer, nullable=False, default=0)

    product = relationship("Product", back_populates="images")
