# backend/services/analytics.py
from dataclasses import dataclass

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.category import Category
from models.product import Product, LOW_STOCK_THRESHOLD


@dataclass
class ProductStats:
    total_products: int
    total_value: float
    low_stock_count: int
    out_of_stock_count: int
    categories_count: int


def get_product_stats(db: Session) -> ProductStats:
    # low_stock_count counts everything that needs restocking (the low and
    # the out-of-stock bands), out_of_stock_count the latter band alone.
    total_products = db.query(func.count(Product.id)).scalar() or 0
    total_value = db.query(func.sum(Product.price * Product.stock_quantity)).scalar() or 0
    low_stock_count = (
        db.query(func.count(Product.id))
        .filter(Product.stock_quantity <= LOW_STOCK_THRESHOLD)
        .scalar()
    ) or 0
    out_of_stock_count = (
        db.query(func.count(Product.id)).filter(Product.stock_quantity == 0).scalar()
    ) or 0
    categories_count = db.query(func.count(Category.id)).scalar() or 0

    return ProductStats(
        total_products=total_products,
        total_value=round(float(total_value), 2),
        low_stock_count=low_stock_count,
        out_of_stock_count=out_of_stock_count,
        categories_count=categories_count,
    )
