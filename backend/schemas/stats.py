# backend/schemas/stats.py
from schemas.base import ORMBase


class ProductStatsOut(ORMBase):
    total_products: int
    total_value: float
    low_stock_count: int
    out_of_stock_count: int
    categories_count: int
