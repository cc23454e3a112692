# backend/services/catalog.py
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import or_, func
from sqlalchemy.orm import Session

from models.category import Category
from models.product import Product

ADMIN_LIST_LIMIT = 100


@dataclass
class CatalogFilters:
    search: Optional[str] = None
    category: Optional[str] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    in_stock: Optional[bool] = None
    featured: Optional[bool] = None
    sort_by: str = "name"
    sort_order: str = "asc"
    limit: Optional[int] = None
    offset: Optional[int] = None


_SORT_COLUMNS = {
    "name": Product.name,
    "price": Product.price,
    "created": Product.created_at,
}


def _search_clause(term: str, *columns):
    # ilike keeps the match case-insensitive on every backend
    like = f"%{term}%"
    return or_(*(col.ilike(like) for col in columns))


def query_catalog(db: Session, filters: CatalogFilters) -> List[Product]:
    """Active products matching the filters, sorted, then paginated.

    Ties on the sort column are broken by id ascending so that pages are
    reproducible.
    """
    query = db.query(Product).filter(Product.is_active.is_(True))

    if filters.search:
        query = query.filter(_search_clause(
            filters.search,
            Product.name, Product.sku, Product.description, Product.brand, Product.tags,
        ))
    if filters.category:
        query = query.filter(Product.category == filters.category.strip().upper())
    if filters.min_price is not None:
        query = query.filter(Product.price >= filters.min_price)
    if filters.max_price is not None:
        query = query.filter(Product.price <= filters.max_price)
    if filters.in_stock:
        query = query.filter(Product.stock_quantity > 0)
    if filters.featured:
        query = query.filter(Product.is_featured.is_(True))

    sort_col = _SORT_COLUMNS.get(filters.sort_by, Product.name)
    if filters.sort_order == "desc":
        query = query.order_by(sort_col.desc(), Product.id.asc())
    else:
        query = query.order_by(sort_col.asc(), Product.id.asc())

    if filters.offset:
        query = query.offset(filters.offset)
    if filters.limit:
        query = query.limit(filters.limit)

    return query.all()


def featured_products(db: Session, limit: int = 8) -> List[Product]:
    return (
        db.query(Product)
        .filter(Product.is_active.is_(True), Product.is_featured.is_(True))
        .order_by(Product.created_at.desc(), Product.id.desc())
        .limit(limit)
        .all()
    )


def categories_with_counts(db: Session):
    """Every category with the number of its active products, by name."""
    product_count = func.count(Product.id).label("product_count")
    rows = (
        db.query(Category, product_count)
        .outerjoin(Product, (Product.category == Category.code) & (Product.is_active.is_(True)))
        .group_by(Category.id)
        .order_by(Category.name)
        .all()
    )
    return [(category, count) for category, count in rows]


def list_products(
    db: Session,
    search: Optional[str] = None,
    category: Optional[str] = None,
    offset: int = 0,
) -> List[Product]:
    """Admin listing: newest first, inactive products included, capped at 100 rows."""
    query = db.query(Product)
    if search:
        query = query.filter(_search_clause(search, Product.name, Product.sku, Product.description))
    if category:
        query = query.filter(Product.category == category.strip().upper())

    return (
        query.order_by(Product.created_at.desc(), Product.id.desc())
        .offset(offset)
        .limit(ADMIN_LIST_LIMIT)
        .all()
    )
