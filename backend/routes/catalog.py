# backend/routes/catalog.py
# Public storefront endpoints: no login, inactive products are never exposed.
from decimal import Decimal
from typing import Optional, List, Literal
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_db
from schemas.catalog import (
    WishlistAdd, WishlistItemOut, WishlistRemoveResult, ReviewCreate, ReviewOut,
)
from schemas.category import CategoryWithCount
from schemas.product import ProductOut, ProductDetailOut
from services import catalog as catalog_service
from services import products as product_service
from services import reviews as review_service
from services import wishlist as wishlist_service
from services.catalog import CatalogFilters

router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get("/categories", response_model=List[CategoryWithCount])
def get_categories(db: Session = Depends(get_db)):
    rows = catalog_service.categories_with_counts(db)
    return [
        CategoryWithCount(
            **{f: getattr(category, f) for f in ("id", "name", "code", "description", "image", "created_at")},
            product_count=count,
        )
        for category, count in rows
    ]


@router.get("/products", response_model=List[ProductOut])
def list_catalog_products(
    search: Optional[str] = Query(None, description="Name, SKU, description, brand or tags"),
    category: Optional[str] = Query(None, description="Category code"),
    min_price: Optional[Decimal] = Query(None, ge=0),
    max_price: Optional[Decimal] = Query(None, ge=0),
    in_stock: Optional[bool] = Query(None),
    featured: Optional[bool] = Query(None),
    sort_by: Literal["name", "price", "created"] = "name",
    sort_order: Literal["asc", "desc"] = "asc",
    limit: Optional[int] = Query(None, ge=1),
    offset: Optional[int] = Query(None, ge=0),
    db: Session = Depends(get_db),
):
    filters = CatalogFilters(
        search=search, category=category, min_price=min_price, max_price=max_price,
        in_stock=in_stock, featured=featured, sort_by=sort_by, sort_order=sort_order,
        limit=limit, offset=offset,
    )
    return catalog_service.query_catalog(db, filters)


@router.get("/products/featured", response_model=List[ProductOut])
def list_featured_products(limit: int = Query(8, ge=1, le=50), db: Session = Depends(get_db)):
    return catalog_service.featured_products(db, limit=limit)


@router.get("/products/{product_id}", response_model=ProductDetailOut)
def get_catalog_product(product_id: int, db: Session = Depends(get_db)):
    product = product_service.get_product_with_images(db, product_id)
    detail = ProductDetailOut.model_validate(product)
    detail.reviews = [ReviewOut.model_validate(r) for r in review_service.list_reviews(db, product_id)]
    detail.average_rating = review_service.average_rating(db, product_id)
    return detail


# =========================
# REVIEWS
# =========================
@router.get("/products/{product_id}/reviews", response_model=List[ReviewOut])
def list_product_reviews(product_id: int, db: Session = Depends(get_db)):
    product_service.get_product(db, product_id, active_only=True)
    return review_service.list_reviews(db, product_id)


@router.post("/products/{product_id}/reviews", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
def add_product_review(product_id: int, payload: ReviewCreate, db: Session = Depends(get_db)):
    return review_service.add_review(db, product_id, payload)


# =========================
# WISHLIST
# =========================
@router.get("/wishlist", response_model=List[WishlistItemOut])
def get_wishlist(session_id: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return wishlist_service.get_wishlist(db, session_id)


@router.post("/wishlist", response_model=WishlistItemOut)
def add_to_wishlist(payload: WishlistAdd, db: Session = Depends(get_db)):
    return wishlist_service.add_to_wishlist(db, payload.session_id, payload.product_id)


@router.delete("/wishlist/{product_id}", response_model=WishlistRemoveResult)
def remove_from_wishlist(product_id: int, session_id: str = Query(..., min_length=1), db: Session = Depends(get_db)):
    return {"success": wishlist_service.remove_from_wishlist(db, session_id, product_id)}
