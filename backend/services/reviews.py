# backend/services/reviews.py
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from models.product import Product
from models.review import ProductReview
from schemas.catalog import ReviewCreate
from services.errors import NotFoundError


def list_reviews(db: Session, product_id: int) -> List[ProductReview]:
    return (
        db.query(ProductReview)
        .filter(ProductReview.product_id == product_id)
        .order_by(ProductReview.created_at.desc(), ProductReview.id.desc())
        .all()
    )


def average_rating(db: Session, product_id: int) -> float:
    avg = db.query(func.avg(ProductReview.rating)).filter(ProductReview.product_id == product_id).scalar()
    return round(float(avg), 2) if avg is not None else 0.0


def add_review(db: Session, product_id: int, data: ReviewCreate) -> ProductReview:
    product = db.query(Product).filter(Product.id == product_id, Product.is_active.is_(True)).first()
    if not product:
        raise NotFoundError("Product not found")

    review = ProductReview(product_id=product_id, **data.model_dump())
    db.add(review)
    db.commit()
    db.refresh(review)
    return review
