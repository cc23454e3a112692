# backend/services/wishlist.py
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.product import Product
from models.wishlist import WishlistItem
from services.errors import NotFoundError


def _find(db: Session, session_id: str, product_id: int):
    return db.query(WishlistItem).filter(
        WishlistItem.session_id == session_id,
        WishlistItem.product_id == product_id,
    ).first()


def get_wishlist(db: Session, session_id: str) -> List[WishlistItem]:
    return (
        db.query(WishlistItem)
        .filter(WishlistItem.session_id == session_id)
        .order_by(WishlistItem.created_at.desc(), WishlistItem.id.desc())
        .all()
    )


def add_to_wishlist(db: Session, session_id: str, product_id: int) -> WishlistItem:
    """Idempotent: an existing (session, product) row is returned as is."""
    existing = _find(db, session_id, product_id)
    if existing:
        return existing

    if db.query(Product.id).filter(Product.id == product_id).first() is None:
        raise NotFoundError("Product not found")

    item = WishlistItem(session_id=session_id, product_id=product_id)
    db.add(item)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race against an identical request
        db.rollback()
        return _find(db, session_id, product_id)
    db.refresh(item)
    return item


def remove_from_wishlist(db: Session, session_id: str, product_id: int) -> bool:
    deleted = db.query(WishlistItem).filter(
        WishlistItem.session_id == session_id,
        WishlistItem.product_id == product_id,
    ).delete(synchronize_session=False)
    db.commit()
    return deleted > 0
