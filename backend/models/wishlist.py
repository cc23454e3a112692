# backend/models/wishlist.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, UniqueConstraint, func
from database import Base

# Anonymous per-browser wishlist entry, keyed by a client-generated session token
class WishlistItem(Base):
    __tablename__ = "wishlist"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(String, nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        # One row per (session, product) pair
        UniqueConstraint("session_id", "product_id", name="uq_wishlist_session_product"),
    )
