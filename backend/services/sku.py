# backend/services/sku.py
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from config import settings
from models.category import Category
from models.product import Product
from services.counters import next_value
from services.errors import NotFoundError, ConflictError

logger = logging.getLogger(__name__)


def normalize_code(code: Optional[str]) -> Optional[str]:
    if code is None:
        return None
    c = code.strip().upper()
    return c if c else None


def format_sku(category_code: str, sequence: int, year: int) -> str:
    return f"{category_code}-{sequence:03d}-{year}"


def generate_sku(db: Session, category_code: str) -> str:
    """Return the next free SKU for a category, e.g. ELC-004-2026.

    The sequence comes from the persisted per-category counter, which is
    seeded with the number of products already in the category. Numbers are
    never reused after deletes. A candidate that collides with an existing
    (manually supplied) SKU is skipped, up to SKU_MAX_ATTEMPTS times.
    """
    code = normalize_code(category_code)
    if not code or db.query(Category.id).filter(Category.code == code).first() is None:
        raise NotFoundError(f"Category '{category_code}' not found")

    existing = db.query(func.count(Product.id)).filter(Product.category == code).scalar() or 0
    year = datetime.now().year

    for _ in range(settings.SKU_MAX_ATTEMPTS):
        sequence = next_value(db, f"sku:{code}", start=existing)
        candidate = format_sku(code, sequence, year)
        if db.query(Product.id).filter(Product.sku == candidate).first() is None:
            return candidate
        logger.warning("Generated SKU %s already taken, advancing sequence", candidate)

    raise ConflictError(f"Could not generate a free SKU for category '{code}'")
