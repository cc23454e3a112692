# backend/seed.py
import logging

from sqlalchemy.orm import Session

from config import settings
from database import SessionLocal, init_db
from models.category import Category
from models.users import User
from utils.hashing import get_password_hash

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ("Electronics", "ELC", "Electronic devices and components"),
    ("Clothing", "CLT", "Apparel and fashion items"),
    ("Food & Beverage", "FNB", "Food and drink products"),
    ("Home & Garden", "HOM", "Home improvement and garden supplies"),
    ("Books", "BKS", "Books and educational materials"),
    ("Toys", "TOY", "Toys and games"),
]


def seed_categories(db: Session) -> int:
    """Insert the default categories that are missing. Returns how many were added."""
    existing = {code for (code,) in db.query(Category.code).all()}
    added = 0
    for name, code, description in DEFAULT_CATEGORIES:
        if code in existing:
            continue
        db.add(Category(name=name, code=code, description=description))
        added += 1
    db.commit()
    return added


def seed_admin(db: Session) -> bool:
    username = settings.DEFAULT_ADMIN_USERNAME
    if db.query(User).filter(User.username == username).first():
        return False
    db.add(User(username=username, password_hash=get_password_hash(settings.DEFAULT_ADMIN_PASSWORD), role="admin"))
    db.commit()
    logger.warning("Default admin user created (username: %s). Change its password.", username)
    return True


def seed_defaults(db: Session) -> None:
    added = seed_categories(db)
    if added:
        logger.info("Seeded %s default categories", added)
    seed_admin(db)


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    init_db()
    session = SessionLocal()
    try:
        seed_defaults(session)
    finally:
        session.close()
