# backend/services/categories.py
from typing import List

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.category import Category
from models.product import Product
from schemas.category import CategoryCreate, CategoryUpdate
from services.errors import ConflictError, NotFoundError
from services.sku import normalize_code


def list_categories(db: Session) -> List[Category]:
    return db.query(Category).order_by(Category.name).all()


def get_category(db: Session, category_id: int) -> Category:
    category = db.query(Category).filter(Category.id == category_id).first()
    if not category:
        raise NotFoundError("Category not found")
    return category


def _product_count(db: Session, code: str) -> int:
    return db.query(func.count(Product.id)).filter(Product.category == code).scalar() or 0


def _check_unique(db: Session, name=None, code=None, exclude_id=None):
    if code is not None:
        q = db.query(Category.id).filter(Category.code == code)
        if exclude_id is not None:
            q = q.filter(Category.id != exclude_id)
        if q.first():
            raise ConflictError("Category code already exists")
    if name is not None:
        q = db.query(Category.id).filter(func.lower(Category.name) == name.lower())
        if exclude_id is not None:
            q = q.filter(Category.id != exclude_id)
        if q.first():
            raise ConflictError("Category name already exists")


def create_category(db: Session, data: CategoryCreate) -> Category:
    code = normalize_code(data.code)
    _check_unique(db, name=data.name, code=code)

    category = Category(name=data.name, code=code, description=data.description, image=data.image)
    db.add(category)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Category name or code already exists")
    db.refresh(category)
    return category


def update_category(db: Session, category_id: int, data: CategoryUpdate) -> Category:
    category = get_category(db, category_id)
    changes = data.model_dump(exclude_unset=True)

    if "code" in changes:
        code = normalize_code(changes.pop("code"))
        if code and code != category.code:
            # SKUs embed the code, so it is frozen once products use it
            if _product_count(db, category.code):
                raise ConflictError("Category code is in use by products and cannot change")
            _check_unique(db, code=code, exclude_id=category.id)
            category.code = code

    if changes.get("name"):
        _check_unique(db, name=changes["name"], exclude_id=category.id)
        category.name = changes["name"]
    for field in ("description", "image"):
        if field in changes:
            setattr(category, field, changes[field])

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("Category name or code already exists")
    db.refresh(category)
    return category


def delete_category(db: Session, category_id: int) -> str:
    category = get_category(db, category_id)
    if _product_count(db, category.code):
        raise ConflictError("Category still has products")
    name = category.name
    db.delete(category)
    db.commit()
    return name
