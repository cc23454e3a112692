# backend/services/products.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from models.category import Category
from models.product import Product, ProductImage
from schemas.product import ProductCreate, ProductUpdate
from services.errors import ConflictError, NotFoundError
from services.sku import generate_sku, normalize_code
from utils.barcode import barcode_payload

logger = logging.getLogger(__name__)

# Columns that may not be cleared through a partial update
_NOT_NULL_FIELDS = {"name", "sku", "category", "price", "stock_quantity", "barcode_type", "is_active", "is_featured"}


def get_product(db: Session, product_id: int, active_only: bool = False) -> Product:
    query = db.query(Product).filter(Product.id == product_id)
    if active_only:
        query = query.filter(Product.is_active.is_(True))
    product = query.first()
    if not product:
        raise NotFoundError("Product not found")
    return product


def get_product_with_images(db: Session, product_id: int) -> Product:
    product = (
        db.query(Product)
        .options(selectinload(Product.images), selectinload(Product.reviews))
        .filter(Product.id == product_id, Product.is_active.is_(True))
        .first()
    )
    if not product:
        raise NotFoundError("Product not found")
    return product


def _require_category(db: Session, code: str) -> str:
    norm = normalize_code(code)
    if not norm or db.query(Category.id).filter(Category.code == norm).first() is None:
        raise NotFoundError(f"Category '{code}' not found")
    return norm


def _sku_taken(db: Session, sku: str, exclude_id: Optional[int] = None) -> bool:
    q = db.query(Product.id).filter(Product.sku == sku)
    if exclude_id is not None:
        q = q.filter(Product.id != exclude_id)
    return q.first() is not None


def create_product(db: Session, data: ProductCreate, image_url: Optional[str] = None) -> Product:
    """Insert a product, generating its SKU when none was supplied.

    A generated SKU that loses a race to a concurrent insert is regenerated
    once; a supplied SKU that is taken is a conflict.
    """
    values = data.model_dump()
    values["category"] = _require_category(db, data.category)
    if image_url:
        values["image_url"] = image_url

    supplied_sku = normalize_code(data.sku)
    if supplied_sku and _sku_taken(db, supplied_sku):
        raise ConflictError("SKU already exists")

    attempts = 1 if supplied_sku else 2
    for attempt in range(attempts):
        values["sku"] = supplied_sku or generate_sku(db, values["category"])
        if not data.barcode_data:
            values["barcode_data"] = barcode_payload(values["sku"], values["barcode_type"])

        product = Product(**values)
        db.add(product)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            logger.warning("SKU %s rejected by the store (attempt %s)", values["sku"], attempt + 1)
            continue
        db.refresh(product)
        return product

    raise ConflictError("SKU already exists")


def update_product(db: Session, product_id: int, data: ProductUpdate, image_url: Optional[str] = None) -> Product:
    product = get_product(db, product_id)
    changes = data.model_dump(exclude_unset=True)
    if image_url:
        changes["image_url"] = image_url

    for field in list(changes):
        if field in _NOT_NULL_FIELDS and changes[field] is None:
            changes.pop(field)

    if "category" in changes:
        changes["category"] = _require_category(db, changes["category"])
    if "sku" in changes:
        changes["sku"] = normalize_code(changes["sku"])
        if changes["sku"] != product.sku and _sku_taken(db, changes["sku"], exclude_id=product.id):
            raise ConflictError("SKU already exists")

    for key, value in changes.items():
        setattr(product, key, value)

    # Keep the barcode in step with the SKU unless one was given explicitly
    if ("sku" in changes or "barcode_type" in changes) and "barcode_data" not in changes:
        product.barcode_data = barcode_payload(product.sku, product.barcode_type)

    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ConflictError("SKU already exists")
    db.refresh(product)
    return product


def delete_product(db: Session, product_id: int) -> Tuple[str, List[str]]:
    """Delete a product. Images, reviews and wishlist rows go with it;
    receipt items keep their snapshot and lose only the product reference.

    Returns the product name and the upload paths that are now unreferenced.
    """
    product = get_product(db, product_id)
    name = product.name
    files = [img.image_url for img in product.images]
    if product.image_url:
        files.append(product.image_url)
    db.delete(product)
    db.commit()
    return name, files


def add_product_image(
    db: Session, product_id: int, image_url: str, alt: Optional[str] = None, is_primary: bool = False,
) -> ProductImage:
    product = get_product(db, product_id)
    sort_order = db.query(func.count(ProductImage.id)).filter(ProductImage.product_id == product.id).scalar() or 0

    if is_primary:
        db.query(ProductImage).filter(ProductImage.product_id == product.id).update(
            {ProductImage.is_primary: False}, synchronize_session=False
        )
    image = ProductImage(
        product_id=product.id, image_url=image_url, alt=alt,
        is_primary=is_primary, sort_order=sort_order,
    )
    db.add(image)
    db.commit()
    db.refresh(image)
    return image


def delete_product_image(db: Session, product_id: int, image_id: int) -> str:
    image = db.query(ProductImage).filter(
        ProductImage.id == image_id, ProductImage.product_id == product_id
    ).first()
    if not image:
        raise NotFoundError("Image not found")
    url = image.image_url
    db.delete(image)
    db.commit()
    return url
