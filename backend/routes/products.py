# backend/routes/products.py
from typing import Optional, List
from fastapi import (
    APIRouter, Depends, Query, Request, UploadFile, File, Form, status
)
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
import schemas.product as product_schemas
from services import catalog as catalog_service
from services import products as product_service
from services.sku import generate_sku
from utils.audit import write_log, client_ip
from utils.tokenJWT import get_current_user, require_admin
from utils.uploads import save_image, remove_image

router = APIRouter(tags=["Products"])


# ---- HELPERS ----
def _parse(schema, fields: dict):
    """Validate multipart form fields through the entity schema (422 on failure)."""
    try:
        return schema.model_validate({k: v for k, v in fields.items() if v is not None})
    except ValidationError as e:
        raise RequestValidationError(e.errors(include_url=False, include_context=False))


def _form_fields(
    name: Optional[str] = Form(None),
    sku: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    stock_quantity: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    details: Optional[str] = Form(None),
    brand: Optional[str] = Form(None),
    model: Optional[str] = Form(None),
    weight: Optional[str] = Form(None),
    length: Optional[str] = Form(None),
    width: Optional[str] = Form(None),
    height: Optional[str] = Form(None),
    image_url: Optional[str] = Form(None),
    barcode_type: Optional[str] = Form(None),
    barcode_data: Optional[str] = Form(None),
    is_active: Optional[str] = Form(None),
    is_featured: Optional[str] = Form(None),
    tags: Optional[str] = Form(None),
) -> dict:
    # Everything arrives as text; the schemas do the coercion
    return dict(
        name=name, sku=sku, category=category, price=price, stock_quantity=stock_quantity,
        description=description, details=details, brand=brand, model=model,
        weight=weight, length=length, width=width, height=height,
        image_url=image_url, barcode_type=barcode_type, barcode_data=barcode_data,
        is_active=is_active, is_featured=is_featured, tags=tags,
    )


# =========================
# ADMIN PRODUCT LIST
# =========================
@router.get("/products", response_model=List[product_schemas.ProductOut])
def list_products(
    search: Optional[str] = Query(None),
    category: Optional[str] = Query(None),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    return catalog_service.list_products(db, search=search, category=category, offset=offset)


# =========================
# SKU GENERATION
# =========================
@router.post("/generate-sku", response_model=product_schemas.SkuResponse)
def generate_sku_endpoint(
    payload: product_schemas.SkuRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    return {"sku": generate_sku(db, payload.category)}


# =========================
# SINGLE PRODUCT
# =========================
@router.get("/products/{product_id}", response_model=product_schemas.ProductOut)
def get_product(
    product_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return product_service.get_product(db, product_id)


# =========================
# CREATE
# =========================
@router.post("/products", response_model=product_schemas.ProductOut, status_code=status.HTTP_201_CREATED)
def add_product(
    request: Request,
    fields: dict = Depends(_form_fields),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    data = _parse(product_schemas.ProductCreate, fields)
    image_url = save_image(image) if image and image.filename else None

    try:
        product = product_service.create_product(db, data, image_url=image_url)
    except Exception:
        remove_image(image_url)
        raise

    write_log(
        db, user_id=current_user.id, action="PRODUCT_CREATE", resource="products",
        ip=client_ip(request), meta={"id": product.id, "sku": product.sku},
    )
    return product


# =========================
# PARTIAL UPDATE
# =========================
@router.patch("/products/{product_id}", response_model=product_schemas.ProductOut)
def edit_product(
    product_id: int,
    request: Request,
    fields: dict = Depends(_form_fields),
    image: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    data = _parse(product_schemas.ProductUpdate, fields)
    old_image = product_service.get_product(db, product_id).image_url
    image_url = save_image(image) if image and image.filename else None

    try:
        product = product_service.update_product(db, product_id, data, image_url=image_url)
    except Exception:
        remove_image(image_url)
        raise
    if image_url and old_image != image_url:
        remove_image(old_image)

    write_log(
        db, user_id=current_user.id, action="PRODUCT_EDIT", resource="products",
        ip=client_ip(request), meta={"product_id": product.id},
    )
    return product


# =========================
# DELETE
# =========================
@router.delete("/products/{product_id}")
def delete_product(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    name, files = product_service.delete_product(db, product_id)
    for url in files:
        remove_image(url)
    write_log(
        db, user_id=current_user.id, action="PRODUCT_DELETE", resource="products",
        ip=client_ip(request), meta={"id": product_id},
    )
    return {"detail": f"Product '{name}' deleted"}


# =========================
# GALLERY IMAGES
# =========================
@router.post(
    "/products/{product_id}/images",
    response_model=product_schemas.ProductImageOut,
    status_code=status.HTTP_201_CREATED,
)
def add_product_image(
    product_id: int,
    image: UploadFile = File(...),
    alt: Optional[str] = Form(None),
    is_primary: bool = Form(False),
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    product_service.get_product(db, product_id)
    image_url = save_image(image)
    return product_service.add_product_image(db, product_id, image_url, alt=alt, is_primary=is_primary)


@router.delete("/products/{product_id}/images/{image_id}")
def delete_product_image(
    product_id: int,
    image_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    url = product_service.delete_product_image(db, product_id, image_id)
    remove_image(url)
    return {"success": True}
