# backend/routes/categories.py
from typing import List
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas.category import CategoryCreate, CategoryUpdate, CategoryOut
from services import categories as category_service
from utils.audit import write_log, client_ip
from utils.tokenJWT import require_admin

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    return category_service.list_categories(db)


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    return category_service.get_category(db, category_id)


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    category = category_service.create_category(db, payload)
    write_log(
        db, user_id=current_user.id, action="CATEGORY_CREATE", resource="categories",
        ip=client_ip(request), meta={"id": category.id, "code": category.code},
    )
    return category


@router.patch("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    payload: CategoryUpdate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    category = category_service.update_category(db, category_id, payload)
    write_log(
        db, user_id=current_user.id, action="CATEGORY_UPDATE", resource="categories",
        ip=client_ip(request), meta={"id": category.id},
    )
    return category


@router.delete("/{category_id}")
def delete_category(
    category_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    name = category_service.delete_category(db, category_id)
    write_log(
        db, user_id=current_user.id, action="CATEGORY_DELETE", resource="categories",
        ip=client_ip(request), meta={"id": category_id},
    )
    return {"detail": f"Category '{name}' deleted"}
