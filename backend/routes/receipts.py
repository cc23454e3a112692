# backend/routes/receipts.py
from typing import List
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas.receipt import ReceiptCreate, ReceiptOut, ReceiptDetailOut
from services import receipts as receipt_service
from utils.audit import write_log, client_ip
from utils.tokenJWT import require_admin

router = APIRouter(prefix="/receipts", tags=["Receipts"])


@router.get("", response_model=List[ReceiptOut])
def list_receipts(db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    return receipt_service.list_receipts(db)


@router.get("/{receipt_id}", response_model=ReceiptDetailOut)
def get_receipt(receipt_id: int, db: Session = Depends(get_db), current_user: User = Depends(require_admin)):
    return receipt_service.get_receipt(db, receipt_id)


@router.post("", response_model=ReceiptDetailOut, status_code=status.HTTP_201_CREATED)
def create_receipt(
    payload: ReceiptCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    receipt = receipt_service.create_receipt(db, payload)
    write_log(
        db, user_id=current_user.id, action="RECEIPT_CREATE", resource="receipts",
        ip=client_ip(request),
        meta={"id": receipt.id, "number": receipt.receipt_number, "total": float(receipt.total_amount)},
    )
    return receipt


@router.delete("/{receipt_id}")
def delete_receipt(
    receipt_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    number = receipt_service.delete_receipt(db, receipt_id)
    write_log(
        db, user_id=current_user.id, action="RECEIPT_DELETE", resource="receipts",
        ip=client_ip(request), meta={"id": receipt_id, "number": number},
    )
    return {"detail": f"Receipt '{number}' deleted"}
