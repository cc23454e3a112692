# backend/services/receipts.py
import logging
from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_EVEN
from typing import Iterable, List, Tuple

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from config import settings
from models.product import Product
from models.receipt import Receipt, ReceiptItem
from schemas.receipt import ReceiptCreate
from services.counters import next_value
from services.errors import BusinessError, ConflictError, NotFoundError

logger = logging.getLogger(__name__)

# Stored monetary precision. 4 places keeps e.g. 8.25% tax on 25.00 exact (2.0625).
MONEY_QUANT = Decimal("0.0001")


def quantize(value: Decimal) -> Decimal:
    return Decimal(value).quantize(MONEY_QUANT, rounding=ROUND_HALF_EVEN)


@dataclass
class ReceiptTotals:
    subtotal: Decimal
    discount_amount: Decimal
    tax_amount: Decimal
    total: Decimal


def compute_totals(
    lines: Iterable[Tuple[Decimal, int]],
    tax_rate: Decimal = Decimal("0"),
    discount_rate: Decimal = Decimal("0"),
) -> ReceiptTotals:
    """Totals for (unit_price, quantity) lines.

    discount is taken off the subtotal first, tax is charged on what remains.
    """
    subtotal = quantize(sum((Decimal(price) * qty for price, qty in lines), Decimal("0")))
    discount_amount = quantize(subtotal * Decimal(discount_rate))
    taxable = subtotal - discount_amount
    tax_amount = quantize(taxable * Decimal(tax_rate))
    return ReceiptTotals(
        subtotal=subtotal,
        discount_amount=discount_amount,
        tax_amount=tax_amount,
        total=quantize(taxable + tax_amount),
    )


def _next_receipt_number(db: Session) -> str:
    return f"RCP-{next_value(db, 'receipt'):06d}"


def _build_items(db: Session, data: ReceiptCreate) -> List[ReceiptItem]:
    if not data.items:
        raise BusinessError("A receipt needs at least one item")

    items = []
    for line in data.items:
        product = db.query(Product).filter(Product.id == line.product_id).first()
        if not product:
            raise NotFoundError(f"Product ID {line.product_id} not found")

        unit_price = quantize(line.unit_price if line.unit_price is not None else product.price)
        items.append(ReceiptItem(
            product_id=product.id,
            product_name=product.name,
            product_sku=product.sku,
            quantity=line.quantity,
            unit_price=unit_price,
            total_price=quantize(unit_price * line.quantity),
        ))
    return items


def create_receipt(db: Session, data: ReceiptCreate) -> Receipt:
    """Persist a receipt and its items in one transaction.

    Client-side totals are never trusted; everything is recomputed from the
    line items. Nothing is left behind if any insert fails.
    """
    items = _build_items(db, data)
    totals = compute_totals(
        ((it.unit_price, it.quantity) for it in items),
        tax_rate=data.tax_rate,
        discount_rate=data.discount_rate,
    )

    attempts = 1 if data.receipt_number else settings.RECEIPT_NUMBER_MAX_ATTEMPTS
    for attempt in range(attempts):
        number = data.receipt_number or _next_receipt_number(db)
        receipt = Receipt(
            receipt_number=number,
            customer_name=data.customer_name,
            business_name=data.business_name,
            business_address=data.business_address,
            business_phone=data.business_phone,
            subtotal=totals.subtotal,
            tax_rate=data.tax_rate,
            tax_amount=totals.tax_amount,
            discount_rate=data.discount_rate,
            discount_amount=totals.discount_amount,
            total_amount=totals.total,
            payment_method=data.payment_method,
            items=[_copy_item(it) for it in items],
        )
        db.add(receipt)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            if data.receipt_number:
                raise ConflictError(f"Receipt number '{number}' already exists")
            logger.warning("Receipt number %s taken (attempt %s), retrying", number, attempt + 1)
            continue

        db.refresh(receipt)
        logger.info("Receipt %s created, total %s", receipt.receipt_number, receipt.total_amount)
        return receipt

    raise ConflictError("Could not allocate a unique receipt number")


def _copy_item(item: ReceiptItem) -> ReceiptItem:
    # A rolled-back attempt leaves its ORM objects unusable, so each attempt gets fresh ones
    return ReceiptItem(
        product_id=item.product_id,
        product_name=item.product_name,
        product_sku=item.product_sku,
        quantity=item.quantity,
        unit_price=item.unit_price,
        total_price=item.total_price,
    )


def list_receipts(db: Session) -> List[Receipt]:
    return db.query(Receipt).order_by(Receipt.created_at.desc(), Receipt.id.desc()).all()


def get_receipt(db: Session, receipt_id: int) -> Receipt:
    receipt = (
        db.query(Receipt)
        .options(selectinload(Receipt.items))
        .filter(Receipt.id == receipt_id)
        .first()
    )
    if not receipt:
        raise NotFoundError("Receipt not found")
    return receipt


def delete_receipt(db: Session, receipt_id: int) -> str:
    receipt = get_receipt(db, receipt_id)
    number = receipt.receipt_number
    db.delete(receipt)
    db.commit()
    return number
