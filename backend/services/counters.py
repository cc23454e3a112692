# backend/services/counters.py
import logging

from sqlalchemy import update, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from models.counter import Counter

logger = logging.getLogger(__name__)


def _ensure_counter(db: Session, name: str, start: int) -> None:
    exists = db.execute(select(Counter.name).where(Counter.name == name)).first()
    if exists:
        return
    try:
        db.add(Counter(name=name, value=start))
        db.commit()
    except IntegrityError:
        # Another request created it first
        db.rollback()


def next_value(db: Session, name: str, start: int = 0) -> int:
    """Atomically bump the named counter and return the new value.

    `start` seeds a counter that does not exist yet; the first value handed
    out is then start + 1. The increment is committed immediately, so values
    are never handed out twice, even if the caller later fails.
    """
    _ensure_counter(db, name, start)
    db.execute(
        update(Counter)
        .where(Counter.name == name)
        .values(value=Counter.value + 1)
    )
    value = db.execute(select(Counter.value).where(Counter.name == name)).scalar_one()
    db.commit()
    logger.debug("Counter %s -> %s", name, value)
    return value
