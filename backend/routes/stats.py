# backend/routes/stats.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from schemas.stats import ProductStatsOut
from services.analytics import get_product_stats
from utils.tokenJWT import require_admin

router = APIRouter(
    prefix="/analytics",
    tags=["Analytics"]
)


# Dashboard summary: counts and stock value over the whole product table
@router.get("/stats", response_model=ProductStatsOut)
def get_stats(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin)
):
    return get_product_stats(db)
