"""
Orders API Endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from salespoint.database import get_db
from salespoint.schemas.dashboard import OrderSummary
from salespoint.schemas.order import OrderCreate
from salespoint.services.order_normalizer import normalize_order_record
from salespoint.services.order_service import record_order

router = APIRouter(tags=["orders"])


@router.post("", response_model=OrderSummary, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_create: OrderCreate,
    db: Session = Depends(get_db),
):
    """
    Record a new transaction.
    Clients re-fetch the dashboard after this succeeds.
    """
    order = record_order(db, order_create)
    return normalize_order_record(order)
