"""
Dashboard API Endpoints
"""
from typing import Optional, List
from datetime import datetime
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from salespoint.config import settings
from salespoint.database import get_db
from salespoint.schemas.dashboard import (
    DailySales,
    DashboardPayload,
    OrderSummary,
    PopularProduct,
    TodaySummary,
    WeeklyPoint,
    WeeklySales,
)
from salespoint.services import dashboard_service

router = APIRouter(tags=["dashboard"])


@router.get("", response_model=DashboardPayload)
async def get_dashboard(
    store_id: Optional[str] = Query(None, description="Restrict recent orders to one store"),
    db: Session = Depends(get_db),
):
    """
    Sales series, today's summary, recent orders and popular products in one response
    """
    return dashboard_service.get_dashboard(db, store_id=store_id)


@router.get("/sales", response_model=List[DailySales])
async def get_sales_series(db: Session = Depends(get_db)):
    """Daily sales totals, oldest first"""
    return dashboard_service.get_sales_series(db)


@router.get("/summary", response_model=TodaySummary)
async def get_today_summary(db: Session = Depends(get_db)):
    """Headline metrics since local midnight"""
    return dashboard_service.get_today_summary(db)


@router.get("/recent-orders", response_model=List[OrderSummary])
async def get_recent_orders(
    store_id: Optional[str] = Query(None),
    limit: int = Query(settings.RECENT_ORDERS_LIMIT, ge=1, le=settings.MAX_RECENT_ORDERS_LIMIT),
    db: Session = Depends(get_db),
):
    """Most recent orders, newest first"""
    return dashboard_service.get_recent_orders(db, store_id=store_id, limit=limit)


@router.get("/popular-products", response_model=List[PopularProduct])
async def get_popular_products(db: Session = Depends(get_db)):
    """Top products by units sold"""
    return dashboard_service.get_popular_products(db)


@router.get("/weekly", response_model=WeeklySales)
async def get_weekly_sales(
    now: Optional[datetime] = Query(None, description="Reference time, defaults to the server clock"),
    store_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """
    Monday→Sunday sales for the week containing `now`
    """
    window = dashboard_service.get_weekly_window(db, now=now, store_id=store_id)
    return WeeklySales(
        monday=window.monday,
        points=[WeeklyPoint(date=p.day, label=p.label, value=p.value) for p in window.points],
    )
