"""
Dashboard aggregation service.
Sales series, today's headline metrics, recent orders and popular products.
Every call is a read followed by an in-memory reduction; nothing is written.
"""
import logging
from datetime import datetime, timedelta
from typing import Any, Iterable, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session

from salespoint.config import settings
from salespoint.models.order import Order
from salespoint.models.order_record import OrderRecord
from salespoint.models.product import Product
from salespoint.models.sale import Sale
from salespoint.schemas.dashboard import (
    DailySales,
    DashboardPayload,
    OrderSummary,
    PopularProduct,
    TodaySummary,
)
from salespoint.services.order_normalizer import (
    normalize_customer_id,
    normalize_line_item,
    normalize_order_record,
    to_number,
)
from salespoint.services.source_fallback import SourceProvider, first_populated
from salespoint.services.weekly_window import WeeklyWindow, build_weekly_window
from salespoint.utils.timezone_helpers import start_of_day, start_of_week

logger = logging.getLogger(__name__)

# (amount, customer_id) for one counted order
AmountEntry = Tuple[float, Optional[str]]


def _date_key(value: Any) -> str:
    """YYYY-MM-DD for a date, datetime or string returned by the database."""
    if hasattr(value, "isoformat"):
        return value.isoformat()[:10]
    return str(value)[:10]


# ─────────────────────────────────────────────────
# SALES SERIES
# ─────────────────────────────────────────────────


def _pre_aggregated_sales(db: Session) -> List[DailySales]:
    """Daily totals from the pre-aggregated sales table."""
    rows = db.query(
        Sale.date.label("day"),
        func.sum(Sale.amount).label("total"),
    ).group_by(Sale.date).order_by(Sale.date).all()

    return [DailySales(date=_date_key(row.day), total=float(row.total or 0)) for row in rows]


def _order_record_sales(db: Session) -> List[DailySales]:
    """Daily totals grouped from the per-transaction store."""
    day_col = func.date(OrderRecord.created_at).label("day")
    rows = db.query(
        day_col,
        func.sum(OrderRecord.total).label("total"),
    ).group_by(day_col).order_by(day_col).all()

    return [
        DailySales(date=_date_key(row.day), total=float(row.total or 0))
        for row in rows
        if row.day is not None
    ]


def sales_series_providers(db: Session) -> List[SourceProvider[DailySales]]:
    return [
        SourceProvider("pre_aggregated_sales", lambda: _pre_aggregated_sales(db)),
        SourceProvider("order_record_sales", lambda: _order_record_sales(db)),
    ]


def get_sales_series(db: Session) -> List[DailySales]:
    """
    Global daily sales series, ascending by date.

    Prefers the pre-aggregated sales table; falls back to grouping order
    records by calendar day when that table is empty or unavailable.
    """
    result = first_populated(sales_series_providers(db), on_failure=db.rollback)
    if result.is_empty:
        logger.info("No sales data available for the sales series")
    return sorted(result.rows, key=lambda point: point.date)


# ─────────────────────────────────────────────────
# TODAY SUMMARY
# ─────────────────────────────────────────────────


def summarize_amounts(entries: Iterable[AmountEntry]) -> TodaySummary:
    """Order count, sales sum, distinct non-empty customers and average sale."""
    total_orders = 0
    total_sales = 0.0
    customers = set()

    for amount, customer_id in entries:
        total_orders += 1
        total_sales += amount
        if customer_id:
            customers.add(customer_id)

    avg_sale = total_sales / total_orders if total_orders > 0 else 0
    return TodaySummary(
        total_sales=total_sales,
        total_customers=len(customers),
        total_orders=total_orders,
        avg_sale=avg_sale,
    )


def _order_record_amounts(db: Session, cutoff: datetime) -> List[AmountEntry]:
    records = db.query(OrderRecord).filter(OrderRecord.created_at >= cutoff).all()
    return [
        (max(to_number(record.total), 0), normalize_customer_id(record.customer_id))
        for record in records
    ]


def _legacy_order_amounts(db: Session, cutoff: datetime) -> List[AmountEntry]:
    # Each line item counts as one order here
    rows = db.query(Order).filter(Order.created_at >= cutoff).all()
    entries = []
    for row in rows:
        line = normalize_line_item(row)
        if line is not None:
            entries.append((line.amount, line.customer_id))
    return entries


def today_summary_providers(db: Session, cutoff: datetime) -> List[SourceProvider[AmountEntry]]:
    return [
        SourceProvider("order_records", lambda: _order_record_amounts(db, cutoff)),
        SourceProvider("legacy_orders", lambda: _legacy_order_amounts(db, cutoff)),
    ]


def get_today_summary(db: Session, now: Optional[datetime] = None) -> TodaySummary:
    """
    Headline metrics for orders created since local midnight.

    Order records are authoritative; the legacy line-item store is read only
    when there are no order records today.
    """
    cutoff = start_of_day(now or datetime.now())
    result = first_populated(today_summary_providers(db, cutoff), on_failure=db.rollback)
    return summarize_amounts(result.rows)


# ─────────────────────────────────────────────────
# RECENT ORDERS / POPULAR PRODUCTS
# ─────────────────────────────────────────────────


def _normalize_all(records: Iterable[Any]) -> List[OrderSummary]:
    orders = []
    for record in records:
        order = normalize_order_record(record)
        if order is not None:
            orders.append(order)
    return orders


def get_recent_orders(
    db: Session,
    store_id: Optional[str] = None,
    limit: Optional[int] = None,
) -> List[OrderSummary]:
    """Most recent canonical orders, newest first."""
    if limit is None:
        limit = settings.RECENT_ORDERS_LIMIT

    query = db.query(OrderRecord)
    if store_id:
        query = query.filter(OrderRecord.store_id == store_id)

    records = query.order_by(OrderRecord.created_at.desc()).limit(limit).all()
    return _normalize_all(records)


def get_popular_products(db: Session, limit: Optional[int] = None) -> List[PopularProduct]:
    """Top products by units sold."""
    if limit is None:
        limit = settings.POPULAR_PRODUCTS_LIMIT

    products = db.query(Product).order_by(Product.sold.desc()).limit(limit).all()
    return [PopularProduct.model_validate(product) for product in products]


# ─────────────────────────────────────────────────
# WEEKLY WINDOW / FULL PAYLOAD
# ─────────────────────────────────────────────────


def get_week_orders(db: Session, now: datetime, store_id: Optional[str] = None) -> List[OrderSummary]:
    """Canonical orders created during the Monday→Sunday week containing `now`."""
    monday = start_of_week(now)
    query = db.query(OrderRecord).filter(
        OrderRecord.created_at >= monday,
        OrderRecord.created_at < monday + timedelta(days=7),
    )
    if store_id:
        query = query.filter(OrderRecord.store_id == store_id)
    return _normalize_all(query.order_by(OrderRecord.created_at).all())


def get_weekly_window(db: Session, now: Optional[datetime] = None, store_id: Optional[str] = None) -> WeeklyWindow:
    now = now or datetime.now()
    return build_weekly_window(now, get_week_orders(db, now, store_id))


def get_dashboard(
    db: Session,
    now: Optional[datetime] = None,
    store_id: Optional[str] = None,
) -> DashboardPayload:
    """Single payload with the four dashboard feeds."""
    now = now or datetime.now()
    return DashboardPayload(
        weekly_sales=get_sales_series(db),
        summary=get_today_summary(db, now),
        recent_orders=get_recent_orders(db, store_id=store_id),
        popular_products=get_popular_products(db),
    )
