"""
Order recording service.
Stores a transaction and keeps the product sold counters and the day's
pre-aggregated sales row in step with it.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from salespoint.models.order_record import OrderRecord
from salespoint.models.product import Product
from salespoint.models.sale import Sale
from salespoint.schemas.order import OrderCreate
from salespoint.utils.timezone_helpers import to_local

logger = logging.getLogger(__name__)


def _add_to_daily_sales(db: Session, order: OrderRecord) -> None:
    """Add the order's total to the sales row of its calendar day."""
    day = order.created_at.date()
    sale = db.query(Sale).filter(
        Sale.date == day,
        (Sale.store_id == order.store_id) if order.store_id else Sale.store_id.is_(None),
    ).first()

    if sale is None:
        sale = Sale(date=day, amount=0, store_id=order.store_id)
        db.add(sale)

    sale.amount = (sale.amount or 0) + order.total


def _increment_sold_counters(db: Session, order_create: OrderCreate) -> None:
    names = sorted({item.name for item in order_create.items})
    products = {p.name: p for p in db.query(Product).filter(Product.name.in_(names)).all()}

    for item in order_create.items:
        product = products.get(item.name)
        if product is None:
            logger.debug("Item %s is not in the catalog, sold counter unchanged", item.name)
            continue
        product.sold = (product.sold or 0) + item.qty
        product.stock = max((product.stock or 0) - item.qty, 0)


def record_order(db: Session, order_create: OrderCreate, now: Optional[datetime] = None) -> OrderRecord:
    """
    Persist a new transaction.

    Args:
        db: Database session
        order_create: Validated order payload
        now: Creation time, converted to local time; defaults to the local wall clock

    Returns:
        The stored OrderRecord
    """
    total = order_create.total
    if total is None:
        total = sum(item.price * item.qty for item in order_create.items)

    order = OrderRecord(
        items=[item.model_dump() for item in order_create.items],
        total=total,
        payment_method=order_create.payment_method,
        customer_id=order_create.customer_id,
        store_id=order_create.store_id,
        created_at=to_local(now) if now else datetime.now(),
    )
    db.add(order)

    _increment_sold_counters(db, order_create)
    _add_to_daily_sales(db, order)

    db.commit()
    db.refresh(order)

    logger.info("Recorded order %s total=%.2f items=%d", order.id, order.total, len(order.items))
    return order
