"""
Order normalization.
Turns per-transaction OrderRecord rows into canonical OrderSummary objects and
legacy per-line-item Order rows into LineItemAmount entries. Works on ORM
instances and plain mappings alike.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from salespoint.schemas.dashboard import OrderSummary
from salespoint.utils.timezone_helpers import parse_timestamp

logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(frozen=True)
class LineItemAmount:
    """Amount contributed by one legacy line item (price * qty)."""
    amount: float
    customer_id: Optional[str]
    created_at: Optional[datetime]


def read_field(record: Any, name: str, default: Any = None) -> Any:
    """Read `name` from a mapping or an object attribute."""
    if isinstance(record, Mapping):
        value = record.get(name, _MISSING)
    else:
        value = getattr(record, name, _MISSING)
    if value is _MISSING or value is None:
        return default
    return value


def normalize_customer_id(value: Any) -> Optional[str]:
    """Key customers by string identity; blank ids mean anonymous."""
    if value is None:
        return None
    key = str(value).strip()
    return key or None


def to_number(value: Any) -> float:
    """Coerce a stored amount or quantity to a number, 0 when unusable."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0


def _optional_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _item_qty(item: Any) -> int:
    return int(to_number(read_field(item, "qty", read_field(item, "quantity", 0))))


def summarize_items(items: Any) -> tuple[str, int]:
    """Return (items summary, total quantity) for a list of line items."""
    items = list(items or [])
    quantity = sum(_item_qty(item) for item in items)
    if len(items) == 1:
        name = read_field(items[0], "name", "")
        return str(name), quantity
    return f"{len(items)} items", quantity


def normalize_order_record(record: Any) -> Optional[OrderSummary]:
    """
    Build the canonical order for a per-transaction record.

    `total` is taken as stored, never recomputed from items. A record with
    neither `total` nor `items` is skipped.
    """
    raw_total = read_field(record, "total")
    raw_items = read_field(record, "items")
    record_id = read_field(record, "id", read_field(record, "_id"))

    if raw_total is None and raw_items is None:
        logger.warning("Skipping order record %s: no total and no items", record_id)
        return None

    created_at = parse_timestamp(read_field(record, "created_at"))
    if created_at is None:
        logger.warning("Skipping order record %s: missing created_at", record_id)
        return None

    items_summary, quantity = summarize_items(raw_items)
    total_amount = max(to_number(raw_total), 0)

    return OrderSummary(
        id=str(record_id),
        items_summary=items_summary,
        quantity=quantity,
        total_amount=total_amount,
        payment_method=str(read_field(record, "payment_method", "")),
        created_at=created_at,
        customer_id=normalize_customer_id(read_field(record, "customer_id")),
        store_id=_optional_str(read_field(record, "store_id")),
    )


def normalize_line_item(record: Any) -> Optional[LineItemAmount]:
    """
    Amount of one legacy line item: price * qty.

    A missing price or qty counts as 0; a row lacking both is skipped.
    """
    price = read_field(record, "price")
    qty = read_field(record, "qty")

    if price is None and qty is None:
        logger.warning(
            "Skipping legacy order %s: no price and no qty",
            read_field(record, "id", read_field(record, "_id")),
        )
        return None

    return LineItemAmount(
        amount=to_number(price) * to_number(qty),
        customer_id=normalize_customer_id(read_field(record, "customer_id")),
        created_at=parse_timestamp(read_field(record, "created_at")),
    )
