"""
Weekly window builder.

Projects canonical orders onto the Monday→Sunday week containing `now`.
Pure function of (now, orders): callers re-run it whenever the order list
changes or the clock moves, nothing about the current week is stored.
"""
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Callable, Dict, Iterable, Optional, Sequence, Tuple

from salespoint.services.order_normalizer import read_field, to_number
from salespoint.utils.timezone_helpers import local_date, start_of_week

DAYS_IN_WEEK = 7


@dataclass(frozen=True)
class AmountAccessor:
    """Named lookup of an amount field on an order payload."""
    name: str
    read: Callable[[Any], Any]


def _field_accessor(field: str) -> AmountAccessor:
    return AmountAccessor(name=field, read=lambda order: read_field(order, field))


# Transaction total first, then the generic amount and total fields
AMOUNT_ACCESSORS: Tuple[AmountAccessor, ...] = (
    _field_accessor("total_amount"),
    _field_accessor("amount"),
    _field_accessor("total"),
)


@dataclass(frozen=True)
class WeeklyPoint:
    day: date
    label: str
    value: float


@dataclass(frozen=True)
class WeeklyWindow:
    monday: date
    points: Tuple[WeeklyPoint, ...]

    @property
    def values(self) -> list:
        return [point.value for point in self.points]

    @property
    def labels(self) -> list:
        return [point.label for point in self.points]


def order_amount(order: Any, accessors: Sequence[AmountAccessor] = AMOUNT_ACCESSORS) -> float:
    """First present, non-zero amount among the accessors; 0 when none match."""
    for accessor in accessors:
        value = to_number(accessor.read(order))
        if value:
            return value
    return 0


def order_day(order: Any) -> Optional[date]:
    """Calendar day of an order: from created_at, else from a literal `date` field."""
    created_at = read_field(order, "created_at")
    if created_at is not None:
        day = local_date(created_at)
        if day is not None:
            return day
    return local_date(read_field(order, "date"))


def day_label(day: date) -> str:
    """e.g. 'Monday, Oct 19'"""
    return f"{day:%A}, {day:%b} {day.day}"


def build_weekly_window(
    now: datetime,
    orders: Iterable[Any],
    accessors: Sequence[AmountAccessor] = AMOUNT_ACCESSORS,
) -> WeeklyWindow:
    """
    Build the 7-point series for the week containing `now`.

    Orders falling outside the week are ignored.
    """
    monday = start_of_week(now).date()
    days = [monday + timedelta(days=offset) for offset in range(DAYS_IN_WEEK)]
    buckets: Dict[date, float] = {day: 0 for day in days}

    for order in orders or []:
        day = order_day(order)
        if day not in buckets:
            continue
        buckets[day] += order_amount(order, accessors)

    points = tuple(
        WeeklyPoint(day=day, label=day_label(day), value=buckets[day])
        for day in days
    )
    return WeeklyWindow(monday=monday, points=points)
