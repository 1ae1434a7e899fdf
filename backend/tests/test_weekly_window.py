"""Tests for the Monday→Sunday weekly window."""
from datetime import date, datetime, timedelta

import pytest

from salespoint.services.weekly_window import (
    AmountAccessor,
    build_weekly_window,
    order_amount,
    order_day,
)
from tests.conftest import MONDAY, WEDNESDAY_NOON


def _order(day_offset: int, amount: float, hour: int = 10) -> dict:
    created = datetime.combine(MONDAY + timedelta(days=day_offset), datetime.min.time()).replace(hour=hour)
    return {"created_at": created, "total_amount": amount}


def test_wednesday_scenario():
    orders = [_order(0, 100), _order(2, 50)]

    window = build_weekly_window(WEDNESDAY_NOON, orders)

    assert window.values == [100, 0, 50, 0, 0, 0, 0]


@pytest.mark.parametrize("now", [
    datetime(2026, 10, 19, 0, 0),            # Monday midnight
    datetime(2026, 10, 21, 12, 0),           # Wednesday
    datetime(2026, 10, 25, 0, 0),            # Sunday midnight
    datetime(2026, 10, 25, 23, 59, 59),      # Sunday last second
])
def test_window_always_spans_monday_to_sunday(now):
    window = build_weekly_window(now, [])

    assert window.monday == MONDAY
    assert len(window.points) == 7
    assert [p.day for p in window.points] == [MONDAY + timedelta(days=i) for i in range(7)]
    assert window.labels[0] == "Monday, Oct 19"
    assert window.labels[-1] == "Sunday, Oct 25"


def test_next_monday_midnight_starts_new_week():
    window = build_weekly_window(datetime(2026, 10, 26, 0, 0), [_order(0, 100)])

    assert window.monday == date(2026, 10, 26)
    assert window.values == [0] * 7


def test_orders_outside_window_are_ignored():
    orders = [_order(-1, 500), _order(7, 700), _order(6, 25, hour=23)]

    window = build_weekly_window(WEDNESDAY_NOON, orders)

    assert window.values == [0, 0, 0, 0, 0, 0, 25]


def test_same_day_orders_accumulate():
    window = build_weekly_window(WEDNESDAY_NOON, [_order(1, 10), _order(1, 15.5, hour=20)])

    assert window.values[1] == 25.5


def test_rebuilding_is_idempotent():
    orders = [_order(0, 100), _order(3, 40)]

    assert build_weekly_window(WEDNESDAY_NOON, orders) == build_weekly_window(WEDNESDAY_NOON, orders)


def test_iso_strings_and_date_field_are_accepted():
    orders = [
        {"created_at": "2026-10-20T08:15:00", "total_amount": 30},
        {"date": "2026-10-22", "amount": 12},
        {"created_at": None, "date": date(2026, 10, 23), "total": 7},
        {"total_amount": 99},
    ]

    window = build_weekly_window(WEDNESDAY_NOON, orders)

    assert window.values == [0, 30, 0, 12, 7, 0, 0]


def test_amount_accessors_take_first_non_zero_value():
    assert order_amount({"total_amount": 0, "amount": 30, "total": 99}) == 30
    assert order_amount({"total": "12.5"}) == 12.5
    assert order_amount({"amount": None, "total": 4}) == 4
    assert order_amount({"name": "no amount"}) == 0


def test_custom_accessors():
    accessors = [AmountAccessor("gross", lambda order: order.get("gross"))]

    window = build_weekly_window(WEDNESDAY_NOON, [{"date": "2026-10-19", "gross": 8}], accessors)

    assert window.values[0] == 8


def test_order_day_prefers_timestamp():
    assert order_day({"created_at": datetime(2026, 10, 20, 23, 0), "date": "2026-10-22"}) == date(2026, 10, 20)
    assert order_day({"name": "no day"}) is None
