"""Tests for the presentation-side dashboard poller."""
import asyncio
from datetime import datetime

import httpx

from salespoint.client.dashboard_poller import DashboardPoller
from tests.conftest import WEDNESDAY_NOON

URL = "http://dashboard.test/api/v1/dashboard"

PAYLOAD = {
    "weekly_sales": [{"date": "2026-10-19", "total": 100}],
    "summary": {"total_sales": 50, "total_customers": 1, "total_orders": 1, "avg_sale": 50},
    "recent_orders": [
        {"id": "1", "items_summary": "Latte", "quantity": 1, "total_amount": 100,
         "payment_method": "cash", "created_at": "2026-10-19T09:00:00", "customer_id": None},
        {"id": "2", "items_summary": "2 items", "quantity": 3, "total_amount": 50,
         "payment_method": "card", "created_at": "2026-10-21T10:00:00", "customer_id": "c1"},
    ],
    "popular_products": [{"id": "p1", "name": "Latte", "price": 150, "sold": 12}],
}


def _poller(handler, clock=lambda: WEDNESDAY_NOON, **kwargs) -> DashboardPoller:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return DashboardPoller(URL, client=client, clock=clock, **kwargs)


def test_refresh_builds_weekly_view():
    updates = []
    poller = _poller(lambda request: httpx.Response(200, json=PAYLOAD), on_update=updates.append)

    assert asyncio.run(poller.refresh()) is True

    assert poller.view.weekly.values == [100, 0, 50, 0, 0, 0, 0]
    assert poller.view.summary["total_orders"] == 1
    assert poller.view.popular_products[0]["name"] == "Latte"
    assert updates[-1] is poller.view


def test_transport_failure_keeps_last_values():
    responses = [httpx.Response(200, json=PAYLOAD), httpx.Response(503)]

    def handler(request):
        return responses.pop(0)

    poller = _poller(handler)

    async def run():
        assert await poller.refresh() is True
        assert await poller.refresh() is False

    asyncio.run(run())

    assert poller.payload == PAYLOAD
    assert poller.view.weekly.values == [100, 0, 50, 0, 0, 0, 0]


def test_connection_error_is_not_fatal():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    poller = _poller(handler)

    assert asyncio.run(poller.refresh()) is False
    assert poller.view.weekly.values == [0] * 7


def test_clock_tick_rolls_over_to_next_week():
    poller = _poller(lambda request: httpx.Response(200, json=PAYLOAD))
    asyncio.run(poller.refresh())

    sunday_view = poller.tick(datetime(2026, 10, 25, 23, 59))
    monday_view = poller.tick(datetime(2026, 10, 26, 0, 0))

    assert sunday_view.weekly.values == [100, 0, 50, 0, 0, 0, 0]
    assert str(monday_view.weekly.monday) == "2026-10-26"
    assert monday_view.weekly.values == [0] * 7


def test_order_created_signal_triggers_refresh():
    calls = []

    def handler(request):
        calls.append(request.url.path)
        return httpx.Response(200, json=PAYLOAD)

    poller = _poller(handler)

    async def run():
        await poller.notify_order_created()

    asyncio.run(run())

    assert calls == ["/api/v1/dashboard"]
    assert poller.payload == PAYLOAD


def test_payload_fetched_after_stop_is_discarded():
    async def run():
        entered = asyncio.Event()
        release = asyncio.Event()

        async def handler(request):
            entered.set()
            await release.wait()
            return httpx.Response(200, json=PAYLOAD)

        poller = _poller(handler)
        in_flight = asyncio.create_task(poller.refresh())
        await entered.wait()
        await poller.stop()
        release.set()
        return poller, await in_flight

    poller, updated = asyncio.run(run())

    assert updated is False
    assert poller.payload == {}


def test_start_and_stop_run_both_loops():
    calls = []

    def handler(request):
        calls.append(1)
        return httpx.Response(200, json=PAYLOAD)

    poller = _poller(handler, refresh_seconds=0.01, tick_seconds=0.01)

    async def run():
        await poller.start()
        await asyncio.sleep(0.05)
        await poller.stop()

    asyncio.run(run())

    assert len(calls) >= 2
    assert poller.view.weekly.values == [100, 0, 50, 0, 0, 0, 0]


def test_non_object_body_keeps_last_values():
    responses = [
        httpx.Response(200, json=PAYLOAD),
        httpx.Response(200, content=b"[]"),
        httpx.Response(200, content=b"null"),
        httpx.Response(200, json="maintenance"),
    ]

    def handler(request):
        return responses.pop(0)

    poller = _poller(handler)

    async def run():
        assert await poller.refresh() is True
        assert await poller.refresh() is False
        assert await poller.refresh() is False
        assert await poller.refresh() is False

    asyncio.run(run())

    assert poller.payload == PAYLOAD
    view = poller.tick()
    assert view.weekly.values == [100, 0, 50, 0, 0, 0, 0]
    assert view.summary["total_orders"] == 1


def test_failing_update_callback_does_not_stop_loops():
    calls = []

    def handler(request):
        calls.append(1)
        return httpx.Response(200, json=PAYLOAD)

    def on_update(view):
        raise RuntimeError("renderer crashed")

    poller = _poller(handler, on_update=on_update, refresh_seconds=0.01, tick_seconds=0.01)

    async def run():
        await poller.start()
        await asyncio.sleep(0.05)
        running = [not task.done() for task in poller._tasks]
        await poller.stop()
        return running

    running = asyncio.run(run())

    assert running == [True, True]
    assert len(calls) >= 2
    assert poller.payload == PAYLOAD


def test_loop_survives_non_object_bodies():
    bodies = [b"[]", b"null"]

    def handler(request):
        if bodies:
            return httpx.Response(200, content=bodies.pop(0))
        return httpx.Response(200, json=PAYLOAD)

    poller = _poller(handler, refresh_seconds=0.01, tick_seconds=0.01)

    async def run():
        await poller.start()
        await asyncio.sleep(0.08)
        await poller.stop()

    asyncio.run(run())

    assert poller.payload == PAYLOAD
    assert poller.view.weekly.values == [100, 0, 50, 0, 0, 0, 0]
