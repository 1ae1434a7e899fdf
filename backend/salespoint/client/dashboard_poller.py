"""
Presentation-side dashboard poller.

Keeps a dashboard view current from two independent triggers: a data refresh
against the dashboard endpoint at a fixed interval, and a clock tick that
re-derives the weekly series so a midnight (and week) rollover shows up
without new data. An external "order created" signal forces an extra refresh.
Every trigger ends in the same recomputation, so overlapping triggers are
harmless; the last one to finish wins.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Set

import httpx

from salespoint.config import settings
from salespoint.services.weekly_window import WeeklyWindow, build_weekly_window

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardView:
    """What the dashboard page renders."""
    now: datetime
    weekly: WeeklyWindow
    summary: Dict[str, Any] = field(default_factory=dict)
    sales_series: List[Dict[str, Any]] = field(default_factory=list)
    recent_orders: List[Dict[str, Any]] = field(default_factory=list)
    popular_products: List[Dict[str, Any]] = field(default_factory=list)


def build_view(now: datetime, payload: Dict[str, Any]) -> DashboardView:
    """Derive the rendered view from a dashboard payload and the current time."""
    recent_orders = payload.get("recent_orders") or []
    return DashboardView(
        now=now,
        weekly=build_weekly_window(now, recent_orders),
        summary=payload.get("summary") or {},
        sales_series=payload.get("weekly_sales") or [],
        recent_orders=recent_orders,
        popular_products=payload.get("popular_products") or [],
    )


class DashboardPoller:
    """Polls the dashboard endpoint and republishes the derived view."""

    def __init__(
        self,
        url: Optional[str] = None,
        *,
        client: Optional[httpx.AsyncClient] = None,
        on_update: Optional[Callable[[DashboardView], None]] = None,
        clock: Callable[[], datetime] = datetime.now,
        refresh_seconds: Optional[float] = None,
        tick_seconds: Optional[float] = None,
    ):
        self.url = url or settings.DASHBOARD_API_URL
        self._client = client
        self._owns_client = client is None
        self._on_update = on_update
        self._clock = clock
        self.refresh_seconds = refresh_seconds or settings.DASHBOARD_REFRESH_SECONDS
        self.tick_seconds = tick_seconds or settings.CLOCK_TICK_SECONDS

        self._payload: Dict[str, Any] = {}
        self._now: datetime = clock()
        self._tasks: List[asyncio.Task] = []
        self._pending: Set[asyncio.Task] = set()
        self._retired = False
        self.view: DashboardView = build_view(self._now, self._payload)

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS)
        return self._client

    @property
    def payload(self) -> Dict[str, Any]:
        """Last successfully fetched payload."""
        return self._payload

    async def fetch(self) -> Dict[str, Any]:
        response = await self.client.get(self.url)
        response.raise_for_status()
        return response.json()

    async def refresh(self) -> bool:
        """
        Fetch the payload and republish.

        Returns:
            True if the view was updated, False if the fetch failed or the
            poller was stopped while the request was in flight
        """
        try:
            payload = await self.fetch()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Dashboard fetch failed, keeping last values: %s", e)
            return False

        if not isinstance(payload, dict):
            logger.warning(
                "Dashboard returned a %s instead of an object, keeping last values",
                type(payload).__name__,
            )
            return False

        if self._retired:
            logger.debug("Discarding dashboard payload fetched after stop")
            return False

        self._payload = payload
        self._publish()
        return True

    def tick(self, now: Optional[datetime] = None) -> DashboardView:
        """Advance the clock and re-derive the view, no I/O."""
        self._now = now or self._clock()
        if not self._retired:
            self._publish()
        return self.view

    def notify_order_created(self) -> asyncio.Task:
        """Schedule an immediate refresh after an order was recorded."""
        task = asyncio.ensure_future(self.refresh())
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    def _publish(self) -> None:
        self.view = build_view(self._now, self._payload)
        if self._on_update is None:
            return
        try:
            self._on_update(self.view)
        except Exception as e:
            logger.error("Dashboard view update failed: %s", e, exc_info=True)

    async def _refresh_loop(self) -> None:
        while True:
            await asyncio.sleep(self.refresh_seconds)
            try:
                await self.refresh()
            except Exception as e:
                logger.error("Dashboard refresh failed: %s", e, exc_info=True)

    async def _clock_loop(self) -> None:
        while True:
            await asyncio.sleep(self.tick_seconds)
            try:
                self.tick()
            except Exception as e:
                logger.error("Dashboard clock tick failed: %s", e, exc_info=True)

    async def start(self) -> None:
        """Fetch once, then keep refreshing and ticking until stop()."""
        if self._tasks:
            logger.warning("Dashboard poller is already running")
            return

        self._retired = False
        self.tick()
        await self.refresh()
        self._tasks = [
            asyncio.create_task(self._refresh_loop()),
            asyncio.create_task(self._clock_loop()),
        ]
        logger.info(
            "Dashboard poller started (refresh every %ss, tick every %ss)",
            self.refresh_seconds, self.tick_seconds,
        )

    async def stop(self) -> None:
        """Cancel both loops and any in-flight refresh; later results are dropped."""
        self._retired = True
        tasks = self._tasks + list(self._pending)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks = []
        self._pending.clear()

        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None
        logger.info("Dashboard poller stopped")
