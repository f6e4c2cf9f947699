"""Auto-refresh scheduler driven by an asyncio task."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from types import TracebackType
from typing import Any

from nearby_bikes.domain.contracts.refresh_scheduler import (
    RefreshSchedulerProtocol,
    RefreshSource,
)
from nearby_bikes.domain.models.refresh_state import (
    DEFAULT_AUTO_REFRESH_INTERVAL_MS,
    elapsed_ms,
)

logger = logging.getLogger(__name__)


class AutoRefreshScheduler(RefreshSchedulerProtocol):
    """Fires ``on_refresh`` once the data of ``source`` is older than the interval.

    The countdown is recomputed from ``source.last_update`` on every tick, paused while
    ``source.is_loading`` and armed again only when ``last_update`` changes.
    """

    def __init__(
        self,
        source: RefreshSource,
        on_refresh: Callable[[], Awaitable[Any]],
        interval_ms: int = DEFAULT_AUTO_REFRESH_INTERVAL_MS,
        tick_seconds: float = 1.0,
    ) -> None:
        """Initialize the scheduler.

        Args:
            source: Object exposing ``last_update`` and ``is_loading``.
            on_refresh: Coroutine function called when a refresh is due.
            interval_ms: Auto-refresh interval in milliseconds.
            tick_seconds: How often the countdown is re-evaluated.
        """
        if interval_ms <= 0:
            raise ValueError("interval_ms must be positive")
        if tick_seconds <= 0:
            raise ValueError("tick_seconds must be positive")
        self.source = source
        self.on_refresh = on_refresh
        self.interval_ms = interval_ms
        self.tick_seconds = tick_seconds
        self._task: asyncio.Task | None = None
        self._fired_for: datetime | None = None
        self._time_until_refresh_ms: int | None = None

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def time_until_refresh_ms(self) -> int | None:
        """Countdown computed at the last tick; None while paused or unarmed."""
        return self._time_until_refresh_ms

    async def start(self) -> None:
        """Start the scheduler."""
        if self.is_running:
            logger.warning("Auto-refresh scheduler already running")
            return
        self._task = asyncio.create_task(self._run_loop())
        logger.info(f"Started auto-refresh scheduler (interval: {self.interval_ms}ms)")

    async def stop(self) -> None:
        """Stop the scheduler."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.debug("Auto-refresh task cancelled")
            logger.info("Stopped auto-refresh scheduler")
        self._task = None
        self._time_until_refresh_ms = None

    async def restart(self) -> None:
        """Stop, reset the countdown and start again."""
        await self.stop()
        self._fired_for = None
        await self.start()

    async def __aenter__(self) -> AutoRefreshScheduler:
        await self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.stop()

    async def tick(self, now: datetime | None = None) -> bool:
        """Evaluate the countdown once; returns True if a refresh was triggered."""
        if self.source.is_loading:
            self._time_until_refresh_ms = None
            return False

        last_update = self.source.last_update
        if last_update is None:
            self._time_until_refresh_ms = None
            return False

        remaining = max(0, self.interval_ms - elapsed_ms(last_update, now))
        self._time_until_refresh_ms = remaining
        if remaining > 0 or self._fired_for == last_update:
            return False

        self._fired_for = last_update
        logger.info("Auto-refresh due, refreshing")
        await self.on_refresh()
        return True

    async def _run_loop(self) -> None:
        try:
            while True:
                try:
                    await self.tick()
                except Exception as e:
                    logger.error(f"Auto-refresh failed: {e}", exc_info=True)
                await asyncio.sleep(self.tick_seconds)
        except asyncio.CancelledError:
            logger.debug("Auto-refresh loop cancelled")
            raise
