"""Periodic refresh of the day state while a briefing panel is active."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os

from day_agent.briefing.aggregator import BriefingAggregator
from day_agent.exceptions import ProviderError

logger = logging.getLogger(__name__)

REFRESH_INTERVAL = float(os.environ.get("DAY_AGENT_REFRESH_INTERVAL", "300"))


class AutoRefreshScheduler:
    """Owns one background task that refreshes the aggregator every ``interval`` seconds.

    A tick does nothing unless the aggregator already holds a DayState and a
    baseline for today. ``stop()`` cancels the timer deterministically; a
    refresh that already started is allowed to finish. A tick that fails is
    logged and the timer keeps going.

    Usage::

        async with AutoRefreshScheduler(aggregator):
            ...  # panel is active
    """

    def __init__(self, aggregator: BriefingAggregator, interval: float = REFRESH_INTERVAL):
        if interval <= 0:
            raise ValueError("interval must be positive")
        self.aggregator = aggregator
        self.interval = interval
        self._task: asyncio.Task | None = None
        self._inflight: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking. Must be called from a running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._loop(), name="day-agent-auto-refresh")
        logger.info(f"Auto-refresh started (every {self.interval:g}s)")

    async def stop(self) -> None:
        """Cancel the timer and wait until it has stopped. Safe to call twice."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("Auto-refresh stopped")

    async def tick(self) -> bool:
        """Run one refresh if there is something to refresh. Returns True if it ran."""
        aggregator = self.aggregator
        if aggregator.state is None or aggregator.baseline is None:
            logger.debug("Nothing to refresh yet, skipping tick")
            return False
        try:
            state = await aggregator.refresh()
        except ProviderError as e:
            logger.warning(f"Scheduled refresh failed: {e}")
            return False
        return state is not None

    async def _loop(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self._inflight = asyncio.ensure_future(self.tick())
            try:
                await asyncio.shield(self._inflight)
            except Exception:
                logger.exception("Scheduled refresh crashed, timer keeps running")

    async def __aenter__(self) -> AutoRefreshScheduler:
        self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()
