"""Builds the current DayState and keeps it in step with today's baseline."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable

from day_agent.briefing.backend import DayBackend
from day_agent.briefing.models import CalendarConfig, DayCounts, DayProgress, DayState
from day_agent.briefing.tracker import ProgressTracker
from day_agent.exceptions import ProviderError

logger = logging.getLogger(__name__)

StateListener = Callable[[DayState], None]
ErrorListener = Callable[[str], None]


class BriefingAggregator:
    """Owns the current DayState and the baseline lifecycle.

    Two ways to produce a snapshot:

    * fresh fetch, used when no baseline for today is held or a full reload
      is asked for. Captures the baseline if none is valid for today.
    * refresh, used when a baseline is held. Recomputes progress against it
      without capturing again.

    Only one aggregation runs at a time. A call made while another is in
    flight is a no-op and returns None. On failure the previous DayState is
    kept and the error is reported once.

    Args:
        backend: Where snapshots come from.
        tracker: Baseline and progress bookkeeping.
        account_id: Mail account to brief.
        calendar_config: Calendars and task lists to include, if any.
    """

    def __init__(
        self,
        backend: DayBackend,
        tracker: ProgressTracker,
        account_id: str,
        calendar_config: CalendarConfig | None = None,
    ):
        self.backend = backend
        self.tracker = tracker
        self.account_id = account_id
        self.calendar_config = calendar_config
        self._state: DayState | None = None
        self._last_error: str | None = None
        self._in_progress = False
        self._state_listeners: list[StateListener] = []
        self._error_listeners: list[ErrorListener] = []

    @property
    def state(self) -> DayState | None:
        return self._state

    @property
    def baseline(self) -> DayProgress | None:
        return self.tracker.baseline

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def in_progress(self) -> bool:
        return self._in_progress

    def on_state_updated(self, callback: StateListener) -> None:
        self._state_listeners.append(callback)

    def on_error(self, callback: ErrorListener) -> None:
        self._error_listeners.append(callback)

    def restore(self) -> DayProgress | None:
        """Pick up a baseline persisted earlier today, if any."""
        baseline = self.tracker.load_baseline()
        if baseline is not None:
            logger.info(f"Restored today's baseline for {self.account_id}")
        return baseline

    def _held_baseline(self) -> DayProgress | None:
        """Today's baseline, falling back to the persisted record."""
        baseline = self.tracker.baseline
        if baseline is None:
            baseline = self.tracker.load_baseline()
        return baseline

    async def load(self, refresh: bool = False) -> DayState | None:
        """Shared entry point for manual and scheduled updates.

        Refreshes when asked to and a baseline for today is held or persisted,
        otherwise performs a fresh fetch.
        """
        if refresh and self._held_baseline() is not None:
            return await self.refresh()
        return await self.fresh_fetch()

    async def fresh_fetch(self) -> DayState | None:
        return await self._run(self._fresh_fetch)

    async def refresh(self) -> DayState | None:
        """Refresh against the held baseline; falls back to a fresh fetch."""
        if self._held_baseline() is None:
            logger.info("No baseline held for today, doing a fresh fetch instead")
            return await self.fresh_fetch()
        return await self._run(self._refresh)

    async def _run(self, operation) -> DayState | None:
        if self._in_progress:
            logger.debug("Aggregation already in progress, ignoring request")
            return None

        self._in_progress = True
        self._last_error = None
        try:
            state = await operation()
        except ProviderError as e:
            self._last_error = str(e)
            logger.warning(f"Aggregation failed, keeping previous state: {e}")
            for listener in self._error_listeners:
                listener(self._last_error)
            raise
        finally:
            self._in_progress = False

        self._state = state
        for listener in self._state_listeners:
            listener(state)
        return state

    async def _fresh_fetch(self) -> DayState:
        logger.info(f"Fetching fresh day briefing for {self.account_id}")
        state = await self.backend.get_day_briefing(self.account_id, self.calendar_config)
        counts = DayCounts.from_state(state)

        # Another process may have captured today's baseline already.
        if self._held_baseline() is None:
            progress = self.tracker.capture_baseline(counts)
        else:
            progress = self.tracker.update(counts)
        return replace(state, progress=progress)

    async def _refresh(self) -> DayState:
        baseline = self.baseline
        logger.debug(f"Refreshing day state for {self.account_id}")
        state = await self.backend.refresh_day_state(
            self.account_id, self.calendar_config, baseline
        )
        # The date can roll over while the request is in flight.
        if self.baseline is None:
            progress = self.tracker.capture_baseline(DayCounts.from_state(state))
        else:
            progress = self.tracker.update(DayCounts.from_state(state))
        return replace(state, progress=progress)
