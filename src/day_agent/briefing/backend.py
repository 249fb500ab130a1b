"""The two operations an aggregator needs from whatever produces a DayState."""

from __future__ import annotations

from abc import ABC, abstractmethod

from day_agent.briefing.models import CalendarConfig, DayProgress, DayState


class DayBackend(ABC):
    """Produces complete day snapshots.

    Implementations raise ``ProviderError`` when any underlying source fails.
    """

    @abstractmethod
    async def get_day_briefing(
        self,
        account_id: str,
        calendar_config: CalendarConfig | None,
    ) -> DayState:
        """Fresh snapshot; its progress carries the current counts as morning fields."""
        ...

    @abstractmethod
    async def refresh_day_state(
        self,
        account_id: str,
        calendar_config: CalendarConfig | None,
        baseline: DayProgress,
    ) -> DayState:
        """Snapshot with progress computed against ``baseline``."""
        ...
