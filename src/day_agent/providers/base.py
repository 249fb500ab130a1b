"""Abstract base classes for the data sources behind a daily briefing."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from day_agent.briefing.models import (
    CalendarConfig,
    CalendarDaySummary,
    CalendarEvent,
    EmailDaySummary,
    Suggestion,
    Task,
    TaskDaySummary,
)


class EmailProvider(ABC):
    """Source of the unread-mail picture for an account."""

    @abstractmethod
    async def fetch_summary(self, account_id: str) -> EmailDaySummary:
        """Unread count and the most relevant unread messages."""
        ...


class CalendarProvider(ABC):
    """Source of calendar entries."""

    @abstractmethod
    async def fetch_events(self, config: CalendarConfig, day: date) -> list[CalendarEvent]:
        """All events on ``day`` across the configured calendars."""
        ...


class TaskProvider(ABC):
    """Source of open and completed tasks."""

    @abstractmethod
    async def fetch_tasks(self, config: CalendarConfig) -> list[Task]:
        """All tasks across the configured lists."""
        ...


class BriefingWriter(ABC):
    """Produces the briefing text and suggestions for a set of summaries."""

    @abstractmethod
    async def write(
        self,
        email: EmailDaySummary,
        calendar: CalendarDaySummary,
        tasks: TaskDaySummary,
    ) -> tuple[str | None, list[Suggestion]]:
        ...
