"""DayBackend that assembles snapshots from local providers."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from day_agent.briefing.backend import DayBackend
from day_agent.briefing.models import (
    CalendarConfig,
    CalendarDaySummary,
    DayCounts,
    DayProgress,
    DayState,
    EmailDaySummary,
    Suggestion,
    TaskDaySummary,
)
from day_agent.briefing.summaries import summarize_events, summarize_tasks
from day_agent.briefing.tracker import compute_progress
from day_agent.exceptions import DayAgentError, ProviderError
from day_agent.providers.base import (
    BriefingWriter,
    CalendarProvider,
    EmailProvider,
    TaskProvider,
)
from day_agent.providers.writer import static_briefing

logger = logging.getLogger(__name__)


class ProviderBackend(DayBackend):
    """Calls the mail, calendar and task providers and merges their output.

    Calendar and task providers are skipped when no calendar configuration
    is given. Without a writer, or when the writer fails, the snapshot
    carries a static briefing built from the counts and no suggestions.

    Args:
        email: Mail source.
        calendar: Calendar source.
        tasks: Task source.
        writer: Optional briefing text and suggestion producer.
        now: Clock returning naive local time.
    """

    def __init__(
        self,
        email: EmailProvider,
        calendar: CalendarProvider,
        tasks: TaskProvider,
        writer: BriefingWriter | None = None,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.email = email
        self.calendar = calendar
        self.tasks = tasks
        self.writer = writer
        self._now = now

    async def _collect(
        self,
        account_id: str,
        calendar_config: CalendarConfig | None,
        now: datetime,
    ) -> tuple[EmailDaySummary, CalendarDaySummary, TaskDaySummary]:
        try:
            email_summary = await self.email.fetch_summary(account_id)
            if calendar_config is None:
                return email_summary, CalendarDaySummary(), TaskDaySummary()
            events = await self.calendar.fetch_events(calendar_config, now.date())
            tasks = await self.tasks.fetch_tasks(calendar_config)
        except ProviderError:
            raise
        except Exception as e:
            raise ProviderError(f"Failed to collect day data for {account_id}: {e}") from e

        return (
            email_summary,
            summarize_events(events, now),
            summarize_tasks(tasks, now.date()),
        )

    async def _write(
        self,
        email: EmailDaySummary,
        calendar: CalendarDaySummary,
        tasks: TaskDaySummary,
        now: datetime,
    ) -> tuple[str | None, list[Suggestion]]:
        if self.writer is None:
            return static_briefing(email, calendar, tasks, now), []
        try:
            return await self.writer.write(email, calendar, tasks)
        except DayAgentError as e:
            logger.warning(f"Briefing writer failed, using the static briefing: {e}")
            return static_briefing(email, calendar, tasks, now), []

    async def get_day_briefing(
        self,
        account_id: str,
        calendar_config: CalendarConfig | None,
    ) -> DayState:
        now = self._now()
        email, calendar, tasks = await self._collect(account_id, calendar_config, now)
        briefing, suggestions = await self._write(email, calendar, tasks, now)
        return DayState(
            generated_at=now.astimezone().isoformat(),
            email_summary=email,
            calendar_summary=calendar,
            task_summary=tasks,
            ai_briefing=briefing,
            ai_suggestions=tuple(suggestions),
            progress=DayProgress(
                morning_unread=email.unread_count,
                morning_open_tasks=tasks.total_open,
                morning_events=calendar.total_events_today,
            ),
        )

    async def refresh_day_state(
        self,
        account_id: str,
        calendar_config: CalendarConfig | None,
        baseline: DayProgress,
    ) -> DayState:
        now = self._now()
        email, calendar, tasks = await self._collect(account_id, calendar_config, now)
        briefing, suggestions = await self._write(email, calendar, tasks, now)
        counts = DayCounts(
            unread=email.unread_count,
            open_tasks=tasks.total_open,
            events_today=calendar.total_events_today,
            events_completed=calendar.events_completed,
        )
        return DayState(
            generated_at=now.astimezone().isoformat(),
            email_summary=email,
            calendar_summary=calendar,
            task_summary=tasks,
            ai_briefing=briefing,
            ai_suggestions=tuple(suggestions),
            progress=compute_progress(baseline, counts),
        )
