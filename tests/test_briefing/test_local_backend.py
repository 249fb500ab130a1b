"""Tests for the provider-backed DayBackend."""

from datetime import datetime
from unittest.mock import AsyncMock

import pytest

from day_agent.briefing.local import ProviderBackend
from day_agent.briefing.models import (
    CalendarConfig,
    CalendarEvent,
    DayProgress,
    EmailDaySummary,
    Suggestion,
    SuggestionType,
    Task,
)
from day_agent.exceptions import LLMError, ProviderError
from day_agent.providers.base import (
    BriefingWriter,
    CalendarProvider,
    EmailProvider,
    TaskProvider,
)

NOW = datetime(2026, 10, 18, 10, 0)
CONFIG = CalendarConfig(calendar_ids=["primary"])


def _providers(unread=4):
    email = AsyncMock(spec=EmailProvider)
    email.fetch_summary.return_value = EmailDaySummary(unread_count=unread)

    calendar = AsyncMock(spec=CalendarProvider)
    calendar.fetch_events.return_value = [
        CalendarEvent("e1", "primary", "Standup", "2026-10-18T09:00:00", "2026-10-18T09:15:00"),
        CalendarEvent("e2", "primary", "Review", "2026-10-18T14:00:00", "2026-10-18T15:00:00"),
    ]

    tasks = AsyncMock(spec=TaskProvider)
    tasks.fetch_tasks.return_value = [
        Task("t1", "list", "Write report", due="2026-10-18"),
        Task("t2", "list", "Call bank", due="2026-10-15"),
        Task("t3", "list", "Old", completed=True, completed_at="2026-10-18T07:00:00"),
    ]
    return email, calendar, tasks


@pytest.mark.asyncio
async def test_briefing_reports_morning_counts():
    email, calendar, tasks = _providers()
    backend = ProviderBackend(email, calendar, tasks, now=lambda: NOW)

    state = await backend.get_day_briefing("acct-1", CONFIG)

    email.fetch_summary.assert_awaited_once_with("acct-1")
    calendar.fetch_events.assert_awaited_once_with(CONFIG, NOW.date())
    assert state.progress == DayProgress(
        morning_unread=4, morning_open_tasks=2, morning_events=2
    )
    assert state.calendar_summary.events_completed == 1
    assert state.task_summary.completed_today == 1
    assert state.ai_briefing == (
        "Good morning! You have 4 unread emails, 2 events today and 2 open tasks. "
        "Heads up: 1 overdue task!"
    )
    assert state.ai_suggestions == ()


@pytest.mark.asyncio
async def test_refresh_computes_progress():
    email, calendar, tasks = _providers(unread=1)
    backend = ProviderBackend(email, calendar, tasks, now=lambda: NOW)
    baseline = DayProgress(morning_unread=4, morning_open_tasks=2, morning_events=2)

    state = await backend.refresh_day_state("acct-1", CONFIG, baseline)

    assert state.progress.emails_processed == 3
    assert state.progress.tasks_completed == 0
    assert state.progress.events_attended == 1
    # (3/4 + 0/2 + 1/2) / 3 = 41.7%
    assert state.progress.overall_progress_percent == 42


@pytest.mark.asyncio
async def test_no_calendar_config_skips_calendar_and_tasks():
    email, calendar, tasks = _providers()
    backend = ProviderBackend(email, calendar, tasks, now=lambda: NOW)

    state = await backend.get_day_briefing("acct-1", None)

    calendar.fetch_events.assert_not_awaited()
    tasks.fetch_tasks.assert_not_awaited()
    assert state.calendar_summary.total_events_today == 0
    assert state.task_summary.total_open == 0


@pytest.mark.asyncio
async def test_provider_failure_becomes_provider_error():
    email, calendar, tasks = _providers()
    calendar.fetch_events.side_effect = RuntimeError("connection reset")
    backend = ProviderBackend(email, calendar, tasks, now=lambda: NOW)

    with pytest.raises(ProviderError, match="connection reset"):
        await backend.get_day_briefing("acct-1", CONFIG)


@pytest.mark.asyncio
async def test_writer_output_is_attached():
    email, calendar, tasks = _providers()
    writer = AsyncMock(spec=BriefingWriter)
    suggestion = Suggestion(SuggestionType.PRIORITY, "Focus", "Report first")
    writer.write.return_value = ("Good morning!", [suggestion])
    backend = ProviderBackend(email, calendar, tasks, writer=writer, now=lambda: NOW)

    state = await backend.get_day_briefing("acct-1", CONFIG)

    assert state.ai_briefing == "Good morning!"
    assert state.ai_suggestions == (suggestion,)


@pytest.mark.asyncio
async def test_writer_failure_falls_back_to_static_briefing():
    email, calendar, tasks = _providers()
    writer = AsyncMock(spec=BriefingWriter)
    writer.write.side_effect = LLMError("overloaded")
    backend = ProviderBackend(email, calendar, tasks, writer=writer, now=lambda: NOW)

    state = await backend.get_day_briefing("acct-1", CONFIG)

    assert state.ai_briefing.startswith("Good morning! You have 4 unread emails")
    assert state.ai_suggestions == ()
    assert state.email_summary.unread_count == 4
