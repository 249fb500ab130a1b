"""Tests for calendar and task summarization."""

import time
from datetime import date, datetime

import pytest

from day_agent.briefing.models import CalendarEvent, Task
from day_agent.briefing.summaries import (
    parse_date,
    parse_datetime,
    parse_due_date,
    priority_to_label,
    summarize_events,
    summarize_tasks,
)

NOW = datetime(2026, 10, 18, 10, 0)
TODAY = NOW.date()


def _event(event_id, start, end):
    return CalendarEvent(
        id=event_id,
        calendar_id="primary",
        summary=f"Event {event_id}",
        start=start,
        end=end,
        attendees=["a@example.com", "b@example.com"],
    )


def _task(task_id, due=None, priority=None, completed=False, completed_at=None):
    return Task(
        id=task_id,
        calendar_id="tasks",
        summary=f"Task {task_id}",
        due=due,
        priority=priority,
        completed=completed,
        completed_at=completed_at,
    )


@pytest.mark.parametrize(
    "priority,label",
    [(None, "medium"), (1, "high"), (3, "high"), (5, "medium"), (9, "low"), (0, "medium")],
)
def test_priority_to_label(priority, label):
    assert priority_to_label(priority) == label


def test_parse_datetime_variants():
    assert parse_datetime("2026-10-18T09:30:00") == datetime(2026, 10, 18, 9, 30)
    assert parse_datetime("2026-10-18") == datetime(2026, 10, 18)
    assert parse_datetime("") is None
    assert parse_datetime("not a date") is None
    assert parse_date("2026-10-18T23:00:00") == date(2026, 10, 18)


def test_parse_datetime_converts_aware_to_naive():
    parsed = parse_datetime("2026-10-18T09:30:00+00:00")

    assert parsed.tzinfo is None


def test_summarize_events_orders_and_splits_past():
    events = [
        _event("late", "2026-10-18T15:00:00", "2026-10-18T16:00:00"),
        _event("early", "2026-10-18T08:00:00", "2026-10-18T09:00:00"),
        _event("soon", "2026-10-18T10:20:00", "2026-10-18T11:00:00"),
    ]

    summary = summarize_events(events, NOW)

    assert [e.id for e in summary.today_events] == ["early", "soon", "late"]
    assert summary.today_events[0].is_past is True
    assert summary.next_event.id == "soon"
    assert summary.minutes_until_next == 20
    assert summary.total_events_today == 3
    assert summary.events_completed == 1
    assert summary.events_remaining == 2
    assert summary.today_events[1].attendee_count == 2


def test_summarize_events_all_past():
    events = [_event("early", "2026-10-18T08:00:00", "2026-10-18T09:00:00")]

    summary = summarize_events(events, NOW)

    assert summary.next_event is None
    assert summary.minutes_until_next is None
    assert summary.events_remaining == 0


def test_summarize_events_empty():
    summary = summarize_events([], NOW)

    assert summary.total_events_today == 0
    assert summary.today_events == []


def test_summarize_tasks_buckets_by_due_date():
    tasks = [
        _task("overdue", due="2026-10-16", priority=2),
        _task("today", due="2026-10-18"),
        _task("week", due="2026-10-22", priority=8),
        _task("later", due="2026-12-01"),
        _task("undated"),
        _task("done", completed=True, completed_at="2026-10-18T08:15:00"),
        _task("done-before", completed=True, completed_at="2026-10-10T08:15:00"),
    ]

    summary = summarize_tasks(tasks, TODAY)

    assert [t.id for t in summary.overdue] == ["overdue"]
    assert summary.overdue[0].is_overdue is True
    assert summary.overdue[0].priority_label == "high"
    assert [t.id for t in summary.due_today] == ["today"]
    assert [t.id for t in summary.due_this_week] == ["week"]
    assert summary.due_this_week[0].priority_label == "low"
    assert [t.id for t in summary.high_priority_pending] == ["overdue"]
    assert summary.total_open == 5
    assert summary.completed_today == 1


def test_completed_task_without_timestamp_counts_today():
    summary = summarize_tasks([_task("done", completed=True)], TODAY)

    assert summary.completed_today == 1
    assert summary.total_open == 0


@pytest.fixture
def new_york_tz(monkeypatch):
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()


def test_due_date_is_taken_as_written():
    assert parse_due_date("2026-10-18T00:00:00.000Z") == date(2026, 10, 18)
    assert parse_due_date("2026-10-18") == date(2026, 10, 18)
    assert parse_due_date(None) is None
    assert parse_due_date("soon") is None


def test_utc_midnight_due_is_today_west_of_utc(new_york_tz):
    summary = summarize_tasks([_task("t1", due="2026-10-18T00:00:00.000Z")], TODAY)

    assert [t.id for t in summary.due_today] == ["t1"]
    assert summary.overdue == []
