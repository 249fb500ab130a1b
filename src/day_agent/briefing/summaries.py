"""Turn raw provider records into the per-day summaries of a DayState."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta

import dateutil.parser as parser

from day_agent.briefing.models import (
    CalendarDaySummary,
    CalendarEvent,
    CalendarEventSummary,
    Task,
    TaskDaySummary,
    TaskSummary,
)

logger = logging.getLogger(__name__)

HIGH_PRIORITY_MAX = 3
WEEK_DAYS = 7


def priority_to_label(priority: int | None) -> str:
    """Map an iCalendar priority (1 highest .. 9 lowest) to a label."""
    if priority is None:
        return "medium"
    if 1 <= priority <= 3:
        return "high"
    if 4 <= priority <= 6:
        return "medium"
    if 7 <= priority <= 9:
        return "low"
    return "medium"


def parse_datetime(value: str | None) -> datetime | None:
    """Parse an ISO-ish date or datetime string into a naive local datetime.

    Aware values are converted to local time first. Returns None when the
    value cannot be parsed.
    """
    if not value:
        return None
    try:
        parsed = parser.isoparse(value)
    except (ValueError, OverflowError):
        try:
            parsed = parser.parse(value)
        except (ValueError, OverflowError):
            logger.debug(f"Unparsable datetime: {value!r}")
            return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def parse_date(value: str | None) -> date | None:
    parsed = parse_datetime(value)
    return parsed.date() if parsed else None


def parse_due_date(value: str | None) -> date | None:
    """Calendar date of a task due value.

    Due values are dates, even when sent as midnight UTC timestamps (Google
    Tasks), so the date is taken as written and never shifted to local time.
    """
    if not value:
        return None
    try:
        parsed = parser.isoparse(value)
    except (ValueError, OverflowError):
        try:
            parsed = parser.parse(value)
        except (ValueError, OverflowError):
            logger.debug(f"Unparsable due date: {value!r}")
            return None
    return parsed.date()


def summarize_events(events: list[CalendarEvent], now: datetime) -> CalendarDaySummary:
    """Summarize today's events relative to ``now`` (naive local time)."""
    ordered = sorted(events, key=lambda e: e.start)

    today_events: list[CalendarEventSummary] = []
    for event in ordered:
        start = parse_datetime(event.start)
        today_events.append(
            CalendarEventSummary(
                id=event.id,
                calendar_id=event.calendar_id,
                summary=event.summary,
                location=event.location,
                start=event.start,
                end=event.end,
                all_day=event.all_day,
                is_past=start is not None and start < now,
                attendee_count=len(event.attendees),
            )
        )

    next_event = next((e for e in today_events if not e.is_past), None)

    minutes_until_next = None
    if next_event is not None:
        start = parse_datetime(next_event.start)
        if start is not None:
            minutes_until_next = int((start - now).total_seconds() // 60)

    events_completed = sum(1 for e in today_events if e.is_past)
    return CalendarDaySummary(
        today_events=today_events,
        next_event=next_event,
        minutes_until_next=minutes_until_next,
        total_events_today=len(today_events),
        events_completed=events_completed,
        events_remaining=len(today_events) - events_completed,
    )


def summarize_tasks(tasks: list[Task], today: date) -> TaskDaySummary:
    """Bucket open tasks by due date and count completed ones."""
    week_end = today + timedelta(days=WEEK_DAYS)
    summary = TaskDaySummary()

    for task in tasks:
        if task.completed:
            done_on = parse_date(task.completed_at)
            if done_on is None or done_on == today:
                summary.completed_today += 1
            continue

        summary.total_open += 1
        item = TaskSummary(
            id=task.id,
            calendar_id=task.calendar_id,
            summary=task.summary,
            description=task.description,
            due=task.due,
            priority=task.priority,
            priority_label=priority_to_label(task.priority),
        )

        if task.priority is not None and 1 <= task.priority <= HIGH_PRIORITY_MAX:
            summary.high_priority_pending.append(item)

        due = parse_due_date(task.due)
        if due is None:
            continue
        if due < today:
            summary.overdue.append(replace(item, is_overdue=True))
        elif due == today:
            summary.due_today.append(item)
        elif due <= week_end:
            summary.due_this_week.append(item)

    return summary
