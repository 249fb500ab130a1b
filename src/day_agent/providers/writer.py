"""Claude-backed BriefingWriter."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from day_agent.briefing.models import (
    CalendarDaySummary,
    EmailDaySummary,
    SuggestedAction,
    Suggestion,
    SuggestionType,
    TargetType,
    TaskDaySummary,
)
from day_agent.llm.client import AsyncLLMClient
from day_agent.providers.base import BriefingWriter

logger = logging.getLogger(__name__)

MAX_SUGGESTIONS = 3
MEETING_PREP_MINUTES = 30
NEXT_EVENT_NOTICE_MINUTES = 60

SYSTEM_PROMPT = """You are a personal day assistant. Write a short, encouraging summary of the user's day.

Structure:
1. Short greeting
2. The single most important priority (one sentence)
3. Overview of the numbers
4. Special notes (overdue, urgent)
5. Encouraging close

Keep it brief (5-6 sentences at most). Be friendly and helpful."""


def greeting(now: datetime) -> str:
    if now.hour < 12:
        return "Good morning"
    if now.hour < 17:
        return "Good afternoon"
    return "Good evening"


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def static_briefing(
    email: EmailDaySummary,
    calendar: CalendarDaySummary,
    tasks: TaskDaySummary,
    now: datetime,
) -> str:
    """Plain briefing built from the counts alone, used when Claude is not available."""
    parts = [
        f"{greeting(now)}!",
        f"You have {_plural(email.unread_count, 'unread email')}, "
        f"{_plural(calendar.total_events_today, 'event')} today and "
        f"{_plural(tasks.total_open, 'open task')}.",
    ]
    if tasks.overdue:
        parts.append(f"Heads up: {_plural(len(tasks.overdue), 'overdue task')}!")

    minutes = calendar.minutes_until_next
    if calendar.next_event and minutes is not None and 0 < minutes <= NEXT_EVENT_NOTICE_MINUTES:
        parts.append(f"Next up: '{calendar.next_event.summary}' in {minutes} minutes.")
    return " ".join(parts)


def build_context(
    email: EmailDaySummary,
    calendar: CalendarDaySummary,
    tasks: TaskDaySummary,
    now: datetime,
) -> str:
    next_event = calendar.next_event.summary if calendar.next_event else "none"
    return (
        f"{greeting(now)}!\n\n"
        "Current situation:\n"
        f"- {email.unread_count} unread emails\n"
        f"- {len(email.important_emails)} important emails\n"
        f"- {calendar.total_events_today} events today (next: {next_event})\n"
        f"- {len(tasks.overdue)} overdue tasks\n"
        f"- {len(tasks.due_today)} tasks due today\n"
        f"- {len(tasks.due_this_week)} tasks due this week\n"
    )


def derive_suggestions(
    email: EmailDaySummary,
    calendar: CalendarDaySummary,
    tasks: TaskDaySummary,
) -> list[Suggestion]:
    """Up to three suggestions, each pointing at the item it is about."""
    suggestions: list[Suggestion] = []

    if tasks.overdue:
        task = tasks.overdue[0]
        suggestions.append(
            Suggestion(
                suggestion_type=SuggestionType.TASK_REMINDER,
                title="Overdue task",
                description=f"'{task.summary}' is overdue. Put it first.",
                action=SuggestedAction(TargetType.TASK, task.id, "view_task"),
            )
        )

    minutes = calendar.minutes_until_next
    if calendar.next_event and minutes is not None and 0 < minutes <= MEETING_PREP_MINUTES:
        event = calendar.next_event
        suggestions.append(
            Suggestion(
                suggestion_type=SuggestionType.MEETING_PREP,
                title="Prepare for meeting",
                description=f"'{event.summary}' starts in {minutes} minutes.",
                action=SuggestedAction(TargetType.EVENT, event.id, "view_calendar"),
            )
        )

    if email.important_emails:
        message = email.important_emails[0]
        suggestions.append(
            Suggestion(
                suggestion_type=SuggestionType.EMAIL_ACTION,
                title="Important email",
                description=f"Check the email from {message.sender}.",
                action=SuggestedAction(TargetType.EMAIL, message.uid, "open_email"),
            )
        )

    return suggestions[:MAX_SUGGESTIONS]


class LLMBriefingWriter(BriefingWriter):
    """Words the briefing with Claude and attaches rule-based suggestions.

    Raises ``LLMError`` when Claude cannot be reached; callers decide how to
    degrade.
    """

    def __init__(
        self,
        client: AsyncLLMClient,
        now: Callable[[], datetime] = datetime.now,
    ):
        self.client = client
        self._now = now

    async def write(
        self,
        email: EmailDaySummary,
        calendar: CalendarDaySummary,
        tasks: TaskDaySummary,
    ) -> tuple[str | None, list[Suggestion]]:
        context = build_context(email, calendar, tasks, self._now())
        completion = await self.client.generate(SYSTEM_PROMPT, context)
        logger.info(
            f"Briefing written ({completion.input_tokens} in / "
            f"{completion.output_tokens} out tokens)"
        )
        return completion.text.strip(), derive_suggestions(email, calendar, tasks)
