"""Data providers behind the daily briefing.

Google-backed providers need optional dependencies. Use explicit imports:
    from day_agent.providers.gmail import GmailProvider
    from day_agent.providers.google_calendar import GoogleCalendarProvider
    from day_agent.providers.google_tasks import GoogleTasksProvider
"""

from day_agent.providers.base import (
    BriefingWriter,
    CalendarProvider,
    EmailProvider,
    TaskProvider,
)


def __getattr__(name):
    """Lazy imports for classes that require optional dependencies."""
    if name == "GmailProvider":
        from day_agent.providers.gmail import GmailProvider
        return GmailProvider
    if name == "GoogleCalendarProvider":
        from day_agent.providers.google_calendar import GoogleCalendarProvider
        return GoogleCalendarProvider
    if name == "GoogleTasksProvider":
        from day_agent.providers.google_tasks import GoogleTasksProvider
        return GoogleTasksProvider
    if name == "LLMBriefingWriter":
        from day_agent.providers.writer import LLMBriefingWriter
        return LLMBriefingWriter
    raise AttributeError(f"module 'day_agent.providers' has no attribute {name!r}")


__all__ = [
    "BriefingWriter",
    "CalendarProvider",
    "EmailProvider",
    "TaskProvider",
    "GmailProvider",
    "GoogleCalendarProvider",
    "GoogleTasksProvider",
    "LLMBriefingWriter",
]
