"""Daily briefing: snapshot model, baseline tracking, aggregation and routing.

Backends with optional dependencies are imported lazily:
    from day_agent.briefing.local import ProviderBackend
    from day_agent.briefing.http import HttpDayBackend
"""

from day_agent.briefing.aggregator import BriefingAggregator
from day_agent.briefing.backend import DayBackend
from day_agent.briefing.models import (
    CalendarConfig,
    CalendarDaySummary,
    DayCounts,
    DayProgress,
    DayState,
    EmailDaySummary,
    SuggestedAction,
    Suggestion,
    SuggestionType,
    TargetType,
    TaskDaySummary,
)
from day_agent.briefing.router import NavigationTarget, SuggestionRouter, route
from day_agent.briefing.scheduler import AutoRefreshScheduler
from day_agent.briefing.tracker import BaselineStore, ProgressTracker, compute_progress


def __getattr__(name):
    """Lazy imports for backends that pull in providers or httpx."""
    if name == "ProviderBackend":
        from day_agent.briefing.local import ProviderBackend
        return ProviderBackend
    if name == "HttpDayBackend":
        from day_agent.briefing.http import HttpDayBackend
        return HttpDayBackend
    raise AttributeError(f"module 'day_agent.briefing' has no attribute {name!r}")


__all__ = [
    "AutoRefreshScheduler",
    "BaselineStore",
    "BriefingAggregator",
    "CalendarConfig",
    "CalendarDaySummary",
    "DayBackend",
    "DayCounts",
    "DayProgress",
    "DayState",
    "EmailDaySummary",
    "HttpDayBackend",
    "NavigationTarget",
    "ProgressTracker",
    "ProviderBackend",
    "SuggestedAction",
    "Suggestion",
    "SuggestionRouter",
    "SuggestionType",
    "TargetType",
    "TaskDaySummary",
    "compute_progress",
    "route",
]
