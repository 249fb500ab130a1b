"""Resolve a suggestion's action into a place the UI can navigate to."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from day_agent.briefing.models import Suggestion, TargetType
from day_agent.exceptions import NavigationError

logger = logging.getLogger(__name__)

DEFAULT_EMAIL_FOLDER = "INBOX"


@dataclass(frozen=True)
class NavigationTarget:
    """Where to go: an email (inside ``folder``), a task or a calendar event."""

    kind: TargetType
    id: str
    folder: str | None = None


def _to_email(target_id: str) -> NavigationTarget:
    return NavigationTarget(TargetType.EMAIL, target_id, DEFAULT_EMAIL_FOLDER)


def _to_event(target_id: str) -> NavigationTarget:
    return NavigationTarget(TargetType.EVENT, target_id)


def _to_task(target_id: str) -> NavigationTarget:
    return NavigationTarget(TargetType.TASK, target_id)


_ROUTES: dict[TargetType, Callable[[str], NavigationTarget]] = {
    TargetType.EMAIL: _to_email,
    TargetType.EVENT: _to_event,
    TargetType.TASK: _to_task,
}


def route(suggestion: Suggestion) -> NavigationTarget | None:
    """Navigation target for ``suggestion``.

    Returns None for informational suggestions (no action) and for target
    types this version does not know; the latter are logged.
    """
    action = suggestion.action
    if action is None:
        return None

    try:
        kind = TargetType(action.target_type)
    except ValueError:
        error = NavigationError(f"Unknown suggestion target type: {action.target_type!r}")
        logger.warning(f"{error}; ignoring suggestion '{suggestion.title}'")
        return None
    return _ROUTES[kind](action.target_id)


class SuggestionRouter:
    """Routes activated suggestions and tells listeners where to navigate."""

    def __init__(self):
        self._listeners: list[Callable[[NavigationTarget], None]] = []

    def on_navigate(self, callback: Callable[[NavigationTarget], None]) -> None:
        self._listeners.append(callback)

    def activate(self, suggestion: Suggestion) -> NavigationTarget | None:
        target = route(suggestion)
        if target is not None:
            for listener in self._listeners:
                listener(target)
        return target
