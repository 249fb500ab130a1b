"""Shared fixtures for briefing tests."""

import asyncio
from datetime import date

import pytest

from day_agent.briefing.aggregator import BriefingAggregator
from day_agent.briefing.backend import DayBackend
from day_agent.briefing.models import (
    CalendarDaySummary,
    DayProgress,
    DayState,
    EmailDaySummary,
    TaskDaySummary,
)
from day_agent.briefing.tracker import BaselineStore, ProgressTracker

TODAY = date(2026, 10, 18)


def _make_state(unread=5, open_tasks=3, events=2, events_completed=0):
    return DayState(
        generated_at="2026-10-18T08:00:00+02:00",
        email_summary=EmailDaySummary(unread_count=unread),
        calendar_summary=CalendarDaySummary(
            total_events_today=events,
            events_completed=events_completed,
            events_remaining=events - events_completed,
        ),
        task_summary=TaskDaySummary(total_open=open_tasks),
        progress=DayProgress(
            morning_unread=unread,
            morning_open_tasks=open_tasks,
            morning_events=events,
        ),
    )


class FakeBackend(DayBackend):
    """Returns ``state`` (or raises ``error``), optionally waiting on ``gate``."""

    def __init__(self, state):
        self.state = state
        self.error = None
        self.gate: asyncio.Event | None = None
        self.briefing_calls = 0
        self.refresh_calls = []

    async def _respond(self):
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return self.state

    async def get_day_briefing(self, account_id, calendar_config):
        self.briefing_calls += 1
        return await self._respond()

    async def refresh_day_state(self, account_id, calendar_config, baseline):
        self.refresh_calls.append(baseline)
        return await self._respond()


@pytest.fixture
def make_state():
    return _make_state


@pytest.fixture
def backend():
    return FakeBackend(_make_state())


@pytest.fixture
def store(tmp_path):
    return BaselineStore(tmp_path / "baseline.json")


@pytest.fixture
def tracker(store):
    return ProgressTracker(store, today=lambda: TODAY)


@pytest.fixture
def aggregator(backend, tracker):
    return BriefingAggregator(backend, tracker, account_id="acct-1")
