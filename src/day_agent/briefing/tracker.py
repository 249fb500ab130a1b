"""Daily baseline persistence and progress tracking.

The baseline is the set of counts captured at the first aggregation of a
calendar day. It is persisted as a single JSON record::

    {"calendarDate": "2026-10-18", "baseline": {...DayProgress...}}

A record for any other date is stale and is never used.
"""

from __future__ import annotations

import json
import logging
import math
import os
import threading
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Callable

from day_agent.briefing.models import DayCounts, DayProgress
from day_agent.exceptions import PersistenceError

logger = logging.getLogger(__name__)

STATE_DIR = Path(os.environ.get("DAY_AGENT_STATE_DIR", str(Path.home() / ".day_agent")))
BASELINE_FILE = "baseline.json"


def progress_percent(
    morning_unread: int,
    morning_open_tasks: int,
    morning_events: int,
    emails_processed: int,
    tasks_completed: int,
    events_attended: int,
) -> int:
    """Mean of the per-category completion ratios, as a 0-100 integer.

    A category whose morning count is zero has nothing to complete and is
    left out of the mean. With no category left the day counts as done.
    """
    ratios = []
    for done, total in (
        (emails_processed, morning_unread),
        (tasks_completed, morning_open_tasks),
        (events_attended, morning_events),
    ):
        if total > 0:
            ratios.append(min(max(done / total, 0.0), 1.0))

    if not ratios:
        return 100
    percent = math.floor(sum(ratios) / len(ratios) * 100 + 0.5)
    return min(max(percent, 0), 100)


def compute_progress(baseline: DayProgress, counts: DayCounts) -> DayProgress:
    """Derive today's progress from the morning baseline and current counts."""
    emails_processed = max(baseline.morning_unread - counts.unread, 0)
    tasks_completed = max(baseline.morning_open_tasks - counts.open_tasks, 0)
    events_attended = max(counts.events_completed, 0)
    return DayProgress(
        morning_unread=baseline.morning_unread,
        morning_open_tasks=baseline.morning_open_tasks,
        morning_events=baseline.morning_events,
        emails_processed=emails_processed,
        tasks_completed=tasks_completed,
        events_attended=events_attended,
        overall_progress_percent=progress_percent(
            baseline.morning_unread,
            baseline.morning_open_tasks,
            baseline.morning_events,
            emails_processed,
            tasks_completed,
            events_attended,
        ),
    )


class BaselineStore:
    """Single-record JSON store for the daily baseline.

    Args:
        path: File holding the record. Defaults to
            ``$DAY_AGENT_STATE_DIR/baseline.json``.
    """

    def __init__(self, path: Path | None = None):
        self.path = Path(path) if path else STATE_DIR / BASELINE_FILE
        self._lock = threading.Lock()

    def read(self) -> tuple[date, DayProgress] | None:
        """Return the stored ``(calendar_date, baseline)`` or None if absent."""
        with self._lock:
            if not self.path.exists():
                return None
            try:
                with open(self.path, "r") as f:
                    record = json.load(f)
                return (
                    date.fromisoformat(record["calendarDate"]),
                    DayProgress.from_dict(record["baseline"]),
                )
            except (OSError, json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
                raise PersistenceError(f"Failed to read baseline from {self.path}: {e}") from e

    def write(self, calendar_date: date, baseline: DayProgress) -> None:
        """Replace the stored record. Last write wins."""
        record = {"calendarDate": calendar_date.isoformat(), "baseline": baseline.to_dict()}
        with self._lock:
            tmp_file = self.path.with_suffix(".tmp")
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with open(tmp_file, "w") as f:
                    json.dump(record, f, indent=2)
                os.replace(tmp_file, self.path)
            except OSError as e:
                raise PersistenceError(f"Failed to write baseline to {self.path}: {e}") from e

    def clear(self) -> None:
        with self._lock:
            try:
                self.path.unlink(missing_ok=True)
            except OSError as e:
                raise PersistenceError(f"Failed to remove {self.path}: {e}") from e


class ProgressTracker:
    """Owns today's baseline and the progress computed against it.

    Store failures never propagate: they are logged and the baseline is
    treated as absent, which forces a fresh capture.

    Args:
        store: Where the baseline is persisted.
        today: Clock returning the current calendar date.
    """

    def __init__(
        self,
        store: BaselineStore | None = None,
        today: Callable[[], date] = date.today,
    ):
        self.store = store or BaselineStore()
        self._today = today
        self._baseline: tuple[date, DayProgress] | None = None
        self._last_progress: tuple[date, DayProgress] | None = None

    @property
    def baseline(self) -> DayProgress | None:
        """The in-memory baseline, or None if there is none for today."""
        if self._baseline is None:
            return None
        captured_on, baseline = self._baseline
        if captured_on != self._today():
            logger.info(f"Discarding stale baseline from {captured_on}")
            self._baseline = None
            self._last_progress = None
            return None
        return baseline

    def load_baseline(self) -> DayProgress | None:
        """Read the persisted baseline; None if missing, unreadable or stale."""
        try:
            record = self.store.read()
        except PersistenceError as e:
            logger.warning(f"Baseline unavailable, a new one will be captured: {e}")
            return None
        if record is None:
            return None

        captured_on, baseline = record
        if captured_on != self._today():
            logger.info(f"Ignoring baseline from {captured_on}")
            return None

        self._baseline = (captured_on, baseline)
        return baseline

    def capture_baseline(self, counts: DayCounts) -> DayProgress:
        """Freeze ``counts`` as today's morning baseline and persist it."""
        today = self._today()
        baseline = DayProgress(
            morning_unread=counts.unread,
            morning_open_tasks=counts.open_tasks,
            morning_events=counts.events_today,
        )
        self._baseline = (today, baseline)
        self._last_progress = (today, baseline)
        try:
            self.store.write(today, baseline)
        except PersistenceError as e:
            logger.warning(f"Baseline kept in memory only: {e}")
        logger.info(
            f"Captured baseline for {today}: {counts.unread} unread, "
            f"{counts.open_tasks} open tasks, {counts.events_today} events"
        )
        return baseline

    def compute_progress(self, baseline: DayProgress, counts: DayCounts) -> DayProgress:
        return compute_progress(baseline, counts)

    def update(self, counts: DayCounts) -> DayProgress:
        """Progress for ``counts`` against today's baseline.

        Cumulative fields never go backwards within a day: if counts rise
        again (new mail arrives, a task is reopened) the earlier high-water
        mark is kept.
        """
        baseline = self.baseline
        if baseline is None:
            raise ValueError("No baseline captured for today")

        progress = compute_progress(baseline, counts)
        today = self._today()
        if self._last_progress is not None and self._last_progress[0] == today:
            previous = self._last_progress[1]
            emails = max(progress.emails_processed, previous.emails_processed)
            tasks = max(progress.tasks_completed, previous.tasks_completed)
            events = max(progress.events_attended, previous.events_attended)
            progress = replace(
                progress,
                emails_processed=emails,
                tasks_completed=tasks,
                events_attended=events,
                overall_progress_percent=progress_percent(
                    baseline.morning_unread,
                    baseline.morning_open_tasks,
                    baseline.morning_events,
                    emails,
                    tasks,
                    events,
                ),
            )
        self._last_progress = (today, progress)
        return progress
