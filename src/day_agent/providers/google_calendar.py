"""Google Calendar as a CalendarProvider."""

from __future__ import annotations

import asyncio
import logging
from datetime import date, datetime, time, timedelta
from typing import Any

from day_agent.briefing.models import CalendarConfig, CalendarEvent
from day_agent.exceptions import ProviderError
from day_agent.providers.base import CalendarProvider

logger = logging.getLogger(__name__)


class GoogleCalendarProvider(CalendarProvider):
    """Reads the day's events from the Google Calendar API.

    Args:
        credentials: A google.oauth2.credentials.Credentials object.
        max_results: Upper bound on events fetched per calendar.
    """

    def __init__(self, credentials, max_results: int = 250):
        try:
            from googleapiclient.discovery import build
        except ImportError:
            raise ImportError(
                "google-api-python-client is required for GoogleCalendarProvider. "
                "Install with: pip install day-agent[google]"
            )
        self._service = build("calendar", "v3", credentials=credentials)
        self.max_results = max_results

    def list_events(
        self,
        calendar_id: str,
        time_min: str,
        time_max: str,
    ) -> list[CalendarEvent]:
        """List events of one calendar in a time range."""
        try:
            kwargs: dict[str, Any] = {
                "calendarId": calendar_id,
                "timeMin": time_min,
                "timeMax": time_max,
                "maxResults": self.max_results,
                "singleEvents": True,
                "orderBy": "startTime",
            }
            result = self._service.events().list(**kwargs).execute()
        except Exception as e:
            raise ProviderError(f"Failed to list events for {calendar_id}: {e}") from e

        events = []
        for event in result.get("items", []):
            if event.get("status") == "cancelled":
                continue
            start = event.get("start", {})
            end = event.get("end", {})
            events.append(
                CalendarEvent(
                    id=event.get("id"),
                    calendar_id=calendar_id,
                    summary=event.get("summary", "(No title)"),
                    start=start.get("dateTime", start.get("date")),
                    end=end.get("dateTime", end.get("date")),
                    location=event.get("location"),
                    all_day="dateTime" not in start,
                    attendees=[a.get("email") for a in event.get("attendees", [])],
                )
            )
        return events

    async def fetch_events(self, config: CalendarConfig, day: date) -> list[CalendarEvent]:
        start = datetime.combine(day, time.min).astimezone()
        end = start + timedelta(days=1)

        events: list[CalendarEvent] = []
        for calendar_id in config.calendar_ids:
            events.extend(
                await asyncio.to_thread(
                    self.list_events, calendar_id, start.isoformat(), end.isoformat()
                )
            )
        logger.debug(f"Fetched {len(events)} events for {day}")
        return events
