"""Google Tasks as a TaskProvider."""

from __future__ import annotations

import asyncio
import logging

from day_agent.briefing.models import CalendarConfig, Task
from day_agent.exceptions import ProviderError
from day_agent.providers.base import TaskProvider

logger = logging.getLogger(__name__)


class GoogleTasksProvider(TaskProvider):
    """Reads tasks from the Google Tasks API.

    Google Tasks has no priority field, so every task is reported without one.

    Args:
        credentials: A google.oauth2.credentials.Credentials object.
        tasklist_ids: Lists to read. ``None`` reads every list of the account.
    """

    def __init__(self, credentials, tasklist_ids: list[str] | None = None):
        try:
            from googleapiclient.discovery import build
        except ImportError:
            raise ImportError(
                "google-api-python-client is required for GoogleTasksProvider. "
                "Install with: pip install day-agent[google]"
            )
        self._service = build("tasks", "v1", credentials=credentials)
        self.tasklist_ids = tasklist_ids

    def list_tasklists(self) -> list[str]:
        try:
            result = self._service.tasklists().list(maxResults=100).execute()
        except Exception as e:
            raise ProviderError(f"Failed to list task lists: {e}") from e
        return [item["id"] for item in result.get("items", [])]

    def list_tasks(self, tasklist_id: str) -> list[Task]:
        """All tasks of one list, completed ones included."""
        tasks: list[Task] = []
        page_token = None
        try:
            while True:
                kwargs = {
                    "tasklist": tasklist_id,
                    "showCompleted": True,
                    "showHidden": True,
                    "maxResults": 100,
                }
                if page_token:
                    kwargs["pageToken"] = page_token
                result = self._service.tasks().list(**kwargs).execute()
                for item in result.get("items", []):
                    tasks.append(
                        Task(
                            id=item["id"],
                            calendar_id=tasklist_id,
                            summary=item.get("title", ""),
                            description=item.get("notes"),
                            due=item.get("due"),
                            completed=item.get("status") == "completed",
                            completed_at=item.get("completed"),
                        )
                    )
                page_token = result.get("nextPageToken")
                if not page_token:
                    break
        except Exception as e:
            raise ProviderError(f"Failed to list tasks for {tasklist_id}: {e}") from e
        return tasks

    def _collect(self) -> list[Task]:
        tasklist_ids = self.tasklist_ids or self.list_tasklists()
        tasks: list[Task] = []
        for tasklist_id in tasklist_ids:
            tasks.extend(self.list_tasks(tasklist_id))
        return tasks

    async def fetch_tasks(self, config: CalendarConfig) -> list[Task]:
        tasks = await asyncio.to_thread(self._collect)
        logger.debug(f"Fetched {len(tasks)} tasks")
        return tasks
