"""DayBackend served by a remote day-agent service over HTTP."""

from __future__ import annotations

import logging
import os

from day_agent.briefing.backend import DayBackend
from day_agent.briefing.models import CalendarConfig, DayProgress, DayState
from day_agent.exceptions import ProviderError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = os.environ.get("DAY_AGENT_API_URL", "http://127.0.0.1:8765")


class HttpDayBackend(DayBackend):
    """Calls ``/api/day/briefing`` and ``/api/day/refresh`` on a remote service.

    Args:
        base_url: Service root. Defaults to ``$DAY_AGENT_API_URL``.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport, mainly for tests.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport=None,
    ):
        try:
            import httpx  # noqa: F401
        except ImportError:
            raise ImportError(
                "httpx is required for HttpDayBackend. "
                "Install with: pip install day-agent[http]"
            )
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _post(self, path: str, payload: dict) -> DayState:
        import httpx

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.post(path, json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPError as e:
            raise ProviderError(f"Day service request to {path} failed: {e}") from e
        except ValueError as e:
            raise ProviderError(f"Day service returned invalid JSON for {path}: {e}") from e

        try:
            return DayState.from_dict(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise ProviderError(f"Day service returned a malformed day state: {e}") from e

    async def get_day_briefing(
        self,
        account_id: str,
        calendar_config: CalendarConfig | None,
    ) -> DayState:
        return await self._post(
            "/api/day/briefing",
            {
                "accountId": account_id,
                "calendarConfig": calendar_config.to_dict() if calendar_config else None,
            },
        )

    async def refresh_day_state(
        self,
        account_id: str,
        calendar_config: CalendarConfig | None,
        baseline: DayProgress,
    ) -> DayState:
        return await self._post(
            "/api/day/refresh",
            {
                "accountId": account_id,
                "calendarConfig": calendar_config.to_dict() if calendar_config else None,
                "morningBaseline": baseline.to_dict(),
            },
        )
