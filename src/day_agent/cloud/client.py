"""Cloud sync backend contract and its HTTP implementation."""

from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime, timezone

from day_agent.cloud.models import SyncData, SyncResult, SyncStatus
from day_agent.exceptions import CloudError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = os.environ.get("DAY_AGENT_CLOUD_URL", "https://api.mailclient.app")


class CloudBackend(ABC):
    """The four remote operations sync is built from."""

    @abstractmethod
    async def pull(self, encryption_password: str | None = None) -> SyncData:
        """Download remote data and apply it locally."""
        ...

    @abstractmethod
    async def push(self, encryption_password: str | None = None) -> SyncResult:
        """Upload local data."""
        ...

    @abstractmethod
    async def status(self) -> SyncStatus:
        ...

    @abstractmethod
    async def logout(self) -> None:
        """Invalidate the local session."""
        ...


class SyncPayloadStore(ABC):
    """Local side of the payload: what gets pushed and where pulled data goes.

    Encrypting sensitive sections with ``encryption_password`` is up to the
    implementation.
    """

    @abstractmethod
    def collect(self, encryption_password: str | None) -> SyncData:
        ...

    @abstractmethod
    def apply(self, data: SyncData, encryption_password: str | None) -> None:
        ...


class HttpCloudBackend(CloudBackend):
    """Bearer-token client for the cloud sync API.

    Args:
        store: Local payload source and sink.
        token: Session token from a previous login.
        base_url: API root. Defaults to ``$DAY_AGENT_CLOUD_URL``.
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport, mainly for tests.
    """

    def __init__(
        self,
        store: SyncPayloadStore,
        token: str | None = None,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport=None,
    ):
        try:
            import httpx  # noqa: F401
        except ImportError:
            raise ImportError(
                "httpx is required for HttpCloudBackend. "
                "Install with: pip install day-agent[http]"
            )
        self.store = store
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        import httpx

        token = self.token
        if not token:
            raise CloudError("Not logged in")

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    path,
                    headers={"Authorization": f"Bearer {token}"},
                    **kwargs,
                )
                if response.status_code == 401:
                    raise CloudError("Session expired. Please login again.")
                response.raise_for_status()
                return response.json()
        except httpx.HTTPError as e:
            raise CloudError(f"Network error: {e}") from e
        except ValueError as e:
            raise CloudError(f"Parse error: {e}") from e

    @staticmethod
    def _parse(model, data):
        try:
            return model.from_dict(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise CloudError(f"Parse error: unexpected {model.__name__} payload: {e}") from e

    async def pull(self, encryption_password: str | None = None) -> SyncData:
        data = self._parse(SyncData, await self._request("GET", "/api/sync/pull"))
        try:
            self.store.apply(data, encryption_password)
        except Exception as e:
            raise CloudError(f"Failed to apply pulled data: {e}") from e
        return data

    async def push(self, encryption_password: str | None = None) -> SyncResult:
        try:
            payload = self.store.collect(encryption_password)
        except Exception as e:
            raise CloudError(f"Failed to collect local data: {e}") from e
        payload.client_timestamp = datetime.now(timezone.utc).isoformat()
        result = await self._request("POST", "/api/sync/push", json=payload.to_dict())
        return self._parse(SyncResult, result)

    async def status(self) -> SyncStatus:
        return self._parse(SyncStatus, await self._request("GET", "/api/sync/status"))

    async def logout(self) -> None:
        """Drop the local session; telling the server is best effort."""
        token, self.token = self.token, None
        if not token:
            return

        import httpx

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self._transport,
            ) as client:
                await client.post(
                    "/api/auth/logout", headers={"Authorization": f"Bearer {token}"}
                )
        except httpx.HTTPError as e:
            logger.warning(f"Server-side logout failed, local session cleared anyway: {e}")
