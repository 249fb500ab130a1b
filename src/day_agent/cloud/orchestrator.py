"""Serialized pull-then-push cloud sync behind a premium check."""

from __future__ import annotations

import logging

from day_agent.cloud.client import CloudBackend
from day_agent.cloud.models import CloudUser, SyncResult, SyncStatus
from day_agent.exceptions import CloudError, EntitlementError, SyncInProgressError, SyncStepError

logger = logging.getLogger(__name__)


class CloudSyncOrchestrator:
    """Runs one sync at a time: pull, then push, then a status refresh.

    Pull always completes before push starts so remote changes are merged
    locally before local state is uploaded. Nothing is retried and nothing
    is rolled back; a failed step leaves the last known ``SyncStatus`` in
    place and is reported as ``SyncStepError``.

    Args:
        backend: Remote sync operations.
        encryption_password: Passed through to pull and push.
    """

    def __init__(self, backend: CloudBackend, encryption_password: str | None = None):
        self.backend = backend
        self.encryption_password = encryption_password
        self._sync_status: SyncStatus | None = None
        self._last_error: str | None = None
        self._syncing = False

    @property
    def sync_status(self) -> SyncStatus | None:
        """Last status received from the server."""
        return self._sync_status

    @property
    def last_error(self) -> str | None:
        return self._last_error

    @property
    def is_syncing(self) -> bool:
        return self._syncing

    async def sync(self, user: CloudUser | None) -> SyncResult:
        """Pull, push and refresh the status.

        Raises:
            EntitlementError: ``user`` is missing or not premium. Nothing is sent.
            SyncInProgressError: another sync is still running.
            SyncStepError: pull, push or the closing status call failed.
        """
        if user is None or not user.is_premium:
            raise EntitlementError("Cloud sync requires a premium subscription")
        if self._syncing:
            raise SyncInProgressError("A sync is already in progress")

        self._syncing = True
        self._last_error = None
        try:
            result = await self._sync()
        except SyncStepError as e:
            self._last_error = str(e)
            logger.warning(f"Sync failed during {e.step}: {e}")
            raise
        finally:
            self._syncing = False

        logger.info(f"Sync completed for {user.email}")
        return result

    async def _sync(self) -> SyncResult:
        try:
            await self.backend.pull(self.encryption_password)
        except CloudError as e:
            raise SyncStepError("pull", f"Pull failed: {e}") from e

        try:
            result = await self.backend.push(self.encryption_password)
        except CloudError as e:
            raise SyncStepError("push", f"Push failed: {e}") from e
        if not result.success:
            raise SyncStepError("push", f"Push rejected: {result.error or 'unknown error'}")
        if result.conflicts:
            logger.info(f"Push resolved {len(result.conflicts)} conflict(s)")

        try:
            self._sync_status = await self.backend.status()
        except CloudError as e:
            raise SyncStepError("status", f"Status refresh failed: {e}") from e
        return result

    async def status(self) -> SyncStatus | None:
        """Ask the server for the sync status.

        Does not need a premium user. If the server cannot be reached the
        last known status is returned.
        """
        try:
            self._sync_status = await self.backend.status()
        except CloudError as e:
            logger.warning(f"Failed to load sync status: {e}")
        return self._sync_status

    async def logout(self) -> None:
        """End the session. A sync in flight is left to fail on its own."""
        await self.backend.logout()
        self._sync_status = None
        logger.info("Logged out of cloud sync")
