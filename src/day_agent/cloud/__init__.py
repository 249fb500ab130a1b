"""Cloud sync orchestration (premium feature)."""

from day_agent.cloud.client import CloudBackend, HttpCloudBackend, SyncPayloadStore
from day_agent.cloud.models import CloudUser, SyncConflict, SyncData, SyncResult, SyncStatus
from day_agent.cloud.orchestrator import CloudSyncOrchestrator

__all__ = [
    "CloudBackend",
    "CloudSyncOrchestrator",
    "CloudUser",
    "HttpCloudBackend",
    "SyncConflict",
    "SyncData",
    "SyncPayloadStore",
    "SyncResult",
    "SyncStatus",
]
