"""Data models for cloud sync."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass
class CloudUser:
    id: int
    email: str
    is_premium: bool = False
    name: str | None = None
    premium_until: str | None = None
    created_at: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> CloudUser:
        return cls(
            id=int(data["id"]),
            email=data["email"],
            is_premium=bool(data.get("is_premium", False)),
            name=data.get("name"),
            premium_until=data.get("premium_until"),
            created_at=data.get("created_at", ""),
        )


@dataclass(frozen=True)
class SyncStatus:
    last_sync: str | None = None  # ISO 8601
    device_count: int = 0

    @classmethod
    def from_dict(cls, data: dict) -> SyncStatus:
        return cls(
            last_sync=data.get("last_sync"),
            device_count=int(data.get("device_count", 0)),
        )


@dataclass
class SyncConflict:
    data_type: str
    local_timestamp: str
    server_timestamp: str
    resolution: str  # "local" | "remote"

    @classmethod
    def from_dict(cls, data: dict) -> SyncConflict:
        return cls(
            data_type=data.get("data_type", ""),
            local_timestamp=data.get("local_timestamp", ""),
            server_timestamp=data.get("server_timestamp", ""),
            resolution=data.get("resolution", ""),
        )


@dataclass
class SyncResult:
    success: bool
    server_timestamp: str | None = None
    conflicts: list[SyncConflict] = field(default_factory=list)
    error: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> SyncResult:
        return cls(
            success=bool(data.get("success", False)),
            server_timestamp=data.get("server_timestamp"),
            conflicts=[SyncConflict.from_dict(c) for c in data.get("conflicts", [])],
            error=data.get("error"),
        )


@dataclass
class SyncData:
    """Sync payload. Section contents are opaque to this package."""

    accounts: Any = None
    ai_config: Any = None
    categories: Any = None
    client_timestamp: str | None = None
    last_modified: str | None = None

    def to_dict(self) -> dict:
        return {
            "accounts": self.accounts,
            "ai_config": self.ai_config,
            "categories": self.categories,
            "client_timestamp": self.client_timestamp,
            "last_modified": self.last_modified,
        }

    @classmethod
    def from_dict(cls, data: dict) -> SyncData:
        return cls(
            accounts=data.get("accounts"),
            ai_config=data.get("ai_config"),
            categories=data.get("categories"),
            client_timestamp=data.get("client_timestamp"),
            last_modified=data.get("last_modified"),
        )
