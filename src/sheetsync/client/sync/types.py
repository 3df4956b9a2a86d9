"""Shared types and dataclasses for sync operations.

This module provides:
- SyncResult: Outcome of one sync pass
- UploadResult: Outcome of a single upload
- StatusReport: Sync readiness with a user-facing message
- Operation: Type alias for remote calls wrapped by the refresh policy
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

from sheetsync.core.types import SyncStatus

if TYPE_CHECKING:
    from sheetsync.client.credentials import Credential

T = TypeVar("T")

AUTH_REQUIRED_MESSAGE = "Auth required"
TOKEN_EXPIRED_MESSAGE = "Token expired"

STATUS_MESSAGES = {
    SyncStatus.READY: "Ready to sync.",
    SyncStatus.EXPIRED: "Session expired. Log in with the companion app again.",
    SyncStatus.MISSING: "Credential not found. Log in with the companion app first.",
}


@dataclass
class SyncResult:
    """Result of a sync pass.

    Attributes:
        success: False when the pass was aborted before the transfer phase.
        downloaded: Files written during this pass.
        skipped: Catalog entries already present locally.
        total_cloud: Size of the remote catalog.
        error: Reason the pass was aborted.
        failed: Selected files whose download failed, in catalog order.
    """

    success: bool
    downloaded: int = 0
    skipped: int = 0
    total_cloud: int = 0
    error: str | None = None
    failed: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape reported to callers."""
        data: dict[str, Any] = {"success": self.success}
        if self.success:
            data.update(
                downloaded=self.downloaded,
                skipped=self.skipped,
                totalCloud=self.total_cloud,
            )
            if self.failed:
                data["failed"] = list(self.failed)
        else:
            data["error"] = self.error
        return data


@dataclass
class UploadResult:
    """Result of a single file upload."""

    success: bool
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the JSON shape reported to callers."""
        if self.success:
            return {"success": True}
        return {"success": False, "error": self.error}


@dataclass
class StatusReport:
    """Sync readiness plus a message for display."""

    status: SyncStatus
    message: str

    @classmethod
    def for_status(cls, status: SyncStatus) -> StatusReport:
        """Build the report for a status with its standard message."""
        return cls(status=status, message=STATUS_MESSAGES[status])

    def to_dict(self) -> dict[str, str]:
        """Convert to the JSON shape reported to callers."""
        return {"status": self.status.value, "message": self.message}


# Remote call taking the credential to use for this attempt
Operation = Callable[["Credential"], Awaitable[T]]
