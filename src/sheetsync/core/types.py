"""Shared types for sheetsync."""

from __future__ import annotations

from enum import Enum


class SyncStatus(str, Enum):
    """Readiness of the sync service, derived from the credential record.

    Never stored; recomputed on each status query.
    """

    READY = "ready"
    EXPIRED = "expired"
    MISSING = "missing"
