"""Core module - Shared configuration and types."""

from sheetsync.core.config import (
    DEFAULT_MANIFEST_NAME,
    DEFAULT_TIMEOUT,
    SyncConfig,
    get_config_dir,
    get_fallback_store_dir,
)
from sheetsync.core.types import SyncStatus

__all__ = [
    # Config
    "DEFAULT_MANIFEST_NAME",
    "DEFAULT_TIMEOUT",
    "SyncConfig",
    "get_config_dir",
    "get_fallback_store_dir",
    # Types
    "SyncStatus",
]
