"""Shared configuration classes for sheetsync.

This module defines the settings used by the sync service and the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

DEFAULT_MANIFEST_NAME = "listSheet.json"
DEFAULT_TIMEOUT = 30.0


@dataclass
class SyncConfig:
    """Settings for one sync service instance.

    Attributes:
        store_dir: Directory holding the local sheet files.
        manifest_name: Catalog manifest file, re-fetched on every pass.
        timeout: HTTP request timeout in seconds.
        credential_path: Override for the credential record location
            (None means the fixed default location).
    """

    store_dir: Path
    manifest_name: str = DEFAULT_MANIFEST_NAME
    timeout: float = DEFAULT_TIMEOUT
    credential_path: Path | None = None

    def __post_init__(self) -> None:
        """Normalize paths."""
        self.store_dir = Path(self.store_dir).expanduser()
        if self.credential_path is not None:
            self.credential_path = Path(self.credential_path).expanduser()
        if not self.manifest_name:
            self.manifest_name = DEFAULT_MANIFEST_NAME


def get_config_dir() -> Path:
    """Get the configuration directory for sheetsync.

    Returns:
        Path to ~/.sheetsync.
    """
    return Path.home() / ".sheetsync"


def get_fallback_store_dir() -> Path:
    """Store directory used when the configured one cannot be created."""
    return get_config_dir() / "data"
