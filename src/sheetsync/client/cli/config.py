"""Configuration utilities for sheetsync CLI.

This module provides shared configuration functions used across CLI commands.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from sheetsync.client.credentials import get_app_data_dir
from sheetsync.core.config import (
    DEFAULT_MANIFEST_NAME,
    DEFAULT_TIMEOUT,
    SyncConfig,
    get_config_dir,
)

# Keys accepted in config.json
CONFIG_KEYS = ("store_dir", "manifest_name", "credential_path", "timeout")


def get_config_file() -> Path:
    """Get the path to the config file."""
    return get_config_dir() / "config.json"


def load_config() -> dict[str, Any]:
    """Load configuration from config file."""
    config_file = get_config_file()
    if config_file.exists():
        return dict(json.loads(config_file.read_text()))
    return {}


def save_config(config: dict[str, Any]) -> None:
    """Save configuration to config file."""
    config_file = get_config_file()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(json.dumps(config, indent=2))


def get_default_store_dir() -> Path:
    """Get the default sheet store directory."""
    return get_app_data_dir() / "SheetSync" / "data"


def build_sync_config(
    store_dir: Path | None = None,
    credential_path: Path | None = None,
) -> SyncConfig:
    """Combine config.json with command-line overrides.

    Args:
        store_dir: Store directory from the command line, if given.
        credential_path: Credential record from the command line, if given.

    Returns:
        Settings for the sync service.
    """
    config = load_config()
    if store_dir is None:
        store_dir = Path(config.get("store_dir") or get_default_store_dir())
    if credential_path is None and config.get("credential_path"):
        credential_path = Path(config["credential_path"])
    return SyncConfig(
        store_dir=store_dir,
        manifest_name=config.get("manifest_name") or DEFAULT_MANIFEST_NAME,
        timeout=float(config.get("timeout") or DEFAULT_TIMEOUT),
        credential_path=credential_path,
    )
