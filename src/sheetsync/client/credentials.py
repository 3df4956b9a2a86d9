"""Credential record access for sheetsync.

The companion app writes a small JSON record (the "bridge" file) after the
user logs in. This module reads it and never writes it.

This module provides:
- Credential: Immutable token + identity bundle
- CredentialStore: Reads and validates the record from a fixed location
"""

from __future__ import annotations

import json
import logging
import os
import platform
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CREDENTIAL_APP_NAME = "SkyPianoHub"
CREDENTIAL_FILE_NAME = "bridge.json"

# On-disk key -> Credential attribute
_RECORD_FIELDS = {
    "token": "token",
    "userId": "user_id",
    "backendUrl": "backend_url",
    "machineId": "machine_id",
    "userAgent": "user_agent",
}


@dataclass(frozen=True)
class Credential:
    """Bearer token plus the identity fields sent with every remote call."""

    token: str
    user_id: str
    backend_url: str
    machine_id: str
    user_agent: str

    def with_token(self, token: str) -> Credential:
        """Return a copy carrying a refreshed token."""
        return replace(self, token=token)

    @classmethod
    def from_record(cls, data: Any) -> Credential | None:
        """Build a credential from a decoded record.

        Returns:
            The credential, or None if any field is missing or empty.
        """
        if not isinstance(data, dict):
            return None
        values: dict[str, str] = {}
        for key, attr in _RECORD_FIELDS.items():
            value = data.get(key)
            if not isinstance(value, str) or not value:
                return None
            values[attr] = value
        return cls(**values)


def get_app_data_dir() -> Path:
    """Get the per-user application data directory for this platform."""
    system = platform.system()
    if system == "Windows":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata)
        return Path.home() / "AppData" / "Roaming"
    if system == "Darwin":
        return Path.home() / "Library" / "Application Support"
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg)
    return Path.home() / ".config"


def get_default_credential_path() -> Path:
    """Get the fixed location of the credential record."""
    return get_app_data_dir() / CREDENTIAL_APP_NAME / CREDENTIAL_FILE_NAME


class CredentialStore:
    """Read-only view over the credential record."""

    def __init__(self, path: Path | None = None) -> None:
        """Initialize the store.

        Args:
            path: Record location. Defaults to the companion app's bridge file.
        """
        self._path = path if path is not None else get_default_credential_path()

    @property
    def path(self) -> Path:
        """Location of the credential record."""
        return self._path

    def has_credential_record(self) -> bool:
        """Check whether a record exists, regardless of its validity.

        A record that cannot even be checked (permission denied) is
        reported as present, so it reads as expired rather than missing.
        """
        try:
            return self._path.exists()
        except OSError as e:
            logger.warning(f"Cannot check credential record {self._path}: {e}")
            return True

    def get_credential(self) -> Credential | None:
        """Load the credential.

        Returns:
            The credential, or None if the record is absent, unreadable,
            not valid JSON or missing a field.
        """
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Failed to read credential record {self._path}: {e}")
            return None

        credential = Credential.from_record(data)
        if credential is None:
            logger.warning(f"Credential record {self._path} is incomplete")
        return credential
