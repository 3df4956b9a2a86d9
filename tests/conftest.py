"""Shared fixtures for sheetsync tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from sheetsync.client.credentials import Credential, CredentialStore

BACKEND_URL = "http://test"

CREDENTIAL_RECORD = {
    "token": "token123",
    "userId": "user1",
    "backendUrl": BACKEND_URL,
    "machineId": "machine1",
    "userAgent": "SheetSync/1.0",
}


def write_record(path: Path, record: Any) -> Path:
    """Write a credential record as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(record), encoding="utf-8")
    return path


@pytest.fixture
def credential() -> Credential:
    """A complete credential pointing at the mock server."""
    return Credential(
        token="token123",
        user_id="user1",
        backend_url=BACKEND_URL,
        machine_id="machine1",
        user_agent="SheetSync/1.0",
    )


@pytest.fixture
def credential_path(tmp_path: Path) -> Path:
    """A valid credential record on disk."""
    return write_record(tmp_path / "SkyPianoHub" / "bridge.json", CREDENTIAL_RECORD)


@pytest.fixture
def credential_store(credential_path: Path) -> CredentialStore:
    """Store reading the valid record."""
    return CredentialStore(credential_path)


@pytest.fixture
def store_dir(tmp_path: Path) -> Path:
    """Empty local sheet store."""
    path = tmp_path / "data"
    path.mkdir()
    return path
