"""Streamed file download into the local store.

This module provides:
- FileDownloader: Streams a remote file to disk with atomic replacement
- snapshot_local_files: One-shot listing of the local store
- select_for_download: Decides which catalog entries to fetch
"""

from __future__ import annotations

import contextlib
import logging
import os
import tempfile
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from sheetsync.client.api import FileSystemError

if TYPE_CHECKING:
    from sheetsync.client.api import CatalogClient
    from sheetsync.client.credentials import Credential

logger = logging.getLogger(__name__)

# Prefix of temporary download files created in the store directory
TEMP_PREFIX = ".sheetsync-"


def validate_filename(filename: str) -> str:
    """Reject catalog names that would resolve outside the store directory.

    Raises:
        FileSystemError: If the name is empty, a dot entry or contains a
            path separator.
    """
    if filename in ("", ".", "..") or "/" in filename or "\\" in filename:
        raise FileSystemError(f"Refusing to write unsafe file name: {filename!r}")
    return filename


def snapshot_local_files(store_dir: Path) -> frozenset[str]:
    """List the file names present in the store directory.

    Raises:
        FileSystemError: If the directory cannot be read.
    """
    try:
        return frozenset(entry.name for entry in store_dir.iterdir() if entry.is_file())
    except OSError as e:
        raise FileSystemError(f"Cannot list {store_dir}: {e}") from e


def select_for_download(
    catalog: Iterable[str],
    local_files: frozenset[str],
    manifest_name: str,
) -> tuple[list[str], int]:
    """Pick the catalog entries to download.

    An entry is selected when it is missing locally. The manifest is always
    selected since it indexes every sheet and must stay current.

    Returns:
        Selected names in catalog order, and the number skipped.
    """
    selected: list[str] = []
    skipped = 0
    for filename in catalog:
        if filename not in local_files or filename == manifest_name:
            selected.append(filename)
        else:
            skipped += 1
    return selected, skipped


class FileDownloader:
    """Streams remote files into the store directory."""

    def __init__(self, client: CatalogClient, store_dir: Path) -> None:
        self._client = client
        self._store_dir = store_dir

    async def download_file(self, credential: Credential, filename: str) -> Path:
        """Download one file with atomic write.

        The body is streamed to a uniquely named temporary file in the store
        directory and renamed over the target on success. The temporary name
        is created exclusively, so it never overwrites a catalog file. On any
        failure, cancellation included, the temporary file is removed and the
        existing local copy is left untouched.

        Returns:
            Path of the written file.

        Raises:
            AuthExpiredError: If the token is rejected.
            TransferError: On network failure.
            FileSystemError: If the file cannot be written.
        """
        local_path = self._store_dir / validate_filename(filename)

        tmp_path: Path | None = None
        completed = False
        try:
            async with self._client.stream_download(credential, filename) as body:
                size = 0
                try:
                    fd, tmp_name = tempfile.mkstemp(dir=self._store_dir, prefix=TEMP_PREFIX)
                    tmp_path = Path(tmp_name)
                    with os.fdopen(fd, "wb") as f:
                        async for chunk in body:
                            f.write(chunk)
                            size += len(chunk)
                except OSError as e:
                    raise FileSystemError(f"Cannot write {filename} in {self._store_dir}: {e}") from e

            try:
                tmp_path.replace(local_path)
            except OSError as e:
                raise FileSystemError(f"Cannot replace {local_path}: {e}") from e
            completed = True
        finally:
            if not completed and tmp_path is not None:
                with contextlib.suppress(OSError):
                    tmp_path.unlink()

        logger.info(f"Downloaded {filename} ({size} bytes)")
        return local_path
