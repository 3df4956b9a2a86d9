"""Single-file upload to the remote store.

This module provides:
- FileUploader: Pushes one local file through the refresh policy
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from sheetsync.client.api import FileSystemError

if TYPE_CHECKING:
    from sheetsync.client.sync.retry import AuthRefreshPolicy

logger = logging.getLogger(__name__)


class FileUploader:
    """Uploads local sheet files.

    Uploads are always explicit; nothing in a sync pass calls this.
    """

    def __init__(self, policy: AuthRefreshPolicy) -> None:
        self._policy = policy

    async def upload_file(self, file_path: Path) -> None:
        """Upload a file, refreshing the token once if it has expired.

        The file is reopened for the retry, so the second attempt sends
        the whole content again.

        Raises:
            FileSystemError: If the path is not a readable file.
            AuthExpiredError: If the token is rejected after the refresh.
            TransferError: On network failure.
        """
        if not file_path.is_file():
            raise FileSystemError(f"File not found: {file_path}")

        logger.info(f"Uploading {file_path.name}")
        client = self._policy.client
        await self._policy.call(
            lambda credential: client.stream_upload(credential, file_path),
            f"upload of {file_path.name}",
        )
        logger.info(f"Uploaded {file_path.name}")
