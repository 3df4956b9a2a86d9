"""Sync operations for the sheet store.

Components:
- **AuthRefreshPolicy**: One refresh-and-retry per remote call
- **FileDownloader**: Streamed, atomic download into the store
- **FileUploader**: Explicit single-file upload
- **SheetSyncService**: Sync pass, upload and status entry points

All public symbols are re-exported here.
"""

from sheetsync.client.sync.download import (
    TEMP_PREFIX,
    FileDownloader,
    select_for_download,
    snapshot_local_files,
    validate_filename,
)
from sheetsync.client.sync.engine import SheetSyncService
from sheetsync.client.sync.retry import AuthRefreshPolicy
from sheetsync.client.sync.types import (
    AUTH_REQUIRED_MESSAGE,
    TOKEN_EXPIRED_MESSAGE,
    StatusReport,
    SyncResult,
    UploadResult,
)
from sheetsync.client.sync.upload import FileUploader

__all__ = [
    # Download
    "TEMP_PREFIX",
    "FileDownloader",
    "select_for_download",
    "snapshot_local_files",
    "validate_filename",
    # Engine
    "SheetSyncService",
    # Retry
    "AuthRefreshPolicy",
    # Types
    "AUTH_REQUIRED_MESSAGE",
    "TOKEN_EXPIRED_MESSAGE",
    "StatusReport",
    "SyncResult",
    "UploadResult",
    # Upload
    "FileUploader",
]
