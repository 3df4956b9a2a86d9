"""Sync service: catalog reconciliation, upload and status.

Architecture:
    CredentialStore → AuthRefreshPolicy(CatalogClient) → FileDownloader

A pass lists the remote catalog, snapshots the local store once, and
downloads the missing files plus the manifest one at a time. Per-file
failures are recorded and the pass carries on.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sheetsync.client.api import (
    AuthExpiredError,
    CatalogClient,
    FileSystemError,
    SyncError,
)
from sheetsync.client.credentials import CredentialStore
from sheetsync.client.sync.download import (
    FileDownloader,
    select_for_download,
    snapshot_local_files,
)
from sheetsync.client.sync.retry import AuthRefreshPolicy
from sheetsync.client.sync.types import (
    AUTH_REQUIRED_MESSAGE,
    TOKEN_EXPIRED_MESSAGE,
    StatusReport,
    SyncResult,
    UploadResult,
)
from sheetsync.client.sync.upload import FileUploader
from sheetsync.core.config import SyncConfig, get_fallback_store_dir
from sheetsync.core.types import SyncStatus

logger = logging.getLogger(__name__)


class SheetSyncService:
    """Keeps the local sheet store in step with the remote catalog.

    The credential is read at the start of every operation and never
    cached. Callers run at most one sync or upload at a time.
    """

    def __init__(
        self,
        config: SyncConfig,
        credential_store: CredentialStore | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            config: Store location, manifest name and timeout.
            credential_store: Credential source (default location if None).
        """
        self._config = config
        self._credentials = credential_store or CredentialStore(config.credential_path)
        self._store_dir: Path | None = None

    @property
    def store_dir(self) -> Path:
        """Local store directory, created on first access."""
        if self._store_dir is None:
            self._store_dir = self._ensure_store_dir()
        return self._store_dir

    def _ensure_store_dir(self) -> Path:
        preferred = self._config.store_dir
        try:
            preferred.mkdir(parents=True, exist_ok=True)
            return preferred
        except OSError as e:
            fallback = get_fallback_store_dir()
            logger.warning(f"Cannot create {preferred} ({e}), using {fallback}")
        try:
            fallback.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileSystemError(f"Cannot create store directory {fallback}: {e}") from e
        return fallback

    # === Sync ===

    async def sync_sheets(self) -> SyncResult:
        """Run one sync pass.

        Returns:
            SyncResult; never raises for remote or filesystem failures.
        """
        credential = self._credentials.get_credential()
        if credential is None:
            logger.warning("No credential available, sync skipped")
            return SyncResult(success=False, error=AUTH_REQUIRED_MESSAGE)

        async with CatalogClient(timeout=self._config.timeout) as client:
            policy = AuthRefreshPolicy(client, credential)

            try:
                catalog = await policy.call(client.list_catalog, "catalog listing")
            except AuthExpiredError as e:
                logger.error(f"Sync failed: {e}")
                return SyncResult(success=False, error=TOKEN_EXPIRED_MESSAGE)
            except SyncError as e:
                logger.error(f"Sync failed: {e}")
                return SyncResult(success=False, error=str(e))

            try:
                store_dir = self.store_dir
                local_files = snapshot_local_files(store_dir)
            except FileSystemError as e:
                logger.error(f"Sync failed: {e}")
                return SyncResult(success=False, error=str(e))

            selected, skipped = select_for_download(
                catalog, local_files, self._config.manifest_name
            )
            logger.info(
                f"Catalog has {len(catalog)} files: "
                f"{len(selected)} to download, {skipped} already present"
            )

            downloader = FileDownloader(client, store_dir)
            downloaded = 0
            failed: list[str] = []
            for filename in selected:
                logger.info(f"Downloading {filename}...")
                try:
                    await policy.call(
                        lambda cred, name=filename: downloader.download_file(cred, name),
                        f"download of {filename}",
                    )
                except SyncError as e:
                    logger.warning(f"Failed to download {filename}: {e}")
                    failed.append(filename)
                    continue
                downloaded += 1

        logger.info(
            f"Sync complete: {downloaded} downloaded, {skipped} skipped, "
            f"{len(failed)} failed"
        )
        return SyncResult(
            success=True,
            downloaded=downloaded,
            skipped=skipped,
            total_cloud=len(catalog),
            failed=failed,
        )

    # === Upload ===

    async def upload_sheet(self, file_path: Path | str) -> UploadResult:
        """Upload one local sheet file.

        Returns:
            UploadResult; any failure ends the call with success=False.
        """
        credential = self._credentials.get_credential()
        if credential is None:
            logger.warning("No credential available, upload skipped")
            return UploadResult(success=False, error=AUTH_REQUIRED_MESSAGE)

        async with CatalogClient(timeout=self._config.timeout) as client:
            uploader = FileUploader(AuthRefreshPolicy(client, credential))
            try:
                await uploader.upload_file(Path(file_path))
            except AuthExpiredError as e:
                logger.error(f"Upload failed: {e}")
                return UploadResult(success=False, error=TOKEN_EXPIRED_MESSAGE)
            except SyncError as e:
                logger.error(f"Upload failed: {e}")
                return UploadResult(success=False, error=str(e))
        return UploadResult(success=True)

    # === Status ===

    def get_sync_status(self) -> StatusReport:
        """Report readiness from the credential record alone (no network)."""
        if not self._credentials.has_credential_record():
            return StatusReport.for_status(SyncStatus.MISSING)
        if self._credentials.get_credential() is None:
            return StatusReport.for_status(SyncStatus.EXPIRED)
        return StatusReport.for_status(SyncStatus.READY)
