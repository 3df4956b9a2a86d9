"""Tests for streamed downloads and download selection."""

from pathlib import Path

import httpx
import pytest

from sheetsync.client.api import (
    AuthExpiredError,
    CatalogClient,
    FileSystemError,
    TransferError,
)
from sheetsync.client.credentials import Credential
from sheetsync.client.sync.download import (
    FileDownloader,
    select_for_download,
    snapshot_local_files,
    validate_filename,
)


class TestSelectForDownload:
    """Tests for select_for_download."""

    def test_empty_catalog(self) -> None:
        """Nothing to select from an empty catalog."""
        assert select_for_download([], frozenset({"a.json"}), "listSheet.json") == ([], 0)

    def test_manifest_always_selected(self) -> None:
        """Present manifest is re-fetched, other present files skipped."""
        selected, skipped = select_for_download(
            ["a.json", "manifest.json"], frozenset({"a.json"}), "manifest.json"
        )

        assert selected == ["manifest.json"]
        assert skipped == 1

    def test_present_manifest_is_selected(self) -> None:
        """Manifest should be selected even when already local."""
        selected, skipped = select_for_download(
            ["listSheet.json"], frozenset({"listSheet.json"}), "listSheet.json"
        )

        assert selected == ["listSheet.json"]
        assert skipped == 0

    def test_keeps_catalog_order(self) -> None:
        """Selected names should follow the catalog order."""
        selected, skipped = select_for_download(
            ["c.json", "a.json", "b.json", "d.json"],
            frozenset({"b.json"}),
            "listSheet.json",
        )

        assert selected == ["c.json", "a.json", "d.json"]
        assert skipped == 1


class TestSnapshotLocalFiles:
    """Tests for snapshot_local_files."""

    def test_lists_regular_files(self, store_dir: Path) -> None:
        """Should list every file name and ignore directories."""
        (store_dir / "a.json").write_text("{}")
        (store_dir / "b.json.part").write_text("{")
        (store_dir / "sub").mkdir()

        assert snapshot_local_files(store_dir) == frozenset({"a.json", "b.json.part"})

    def test_missing_directory(self, tmp_path: Path) -> None:
        """Unreadable directory should raise FileSystemError."""
        with pytest.raises(FileSystemError):
            snapshot_local_files(tmp_path / "missing")


class TestValidateFilename:
    """Tests for validate_filename."""

    @pytest.mark.parametrize("name", ["", ".", "..", "../x.json", "a/b.json", "a\\b.json"])
    def test_rejects_unsafe_names(self, name: str) -> None:
        """Names that leave the store directory should be rejected."""
        with pytest.raises(FileSystemError):
            validate_filename(name)

    def test_accepts_plain_name(self) -> None:
        """Plain file names pass through."""
        assert validate_filename("Song (v2).json") == "Song (v2).json"


class TestFileDownloader:
    """Tests for FileDownloader."""

    @pytest.mark.asyncio
    async def test_download_writes_file(self, httpx_mock, credential: Credential, store_dir: Path) -> None:  # type: ignore[no-untyped-def]
        """Should write the body and leave no partial file."""
        httpx_mock.add_response(
            url="http://test/download/user1/a.json", content=b'{"title": "A"}'
        )

        async with CatalogClient() as client:
            path = await FileDownloader(client, store_dir).download_file(credential, "a.json")

        assert path == store_dir / "a.json"
        assert path.read_bytes() == b'{"title": "A"}'
        assert list(store_dir.iterdir()) == [store_dir / "a.json"]

    @pytest.mark.asyncio
    async def test_download_replaces_existing(self, httpx_mock, credential: Credential, store_dir: Path) -> None:  # type: ignore[no-untyped-def]
        """Should overwrite an existing local copy."""
        (store_dir / "listSheet.json").write_text("[]")
        httpx_mock.add_response(
            url="http://test/download/user1/listSheet.json", content=b'[{"name": "A"}]'
        )

        async with CatalogClient() as client:
            await FileDownloader(client, store_dir).download_file(credential, "listSheet.json")

        assert (store_dir / "listSheet.json").read_bytes() == b'[{"name": "A"}]'

    @pytest.mark.asyncio
    async def test_failed_download_keeps_existing(self, httpx_mock, credential: Credential, store_dir: Path) -> None:  # type: ignore[no-untyped-def]
        """A failed transfer should leave the old copy and no partial file."""
        (store_dir / "listSheet.json").write_text("[]")
        httpx_mock.add_exception(
            httpx.ReadError("connection reset"),
            url="http://test/download/user1/listSheet.json",
        )

        async with CatalogClient() as client:
            with pytest.raises(TransferError):
                await FileDownloader(client, store_dir).download_file(
                    credential, "listSheet.json"
                )

        assert (store_dir / "listSheet.json").read_text() == "[]"
        assert list(store_dir.iterdir()) == [store_dir / "listSheet.json"]

    @pytest.mark.asyncio
    async def test_auth_failure_writes_nothing(self, httpx_mock, credential: Credential, store_dir: Path) -> None:  # type: ignore[no-untyped-def]
        """Expired token should raise before any file is created."""
        httpx_mock.add_response(url="http://test/download/user1/a.json", status_code=401)

        async with CatalogClient() as client:
            with pytest.raises(AuthExpiredError):
                await FileDownloader(client, store_dir).download_file(credential, "a.json")

        assert list(store_dir.iterdir()) == []

    @pytest.mark.asyncio
    async def test_unsafe_name_not_requested(self, credential: Credential, store_dir: Path) -> None:
        """Unsafe names should fail without a network call."""
        async with CatalogClient() as client:
            with pytest.raises(FileSystemError):
                await FileDownloader(client, store_dir).download_file(credential, "../evil.json")
