"""HTTP client for the sheet catalog server.

This module provides:
- SyncError and subclasses: Failure classes shared by the whole client
- RequestConfig / request_config: Per-credential request settings
- CatalogClient: Async HTTP client for list, refresh, download and upload
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any
from urllib.parse import quote

import httpx

from sheetsync.core.config import DEFAULT_TIMEOUT

if TYPE_CHECKING:
    from sheetsync.client.credentials import Credential

logger = logging.getLogger(__name__)

# Statuses the server uses to reject a token
AUTH_FAILURE_STATUSES = frozenset({401, 403})


class SyncError(Exception):
    """Base exception for sync errors."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthMissingError(SyncError):
    """No usable credential record."""


class AuthExpiredError(SyncError):
    """The server rejected the bearer token."""


class TransferError(SyncError):
    """Network or protocol failure unrelated to authentication."""


class FileSystemError(SyncError):
    """Local file could not be read or written."""


@dataclass(frozen=True)
class RequestConfig:
    """Base URL and headers derived from one credential."""

    base_url: str
    headers: dict[str, str]


def request_config(credential: Credential, bearer: bool = True) -> RequestConfig:
    """Derive request settings from a credential.

    A refreshed token yields a new credential and therefore a new config;
    nothing is cached between calls.

    Args:
        credential: Token and identity fields.
        bearer: Whether to send the Authorization header.

    Returns:
        Request configuration for the credential.
    """
    headers = {
        "X-User-Id": credential.user_id,
        "X-Machine-Id": credential.machine_id,
        "User-Agent": credential.user_agent,
    }
    if bearer:
        headers["Authorization"] = f"Bearer {credential.token}"
    return RequestConfig(base_url=credential.backend_url.rstrip("/"), headers=headers)


def _segment(value: str) -> str:
    return quote(value, safe="")


class CatalogClient:
    """Async HTTP client for the sheet catalog server.

    The client holds a connection pool only. Every call takes the credential
    to use, so a token refresh never mutates shared state.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            timeout: Request timeout in seconds.
            transport: Optional transport override.
        """
        self._client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> CatalogClient:
        """Async context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Async context manager exit."""
        await self.aclose()

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        """Raise the matching SyncError for a failed response."""
        if response.status_code in AUTH_FAILURE_STATUSES:
            raise AuthExpiredError("Invalid or expired token", response.status_code)
        if response.status_code >= 400:
            raise TransferError(
                f"Server returned HTTP {response.status_code}", response.status_code
            )
        return response

    def _json(self, response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise TransferError(f"Malformed response from {response.url}") from e
        if not isinstance(data, dict):
            raise TransferError(f"Unexpected response from {response.url}: {data!r}")
        return data

    async def _get(self, config: RequestConfig, path: str) -> httpx.Response:
        url = f"{config.base_url}{path}"
        logger.debug(f"GET {url}")
        try:
            response = await self._client.get(url, headers=config.headers)
        except httpx.HTTPError as e:
            raise TransferError(f"Request to {url} failed: {e}") from e
        return self._handle_response(response)

    # === Catalog operations ===

    async def list_catalog(self, credential: Credential) -> list[str]:
        """List the file names available to the credential's user.

        Returns:
            Catalog entries in server order.

        Raises:
            AuthExpiredError: If the token is rejected.
            TransferError: On network failure or malformed response.
        """
        response = await self._get(
            request_config(credential), f"/list/{_segment(credential.user_id)}"
        )
        files = self._json(response).get("files") or []
        if not isinstance(files, list) or not all(isinstance(f, str) for f in files):
            raise TransferError(f"Malformed catalog listing: {files!r}")
        return files

    async def refresh_token(self, credential: Credential) -> str:
        """Request a new token using the identity headers only.

        Returns:
            The new bearer token.

        Raises:
            AuthExpiredError: If the refresh is rejected.
            TransferError: On network failure or malformed response.
        """
        response = await self._get(
            request_config(credential, bearer=False), "/auth/token"
        )
        token = self._json(response).get("token")
        if not isinstance(token, str) or not token:
            raise TransferError("Token refresh response carried no token")
        return token

    # === Transfers ===

    @contextlib.asynccontextmanager
    async def stream_download(
        self, credential: Credential, filename: str
    ) -> AsyncIterator[AsyncIterator[bytes]]:
        """Open a streamed download of a remote file.

        Yields an async iterator over the body. The response is closed when
        the context exits, whatever the outcome.

        Raises:
            AuthExpiredError: If the token is rejected.
            TransferError: On network failure while opening or reading.
        """
        config = request_config(credential)
        url = (
            f"{config.base_url}/download/"
            f"{_segment(credential.user_id)}/{_segment(filename)}"
        )
        logger.debug(f"GET {url} (stream)")
        try:
            async with self._client.stream("GET", url, headers=config.headers) as response:
                self._handle_response(response)
                yield response.aiter_bytes()
        except httpx.HTTPError as e:
            raise TransferError(f"Download of {filename} failed: {e}") from e

    async def stream_upload(self, credential: Credential, file_path: Path) -> None:
        """Upload a local file as multipart form data.

        Raises:
            FileSystemError: If the local file cannot be opened.
            AuthExpiredError: If the token is rejected.
            TransferError: On network failure.
        """
        config = request_config(credential)
        url = f"{config.base_url}/upload"
        try:
            handle = open(file_path, "rb")  # noqa: SIM115
        except OSError as e:
            raise FileSystemError(f"Cannot read {file_path}: {e}") from e

        logger.debug(f"POST {url} ({file_path.name})")
        with handle:
            try:
                response = await self._client.post(
                    url,
                    headers=config.headers,
                    files={"file": (file_path.name, handle)},
                    data={"user": credential.user_id},
                )
            except httpx.HTTPError as e:
                raise TransferError(f"Upload of {file_path.name} failed: {e}") from e
        self._handle_response(response)
