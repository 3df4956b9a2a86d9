"""Single-shot token refresh around remote calls.

This module provides:
- AuthRefreshPolicy: Runs a remote call, refreshing the token and retrying
  exactly once when the server rejects it
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sheetsync.client.api import AuthExpiredError

if TYPE_CHECKING:
    from sheetsync.client.api import CatalogClient
    from sheetsync.client.credentials import Credential
    from sheetsync.client.sync.types import Operation, T

logger = logging.getLogger(__name__)


class AuthRefreshPolicy:
    """Refresh-then-retry wrapper shared by listing, download and upload.

    Each call gets at most one refresh. A refreshed credential replaces the
    current one, so later calls through the same policy use the new token.
    """

    def __init__(self, client: CatalogClient, credential: Credential) -> None:
        """Initialize the policy.

        Args:
            client: HTTP client used for the refresh request.
            credential: Credential for the first attempt.
        """
        self._client = client
        self._credential = credential

    @property
    def client(self) -> CatalogClient:
        """HTTP client the wrapped calls run against."""
        return self._client

    @property
    def credential(self) -> Credential:
        """Credential the next call will start with."""
        return self._credential

    async def call(self, operation: Operation[T], description: str = "request") -> T:
        """Run an operation with one refresh-and-retry on token expiry.

        Args:
            operation: Coroutine function taking the credential to use.
            description: Short label for log messages.

        Returns:
            Result of the operation.

        Raises:
            AuthExpiredError: If the token is rejected after the refresh, or
                the refresh itself is rejected.
            SyncError: Any other failure of the operation or the refresh.
        """
        try:
            return await operation(self._credential)
        except AuthExpiredError:
            logger.info(f"Token expired during {description}, attempting refresh...")

        token = await self._client.refresh_token(self._credential)
        self._credential = self._credential.with_token(token)
        logger.debug(f"Token refreshed, retrying {description}")

        try:
            return await operation(self._credential)
        except AuthExpiredError as e:
            logger.warning(f"Token rejected again after refresh during {description}")
            raise AuthExpiredError(
                "Token expired after refresh", e.status_code
            ) from e
