"""HTTP schema store for the ``/schema`` endpoint."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import httpx

from prisma_sdl.constants import DEFAULT_SCHEMA_ENDPOINT
from prisma_sdl.errors import SchemaStoreError
from prisma_sdl.stores.base import SaveResult

logger = logging.getLogger(__name__)

# Environment variables for HTTPS configuration
HTTPS_VERIFY_ENV = "PRISMA_SDL_HTTPS_VERIFY"
TIMEOUT_ENV = "PRISMA_SDL_TIMEOUT"

DEFAULT_TIMEOUT = 30.0


def _get_ssl_verify() -> bool:
    """Get SSL verification setting from environment.

    Set PRISMA_SDL_HTTPS_VERIFY=false to disable SSL verification
    (useful for self-signed certificates).
    """
    verify_env = os.environ.get(HTTPS_VERIFY_ENV, "").lower()
    if verify_env in ("false", "0", "no", "off"):
        return False
    return True


def _get_timeout() -> float:
    """Get timeout setting from environment.

    Set PRISMA_SDL_TIMEOUT to override the default 30s timeout.
    """
    timeout_env = os.environ.get(TIMEOUT_ENV)
    if timeout_env:
        try:
            return float(timeout_env)
        except ValueError:
            logger.warning("Ignoring invalid %s=%r", TIMEOUT_ENV, timeout_env)
    return DEFAULT_TIMEOUT


def _get_http_client(timeout: float | None = None) -> httpx.Client:
    """Create an HTTP client with SSL and timeout settings from the environment.

    httpx respects HTTP_PROXY, HTTPS_PROXY and NO_PROXY on its own.
    """
    return httpx.Client(timeout=timeout or _get_timeout(), verify=_get_ssl_verify())


class HttpSchemaStore:
    """Load and save schema text through a remote endpoint.

    ``load`` issues ``GET <base_url><endpoint>`` and returns the body as text.
    ``save`` issues ``POST <base_url><endpoint>`` with a ``text/plain`` body.

    Example:
        >>> store = HttpSchemaStore("http://localhost:3000")
        >>> store.url
        'http://localhost:3000/schema'
    """

    def __init__(
        self,
        base_url: str,
        endpoint: str = DEFAULT_SCHEMA_ENDPOINT,
        timeout: float | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        """Initialize the store.

        Args:
            base_url: Server root, e.g. ``http://localhost:3000``.
            endpoint: Path of the schema resource.
            timeout: Request timeout in seconds (default from env or 30s).
            client: Pre-configured client to reuse. The caller owns it and
                it is not closed by the store.
        """
        self.base_url = base_url.rstrip("/")
        self.endpoint = "/" + endpoint.lstrip("/")
        self.timeout = timeout
        self._client = client

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.endpoint}"

    @contextmanager
    def _session(self) -> Iterator[httpx.Client]:
        if self._client is not None:
            yield self._client
            return
        with _get_http_client(self.timeout) as client:
            yield client

    def _request(self, method: str, **kwargs: Any) -> httpx.Response:
        try:
            with self._session() as client:
                response = client.request(method, self.url, **kwargs)
        except httpx.ConnectError as e:
            raise SchemaStoreError(f"Cannot connect to {self.url}: {e}") from e
        except httpx.TimeoutException as e:
            raise SchemaStoreError(f"Request to {self.url} timed out") from e
        except httpx.HTTPError as e:
            raise SchemaStoreError(f"Network error for {self.url}: {e}") from e

        if not response.is_success:
            raise SchemaStoreError(
                f"{method} {self.url} failed with status {response.status_code}",
                status_code=response.status_code,
            )
        return response

    def load(self) -> str:
        response = self._request("GET")
        logger.debug("Loaded %d characters from %s", len(response.text), self.url)
        return response.text

    def save(self, text: str) -> SaveResult:
        """POST the document text as ``text/plain``."""
        body = text.encode("utf-8")
        response = self._request(
            "POST",
            content=body,
            headers={"Content-Type": "text/plain; charset=utf-8"},
        )
        logger.debug("Saved %d bytes to %s", len(body), self.url)
        return SaveResult(
            location=self.url,
            bytes_written=len(body),
            status_code=response.status_code,
            message=f"Saved schema to {self.url}",
        )

    def describe(self) -> str:
        return self.url
