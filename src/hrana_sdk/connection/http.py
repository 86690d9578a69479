"""
HTTP Transport Implementation for Hrana SDK.

Sends built pipeline requests over HTTP and hands back the raw status and
body. Status codes are not interpreted here: an error status with a
pipeline-shaped body is still the decoder's to read.
"""

from dataclasses import dataclass
from typing import Any, Protocol, Self

import httpx

from ..exceptions import ConnectionError
from ..request import HttpRequest


@dataclass(frozen=True)
class RawResponse:
    """Undecoded HTTP response."""

    status: int
    body: str


class Transport(Protocol):
    """Anything that can send a built pipeline request."""

    async def send(self, request: HttpRequest) -> RawResponse: ...


class HTTPTransport:
    """
    httpx-based transport.

    Each request is independent; session continuity lives in the baton the
    caller threads through request bodies.
    """

    def __init__(self, timeout: float = 30.0):
        """
        Initialize HTTP transport.

        Args:
            timeout: Request timeout in seconds
        """
        self.timeout = timeout
        self._client: httpx.AsyncClient | None = None

    @property
    def is_connected(self) -> bool:
        """Check if the HTTP client is open."""
        return self._client is not None

    async def connect(self) -> Self:
        """Open the HTTP client. Returns self for fluent API."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> Self:
        await self.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def send(self, request: HttpRequest) -> RawResponse:
        """
        Send a pipeline request.

        Args:
            request: The built request

        Returns:
            The raw status and body

        Raises:
            ConnectionError: If not connected or the request fails
        """
        if not self._client:
            raise ConnectionError("Not connected. Call connect() first.")

        try:
            response = await self._client.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except httpx.RequestError as e:
            raise ConnectionError(f"Request failed: {e}") from e

        return RawResponse(status=response.status_code, body=response.text)
