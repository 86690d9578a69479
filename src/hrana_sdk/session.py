"""
Pipeline sessions.

A session threads the baton from each response into the next request, so
separate HTTP calls keep using the same server-side stream. Calls on one
session run one at a time.
"""

import asyncio
import logging
from collections.abc import Iterable
from typing import Any, Self

from .config import ConnectionConfig
from .connection.http import HTTPTransport, Transport
from .exceptions import QueryError, SessionError
from .protocol.decoder import decode
from .types import (
    Argument,
    Close,
    ErrorResponse,
    Execute,
    ExecuteResponse,
    HttpResponse,
    Response,
    Statement,
)

logger = logging.getLogger(__name__)


class PipelineSession:
    """
    Baton-carrying session over a pipeline endpoint.

    Usage:
        config = ConnectionConfig(database="db", organization="org", token=token)
        async with PipelineSession(config) as session:
            result = await session.execute("SELECT * FROM users WHERE id = ?", [Anonymous(Integer(1))])
            print(result.records())
    """

    def __init__(self, config: ConnectionConfig, transport: Transport | None = None):
        """
        Initialize a session.

        Args:
            config: Target database coordinates and token
            transport: Transport to send requests with. When omitted the
                session opens and closes its own HTTPTransport.
        """
        self.config = config
        self._owns_transport = transport is None
        self._transport: Transport = transport if transport is not None else HTTPTransport()
        self._baton: str | None = None
        self._closed = False
        self._lock = asyncio.Lock()

    @property
    def baton(self) -> str | None:
        """Get the baton the next request will carry."""
        return self._baton

    @property
    def is_closed(self) -> bool:
        return self._closed

    async def __aenter__(self) -> Self:
        if self._owns_transport and isinstance(self._transport, HTTPTransport):
            await self._transport.connect()
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def pipeline(self, statements: Iterable[Statement]) -> HttpResponse:
        """
        Run statements in one pipeline request.

        Args:
            statements: Statements to send, in order

        Returns:
            The decoded response; its baton becomes the session's baton

        Raises:
            SessionError: If the session is closed
            ConnectionError: If the transport fails
            DecodeError: If the response cannot be decoded
        """
        async with self._lock:
            if self._closed:
                raise SessionError("Session is closed")
            return await self._send_locked(statements)

    async def _send_locked(self, statements: Iterable[Statement]) -> HttpResponse:
        """Send one pipeline request; the caller must hold ``self._lock``."""
        builder = self.config.builder().with_baton(self._baton)
        for statement in statements:
            builder.with_statement(statement)
        request = builder.build()

        raw = await self._transport.send(request)
        response = decode(raw.body)

        if response.baton != self._baton:
            logger.debug("Session baton changed (held=%s)", response.baton is not None)
        self._baton = response.baton
        return response

    async def batch(self, statements: Iterable[Statement]) -> list[Response]:
        """Run statements in one pipeline request and return their results."""
        response = await self.pipeline(statements)
        return list(response.results)

    async def execute(self, sql: str, arguments: Iterable[Argument] | None = None) -> ExecuteResponse:
        """
        Execute a single statement.

        Raises:
            QueryError: If the server reports an error for the statement
        """
        response = await self.pipeline([Execute(sql, tuple(arguments or ()))])
        result = response.results[0] if response.results else None
        if isinstance(result, ErrorResponse):
            raise QueryError(result.message, query=sql, code=result.code)
        if not isinstance(result, ExecuteResponse):
            raise QueryError(f"Unexpected result for statement: {result!r}", query=sql)
        return result

    async def close(self) -> None:
        """Close the server-side stream, if one is held, and the session."""
        async with self._lock:
            if self._closed:
                return
            try:
                if self._baton is not None:
                    await self._send_locked([Close()])
            finally:
                self._closed = True
                self._baton = None
                if self._owns_transport and isinstance(self._transport, HTTPTransport):
                    await self._transport.close()
