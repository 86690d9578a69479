"""
Hrana SDK - A Python client for the Hrana over HTTP pipeline protocol.

This SDK builds pipeline requests for remote SQLite-compatible databases
(libSQL / Turso) and decodes their responses into typed values.

Supports:
- Positional and named bound arguments
- Typed decoding driven by declared column types
- Baton-threaded sessions across independent HTTP calls
- An httpx transport, or any object with an async ``send()``
"""

from .config import ConnectionConfig
from .connection.http import HTTPTransport, RawResponse, Transport
from .protocol.decoder import decode
from .protocol.encoder import PipelineRequest, encode_statement, encode_value
from .request import DEFAULT_HOST, DEFAULT_PATH, HttpRequest, PipelineRequestBuilder
from .session import PipelineSession
from .types import (
    Anonymous,
    Argument,
    Blob,
    Boolean,
    Close,
    CloseResponse,
    Column,
    Datetime,
    ErrorResponse,
    Execute,
    ExecuteResponse,
    HttpResponse,
    Integer,
    Named,
    Null,
    Real,
    Response,
    Row,
    Statement,
    Text,
    Value,
    to_value,
)
from .exceptions import (
    HranaError,
    MissingPropertyError,
    DecodeError,
    UnknownColumnTypeError,
    MalformedCellError,
    RowWidthError,
    ConnectionError,
    QueryError,
    SessionError,
)

__version__ = "0.1.0"
__all__ = [
    # Requests
    "PipelineRequestBuilder",
    "HttpRequest",
    "PipelineRequest",
    "ConnectionConfig",
    # Protocol
    "encode_statement",
    "encode_value",
    "decode",
    # Sessions & transport
    "PipelineSession",
    "HTTPTransport",
    "RawResponse",
    "Transport",
    # Values
    "Value",
    "Integer",
    "Real",
    "Boolean",
    "Text",
    "Datetime",
    "Blob",
    "Null",
    "to_value",
    # Statements
    "Argument",
    "Anonymous",
    "Named",
    "Statement",
    "Execute",
    "Close",
    # Response Types
    "Column",
    "Row",
    "Response",
    "ExecuteResponse",
    "CloseResponse",
    "ErrorResponse",
    "HttpResponse",
    # Exceptions
    "HranaError",
    "MissingPropertyError",
    "DecodeError",
    "UnknownColumnTypeError",
    "MalformedCellError",
    "RowWidthError",
    "ConnectionError",
    "QueryError",
    "SessionError",
]


class Hrana:
    """
    Factory class for pipeline requests and sessions.

    Usage:
        # One-off request, sent by your own transport
        request = (
            Hrana.builder()
            .with_database("db")
            .with_organization("org")
            .with_token(token)
            .with_statement(Execute.positional("SELECT 1"))
            .build()
        )

        # Session threading the baton between calls
        async with Hrana.session("db", "org", token) as session:
            result = await session.execute("SELECT * FROM users")
    """

    @staticmethod
    def builder() -> PipelineRequestBuilder:
        """Create an empty request builder."""
        return PipelineRequestBuilder()

    @staticmethod
    def session(
        database: str,
        organization: str,
        token: str,
        host: str = DEFAULT_HOST,
        path: str = DEFAULT_PATH,
        transport: Transport | None = None,
    ) -> PipelineSession:
        """Create a pipeline session over HTTP."""
        config = ConnectionConfig(database, organization, token, host=host, path=path)
        return PipelineSession(config, transport)
