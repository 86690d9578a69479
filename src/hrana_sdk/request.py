"""
Pipeline request building.

The builder collects target coordinates, statements and the session baton,
then produces a transport-ready :class:`HttpRequest`. Building is pure: no
network I/O happens here.
"""

import logging
from dataclasses import dataclass, field
from typing import Self

from .exceptions import MissingPropertyError
from .protocol.encoder import PipelineRequest
from .types import Statement

logger = logging.getLogger(__name__)

DEFAULT_HOST = "turso.io"
DEFAULT_PATH = "/v2/pipeline"
CLIENT_NAME = "hrana-sdk-python"


@dataclass(frozen=True)
class HttpRequest:
    """
    Transport-ready HTTP request.

    Attributes:
        method: HTTP method
        scheme: URL scheme
        host: Target host, ``<database>-<organization>.<host>``
        path: Pipeline endpoint path
        headers: Request headers
        body: JSON body
    """

    method: str
    scheme: str
    host: str
    path: str
    headers: dict[str, str] = field(default_factory=dict)
    body: str = ""

    @property
    def url(self) -> str:
        """Full request URL."""
        return f"{self.scheme}://{self.host}{self.path}"


class PipelineRequestBuilder:
    """
    Mutable builder for pipeline requests.

    Scalar setters overwrite (the last call wins); ``with_statement`` appends.
    A builder belongs to one caller and is not meant to be shared.

    Usage:
        request = (
            PipelineRequestBuilder()
            .with_database("db")
            .with_organization("org")
            .with_token(token)
            .with_statement(Execute.positional("SELECT * FROM users WHERE id = ?", 1))
            .with_statement(Close())
            .build()
        )
    """

    def __init__(self) -> None:
        self.database: str | None = None
        self.organization: str | None = None
        self.host: str | None = DEFAULT_HOST
        self.path: str | None = DEFAULT_PATH
        self.token: str | None = None
        self.statements: list[Statement] = []
        self.baton: str | None = None

    def with_database(self, database: str) -> Self:
        self.database = database
        return self

    def with_organization(self, organization: str) -> Self:
        self.organization = organization
        return self

    def with_host(self, host: str) -> Self:
        self.host = host
        return self

    def with_path(self, path: str) -> Self:
        self.path = path
        return self

    def with_token(self, token: str) -> Self:
        self.token = token
        return self

    def with_statement(self, statement: Statement) -> Self:
        """Append a statement to the pipeline."""
        self.statements.append(statement)
        return self

    def clear_statements(self) -> Self:
        """Drop all queued statements."""
        self.statements = []
        return self

    def with_baton(self, baton: str | None) -> Self:
        """Set the session baton; ``None`` starts a new session."""
        self.baton = baton
        return self

    def build(self) -> HttpRequest:
        """
        Build the HTTP request.

        Returns:
            The request descriptor for the transport

        Raises:
            MissingPropertyError: If database, organization or token is unset
        """
        if self.database is None:
            raise MissingPropertyError("database")
        if self.organization is None:
            raise MissingPropertyError("organization")
        if self.token is None:
            raise MissingPropertyError("token")

        host = f"{self.database}-{self.organization}.{self.host or DEFAULT_HOST}"
        body = PipelineRequest(statements=list(self.statements), baton=self.baton).to_json()
        logger.debug("Built pipeline request for %s with %d statements", host, len(self.statements))

        return HttpRequest(
            method="POST",
            scheme="https",
            host=host,
            path=self.path or DEFAULT_PATH,
            headers={
                "Authorization": f"Bearer {self.token}",
                "Content-Type": "application/json",
                "Accept": "application/json",
                "X-Client-Name": CLIENT_NAME,
            },
            body=body,
        )
