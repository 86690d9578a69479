"""
Connection configuration for pipeline sessions.

Provides an immutable configuration container; where its values come from
(environment, settings file, literals) is left to the caller.
"""

from __future__ import annotations

from dataclasses import dataclass

from .request import DEFAULT_HOST, DEFAULT_PATH, PipelineRequestBuilder


@dataclass(frozen=True)
class ConnectionConfig:
    """
    Immutable configuration for a remote database.

    Attributes:
        database: The database name.
        organization: The organization owning the database.
        token: The auth token sent as a bearer credential.
        host: The base host the database lives under.
        path: The pipeline endpoint path.
    """

    database: str
    organization: str
    token: str
    host: str = DEFAULT_HOST
    path: str = DEFAULT_PATH

    def builder(self) -> PipelineRequestBuilder:
        """Create a request builder targeting this database."""
        return (
            PipelineRequestBuilder()
            .with_database(self.database)
            .with_organization(self.organization)
            .with_token(self.token)
            .with_host(self.host)
            .with_path(self.path)
        )

    def __repr__(self) -> str:
        return (
            f"ConnectionConfig(database={self.database!r}, organization={self.organization!r}, "
            f"token='***', host={self.host!r}, path={self.path!r})"
        )


__all__ = ["ConnectionConfig"]
