"""
Pytest configuration for Hrana SDK tests.

Shared fixtures build connection settings and pipeline response bodies so
test files do not hand-write the wire JSON each time.
"""

import json
from collections.abc import Callable
from typing import Any

import pytest

from hrana_sdk.config import ConnectionConfig

TEST_DATABASE = "database"
TEST_ORGANIZATION = "organization"
TEST_TOKEN = "token"

WireResult = dict[str, Any]


@pytest.fixture
def config() -> ConnectionConfig:
    """Connection settings pointing at the default host."""
    return ConnectionConfig(database=TEST_DATABASE, organization=TEST_ORGANIZATION, token=TEST_TOKEN)


@pytest.fixture
def execute_result() -> Callable[..., WireResult]:
    """Wire result of an executed statement."""

    def _build(cols: list[dict[str, Any]], rows: list[list[dict[str, Any]]], **extra: Any) -> WireResult:
        return {"type": "ok", "response": {"type": "execute", "result": {"cols": cols, "rows": rows, **extra}}}

    return _build


@pytest.fixture
def close_result() -> WireResult:
    """Wire result of a close request."""
    return {"type": "ok", "response": {"type": "close"}}


@pytest.fixture
def error_result() -> Callable[..., WireResult]:
    """Wire result of a failed request."""

    def _build(message: str, code: str | None = None) -> WireResult:
        error: dict[str, Any] = {"message": message}
        if code is not None:
            error["code"] = code
        return {"type": "error", "error": error}

    return _build


@pytest.fixture
def pipeline_body() -> Callable[..., str]:
    """Build a pipeline response body from wire results."""

    def _build(*results: WireResult, baton: str | None = None) -> str:
        return json.dumps({"baton": baton, "base_url": None, "results": list(results)})

    return _build
