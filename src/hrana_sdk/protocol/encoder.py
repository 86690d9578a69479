"""
Hrana pipeline request encoding.

Turns statements into the JSON body posted to the pipeline endpoint. Numbers
travel as strings: the server keeps 64-bit integers as text to avoid
floating point precision loss.
"""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any, assert_never

from ..types import (
    Anonymous,
    Argument,
    Blob,
    Boolean,
    Close,
    Datetime,
    Execute,
    Integer,
    Named,
    Null,
    Real,
    Statement,
    Text,
    Value,
)

logger = logging.getLogger(__name__)


def encode_value(value: Value) -> dict[str, str]:
    """
    Encode a Value to its wire form.

    Booleans go out as integers 0/1 and datetimes as text. Blobs carry a
    ``base64`` key and nulls no payload at all.
    """
    match value:
        case Integer(number):
            return {"type": "integer", "value": str(number)}
        case Real(number):
            return {"type": "float", "value": str(number)}
        case Boolean(flag):
            return {"type": "integer", "value": "1" if flag else "0"}
        case Text(text) | Datetime(text):
            return {"type": "text", "value": text}
        case Blob(payload):
            return {"type": "blob", "base64": payload}
        case Null():
            return {"type": "null"}
        case _:
            assert_never(value)


def encode_arguments(arguments: Iterable[Argument]) -> tuple[list[dict[str, str]], list[dict[str, Any]]]:
    """
    Split arguments into the wire ``args`` and ``named_args`` arrays.

    Each array keeps the relative order its kind had in the source sequence.
    """
    args: list[dict[str, str]] = []
    named_args: list[dict[str, Any]] = []
    for argument in arguments:
        match argument:
            case Anonymous(value):
                args.append(encode_value(value))
            case Named(name, value):
                named_args.append({"name": name, "value": encode_value(value)})
            case _:
                assert_never(argument)
    return args, named_args


def encode_statement(statement: Statement) -> dict[str, Any]:
    """Encode a Statement to one entry of the wire ``requests`` array."""
    match statement:
        case Execute(sql, arguments):
            if statement.is_mixed:
                logger.warning("Statement mixes positional and named arguments: %s", sql)
            args, named_args = encode_arguments(arguments)
            return {
                "type": "execute",
                "stmt": {"sql": sql, "args": args, "named_args": named_args},
            }
        case Close():
            return {"type": "close"}
        case _:
            assert_never(statement)


@dataclass
class PipelineRequest:
    """
    Pipeline request body.

    Attributes:
        statements: Statements to run, in order
        baton: Session token from the previous response, if any
    """

    statements: list[Statement] = field(default_factory=list)
    baton: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "baton": self.baton,
            "requests": [encode_statement(statement) for statement in self.statements],
        }

    def to_json(self) -> str:
        """Serialize to the compact JSON body sent on the wire."""
        return json.dumps(self.to_dict(), separators=(",", ":"), ensure_ascii=False)
