"""
Type definitions for the Hrana SDK.

Values, bound arguments, statements and decoded responses are closed unions
of frozen dataclasses. Code that branches on them uses ``match`` with
``assert_never`` in the fallback arm, so adding a variant is visible to type
checkers everywhere it is handled.
"""

import base64
import math
from dataclasses import dataclass, field, replace
from datetime import date
from collections.abc import Iterator
from typing import Any, Self, TypeAlias

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def _require_str(value: Any) -> None:
    if not isinstance(value.value, str):
        raise TypeError(f"{type(value).__name__} expects str, got {type(value.value).__name__}")


# Values


@dataclass(frozen=True)
class Integer:
    """Signed 64-bit integer value."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Integer expects int, got {type(self.value).__name__}")
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"Integer {self.value} is outside the signed 64-bit range")

    def to_python(self) -> int:
        return self.value


@dataclass(frozen=True)
class Real:
    """Double precision floating point value."""

    value: float

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(f"Real expects float, got {type(self.value).__name__}")
        if not math.isfinite(self.value):
            raise ValueError(f"Real {self.value} has no wire representation")

    def to_python(self) -> float:
        return float(self.value)


@dataclass(frozen=True)
class Boolean:
    """Boolean value, stored by SQLite as integer 0/1."""

    value: bool

    def __post_init__(self) -> None:
        if not isinstance(self.value, bool):
            raise TypeError(f"Boolean expects bool, got {type(self.value).__name__}")

    def to_python(self) -> bool:
        return self.value


@dataclass(frozen=True)
class Text:
    """Text value."""

    value: str

    def __post_init__(self) -> None:
        _require_str(self)

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class Datetime:
    """
    Date/time value.

    The string is kept as the server or caller wrote it; no timezone or
    format validation happens at this layer.
    """

    value: str

    def __post_init__(self) -> None:
        _require_str(self)

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class Blob:
    """Binary value carried as base64 text."""

    value: str

    def __post_init__(self) -> None:
        _require_str(self)

    @classmethod
    def from_bytes(cls, data: bytes | bytearray | memoryview) -> "Blob":
        """Create a blob from raw bytes."""
        return cls(base64.b64encode(bytes(data)).decode("ascii"))

    def to_bytes(self) -> bytes:
        """Decode the base64 payload."""
        return base64.b64decode(self.value)

    def to_python(self) -> str:
        return self.value


@dataclass(frozen=True)
class Null:
    """SQL NULL."""

    def to_python(self) -> None:
        return None


Value: TypeAlias = Integer | Real | Boolean | Text | Datetime | Blob | Null

VALUE_TYPES = (Integer, Real, Boolean, Text, Datetime, Blob, Null)


def to_value(obj: Any) -> Value:
    """
    Convert a Python scalar into a Value.

    Values pass through unchanged. ``bool`` is checked before ``int`` since it
    is a subclass of it.

    Raises:
        TypeError: If the object has no Value counterpart
    """
    if isinstance(obj, VALUE_TYPES):
        return obj
    if obj is None:
        return Null()
    if isinstance(obj, bool):
        return Boolean(obj)
    if isinstance(obj, int):
        return Integer(obj)
    if isinstance(obj, float):
        return Real(obj)
    if isinstance(obj, str):
        return Text(obj)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return Blob.from_bytes(obj)
    if isinstance(obj, date):
        return Datetime(obj.isoformat())
    raise TypeError(f"Cannot bind value of type {type(obj).__name__}")


# Arguments


@dataclass(frozen=True)
class Anonymous:
    """Positional argument bound to a ``?`` placeholder."""

    value: Value


@dataclass(frozen=True)
class Named:
    """Argument bound by name to a ``:name``, ``@name`` or ``$name`` placeholder."""

    name: str
    value: Value


Argument: TypeAlias = Anonymous | Named


# Statements


@dataclass(frozen=True)
class Execute:
    """
    Execute a SQL query with optional bound arguments.

    Attributes:
        sql: Query text, sent verbatim
        arguments: Ordered bound arguments
    """

    sql: str
    arguments: tuple[Argument, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "arguments", tuple(self.arguments or ()))

    def with_argument(self, argument: Argument) -> Self:
        """Return a copy with one more argument appended."""
        return replace(self, arguments=(*self.arguments, argument))

    def with_arguments(self, *arguments: Argument) -> Self:
        """Return a copy with the given arguments appended."""
        return replace(self, arguments=(*self.arguments, *arguments))

    @property
    def is_mixed(self) -> bool:
        """Check if the statement binds both positional and named arguments."""
        kinds = {type(arg) for arg in self.arguments}
        return Anonymous in kinds and Named in kinds

    @classmethod
    def positional(cls, sql: str, *values: Any) -> "Execute":
        """Create a statement binding Python values to ``?`` placeholders."""
        return cls(sql, tuple(Anonymous(to_value(v)) for v in values))

    @classmethod
    def named(cls, sql: str, **values: Any) -> "Execute":
        """Create a statement binding Python values by placeholder name."""
        return cls(sql, tuple(Named(name, to_value(v)) for name, v in values.items()))


@dataclass(frozen=True)
class Close:
    """Close the stream the pipeline is running on."""


Statement: TypeAlias = Execute | Close


# Responses


@dataclass(frozen=True)
class Column:
    """A result column and its declared SQL type."""

    name: str | None
    decltype: str | None


@dataclass(frozen=True)
class Row:
    """One result row, positionally aligned with its result's columns."""

    values: tuple[Value, ...] = ()

    def __iter__(self) -> Iterator[Value]:
        return iter(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> Value:
        return self.values[index]


@dataclass(frozen=True)
class ExecuteResponse:
    """
    Result of an executed statement.

    Attributes:
        columns: Declared columns, in server order
        rows: Decoded rows
        affected_row_count: Rows changed by a write statement
        last_insert_rowid: Rowid of the last inserted row, as text
    """

    columns: tuple[Column, ...] = ()
    rows: tuple[Row, ...] = ()
    affected_row_count: int = 0
    last_insert_rowid: str | None = None

    @property
    def column_names(self) -> list[str | None]:
        """Get column names in order."""
        return [column.name for column in self.columns]

    def records(self) -> list[dict[str | None, Any]]:
        """Get rows as dicts of column name to Python value."""
        names = self.column_names
        return [{name: value.to_python() for name, value in zip(names, row.values)} for row in self.rows]


@dataclass(frozen=True)
class CloseResponse:
    """Result of a close request."""


@dataclass(frozen=True)
class ErrorResponse:
    """Error the server reported for one request of the pipeline."""

    message: str
    code: str | None = None


Response: TypeAlias = ExecuteResponse | CloseResponse | ErrorResponse


@dataclass(frozen=True)
class HttpResponse:
    """
    Decoded pipeline response.

    Attributes:
        baton: Token to send with the next request of the session, if any
        results: One response per request, in request order
    """

    baton: str | None = None
    results: tuple[Response, ...] = field(default_factory=tuple)

    @property
    def errors(self) -> list[ErrorResponse]:
        """Get the error results of the pipeline."""
        return [result for result in self.results if isinstance(result, ErrorResponse)]
