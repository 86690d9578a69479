"""
Hrana pipeline response decoding.

Decoding runs in two steps. The body is first validated against the wire
shapes in :mod:`.wire`; any structural problem is a :class:`DecodeError`.
Each result is then projected into the typed response model, pairing every
cell with the column at the same position and coercing it by the column's
declared type.
"""

import logging
import re

from pydantic import ValidationError

from ..exceptions import DecodeError, MalformedCellError, RowWidthError, UnknownColumnTypeError
from ..types import (
    Blob,
    Boolean,
    CloseResponse,
    Column,
    Datetime,
    ErrorResponse,
    ExecuteResponse,
    HttpResponse,
    Integer,
    Null,
    Real,
    Response,
    Row,
    Text,
    Value,
)
from .wire import WireCell, WirePipelineResponse, WireResult, WireStreamResult

logger = logging.getLogger(__name__)

_INTEGER_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def _cell_text(cell: WireCell) -> str | None:
    """Get the cell value as text, whatever JSON type carried it."""
    if cell.value is None or isinstance(cell.value, str):
        return cell.value
    return repr(cell.value) if isinstance(cell.value, float) else str(cell.value)


def _parse_integer(raw: str | None, decltype: str, column: str | None) -> Integer:
    if raw is None or not _INTEGER_RE.fullmatch(raw):
        raise MalformedCellError(decltype, raw, column)
    try:
        return Integer(int(raw))
    except ValueError as e:
        raise MalformedCellError(decltype, raw, column) from e


def _parse_real(raw: str | None, decltype: str, column: str | None) -> Real:
    if raw is None or not _FLOAT_RE.fullmatch(raw):
        raise MalformedCellError(decltype, raw, column)
    try:
        return Real(float(raw))
    except ValueError as e:
        raise MalformedCellError(decltype, raw, column) from e


def coerce_cell(column: Column, cell: WireCell) -> Value:
    """
    Coerce one wire cell to a Value.

    A ``null`` cell is Null whatever the column declares. Otherwise the
    column's declared type picks the rule, compared case-insensitively.
    Columns without a declared type fall back to the cell's wire type.

    Raises:
        UnknownColumnTypeError: If no rule exists for the declared type
        MalformedCellError: If a numeric cell does not parse
    """
    if cell.type == "null":
        return Null()
    if column.decltype is None:
        return _coerce_undeclared(column, cell)

    decltype = column.decltype.strip().upper()
    raw = _cell_text(cell)
    if decltype == "INTEGER":
        return _parse_integer(raw, decltype, column.name)
    if decltype in ("REAL", "NUMERIC") or decltype.startswith("DECIMAL"):
        return _parse_real(raw, decltype, column.name)
    if decltype == "BOOLEAN":
        return Boolean((raw or "0") == "1")
    if decltype == "TEXT":
        return Text(raw or "")
    if decltype == "DATETIME":
        return Datetime(raw or "")
    if decltype == "BLOB":
        return Blob(cell.base64 or "")
    raise UnknownColumnTypeError(column.decltype, column.name)


def _coerce_undeclared(column: Column, cell: WireCell) -> Value:
    raw = _cell_text(cell)
    if cell.type == "integer":
        return _parse_integer(raw, "integer", column.name)
    if cell.type == "float":
        return _parse_real(raw, "float", column.name)
    if cell.type == "text":
        return Text(raw or "")
    if cell.type == "blob":
        return Blob(cell.base64 or "")
    raise UnknownColumnTypeError(None, column.name)


def decode_row(columns: tuple[Column, ...], cells: list[WireCell]) -> Row:
    """Pair each cell with the column at the same position and coerce it."""
    if len(cells) != len(columns):
        raise RowWidthError(len(columns), len(cells))
    return Row(tuple(coerce_cell(column, cell) for column, cell in zip(columns, cells)))


def decode_result(result: WireResult) -> ExecuteResponse:
    """Project a wire execute result into an ExecuteResponse."""
    columns = tuple(Column(name=col.name, decltype=col.decltype) for col in result.cols)
    rows = tuple(decode_row(columns, cells) for cells in result.rows)
    return ExecuteResponse(
        columns=columns,
        rows=rows,
        affected_row_count=result.affected_row_count,
        last_insert_rowid=result.last_insert_rowid,
    )


def decode_stream_result(result: WireStreamResult) -> Response:
    """Project one wire pipeline result into a Response."""
    if result.type == "error":
        if result.error is None:
            raise DecodeError("Error result without an error object")
        return ErrorResponse(message=result.error.message, code=result.error.code)
    if result.type != "ok":
        raise DecodeError(f"Unknown result type: {result.type}")
    if result.response is None:
        raise DecodeError("Result without a response object")
    if result.response.result is None:
        return CloseResponse()
    return decode_result(result.response.result)


def decode(body: str | bytes) -> HttpResponse:
    """
    Decode a pipeline response body.

    Args:
        body: Raw JSON body returned by the server

    Returns:
        The typed response with the baton for the next request

    Raises:
        DecodeError: If the body is not a pipeline response, or one of its
            cells cannot be typed
    """
    try:
        wire = WirePipelineResponse.model_validate_json(body)
    except ValidationError as e:
        raise DecodeError(f"Invalid pipeline response: {e}") from e

    results = tuple(decode_stream_result(result) for result in wire.results)
    logger.debug("Decoded %d pipeline results", len(results))
    return HttpResponse(baton=wire.baton, results=results)
