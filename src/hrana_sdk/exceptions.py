"""
Hrana SDK Exceptions.

Custom exception hierarchy for the SDK.
"""


class HranaError(Exception):
    """Base exception for all Hrana SDK errors."""

    def __init__(self, message: str, code: str | int | None = None):
        self.message = message
        self.code = code
        super().__init__(message)


class MissingPropertyError(HranaError):
    """Raised when a pipeline request is built without a required property."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"Missing required property: {field}")


class DecodeError(HranaError):
    """Raised when a pipeline response body cannot be decoded."""

    pass


class UnknownColumnTypeError(DecodeError):
    """Raised when a result column declares a type the decoder has no rule for."""

    def __init__(self, decltype: str | None, column: str | None = None):
        self.decltype = decltype
        self.column = column
        super().__init__(f"Unknown column type {decltype!r} for column {column!r}")


class MalformedCellError(DecodeError):
    """Raised when a cell value does not parse under its column's declared type."""

    def __init__(self, decltype: str, raw: str | None, column: str | None = None):
        self.decltype = decltype
        self.raw = raw
        self.column = column
        super().__init__(f"Cannot parse {raw!r} as {decltype} for column {column!r}")


class RowWidthError(DecodeError):
    """Raised when a row does not have one cell per declared column."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Row has {actual} cells but result declares {expected} columns")


class ConnectionError(HranaError):
    """Raised when the HTTP transport fails."""

    pass


class QueryError(HranaError):
    """Raised when the server reports an error for a statement."""

    def __init__(self, message: str, query: str | None = None, code: str | int | None = None):
        self.query = query
        super().__init__(message, code)


class SessionError(HranaError):
    """Raised when a closed pipeline session is used."""

    pass
