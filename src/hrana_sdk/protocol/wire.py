"""
Wire shapes of the Hrana pipeline response.

These pydantic models only describe structure. Numbers stay in their wire
representation here; typing them is the decoder's job.
"""

from pydantic import BaseModel, ConfigDict


class _WireModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class WireCell(_WireModel):
    """One row/column intersection before coercion."""

    type: str
    value: str | int | float | None = None
    base64: str | None = None


class WireColumn(_WireModel):
    name: str | None = None
    decltype: str | None = None


class WireResult(_WireModel):
    """Rows and columns of an executed statement."""

    cols: list[WireColumn]
    rows: list[list[WireCell]]
    affected_row_count: int = 0
    last_insert_rowid: str | None = None


class WireStreamResponse(_WireModel):
    type: str
    result: WireResult | None = None


class WireError(_WireModel):
    message: str
    code: str | None = None


class WireStreamResult(_WireModel):
    """
    Outcome of one pipeline request.

    ``response`` is set when ``type`` is ``"ok"``, ``error`` when it is
    ``"error"``.
    """

    type: str
    response: WireStreamResponse | None = None
    error: WireError | None = None


class WirePipelineResponse(_WireModel):
    baton: str | None = None
    base_url: str | None = None
    results: list[WireStreamResult]
