"""Tests for the pipeline request encoder."""

import json
import logging

import pytest

from hrana_sdk.protocol.encoder import PipelineRequest, encode_arguments, encode_statement, encode_value
from hrana_sdk.types import (
    Anonymous,
    Blob,
    Boolean,
    Close,
    Datetime,
    Execute,
    Integer,
    Named,
    Null,
    Real,
    Text,
)


class TestEncodeValue:
    """Tests for encode_value."""

    def test_integer_is_sent_as_string(self) -> None:
        assert encode_value(Integer(1)) == {"type": "integer", "value": "1"}

    def test_large_integer_keeps_precision(self) -> None:
        """64-bit integers must not pass through a float."""
        assert encode_value(Integer(9223372036854775807)) == {
            "type": "integer",
            "value": "9223372036854775807",
        }

    def test_real_is_sent_as_string(self) -> None:
        assert encode_value(Real(1.5)) == {"type": "float", "value": "1.5"}

    @pytest.mark.parametrize("flag,expected", [(True, "1"), (False, "0")])
    def test_boolean_is_sent_as_integer(self, flag: bool, expected: str) -> None:
        assert encode_value(Boolean(flag)) == {"type": "integer", "value": expected}

    def test_text(self) -> None:
        assert encode_value(Text("hello")) == {"type": "text", "value": "hello"}

    def test_datetime_is_sent_as_text(self) -> None:
        assert encode_value(Datetime("2024-01-02 03:04:05")) == {"type": "text", "value": "2024-01-02 03:04:05"}

    def test_blob_has_base64_and_no_value(self) -> None:
        encoded = encode_value(Blob("aGVsbG8="))
        assert encoded == {"type": "blob", "base64": "aGVsbG8="}
        assert "value" not in encoded

    def test_null_has_no_value(self) -> None:
        assert encode_value(Null()) == {"type": "null"}


class TestEncodeArguments:
    """Tests for splitting arguments into positional and named arrays."""

    def test_mixed_arguments_are_partitioned_in_order(self) -> None:
        args, named_args = encode_arguments(
            [Anonymous(Integer(1)), Named("x", Text("b")), Anonymous(Integer(3))]
        )

        assert args == [{"type": "integer", "value": "1"}, {"type": "integer", "value": "3"}]
        assert named_args == [{"name": "x", "value": {"type": "text", "value": "b"}}]

    def test_named_order_is_kept(self) -> None:
        _, named_args = encode_arguments([Named("b", Integer(2)), Named("a", Integer(1))])
        assert [arg["name"] for arg in named_args] == ["b", "a"]

    def test_empty(self) -> None:
        assert encode_arguments([]) == ([], [])


class TestEncodeStatement:
    """Tests for encode_statement."""

    def test_close(self) -> None:
        assert encode_statement(Close()) == {"type": "close"}

    def test_execute_without_arguments(self) -> None:
        assert encode_statement(Execute("SELECT 1")) == {
            "type": "execute",
            "stmt": {"sql": "SELECT 1", "args": [], "named_args": []},
        }

    def test_execute_with_named_arguments(self) -> None:
        statement = Execute.named("SELECT * FROM users WHERE name = :name", name="alice")
        assert encode_statement(statement)["stmt"]["named_args"] == [
            {"name": "name", "value": {"type": "text", "value": "alice"}}
        ]

    def test_mixed_arguments_log_a_warning(self, caplog: pytest.LogCaptureFixture) -> None:
        statement = Execute("SELECT ?, :x", (Anonymous(Integer(1)), Named("x", Integer(2))))
        with caplog.at_level(logging.WARNING, logger="hrana_sdk.protocol.encoder"):
            encode_statement(statement)
        assert "mixes positional and named" in caplog.text


class TestPipelineRequest:
    """Tests for the request body."""

    def test_empty_body(self) -> None:
        assert PipelineRequest().to_json() == '{"baton":null,"requests":[]}'

    def test_baton_is_carried(self) -> None:
        data = json.loads(PipelineRequest(statements=[Close()], baton="xyz").to_json())
        assert data["baton"] == "xyz"

    def test_statement_order_is_kept(self) -> None:
        statements = [Execute(f"SELECT {i}") for i in range(5)]
        data = PipelineRequest(statements=statements).to_dict()
        assert [r["stmt"]["sql"] for r in data["requests"]] == [f"SELECT {i}" for i in range(5)]

    def test_non_ascii_text_is_not_escaped(self) -> None:
        body = PipelineRequest(statements=[Execute.positional("SELECT ?", "héllo")]).to_json()
        assert "héllo" in body
