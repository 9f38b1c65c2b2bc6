"""Unit tests for the row codec and schema parser."""

from __future__ import annotations

import pytest

from text_db.domain.entities import Column
from text_db.domain.exceptions import (
    ArityMismatchError,
    ErrorCategory,
    ErrorKind,
    InvalidColumnNameError,
    InvalidValueError,
    MalformedSchemaError,
    MalformedValueError,
    TypeMismatchError,
    UnknownColumnTypeError,
)
from text_db.domain.services import row_codec
from text_db.domain.value_objects import ColumnType

USERS = [
    Column("id", ColumnType.INTEGER),
    Column("name", ColumnType.TEXT),
    Column("active", ColumnType.BOOLEAN),
]


@pytest.mark.unit
class TestColumnType:
    @pytest.mark.parametrize(
        "token, expected",
        [
            ("Int", ColumnType.INTEGER),
            ("integer", ColumnType.INTEGER),
            ("BOOL", ColumnType.BOOLEAN),
            ("Boolean", ColumnType.BOOLEAN),
            ("String", ColumnType.TEXT),
            ("text", ColumnType.TEXT),
        ],
    )
    def test_parse_tokens(self, token: str, expected: ColumnType) -> None:
        assert ColumnType.parse(token) is expected

    def test_unknown_token(self) -> None:
        with pytest.raises(UnknownColumnTypeError) as exc_info:
            ColumnType.parse("Float")

        assert exc_info.value.kind is ErrorKind.UNKNOWN_COLUMN_TYPE
        assert exc_info.value.token == "Float"

    def test_canonical_tokens(self) -> None:
        assert [t.token for t in ColumnType] == ["Int", "Bool", "String"]


@pytest.mark.unit
class TestParseSchema:
    def test_parse_schema(self) -> None:
        columns = row_codec.parse_schema("id:Int|name:String|active:Bool")

        assert columns == USERS

    def test_type_tokens_case_insensitive(self) -> None:
        columns = row_codec.parse_schema("a:INTEGER|b:text")

        assert [c.type for c in columns] == [ColumnType.INTEGER, ColumnType.TEXT]

    def test_format_schema_round_trips(self) -> None:
        line = row_codec.format_schema(USERS)

        assert line == "id:Int|name:String|active:Bool"
        assert row_codec.parse_schema(line) == USERS

    @pytest.mark.parametrize("line", ["id", "id:Int:extra", "id:Int|name", ""])
    def test_malformed(self, line: str) -> None:
        with pytest.raises(MalformedSchemaError):
            row_codec.parse_schema(line)

    def test_blank_column_name(self) -> None:
        with pytest.raises(InvalidColumnNameError):
            row_codec.parse_schema("id:Int| :String")

    def test_unknown_type(self) -> None:
        with pytest.raises(UnknownColumnTypeError):
            row_codec.parse_schema("id:Int|price:Decimal")


@pytest.mark.unit
class TestEncodeValue:
    @pytest.mark.parametrize(
        "text, expected",
        [("007", "7"), ("-12", "-12"), ("+5", "5"), (" 42 ", "42"), ("0", "0")],
    )
    def test_integer_canonical_form(self, text: str, expected: str) -> None:
        assert row_codec.encode_value(ColumnType.INTEGER, text) == expected

    @pytest.mark.parametrize("text", ["", "abc", "1.5", "1e3", "1_000", "2147483648"])
    def test_integer_rejects(self, text: str) -> None:
        with pytest.raises(TypeMismatchError):
            row_codec.encode_value(ColumnType.INTEGER, text)

    def test_integer_bounds(self) -> None:
        assert row_codec.encode_value(ColumnType.INTEGER, "2147483647") == "2147483647"
        assert row_codec.encode_value(ColumnType.INTEGER, "-2147483648") == "-2147483648"

    @pytest.mark.parametrize(
        "text, expected",
        [("TRUE", "true"), ("True", "true"), ("false", "false"), (" FaLsE ", "false")],
    )
    def test_boolean_canonical_form(self, text: str, expected: str) -> None:
        assert row_codec.encode_value(ColumnType.BOOLEAN, text) == expected

    @pytest.mark.parametrize("text", ["yes", "1", "", "t"])
    def test_boolean_rejects(self, text: str) -> None:
        with pytest.raises(TypeMismatchError):
            row_codec.encode_value(ColumnType.BOOLEAN, text)

    def test_text_unchanged(self) -> None:
        assert row_codec.encode_value(ColumnType.TEXT, "  Mixed Case  ") == "  Mixed Case  "

    def test_decode_gives_semantic_value(self) -> None:
        assert row_codec.decode_value(
            ColumnType.INTEGER, row_codec.encode_value(ColumnType.INTEGER, "007")
        ) == 7
        assert row_codec.decode_value(
            ColumnType.BOOLEAN, row_codec.encode_value(ColumnType.BOOLEAN, "TRUE")
        ) is True
        assert row_codec.decode_value(ColumnType.TEXT, "hello") == "hello"

    @pytest.mark.parametrize(
        "column_type, stored",
        [(ColumnType.INTEGER, "seven"), (ColumnType.INTEGER, "9999999999"), (ColumnType.BOOLEAN, "yes")],
    )
    def test_decode_corrupt_value(self, column_type: ColumnType, stored: str) -> None:
        with pytest.raises(MalformedValueError) as exc_info:
            row_codec.decode_value(column_type, stored)

        assert exc_info.value.category is ErrorCategory.PARSE


@pytest.mark.unit
class TestEncodeRow:
    def test_encode_row(self) -> None:
        assert row_codec.encode_row(USERS, ["01", "Alice", "TRUE"]) == "1|Alice|true"

    def test_arity_mismatch(self) -> None:
        with pytest.raises(ArityMismatchError) as exc_info:
            row_codec.encode_row(USERS, ["1", "Alice"])

        assert exc_info.value.expected == 3
        assert exc_info.value.actual == 2

    def test_delimiter_rejected(self) -> None:
        with pytest.raises(InvalidValueError):
            row_codec.encode_row(USERS, ["1", "Al|ice", "true"])

    def test_line_break_rejected(self) -> None:
        with pytest.raises(InvalidValueError):
            row_codec.encode_row(USERS, ["1", "Al\nice", "true"])

    def test_header_lookalike_rejected(self) -> None:
        columns = [Column("tag", ColumnType.TEXT)]

        with pytest.raises(InvalidValueError):
            row_codec.encode_row(columns, ["  #hashtag"])

    @pytest.mark.parametrize("value", ["", "   ", "\t"])
    def test_blank_row_rejected(self, value: str) -> None:
        columns = [Column("body", ColumnType.TEXT)]

        with pytest.raises(InvalidValueError):
            row_codec.encode_row(columns, [value])

    def test_empty_fields_in_wider_row_allowed(self) -> None:
        columns = [Column("a", ColumnType.TEXT), Column("b", ColumnType.TEXT)]

        assert row_codec.encode_row(columns, ["", ""]) == "|"

    def test_hash_allowed_after_first_field(self) -> None:
        assert row_codec.encode_row(USERS, ["1", "#1 fan", "false"]) == "1|#1 fan|false"

    def test_decode_row_with_absent_fields(self) -> None:
        assert row_codec.decode_row([USERS[0], None, USERS[2]], ["7", None, "true"]) == [
            7,
            None,
            True,
        ]
