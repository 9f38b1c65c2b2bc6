"""Row codec and schema parser.

Converts between typed values and their canonical text form, and between
schema lines and Column lists.

Canonical forms:
    INTEGER  decimal digits with an optional leading '-' ("007" -> "7")
    BOOLEAN  "true" / "false" ("TRUE" -> "true")
    TEXT     the value unchanged

Integers are limited to the signed 32-bit range, matching the files this
format was first written by.
"""

from __future__ import annotations

import re
from typing import Sequence

from text_db.domain.entities import (
    FIELD_DELIMITER,
    HEADER_MARKER,
    LINE_BREAKS,
    TYPE_SEPARATOR,
    Column,
)
from text_db.domain.exceptions import (
    ArityMismatchError,
    InvalidColumnNameError,
    InvalidValueError,
    MalformedSchemaError,
    MalformedValueError,
    TypeMismatchError,
)
from text_db.domain.value_objects import ColumnType

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_INTEGER_PATTERN = re.compile(r"^\s*([+-]?)(\d+)\s*$", re.ASCII)
_BOOLEAN_LITERALS = {"true": True, "false": False}

Value = int | bool | str


def parse_schema(line: str) -> list[Column]:
    """Parse a schema line into its columns.

    Args:
        line: A line of the form ``name:Type|name:Type``.

    Returns:
        Columns in schema order.

    Raises:
        MalformedSchemaError: If a column token is not exactly ``name:type``.
        InvalidColumnNameError: If a column name is blank.
        UnknownColumnTypeError: If a type token is not recognised.
    """
    columns: list[Column] = []
    for token in line.split(FIELD_DELIMITER):
        parts = token.split(TYPE_SEPARATOR)
        if len(parts) != 2:
            raise MalformedSchemaError(f"Invalid column definition: '{token}'")

        name, type_token = parts
        if not name.strip():
            raise InvalidColumnNameError(f"Invalid column name in definition '{token}'")

        columns.append(Column(name, ColumnType.parse(type_token)))

    return columns


def format_schema(columns: Sequence[Column]) -> str:
    """Render columns as a schema line."""
    return FIELD_DELIMITER.join(str(column) for column in columns)


def encode_value(column_type: ColumnType, text: str) -> str:
    """Validate ``text`` against ``column_type`` and return its canonical form.

    Raises:
        TypeMismatchError: If ``text`` is not a valid literal of the type.
    """
    if column_type is ColumnType.INTEGER:
        return str(_parse_integer(text))
    if column_type is ColumnType.BOOLEAN:
        return "true" if _parse_boolean(text) else "false"
    return text


def decode_value(column_type: ColumnType, text: str) -> Value:
    """Turn a stored field back into a Python value.

    Raises:
        MalformedValueError: If the stored field is not a valid literal.
    """
    try:
        if column_type is ColumnType.INTEGER:
            return _parse_integer(text)
        if column_type is ColumnType.BOOLEAN:
            return _parse_boolean(text)
    except TypeMismatchError as e:
        raise MalformedValueError(f"Stored {column_type.token} field: {e.message}") from e
    return text


def split_row(line: str) -> list[str]:
    return line.split(FIELD_DELIMITER)


def encode_row(columns: Sequence[Column], values: Sequence[str]) -> str:
    """Validate and encode a row of values into a data line.

    Raises:
        ArityMismatchError: If the value count differs from the column count.
        InvalidValueError: If a value contains the delimiter or a line break,
            or the encoded line would be blank or read back as a header line.
        TypeMismatchError: If a value does not match its column's type.
    """
    if len(values) != len(columns):
        raise ArityMismatchError(expected=len(columns), actual=len(values))

    for value in values:
        if not isinstance(value, str):
            raise InvalidValueError(f"Values must be strings, got {type(value).__name__}")
        if FIELD_DELIMITER in value:
            raise InvalidValueError(
                f"Data values cannot contain the '{FIELD_DELIMITER}' character"
            )
        if any(brk in value for brk in LINE_BREAKS):
            raise InvalidValueError(f"Data values cannot contain line breaks: {value!r}")

    fields = [encode_value(column.type, value) for column, value in zip(columns, values)]
    line = FIELD_DELIMITER.join(fields)

    if not line.strip():
        raise InvalidValueError("A row cannot be blank; blank lines are skipped on read")
    if line.strip().startswith(HEADER_MARKER):
        raise InvalidValueError(
            f"A row cannot start with '{HEADER_MARKER}'; it would read back as a table header"
        )
    return line


def decode_row(
    columns: Sequence[Column | None], fields: Sequence[str | None]
) -> list[Value | None]:
    """Typed view of a (possibly projected) row.

    ``columns`` lines up with ``fields``; a None column or field decodes to None.
    """
    return [
        None if column is None or field is None else decode_value(column.type, field)
        for column, field in zip(columns, fields)
    ]


def _parse_integer(text: str) -> int:
    match = _INTEGER_PATTERN.match(text)
    if match is None:
        raise TypeMismatchError(f"'{text}' is not a valid integer")

    sign, digits = match.groups()
    value = int(digits)
    if sign == "-":
        value = -value
    if not INT_MIN <= value <= INT_MAX:
        raise TypeMismatchError(f"'{text}' is outside the 32-bit integer range")
    return value


def _parse_boolean(text: str) -> bool:
    value = _BOOLEAN_LITERALS.get(text.strip().lower())
    if value is None:
        raise TypeMismatchError(f"'{text}' is not a valid boolean")
    return value
