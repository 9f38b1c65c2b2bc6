"""Column types supported by the store.

The set of types is closed. Each type has one canonical on-disk token and
a handful of accepted spellings, all matched case-insensitively.
"""

from __future__ import annotations

from enum import Enum

from text_db.domain.exceptions import UnknownColumnTypeError


class ColumnType(Enum):
    """Type of a table column; the value is the canonical on-disk token."""

    INTEGER = "Int"
    BOOLEAN = "Bool"
    TEXT = "String"

    @property
    def token(self) -> str:
        """Token written into schema lines."""
        return self.value

    @classmethod
    def parse(cls, token: str) -> ColumnType:
        """Resolve a type token to a ColumnType.

        Raises:
            UnknownColumnTypeError: If the token names no known type.
        """
        column_type = _TOKENS.get(token.strip().lower())
        if column_type is None:
            raise UnknownColumnTypeError(token)
        return column_type


_TOKENS: dict[str, ColumnType] = {
    "int": ColumnType.INTEGER,
    "integer": ColumnType.INTEGER,
    "bool": ColumnType.BOOLEAN,
    "boolean": ColumnType.BOOLEAN,
    "string": ColumnType.TEXT,
    "str": ColumnType.TEXT,
    "text": ColumnType.TEXT,
}
