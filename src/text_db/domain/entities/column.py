"""Column and table schema entities."""

from __future__ import annotations

from dataclasses import dataclass

from text_db.domain.value_objects import ColumnType

# Delimiters of the line format; none of them can be escaped
FIELD_DELIMITER = "|"
TYPE_SEPARATOR = ":"
HEADER_MARKER = "#"
LINE_BREAKS = ("\n", "\r")


def column_name_problem(name: str) -> str | None:
    """Return why ``name`` cannot be a column name, or None if it can."""
    if not name or not name.strip():
        return "column name is empty"
    if FIELD_DELIMITER in name or TYPE_SEPARATOR in name:
        return f"column name '{name}' contains '{FIELD_DELIMITER}' or '{TYPE_SEPARATOR}'"
    if any(brk in name for brk in LINE_BREAKS):
        return f"column name {name!r} contains a line break"
    if name.strip().startswith(HEADER_MARKER):
        return f"column name '{name}' starts with '{HEADER_MARKER}'"
    return None


def table_name_problem(name: str) -> str | None:
    """Return why ``name`` cannot be a table name, or None if it can."""
    if not name or not name.strip():
        return "table name is empty"
    if HEADER_MARKER in name or FIELD_DELIMITER in name:
        return f"table name '{name}' contains '{HEADER_MARKER}' or '{FIELD_DELIMITER}'"
    if any(brk in name for brk in LINE_BREAKS):
        return f"table name {name!r} contains a line break"
    if name != name.strip():
        return f"table name {name!r} has leading or trailing whitespace"
    return None


@dataclass(frozen=True)
class Column:
    """A named, typed column."""

    name: str
    type: ColumnType

    def matches(self, name: str) -> bool:
        """Case-insensitive name comparison."""
        return self.name.lower() == name.lower()

    def __str__(self) -> str:
        return f"{self.name}{TYPE_SEPARATOR}{self.type.token}"


@dataclass(frozen=True)
class TableSchema:
    """A table's name and ordered columns, as read from the store."""

    name: str
    columns: tuple[Column, ...]

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.columns]
