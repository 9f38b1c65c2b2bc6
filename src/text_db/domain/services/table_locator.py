"""Table Locator - finds table regions in the backing store.

The store has no index: a table is found by scanning every line for a
header marker. A header is any line that, trimmed, starts with '#'; the
rest of the trimmed line is the table name. A region runs from its header
to the next header (of any table) or to EOF.
"""

from __future__ import annotations

from typing import Iterator, Sequence

from text_db.domain.entities import HEADER_MARKER
from text_db.domain.exceptions import TableNotFoundError
from text_db.domain.value_objects import LineRange


def header_name(line: str) -> str | None:
    """Table name of a header line, or None if ``line`` is not a header."""
    stripped = line.strip()
    if not stripped.startswith(HEADER_MARKER):
        return None
    return stripped[len(HEADER_MARKER):]


def iter_headers(lines: Sequence[str], start: int = 0) -> Iterator[tuple[int, str]]:
    """Yield ``(line_number, table_name)`` for each header at or after ``start``."""
    for line_number in range(start, len(lines)):
        name = header_name(lines[line_number])
        if name is not None:
            yield line_number, name


def find(lines: Sequence[str], table_name: str) -> LineRange | None:
    """Locate ``table_name``; None if no header matches.

    Names are compared case-insensitively. The first matching header wins.
    """
    wanted = table_name.lower()
    for start, name in iter_headers(lines):
        if name.lower() != wanted:
            continue
        end = next((n for n, _ in iter_headers(lines, start + 1)), len(lines))
        return LineRange(start, end)
    return None


def locate(lines: Sequence[str], table_name: str) -> LineRange:
    """Locate ``table_name``.

    Raises:
        TableNotFoundError: If no header matches.
    """
    line_range = find(lines, table_name)
    if line_range is None:
        raise TableNotFoundError(table_name)
    return line_range


def table_names(lines: Sequence[str]) -> list[str]:
    """Names of all tables in file order."""
    return [name for _, name in iter_headers(lines)]
