"""Query Engine - projection, filtering and ordering over a table region.

Pipeline for one select:

    scan      data lines of the region, blank lines skipped
    project   requested columns, in request order
    filter    caller predicate over the projected row
    sort      optional, by a column of the full (unprojected) row

Rows are pulled lazily from the region and materialised only at the end,
so the caller gets a plain list that later writes cannot change.

Ordering compares the raw stored strings ordinally, so an Integer column
orders "10" before "2". Python's sort is stable, so ties keep file order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Sequence

from text_db.domain.entities import Column
from text_db.domain.exceptions import InvalidOrderColumnError
from text_db.domain.services.row_codec import split_row
from text_db.domain.value_objects import LineRange

Row = list[str | None]
Predicate = Callable[[Row], bool]


@dataclass
class QueryResult:
    """Materialised select result."""

    rows: list[Row]
    rows_scanned: int = 0


@dataclass
class ScannedRow:
    """A stored row together with its projection."""

    stored: list[str]
    projected: Row


def scan(lines: Sequence[str], line_range: LineRange) -> Iterator[list[str]]:
    """Yield the split data rows of a region, skipping blank lines."""
    for line_number in range(line_range.data_start, line_range.end):
        line = lines[line_number]
        if not line.strip():
            continue
        yield split_row(line)


def column_index(all_columns: Sequence[Column], name: str) -> int | None:
    """Schema index of the column called ``name`` (case-insensitive), or None."""
    for index, column in enumerate(all_columns):
        if column.matches(name):
            return index
    return None


def project(
    all_columns: Sequence[Column], requested_names: Sequence[str] | None
) -> list[int | None]:
    """Resolve requested column names to schema indices.

    ``None`` selects every column in schema order. A name that matches no
    column maps to None and produces a None field in every result row.
    """
    if requested_names is None:
        return list(range(len(all_columns)))
    return [column_index(all_columns, name) for name in requested_names]


def apply_projection(row: Sequence[str], indices: Sequence[int | None]) -> Row:
    return [
        row[index] if index is not None and index < len(row) else None
        for index in indices
    ]


def filter_rows(rows: Iterable[ScannedRow], predicate: Predicate | None) -> Iterator[ScannedRow]:
    """Keep the rows whose projection satisfies ``predicate``."""
    if predicate is None:
        yield from rows
        return
    for row in rows:
        if predicate(row.projected):
            yield row


def order_index(all_columns: Sequence[Column], order_by: str) -> int:
    """Schema index of the ordering column.

    Raises:
        InvalidOrderColumnError: If no column matches ``order_by``.
    """
    index = column_index(all_columns, order_by)
    if index is None:
        raise InvalidOrderColumnError(order_by)
    return index


def sort_rows(
    rows: Iterable[ScannedRow], all_columns: Sequence[Column], order_by: str
) -> list[ScannedRow]:
    """Stable ascending sort on the stored ``order_by`` field.

    The column is resolved before ``rows`` is consumed, so an unknown
    column fails without reading the region.
    """
    index = order_index(all_columns, order_by)
    return sorted(rows, key=lambda row: _sort_key(row.stored, index))


def execute(
    lines: Sequence[str],
    line_range: LineRange,
    all_columns: Sequence[Column],
    requested_names: Sequence[str] | None = None,
    predicate: Predicate | None = None,
    order_by: str | None = None,
) -> QueryResult:
    """Run the full select pipeline over one table region."""
    indices = project(all_columns, requested_names)
    scanned = 0

    def scanned_rows() -> Iterator[ScannedRow]:
        nonlocal scanned
        for stored in scan(lines, line_range):
            scanned += 1
            yield ScannedRow(stored, apply_projection(stored, indices))

    matched = filter_rows(scanned_rows(), predicate)
    if order_by:
        ordered = sort_rows(matched, all_columns, order_by)
    else:
        ordered = list(matched)

    return QueryResult(rows=[row.projected for row in ordered], rows_scanned=scanned)


def _sort_key(row: Sequence[str | None], index: int) -> str:
    # Short rows sort as an empty field
    if index < len(row) and row[index] is not None:
        return row[index]
    return ""
