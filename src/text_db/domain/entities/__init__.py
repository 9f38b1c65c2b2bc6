"""Domain entities for the text table store.

Exports:
    - Column: Named, typed column
    - TableSchema: Table name plus ordered columns
    - Line format delimiters and name validation helpers
"""

from text_db.domain.entities.column import (
    FIELD_DELIMITER,
    HEADER_MARKER,
    LINE_BREAKS,
    TYPE_SEPARATOR,
    Column,
    TableSchema,
    column_name_problem,
    table_name_problem,
)

__all__ = [
    "Column",
    "TableSchema",
    "FIELD_DELIMITER",
    "TYPE_SEPARATOR",
    "HEADER_MARKER",
    "LINE_BREAKS",
    "column_name_problem",
    "table_name_problem",
]
