"""Value objects for the text table store domain.

Value objects are immutable types that represent domain concepts.
They have no identity - two value objects with the same attributes are equal.

Exports:
    - ColumnType: Closed set of column types (INTEGER, BOOLEAN, TEXT)
    - LineRange: Half-open line span of a table region
    - TransactionState: IDLE / ACTIVE
"""

from text_db.domain.value_objects.column_type import ColumnType
from text_db.domain.value_objects.line_range import (
    DATA_OFFSET,
    HEADER_OFFSET,
    SCHEMA_OFFSET,
    LineRange,
)
from text_db.domain.value_objects.transaction_types import TransactionState

__all__ = [
    "ColumnType",
    "LineRange",
    "HEADER_OFFSET",
    "SCHEMA_OFFSET",
    "DATA_OFFSET",
    "TransactionState",
]
