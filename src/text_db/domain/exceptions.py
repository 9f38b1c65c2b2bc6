"""Error taxonomy for the text table store.

Every failure surfaces as a distinct exception class tagged with an
ErrorKind, grouped into three categories:

    VALIDATION: caller fault, detected before any mutation
    STATE:      an operation's precondition does not hold
    PARSE:      the backing store is corrupt or was edited externally

Callers can match on the class (``except TableNotFoundError``), on the
category base (``except ValidationError``) or on ``error.kind``.
"""

from __future__ import annotations

from enum import Enum


class ErrorCategory(Enum):
    """Broad classes of failure."""

    VALIDATION = "validation"
    STATE = "state"
    PARSE = "parse"


class ErrorKind(Enum):
    """Programmatically distinguishable error kinds."""

    # Validation
    INVALID_NAME = "invalid_name"
    INVALID_COLUMNS = "invalid_columns"
    TABLE_ALREADY_EXISTS = "table_already_exists"
    ARITY_MISMATCH = "arity_mismatch"
    INVALID_VALUE = "invalid_value"
    TYPE_MISMATCH = "type_mismatch"
    INVALID_ORDER_COLUMN = "invalid_order_column"

    # State
    TRANSACTION_ALREADY_OPEN = "transaction_already_open"
    NO_ACTIVE_TRANSACTION = "no_active_transaction"
    TABLE_NOT_FOUND = "table_not_found"

    # Parse
    MALFORMED_SCHEMA = "malformed_schema"
    INVALID_COLUMN_NAME = "invalid_column_name"
    UNKNOWN_COLUMN_TYPE = "unknown_column_type"
    LINE_OUT_OF_RANGE = "line_out_of_range"
    MALFORMED_VALUE = "malformed_value"


class TextDBError(Exception):
    """Base class for all text table store errors."""

    kind: ErrorKind
    category: ErrorCategory

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.value!r}, message={self.message!r})"


class ValidationError(TextDBError):
    """Caller supplied invalid input; nothing was written."""

    category = ErrorCategory.VALIDATION


class StateError(TextDBError):
    """Operation precondition (transaction state, table presence) not met."""

    category = ErrorCategory.STATE


class StorageParseError(TextDBError):
    """The backing store content cannot be interpreted."""

    category = ErrorCategory.PARSE


# Validation errors


class InvalidNameError(ValidationError):
    kind = ErrorKind.INVALID_NAME


class InvalidColumnsError(ValidationError):
    kind = ErrorKind.INVALID_COLUMNS


class TableAlreadyExistsError(ValidationError):
    kind = ErrorKind.TABLE_ALREADY_EXISTS

    def __init__(self, table_name: str) -> None:
        super().__init__(f"Table '{table_name}' already exists")
        self.table_name = table_name


class ArityMismatchError(ValidationError):
    kind = ErrorKind.ARITY_MISMATCH

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"Row has {actual} values but the table has {expected} columns"
        )
        self.expected = expected
        self.actual = actual


class InvalidValueError(ValidationError):
    kind = ErrorKind.INVALID_VALUE


class TypeMismatchError(ValidationError):
    kind = ErrorKind.TYPE_MISMATCH


class InvalidOrderColumnError(ValidationError):
    kind = ErrorKind.INVALID_ORDER_COLUMN

    def __init__(self, column_name: str) -> None:
        super().__init__(f"Invalid column name for ordering: '{column_name}'")
        self.column_name = column_name


# State errors


class TransactionAlreadyOpenError(StateError):
    kind = ErrorKind.TRANSACTION_ALREADY_OPEN


class NoActiveTransactionError(StateError):
    kind = ErrorKind.NO_ACTIVE_TRANSACTION


class TableNotFoundError(StateError):
    kind = ErrorKind.TABLE_NOT_FOUND

    def __init__(self, table_name: str) -> None:
        super().__init__(f"Table '{table_name}' not found")
        self.table_name = table_name


# Parse errors


class MalformedSchemaError(StorageParseError):
    kind = ErrorKind.MALFORMED_SCHEMA


class InvalidColumnNameError(StorageParseError):
    kind = ErrorKind.INVALID_COLUMN_NAME


class UnknownColumnTypeError(StorageParseError):
    kind = ErrorKind.UNKNOWN_COLUMN_TYPE

    def __init__(self, token: str) -> None:
        super().__init__(f"Unknown column type: '{token}'")
        self.token = token


class LineOutOfRangeError(StorageParseError):
    kind = ErrorKind.LINE_OUT_OF_RANGE

    def __init__(self, line_number: int, line_count: int) -> None:
        super().__init__(
            f"Line {line_number} out of range (store has {line_count} lines)"
        )
        self.line_number = line_number
        self.line_count = line_count


class MalformedValueError(StorageParseError):
    """A stored field is not a valid literal of its column's type."""

    kind = ErrorKind.MALFORMED_VALUE
