"""Table Database port - the operation contract of the store.

This inbound port is what callers (the REST adapter, embedding
applications) program against. TextDatabase is the implementation.

Failures are raised as TextDBError subclasses (see domain.exceptions);
each operation documents the kinds it can raise.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Callable, Protocol, Sequence

from text_db.domain.entities import Column, TableSchema
from text_db.domain.value_objects import ColumnType

ColumnSpec = Column | tuple[str, ColumnType | str]
SelectedRow = list[str | None]
RowPredicate = Callable[[SelectedRow], bool]


class TableDatabase(Protocol):
    """Protocol for the table store's public operations."""

    @abstractmethod
    def begin_transaction(self) -> None:
        """Open the transaction.

        Raises:
            TransactionAlreadyOpenError: If one is already open.
        """
        ...

    @abstractmethod
    def commit_transaction(self) -> None:
        """Publish the transaction's changes to the primary store.

        Raises:
            NoActiveTransactionError: If no transaction is open.
        """
        ...

    @abstractmethod
    def rollback_transaction(self) -> None:
        """Discard the transaction's changes.

        Raises:
            NoActiveTransactionError: If no transaction is open.
        """
        ...

    @abstractmethod
    def create_table(self, table_name: str, columns: Sequence[ColumnSpec]) -> None:
        """Create a table.

        Raises:
            InvalidNameError: If the table name is invalid.
            InvalidColumnsError: If the columns are missing or invalid.
            TableAlreadyExistsError: If the name is taken (case-insensitive).
        """
        ...

    @abstractmethod
    def insert_data(self, table_name: str, values: Sequence[str]) -> None:
        """Append one row to a table.

        Raises:
            TableNotFoundError: If the table does not exist.
            ArityMismatchError: If the value count differs from the column count.
            InvalidValueError: If a value contains the field delimiter.
            TypeMismatchError: If a value does not match its column type.
        """
        ...

    @abstractmethod
    def select(
        self,
        table_name: str,
        columns: Sequence[str] | None = None,
        filter: RowPredicate | None = None,
        order_by: str | None = None,
    ) -> list[SelectedRow]:
        """Query a table.

        Raises:
            TableNotFoundError: If the table does not exist.
            InvalidOrderColumnError: If ``order_by`` names no column.
        """
        ...

    @abstractmethod
    def drop_table(self, table_name: str) -> None:
        """Remove a table and all its rows.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        ...

    @abstractmethod
    def drop_database(self) -> None:
        """Replace the whole database with an empty one.

        Raises:
            TransactionAlreadyOpenError: If a transaction is open.
        """
        ...

    @abstractmethod
    def describe_table(self, table_name: str) -> TableSchema:
        """Read a table's schema.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        ...

    @abstractmethod
    def list_tables(self) -> list[str]:
        """Names of all tables in file order."""
        ...
