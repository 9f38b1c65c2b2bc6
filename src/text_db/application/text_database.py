"""Text Database - unified entry point for the table store.

This module provides the TextDatabase class, which implements the
TableDatabase port by composing the domain services:

    SnapshotTransactionManager  which store is current
    table_locator               where a table's lines are
    row_codec                   schema lines and row encoding
    query_engine                projection, filter, ordering

Every operation reads the current store whole, works on the lines in
memory and, for mutations, rewrites the store whole. All validation
happens before the write, so a failed operation leaves the store
untouched.

Usage:
    from text_db.application import TextDatabase

    with TextDatabase("/path/to/store.tdb") as db:
        db.create_table("users", [("id", "Integer"), ("name", "Text")])
        db.insert_data("users", ["1", "Alice"])
        rows = db.select("users", order_by="name")
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator, Sequence

from text_db.adapters.outbound.file_text_store import FileTextStore
from text_db.domain.entities import (
    HEADER_MARKER,
    Column,
    TableSchema,
    column_name_problem,
    table_name_problem,
)
from text_db.domain.exceptions import (
    InvalidColumnsError,
    InvalidNameError,
    LineOutOfRangeError,
    MalformedSchemaError,
    TableAlreadyExistsError,
    TextDBError,
    TransactionAlreadyOpenError,
    UnknownColumnTypeError,
)
from text_db.domain.services import query_engine, row_codec, table_locator
from text_db.domain.services.transaction_manager import SnapshotTransactionManager
from text_db.domain.value_objects import ColumnType, LineRange
from text_db.infrastructure.config import Config
from text_db.infrastructure.logging import get_logger
from text_db.infrastructure.metrics import MetricsRegistry, get_metrics
from text_db.infrastructure.tracing import trace_span
from text_db.ports.inbound.database import ColumnSpec, RowPredicate, SelectedRow
from text_db.ports.outbound.text_store import TextStore


class TextDatabase:
    """File-backed table store.

    Implements the TableDatabase port. One instance owns one primary
    store and at most one open transaction.

    Thread Safety:
        None. Instances must not be shared between threads, and two
        instances must not write the same file.
    """

    def __init__(
        self,
        path: str | Path | None = None,
        *,
        config: Config | None = None,
        store: TextStore | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Open (and create if missing) a database.

        Args:
            path: Database file. Defaults to ``config.storage.database_path``.
            config: Configuration (environment-derived if None).
            store: Pre-built primary store; overrides ``path``.
            metrics: Metrics registry (global registry if None).
        """
        self._config = config or Config()
        storage = self._config.storage

        if store is None:
            store = FileTextStore(path or storage.database_path, encoding=storage.encoding)
        store.ensure_created()
        self._store = store

        if storage.snapshot_dir is not None:
            storage.snapshot_dir.mkdir(parents=True, exist_ok=True)

        self._metrics = metrics or get_metrics()
        self._logger = get_logger(__name__, database=str(store.path))
        self._txn_manager = SnapshotTransactionManager(
            primary=store,
            store_factory=lambda p: FileTextStore(p, encoding=storage.encoding),
            snapshot_dir=storage.snapshot_dir,
            metrics=self._metrics,
        )

    @property
    def path(self) -> Path:
        """Path of the primary store."""
        return self._store.path

    @property
    def in_transaction(self) -> bool:
        return self._txn_manager.is_active

    @property
    def transaction_manager(self) -> SnapshotTransactionManager:
        return self._txn_manager

    # Transactions

    def begin_transaction(self) -> None:
        with self._operation("begin_transaction"):
            self._txn_manager.begin()

    def commit_transaction(self) -> None:
        with self._operation("commit_transaction"):
            self._txn_manager.commit()

    def rollback_transaction(self) -> None:
        with self._operation("rollback_transaction"):
            self._txn_manager.rollback()

    # Schema

    def create_table(self, table_name: str, columns: Sequence[ColumnSpec]) -> None:
        """Append a new, empty table region to the current store.

        Args:
            table_name: Unique (case-insensitive) table name.
            columns: Column objects or ``(name, type)`` pairs, where type is a
                ColumnType or a type token such as "Integer" or "bool".

        Raises:
            InvalidNameError: If the table name is invalid.
            InvalidColumnsError: If the columns are empty, invalid or duplicated.
            TableAlreadyExistsError: If the table exists.
        """
        with self._operation("create_table", table_name):
            problem = table_name_problem(table_name) if isinstance(table_name, str) else None
            if not isinstance(table_name, str) or problem:
                raise InvalidNameError(f"Invalid table name: {problem or table_name!r}")
            resolved = self._resolve_columns(columns)

            store, lines = self._read()
            if table_locator.find(lines, table_name) is not None:
                raise TableAlreadyExistsError(table_name)

            lines.extend([f"{HEADER_MARKER}{table_name}", row_codec.format_schema(resolved), ""])
            self._write(store, lines)

            self._logger.info(
                "table_created",
                table=table_name,
                columns=[str(c) for c in resolved],
            )

    def describe_table(self, table_name: str) -> TableSchema:
        with self._operation("describe_table", table_name):
            _, lines = self._read()
            line_range = table_locator.locate(lines, table_name)
            name = table_locator.header_name(lines[line_range.start]) or table_name
            return TableSchema(name, tuple(self._schema(lines, line_range)))

    def list_tables(self) -> list[str]:
        with self._operation("list_tables"):
            _, lines = self._read()
            return table_locator.table_names(lines)

    def table_exists(self, table_name: str) -> bool:
        _, lines = self._read()
        return table_locator.find(lines, table_name) is not None

    # Data

    def insert_data(self, table_name: str, values: Sequence[str]) -> None:
        """Append one row as the last line of the table's region.

        Raises:
            TableNotFoundError: If the table does not exist.
            ArityMismatchError: If the value count differs from the column count.
            InvalidValueError: If a value contains '|' or a line break.
            TypeMismatchError: If a value does not parse as its column's type.
        """
        with self._operation("insert_data", table_name):
            store, lines = self._read()
            line_range = table_locator.locate(lines, table_name)
            columns = self._schema(lines, line_range)

            lines.insert(line_range.end, row_codec.encode_row(columns, list(values)))
            self._write(store, lines)

            self._logger.debug("row_inserted", table=table_name, line=line_range.end)

    def select(
        self,
        table_name: str,
        columns: Sequence[str] | None = None,
        filter: RowPredicate | None = None,
        order_by: str | None = None,
    ) -> list[SelectedRow]:
        """Query a table.

        Args:
            table_name: Table to read.
            columns: Column names to return, in order; None for all columns.
                Unknown names yield a None field instead of an error.
            filter: Predicate over the projected row; None keeps every row.
            order_by: Column to sort by (ordinal string order, stable).

        Returns:
            The projected rows. The list is detached from the store.

        Raises:
            TableNotFoundError: If the table does not exist.
            InvalidOrderColumnError: If ``order_by`` names no column.
        """
        with self._operation("select", table_name):
            _, lines = self._read()
            line_range = table_locator.locate(lines, table_name)
            all_columns = self._schema(lines, line_range)

            result = query_engine.execute(
                lines,
                line_range,
                all_columns,
                requested_names=list(columns) if columns is not None else None,
                predicate=filter,
                order_by=order_by,
            )

            self._metrics.rows_scanned_total.inc(result.rows_scanned)
            self._metrics.rows_returned_total.inc(len(result.rows))
            return result.rows

    # Destruction

    def drop_table(self, table_name: str) -> None:
        """Remove a table's whole region.

        Raises:
            TableNotFoundError: If the table does not exist.
        """
        with self._operation("drop_table", table_name):
            store, lines = self._read()
            line_range = table_locator.locate(lines, table_name)

            del lines[line_range.start:line_range.end]
            self._write(store, lines)

            self._logger.info("table_dropped", table=table_name, lines_removed=len(line_range))

    def drop_database(self) -> None:
        """Delete the primary store and recreate it empty.

        Raises:
            TransactionAlreadyOpenError: If a transaction is open; its
                snapshot would otherwise outlive the database it copies.
        """
        with self._operation("drop_database"):
            if self._txn_manager.is_active:
                raise TransactionAlreadyOpenError(
                    "Cannot drop the database while a transaction is in progress"
                )
            self._store.delete()
            self._store.ensure_created()
            self._logger.info("database_dropped")

    # Lifecycle

    def get_stats(self) -> dict[str, Any]:
        txn_stats = self._txn_manager.get_stats()
        return {
            "database_path": str(self.path),
            "in_transaction": txn_stats.active,
            "tables": len(self.list_tables()),
            "transactions": {
                "committed": txn_stats.committed_total,
                "rolled_back": txn_stats.rolled_back_total,
            },
        }

    def close(self) -> None:
        """Roll back any open transaction."""
        self._txn_manager.close()

    def __enter__(self) -> "TextDatabase":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

    # Internals

    def _read(self) -> tuple[TextStore, list[str]]:
        store = self._txn_manager.current_store()
        return store, store.read_lines()

    def _write(self, store: TextStore, lines: list[str]) -> None:
        store.write_lines(lines)
        self._metrics.store_rewrites_total.inc()

    def _schema(self, lines: list[str], line_range: LineRange) -> list[Column]:
        schema_line = line_range.schema_line
        if schema_line >= len(lines):
            raise LineOutOfRangeError(schema_line, len(lines))
        if schema_line >= line_range.end:
            raise MalformedSchemaError(
                f"Table at line {line_range.start} has no schema line"
            )
        return row_codec.parse_schema(lines[schema_line])

    def _resolve_columns(self, columns: Sequence[ColumnSpec] | None) -> list[Column]:
        if not columns:
            raise InvalidColumnsError("Columns cannot be null or empty")

        resolved: list[Column] = []
        seen: set[str] = set()
        for spec in columns:
            column = self._resolve_column(spec)
            problem = column_name_problem(column.name)
            if problem:
                raise InvalidColumnsError(f"Invalid column name: {problem}")
            key = column.name.lower()
            if key in seen:
                raise InvalidColumnsError(f"Duplicate column name: '{column.name}'")
            seen.add(key)
            resolved.append(column)
        return resolved

    @staticmethod
    def _resolve_column(spec: ColumnSpec) -> Column:
        if isinstance(spec, Column):
            name, column_type = spec.name, spec.type
        elif isinstance(spec, (tuple, list)) and len(spec) == 2:
            name, column_type = spec
        else:
            raise InvalidColumnsError(f"Invalid column definition: {spec!r}")

        if not isinstance(name, str):
            raise InvalidColumnsError(f"Column name must be a string, got {name!r}")
        if isinstance(column_type, str):
            try:
                column_type = ColumnType.parse(column_type)
            except UnknownColumnTypeError as e:
                raise InvalidColumnsError(f"Invalid type for column '{name}': {e}") from e
        if not isinstance(column_type, ColumnType):
            raise InvalidColumnsError(f"Invalid type for column '{name}': {column_type!r}")
        return Column(name, column_type)

    @contextmanager
    def _operation(
        self, operation: str, table_name: str | None = None
    ) -> Generator[None, None, None]:
        """Trace, time and count one public operation."""
        start = time.perf_counter()
        attributes = {"db.operation": operation, "db.table": table_name}
        with trace_span(f"text_db.{operation}", attributes) as span:
            try:
                yield
            except TextDBError as e:
                span.set_attribute("error.kind", e.kind.value)
                self._metrics.operations_total.labels(operation=operation, status="error").inc()
                self._logger.warning(
                    "operation_failed",
                    operation=operation,
                    table=table_name,
                    error=e.kind.value,
                    detail=e.message,
                )
                raise
            except OSError as e:
                self._metrics.operations_total.labels(operation=operation, status="error").inc()
                self._logger.error(
                    "operation_failed",
                    operation=operation,
                    table=table_name,
                    error="io_error",
                    detail=str(e),
                )
                raise
            else:
                self._metrics.operations_total.labels(operation=operation, status="success").inc()
            finally:
                self._metrics.operation_latency_seconds.labels(operation=operation).observe(
                    time.perf_counter() - start
                )
