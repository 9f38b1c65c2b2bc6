"""Transaction Manager - single-slot snapshot transactions.

A transaction is a full copy of the primary store (the snapshot). While it
is open every operation reads and writes the snapshot; commit copies the
snapshot back over the primary store, rollback throws it away.

    begin()     IDLE   -> ACTIVE   copy primary -> snapshot
    commit()    ACTIVE -> IDLE     copy snapshot -> primary, delete snapshot
    rollback()  ACTIVE -> IDLE     delete snapshot

Only one transaction can be open at a time. The state lives in a
TransactionContext owned by the manager, which is owned by one engine
instance; nothing is shared between engines.

There is no locking: two engines (or processes) working on the same
primary file will overwrite each other's commits.
"""

from __future__ import annotations

import os
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from text_db.domain.exceptions import NoActiveTransactionError, TransactionAlreadyOpenError
from text_db.domain.value_objects import TransactionState
from text_db.infrastructure.logging import get_logger
from text_db.infrastructure.metrics import MetricsRegistry, get_metrics
from text_db.ports.outbound.text_store import TextStore

SNAPSHOT_PREFIX = "text_db_txn_"
SNAPSHOT_SUFFIX = ".tdb"

StoreFactory = Callable[[Path], TextStore]


@dataclass
class TransactionContext:
    """Which store is current, and since when."""

    state: TransactionState = TransactionState.IDLE
    snapshot: TextStore | None = None
    started_at: float | None = None

    @property
    def is_active(self) -> bool:
        return self.state.is_active()


@dataclass
class TransactionStats:
    """Statistics for transaction monitoring."""

    active: bool
    committed_total: int
    rolled_back_total: int


class SnapshotTransactionManager:
    """Snapshot-copy-swap transaction manager.

    Usage:
        txn_mgr = SnapshotTransactionManager(primary, store_factory=FileTextStore)
        txn_mgr.begin()
        txn_mgr.current_store().write_lines([...])
        txn_mgr.commit()
    """

    def __init__(
        self,
        primary: TextStore,
        store_factory: StoreFactory,
        snapshot_dir: Path | None = None,
        metrics: MetricsRegistry | None = None,
    ) -> None:
        """Initialize the transaction manager.

        Args:
            primary: The primary store.
            store_factory: Builds a store over a snapshot file path.
            snapshot_dir: Directory for snapshot files (system temp dir if None).
            metrics: Metrics registry (global registry if None).
        """
        self._primary = primary
        self._store_factory = store_factory
        self._snapshot_dir = snapshot_dir
        self._metrics = metrics or get_metrics()
        self._logger = get_logger(__name__, primary=str(primary.path))

        self._context = TransactionContext()
        self._committed_total = 0
        self._rolled_back_total = 0

    @property
    def context(self) -> TransactionContext:
        return self._context

    @property
    def primary(self) -> TextStore:
        return self._primary

    @property
    def is_active(self) -> bool:
        return self._context.is_active

    def current_store(self) -> TextStore:
        """The snapshot while a transaction is open, else the primary store."""
        if self._context.is_active and self._context.snapshot is not None:
            return self._context.snapshot
        return self._primary

    def begin(self) -> None:
        """Open a transaction by snapshotting the primary store.

        Raises:
            TransactionAlreadyOpenError: If a transaction is already open.
        """
        if not self._context.state.can_begin():
            raise TransactionAlreadyOpenError("A transaction is already in progress")

        fd, name = tempfile.mkstemp(
            prefix=SNAPSHOT_PREFIX,
            suffix=SNAPSHOT_SUFFIX,
            dir=self._snapshot_dir,
        )
        os.close(fd)
        snapshot_path = Path(name)

        try:
            self._primary.copy_to(snapshot_path)
        except OSError:
            snapshot_path.unlink(missing_ok=True)
            raise

        self._context = TransactionContext(
            state=TransactionState.ACTIVE,
            snapshot=self._store_factory(snapshot_path),
            started_at=time.monotonic(),
        )
        self._metrics.transactions_active.set(1)
        self._logger.info("transaction_begun", snapshot=str(snapshot_path))

    def commit(self) -> None:
        """Copy the snapshot over the primary store and close the transaction.

        If the copy fails the transaction stays open.

        Raises:
            NoActiveTransactionError: If no transaction is open.
        """
        snapshot = self._require_snapshot()
        snapshot.copy_to(self._primary.path)
        duration = self._finish(snapshot)

        self._committed_total += 1
        self._metrics.transactions_total.labels(outcome="commit").inc()
        self._logger.info("transaction_committed", duration_seconds=duration)

    def rollback(self) -> None:
        """Discard the snapshot and close the transaction.

        Raises:
            NoActiveTransactionError: If no transaction is open.
        """
        snapshot = self._require_snapshot()
        duration = self._finish(snapshot)

        self._rolled_back_total += 1
        self._metrics.transactions_total.labels(outcome="rollback").inc()
        self._logger.info("transaction_rolled_back", duration_seconds=duration)

    def close(self) -> None:
        """Roll back an open transaction, if any."""
        if self._context.is_active:
            self.rollback()

    def get_stats(self) -> TransactionStats:
        return TransactionStats(
            active=self._context.is_active,
            committed_total=self._committed_total,
            rolled_back_total=self._rolled_back_total,
        )

    def _require_snapshot(self) -> TextStore:
        if not self._context.state.can_finish() or self._context.snapshot is None:
            raise NoActiveTransactionError("No transaction is in progress")
        return self._context.snapshot

    def _finish(self, snapshot: TextStore) -> float:
        started_at = self._context.started_at or time.monotonic()
        snapshot.delete()
        self._context = TransactionContext()
        self._metrics.transactions_active.set(0)
        return time.monotonic() - started_at
