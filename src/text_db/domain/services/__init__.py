"""Domain services for the text table store.

Exports:
    - row_codec: Value encoding/decoding and schema line parsing
    - table_locator: Header scanning and region boundaries
    - query_engine: Projection, filtering and ordering
    - SnapshotTransactionManager: Snapshot-copy-swap transactions
"""

from text_db.domain.services import query_engine, row_codec, table_locator
from text_db.domain.services.query_engine import QueryResult
from text_db.domain.services.transaction_manager import (
    SnapshotTransactionManager,
    TransactionContext,
    TransactionStats,
)

__all__ = [
    "row_codec",
    "table_locator",
    "query_engine",
    "QueryResult",
    "SnapshotTransactionManager",
    "TransactionContext",
    "TransactionStats",
]
