"""Inbound ports - API contracts for the text table store."""

from text_db.ports.inbound.database import (
    ColumnSpec,
    RowPredicate,
    SelectedRow,
    TableDatabase,
)

__all__ = [
    "TableDatabase",
    "ColumnSpec",
    "RowPredicate",
    "SelectedRow",
]
