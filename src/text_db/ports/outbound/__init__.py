"""Outbound ports - interfaces for external dependencies.

Outbound ports define contracts for the systems the store depends on,
which is only the line-oriented backing file.
"""

from text_db.ports.outbound.text_store import TextStore

__all__ = [
    "TextStore",
]
