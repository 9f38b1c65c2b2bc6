"""Outbound adapters for the text table store.

Exports:
    - FileTextStore: Plain-file implementation of the TextStore port
"""

from text_db.adapters.outbound.file_text_store import FileTextStore

__all__ = [
    "FileTextStore",
]
