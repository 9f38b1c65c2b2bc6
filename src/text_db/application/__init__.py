"""Application layer for the text table store.

Exports:
    - TextDatabase: Main entry point; implements the TableDatabase port
"""

from text_db.application.text_database import TextDatabase

__all__ = [
    "TextDatabase",
]
