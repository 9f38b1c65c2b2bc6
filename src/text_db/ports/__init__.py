"""Ports layer - interface definitions following Hexagonal Architecture.

Ports are abstract interfaces (protocols) that define contracts:
- Inbound ports: the operation contract offered to callers (TableDatabase)
- Outbound ports: dependencies on external systems (TextStore)

Adapters implement these ports with concrete functionality.
"""

from text_db.ports.inbound import TableDatabase
from text_db.ports.outbound import TextStore

__all__ = [
    "TableDatabase",
    "TextStore",
]
