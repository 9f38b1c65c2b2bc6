"""Transaction-related types and enumerations."""

from __future__ import annotations

from enum import Enum, auto


class TransactionState(Enum):
    """Transaction lifecycle states.

    State machine:

        IDLE ──begin()──> ACTIVE
          ^                 │
          │      commit() / rollback()
          └─────────────────┘

    Only one transaction can be open per engine, so the state belongs to
    the engine rather than to a transaction object.
    """

    IDLE = auto()
    """No transaction; operations target the primary store."""

    ACTIVE = auto()
    """A snapshot exists; operations target the snapshot."""

    def is_active(self) -> bool:
        """Check if a transaction is open."""
        return self == TransactionState.ACTIVE

    def can_begin(self) -> bool:
        return self == TransactionState.IDLE

    def can_finish(self) -> bool:
        """Check if commit or rollback is allowed."""
        return self == TransactionState.ACTIVE
