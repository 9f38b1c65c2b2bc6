"""Text Store port for line-oriented backing storage.

This outbound port defines the contract for the resource a database lives
in. The engine only ever reads a store whole and rewrites it whole, so the
contract is deliberately small.
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import Protocol, Sequence


class TextStore(Protocol):
    """Protocol for a whole-file, line-oriented text store.

    Implementations perform blocking I/O and no locking. Writes are not
    atomic: a crash mid-write may leave a truncated store.
    """

    @property
    @abstractmethod
    def path(self) -> Path:
        """Location of the store."""
        ...

    @abstractmethod
    def exists(self) -> bool:
        ...

    @abstractmethod
    def ensure_created(self) -> None:
        """Create an empty store if none exists."""
        ...

    @abstractmethod
    def read_lines(self) -> list[str]:
        """Read every line, without line terminators.

        Raises:
            OSError: If the store cannot be read.
        """
        ...

    @abstractmethod
    def write_lines(self, lines: Sequence[str]) -> None:
        """Replace the whole store with ``lines``, one terminator per line.

        Raises:
            OSError: If the store cannot be written.
        """
        ...

    @abstractmethod
    def copy_to(self, destination: Path) -> None:
        """Copy the full contents of the store over ``destination``."""
        ...

    @abstractmethod
    def delete(self) -> None:
        """Remove the store; a missing store is not an error."""
        ...
