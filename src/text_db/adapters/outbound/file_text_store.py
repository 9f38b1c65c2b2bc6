"""File-based Text Store implementation.

This adapter implements the TextStore protocol with plain file I/O.

File Format:
    UTF-8 text (configurable), one record per line, '\\n' terminators on
    write. Any newline convention is accepted on read.

Every read opens the file and reads it whole; every write truncates and
rewrites it whole. There is no rename-based swap, so a crash mid-write can
leave a partially written file.
"""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import Sequence


class FileTextStore:
    """File-based implementation of the TextStore protocol.

    Attributes:
        path: Path to the backing file.
        encoding: Text encoding used for reads and writes.
    """

    def __init__(
        self,
        path: str | Path,
        encoding: str = "utf-8",
        create: bool = True,
    ) -> None:
        """Initialize the store.

        Args:
            path: Path to the backing file.
            encoding: Text encoding of the file.
            create: If True, create an empty file if it doesn't exist.

        Raises:
            FileNotFoundError: If the file doesn't exist and create=False.
        """
        self._path = Path(path)
        self._encoding = encoding

        if create:
            self.ensure_created()
        elif not self._path.exists():
            raise FileNotFoundError(f"Store file not found: {self._path}")

    @property
    def path(self) -> Path:
        return self._path

    @property
    def encoding(self) -> str:
        return self._encoding

    def exists(self) -> bool:
        return self._path.exists()

    def ensure_created(self) -> None:
        """Create an empty file (and parent directories) if missing."""
        if self._path.exists():
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.touch()

    def read_lines(self) -> list[str]:
        """Read every line of the file without terminators.

        A trailing newline does not produce an extra empty line.
        """
        with open(self._path, "r", encoding=self._encoding, newline=None) as f:
            return [line.rstrip("\n") for line in f]

    def write_lines(self, lines: Sequence[str]) -> None:
        with open(self._path, "w", encoding=self._encoding, newline="\n") as f:
            for line in lines:
                f.write(line)
                f.write("\n")

    def copy_to(self, destination: Path) -> None:
        shutil.copyfile(self._path, destination)

    def delete(self) -> None:
        self._path.unlink(missing_ok=True)

    def __repr__(self) -> str:
        return f"FileTextStore(path={str(self._path)!r})"
