"""Line span of a table region inside the backing store."""

from __future__ import annotations

from dataclasses import dataclass

# Offsets of the fixed lines inside a region
HEADER_OFFSET = 0
SCHEMA_OFFSET = 1
DATA_OFFSET = 2


@dataclass(frozen=True)
class LineRange:
    """Half-open span ``[start, end)`` of store lines.

    ``start`` is the header line; ``end`` is the next header line or the
    line count when the region runs to EOF.
    """

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0:
            raise ValueError(f"start must be non-negative, got {self.start}")
        if self.end <= self.start:
            raise ValueError(f"end ({self.end}) must be greater than start ({self.start})")

    @property
    def schema_line(self) -> int:
        return self.start + SCHEMA_OFFSET

    @property
    def data_start(self) -> int:
        return self.start + DATA_OFFSET

    def __len__(self) -> int:
        return self.end - self.start
