from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

"""RawGroup model: the decoded form of one sheet handed to the workbook loader.

Cells are untyped scalars addressed by zero-based column position. Positions
past the end of a row are treated as empty cells.
"""

__all__ = [
    "RawGroup",
]


@dataclass(frozen=True)
class RawGroup:
    name: str  # Sheet name as found in the source (untrimmed)
    header: Sequence[Any] | None = None  # First row; None when the sheet is empty
    rows: Sequence[Sequence[Any]] = field(default_factory=tuple)  # Data rows after the header

    @staticmethod
    def from_grid(name: str, grid: Sequence[Sequence[Any]]) -> RawGroup:
        """Split a full grid (header + data rows) into a RawGroup."""
        if not grid:
            return RawGroup(name=name)
        return RawGroup(name=name, header=grid[0], rows=tuple(grid[1:]))
