from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .manifest_row import ManifestRow

"""WorkbookData: the immutable result of one workbook load.

Group lookups are case-insensitive through an explicit folding step
(:func:`fold_key`) rather than a locale-aware comparer.
"""

__all__ = [
    "WorkbookData",
    "fold_key",
]


def fold_key(text: str) -> str:
    """Normalize a group or header label for use as a case-insensitive key."""
    return text.strip().casefold()


@dataclass(frozen=True)
class WorkbookData:
    """Loaded workbook partitioned into base rows and peer groups.

    Attributes:
        base_rows: Self-referential rows of the base group, newest first
        groups: Folded group name -> rows (base group excluded), newest first
        group_names: Every non-blank group name in source order
    """
    base_rows: tuple[ManifestRow, ...]
    groups: Mapping[str, tuple[ManifestRow, ...]]
    group_names: tuple[str, ...]

    def rows_for(self, group_name: str) -> tuple[ManifestRow, ...]:
        """Return the rows of ``group_name`` (any casing); empty when unknown."""
        return self.groups.get(fold_key(group_name), ())

    def has_group(self, group_name: str) -> bool:
        return fold_key(group_name) in self.groups

    @property
    def peer_group_names(self) -> tuple[str, ...]:
        """Group names that have a row list in ``groups``, in source order.

        When two sheets fold to the same key only the last one is listed,
        matching the row list actually stored.
        """
        last: dict[str, str] = {}
        for name in self.group_names:
            key = fold_key(name)
            if key in self.groups:
                last[key] = name
        return tuple(last.values())

    @property
    def total_rows(self) -> int:
        return len(self.base_rows) + sum(len(rows) for rows in self.groups.values())
