from __future__ import annotations

from typing import Any

"""Exception types raised while loading a manifest workbook.

Both concrete errors are fatal: they propagate to the ``load_workbook`` caller
and no partial WorkbookData is returned.
"""

__all__ = [
    "WorkbookLoadError",
    "MissingBaseDataError",
    "CellConversionError",
]


class WorkbookLoadError(Exception):
    """Base exception for workbook load failures."""
    pass


class MissingBaseDataError(WorkbookLoadError):
    """Raised when the base group is absent or has no self-referential rows."""

    def __init__(self, base_group: str) -> None:
        self.base_group = base_group
        super().__init__(f"missing base data: group '{base_group}' not found or contained no rows")


class CellConversionError(WorkbookLoadError):
    """Raised when a numeric cell cannot be represented as a 64-bit integer."""

    def __init__(
        self,
        value: Any,
        *,
        group: str | None = None,
        row_number: int | None = None,
        column: str | None = None,
    ) -> None:
        self.value = value
        self.group = group
        self.row_number = row_number
        self.column = column
        where = ""
        if group is not None:
            where = f" (group='{group}' row={row_number} column='{column}')"
        super().__init__(f"numeric cell out of integer range: {value!r}{where}")

    def with_location(self, group: str, row_number: int, column: str) -> CellConversionError:
        return CellConversionError(self.value, group=group, row_number=row_number, column=column)
