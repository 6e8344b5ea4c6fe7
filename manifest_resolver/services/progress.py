from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display with tqdm (TTY only).

Shows sheet-by-sheet progress while a workbook is decoded. In non-TTY
environments (CI, pipes) no bar is created so output stays free of ANSI
control sequences.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """Progress tracker over the sheets of one workbook."""

    def __init__(self, total_sheets: int, *, description: str = "Reading sheets") -> None:
        self.total_sheets = total_sheets
        self.description = description
        self.current_sheet = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_sheets,
                desc=description,
                unit="sheet",
                disable=False,
                leave=False,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def set_total(self, total_sheets: int) -> None:
        """Set the sheet count once the workbook is open."""
        self.total_sheets = total_sheets
        if self.enabled and self.pbar is not None:
            self.pbar.reset(total=total_sheets)

    def sheet_done(self, sheet_name: str) -> None:
        """Advance the bar by one sheet, showing its name."""
        self.current_sheet += 1
        if self.enabled and self.pbar is not None:
            self.pbar.set_postfix(sheet=sheet_name)
            self.pbar.update(1)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
