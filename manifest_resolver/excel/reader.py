from __future__ import annotations

import zipfile
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.raw_group import RawGroup
from ..models.workbook_data import fold_key

"""Excel decoder adapter.

Reads the sheets of a workbook into :class:`RawGroup` values (first row =
header, remaining rows = data). This is the only place that knows about
pandas; the workbook loader consumes plain RawGroup values. The file is opened
once per call.
"""

__all__ = [
    "SourceReadError",
    "read_workbook_groups",
]


class SourceReadError(Exception):
    """Raised when the workbook file cannot be opened or decoded."""


def _plain_cell(value: Any) -> Any:
    # NaN / NaT -> None, numpy scalars -> Python scalars, Timestamp -> datetime
    if value is None:
        return None
    try:
        if pd.isna(value):
            return None
    except (TypeError, ValueError):
        return value
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if hasattr(value, "item") and not isinstance(value, (str, bytes)):
        return value.item()
    return value


def _frame_to_group(name: str, df: pd.DataFrame) -> RawGroup:
    grid = [[_plain_cell(v) for v in raw] for raw in df.itertuples(index=False, name=None)]
    return RawGroup.from_grid(name, grid)


def read_workbook_groups(
    path: Path,
    on_sheet: Callable[[str], None] | None = None,
    target_sheets: Iterable[str] | None = None,
    on_open: Callable[[int], None] | None = None,
) -> list[RawGroup]:
    """Read a workbook returning one RawGroup per sheet, in workbook order.

    Parameters
    ----------
    path: workbook file path
    on_sheet: callback invoked with each sheet name after it is decoded
    target_sheets: restrict decoding to these sheet names, compared
        case-insensitively (None = all)
    on_open: callback invoked once with the number of sheets about to be decoded
    """
    try:
        xls = pd.ExcelFile(path)
    except (OSError, ValueError, ImportError, zipfile.BadZipFile) as e:
        raise SourceReadError(f"cannot open workbook {path}: {e}") from e

    groups: list[RawGroup] = []
    with xls:
        names = [str(n) for n in xls.sheet_names]
        if target_sheets is not None:
            wanted = {fold_key(t) for t in target_sheets}
            names = [n for n in names if fold_key(n) in wanted]
        if on_open is not None:
            on_open(len(names))

        for name in names:
            try:
                # keep_default_na=False: text such as "NA" stays text, empty cells stay NaN
                df = xls.parse(name, header=None, keep_default_na=False, na_values=[""])
            except (OSError, ValueError, zipfile.BadZipFile) as e:
                raise SourceReadError(f"cannot decode sheet '{name}' in {path}: {e}") from e
            groups.append(_frame_to_group(name, df))
            if on_sheet is not None:
                on_sheet(name)
    return groups
