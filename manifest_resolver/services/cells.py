from __future__ import annotations

import math
import numbers
import re
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from .errors import CellConversionError

"""Cell value conversion helpers.

Cells arrive untyped from the decoder: Python/numpy numbers, Decimal, text,
datetimes or None. Numeric cells are truncated to integers (overflow is fatal);
everything else goes through a lenient text parse that falls back to a default.
"""

__all__ = [
    "cell_text",
    "cell_to_int",
    "cell_to_optional_int",
    "is_numeric_cell",
    "parse_int_text",
]

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_INT_TEXT_RE = re.compile(r"[+-]?[0-9]+")


def is_numeric_cell(value: Any) -> bool:
    # bool is an int subclass but Excel booleans are not numbers here
    if isinstance(value, bool):
        return False
    return isinstance(value, (numbers.Real, Decimal))


def cell_text(value: Any) -> str:
    """Render a cell the way it reads in the sheet.

    - None -> ""
    - integral floats drop the trailing ".0" (39.0 -> "39")
    - datetimes render as ISO dates, with the time only when it is not midnight
    """
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=" ")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, numbers.Real) and not isinstance(value, (bool, numbers.Integral)):
        f = float(value)
        if math.isfinite(f) and f.is_integer():
            return str(int(f))
    return str(value)


def _truncate_numeric(value: Any) -> int:
    try:
        result = int(value)  # truncates toward zero for float/Decimal
    except (OverflowError, ValueError) as e:  # inf / nan
        raise CellConversionError(value) from e
    if result < INT64_MIN or result > INT64_MAX:
        raise CellConversionError(value)
    return result


def parse_int_text(text: str) -> int | None:
    """Parse trimmed text (surrounding underscores stripped) as a base-10 int64.

    Returns None when the text is blank, not an integer, or out of range.
    """
    s = text.strip().strip("_")
    if not _INT_TEXT_RE.fullmatch(s):
        return None
    result = int(s)
    if result < INT64_MIN or result > INT64_MAX:
        return None
    return result


def cell_to_int(value: Any) -> tuple[int, bool]:
    """Convert a required integer cell.

    Returns:
        (value, fell_back) where ``fell_back`` is True when non-blank text could
        not be parsed and the default 0 was used.

    Raises:
        CellConversionError: numeric cell outside the int64 range (or NaN/inf)
    """
    if is_numeric_cell(value):
        return _truncate_numeric(value), False
    text = cell_text(value)
    parsed = parse_int_text(text)
    if parsed is None:
        return 0, bool(text.strip().strip("_"))
    return parsed, False


def cell_to_optional_int(value: Any) -> tuple[int | None, bool]:
    """Convert an optional integer cell; empty or unparseable cells yield None."""
    if value is None:
        return None, False
    if is_numeric_cell(value):
        return _truncate_numeric(value), False
    text = cell_text(value)
    if not text.strip():
        return None, False
    parsed = parse_int_text(text)
    return parsed, parsed is None and bool(text.strip().strip("_"))
