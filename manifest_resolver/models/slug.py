from __future__ import annotations

import re
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .manifest_row import ManifestRow

"""Slug ordinal helpers.

A slug such as ``Reach_39`` carries a numeric suffix after its last underscore.
That suffix (the slug ordinal) orders rows newest-first within a group and
serves as the fallback key when matching releases across groups.
"""

__all__ = [
    "extract_slug_ordinal",
    "sort_by_slug_ordinal",
]

_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1
_ORDINAL_RE = re.compile(r"\s*[+-]?[0-9]+\s*")


def extract_slug_ordinal(slug: str) -> int:
    """Return the integer suffix of ``slug`` or 0 when there is none.

    >>> extract_slug_ordinal("Reach_39")
    39
    >>> extract_slug_ordinal("Reach_abc")
    0
    """
    idx = slug.rfind("_")
    if idx < 0:
        return 0
    suffix = slug[idx + 1:]
    if not _ORDINAL_RE.fullmatch(suffix):
        return 0
    value = int(suffix)
    # 32-bit range; anything larger is treated as unparseable
    if value < _INT32_MIN or value > _INT32_MAX:
        return 0
    return value


def sort_by_slug_ordinal(rows: Iterable[ManifestRow]) -> list[ManifestRow]:
    """Return rows sorted newest-first by slug ordinal.

    ``sorted`` is stable, so rows with equal ordinals keep their input order.
    """
    return sorted(rows, key=lambda r: extract_slug_ordinal(r.slug), reverse=True)
