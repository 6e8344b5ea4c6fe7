from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from ..models.manifest_row import ManifestRow
from ..models.slug import extract_slug_ordinal
from ..models.workbook_data import WorkbookData, fold_key

"""Release matcher.

Resolves, for one base row, the matching row of another group. Match
strategies are plain functions tried in order; the first one returning a row
wins:

1. release key: candidate ``mcc_release`` == base ``release_date_full``
2. slug ordinal: candidate slug suffix == base slug suffix (MCCBase_39 -> Reach_39)

No match is a normal outcome and is returned as None.
"""

__all__ = [
    "MatchStrategy",
    "MatchResult",
    "DEFAULT_STRATEGIES",
    "normalize_release",
    "match_by_release_key",
    "match_by_slug_ordinal",
    "resolve",
    "resolve_with_strategy",
    "resolve_all",
    "find_base_row",
]

MatchStrategy = Callable[[ManifestRow, Sequence[ManifestRow]], "ManifestRow | None"]


def normalize_release(text: str | None) -> str:
    """Canonical form of a release label: NBSP -> space, then trimmed."""
    return (text or "").replace("\u00a0", " ").strip()


def match_by_release_key(base_row: ManifestRow, candidates: Sequence[ManifestRow]) -> ManifestRow | None:
    base_key = normalize_release(base_row.release_date_full)
    if not base_key:
        return None
    for row in candidates:
        if normalize_release(row.mcc_release) == base_key:
            return row
    return None


def match_by_slug_ordinal(base_row: ManifestRow, candidates: Sequence[ManifestRow]) -> ManifestRow | None:
    base_n = extract_slug_ordinal(base_row.slug)
    if base_n <= 0:
        return None
    for row in candidates:
        if extract_slug_ordinal(row.slug) == base_n:
            return row
    return None


DEFAULT_STRATEGIES: tuple[tuple[str, MatchStrategy], ...] = (
    ("release_key", match_by_release_key),
    ("slug_ordinal", match_by_slug_ordinal),
)


@dataclass(frozen=True)
class MatchResult:
    group: str
    row: ManifestRow | None
    strategy: str | None = None  # Name of the strategy that matched

    @property
    def matched(self) -> bool:
        return self.row is not None


def resolve_with_strategy(
    base_row: ManifestRow,
    candidates: Sequence[ManifestRow],
    strategies: Iterable[tuple[str, MatchStrategy]] = DEFAULT_STRATEGIES,
) -> tuple[ManifestRow | None, str | None]:
    """Like :func:`resolve` but also return the name of the matching strategy."""
    for name, strategy in strategies:
        match = strategy(base_row, candidates)
        if match is not None:
            return match, name
    return None, None


def resolve(
    base_row: ManifestRow,
    candidates: Sequence[ManifestRow],
    strategies: Iterable[tuple[str, MatchStrategy]] = DEFAULT_STRATEGIES,
) -> ManifestRow | None:
    """Return the candidate matching ``base_row`` or None."""
    match, _ = resolve_with_strategy(base_row, candidates, strategies)
    return match


def resolve_all(
    workbook: WorkbookData,
    base_row: ManifestRow,
    group_names: Iterable[str] | None = None,
) -> list[MatchResult]:
    """Resolve ``base_row`` against several groups.

    Defaults to every peer group in source order. Unknown names resolve
    against an empty candidate list.
    """
    names = workbook.peer_group_names if group_names is None else tuple(group_names)
    results: list[MatchResult] = []
    for name in names:
        row, strategy = resolve_with_strategy(base_row, workbook.rows_for(name))
        results.append(MatchResult(group=name, row=row, strategy=strategy))
    return results


def find_base_row(workbook: WorkbookData, slug: str | None = None) -> ManifestRow | None:
    """Return the base row with ``slug`` (case-insensitive) or the newest one."""
    if slug is None:
        return workbook.base_rows[0] if workbook.base_rows else None
    key = fold_key(slug)
    for row in workbook.base_rows:
        if fold_key(row.slug) == key:
            return row
    return None
