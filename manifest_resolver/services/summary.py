from __future__ import annotations

from collections.abc import Sequence

from ..models.workbook_data import WorkbookData
from .matcher import MatchResult

"""Summary and match line rendering for the CLI."""


def render_match_line(result: MatchResult) -> str:
    """Render one resolution result.

    Examples:
        ``Halo Reach: Reach_39 (release_key)``
        ``Halo 4: no match``
    """
    if result.row is None:
        return f"{result.group}: no match"
    return f"{result.group}: {result.row.slug} ({result.strategy})"


def render_summary_line(workbook: WorkbookData, results: Sequence[MatchResult]) -> str:
    """Render the SUMMARY line.

    Format:
    SUMMARY groups={groups} base_rows={base} rows={rows} matched={matched} unmatched={unmatched}

    ``groups`` counts every non-blank group name seen, base group included.
    ``rows`` counts every retained row (base rows + peer group rows).
    """
    matched = sum(1 for r in results if r.matched)
    return (
        f"SUMMARY groups={len(workbook.group_names)} "
        f"base_rows={len(workbook.base_rows)} "
        f"rows={workbook.total_rows} "
        f"matched={matched} "
        f"unmatched={len(results) - matched}"
    )
