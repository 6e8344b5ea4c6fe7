from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from ..config.loader import ResolverConfig
from ..excel.reader import read_workbook_groups
from ..models.manifest_row import ManifestRow
from ..models.workbook_data import WorkbookData
from .matcher import MatchResult, find_base_row, resolve_all
from .progress import ProgressTracker
from .workbook_loader import DiagnosticsSink, load_workbook

logger = logging.getLogger(__name__)

"""Service orchestration: read -> load -> resolve.

Glues the Excel adapter, the workbook loader and the matcher together for the
CLI. The core modules stay free of I/O; this module is where the file is read.
"""

__all__ = [
    "ResolutionError",
    "UnknownBaseError",
    "UnknownGroupError",
    "ResolutionReport",
    "read_and_load",
    "resolve_report",
]


class ResolutionError(Exception):
    """Base exception for user-selection errors (unknown base slug / group)."""
    pass


class UnknownBaseError(ResolutionError):
    pass


class UnknownGroupError(ResolutionError):
    pass


@dataclass(frozen=True)
class ResolutionReport:
    workbook: WorkbookData
    base_row: ManifestRow
    results: list[MatchResult]


def read_and_load(config: ResolverConfig, diagnostics: DiagnosticsSink | None = None) -> WorkbookData:
    """Decode the configured workbook and load it.

    Raises:
        SourceReadError: the workbook cannot be decoded
        WorkbookLoadError: missing base data or numeric overflow
    """
    path = Path(config.source_path)
    logger.info(f"Reading workbook: {path}")
    # total is unknown until the workbook is open
    with ProgressTracker(0) as progress:
        groups = read_workbook_groups(path, on_sheet=progress.sheet_done, on_open=progress.set_total)
    return load_workbook(groups, config.loader_settings, diagnostics)


def resolve_report(
    workbook: WorkbookData,
    base_slug: str | None = None,
    group_names: Sequence[str] | None = None,
) -> ResolutionReport:
    """Resolve the selected base row against the selected groups.

    ``base_slug`` None selects the newest base row; ``group_names`` None selects
    every peer group.
    """
    base_row = find_base_row(workbook, base_slug)
    if base_row is None:
        raise UnknownBaseError(f"base slug not found: {base_slug}")

    if group_names:
        unknown = [g for g in group_names if not workbook.has_group(g)]
        if unknown:
            raise UnknownGroupError(f"group(s) not found: {unknown}")

    logger.debug(f"base row: slug={base_row.slug} release='{base_row.release_date_full}'")
    results = resolve_all(workbook, base_row, group_names or None)
    return ResolutionReport(workbook=workbook, base_row=base_row, results=results)
