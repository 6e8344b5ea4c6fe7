from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Protocol

from ..models.manifest_row import ManifestRow
from ..models.raw_group import RawGroup
from ..models.slug import sort_by_slug_ordinal
from ..models.workbook_data import WorkbookData, fold_key
from .cells import cell_text, cell_to_int, cell_to_optional_int
from .errors import CellConversionError, MissingBaseDataError

logger = logging.getLogger(__name__)

"""Workbook loader service.

Turns decoded groups (sheet name + header row + data rows) into a
:class:`WorkbookData`:

1. Skip blank-named groups, record every other name in source order
2. Build a case-insensitive header index from the first row
3. Convert each data row with a non-blank slug into a ManifestRow
4. Sort each group newest-first by slug ordinal
5. Split off the base group, keeping only its self-referential rows

The loader performs no I/O and keeps no state between calls.
"""

__all__ = [
    "DEFAULT_BASE_GROUP",
    "ColumnLabels",
    "LoaderSettings",
    "FallbackEvent",
    "DiagnosticsSink",
    "build_header_index",
    "load_workbook",
]

DEFAULT_BASE_GROUP = "MCC Base"


@dataclass(frozen=True)
class ColumnLabels:
    """Header labels looked up in each group (compared case-insensitively)."""
    slug: str = "Slug"
    name: str = "Name"
    app_id: str = "AppID"
    depot_id: str = "DepotID"
    manifest_id: str = "ManifestID"
    total_size_bytes: str = "TotalSizeBytes"
    release_date_full: str = "ReleaseDateFull"
    mcc_release: str = "MCC Release"


@dataclass(frozen=True)
class LoaderSettings:
    base_group: str = DEFAULT_BASE_GROUP
    columns: ColumnLabels = ColumnLabels()


@dataclass(frozen=True)
class FallbackEvent:
    """A text cell in an integer column that could not be parsed (defaulted)."""
    group: str
    row_number: int  # 1-based sheet row (header = 1)
    column: str
    raw_value: Any


class DiagnosticsSink(Protocol):
    def report_fallback(self, event: FallbackEvent) -> None: ...


def build_header_index(header: Sequence[Any] | None) -> dict[str, int]:
    """Map folded header text to column position (first occurrence wins)."""
    index: dict[str, int] = {}
    if not header:
        return index
    for pos, cell in enumerate(header):
        key = fold_key(cell_text(cell))
        if key and key not in index:
            index[key] = pos
    return index


class _RowReader:
    """Column access for one group's data rows via its header index."""

    def __init__(
        self,
        group: str,
        header_index: dict[str, int],
        diagnostics: DiagnosticsSink | None,
    ) -> None:
        self.group = group
        self.header_index = header_index
        self.diagnostics = diagnostics

    def cell(self, row: Sequence[Any], label: str) -> Any:
        pos = self.header_index.get(fold_key(label))
        if pos is None or pos >= len(row):
            return None
        return row[pos]

    def text(self, row: Sequence[Any], label: str) -> str:
        return cell_text(self.cell(row, label))

    def _report(self, row_number: int, label: str, raw: Any) -> None:
        logger.debug(
            f"group='{self.group}' row={row_number} column='{label}' "
            f"unparseable value {raw!r} -> default"
        )
        if self.diagnostics is not None:
            self.diagnostics.report_fallback(
                FallbackEvent(group=self.group, row_number=row_number, column=label, raw_value=raw)
            )

    def integer(self, row: Sequence[Any], row_number: int, label: str) -> int:
        raw = self.cell(row, label)
        try:
            value, fell_back = cell_to_int(raw)
        except CellConversionError as e:
            raise e.with_location(self.group, row_number, label) from e
        if fell_back:
            self._report(row_number, label, raw)
        return value

    def optional_integer(self, row: Sequence[Any], row_number: int, label: str) -> int | None:
        raw = self.cell(row, label)
        try:
            value, fell_back = cell_to_optional_int(raw)
        except CellConversionError as e:
            raise e.with_location(self.group, row_number, label) from e
        if fell_back:
            self._report(row_number, label, raw)
        return value


def _load_group_rows(
    group_name: str,
    raw: RawGroup,
    columns: ColumnLabels,
    diagnostics: DiagnosticsSink | None,
) -> list[ManifestRow]:
    reader = _RowReader(group_name, build_header_index(raw.header), diagnostics)
    rows: list[ManifestRow] = []
    # Sheet row 1 is the header, so data rows start at 2
    for row_number, values in enumerate(raw.rows, start=2):
        slug = reader.text(values, columns.slug)
        if not slug.strip():
            continue
        rows.append(
            ManifestRow(
                group=group_name,
                slug=slug,
                display_name=reader.text(values, columns.name),
                app_id=reader.integer(values, row_number, columns.app_id),
                depot_id=reader.integer(values, row_number, columns.depot_id),
                manifest_id=reader.integer(values, row_number, columns.manifest_id),
                total_size_bytes=reader.optional_integer(values, row_number, columns.total_size_bytes),
                release_date_full=reader.text(values, columns.release_date_full),
                mcc_release=reader.text(values, columns.mcc_release),
            )
        )
    return sort_by_slug_ordinal(rows)


def load_workbook(
    groups: Iterable[RawGroup],
    settings: LoaderSettings | None = None,
    diagnostics: DiagnosticsSink | None = None,
) -> WorkbookData:
    """Build a WorkbookData from decoded groups.

    Parameters
    ----------
    groups: decoded sheets in source order
    settings: base group label and column labels (defaults when None)
    diagnostics: optional sink receiving a FallbackEvent per defaulted cell

    Raises
    ------
    CellConversionError: a numeric cell does not fit a 64-bit integer
    MissingBaseDataError: the base group is missing or has no self-referential rows
    """
    settings = settings or LoaderSettings()
    base_key = fold_key(settings.base_group)

    base_rows: list[ManifestRow] = []
    by_group: dict[str, tuple[ManifestRow, ...]] = {}
    group_names: list[str] = []

    for raw in groups:
        name = (raw.name or "").strip()
        if not name:
            continue
        group_names.append(name)

        # No header row: the name is listed but the sheet holds no group
        if not raw.header:
            logger.info(f"group '{name}': no header row, skipped")
            continue

        rows = _load_group_rows(name, raw, settings.columns, diagnostics)

        if fold_key(name) == base_key:
            base_rows = sort_by_slug_ordinal(r for r in rows if fold_key(r.display_name) == base_key)
            logger.info(f"base group '{name}': {len(base_rows)}/{len(rows)} rows kept")
        else:
            by_group[fold_key(name)] = tuple(rows)
            logger.info(f"group '{name}': {len(rows)} rows")

    if not base_rows:
        raise MissingBaseDataError(settings.base_group)

    return WorkbookData(
        base_rows=tuple(base_rows),
        groups=MappingProxyType(by_group),
        group_names=tuple(group_names),
    )
