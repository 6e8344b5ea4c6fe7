# Test helpers shared across unit/integration/contract tests
from __future__ import annotations
from pathlib import Path

import pandas as pd

from manifest_resolver.models.manifest_row import ManifestRow
from manifest_resolver.models.raw_group import RawGroup

HEADER = [
    "Slug", "Name", "AppID", "DepotID", "ManifestID",
    "TotalSizeBytes", "ReleaseDateFull", "MCC Release",
]


def make_excel(path: Path, sheets: dict[str, list[list[object]]]) -> Path:
    """Write a real workbook, one header-less sheet per entry."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        for sheet, rows in sheets.items():
            pd.DataFrame(rows).to_excel(writer, sheet_name=sheet, header=False, index=False)
    return path


def group(name: str, *rows: list[object], header: list[object] | None = None) -> RawGroup:
    """Build an in-memory RawGroup with the standard header."""
    return RawGroup(name=name, header=HEADER if header is None else header, rows=tuple(rows))


def base_cells(slug: str, release: str = "", name: str = "MCC Base") -> list[object]:
    return [slug, name, 976730, 976731, 1, 10, release, ""]


def peer_cells(slug: str, mcc_release: str = "", name: str = "Reach") -> list[object]:
    return [slug, name, 976730, 1064220, 2, 20, "", mcc_release]


def row(slug: str, *, group: str = "Reach", release: str = "", mcc: str = "", name: str = "") -> ManifestRow:
    return ManifestRow(
        group=group,
        slug=slug,
        display_name=name,
        release_date_full=release,
        mcc_release=mcc,
    )
