from __future__ import annotations

from dataclasses import dataclass

from .slug import extract_slug_ordinal

"""ManifestRow model for the manifest resolver.

ManifestRow represents one release record (one patch build of one game title)
after header lookup and cell normalization by the workbook loader.
"""

__all__ = [
    "ManifestRow",
]

_TEXT_FIELDS = ("group", "slug", "display_name", "release_date_full", "mcc_release")


@dataclass(frozen=True)
class ManifestRow:
    """Normalized release row.

    String fields are trimmed on construction so that comparisons in the
    matcher always operate on canonical forms.
    """
    group: str  # Source group (sheet) name
    slug: str  # Identifier, unique within its group in practice
    display_name: str = ""  # "Name" column
    app_id: int = 0
    depot_id: int = 0
    manifest_id: int = 0
    total_size_bytes: int | None = None  # None when the cell is empty/unparseable
    release_date_full: str = ""  # Human-facing release label, matching key on base rows
    mcc_release: str = ""  # Base release label as seen from a peer group

    def __post_init__(self) -> None:
        for name in _TEXT_FIELDS:
            value = getattr(self, name)
            object.__setattr__(self, name, (value or "").strip())

    @property
    def slug_ordinal(self) -> int:
        return extract_slug_ordinal(self.slug)
