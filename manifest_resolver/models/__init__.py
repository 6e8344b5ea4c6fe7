"""Domain models for the manifest resolver.

This package contains the immutable records produced by the workbook loader
and the raw group structure consumed from the decoder.
"""

from .manifest_row import ManifestRow
from .raw_group import RawGroup
from .workbook_data import WorkbookData, fold_key

__all__ = [
    # Loaded records
    "ManifestRow",
    "WorkbookData",
    # Decoder input
    "RawGroup",
    "fold_key",
]
