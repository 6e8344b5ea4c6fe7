from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.fallback_record import FallbackRecord
from ..services.workbook_loader import FallbackEvent

"""Soft-fallback log buffering.

The workbook loader never fails on unparseable text in integer columns; it
uses a default instead. ``FallbackLogBuffer`` is a diagnostics sink that
collects those events and writes them as JSON Lines to
``logs/fallbacks-YYYYMMDD-HHMMSS.log`` (UTC) on flush.
"""

__all__ = [
    "FallbackRecord",
    "FallbackLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"

UNPARSEABLE_INTEGER = "UNPARSEABLE_INTEGER"


class FallbackLogBuffer:
    """In-memory buffer for fallback records. Flush writes JSON Lines.

    - The log file path is fixed on first access
    - No thread safety (one buffer per load)
    """
    def __init__(self, source: str = "", logs_dir: Path | None = None) -> None:
        self.source = source
        self._logs_dir = logs_dir if logs_dir is not None else LOGS_DIR
        self._records: list[FallbackRecord] = []
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"fallbacks-{stamp}.log"
        return self._file_path

    def append(self, record: FallbackRecord) -> None:
        self._records.append(record)

    def report_fallback(self, event: FallbackEvent) -> None:
        self.append(
            FallbackRecord.create(
                source=self.source,
                group=event.group,
                row=event.row_number,
                error_type=UNPARSEABLE_INTEGER,
                message=f"column '{event.column}' value {event.raw_value!r} defaulted",
            )
        )

    @property
    def records(self) -> tuple[FallbackRecord, ...]:
        return tuple(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def flush(self) -> Path:
        if not self._records:
            return self.file_path
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
