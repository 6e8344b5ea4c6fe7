from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""FallbackRecord model for the soft-fallback diagnostics log.

A record describes one cell that could not be parsed and was replaced by a
default during a workbook load. Records serialize to JSON Lines with a fixed
key set.
"""

__all__ = [
    "FallbackRecord",
]


@dataclass(frozen=True)
class FallbackRecord:
    """Structured fallback record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        source: Workbook file name
        group: Group (sheet) name
        row: 1-based sheet row. -1 when the row is unknown
        error_type: Classification in UPPER_SNAKE_CASE
        message: Human readable description
    """
    timestamp: str
    source: str
    group: str
    row: int
    error_type: str
    message: str

    @staticmethod
    def create(source: str, group: str, row: int, error_type: str, message: str) -> FallbackRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return FallbackRecord(
            timestamp=ts,
            source=source,
            group=group,
            row=row,
            error_type=error_type,
            message=message,
        )

    def to_json_line(self) -> str:
        return json.dumps(asdict(self), ensure_ascii=False)
