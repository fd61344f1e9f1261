from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

"""ErrorRecord model for the JSON Lines error log.

Each record describes one row-level failure: a failed test-URL fetch, an
unexpected exception while processing a row, or a failed metric lookup. ``row``
is the source sheet row number, or -1 when the failure is not tied to a row.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        sheet: Source sheet name
        row: Sheet row number (1-based), -1 when unknown
        error_type: Error classification in UPPER_SNAKE_CASE format
        url: The URL being fetched when the failure happened
        message: Human readable failure text
    """
    timestamp: str  # ISO8601 UTC
    sheet: str
    row: int
    error_type: str  # UPPER_SNAKE
    url: str
    message: str

    @staticmethod
    def create(sheet: str, row: int, error_type: str, url: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            sheet=sheet,
            row=row,
            error_type=error_type,
            url=url,
            message=message,
        )

    def to_json_line(self) -> str:
        """Serialize to one JSON object without extra keys."""
        return json.dumps(asdict(self), ensure_ascii=False)
