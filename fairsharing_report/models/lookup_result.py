from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any

"""Result type for the FAIRsharing metric-name lookup.

The lookup never raises. Its outcome is one of four statuses, and the report
sentinels (``N/A``, ``HTTP Error``, ``Error``) are produced only when the result
is rendered into a report cell.
"""

__all__ = [
    "LookupStatus",
    "MetricLookupResult",
    "NOT_AVAILABLE",
    "HTTP_ERROR",
    "ERROR",
]

NOT_AVAILABLE = "N/A"
HTTP_ERROR = "HTTP Error"
ERROR = "Error"


class LookupStatus(Enum):
    """Outcome classes of a metric-name lookup.

    - FOUND: the dotted path resolved to a value
    - PATH_MISS: the record was fetched but the path (or the record id) is missing
    - HTTP_ERROR: the endpoint answered with a status other than 200
    - TRANSPORT_ERROR: network failure or an unparseable body
    """
    FOUND = "found"
    PATH_MISS = "path_miss"
    HTTP_ERROR = "http_error"
    TRANSPORT_ERROR = "transport_error"


_SENTINELS = {
    LookupStatus.PATH_MISS: NOT_AVAILABLE,
    LookupStatus.HTTP_ERROR: HTTP_ERROR,
    LookupStatus.TRANSPORT_ERROR: ERROR,
}


@dataclass(frozen=True)
class MetricLookupResult:
    status: LookupStatus
    value: Any = None
    detail: str | None = None  # HTTP status or exception text, for the error log

    @classmethod
    def found(cls, value: Any) -> MetricLookupResult:
        return cls(LookupStatus.FOUND, value=value)

    @classmethod
    def path_miss(cls, detail: str | None = None) -> MetricLookupResult:
        return cls(LookupStatus.PATH_MISS, detail=detail)

    @classmethod
    def http_error(cls, status_code: int) -> MetricLookupResult:
        return cls(LookupStatus.HTTP_ERROR, detail=f"HTTP {status_code}")

    @classmethod
    def transport_error(cls, detail: str) -> MetricLookupResult:
        return cls(LookupStatus.TRANSPORT_ERROR, detail=detail)

    @property
    def ok(self) -> bool:
        return self.status is LookupStatus.FOUND

    def as_text(self) -> str:
        """Render the value for a report cell, or the sentinel for a failure."""
        if self.status is not LookupStatus.FOUND:
            return _SENTINELS[self.status]
        if isinstance(self.value, str):
            return self.value
        if isinstance(self.value, (dict, list)):
            return json.dumps(self.value, ensure_ascii=False)
        if isinstance(self.value, bool):
            # JSON spelling, not Python's
            return "true" if self.value else "false"
        return str(self.value)
