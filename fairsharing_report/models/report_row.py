from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .lookup_result import ERROR, NOT_AVAILABLE, MetricLookupResult

"""ReportRow model.

One ReportRow is produced for every worklist row whose URL resolved and whose
fetched document either failed to load or carried a metric URL. Rows are created
by the row processor, consumed by the report writer and never mutated.
"""

__all__ = [
    "REPORT_HEADER",
    "ReportRow",
    "RowStatus",
]

REPORT_HEADER = ["Metric name", "Metric URL", "Test URL", "Test description"]


class RowStatus(Enum):
    OK = "ok"
    FETCH_ERROR = "fetch_error"


@dataclass(frozen=True)
class ReportRow:
    """A single output row.

    For ``RowStatus.OK`` rows ``metric_name`` holds the lookup result and
    ``metric_url`` the extracted FAIRsharing URL. For ``RowStatus.FETCH_ERROR``
    rows both are rendered as ``Error`` and ``error_message`` takes the place of
    the description.
    """
    test_url: str
    status: RowStatus = RowStatus.OK
    metric_name: MetricLookupResult | None = None
    metric_url: str | None = None
    test_description: str | None = None
    error_message: str | None = None
    row_index: int = -1  # source sheet row, -1 when unknown

    @classmethod
    def fetch_error(cls, test_url: str, message: str, row_index: int = -1) -> ReportRow:
        return cls(
            test_url=test_url,
            status=RowStatus.FETCH_ERROR,
            error_message=message,
            row_index=row_index,
        )

    @property
    def is_error(self) -> bool:
        return self.status is RowStatus.FETCH_ERROR

    def to_cells(self) -> list[str]:
        """Translate the row into the four report cells, in header order."""
        if self.is_error:
            return [ERROR, ERROR, self.test_url, self.error_message or ERROR]
        name = self.metric_name.as_text() if self.metric_name is not None else NOT_AVAILABLE
        return [
            name,
            self.metric_url or NOT_AVAILABLE,
            self.test_url,
            self.test_description or NOT_AVAILABLE,
        ]
