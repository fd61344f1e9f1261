from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from .report_row import ReportRow

"""Processing result model for a report run.

Aggregates the counters needed for the SUMMARY line together with the ordered
report rows handed to the report writer.
"""


@dataclass(frozen=True)
class RunResult:
    """Aggregated results for one run over the worklist.

    Every worklist row lands in exactly one counter:
    ``total_rows == entries + error_rows + skipped_rows + no_metric_rows``.
    ``entries`` counts successful report rows only; error rows are also report
    rows, so ``len(report_rows) == entries + error_rows``.
    """
    total_rows: int  # worklist rows visited
    entries: int  # report rows with a metric URL
    error_rows: int  # report rows for failed fetches
    skipped_rows: int  # rows without a resolvable URL
    no_metric_rows: int  # fetched documents without a metric URL
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    report_rows: list[ReportRow] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return self.error_rows > 0
