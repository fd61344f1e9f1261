from __future__ import annotations

from datetime import datetime, timezone

import pytest

from fairsharing_report.models.processing_result import RunResult
from fairsharing_report.services.summary import render_summary_line


def _result(elapsed: float, **counts: int) -> RunResult:
    start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
    values = dict(total_rows=0, entries=0, error_rows=0, skipped_rows=0, no_metric_rows=0)
    values.update(counts)
    return RunResult(start_time=start, end_time=start, elapsed_seconds=elapsed, **values)


def test_render_summary_line_counts():
    line = render_summary_line(_result(4.0, total_rows=6, entries=3, error_rows=1, skipped_rows=1, no_metric_rows=1))
    assert line == "SUMMARY rows=6 entries=3 errors=1 skipped=1 no_metric=1 elapsed_sec=4"


@pytest.mark.parametrize(
    "elapsed, expected",
    [
        (0.0, "0"),
        (2.0, "2"),
        (1.23456, "1.23"),
        (0.0012, "0.0012"),
    ],
)
def test_elapsed_formatting(elapsed, expected):
    assert render_summary_line(_result(elapsed)).endswith(f"elapsed_sec={expected}")
