from __future__ import annotations

from ..models.processing_result import RunResult

"""SUMMARY line rendering.

Format:
SUMMARY rows={total} entries={entries} errors={errors} skipped={skipped}
no_metric={no_metric} elapsed_sec={elapsed}
"""


def _format_seconds(seconds: float) -> str:
    if seconds == 0:
        return "0"
    if seconds == int(seconds):
        return str(int(seconds))
    if seconds < 0.01:
        # avoid scientific notation
        return f"{seconds:.6f}".rstrip("0").rstrip(".")
    return f"{seconds:.2f}"


def render_summary_line(result: RunResult) -> str:
    """Render the SUMMARY line for a finished run.

    Examples:
        >>> from datetime import datetime, timezone
        >>> start = datetime(2024, 1, 1, 10, 0, 0, tzinfo=timezone.utc)
        >>> end = datetime(2024, 1, 1, 10, 0, 4, tzinfo=timezone.utc)
        >>> result = RunResult(
        ...     total_rows=5, entries=3, error_rows=1, skipped_rows=1, no_metric_rows=0,
        ...     start_time=start, end_time=end, elapsed_seconds=4.0,
        ... )
        >>> render_summary_line(result)
        'SUMMARY rows=5 entries=3 errors=1 skipped=1 no_metric=0 elapsed_sec=4'
    """
    return (
        f"SUMMARY rows={result.total_rows} "
        f"entries={result.entries} "
        f"errors={result.error_rows} "
        f"skipped={result.skipped_rows} "
        f"no_metric={result.no_metric_rows} "
        f"elapsed_sec={_format_seconds(result.elapsed_seconds)}"
    )
