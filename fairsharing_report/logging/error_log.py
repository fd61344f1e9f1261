from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.error_record import ErrorRecord

"""Per-run error log for worklist rows.

The row processor records one ErrorRecord for every row that reached the
network and did not yield a clean report row:

- ``FETCH_ERROR``: the test URL answered non-200 or the request failed
- ``ROW_ERROR``: an unexpected exception inside the row pipeline
- ``LOOKUP_HTTP_ERROR`` / ``LOOKUP_TRANSPORT_ERROR``: the FAIRsharing record lookup failed
- ``LOOKUP_PATH_MISS``: the record has no value at ``metric_name_json_path``

Records stay in memory until the run ends and are then appended as JSON Lines
to ``logs/errors-YYYYMMDD-HHMMSS.log`` (UTC). A clean run creates no file.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """Collects the error records of one report run.

    Rows are processed one at a time, so no locking is needed. ``logs_dir``
    defaults to ./logs relative to the working directory.
    """

    def __init__(self, logs_dir: Path | None = None) -> None:
        self._records: list[ErrorRecord] = []
        self._file_path: Path | None = None
        self._logs_dir = logs_dir or LOGS_DIR

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"errors-{stamp}.log"
        return self._file_path

    @property
    def records(self) -> list[ErrorRecord]:
        return list(self._records)

    def append(self, record: ErrorRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Write the run's records to the log file and clear the buffer.

        Returns:
            The log file path, or None when there was nothing to write.
        """
        if not self._records:
            return None
        fp = self.file_path
        fp.parent.mkdir(parents=True, exist_ok=True)
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
