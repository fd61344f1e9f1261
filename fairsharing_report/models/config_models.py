from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the FAIRsharing metric report tool.

These are the immutable configuration objects built once by
``fairsharing_report.config.loader.load_config`` and passed explicitly into the
worklist reader, the row processor, the metric lookup and the report writer.
"""

DEFAULT_METRIC_BASE_URL = "https://fairsharing.org"
DEFAULT_METRIC_JSON_PATH = "metadata.name"
DEFAULT_REQUEST_DELAY_SECONDS = 1.0
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_USER_AGENT = "fairsharing-report/0.1"


@dataclass(frozen=True)
class HttpConfig:
    """HTTP client settings shared by the test-URL fetch and the metric lookup."""
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    user_agent: str = DEFAULT_USER_AGENT
    metric_base_url: str = DEFAULT_METRIC_BASE_URL  # FAIRsharing.<id> is appended


@dataclass(frozen=True)
class ReportConfig:
    """Root configuration for one report run.

    ``source_column`` is a column letter (``A``, ``B``, ...). The worklist is the
    run of cells in that column between ``start_marker`` and ``stop_marker``.
    ``metric_name_json_path`` is a dotted path into the FAIRsharing JSON record.
    ``output_workbook`` receives the report sheet; saving a workbook with
    openpyxl drops cached formula results, so a separate file keeps the
    worklist untouched between runs.
    """
    workbook: str
    source_sheet: str
    target_sheet: str
    source_column: str
    start_marker: str
    stop_marker: str
    output_workbook: str | None = None  # None writes the report into ``workbook``
    metric_name_json_path: str = DEFAULT_METRIC_JSON_PATH
    request_delay_seconds: float = DEFAULT_REQUEST_DELAY_SECONDS
    http: HttpConfig = field(default_factory=HttpConfig)
