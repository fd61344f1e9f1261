"""Domain models for the FAIRsharing metric report tool."""

from .config_models import HttpConfig, ReportConfig
from .error_record import ErrorRecord
from .lookup_result import LookupStatus, MetricLookupResult
from .processing_result import RunResult
from .report_row import REPORT_HEADER, ReportRow, RowStatus
from .worklist_row import WorklistRow

__all__ = [
    # Configuration models
    "HttpConfig",
    "ReportConfig",
    # Processing models
    "WorklistRow",
    "MetricLookupResult",
    "LookupStatus",
    "ReportRow",
    "RowStatus",
    "REPORT_HEADER",
    "RunResult",
    "ErrorRecord",
]
