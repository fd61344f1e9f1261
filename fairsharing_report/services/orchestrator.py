from __future__ import annotations

import logging
import time
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path

import httpx

from ..excel.reader import read_worklist
from ..excel.writer import write_report
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import ReportConfig
from ..models.lookup_result import LookupStatus, MetricLookupResult
from ..models.processing_result import RunResult
from ..models.report_row import ReportRow
from ..models.worklist_row import WorklistRow
from .http_fetch import FetchError, fetch_text
from .metric_lookup import MetricLookup
from .progress import ProgressTracker
from .rdf_extractor import RdfExtractor, RegexRdfExtractor
from .record_id import extract_record_id
from .url_resolver import resolve_url

"""Row processing for the FAIRsharing metric report.

For every worklist row, in sheet order:
1. resolve the test URL (no URL -> row skipped, nothing reported)
2. fetch the test document (failure -> one error row)
3. extract the metric URL and description (no metric URL -> row skipped)
4. derive the record id and look up the metric name
5. append a ReportRow

Every failure below the run level is caught at the row boundary, so one bad
row never stops the batch. Requests are paced by a fixed delay between rows
that touch the network.
"""

__all__ = [
    "RowOutcome",
    "process_row",
    "process_rows",
    "run_report",
]

logger = logging.getLogger(__name__)

_LOOKUP_ERROR_TYPES = {
    LookupStatus.PATH_MISS: "LOOKUP_PATH_MISS",
    LookupStatus.HTTP_ERROR: "LOOKUP_HTTP_ERROR",
    LookupStatus.TRANSPORT_ERROR: "LOOKUP_TRANSPORT_ERROR",
}


class RowOutcome(Enum):
    ENTRY = "entry"
    FETCH_ERROR = "fetch_error"
    NO_URL = "no_url"
    NO_METRIC = "no_metric"


def process_row(
    row: WorklistRow,
    client: httpx.Client,
    lookup: MetricLookup,
    error_log: ErrorLogBuffer,
    *,
    sheet: str = "",
    extractor: RdfExtractor | None = None,
) -> tuple[RowOutcome, ReportRow | None]:
    """Run the resolve/fetch/extract/lookup pipeline for a single row.

    Never raises for row-level problems; the outcome tells the caller which
    counter the row belongs to and the ReportRow (if any) goes to the table.
    """
    extractor = extractor or RegexRdfExtractor()

    url = resolve_url(row)
    if url is None:
        logger.info(f"row {row.row_index}: no URL, skipped")
        return RowOutcome.NO_URL, None

    try:
        text = fetch_text(client, url)
        metric_url = extractor.find_metric_url(text)
        description = extractor.extract_description(text)
        if metric_url is None:
            logger.info(f"row {row.row_index}: no metric URL in {url}, skipped")
            return RowOutcome.NO_METRIC, None

        record_id = extract_record_id(metric_url)
        if record_id is None:
            metric_name = MetricLookupResult.path_miss(f"no record id in {metric_url}")
        else:
            metric_name = lookup.lookup(record_id)
    except FetchError as e:
        logger.warning(f"row {row.row_index}: {e}")
        error_log.append(ErrorRecord.create(sheet, row.row_index, "FETCH_ERROR", url, str(e)))
        return RowOutcome.FETCH_ERROR, ReportRow.fetch_error(url, str(e), row.row_index)
    except Exception as e:
        message = str(e) or type(e).__name__
        logger.error(f"row {row.row_index}: unexpected error for {url}: {message}")
        error_log.append(ErrorRecord.create(sheet, row.row_index, "ROW_ERROR", url, message))
        return RowOutcome.FETCH_ERROR, ReportRow.fetch_error(url, message, row.row_index)

    if not metric_name.ok:
        error_log.append(
            ErrorRecord.create(
                sheet,
                row.row_index,
                _LOOKUP_ERROR_TYPES[metric_name.status],
                metric_url,
                metric_name.detail or metric_name.as_text(),
            )
        )
    logger.debug(
        f"row {row.row_index}: metric_url={metric_url} name={metric_name.as_text()!r} "
        f"description={'yes' if description else 'no'}"
    )
    return RowOutcome.ENTRY, ReportRow(
        test_url=url,
        metric_name=metric_name,
        metric_url=metric_url,
        test_description=description,
        row_index=row.row_index,
    )


def process_rows(
    rows: Sequence[WorklistRow],
    config: ReportConfig,
    client: httpx.Client,
    *,
    error_log: ErrorLogBuffer | None = None,
    extractor: RdfExtractor | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RunResult:
    """Process worklist rows strictly in order and aggregate the results.

    The configured delay is applied before every row that goes to the network,
    except the first one.
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()
    extractor = extractor or RegexRdfExtractor()
    lookup = MetricLookup(
        client,
        config.metric_name_json_path,
        base_url=config.http.metric_base_url,
    )

    counts = {outcome: 0 for outcome in RowOutcome}
    report_rows: list[ReportRow] = []
    requested = False

    with ProgressTracker(len(rows), description="Processing rows") as progress:
        for row in rows:
            progress.start_row(row.row_index)
            if requested and config.request_delay_seconds > 0 and resolve_url(row) is not None:
                sleep(config.request_delay_seconds)

            outcome, report_row = process_row(
                row,
                client,
                lookup,
                error_log,
                sheet=config.source_sheet,
                extractor=extractor,
            )
            counts[outcome] += 1
            if outcome is not RowOutcome.NO_URL:
                requested = True
            if report_row is not None:
                report_rows.append(report_row)

            progress.set_postfix(
                entries=counts[RowOutcome.ENTRY],
                errors=counts[RowOutcome.FETCH_ERROR],
            )
            progress.finish_row()

    end_time = datetime.now(UTC)
    return RunResult(
        total_rows=len(rows),
        entries=counts[RowOutcome.ENTRY],
        error_rows=counts[RowOutcome.FETCH_ERROR],
        skipped_rows=counts[RowOutcome.NO_URL],
        no_metric_rows=counts[RowOutcome.NO_METRIC],
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        report_rows=report_rows,
    )


def run_report(
    config: ReportConfig,
    client: httpx.Client,
    *,
    workbook_path: Path | None = None,
    output_path: Path | None = None,
    limit: int | None = None,
    error_log: ErrorLogBuffer | None = None,
    extractor: RdfExtractor | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> RunResult:
    """Read the worklist, process it and rebuild the target sheet.

    The report goes to ``output_path``, then ``config.output_workbook``, and
    otherwise into the worklist workbook itself.

    Raises:
        WorklistError: Source sheet or start marker missing (nothing processed).
        ReportWriteError: The target sheet could not be written.
    """
    path = Path(workbook_path or config.workbook)
    rows = read_worklist(config, path)
    if limit is not None:
        rows = rows[:limit]
    logger.info(f"worklist: {len(rows)} rows in '{config.source_sheet}'!{config.source_column}")

    error_log = error_log if error_log is not None else ErrorLogBuffer()
    result = process_rows(rows, config, client, error_log=error_log, extractor=extractor, sleep=sleep)

    try:
        log_path = error_log.flush()
        if log_path is not None:
            logger.info(f"error log: {log_path}")
    except OSError as e:
        logger.warning(f"error log flush failed: {e}")

    output = Path(output_path or config.output_workbook or path)
    write_report(output, config.target_sheet, result.report_rows)
    return result
