from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any

import openpyxl
from openpyxl.utils import column_index_from_string
from openpyxl.worksheet.worksheet import Worksheet

from ..models.config_models import ReportConfig
from ..models.worklist_row import WorklistRow
from ..services.url_resolver import extract_hyperlink_formula_url

"""Worklist reader.

The worklist is the run of cells in one column of the source sheet between a
start marker and a stop marker. The workbook is opened twice: once with
formulas (formula text and attached hyperlinks) and once with ``data_only=True``
for the cached values a user sees.

Scan states: SEEKING_START -> COLLECTING -> STOPPED. While collecting, the stop
marker, an empty cell or the end of the sheet stops the scan.

openpyxl does not calculate formulas and saving a workbook with it drops the
cached results. A formula cell without a HYPERLINK literal and without a cached
value therefore carries no URL; it is reported with a warning.
"""

__all__ = [
    "ScanState",
    "WorklistError",
    "iter_column_cells",
    "read_worklist",
    "scan_worklist",
]

logger = logging.getLogger(__name__)


class WorklistError(Exception):
    """Raised when the worklist cannot be located (fatal for the run)."""


class ScanState(Enum):
    SEEKING_START = "seeking_start"
    COLLECTING = "collecting"
    STOPPED = "stopped"


def _display_text(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def _formula_text(value: Any) -> str | None:
    # ArrayFormula / DataTableFormula keep their source in ``.text``
    text = getattr(value, "text", value)
    if isinstance(text, str) and text.startswith("="):
        return text
    return None


def iter_column_cells(formula_ws: Worksheet, values_ws: Worksheet, column: str) -> Iterator[WorklistRow]:
    """Yield a WorklistRow for every row of ``column`` from top to bottom."""
    col = column_index_from_string(column.upper())
    for row_index in range(1, formula_ws.max_row + 1):
        cell = formula_ws.cell(row=row_index, column=col)
        formula = _formula_text(cell.value)
        link = cell.hyperlink.target if cell.hyperlink is not None else None
        if formula is not None:
            display = _display_text(values_ws.cell(row=row_index, column=col).value)
            if display is None and link is None and extract_hyperlink_formula_url(formula) is None:
                logger.warning(
                    f"row {row_index}: formula {formula} has no cached value; "
                    "recalculate and save the workbook in Excel"
                )
        else:
            display = _display_text(cell.value)
        yield WorklistRow(
            row_index=row_index,
            display_value=display,
            formula_text=formula,
            hyperlink_url=link,
        )


def scan_worklist(cells: Iterable[WorklistRow], start_marker: str, stop_marker: str) -> list[WorklistRow]:
    """Return the rows strictly between the start marker and the first stop condition.

    Marker matching is an exact comparison of the trimmed display text.

    Raises:
        WorklistError: If the start marker never appears.
    """
    state = ScanState.SEEKING_START
    rows: list[WorklistRow] = []
    for cell in cells:
        if state is ScanState.SEEKING_START:
            if cell.text == start_marker:
                state = ScanState.COLLECTING
            continue
        if cell.text == stop_marker or cell.is_empty:
            state = ScanState.STOPPED
            break
        rows.append(cell)

    if state is ScanState.SEEKING_START:
        raise WorklistError(f"start marker '{start_marker}' not found")
    return rows


def read_worklist(config: ReportConfig, workbook_path: Path | None = None) -> list[WorklistRow]:
    """Open the configured workbook and return the worklist rows in sheet order.

    Raises:
        WorklistError: If the workbook or the source sheet is missing, or the
            start marker is not found in the source column.
    """
    path = Path(workbook_path or config.workbook)
    if not path.exists():
        raise WorklistError(f"workbook not found: {path}")
    try:
        formula_wb = openpyxl.load_workbook(path)
        values_wb = openpyxl.load_workbook(path, data_only=True)
    except Exception as e:
        raise WorklistError(f"cannot open workbook {path}: {e}") from e

    try:
        if config.source_sheet not in formula_wb.sheetnames:
            raise WorklistError(f"source sheet '{config.source_sheet}' not found in {path.name}")
        cells = iter_column_cells(
            formula_wb[config.source_sheet],
            values_wb[config.source_sheet],
            config.source_column,
        )
        return scan_worklist(cells, config.start_marker, config.stop_marker)
    finally:
        formula_wb.close()
        values_wb.close()
