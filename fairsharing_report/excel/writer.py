from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import pandas as pd
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Font
from openpyxl.utils import get_column_letter

from ..models.report_row import REPORT_HEADER, ReportRow

"""Report writer.

The target sheet is rebuilt on every run: pandas replaces it (or creates it)
inside the output workbook and leaves the other sheets alone. The header row
is bold and columns are sized to their longest cell.

Cell text comes from remote documents, so control characters that XML cannot
carry are dropped and text starting with ``=`` is stored as a string, never as
a formula.
"""

__all__ = [
    "MAX_COLUMN_WIDTH",
    "ReportWriteError",
    "clean_cell_text",
    "report_frame",
    "write_report",
]

logger = logging.getLogger(__name__)

MAX_COLUMN_WIDTH = 100


class ReportWriteError(Exception):
    pass


def clean_cell_text(value: str) -> str:
    """Drop characters openpyxl refuses to write (``\\x00``-``\\x08``, ``\\x0b``, ...).

    >>> clean_cell_text("Bell\\x07 test.")
    'Bell test.'
    """
    return ILLEGAL_CHARACTERS_RE.sub("", value)


def report_frame(rows: Sequence[ReportRow]) -> pd.DataFrame:
    """Build the report table; sentinels are rendered here."""
    cells = [[clean_cell_text(v) for v in r.to_cells()] for r in rows]
    return pd.DataFrame(cells, columns=REPORT_HEADER, dtype=object)


def write_report(workbook_path: Path, sheet_name: str, rows: Sequence[ReportRow]) -> int:
    """Replace ``sheet_name`` in ``workbook_path`` with the report table.

    The workbook is created when it does not exist yet.

    Returns:
        Number of data rows written (header excluded)

    Raises:
        ReportWriteError: If the workbook cannot be opened or saved.
    """
    df = report_frame(rows)
    mode = "a" if workbook_path.exists() else "w"
    extra = {"if_sheet_exists": "replace"} if mode == "a" else {}
    try:
        workbook_path.parent.mkdir(parents=True, exist_ok=True)
        with pd.ExcelWriter(workbook_path, engine="openpyxl", mode=mode, **extra) as writer:
            df.to_excel(writer, sheet_name=sheet_name, index=False)
            ws = writer.sheets[sheet_name]
            for cell in ws[1]:
                cell.font = Font(bold=True)
            for row in ws.iter_rows(min_row=2):
                for cell in row:
                    # openpyxl turns any "=..." string into a formula
                    if cell.data_type == "f":
                        cell.data_type = "s"
            for idx, column in enumerate(REPORT_HEADER, start=1):
                longest = max([len(column)] + [len(str(v)) for v in df[column].tolist()])
                ws.column_dimensions[get_column_letter(idx)].width = min(longest + 2, MAX_COLUMN_WIDTH)
    except Exception as e:
        raise ReportWriteError(f"cannot write sheet '{sheet_name}' to {workbook_path}: {e}") from e
    logger.info(f"wrote {len(df)} rows to sheet '{sheet_name}' in {workbook_path}")
    return len(df)
