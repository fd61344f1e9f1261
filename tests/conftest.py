# Shared pytest fixtures
from __future__ import annotations

import re
import tempfile
import zipfile
from collections.abc import Callable
from pathlib import Path
from typing import Any
from xml.sax.saxutils import escape

import httpx
import openpyxl
import pytest

from fairsharing_report.logging.init import reset_logging

TEST_URL = "https://example.org/t1"
METRIC_URL = "https://doi.org/10.25504/FAIRsharing.XYZ9"
METRIC_ENDPOINT = "https://fairsharing.org/FAIRsharing.XYZ9"

RDF_BODY = f"""<https://example.org/t1> <http://purl.org/dc/terms/description> "A test." .
<https://example.org/t1> <http://purl.org/dc/terms/conformsTo> <{METRIC_URL}> .
"""


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("REPORT_WORKBOOK", raising=False)
        monkeypatch.delenv("REPORT_REQUEST_DELAY", raising=False)
        monkeypatch.delenv("REPORT_OUTPUT_WORKBOOK", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """workbook: ./data/metrics.xlsx
source_sheet: Tests
target_sheet: Report
source_column: A
start_marker: START
stop_marker: END
metric_name_json_path: metadata.name
request_delay_seconds: 0
http:
  timeout_seconds: 5
  user_agent: fairsharing-report-tests
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "report.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


def _write_workbook(path: Path, cells: list[Any], sheet: str = "Tests", column: int = 1) -> Path:
    """Create a workbook with ``cells`` written top-down in one column.

    A cell is a plain value (str/None) or a dict with ``value`` and ``hyperlink``.
    """
    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = sheet
    for row, entry in enumerate(cells, start=1):
        if isinstance(entry, dict):
            cell = ws.cell(row=row, column=column, value=entry.get("value"))
            if entry.get("hyperlink"):
                cell.hyperlink = entry["hyperlink"]
        elif entry is not None:
            ws.cell(row=row, column=column, value=entry)
    wb.save(path)
    return path


def set_cached_value(path: Path, coordinate: str, value: str, sheet_xml: str = "xl/worksheets/sheet1.xml") -> None:
    """Store ``value`` as the cached result of the formula at ``coordinate``.

    openpyxl never writes formula results; Excel does. This rewrites the saved
    sheet XML the way Excel leaves it after a recalculation.
    """
    with zipfile.ZipFile(path) as zf:
        entries = {name: zf.read(name) for name in zf.namelist()}
    xml = entries[sheet_xml].decode("utf-8")
    cell = re.compile(rf'<c r="{coordinate}"[^>]*>(<f>.*?</f>).*?</c>', re.DOTALL)
    xml, count = cell.subn(
        lambda m: f'<c r="{coordinate}" t="str">{m.group(1)}<v>{escape(value)}</v></c>', xml
    )
    assert count == 1, f"no formula cell at {coordinate}"
    entries[sheet_xml] = xml.encode("utf-8")
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as zf:
        for name, data in entries.items():
            zf.writestr(name, data)


@pytest.fixture()
def make_workbook() -> Callable[..., Path]:
    return _write_workbook


@pytest.fixture()
def worklist_workbook(temp_workdir: Path) -> Path:
    return _write_workbook(
        temp_workdir / "data" / "metrics.xlsx",
        [
            "Metric tests",
            "START",
            f'=HYPERLINK("{TEST_URL}","t1")',
            "END",
        ],
    )


def mock_transport(routes: dict[str, Any]) -> httpx.MockTransport:
    """Build a MockTransport from ``url -> response`` routes.

    A route value is an ``httpx.Response``, an exception instance to raise, or
    a callable taking the request. Unknown URLs answer 404.
    """
    def handler(request: httpx.Request) -> httpx.Response:
        target = routes.get(str(request.url))
        if target is None:
            return httpx.Response(404, text="not found")
        if isinstance(target, Exception):
            raise target
        if callable(target):
            return target(request)
        return target

    return httpx.MockTransport(handler)


@pytest.fixture()
def default_routes() -> dict[str, Any]:
    return {
        TEST_URL: httpx.Response(200, text=RDF_BODY),
        METRIC_ENDPOINT: httpx.Response(200, json={"metadata": {"name": "My Metric"}}),
    }


@pytest.fixture()
def http_client(default_routes: dict[str, Any]):
    with httpx.Client(transport=mock_transport(default_routes)) as client:
        yield client
