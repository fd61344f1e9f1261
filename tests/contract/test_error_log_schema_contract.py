from __future__ import annotations

import json
from pathlib import Path

import httpx

from fairsharing_report.config.loader import load_config
from fairsharing_report.services.orchestrator import run_report
from tests.conftest import TEST_URL, mock_transport

ERROR_LOG_KEYS = {"timestamp", "sheet", "row", "error_type", "url", "message"}
ERROR_TYPES = {"FETCH_ERROR", "ROW_ERROR", "LOOKUP_HTTP_ERROR", "LOOKUP_TRANSPORT_ERROR", "LOOKUP_PATH_MISS"}


def test_error_log_lines_follow_schema(temp_workdir: Path, write_config: Path, worklist_workbook: Path):
    with httpx.Client(transport=mock_transport({TEST_URL: httpx.ConnectError("refused")})) as client:
        run_report(load_config(write_config), client, sleep=lambda s: None)

    [log] = list((temp_workdir / "logs").glob("errors-*.log"))
    [line] = log.read_text(encoding="utf-8").splitlines()
    record = json.loads(line)
    assert set(record) == ERROR_LOG_KEYS
    assert record["error_type"] in ERROR_TYPES
    assert record["row"] == 3
    assert record["sheet"] == "Tests"
    assert record["message"] == "Failed to fetch https://example.org/t1: refused"
