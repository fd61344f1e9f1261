from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError
from openpyxl.utils import column_index_from_string

from ..models.config_models import (
    DEFAULT_METRIC_BASE_URL,
    DEFAULT_METRIC_JSON_PATH,
    DEFAULT_REQUEST_DELAY_SECONDS,
    DEFAULT_TIMEOUT_SECONDS,
    DEFAULT_USER_AGENT,
    HttpConfig,
    ReportConfig,
)

"""Config loader.

Responsibilities:
- Load the YAML config (config/report.yml by default)
- Validate it against config_schema.json
- Apply defaults and environment overrides (REPORT_WORKBOOK, REPORT_OUTPUT_WORKBOOK,
  REPORT_REQUEST_DELAY)
- Run the checks a JSON schema cannot express (column letters, sheet names, dotted path)
"""

SCHEMA_PATH = Path(__file__).parent / "config_schema.json"

ENV_WORKBOOK = "REPORT_WORKBOOK"
ENV_REQUEST_DELAY = "REPORT_REQUEST_DELAY"
ENV_OUTPUT_WORKBOOK = "REPORT_OUTPUT_WORKBOOK"

MAX_COLUMN_INDEX = 16384  # XFD


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against the JSON schema.

    Raises:
        ConfigError: If the schema file is missing or unreadable, or the data
            fails validation (missing required keys, wrong types, unknown keys).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def _apply_env_overrides(data: dict[str, Any]) -> dict[str, Any]:
    merged = dict(data)
    workbook = os.getenv(ENV_WORKBOOK)
    if workbook:
        merged["workbook"] = workbook
    output = os.getenv(ENV_OUTPUT_WORKBOOK)
    if output:
        merged["output_workbook"] = output
    delay = os.getenv(ENV_REQUEST_DELAY)
    if delay:
        try:
            merged["request_delay_seconds"] = float(delay)
        except ValueError as e:
            raise ConfigError(f"invalid config: {ENV_REQUEST_DELAY}={delay!r} is not a number") from e
        if merged["request_delay_seconds"] < 0:
            raise ConfigError(f"invalid config: {ENV_REQUEST_DELAY} must be >= 0")
    return merged


def _check_semantics(cfg: ReportConfig) -> None:
    try:
        index = column_index_from_string(cfg.source_column.upper())
    except ValueError as e:
        raise ConfigError(f"invalid config: source_column {cfg.source_column!r}: {e}") from e
    if index > MAX_COLUMN_INDEX:
        raise ConfigError(f"invalid config: source_column {cfg.source_column!r} is beyond XFD")
    in_place = cfg.output_workbook is None or Path(cfg.output_workbook).resolve() == Path(cfg.workbook).resolve()
    if in_place and cfg.source_sheet == cfg.target_sheet:
        raise ConfigError("invalid config: target_sheet must differ from source_sheet")
    if any(not seg for seg in cfg.metric_name_json_path.split(".")):
        raise ConfigError(
            f"invalid config: metric_name_json_path has an empty segment: {cfg.metric_name_json_path!r}"
        )


def load_config(path: Path) -> ReportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config validation failed: top level must be a mapping, got {type(data).__name__}")

    data = _apply_env_overrides(data)
    _validate_config_schema(data)

    http_raw = data.get("http", {})
    http = HttpConfig(
        timeout_seconds=float(http_raw.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)),
        user_agent=http_raw.get("user_agent", DEFAULT_USER_AGENT),
        metric_base_url=http_raw.get("metric_base_url", DEFAULT_METRIC_BASE_URL).rstrip("/"),
    )
    cfg = ReportConfig(
        workbook=data["workbook"],
        source_sheet=data["source_sheet"],
        target_sheet=data["target_sheet"],
        source_column=data["source_column"].upper(),
        start_marker=data["start_marker"].strip(),
        stop_marker=data["stop_marker"].strip(),
        output_workbook=data.get("output_workbook"),
        metric_name_json_path=data.get("metric_name_json_path", DEFAULT_METRIC_JSON_PATH),
        request_delay_seconds=float(data.get("request_delay_seconds", DEFAULT_REQUEST_DELAY_SECONDS)),
        http=http,
    )
    _check_semantics(cfg)
    return cfg
