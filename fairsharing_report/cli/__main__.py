from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from fairsharing_report.config.loader import ConfigError, load_config
from fairsharing_report.excel.reader import WorklistError, read_worklist
from fairsharing_report.excel.writer import ReportWriteError
from fairsharing_report.logging.init import log_summary, set_debug, setup_logging
from fairsharing_report.services.http_fetch import build_client
from fairsharing_report.services.orchestrator import run_report
from fairsharing_report.services.summary import render_summary_line
from fairsharing_report.services.url_resolver import resolve_url

"""CLI entrypoint.

Flow:
- Load .env (overrides existing environment) and the YAML config
- Read the worklist from the source sheet
- Process every row, then rebuild the target sheet (in the worklist workbook
  unless --output or output_workbook names another file)
- Print the SUMMARY line and exit with a contract exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

DEFAULT_CONFIG_PATH = Path("config/report.yml")


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env via python-dotenv; a failure is reported and ignored."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except Exception as e:  # pragma: no cover
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="fairsharing-report",
        description="Build a FAIRsharing metric report from a workbook worklist",
    )
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config file")
    p.add_argument("--workbook", type=Path, default=None, help="Override the configured workbook")
    p.add_argument("--output", type=Path, default=None, help="Write the report sheet to this workbook instead")
    p.add_argument("--limit", type=int, default=None, help="Process only the first N worklist rows")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data",
        action="store_true",
        help="Print the worklist rows and their resolved URLs then exit",
    )
    args = p.parse_args(argv)
    if args.limit is not None and args.limit < 0:
        p.error("--limit must be >= 0")
    return args


def _inspect_data(cfg, workbook: Path) -> int:
    try:
        rows = read_worklist(cfg, workbook)
    except WorklistError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    print(f"WORKLIST: {workbook.name} '{cfg.source_sheet}'!{cfg.source_column} rows={len(rows)}")
    for row in rows:
        print(f"  row={row.row_index} url={resolve_url(row) or '-'}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None only: an explicit [] must not pick up pytest's own argv
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"), override=True)

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    if args.debug:
        set_debug()

    workbook = args.workbook or Path(cfg.workbook)
    if not workbook.exists():
        logger.error(f"workbook not found: {workbook}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg, workbook)

    logger.info(f"Processing worklist from: {workbook}")
    try:
        with build_client(cfg.http) as client:
            result = run_report(
                cfg,
                client,
                workbook_path=workbook,
                output_path=args.output,
                limit=args.limit,
            )
    except WorklistError as e:
        logger.error(f"worklist: {e}")
        return EXIT_FATAL
    except ReportWriteError as e:
        logger.error(f"report: {e}")
        return EXIT_FATAL

    logger.info(f"{result.entries} entries written to '{cfg.target_sheet}'")
    # log_summary adds the "SUMMARY " label itself
    log_summary(render_summary_line(result).removeprefix("SUMMARY "))

    if result.has_errors:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
