from __future__ import annotations

import logging
from io import StringIO

from fairsharing_report.logging import init as log_init
from fairsharing_report.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    set_debug,
    setup_logging,
)


def test_setup_logging_creates_logger_with_labeled_formatter():
    logger = setup_logging()
    assert logger.name == LOGGER_NAME
    assert logger.level == logging.INFO
    assert len(logger.handlers) == 1
    assert isinstance(logger.handlers[0].formatter, LabeledFormatter)
    assert logger.propagate is False


def test_setup_logging_is_idempotent():
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert len(second.handlers) == 1
    assert get_logger() is first


def test_setup_logging_quiets_httpx():
    setup_logging()
    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_logging_labeled_prefixes():
    captured = StringIO()
    logger = logging.getLogger("test_fairsharing_report_labels")
    logger.setLevel(logging.DEBUG)
    for h in logger.handlers[:]:
        logger.removeHandler(h)
    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    handler = logging.StreamHandler(captured)
    handler.setFormatter(LabeledFormatter())
    logger.addHandler(handler)
    logger.propagate = False

    logger.debug("d")
    logger.info("i")
    logger.warning("w")
    logger.error("e")
    logger.log(SUMMARY_LEVEL, "s")

    assert captured.getvalue().splitlines() == ["DEBUG d", "INFO i", "WARN w", "ERROR e", "SUMMARY s"]


def test_module_loggers_reach_application_handler(capsys):
    setup_logging()
    logging.getLogger("fairsharing_report.services.orchestrator").info("row 3: no URL, skipped")
    assert "INFO row 3: no URL, skipped" in capsys.readouterr().out


def test_log_summary_and_debug(capsys):
    setup_logging()
    logging.getLogger(LOGGER_NAME).debug("hidden")
    set_debug()
    log_summary("rows=1 entries=1")
    out = capsys.readouterr().out
    assert "hidden" not in out
    assert "DEBUG debug mode enabled" in out
    assert "SUMMARY rows=1 entries=1" in out


def test_reset_logging():
    setup_logging()
    log_init.reset_logging()
    assert log_init._logger is None
