from __future__ import annotations

import logging

import pytest

from whatsapp_catalog_fdw.core.logging import StructuredLogFormatter, configure_logging, get_logger, log_progress


@pytest.fixture
def reset_logging_handlers():
    root = logging.getLogger()
    existing_handlers = list(root.handlers)
    existing_level = root.level
    yield
    root.handlers = existing_handlers
    root.setLevel(existing_level)


class _ListHandler(logging.Handler):
    def __init__(self, formatter: logging.Formatter):
        super().__init__()
        self.records: list[logging.LogRecord] = []
        self.setFormatter(formatter)

    def emit(self, record: logging.LogRecord) -> None:  # pragma: no cover - trivial
        self.records.append(record)


def _collect(level: str = "DEBUG") -> _ListHandler:
    configure_logging(level, force=True)
    root = logging.getLogger()
    collector = _ListHandler(root.handlers[0].formatter)
    root.addHandler(collector)
    return collector


def test_structured_formatter_appends_extras_in_fixed_order():
    formatter = StructuredLogFormatter()
    record = logging.LogRecord(
        name="whatsapp_catalog_fdw.fdw.controller",
        level=logging.INFO,
        pathname=__file__,
        lineno=42,
        msg="Retrieved 3 products",
        args=(),
        exc_info=None,
    )
    record.rows = 3
    record.phase = "begin_scan"
    record.status_code = None
    record.unrelated = "ignored"

    formatted = formatter.format(record)

    assert "| INFO | whatsapp_catalog_fdw.fdw.controller | Retrieved 3 products" in formatted
    assert formatted.endswith("| phase=begin_scan rows=3")


def test_structured_formatter_without_extras():
    formatter = StructuredLogFormatter()
    record = logging.LogRecord("x", logging.ERROR, __file__, 1, "boom", (), None)

    assert formatter.format(record).endswith("| ERROR | x | boom")


def test_configure_logging_installs_structured_formatter(reset_logging_handlers, monkeypatch):
    monkeypatch.delenv("WACAT_LOG_LEVEL", raising=False)

    configure_logging(force=True)

    root = logging.getLogger()
    assert root.handlers, "expected at least one handler configured"
    assert isinstance(root.handlers[0].formatter, StructuredLogFormatter)
    assert root.level == logging.WARNING


def test_configure_logging_reads_level_from_environment(reset_logging_handlers, monkeypatch):
    monkeypatch.setenv("WACAT_LOG_LEVEL", "debug")

    configure_logging(force=True)

    assert logging.getLogger().level == logging.DEBUG


def test_logger_adapter_merges_bound_and_call_extras(reset_logging_handlers):
    collector = _collect()
    logger = get_logger("test.adapter", extra={"url": "https://api.example", "unused": None})
    try:
        logger.debug("HTTP response", extra={"status_code": 200})
    finally:
        logging.getLogger().removeHandler(collector)

    record = collector.records[0]
    assert record.url == "https://api.example"
    assert record.status_code == 200
    assert not hasattr(record, "unused")


def test_log_progress_populates_record_extras(reset_logging_handlers):
    collector = _collect()
    logger = get_logger("test.progress")
    try:
        log_progress(logger, "Scan ended", phase="end_scan", status="ok", extra={"rows": 0})
    finally:
        logging.getLogger().removeHandler(collector)

    assert collector.records, "log_progress should emit a record"
    record = collector.records[0]
    assert record.phase == "end_scan"
    assert record.status == "ok"
    assert record.rows == 0
    formatted = collector.format(record)
    assert formatted.endswith("| phase=end_scan status=ok rows=0")
