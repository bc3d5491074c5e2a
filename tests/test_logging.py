import logging

import packages.error_reporting as error_reporting
from packages.logging_utils import ContextFilter, SafeFormatter, LOG_FORMAT
from packages.request_context import pipeline_run_context, request_id_var


def _record(message="hello"):
    return logging.LogRecord("fitness.gamification", logging.INFO, __file__, 1, message, None, None)


def test_context_filter_stamps_run_and_request_ids():
    token = request_id_var.set("req-9")
    try:
        with pipeline_run_context("run-1"):
            record = _record()
            assert ContextFilter().filter(record) is True
    finally:
        request_id_var.reset(token)
    assert record.request_id == "req-9"
    assert record.run_id == "run-1"


def test_formatter_fills_missing_context():
    line = SafeFormatter(LOG_FORMAT).format(_record("plain"))
    assert "request_id=- run_id=- plain" in line


def test_error_reporting_disabled_without_dsn(monkeypatch):
    monkeypatch.setattr(error_reporting, "SENTRY_DSN", None)
    assert error_reporting.init_error_reporting("test") is False
