"""Tests for structured logging functionality."""

from __future__ import annotations

import json
import logging
import sys

import pytest
from flask import Flask, request

from fintrack.config import BaseConfig
from fintrack.logging_config import (
    JSONFormatter,
    RequestContextFilter,
    get_logger,
    setup_logging,
)


def _record(**kwargs) -> logging.LogRecord:
    record = logging.LogRecord(
        name="fintrack.test",
        level=kwargs.pop("level", logging.INFO),
        pathname="test.py",
        lineno=42,
        msg=kwargs.pop("msg", "Test message"),
        args=(),
        exc_info=kwargs.pop("exc_info", None),
    )
    record.module = "test_module"
    record.funcName = "test_function"
    return record


def test_json_formatter():
    """JSONFormatter renders the standard fields."""
    log_data = json.loads(JSONFormatter().format(_record()))

    assert log_data["level"] == "INFO"
    assert log_data["logger"] == "fintrack.test"
    assert log_data["message"] == "Test message"
    assert log_data["module"] == "test_module"
    assert log_data["function"] == "test_function"
    assert log_data["line"] == 42
    assert "timestamp" in log_data
    assert "exception" not in log_data


def test_json_formatter_with_exception():
    try:
        raise ValueError("Test error")
    except ValueError:
        exc_info = sys.exc_info()

    log_data = json.loads(
        JSONFormatter().format(_record(level=logging.ERROR, msg="Failed", exc_info=exc_info))
    )

    assert log_data["exception"]["type"] == "ValueError"
    assert log_data["exception"]["message"] == "Test error"
    assert "Traceback" in log_data["exception"]["traceback"]


def test_json_formatter_includes_extra_fields():
    record = _record()
    record.transaction_id = 7

    log_data = json.loads(JSONFormatter().format(record))

    assert log_data["extra"] == {"transaction_id": 7}


def test_request_context_filter_stamps_request_fields():
    app = Flask(__name__)
    record = _record()

    with app.test_request_context("/api/budgets", method="POST"):
        request.fintrack_user_id = 3
        assert RequestContextFilter().filter(record)

    assert (record.path, record.method, record.user_id) == ("/api/budgets", "POST", 3)


def test_request_context_filter_outside_request():
    record = _record()

    assert RequestContextFilter().filter(record)
    assert not hasattr(record, "path")


def test_get_logger_namespaces():
    assert get_logger("fintrack.services.auth").name == "fintrack.services.auth"
    assert get_logger("scripts").name == "fintrack.scripts"


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.setenv("FINTRACK_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("FINTRACK_DEV_MODE", raising=False)
    return BaseConfig()


def test_setup_logging_writes_json_file(config, tmp_path):
    logger = setup_logging(config)
    get_logger("fintrack.tests").info("Budget created", extra={"budget_id": 11})
    for handler in logger.handlers:
        handler.flush()

    log_file = tmp_path / "logs" / "fintrack.log"
    lines = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]

    assert lines[0]["message"] == "Logging initialized"
    assert lines[-1]["message"] == "Budget created"
    assert lines[-1]["extra"]["budget_id"] == 11


def test_setup_logging_is_idempotent(config):
    setup_logging(config)
    logger = setup_logging(config)

    assert len(logger.handlers) == 2
