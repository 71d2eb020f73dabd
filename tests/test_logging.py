"""Tests for structured logging setup."""

from __future__ import annotations

import io
import json
import logging

import pytest
import structlog

from portfolio_pnl.logging import get_logger, setup_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


class TestSetupLogging:
    def test_json_format(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logger = get_logger("test_json")
        logger.info("quotes_acquired", code="600519")

        captured = capsys.readouterr()
        line = json.loads(captured.err.strip())
        assert line["event"] == "quotes_acquired"
        assert line["code"] == "600519"
        assert line["level"] == "info"
        assert "timestamp" in line

    def test_console_format(self, capsys):
        setup_logging(level="INFO", log_format="console")
        logger = get_logger("test_console")
        logger.info("hello console", portfolio="growth")

        captured = capsys.readouterr()
        assert "hello console" in captured.err
        assert "growth" in captured.err

    def test_log_level_filtering(self, capsys):
        setup_logging(level="WARNING", log_format="json")
        logger = get_logger("test_level")
        logger.info("should be hidden")
        logger.warning("should appear")

        captured = capsys.readouterr()
        assert "should be hidden" not in captured.err
        assert "should appear" in captured.err

    def test_get_logger_with_context(self, capsys):
        setup_logging(level="INFO", log_format="json")
        logger = get_logger("test_ctx", portfolio="P1", code="000001")
        logger.info("context test")

        captured = capsys.readouterr()
        line = json.loads(captured.err.strip())
        assert line["portfolio"] == "P1"
        assert line["code"] == "000001"

    def test_contextvars_binding(self, capsys):
        setup_logging(level="INFO", log_format="json")
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id="abc123")

        logger = get_logger("test_ctxvars")
        logger.info("with context var")

        captured = capsys.readouterr()
        line = json.loads(captured.err.strip())
        assert line["request_id"] == "abc123"

        structlog.contextvars.clear_contextvars()

    def test_httpx_request_logs_quieted(self):
        setup_logging(level="DEBUG", log_format="json")
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_custom_stream(self):
        stream = io.StringIO()
        setup_logging(level="INFO", log_format="json", stream=stream)
        get_logger("test_stream").info("to stream", code="600519")

        line = json.loads(stream.getvalue().strip())
        assert line["event"] == "to stream"

    def test_stdlib_records_share_format(self):
        stream = io.StringIO()
        setup_logging(level="INFO", log_format="json", stream=stream)
        logging.getLogger("sqlalchemy.test").warning("plain stdlib")

        line = json.loads(stream.getvalue().strip())
        assert line["event"] == "plain stdlib"
        assert line["level"] == "warning"
        assert "timestamp" in line

    def test_non_ascii_kept_readable(self):
        stream = io.StringIO()
        setup_logging(level="INFO", log_format="json", stream=stream)
        get_logger("test_utf8").info("quote", name="贵州茅台")
        assert "贵州茅台" in stream.getvalue()
