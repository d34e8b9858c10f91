"""Tests for notion_mcp.core.logging module."""

from __future__ import annotations

import json
import logging
import sys

from notion_mcp.core.logging import (
    JSONFormatter,
    StandardFormatter,
    ToolCallLogger,
    configure_logging,
    correlation_context,
    get_correlation_id,
    set_correlation_id,
)


def make_record(msg: str = "hello", level: int = logging.INFO, **extra) -> logging.LogRecord:
    record = logging.LogRecord("notion_mcp.test", level, __file__, 10, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


# ============================================================================
# Correlation ID Tests
# ============================================================================


class TestCorrelationId:
    """Tests for correlation ID functionality."""

    def test_default_none(self):
        set_correlation_id(None)
        assert get_correlation_id() is None

    def test_set_and_get(self):
        set_correlation_id("abc-123")
        assert get_correlation_id() == "abc-123"
        set_correlation_id(None)

    def test_context_generates_id(self):
        set_correlation_id(None)

        with correlation_context() as cid:
            assert len(cid) == 36
            assert get_correlation_id() == cid

        assert get_correlation_id() is None

    def test_context_uses_given_id(self):
        with correlation_context("fixed-id") as cid:
            assert cid == "fixed-id"
            assert get_correlation_id() == "fixed-id"


# ============================================================================
# Formatter Tests
# ============================================================================


class TestJSONFormatter:
    def test_basic_fields(self):
        data = json.loads(JSONFormatter().format(make_record()))

        assert data["level"] == "INFO"
        assert data["logger"] == "notion_mcp.test"
        assert data["message"] == "hello"
        assert "source" not in data

    def test_warning_has_source(self):
        data = json.loads(JSONFormatter().format(make_record(level=logging.WARNING)))
        assert data["source"]["line"] == 10

    def test_correlation_id_included(self):
        with correlation_context("cid-1"):
            data = json.loads(JSONFormatter().format(make_record()))
        assert data["correlation_id"] == "cid-1"

    def test_extra_data(self):
        data = json.loads(JSONFormatter().format(make_record(extra_data={"tool": "x"})))
        assert data["extra"] == {"tool": "x"}


class TestStandardFormatter:
    def test_prefixes_short_correlation_id(self):
        with correlation_context("12345678-aaaa"):
            output = StandardFormatter(use_colors=False).format(make_record())
        assert "[12345678] hello" in output

    def test_record_not_mutated(self):
        record = make_record()
        with correlation_context("12345678-aaaa"):
            StandardFormatter().format(record)
        assert record.msg == "hello"

    def test_colours_level_on_tty(self, monkeypatch):
        monkeypatch.setattr(sys.stderr, "isatty", lambda: True, raising=False)
        record = make_record(level=logging.WARNING)

        output = StandardFormatter().format(record)

        assert f"{StandardFormatter.COLORS['WARNING']}WARNING{StandardFormatter.RESET}" in output
        assert record.levelname == "WARNING"

    def test_plain_when_not_a_tty(self, monkeypatch):
        monkeypatch.setattr(sys.stderr, "isatty", lambda: False, raising=False)

        output = StandardFormatter().format(make_record())

        assert "\033[" not in output
        assert " - INFO - hello" in output


# ============================================================================
# configure_logging Tests
# ============================================================================


class TestConfigureLogging:
    def test_writes_to_stderr(self, clean_env):
        configure_logging(level="DEBUG", json_format=False)
        root = logging.getLogger()

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert root.handlers[0].stream is sys.stderr
        assert isinstance(root.handlers[0].formatter, StandardFormatter)

    def test_json_from_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("NOTION_MCP_LOG_FORMAT", "json")
        configure_logging()

        assert isinstance(logging.getLogger().handlers[0].formatter, JSONFormatter)

    def test_log_file(self, clean_env, tmp_path):
        log_file = tmp_path / "server.log"
        configure_logging(level="INFO", json_format=False, log_file=str(log_file))
        root = logging.getLogger()

        assert len(root.handlers) == 2
        assert isinstance(root.handlers[1].formatter, JSONFormatter)
        for handler in root.handlers[1:]:
            root.removeHandler(handler)
            handler.close()


# ============================================================================
# ToolCallLogger Tests
# ============================================================================


class TestToolCallLogger:
    def test_sanitize_redacts_credentials(self):
        sanitized = ToolCallLogger()._sanitize({"pageId": "p1", "api_key": "k", "nested": {"auth_token": "t"}})

        assert sanitized == {"pageId": "p1", "api_key": "[REDACTED]", "nested": {"auth_token": "[REDACTED]"}}

    def test_sanitize_truncates_long_strings(self):
        sanitized = ToolCallLogger()._sanitize({"content": "x" * 600})
        assert sanitized["content"] == "x" * 500 + "..."

    def test_log_call_and_result(self, caplog):
        tool_logger = ToolCallLogger(logging.getLogger("notion_mcp.tools.test"))

        with caplog.at_level(logging.DEBUG, logger="notion_mcp.tools.test"):
            tool_logger.log_call("systemprompt_get_notion_page", {"pageId": "p1"})
            tool_logger.log_result("systemprompt_get_notion_page", success=True, duration_ms=1.5)

        messages = [record.getMessage() for record in caplog.records]
        assert "Tool call: systemprompt_get_notion_page" in messages
        assert "Tool result: systemprompt_get_notion_page -> success (1.5ms)" in messages
