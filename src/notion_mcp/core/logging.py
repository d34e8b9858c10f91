# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Structured logging configuration for the Notion MCP server.

stdout carries the MCP stdio stream, so every handler configured here
writes to stderr or to a file.

Provides:
- JSON formatter for non-interactive runs (MCP hosts capture stderr)
- Plain formatter for terminals
- Correlation IDs scoped to a single tool call
- Tool call logging with redacted credentials
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> str | None:
    """Get the correlation ID of the current request, if any."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None) -> None:
    """Set (or clear, with None) the correlation ID for the current context."""
    _correlation_id.set(correlation_id)


@contextmanager
def correlation_context(
    correlation_id: str | None = None,
) -> Generator[str, None, None]:
    """Scope a correlation ID to a block, generating one if not given.

    Example:
        with correlation_context() as cid:
            logger.info("Dispatching tool")  # carries cid
    """
    cid = correlation_id or str(uuid.uuid4())
    token = _correlation_id.set(cid)
    try:
        yield cid
    finally:
        _correlation_id.reset(token)


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with correlation ID and source location."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        correlation_id = get_correlation_id()
        if correlation_id:
            log_data["correlation_id"] = correlation_id

        if record.levelno >= logging.WARNING:
            log_data["source"] = {
                "file": record.pathname,
                "line": record.lineno,
                "function": record.funcName,
            }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            log_data["extra"] = record.extra_data

        return json.dumps(log_data, default=str)


class StandardFormatter(logging.Formatter):
    """Human-readable formatter for terminals.

    Colours the level name when writing to a TTY and prefixes the short
    correlation ID when one is set.
    """

    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"
    CORRELATION_COLOR = "\033[90m"  # Gray

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        record = logging.makeLogRecord(record.__dict__)
        correlation_id = get_correlation_id()
        if correlation_id:
            if self.use_colors:
                prefix = f"{self.CORRELATION_COLOR}[{correlation_id[:8]}]{self.RESET} "
            else:
                prefix = f"[{correlation_id[:8]}] "
            record.msg = prefix + str(record.msg)

        if self.use_colors:
            record.levelname = f"{self.COLORS.get(record.levelname, '')}{record.levelname}{self.RESET}"

        return super().format(record)


def configure_logging(
    level: str | int | None = None,
    json_format: bool | None = None,
    log_file: str | None = None,
) -> None:
    """Configure the root logger.

    Args:
        level: Log level; defaults to NOTION_MCP_LOG_LEVEL
        json_format: Force JSON (True) or text (False); auto-detect if None
        log_file: Optional file to mirror logs to (always JSON)
    """
    from .config import get_config

    config = get_config()

    if level is None:
        level = config.log_level
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    if json_format is None:
        format_env = config.log_format.lower()
        if format_env == "json":
            json_format = True
        elif format_env == "text":
            json_format = False
        else:
            json_format = not sys.stderr.isatty()

    log_file = config.log_file if log_file is None else log_file

    formatter: logging.Formatter = JSONFormatter() if json_format else StandardFormatter()

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(JSONFormatter())
        root_logger.addHandler(file_handler)

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("notion_client").setLevel(logging.WARNING)


class ToolCallLogger:
    """Logs tool calls with credential-like arguments redacted."""

    SENSITIVE_PARAMS = {"token", "api_key", "apikey", "secret", "auth"}
    MAX_STRING = 500

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("notion_mcp.tools")

    def log_call(self, tool_name: str, arguments: dict[str, Any], level: int = logging.DEBUG) -> None:
        self.logger.log(
            level,
            "Tool call: %s",
            tool_name,
            extra={"extra_data": {"tool": tool_name, "arguments": self._sanitize(arguments)}},
        )

    def log_result(
        self,
        tool_name: str,
        success: bool,
        duration_ms: float | None = None,
        level: int = logging.DEBUG,
    ) -> None:
        status = "success" if success else "failure"
        msg = f"Tool result: {tool_name} -> {status}"
        if duration_ms is not None:
            msg += f" ({duration_ms:.1f}ms)"
        self.logger.log(
            level,
            msg,
            extra={"extra_data": {"tool": tool_name, "success": success, "duration_ms": duration_ms}},
        )

    def _sanitize(self, data: Any) -> Any:
        if isinstance(data, dict):
            return {
                key: "[REDACTED]" if any(s in key.lower() for s in self.SENSITIVE_PARAMS) else self._sanitize(value)
                for key, value in data.items()
            }
        if isinstance(data, list):
            return [self._sanitize(item) for item in data]
        if isinstance(data, str) and len(data) > self.MAX_STRING:
            return data[: self.MAX_STRING] + "..."
        return data


tool_logger = ToolCallLogger()
