# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Custom exception hierarchy for the Notion MCP server.

Provides specific exception types for the error categories surfaced to
MCP callers: input validation, not-found lookups, upstream service
failures, sampling failures and startup configuration problems.
"""

from __future__ import annotations

from typing import Any

TOOL_CALL_FAILED_PREFIX = "Tool call failed:"
SAMPLING_FAILED_PREFIX = "Sampling request failed:"


class NotionMCPException(Exception):  # noqa: N818
    """Base exception for all notion_mcp errors."""

    def __init__(self, message: str, details: dict | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(NotionMCPException):
    """Exception for validation errors.

    Raised when:
    - Tool arguments do not match the tool's input schema
    - A domain rule (parent shape, title property) is violated
    - A sampling request is malformed
    - An LLM completion does not match the expected response shape
    """

    def __init__(self, message: str, field: str | None = None, value: Any = None):
        details = {}
        if field:
            details["field"] = field
        if value is not None:
            details["value"] = str(value)
        super().__init__(message, details)
        self.field = field
        self.value = value


class MissingVariablesError(ValidationException):
    """Raised when a template references variables that were not supplied."""

    def __init__(self, names: list[str]):
        super().__init__("Missing required variables: " + ", ".join(names))
        self.names = list(names)
        self.details["names"] = self.names


class NotFoundError(NotionMCPException):
    """Exception for unknown prompts, resources and tools."""

    pass


class UnknownToolError(NotFoundError):
    """Raised when a tool name is not in the registry."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}", {"tool_name": name})
        self.tool_name = name


class ConfigException(NotionMCPException):
    """Exception for configuration errors.

    Raised when:
    - Required environment variables are missing
    - A service is constructed without its credential
    """

    def __init__(self, message: str, missing_vars: list[str] | None = None):
        details = {}
        if missing_vars:
            details["missing_vars"] = missing_vars
        super().__init__(message, details)
        self.missing_vars = missing_vars or []


class UpstreamAPIError(NotionMCPException):
    """Exception for failures or malformed data from the content service or the Notion API."""

    def __init__(self, message: str, status_code: int | None = None):
        details = {}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)
        self.status_code = status_code


class SamplingException(NotionMCPException):
    """Exception for failures of the host-side LLM sampling call."""

    pass


class ToolCallFailed(NotionMCPException):
    """Exception for tool execution failures.

    The message always carries the ``Tool call failed:`` prefix exactly once.
    """

    def __init__(self, message: str, tool_name: str | None = None):
        if not message.startswith(TOOL_CALL_FAILED_PREFIX):
            message = f"{TOOL_CALL_FAILED_PREFIX} {message}"
        details = {}
        if tool_name:
            details["tool_name"] = tool_name
        super().__init__(message, details)
        self.tool_name = tool_name

    @classmethod
    def wrap(cls, exc: BaseException, tool_name: str | None = None) -> ToolCallFailed:
        """Wrap an arbitrary exception, leaving already-tagged ones as they are."""
        if isinstance(exc, ToolCallFailed):
            return exc
        return cls(str(exc) or exc.__class__.__name__, tool_name=tool_name)
