"""Tests for notion_mcp.core.exceptions module."""

from __future__ import annotations

import pytest

from notion_mcp.core.exceptions import (
    ConfigException,
    MissingVariablesError,
    NotFoundError,
    NotionMCPException,
    SamplingException,
    ToolCallFailed,
    UnknownToolError,
    UpstreamAPIError,
    ValidationException,
)

# ============================================================================
# NotionMCPException Tests
# ============================================================================


class TestNotionMCPException:
    """Tests for base NotionMCPException."""

    def test_create_with_message(self):
        exc = NotionMCPException("Something went wrong")
        assert str(exc) == "Something went wrong"
        assert exc.message == "Something went wrong"
        assert exc.details == {}

    def test_to_dict(self):
        exc = NotionMCPException("Test error", details={"info": "extra"})
        assert exc.to_dict() == {
            "error": "NotionMCPException",
            "message": "Test error",
            "details": {"info": "extra"},
        }

    def test_to_dict_class_name(self):
        assert UpstreamAPIError("boom").to_dict()["error"] == "UpstreamAPIError"

    @pytest.mark.parametrize(
        "exc_class",
        [ValidationException, NotFoundError, ConfigException, UpstreamAPIError, SamplingException, ToolCallFailed],
    )
    def test_subclasses(self, exc_class):
        assert issubclass(exc_class, NotionMCPException)


class TestValidationException:
    def test_field_and_value(self):
        exc = ValidationException("Bad", field="pageId", value=42)
        assert exc.details == {"field": "pageId", "value": "42"}
        assert exc.field == "pageId"
        assert exc.value == 42

    def test_missing_variables(self):
        exc = MissingVariablesError(["a", "b"])
        assert str(exc) == "Missing required variables: a, b"
        assert exc.names == ["a", "b"]
        assert isinstance(exc, ValidationException)


class TestNotFound:
    def test_unknown_tool(self):
        exc = UnknownToolError("nope")
        assert str(exc) == "Unknown tool: nope"
        assert exc.tool_name == "nope"
        assert isinstance(exc, NotFoundError)


class TestConfigAndUpstream:
    def test_config_missing_vars(self):
        exc = ConfigException("missing", missing_vars=["NOTION_API_KEY"])
        assert exc.missing_vars == ["NOTION_API_KEY"]
        assert exc.details == {"missing_vars": ["NOTION_API_KEY"]}

    def test_upstream_status(self):
        exc = UpstreamAPIError("Invalid API key", status_code=403)
        assert exc.status_code == 403
        assert exc.details == {"status_code": 403}


class TestToolCallFailed:
    def test_prefix_added(self):
        assert str(ToolCallFailed("boom")) == "Tool call failed: boom"

    def test_prefix_not_doubled(self):
        assert str(ToolCallFailed("Tool call failed: boom")) == "Tool call failed: boom"

    def test_wrap(self):
        exc = ToolCallFailed.wrap(RuntimeError("network down"), tool_name="t")
        assert str(exc) == "Tool call failed: network down"
        assert exc.tool_name == "t"

    def test_wrap_is_idempotent(self):
        first = ToolCallFailed.wrap(RuntimeError("x"))
        assert ToolCallFailed.wrap(first) is first
        assert str(ToolCallFailed.wrap(ToolCallFailed.wrap(first))) == "Tool call failed: x"

    def test_wrap_empty_message_uses_class_name(self):
        assert str(ToolCallFailed.wrap(KeyError())) == "Tool call failed: KeyError"
