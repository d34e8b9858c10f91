"""Tests for notion_mcp.core.validation.

Every row of the error-message table is exercised, plus the fallbacks
and the compile cache.
"""

from __future__ import annotations

import copy

import pytest

from notion_mcp.core.exceptions import ValidationException
from notion_mcp.core.validation import (
    MESSAGE_RULES,
    MSG_EMPTY_MESSAGES,
    MSG_INVALID_CONTENT_TYPE,
    MSG_INVALID_IMAGE_DATA,
    MSG_INVALID_IMAGE_MIME,
    MSG_INVALID_INCLUDE_CONTEXT,
    MSG_INVALID_MAX_TOKENS,
    MSG_INVALID_PAGE_ID,
    MSG_INVALID_PRIORITY,
    MSG_INVALID_ROLE,
    MSG_INVALID_TEMPERATURE,
    MSG_INVALID_TEXT,
    MSG_MISSING_CONTENT,
    MSG_MISSING_CONTENT_TYPE,
    MSG_MISSING_PARAMS,
    PAGE_ID_PATTERN,
    compile_schema,
    validate,
    validate_sampling_request,
    validate_with_errors,
)

VALID_REQUEST = {
    "method": "sampling/createMessage",
    "params": {
        "messages": [{"role": "user", "content": {"type": "text", "text": "hi"}}],
        "maxTokens": 10,
    },
}

PAGE_SCHEMA = {
    "type": "object",
    "properties": {"pageId": {"type": "string", "pattern": PAGE_ID_PATTERN}},
    "required": ["pageId"],
    "additionalProperties": False,
}


def request_with(**params):
    request = copy.deepcopy(VALID_REQUEST)
    request["params"].update(params)
    return request


def message_with(content=None, **fields):
    message = {"role": "user", "content": content}
    message.update(fields)
    if content is None:
        del message["content"]
    return request_with(messages=[message])


def error_of(data, schema=None) -> str:
    with pytest.raises(ValidationException) as exc_info:
        if schema is None:
            validate_sampling_request(data)
        else:
            validate_with_errors(data, schema)
    return exc_info.value.message


# ============================================================================
# Message table
# ============================================================================


class TestMessageTable:
    """One test per table row."""

    def test_valid_request_passes(self):
        validate_sampling_request(VALID_REQUEST)

    def test_missing_params(self):
        assert error_of({}) == MSG_MISSING_PARAMS

    def test_missing_messages(self):
        assert error_of({"params": {"maxTokens": 10}}) == MSG_EMPTY_MESSAGES

    def test_missing_content(self):
        assert error_of(message_with()) == MSG_MISSING_CONTENT

    def test_missing_content_type(self):
        assert error_of(message_with({"text": "hi"})) == MSG_MISSING_CONTENT_TYPE

    def test_text_content_without_text(self):
        assert error_of(message_with({"type": "text"})) == MSG_INVALID_TEXT

    def test_image_content_without_data(self):
        assert error_of(message_with({"type": "image", "mimeType": "image/png"})) == MSG_INVALID_IMAGE_DATA

    def test_image_content_without_mime_type(self):
        assert error_of(message_with({"type": "image", "data": "aGk="})) == MSG_INVALID_IMAGE_MIME

    def test_missing_property_elsewhere(self):
        assert error_of({}, PAGE_SCHEMA) == "Missing required argument: pageId"

    @pytest.mark.parametrize("value", [0, -5, "10"])
    def test_invalid_max_tokens(self, value):
        assert error_of(request_with(maxTokens=value)) == MSG_INVALID_MAX_TOKENS

    @pytest.mark.parametrize("value", [[], "not a list"])
    def test_empty_or_malformed_messages(self, value):
        assert error_of(request_with(messages=value)) == MSG_EMPTY_MESSAGES

    @pytest.mark.parametrize("value", [-0.1, 1.5, "hot"])
    def test_invalid_temperature(self, value):
        assert error_of(request_with(temperature=value)) == MSG_INVALID_TEMPERATURE

    @pytest.mark.parametrize("key", ["costPriority", "speedPriority", "intelligencePriority"])
    def test_invalid_priority(self, key):
        assert error_of(request_with(modelPreferences={key: 2})) == MSG_INVALID_PRIORITY

    def test_invalid_include_context(self):
        assert error_of(request_with(includeContext="everything")) == MSG_INVALID_INCLUDE_CONTEXT

    def test_invalid_role(self):
        assert error_of(message_with({"type": "text", "text": "hi"}, role="system")) == MSG_INVALID_ROLE

    def test_invalid_content_type(self):
        assert error_of(message_with({"type": "audio", "data": "x"})) == MSG_INVALID_CONTENT_TYPE

    def test_invalid_page_id(self):
        assert error_of({"pageId": "invalid!id"}, PAGE_SCHEMA) == MSG_INVALID_PAGE_ID

    def test_non_string_text(self):
        assert error_of(message_with({"type": "text", "text": 42})) == MSG_INVALID_TEXT

    def test_every_rule_has_a_message(self):
        assert all(rule.message for rule in MESSAGE_RULES)


# ============================================================================
# Fallbacks and aggregation
# ============================================================================


class TestValidate:
    """Tests for validate / compile_schema behavior."""

    def test_fallback_to_library_message(self):
        message = error_of({"pageId": "123e4567-e89b-12d3-a456-426614174000", "extra": 1}, PAGE_SCHEMA)
        assert "Additional properties are not allowed" in message

    def test_errors_are_joined(self):
        schema = {"type": "object", "required": ["a", "b"]}
        assert error_of({}, schema) == "Missing required argument: a, Missing required argument: b"

    def test_duplicate_messages_collapse(self):
        request = request_with(temperature=2, modelPreferences={"costPriority": 2, "speedPriority": -1})
        assert error_of(request) == f"{MSG_INVALID_PRIORITY}, {MSG_INVALID_TEMPERATURE}"

    def test_valid_page_id_passes(self):
        validate(compile_schema(PAGE_SCHEMA), {"pageId": "123e4567-e89b-12d3-a456-426614174000"})

    def test_uppercase_page_id_rejected(self):
        assert error_of({"pageId": "123E4567-E89B-12D3-A456-426614174000"}, PAGE_SCHEMA) == MSG_INVALID_PAGE_ID

    def test_compile_is_cached(self):
        assert compile_schema(PAGE_SCHEMA) is compile_schema(PAGE_SCHEMA)

    def test_invalid_schema_rejected(self):
        from jsonschema.exceptions import SchemaError

        with pytest.raises(SchemaError):
            compile_schema({"type": "not-a-type"})
