# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""JSON Schema validation with fixed, human-readable error messages.

Schemas are compiled once into ``jsonschema`` validators. Every error a
validator reports is passed through ``MESSAGE_RULES``, an ordered table of
``(keyword, path predicate) -> message`` rules; the first matching rule
supplies the message and unmatched errors keep the library's own text.
The strings in the table are part of the public contract: callers and
tests compare against them verbatim.

Usage::

    from notion_mcp.core.validation import compile_schema, validate

    compiled = compile_schema(tool.input_schema)
    validate(compiled, arguments)   # raises ValidationException
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from jsonschema import Draft7Validator
from jsonschema.exceptions import ValidationError as SchemaValidationError

from .exceptions import ValidationException

PAGE_ID_PATTERN = "^[a-f0-9]{8}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{4}-[a-f0-9]{12}$"

MSG_MISSING_PARAMS = "Request must have params"
MSG_EMPTY_MESSAGES = "Request must have at least one message"
MSG_INVALID_ROLE = 'Message role must be either "user" or "assistant"'
MSG_MISSING_CONTENT = "Message must have a content object"
MSG_MISSING_CONTENT_TYPE = "Message content must have a type field"
MSG_INVALID_CONTENT_TYPE = 'Content type must be either "text" or "image"'
MSG_INVALID_TEXT = "Text content must have a string text field"
MSG_INVALID_IMAGE_DATA = "Image content must have a base64 data field"
MSG_INVALID_IMAGE_MIME = "Image content must have a mimeType field"
MSG_INVALID_MAX_TOKENS = "maxTokens must be a positive number"
MSG_INVALID_TEMPERATURE = "temperature must be a number between 0 and 1"
MSG_INVALID_INCLUDE_CONTEXT = 'includeContext must be "none", "thisServer", or "allServers"'
MSG_INVALID_PRIORITY = "Model preference priorities must be numbers between 0 and 1"
MSG_INVALID_PAGE_ID = "Invalid page ID format"

_MESSAGE_PATH = re.compile(r"^/params/messages/\d+$")
_CONTENT_PATH = re.compile(r"^/params/messages/\d+/content$")
_REQUIRED_PROPERTY = re.compile(r"^'(?P<name>.+)' is a required property$")


@dataclass(frozen=True)
class MessageRule:
    """One row of the error-message table."""

    keywords: frozenset[str]
    matches: Callable[[str, str | None], bool]
    message: str

    def apply(self, keyword: str, path: str, prop: str | None) -> str | None:
        if keyword in self.keywords and self.matches(path, prop):
            return self.message
        return None


def _rule(keywords: str, matches: Callable[[str, str | None], bool], message: str) -> MessageRule:
    return MessageRule(frozenset(keywords.split()), matches, message)


# Evaluated top to bottom; ``path`` is the JSON-pointer style instance path
# of the failing value ("" for the root), ``prop`` the missing property name
# for ``required`` errors.
MESSAGE_RULES: tuple[MessageRule, ...] = (
    _rule("required", lambda path, prop: path == "" and prop == "params", MSG_MISSING_PARAMS),
    _rule("required", lambda path, prop: path == "/params" and prop == "messages", MSG_EMPTY_MESSAGES),
    _rule("required", lambda path, prop: bool(_MESSAGE_PATH.match(path)) and prop == "content", MSG_MISSING_CONTENT),
    _rule("required", lambda path, prop: bool(_CONTENT_PATH.match(path)) and prop == "type", MSG_MISSING_CONTENT_TYPE),
    _rule("required", lambda path, prop: bool(_CONTENT_PATH.match(path)) and prop == "text", MSG_INVALID_TEXT),
    _rule("required", lambda path, prop: bool(_CONTENT_PATH.match(path)) and prop == "data", MSG_INVALID_IMAGE_DATA),
    _rule(
        "required", lambda path, prop: bool(_CONTENT_PATH.match(path)) and prop == "mimeType", MSG_INVALID_IMAGE_MIME
    ),
    _rule("minimum exclusiveMinimum type", lambda path, _: path == "/params/maxTokens", MSG_INVALID_MAX_TOKENS),
    _rule("minItems type", lambda path, _: path == "/params/messages", MSG_EMPTY_MESSAGES),
    _rule("minimum maximum type", lambda path, _: path.endswith("/temperature"), MSG_INVALID_TEMPERATURE),
    _rule("minimum maximum type", lambda path, _: path.endswith("Priority"), MSG_INVALID_PRIORITY),
    _rule("enum", lambda path, _: path == "/params/includeContext", MSG_INVALID_INCLUDE_CONTEXT),
    _rule("enum", lambda path, _: path.endswith("/role"), MSG_INVALID_ROLE),
    _rule("enum", lambda path, _: path.endswith("/content/type"), MSG_INVALID_CONTENT_TYPE),
    _rule("pattern", lambda path, _: path == "/pageId", MSG_INVALID_PAGE_ID),
    _rule("type", lambda path, _: path.endswith("/text"), MSG_INVALID_TEXT),
)


def instance_path(error: SchemaValidationError) -> str:
    """Render an error's location as a JSON pointer ("" for the root)."""
    return "".join(f"/{part}" for part in error.absolute_path)


def missing_property(error: SchemaValidationError) -> str | None:
    """Name of the missing property for a ``required`` error."""
    if error.validator != "required":
        return None
    match = _REQUIRED_PROPERTY.match(error.message)
    if match:
        return match.group("name")
    instance = error.instance if isinstance(error.instance, dict) else {}
    for name in error.validator_value:
        if name not in instance:
            return name
    return None


def error_message(error: SchemaValidationError) -> str:
    """Translate one jsonschema error into its user-facing message."""
    keyword = str(error.validator)
    path = instance_path(error)
    prop = missing_property(error)
    for rule in MESSAGE_RULES:
        message = rule.apply(keyword, path, prop)
        if message is not None:
            return message
    if keyword == "required" and prop:
        return f"Missing required argument: {prop}"
    return error.message


class CompiledValidator:
    """A schema checked once and ready to validate many instances."""

    def __init__(self, schema: dict[str, Any]):
        Draft7Validator.check_schema(schema)
        self.schema = schema
        self._validator = Draft7Validator(schema)

    def errors(self, data: Any) -> list[str]:
        """All mapped messages for ``data``, de-duplicated, in a stable order."""
        raw = sorted(
            self._validator.iter_errors(data),
            key=lambda e: (instance_path(e), str(e.validator), e.message),
        )
        messages: list[str] = []
        for err in raw:
            message = error_message(err)
            if message not in messages:
                messages.append(message)
        return messages


_compiled: dict[int, CompiledValidator] = {}


def compile_schema(schema: dict[str, Any]) -> CompiledValidator:
    """Compile a schema, reusing the validator for an already-seen schema object."""
    cached = _compiled.get(id(schema))
    if cached is not None and cached.schema is schema:
        return cached
    compiled = CompiledValidator(schema)
    _compiled[id(schema)] = compiled
    return compiled


def validate(compiled: CompiledValidator, data: Any) -> None:
    """Raise ValidationException carrying every mapped message joined by ", "."""
    messages = compiled.errors(data)
    if messages:
        raise ValidationException(", ".join(messages))


def validate_with_errors(data: Any, schema: dict[str, Any]) -> None:
    """Compile (or reuse) ``schema`` and validate ``data`` against it."""
    validate(compile_schema(schema), data)


# Envelope for sampling/createMessage requests.
SAMPLING_REQUEST_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["params"],
    "properties": {
        "method": {"type": "string", "enum": ["sampling/createMessage"]},
        "params": {
            "type": "object",
            "required": ["messages", "maxTokens"],
            "properties": {
                "messages": {
                    "type": "array",
                    "minItems": 1,
                    "items": {
                        "type": "object",
                        "required": ["role", "content"],
                        "properties": {
                            "role": {"type": "string", "enum": ["user", "assistant"]},
                            "content": {
                                "type": "object",
                                "required": ["type"],
                                "properties": {
                                    "type": {"type": "string", "enum": ["text", "image"]},
                                    "text": {"type": "string"},
                                    "data": {"type": "string"},
                                    "mimeType": {"type": "string"},
                                },
                                "allOf": [
                                    {
                                        "if": {"properties": {"type": {"const": "text"}}, "required": ["type"]},
                                        "then": {"required": ["text"]},
                                    },
                                    {
                                        "if": {"properties": {"type": {"const": "image"}}, "required": ["type"]},
                                        "then": {"required": ["data", "mimeType"]},
                                    },
                                ],
                            },
                        },
                    },
                },
                "maxTokens": {"type": "number", "exclusiveMinimum": 0},
                "temperature": {"type": "number", "minimum": 0, "maximum": 1},
                "includeContext": {"type": "string", "enum": ["none", "thisServer", "allServers"]},
                "modelPreferences": {
                    "type": "object",
                    "properties": {
                        "costPriority": {"type": "number", "minimum": 0, "maximum": 1},
                        "speedPriority": {"type": "number", "minimum": 0, "maximum": 1},
                        "intelligencePriority": {"type": "number", "minimum": 0, "maximum": 1},
                    },
                },
            },
        },
    },
}


def validate_sampling_request(request: Any) -> None:
    """Structural check of a full sampling/createMessage envelope."""
    validate_with_errors(request, SAMPLING_REQUEST_SCHEMA)
