# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Sampling: asking the connected MCP client to run its LLM.

The flow follows MCP's sampling/createMessage contract:
1. Validate the request (first failing rule wins)
2. Forward it to the client, which may review, modify or reject it
3. Await the completion
4. If the request names a callback, let the callback resolver turn the
   completion into a Notion call and return its result instead
"""

from __future__ import annotations

import logging
from numbers import Real
from typing import Any, Protocol

from mcp import types

from notion_mcp.core.context import ServiceContext
from notion_mcp.core.exceptions import SAMPLING_FAILED_PREFIX, NotionMCPException, SamplingException, ValidationException
from notion_mcp.core.validation import (
    MSG_EMPTY_MESSAGES,
    MSG_INVALID_CONTENT_TYPE,
    MSG_INVALID_IMAGE_DATA,
    MSG_INVALID_IMAGE_MIME,
    MSG_INVALID_INCLUDE_CONTEXT,
    MSG_INVALID_MAX_TOKENS,
    MSG_INVALID_PRIORITY,
    MSG_INVALID_ROLE,
    MSG_INVALID_TEMPERATURE,
    MSG_INVALID_TEXT,
    MSG_MISSING_CONTENT,
    MSG_MISSING_PARAMS,
    validate_sampling_request,
)

from .callbacks import handle_callback

logger = logging.getLogger(__name__)

VALID_ROLES = ("user", "assistant")
VALID_CONTENT_TYPES = ("text", "image")
VALID_INCLUDE_CONTEXT = ("none", "thisServer", "allServers")
PRIORITY_FIELDS = ("costPriority", "speedPriority", "intelligencePriority")


class SamplingHost(Protocol):
    """The client side of sampling."""

    async def create_message(self, params: dict[str, Any]) -> types.CreateMessageResult: ...


def _is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def validate_message(message: Any) -> None:
    if not isinstance(message, dict) or message.get("role") not in VALID_ROLES:
        raise ValidationException(MSG_INVALID_ROLE)

    content = message.get("content")
    if not isinstance(content, dict):
        raise ValidationException(MSG_MISSING_CONTENT)

    content_type = content.get("type")
    if content_type not in VALID_CONTENT_TYPES:
        raise ValidationException(MSG_INVALID_CONTENT_TYPE)

    if content_type == "text" and not isinstance(content.get("text"), str):
        raise ValidationException(MSG_INVALID_TEXT)

    if content_type == "image":
        if not isinstance(content.get("data"), str):
            raise ValidationException(MSG_INVALID_IMAGE_DATA)
        if not isinstance(content.get("mimeType"), str):
            raise ValidationException(MSG_INVALID_IMAGE_MIME)


def validate_request(request: Any) -> dict[str, Any]:
    """Check a sampling request in a fixed order and return its params.

    Order: params, messages, each message, maxTokens, then the optional
    temperature, includeContext and modelPreferences. A request failing
    one rule never reaches the next.
    """
    params = request.get("params") if isinstance(request, dict) else None
    if not isinstance(params, dict):
        raise ValidationException(MSG_MISSING_PARAMS)

    messages = params.get("messages")
    if not isinstance(messages, list) or not messages:
        raise ValidationException(MSG_EMPTY_MESSAGES)

    for message in messages:
        validate_message(message)

    max_tokens = params.get("maxTokens")
    if not _is_number(max_tokens) or max_tokens <= 0:
        raise ValidationException(MSG_INVALID_MAX_TOKENS)

    temperature = params.get("temperature")
    if temperature is not None and (not _is_number(temperature) or not 0 <= temperature <= 1):
        raise ValidationException(MSG_INVALID_TEMPERATURE)

    include_context = params.get("includeContext")
    if include_context and include_context not in VALID_INCLUDE_CONTEXT:
        raise ValidationException(MSG_INVALID_INCLUDE_CONTEXT)

    preferences = params.get("modelPreferences")
    if isinstance(preferences, dict):
        for key in PRIORITY_FIELDS:
            priority = preferences.get(key)
            if priority is not None and (not _is_number(priority) or not 0 <= priority <= 1):
                raise ValidationException(MSG_INVALID_PRIORITY)

    # Remaining structural problems (e.g. a non-object modelPreferences).
    validate_sampling_request({"params": params})
    return params


def get_callback(params: dict[str, Any]) -> str | None:
    """Callback id from the request metadata (``_meta`` or ``metadata``)."""
    for key in ("_meta", "metadata"):
        meta = params.get(key)
        if isinstance(meta, dict) and meta.get("callback"):
            return meta["callback"]
    return None


async def send_sampling_request(
    request: dict[str, Any],
    host: SamplingHost,
    ctx: ServiceContext,
) -> types.CreateMessageResult:
    """Validate, forward to the client, and resolve the callback if any.

    Raises:
        ValidationException: If the request is malformed.
        SamplingException: If the client call fails with a foreign error.
    """
    params = validate_request(request)
    callback = get_callback(params)

    try:
        result = await host.create_message(params)
    except NotionMCPException:
        raise
    except Exception as e:
        logger.error("Sampling request failed: %s", e)
        raise SamplingException(f"{SAMPLING_FAILED_PREFIX} {e or e.__class__.__name__}") from e

    if callback:
        return await handle_callback(callback, result, ctx)
    return result


def _to_sampling_message(message: dict[str, Any]) -> types.SamplingMessage:
    content = message["content"]
    if content["type"] == "image":
        body: types.TextContent | types.ImageContent = types.ImageContent(
            type="image", data=content["data"], mimeType=content["mimeType"]
        )
    else:
        body = types.TextContent(type="text", text=content["text"])
    return types.SamplingMessage(role=message["role"], content=body)


class SessionSamplingHost:
    """Sends validated sampling params through an MCP server session."""

    def __init__(self, session: Any):
        self.session = session

    async def create_message(self, params: dict[str, Any]) -> types.CreateMessageResult:
        preferences = params.get("modelPreferences")
        metadata = {key: value for key, value in (params.get("_meta") or params.get("metadata") or {}).items()}
        return await self.session.create_message(
            messages=[_to_sampling_message(message) for message in params["messages"]],
            max_tokens=int(params["maxTokens"]),
            system_prompt=params.get("systemPrompt"),
            include_context=params.get("includeContext"),
            temperature=params.get("temperature"),
            stop_sequences=params.get("stopSequences"),
            metadata=metadata or None,
            model_preferences=types.ModelPreferences(**preferences) if preferences else None,
        )
