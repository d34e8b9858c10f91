# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Turn LLM completions into Notion calls.

A sampling request may name a callback in its metadata. Once the client
returns the completion, the callback parses the completion text as JSON,
checks it against the prompt template's response schema and performs the
Notion operation it describes. The caller then receives the resulting
page instead of the raw completion.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Awaitable, Callable
from typing import Any

from mcp.types import CreateMessageResult, TextContent

from notion_mcp.core.context import ServiceContext
from notion_mcp.core.exceptions import ValidationException
from notion_mcp.core.validation import validate_with_errors
from notion_mcp.services.notion_utils import NotionPage

from ..prompts import CREATE_PAGE_CALLBACK, EDIT_PAGE_CALLBACK, get_prompt_by_callback

logger = logging.getLogger(__name__)


def parse_completion(result: CreateMessageResult, schema: dict[str, Any] | None = None) -> dict[str, Any]:
    """Decode the completion text and validate it against ``schema``.

    Raises:
        ValidationException: If the completion is not text, not JSON, or
            does not match the schema.
    """
    content = result.content
    if getattr(content, "type", None) != "text":
        raise ValidationException("Expected text response from LLM")

    try:
        payload = json.loads(content.text)
    except json.JSONDecodeError as e:
        raise ValidationException(f"LLM response is not valid JSON: {e.msg}") from e

    if schema is not None:
        validate_with_errors(payload, schema)
    return payload


async def create_page_from_completion(ctx: ServiceContext, payload: dict[str, Any]) -> NotionPage:
    return await ctx.notion.create_page(payload)


async def edit_page_from_completion(ctx: ServiceContext, payload: dict[str, Any]) -> NotionPage:
    return await ctx.notion.update_page(
        payload["pageId"],
        properties=payload.get("properties"),
        children=payload.get("children"),
        archived=payload.get("archived"),
    )


CALLBACK_HANDLERS: dict[str, Callable[[ServiceContext, dict[str, Any]], Awaitable[NotionPage]]] = {
    CREATE_PAGE_CALLBACK: create_page_from_completion,
    EDIT_PAGE_CALLBACK: edit_page_from_completion,
}


async def handle_callback(
    callback_id: str,
    result: CreateMessageResult,
    ctx: ServiceContext,
) -> CreateMessageResult:
    """Apply the named callback to a completion.

    Unknown callback ids are logged and the completion is returned as is.
    """
    handler = CALLBACK_HANDLERS.get(callback_id)
    if handler is None:
        logger.warning("Unknown callback: %s", callback_id)
        return result

    template = get_prompt_by_callback(callback_id)
    payload = parse_completion(result, template.response_schema if template else None)
    page = await handler(ctx, payload)
    logger.info("Callback %s applied to page %s", callback_id, page.id)

    return CreateMessageResult(
        role="assistant",
        model=result.model,
        stopReason=result.stopReason,
        content=TextContent(type="text", text=json.dumps(page.to_dict(), indent=2)),
    )
