# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Sampling-backed tool handlers.

These tools fill a prompt template with the call arguments, ask the
client's LLM to draft the Notion request, and let the template's callback
execute it.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from mcp.types import TextContent

from notion_mcp.core.context import ServiceContext
from notion_mcp.core.exceptions import ConfigException, ValidationException
from notion_mcp.core.templating import inject_messages

from ..prompts import get_prompt_template
from ..tools import SamplingConfig, ToolDescriptor
from ._utils import text_result
from .sampling import SamplingHost, send_sampling_request

logger = logging.getLogger(__name__)

MSG_MISSING_SAMPLING_CONFIG = "Tool is missing required sampling configuration"


def require_sampling_config(tool: ToolDescriptor) -> SamplingConfig:
    if tool.sampling_config is None:
        raise ConfigException(MSG_MISSING_SAMPLING_CONFIG)
    return tool.sampling_config


async def run_sampling_tool(
    ctx: ServiceContext,
    tool: ToolDescriptor,
    args: dict[str, Any],
    host: SamplingHost,
) -> list[TextContent]:
    """Draft and apply a Notion change through the client's LLM.

    Tools that edit existing content get the page's current blocks as the
    ``currentPage`` template variable.
    """
    config = require_sampling_config(tool)
    template = get_prompt_template(config.prompt_name)

    variables = dict(args)
    if config.requires_existing_content:
        blocks = await ctx.notion.get_page_blocks(args["pageId"])
        variables["currentPage"] = json.dumps(blocks, indent=2)

    params: dict[str, Any] = {
        "messages": inject_messages(template.messages, variables),
        "maxTokens": config.max_tokens,
        "temperature": config.temperature,
    }
    if template.callback_id:
        params["_meta"] = {"callback": template.callback_id}

    logger.debug("Sampling %s with prompt %r", tool.name, template.name)
    result = await send_sampling_request({"method": "sampling/createMessage", "params": params}, host, ctx)

    if getattr(result.content, "type", None) != "text":
        raise ValidationException("Expected text response from LLM")
    return text_result(result.content.text)
