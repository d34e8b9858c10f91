# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""MCP server exposing a Notion workspace.

Provides 16 Notion tools, two sampling-backed prompt templates and the
agent resource over the MCP stdio transport.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from collections.abc import Awaitable, Callable
from typing import Any

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import ContentBlock, GetPromptResult, Prompt, Resource, Tool
from pydantic import AnyUrl

from notion_mcp import __version__
from notion_mcp.core.config import get_config, require_credentials
from notion_mcp.core.context import ServiceContext, get_context, initialize_context
from notion_mcp.core.exceptions import ConfigException, ToolCallFailed, ValidationException
from notion_mcp.core.logging import configure_logging, correlation_context, tool_logger
from notion_mcp.core.validation import compile_schema, validate

from .handlers import prompts as prompt_handlers
from .handlers import resources as resource_handlers
from .handlers.comments import create_notion_comment, get_notion_comments
from .handlers.complex import run_sampling_tool
from .handlers.databases import create_notion_database, get_database_items, list_notion_databases
from .handlers.pages import (
    create_notion_page,
    delete_notion_page,
    get_notion_page,
    get_notion_page_blocks,
    get_notion_page_property,
    list_notion_pages,
    search_notion_pages,
    search_notion_pages_by_title,
    update_notion_page,
)
from .handlers.sampling import SamplingHost, SessionSamplingHost
from .tools import NOTION_TOOLS, get_tool

logger = logging.getLogger(__name__)

server = Server("systemprompt-mcp-notion", version=__version__)

ToolHandler = Callable[[ServiceContext, dict[str, Any]], Awaitable[list[ContentBlock]]]


# ============================================================================
# Tool Handler Registry
# ============================================================================

TOOL_HANDLERS: dict[str, ToolHandler] = {
    # Page tools
    "systemprompt_list_notion_pages": list_notion_pages,
    "systemprompt_search_notion_pages": search_notion_pages,
    "systemprompt_search_notion_pages_by_title": search_notion_pages_by_title,
    "systemprompt_get_notion_page": get_notion_page,
    "systemprompt_get_notion_page_property": get_notion_page_property,
    "systemprompt_get_notion_page_blocks": get_notion_page_blocks,
    "systemprompt_create_notion_page": create_notion_page,
    "systemprompt_update_notion_page": update_notion_page,
    "systemprompt_delete_notion_page": delete_notion_page,
    # Database tools
    "systemprompt_list_notion_databases": list_notion_databases,
    "systemprompt_get_database_items": get_database_items,
    "systemprompt_create_notion_database": create_notion_database,
    # Comment tools
    "systemprompt_get_notion_comments": get_notion_comments,
    "systemprompt_create_notion_comment": create_notion_comment,
}

# Tools drafted by the client's LLM; these also receive the descriptor and the sampling host.
SAMPLING_TOOL_HANDLERS = {
    "systemprompt_create_notion_page_complex": run_sampling_tool,
    "systemprompt_edit_notion_page_complex": run_sampling_tool,
}


async def handle_tool_call(
    ctx: ServiceContext,
    name: str,
    arguments: dict[str, Any] | None,
    host: SamplingHost | None = None,
) -> list[ContentBlock]:
    """Validate and execute one tool call.

    Raises:
        UnknownToolError: If ``name`` is not a registered tool.
        ValidationException: If the arguments break the tool's schema or a
            domain rule; raised before any Notion call is made.
        ToolCallFailed: For every other failure, prefixed once with
            ``Tool call failed:``.
    """
    tool = get_tool(name)
    args = arguments or {}
    validate(compile_schema(tool.input_schema), args)

    tool_logger.log_call(name, args)
    start = time.monotonic()
    try:
        if name in SAMPLING_TOOL_HANDLERS:
            if host is None:
                raise ConfigException("Sampling is not available without a client session")
            result = await SAMPLING_TOOL_HANDLERS[name](ctx, tool, args, host)
        else:
            result = await TOOL_HANDLERS[name](ctx, args)
    except ValidationException as e:
        tool_logger.log_result(name, success=False, duration_ms=(time.monotonic() - start) * 1000)
        logger.warning("Validation error in tool %s: %s", name, e)
        raise
    except Exception as e:
        tool_logger.log_result(name, success=False, duration_ms=(time.monotonic() - start) * 1000)
        logger.error("Tool %s failed: %s", name, e)
        raise ToolCallFailed.wrap(e, tool_name=name) from e

    tool_logger.log_result(name, success=True, duration_ms=(time.monotonic() - start) * 1000)
    return result


# ============================================================================
# MCP Server Protocol Implementation
# ============================================================================


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List all available tools."""
    return [tool.to_mcp_tool() for tool in NOTION_TOOLS]


# Arguments are validated by handle_tool_call so callers see its messages.
@server.call_tool(validate_input=False)
async def call_tool(name: str, arguments: dict[str, Any]) -> list[ContentBlock]:
    """Route tool calls to the appropriate handler."""
    with correlation_context():
        host = SessionSamplingHost(server.request_context.session)
        return await handle_tool_call(get_context(), name, arguments, host)


@server.list_prompts()
async def list_prompts() -> list[Prompt]:
    return prompt_handlers.list_prompts()


@server.get_prompt()
async def get_prompt(name: str, arguments: dict[str, str] | None) -> GetPromptResult:
    return prompt_handlers.get_prompt(name, arguments)


@server.list_resources()
async def list_resources() -> list[Resource]:
    return resource_handlers.list_resources()


@server.read_resource()
async def read_resource(uri: AnyUrl) -> list[ReadResourceContents]:
    return resource_handlers.read_resource(str(uri))


# ============================================================================
# Server Entry Point
# ============================================================================


def run() -> None:
    """Run the Notion MCP server over stdio."""
    parser = argparse.ArgumentParser(description="Notion MCP Server")
    parser.add_argument("--log-level", help="Override NOTION_MCP_LOG_LEVEL")
    args = parser.parse_args()

    configure_logging(level=args.log_level)
    config = get_config()

    try:
        require_credentials(config)
    except ConfigException as e:
        logger.error("Startup failed: %s", e)
        if config.is_test:
            raise
        sys.exit(1)

    initialize_context(config)
    logger.info("Notion MCP server %s starting...", __version__)

    async def main():
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())

    asyncio.run(main())


if __name__ == "__main__":
    run()
