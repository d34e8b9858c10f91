# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Notion tool definitions.

Contains NOTION_TOOLS, the closed catalog of tools this server exposes.
Names and input schemas are a public contract for MCP clients.

Tool list:
    systemprompt_list_notion_pages            List pages, most recently edited first
    systemprompt_list_notion_databases        List databases
    systemprompt_search_notion_pages          Full-text page search
    systemprompt_search_notion_pages_by_title Title-filtered page search
    systemprompt_get_notion_page              Get one page
    systemprompt_get_database_items           Query a database
    systemprompt_get_notion_page_property     Get one page property
    systemprompt_get_notion_page_blocks       Get a page's content blocks
    systemprompt_get_notion_comments          List comments on a page
    systemprompt_create_notion_page           Create a page from explicit properties
    systemprompt_update_notion_page           Update page properties
    systemprompt_delete_notion_page           Archive a page
    systemprompt_create_notion_comment        Comment on a page
    systemprompt_create_notion_database       Create a database under a page
    systemprompt_create_notion_page_complex   Create a page drafted by the client's LLM
    systemprompt_edit_notion_page_complex     Edit a page with the client's LLM
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from mcp.types import Tool

from notion_mcp.core.exceptions import UnknownToolError

from .prompts import NOTION_PAGE_CREATOR_PROMPT, NOTION_PAGE_EDITOR_PROMPT

TOOL_PREFIX = "systemprompt_"


@dataclass(frozen=True)
class SamplingConfig:
    """How a sampling-backed tool drafts its result with the client's LLM."""

    prompt_name: str
    max_tokens: int
    temperature: float
    requires_existing_content: bool = False


@dataclass(frozen=True)
class ToolDescriptor:
    """A registered tool."""

    name: str
    description: str
    input_schema: dict[str, Any]
    sampling_config: SamplingConfig | None = None

    def to_mcp_tool(self) -> Tool:
        return Tool(name=self.name, description=self.description, inputSchema=self.input_schema)


def _object_schema(properties: dict[str, Any], required: list[str] | None = None) -> dict[str, Any]:
    schema: dict[str, Any] = {
        "type": "object",
        "properties": properties,
        "additionalProperties": False,
    }
    if required:
        schema["required"] = required
    return schema


def _max_results(default: int) -> dict[str, Any]:
    return {
        "type": "number",
        "minimum": 1,
        "description": f"Maximum number of results to return. Defaults to {default} if not specified.",
    }


PAGE_ID = {
    "type": "string",
    "description": "The unique identifier of the Notion page. Must be a valid Notion page ID.",
}

NOTION_TOOLS: tuple[ToolDescriptor, ...] = (
    # =========================================================================
    # Read operations
    # =========================================================================
    ToolDescriptor(
        name="systemprompt_list_notion_pages",
        description=(
            "Lists all accessible Notion pages in your workspace, sorted by last edited time. "
            "Returns key metadata including title, URL, and last edited timestamp."
        ),
        input_schema=_object_schema({"maxResults": _max_results(50)}),
    ),
    ToolDescriptor(
        name="systemprompt_list_notion_databases",
        description=(
            "Lists all accessible Notion databases in your workspace, sorted by last edited time. "
            "Returns key metadata including database title, schema, and last edited timestamp."
        ),
        input_schema=_object_schema({"maxResults": _max_results(50)}),
    ),
    ToolDescriptor(
        name="systemprompt_search_notion_pages",
        description=(
            "Performs a full-text search across all accessible Notion pages using the provided query. "
            "Searches through titles, content, and metadata to find relevant matches."
        ),
        input_schema=_object_schema(
            {
                "query": {
                    "type": "string",
                    "description": "Search query to find relevant Notion pages. Can include keywords, phrases, or partial matches.",
                },
                "maxResults": _max_results(10),
            },
            required=["query"],
        ),
    ),
    ToolDescriptor(
        name="systemprompt_search_notion_pages_by_title",
        description=(
            "Searches specifically for Notion pages with titles matching the provided query. "
            "Useful for finding exact or similar title matches when you know the page name."
        ),
        input_schema=_object_schema(
            {
                "title": {"type": "string", "description": "Title text to search for. Can be exact or partial match."},
                "maxResults": _max_results(10),
            },
            required=["title"],
        ),
    ),
    ToolDescriptor(
        name="systemprompt_get_notion_page",
        description="Retrieves a specific Notion page by its ID, including its properties and metadata.",
        input_schema=_object_schema({"pageId": PAGE_ID}, required=["pageId"]),
    ),
    ToolDescriptor(
        name="systemprompt_get_database_items",
        description="Retrieves items (pages) from a specific Notion database.",
        input_schema=_object_schema(
            {
                "databaseId": {"type": "string", "description": "The ID of the Notion database to query"},
                "maxResults": _max_results(10),
            },
            required=["databaseId"],
        ),
    ),
    ToolDescriptor(
        name="systemprompt_get_notion_page_property",
        description="Retrieves the value of a single property of a Notion page.",
        input_schema=_object_schema(
            {
                "pageId": PAGE_ID,
                "propertyId": {"type": "string", "description": "ID of the property to retrieve"},
            },
            required=["pageId", "propertyId"],
        ),
    ),
    ToolDescriptor(
        name="systemprompt_get_notion_page_blocks",
        description="Retrieves the content blocks of a Notion page.",
        input_schema=_object_schema({"pageId": PAGE_ID, "maxResults": _max_results(10)}, required=["pageId"]),
    ),
    ToolDescriptor(
        name="systemprompt_get_notion_comments",
        description="Retrieves all comments from a Notion page.",
        input_schema=_object_schema(
            {"pageId": {"type": "string", "description": "ID of the page to get comments from"}},
            required=["pageId"],
        ),
    ),
    # =========================================================================
    # Write operations
    # =========================================================================
    ToolDescriptor(
        name="systemprompt_create_notion_page",
        description="Creates a new page in Notion within a database or as a subpage.",
        input_schema=_object_schema(
            {
                "parent": {
                    "type": "object",
                    "description": "Parent container where the page will be created",
                    "properties": {
                        "database_id": {"type": "string", "description": "ID of the parent database"},
                        "page_id": {"type": "string", "description": "ID of the parent page"},
                        "type": {"type": "string", "enum": ["database_id", "page_id"]},
                    },
                    "additionalProperties": False,
                },
                "properties": {
                    "type": "object",
                    "description": "Page properties in Notion API format",
                    "additionalProperties": True,
                },
                "children": {
                    "type": "array",
                    "description": "Optional page content blocks",
                    "items": {"type": "object", "additionalProperties": True},
                },
            },
            required=["parent", "properties"],
        ),
    ),
    ToolDescriptor(
        name="systemprompt_update_notion_page",
        description="Updates properties of an existing Notion page.",
        input_schema=_object_schema(
            {
                "pageId": {"type": "string", "description": "ID of the page to update"},
                "properties": {
                    "type": "object",
                    "description": "Updated page properties in Notion API format",
                    "additionalProperties": True,
                },
            },
            required=["pageId", "properties"],
        ),
    ),
    ToolDescriptor(
        name="systemprompt_delete_notion_page",
        description=(
            "Archives a specified Notion page and all its contents. "
            "Archived pages can only be restored from the Notion UI."
        ),
        input_schema=_object_schema({"pageId": PAGE_ID}, required=["pageId"]),
    ),
    ToolDescriptor(
        name="systemprompt_create_notion_comment",
        description="Creates a comment on a Notion page, or a reply in an existing discussion.",
        input_schema=_object_schema(
            {
                "pageId": {"type": "string", "description": "ID of the page to comment on"},
                "content": {"type": "string", "description": "Text content of the comment"},
                "discussionId": {
                    "type": "string",
                    "description": "Optional discussion ID for replying to existing comments",
                },
            },
            required=["pageId", "content"],
        ),
    ),
    ToolDescriptor(
        name="systemprompt_create_notion_database",
        description="Creates a new inline database under an existing Notion page.",
        input_schema=_object_schema(
            {
                "parentPageId": {"type": "string", "description": "ID of the page that will contain the database"},
                "title": {"type": "string", "description": "Title of the new database"},
                "properties": {
                    "type": "object",
                    "description": "Database property schema in Notion API format; must include one title property",
                    "additionalProperties": True,
                },
            },
            required=["parentPageId", "title", "properties"],
        ),
    ),
    # =========================================================================
    # Sampling-backed operations
    # =========================================================================
    ToolDescriptor(
        name="systemprompt_create_notion_page_complex",
        description=(
            "Creates a rich, comprehensive Notion page that expands upon basic user inputs. "
            "Takes simple instructions, then generates a detailed, well-structured page with "
            "appropriate sections, formatting, and supplementary content."
        ),
        input_schema=_object_schema(
            {
                "databaseId": {"type": "string", "description": "The ID of the database to create the page in"},
                "userInstructions": {
                    "type": "string",
                    "description": (
                        "Basic instructions or outline for the page content. These will be expanded into a "
                        "comprehensive structure. Can include desired title, key points, or general direction."
                    ),
                },
            },
            required=["databaseId", "userInstructions"],
        ),
        sampling_config=SamplingConfig(
            prompt_name=NOTION_PAGE_CREATOR_PROMPT.name,
            max_tokens=100000,
            temperature=0.7,
        ),
    ),
    ToolDescriptor(
        name="systemprompt_edit_notion_page_complex",
        description=(
            "Updates an existing Notion page with rich content based on user instructions. "
            "Transforms simple inputs into well-structured changes while preserving existing information."
        ),
        input_schema=_object_schema(
            {
                "pageId": PAGE_ID,
                "userInstructions": {
                    "type": "string",
                    "description": "Natural language instructions for updating the page.",
                },
            },
            required=["pageId", "userInstructions"],
        ),
        sampling_config=SamplingConfig(
            prompt_name=NOTION_PAGE_EDITOR_PROMPT.name,
            max_tokens=100000,
            temperature=0.7,
            requires_existing_content=True,
        ),
    ),
)

_TOOLS_BY_NAME: dict[str, ToolDescriptor] = {tool.name: tool for tool in NOTION_TOOLS}


def list_tools() -> list[ToolDescriptor]:
    return list(NOTION_TOOLS)


def get_tool(name: str) -> ToolDescriptor:
    """Look up a tool by name.

    Raises:
        UnknownToolError: If no tool has that name.
    """
    tool = _TOOLS_BY_NAME.get(name)
    if tool is None:
        raise UnknownToolError(name)
    return tool
