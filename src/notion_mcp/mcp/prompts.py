# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Prompt templates used by the sampling-backed tools.

Each template is an instruction message for the client's LLM plus a user
message whose ``{{name}}`` placeholders are filled from tool arguments.
The response schema describes the JSON the LLM must return; the callback
id names the post-processing step that turns that JSON into a Notion call.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from notion_mcp.core.exceptions import NotFoundError
from notion_mcp.core.validation import PAGE_ID_PATTERN

CREATE_PAGE_CALLBACK = "systemprompt_create_notion_page_complex"
EDIT_PAGE_CALLBACK = "systemprompt_edit_notion_page_complex"


@dataclass(frozen=True)
class PromptArgument:
    name: str
    description: str
    required: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "description": self.description, "required": self.required}


@dataclass(frozen=True)
class PromptTemplate:
    """A named, parameterised conversation script."""

    name: str
    description: str
    arguments: tuple[PromptArgument, ...] = ()
    messages: tuple[dict[str, Any], ...] = ()
    response_schema: dict[str, Any] | None = None
    callback_id: str | None = None

    def to_listing(self) -> dict[str, Any]:
        """List view: everything except the messages."""
        return {
            "name": self.name,
            "description": self.description,
            "arguments": [arg.to_dict() for arg in self.arguments],
        }

    def to_dict(self) -> dict[str, Any]:
        d = self.to_listing()
        d["messages"] = [dict(message) for message in self.messages]
        return d


def _text(role: str, text: str) -> dict[str, Any]:
    return {"role": role, "content": {"type": "text", "text": text}}


# ============================================================================
# Response schemas
# ============================================================================

_RICH_TEXT = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["text"],
        "properties": {
            "type": {"type": "string"},
            "text": {
                "type": "object",
                "required": ["content"],
                "properties": {"content": {"type": "string"}, "link": {}},
            },
            "annotations": {"type": "object"},
        },
    },
}

_TITLE_PROPERTY = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["text"],
        "additionalProperties": False,
        "properties": {
            "type": {"type": "string"},
            "text": {
                "type": "object",
                "required": ["content"],
                "additionalProperties": False,
                "properties": {"content": {"type": "string", "description": "The title text of the page"}},
            },
        },
    },
}

BLOCK_TYPES = (
    "paragraph",
    "heading_1",
    "heading_2",
    "heading_3",
    "bulleted_list_item",
    "numbered_list_item",
    "to_do",
    "toggle",
    "code",
    "quote",
    "callout",
    "divider",
)

PAGE_BLOCKS_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "required": ["type"],
        "properties": {
            "object": {"type": "string", "const": "block"},
            "type": {"type": "string", "enum": list(BLOCK_TYPES)},
            **{
                block_type: {"type": "object", "properties": {"rich_text": _RICH_TEXT}}
                for block_type in BLOCK_TYPES
                if block_type != "divider"
            },
            "divider": {"type": "object"},
        },
    },
}

NOTION_PAGE_CREATOR_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["parent", "properties"],
    "additionalProperties": False,
    "properties": {
        "parent": {
            "type": "object",
            "required": ["database_id"],
            "additionalProperties": False,
            "properties": {
                "type": {"type": "string", "const": "database_id"},
                "database_id": {"type": "string", "description": "The ID of the database to create the page in"},
            },
        },
        "properties": {
            "type": "object",
            "required": ["title"],
            "properties": {"title": _TITLE_PROPERTY},
        },
        "children": PAGE_BLOCKS_SCHEMA,
    },
}

NOTION_PAGE_EDITOR_SCHEMA: dict[str, Any] = {
    "type": "object",
    "required": ["pageId"],
    "additionalProperties": False,
    "properties": {
        "pageId": {"type": "string", "description": "The ID of the page to edit", "pattern": PAGE_ID_PATTERN},
        "archived": {"type": "boolean", "description": "Whether to archive the page"},
        "properties": {"type": "object", "properties": {"title": _TITLE_PROPERTY}},
        "children": PAGE_BLOCKS_SCHEMA,
    },
}

# ============================================================================
# Instructions
# ============================================================================

_BLOCK_REFERENCE = """BLOCK TYPE REFERENCE:
- paragraph: Regular text content
- heading_1/2/3: Section headers (3 levels)
- bulleted_list_item: Unordered list items
- numbered_list_item: Ordered list items
- to_do: Checkable items
- toggle: Collapsible content
- code: Code snippets
- quote: Block quotes
- callout: Highlighted notes
- divider: Horizontal rule (empty object body)

Every block is {"object": "block", "type": <block type>, <block type>: {"rich_text": [{"text": {"content": <text>}}]}}."""

NOTION_PAGE_CREATOR_INSTRUCTIONS = (
    """You are an expert at creating Notion pages through the Notion API. Turn the basic instructions in the
user message into a rich, well-structured page and answer with the API request that creates it.

INPUT PARAMETERS (inside <requestParams>):
1. databaseId: The database the page is created in
2. userInstructions: Basic guidance for the page: a title, key points or a general direction

YOUR ROLE:
- Derive a clear, descriptive title from the instructions
- Expand the instructions into logical sections with headings
- Use lists for key points and numbered lists for sequences
- Add supplementary sections only where they add value
- Keep the original intent of the instructions

RESPONSE FORMAT:
Return ONLY a JSON object, with no surrounding prose or code fences:
{
  "parent": {"database_id": <databaseId>},
  "properties": {"title": [{"text": {"content": <page title>}}]},
  "children": [<blocks>]
}

"""
    + _BLOCK_REFERENCE
)

NOTION_PAGE_EDITOR_INSTRUCTIONS = (
    """You are an expert at editing Notion pages through the Notion API. Apply the instructions in the user
message to the existing page and answer with the API request that performs the edit.

INPUT PARAMETERS:
1. pageId (inside <requestParams>): The page being edited
2. userInstructions (inside <requestParams>): The requested changes
3. currentPage: The page's current content blocks as JSON

YOUR ROLE:
- Read the current structure before changing anything
- Make the requested changes and keep unrelated content intact
- Match the block types and heading levels the page already uses
- Only change the title when the instructions ask for it

RESPONSE FORMAT:
Return ONLY a JSON object, with no surrounding prose or code fences:
{
  "pageId": <pageId>,
  "archived": <optional boolean>,
  "properties": {"title": [{"text": {"content": <new title>}}]},
  "children": [<blocks to append>]
}
Omit "properties" when the title does not change and "children" when no content is added.

"""
    + _BLOCK_REFERENCE
)

# ============================================================================
# Templates
# ============================================================================

NOTION_PAGE_CREATOR_PROMPT = PromptTemplate(
    name="Notion Page Creator",
    description=(
        "Generates a rich, detailed Notion page that expands upon basic inputs "
        "into comprehensive, well-structured content"
    ),
    arguments=(
        PromptArgument("databaseId", "The ID of the database to create the page in", required=True),
        PromptArgument(
            "userInstructions",
            "Basic instructions or outline for the page content that will be expanded into a comprehensive structure",
            required=True,
        ),
    ),
    messages=(
        _text("assistant", NOTION_PAGE_CREATOR_INSTRUCTIONS),
        _text(
            "user",
            """<input>
  <requestParams>
    <databaseId>{{databaseId}}</databaseId>
    <userInstructions>{{userInstructions}}</userInstructions>
  </requestParams>
</input>""",
        ),
    ),
    response_schema=NOTION_PAGE_CREATOR_SCHEMA,
    callback_id=CREATE_PAGE_CALLBACK,
)

NOTION_PAGE_EDITOR_PROMPT = PromptTemplate(
    name="Notion Page Editor",
    description=(
        "Modifies an existing Notion page based on user instructions "
        "while preserving its core structure and content"
    ),
    arguments=(
        PromptArgument("pageId", "The ID of the page to edit", required=True),
        PromptArgument("userInstructions", "Instructions for how to modify the page content", required=True),
        PromptArgument("currentPage", "JSON of the page's current content blocks", required=True),
    ),
    messages=(
        _text("assistant", NOTION_PAGE_EDITOR_INSTRUCTIONS),
        _text(
            "user",
            """<input>
  <requestParams>
    <pageId>{{pageId}}</pageId>
    <userInstructions>{{userInstructions}}</userInstructions>
  </requestParams>
  <currentPage>{{currentPage}}</currentPage>
</input>""",
        ),
    ),
    response_schema=NOTION_PAGE_EDITOR_SCHEMA,
    callback_id=EDIT_PAGE_CALLBACK,
)

NOTION_PROMPTS: tuple[PromptTemplate, ...] = (NOTION_PAGE_CREATOR_PROMPT, NOTION_PAGE_EDITOR_PROMPT)


def get_prompt_template(name: str, prompts: tuple[PromptTemplate, ...] = NOTION_PROMPTS) -> PromptTemplate:
    """Look up a template by name.

    Raises:
        NotFoundError: ``Prompt not found: <name>``.
    """
    for prompt in prompts:
        if prompt.name == name:
            return prompt
    raise NotFoundError(f"Prompt not found: {name}")


def get_prompt_by_callback(callback_id: str) -> PromptTemplate | None:
    for prompt in NOTION_PROMPTS:
        if prompt.callback_id == callback_id:
            return prompt
    return None
