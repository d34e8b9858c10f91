# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Page tool handlers."""

from __future__ import annotations

from typing import Any

from mcp.types import EmbeddedResource

from notion_mcp.core.context import ServiceContext
from notion_mcp.core.exceptions import ValidationException

from ._utils import page_size, resource_result

MSG_INVALID_PARENT = "Parent must have either database_id or page_id"
MSG_MISSING_TITLE = "When creating a page in a database, properties must include a title field"


def has_title_property(properties: dict[str, Any]) -> bool:
    """True if ``properties`` sets a title, by the ``title`` key or a title-typed value."""
    if "title" in properties:
        return True
    return any(
        isinstance(value, dict) and (value.get("type") == "title" or "title" in value) for value in properties.values()
    )


def build_parent(parent: dict[str, Any], properties: dict[str, Any]) -> dict[str, Any]:
    """Check the parent and title rules and return the parent to send to Notion.

    Raises:
        ValidationException: If the parent names neither or both of
            database_id and page_id, or a database page has no title.
    """
    database_id = parent.get("database_id")
    page_id = parent.get("page_id")
    if bool(database_id) == bool(page_id):
        raise ValidationException(MSG_INVALID_PARENT, field="parent")

    if database_id:
        if not has_title_property(properties):
            raise ValidationException(MSG_MISSING_TITLE, field="properties")
        return {"type": "database_id", "database_id": database_id}
    return {"type": "page_id", "page_id": page_id}


async def list_notion_pages(ctx: ServiceContext, args: dict[str, Any]) -> list[EmbeddedResource]:
    result = await ctx.notion.list_pages(page_size=page_size(args, 50))
    return resource_result("notion://pages", result.to_dict())


async def search_notion_pages(ctx: ServiceContext, args: dict[str, Any]) -> list[EmbeddedResource]:
    result = await ctx.notion.search_pages(args["query"], page_size(args, 10))
    return resource_result("notion://pages", result.to_dict())


async def search_notion_pages_by_title(ctx: ServiceContext, args: dict[str, Any]) -> list[EmbeddedResource]:
    result = await ctx.notion.search_pages_by_title(args["title"], page_size(args, 10))
    return resource_result("notion://pages", result.to_dict())


async def get_notion_page(ctx: ServiceContext, args: dict[str, Any]) -> list[EmbeddedResource]:
    page = await ctx.notion.get_page(args["pageId"])
    return resource_result(f"notion://pages/{page.id}", page.to_dict())


async def get_notion_page_property(ctx: ServiceContext, args: dict[str, Any]) -> list[EmbeddedResource]:
    page_id, property_id = args["pageId"], args["propertyId"]
    value = await ctx.notion.get_page_property(page_id, property_id)
    return resource_result(f"notion://pages/{page_id}/properties/{property_id}", value)


async def get_notion_page_blocks(ctx: ServiceContext, args: dict[str, Any]) -> list[EmbeddedResource]:
    page_id = args["pageId"]
    blocks = await ctx.notion.get_page_blocks(page_id, page_size(args, 10))
    return resource_result(f"notion://pages/{page_id}/blocks", {"blocks": blocks})


async def create_notion_page(ctx: ServiceContext, args: dict[str, Any]) -> list[EmbeddedResource]:
    """Create a page under a database or another page."""
    properties = args["properties"]
    params: dict[str, Any] = {
        "parent": build_parent(args["parent"], properties),
        "properties": properties,
    }
    if args.get("children"):
        params["children"] = args["children"]

    page = await ctx.notion.create_page(params)
    return resource_result(f"notion://pages/{page.id}", page.to_dict())


async def update_notion_page(ctx: ServiceContext, args: dict[str, Any]) -> list[EmbeddedResource]:
    page = await ctx.notion.update_page(args["pageId"], properties=args["properties"])
    return resource_result(f"notion://pages/{page.id}", page.to_dict())


async def delete_notion_page(ctx: ServiceContext, args: dict[str, Any]) -> list[EmbeddedResource]:
    """Archive a page. Notion has no hard delete through the API."""
    page = await ctx.notion.archive_page(args["pageId"])
    return resource_result(f"notion://pages/{page.id}", page.to_dict())
