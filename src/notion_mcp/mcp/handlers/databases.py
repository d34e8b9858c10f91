# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Database tool handlers."""

from __future__ import annotations

from typing import Any

from mcp.types import EmbeddedResource

from notion_mcp.core.context import ServiceContext
from notion_mcp.core.exceptions import ValidationException

from ._utils import page_size, resource_result


async def list_notion_databases(ctx: ServiceContext, args: dict[str, Any]) -> list[EmbeddedResource]:
    databases = await ctx.notion.search_databases(page_size(args, 50))
    return resource_result(
        "notion://databases",
        {"databases": [database.to_dict() for database in databases]},
    )


async def get_database_items(ctx: ServiceContext, args: dict[str, Any]) -> list[EmbeddedResource]:
    database_id = args["databaseId"]
    result = await ctx.notion.query_database(database_id, page_size(args, 10))
    return resource_result(f"notion://databases/{database_id}/items", result.to_dict())


async def create_notion_database(ctx: ServiceContext, args: dict[str, Any]) -> list[EmbeddedResource]:
    """Create an inline database; its property schema needs exactly one title column."""
    properties = args["properties"]
    titles = [name for name, schema in properties.items() if isinstance(schema, dict) and "title" in schema]
    if len(titles) != 1:
        raise ValidationException("Database properties must include exactly one title property", field="properties")

    database = await ctx.notion.create_database(args["parentPageId"], args["title"], properties)
    return resource_result(f"notion://databases/{database.id}", database.to_dict())
