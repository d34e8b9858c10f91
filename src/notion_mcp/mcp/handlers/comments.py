# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Comment tool handlers."""

from __future__ import annotations

from typing import Any

from mcp.types import EmbeddedResource

from notion_mcp.core.context import ServiceContext

from ._utils import resource_result


async def create_notion_comment(ctx: ServiceContext, args: dict[str, Any]) -> list[EmbeddedResource]:
    comment = await ctx.notion.create_comment(args["pageId"], args["content"], args.get("discussionId"))
    return resource_result(f"notion://comments/{comment.id}", comment.to_dict())


async def get_notion_comments(ctx: ServiceContext, args: dict[str, Any]) -> list[EmbeddedResource]:
    page_id = args["pageId"]
    comments = await ctx.notion.get_comments(page_id)
    return resource_result(
        f"notion://pages/{page_id}/comments",
        {"comments": [comment.to_dict() for comment in comments]},
    )
