# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Async facade over the Notion API client.

Every method performs one (occasionally two) Notion calls and returns the
projections from ``notion_utils`` or, for property and block listings,
the raw API payload.
"""

from __future__ import annotations

import logging
from typing import Any

from notion_client import AsyncClient

from notion_mcp.core.exceptions import ConfigException

from .notion_utils import (
    ListPagesResult,
    NotionComment,
    NotionDatabase,
    NotionPage,
    is_full_page,
    map_comment,
    map_database,
    map_page,
)

logger = logging.getLogger(__name__)

DEFAULT_SORT = {"direction": "descending", "timestamp": "last_edited_time"}
PAGE_FILTER = {"property": "object", "value": "page"}
DATABASE_FILTER = {"property": "object", "value": "database"}


def _pages_result(response: dict[str, Any]) -> ListPagesResult:
    return ListPagesResult(
        pages=[map_page(item) for item in response.get("results", []) if is_full_page(item)],
        has_more=bool(response.get("has_more")),
        next_cursor=response.get("next_cursor") or None,
    )


class NotionService:
    """Workspace operations used by the tool handlers."""

    def __init__(self, token: str, client: AsyncClient | None = None):
        if not token:
            raise ConfigException("Notion API token is required")
        self.client = client or AsyncClient(auth=token)

    async def list_pages(
        self,
        page_size: int = 50,
        start_cursor: str | None = None,
        sort: dict[str, str] | None = None,
    ) -> ListPagesResult:
        params: dict[str, Any] = {
            "filter": PAGE_FILTER,
            "page_size": page_size,
            "sort": sort or DEFAULT_SORT,
        }
        if start_cursor:
            params["start_cursor"] = start_cursor
        response = await self.client.search(**params)
        return _pages_result(response)

    async def search_pages(self, query: str, max_results: int = 10) -> ListPagesResult:
        response = await self.client.search(
            query=query,
            filter=PAGE_FILTER,
            page_size=max_results,
            sort=DEFAULT_SORT,
        )
        return _pages_result(response)

    async def search_pages_by_title(self, title: str, max_results: int = 10) -> ListPagesResult:
        """Search, then keep only pages whose title contains ``title`` (case-insensitive)."""
        result = await self.search_pages(title, max_results)
        needle = title.lower()
        result.pages = [page for page in result.pages if needle in page.title.lower()]
        return result

    async def get_page(self, page_id: str) -> NotionPage:
        page = await self.client.pages.retrieve(page_id=page_id)
        return map_page(page)

    async def create_page(self, params: dict[str, Any]) -> NotionPage:
        """Create a page from Notion create-page parameters (parent, properties, children)."""
        body = {key: params[key] for key in ("parent", "properties", "children", "icon", "cover") if params.get(key)}
        page = await self.client.pages.create(**body)
        logger.info("Created page %s", page.get("id"))
        return map_page(page)

    async def update_page(
        self,
        page_id: str,
        properties: dict[str, Any] | None = None,
        children: list[dict[str, Any]] | None = None,
        archived: bool | None = None,
    ) -> NotionPage:
        """Update page properties; ``children`` are appended as new blocks."""
        body: dict[str, Any] = {}
        if properties:
            body["properties"] = properties
        if archived is not None:
            body["archived"] = archived
        page = await self.client.pages.update(page_id=page_id, **body)
        if children:
            await self.append_blocks(page_id, children)
        return map_page(page)

    async def archive_page(self, page_id: str) -> NotionPage:
        page = await self.update_page(page_id, archived=True)
        logger.info("Archived page %s", page_id)
        return page

    async def search_databases(self, max_results: int = 50) -> list[NotionDatabase]:
        response = await self.client.search(
            filter=DATABASE_FILTER,
            page_size=max_results,
            sort=DEFAULT_SORT,
        )
        return [map_database(item) for item in response.get("results", []) if item.get("object") == "database"]

    async def query_database(self, database_id: str, max_results: int = 10) -> ListPagesResult:
        response = await self.client.databases.query(database_id=database_id, page_size=max_results)
        return _pages_result(response)

    async def create_database(
        self,
        parent_page_id: str,
        title: str,
        properties: dict[str, Any],
    ) -> NotionDatabase:
        database = await self.client.databases.create(
            parent={"type": "page_id", "page_id": parent_page_id},
            title=[{"type": "text", "text": {"content": title}}],
            properties=properties,
        )
        return map_database(database)

    async def get_page_property(self, page_id: str, property_id: str) -> dict[str, Any]:
        return await self.client.pages.properties.retrieve(page_id=page_id, property_id=property_id)

    async def get_page_blocks(self, page_id: str, page_size: int | None = None) -> list[dict[str, Any]]:
        params: dict[str, Any] = {"block_id": page_id}
        if page_size:
            params["page_size"] = page_size
        response = await self.client.blocks.children.list(**params)
        return response.get("results", [])

    async def append_blocks(self, block_id: str, children: list[dict[str, Any]]) -> dict[str, Any]:
        return await self.client.blocks.children.append(block_id=block_id, children=children)

    async def create_comment(
        self,
        page_id: str,
        content: str,
        discussion_id: str | None = None,
    ) -> NotionComment:
        """Comment on a page, or reply in ``discussion_id`` when given."""
        params: dict[str, Any] = {"rich_text": [{"type": "text", "text": {"content": content}}]}
        if discussion_id:
            params["discussion_id"] = discussion_id
        else:
            params["parent"] = {"page_id": page_id}
        response = await self.client.comments.create(**params)
        return map_comment(response, parent_id=discussion_id)

    async def get_comments(self, page_id: str) -> list[NotionComment]:
        response = await self.client.comments.list(block_id=page_id)
        return [map_comment(comment) for comment in response.get("results", []) if "discussion_id" in comment]
