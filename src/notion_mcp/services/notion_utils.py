# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Projections of Notion API objects into the shapes returned to MCP callers.

Notion responses are large nested dicts; the dataclasses here keep the
fields agents actually use (id, title, url, timestamps, properties and a
normalized parent) and render them with camelCase keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from notion_mcp.core.exceptions import UpstreamAPIError

PARENT_TYPES = ("database_id", "page_id", "workspace")


@dataclass
class NotionPage:
    """A page as returned by the tools."""

    id: str
    title: str
    url: str | None
    created_time: str | None
    last_edited_time: str | None
    properties: dict[str, Any]
    parent: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "createdTime": self.created_time,
            "lastEditedTime": self.last_edited_time,
            "properties": self.properties,
            "parent": self.parent,
        }


@dataclass
class NotionDatabase:
    """A database as returned by the tools."""

    id: str
    title: str
    url: str | None
    created_time: str | None
    last_edited_time: str | None
    properties: dict[str, Any]
    parent: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "createdTime": self.created_time,
            "lastEditedTime": self.last_edited_time,
            "properties": self.properties,
            "parent": self.parent,
        }


@dataclass
class NotionComment:
    """A comment as returned by the tools."""

    id: str
    discussion_id: str
    content: str
    created_time: str | None = None
    last_edited_time: str | None = None
    parent_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        d = {
            "id": self.id,
            "discussionId": self.discussion_id,
            "content": self.content,
            "createdTime": self.created_time,
            "lastEditedTime": self.last_edited_time,
        }
        if self.parent_id is not None:
            d["parentId"] = self.parent_id
        return d


@dataclass
class ListPagesResult:
    """One page of search results."""

    pages: list[NotionPage] = field(default_factory=list)
    has_more: bool = False
    next_cursor: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "pages": [page.to_dict() for page in self.pages],
            "hasMore": self.has_more,
            "nextCursor": self.next_cursor,
        }


def is_full_page(obj: Any) -> bool:
    """True for a complete page object with a recognised parent type."""
    if not isinstance(obj, dict) or obj.get("object") != "page":
        return False
    parent = obj.get("parent")
    if not isinstance(parent, dict):
        return False
    return parent.get("type") in PARENT_TYPES


def normalize_parent(parent: dict[str, Any]) -> dict[str, Any]:
    """Reduce a Notion parent to exactly one of database_id, page_id or workspace."""
    if parent.get("database_id"):
        return {"type": "database_id", "database_id": parent["database_id"]}
    if parent.get("page_id"):
        return {"type": "page_id", "page_id": parent["page_id"]}
    if parent.get("type") == "workspace":
        return {"type": "workspace", "workspace": True}
    raise UpstreamAPIError(f"Invalid parent type: {parent.get('type')}")


def plain_text(rich_text: list[dict[str, Any]] | None) -> str:
    """Concatenate the plain_text of a rich text array."""
    return "".join(item.get("plain_text", "") for item in rich_text or [])


def extract_title(page: dict[str, Any]) -> str:
    """Title of a page: its title-typed property, or "Untitled"."""
    for prop in (page.get("properties") or {}).values():
        if isinstance(prop, dict) and prop.get("type") == "title":
            return plain_text(prop.get("title")) or "Untitled"
    return "Untitled"


def extract_database_title(database: dict[str, Any]) -> str:
    return plain_text(database.get("title")) or "Untitled Database"


def map_page(page: dict[str, Any]) -> NotionPage:
    return NotionPage(
        id=page["id"],
        title=extract_title(page),
        url=page.get("url"),
        created_time=page.get("created_time"),
        last_edited_time=page.get("last_edited_time"),
        properties=page.get("properties") or {},
        parent=normalize_parent(page.get("parent") or {}),
    )


def map_database(database: dict[str, Any]) -> NotionDatabase:
    parent = database.get("parent")
    return NotionDatabase(
        id=database["id"],
        title=extract_database_title(database),
        url=database.get("url"),
        created_time=database.get("created_time"),
        last_edited_time=database.get("last_edited_time"),
        properties=database.get("properties") or {},
        parent=normalize_parent(parent) if isinstance(parent, dict) and parent.get("type") in PARENT_TYPES else None,
    )


def map_comment(comment: dict[str, Any], parent_id: str | None = None) -> NotionComment:
    """Project a comment; ``parent_id`` defaults to the comment it replies to."""
    if parent_id is None:
        parent = comment.get("parent") or {}
        parent_id = parent.get("comment_id")
    rich_text = comment.get("rich_text") or []
    return NotionComment(
        id=comment["id"],
        discussion_id=comment.get("discussion_id", ""),
        content=rich_text[0].get("plain_text", "") if rich_text else "",
        created_time=comment.get("created_time"),
        last_edited_time=comment.get("last_edited_time"),
        parent_id=parent_id,
    )
