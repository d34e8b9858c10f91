"""Global test fixtures for the Notion MCP test suite."""

from __future__ import annotations

import os
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest
from mcp.types import CreateMessageResult, TextContent

from notion_mcp.core.config import clear_config_cache
from notion_mcp.core.context import ServiceContext, clear_context
from notion_mcp.services.notion_service import NotionService

PAGE_ID = "123e4567-e89b-12d3-a456-426614174000"

# ============================================================================
# Environment
# ============================================================================


@pytest.fixture
def clean_env(monkeypatch):
    """Remove all credential and NOTION_MCP_ environment variables."""
    env_prefixes = ("NOTION_", "SYSTEMPROMPT_")
    for key in list(os.environ.keys()):
        if any(key.startswith(prefix) for prefix in env_prefixes):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def env_with_credentials(clean_env, monkeypatch):
    """Set both required credentials."""
    monkeypatch.setenv("SYSTEMPROMPT_API_KEY", "sp-key")
    monkeypatch.setenv("NOTION_API_KEY", "secret_notion")


@pytest.fixture(autouse=True)
def reset_globals():
    """Drop cached config and service context between tests."""
    clear_config_cache()
    clear_context()
    yield
    clear_config_cache()
    clear_context()


# ============================================================================
# Notion objects
# ============================================================================


@pytest.fixture
def page_factory():
    """Factory for raw Notion page objects."""

    def factory(
        page_id: str = PAGE_ID,
        title: str | None = "Test Page",
        parent: dict[str, Any] | None = None,
        **overrides: Any,
    ) -> dict[str, Any]:
        properties: dict[str, Any] = {}
        if title is not None:
            properties["Name"] = {
                "id": "title",
                "type": "title",
                "title": [{"type": "text", "plain_text": title, "text": {"content": title}}],
            }
        page = {
            "object": "page",
            "id": page_id,
            "url": f"https://www.notion.so/{page_id.replace('-', '')}",
            "created_time": "2026-01-01T00:00:00.000Z",
            "last_edited_time": "2026-01-02T00:00:00.000Z",
            "parent": parent or {"type": "workspace", "workspace": True},
            "properties": properties,
        }
        page.update(overrides)
        return page

    return factory


@pytest.fixture
def database_factory():
    """Factory for raw Notion database objects."""

    def factory(database_id: str = "db1", title: str | None = "Tasks") -> dict[str, Any]:
        return {
            "object": "database",
            "id": database_id,
            "url": f"https://www.notion.so/{database_id}",
            "created_time": "2026-01-01T00:00:00.000Z",
            "last_edited_time": "2026-01-02T00:00:00.000Z",
            "title": [{"type": "text", "plain_text": title}] if title else [],
            "parent": {"type": "page_id", "page_id": "parent-page"},
            "properties": {"Name": {"id": "title", "type": "title", "title": {}}},
        }

    return factory


# ============================================================================
# Collaborators
# ============================================================================


@pytest.fixture
def mock_notion_client():
    """A notion_client.AsyncClient stand-in with every endpoint as AsyncMock."""
    client = MagicMock()
    client.search = AsyncMock(return_value={"results": [], "has_more": False, "next_cursor": None})
    client.pages.retrieve = AsyncMock()
    client.pages.create = AsyncMock()
    client.pages.update = AsyncMock()
    client.pages.properties.retrieve = AsyncMock()
    client.databases.query = AsyncMock(return_value={"results": [], "has_more": False, "next_cursor": None})
    client.databases.create = AsyncMock()
    client.blocks.children.list = AsyncMock(return_value={"results": []})
    client.blocks.children.append = AsyncMock(return_value={"results": []})
    client.comments.create = AsyncMock()
    client.comments.list = AsyncMock(return_value={"results": []})
    return client


@pytest.fixture
def notion_service(mock_notion_client):
    return NotionService("secret_notion", client=mock_notion_client)


@pytest.fixture
def mock_systemprompt():
    service = MagicMock()
    service.get_all_prompts = AsyncMock(return_value=[])
    service.list_blocks = AsyncMock(return_value=[])
    service.get_block = AsyncMock()
    return service


@pytest.fixture
def ctx(notion_service, mock_systemprompt):
    return ServiceContext(notion=notion_service, systemprompt=mock_systemprompt)


@pytest.fixture
def completion():
    """Factory for text completions returned by the sampling host."""

    def factory(text: str, model: str = "test-model") -> CreateMessageResult:
        return CreateMessageResult(
            role="assistant",
            content=TextContent(type="text", text=text),
            model=model,
            stopReason="endTurn",
        )

    return factory


@pytest.fixture
def sampling_host(completion):
    """A sampling host that answers every request with an empty JSON object."""
    host = MagicMock()
    host.create_message = AsyncMock(return_value=completion("{}"))
    return host
