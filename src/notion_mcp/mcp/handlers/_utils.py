# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Shared helpers for MCP tool handlers."""

from __future__ import annotations

import json
from typing import Any

from mcp.types import EmbeddedResource, TextContent, TextResourceContents
from pydantic import AnyUrl

JSON_MIME_TYPE = "application/json"


def resource_result(uri: str, payload: Any) -> list[EmbeddedResource]:
    """Wrap a JSON payload as the single embedded resource of a tool result."""
    return [
        EmbeddedResource(
            type="resource",
            resource=TextResourceContents(
                uri=AnyUrl(uri),
                mimeType=JSON_MIME_TYPE,
                text=json.dumps(payload, indent=2, default=str),
            ),
        )
    ]


def text_result(text: str) -> list[TextContent]:
    return [TextContent(type="text", text=text)]


def page_size(args: dict[str, Any], default: int) -> int:
    """``maxResults`` as an int, falling back to ``default`` when unset."""
    value = args.get("maxResults")
    return int(value) if value else default
