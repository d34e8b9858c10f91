# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Resource handlers.

The server publishes one resource: the agent definition at
``resource:///block/default``, a JSON document with the instructions,
voice and model configuration for a Notion assistant.
"""

from __future__ import annotations

import json
import re
from typing import Any

from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.types import Resource
from pydantic import AnyUrl

from notion_mcp.core.exceptions import NotFoundError, ValidationException

RESOURCE_URI_PATTERN = re.compile(r"^resource:///block/(.+)$")
DEFAULT_BLOCK_ID = "default"
TEXT_MIME_TYPE = "text/plain"

AGENT_INSTRUCTION = """You are a specialized agent with deep expertise in Notion workspace management and content organization. Your capabilities include:

1. Page Management:
- Search and navigate Notion pages
- Create new pages with structured content
- Update existing pages
- Organize content hierarchically
- Manage page properties effectively

2. Database Operations:
- List and explore available databases
- Query database contents
- Organize database items
- Track and update database entries
- Create structured database views

3. Content Organization:
- Structure information effectively
- Maintain consistent page layouts
- Create linked references between pages
- Organize content in databases
- Implement effective tagging systems

4. Collaboration Features:
- Add and manage comments on pages
- Participate in page discussions
- Track page changes and updates
- Maintain clear communication threads
- Support team collaboration

You have access to specialized Notion tools for these operations. Always select the most appropriate tool for the task and execute operations efficiently while maintaining high quality and reliability. When working with Notion content, ensure proper organization, clear structure, and effective use of Notion's features for optimal workspace management."""

AGENT_VOICE = "Kore"

AGENT_RESOURCE: dict[str, Any] = {
    "name": "Systemprompt Notion Agent",
    "description": "An expert agent for managing and organizing content in Notion workspaces",
    "instruction": AGENT_INSTRUCTION,
    "voice": AGENT_VOICE,
    "config": {
        "model": "models/gemini-2.0-flash-exp",
        "generationConfig": {
            "responseModalities": "audio",
            "speechConfig": {"voiceConfig": {"prebuiltVoiceConfig": {"voiceName": AGENT_VOICE}}},
        },
    },
}


def block_uri(block_id: str) -> str:
    return f"resource:///block/{block_id}"


def list_resources() -> list[Resource]:
    return [
        Resource(
            uri=AnyUrl(block_uri(DEFAULT_BLOCK_ID)),
            name=AGENT_RESOURCE["name"],
            description=AGENT_RESOURCE["description"],
            mimeType=TEXT_MIME_TYPE,
        )
    ]


def read_resource(uri: str) -> list[ReadResourceContents]:
    """Read a resource by URI.

    Raises:
        ValidationException: If the URI is not ``resource:///block/{id}``.
        NotFoundError: If the block id is not the agent resource.
    """
    match = RESOURCE_URI_PATTERN.match(str(uri))
    if not match:
        raise ValidationException("Invalid resource URI format - expected resource:///block/{id}", field="uri")

    if match.group(1) != DEFAULT_BLOCK_ID:
        raise NotFoundError("Resource not found")

    return [ReadResourceContents(content=json.dumps(AGENT_RESOURCE), mime_type=TEXT_MIME_TYPE)]
