# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Prompt handlers: list the templates and render one with arguments."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from mcp import types

from notion_mcp.core.exceptions import NotFoundError, NotionMCPException
from notion_mcp.core.templating import inject_messages

from ..prompts import NOTION_PROMPTS, PromptTemplate, get_prompt_template


def _to_prompt_message(message: dict[str, Any]) -> types.PromptMessage:
    content = message["content"]
    if content.get("type") == "image":
        body: types.TextContent | types.ImageContent = types.ImageContent(
            type="image", data=content["data"], mimeType=content["mimeType"]
        )
    else:
        body = types.TextContent(type="text", text=content["text"])
    return types.PromptMessage(role=message["role"], content=body)


def list_prompts(prompts: Sequence[PromptTemplate] | None = NOTION_PROMPTS) -> list[types.Prompt]:
    """All templates, without their messages."""
    if not isinstance(prompts, (list, tuple)):
        raise NotionMCPException("Failed to fetch prompts")

    return [
        types.Prompt(
            name=prompt.name,
            description=prompt.description,
            arguments=[
                types.PromptArgument(name=arg.name, description=arg.description, required=arg.required)
                for arg in prompt.arguments
            ],
        )
        for prompt in prompts
    ]


def get_prompt(
    name: str,
    arguments: Mapping[str, Any] | None = None,
    prompts: Sequence[PromptTemplate] = NOTION_PROMPTS,
) -> types.GetPromptResult:
    """Render a template.

    Without arguments the messages come back with their placeholders;
    with arguments every placeholder must be supplied.

    Raises:
        NotFoundError: If the prompt is unknown or has no messages.
        MissingVariablesError: If arguments omit a referenced placeholder.
    """
    template = get_prompt_template(name, tuple(prompts))
    if not template.messages:
        raise NotFoundError(f"Messages not found for prompt: {name}")

    messages = inject_messages(template.messages, arguments) if arguments else list(template.messages)
    return types.GetPromptResult(
        description=template.description,
        messages=[_to_prompt_message(message) for message in messages],
    )
