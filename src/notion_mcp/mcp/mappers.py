# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Map systemprompt content-service records to MCP result shapes.

Prompts carry ``metadata.title``/``metadata.description``, a JSON Schema
under ``input.schema`` and the instruction text under
``instruction.static``. Blocks carry ``id``, ``content`` and ``metadata``.
The raw records ride along in ``_meta``.
"""

from __future__ import annotations

from typing import Any


def map_prompt_arguments(prompt: dict[str, Any]) -> list[dict[str, Any]]:
    """MCP prompt arguments from the prompt's input schema properties."""
    schema = (prompt.get("input") or {}).get("schema") or {}
    required = schema.get("required") or []
    arguments = []
    for name, prop in (schema.get("properties") or {}).items():
        if not isinstance(prop, dict):
            continue
        arguments.append(
            {
                "name": name,
                "description": str(prop.get("description") or ""),
                "required": name in required,
            }
        )
    return arguments


def map_prompt_to_get_prompt_result(prompt: dict[str, Any]) -> dict[str, Any]:
    metadata = prompt.get("metadata") or {}
    return {
        "name": metadata.get("title"),
        "description": metadata.get("description"),
        "messages": [
            {
                "role": "assistant",
                "content": {"type": "text", "text": (prompt.get("instruction") or {}).get("static", "")},
            }
        ],
        "arguments": map_prompt_arguments(prompt),
        "tools": [],
        "_meta": {"prompt": prompt},
    }


def map_prompts_to_list_prompts_result(prompts: list[dict[str, Any]]) -> dict[str, Any]:
    return {
        "_meta": {"prompts": prompts},
        "prompts": [
            {
                "name": (prompt.get("metadata") or {}).get("title"),
                "description": (prompt.get("metadata") or {}).get("description"),
                "arguments": [],
            }
            for prompt in prompts
        ],
    }


def map_block_to_read_resource_result(block: dict[str, Any]) -> dict[str, Any]:
    return {
        "contents": [
            {
                "uri": f"resource:///block/{block['id']}",
                "mimeType": "text/plain",
                "text": block.get("content", ""),
            }
        ],
        "_meta": {},
    }


def map_blocks_to_list_resources_result(blocks: list[dict[str, Any]]) -> dict[str, Any]:
    resources = []
    for block in blocks:
        metadata = block.get("metadata") or {}
        resource = {
            "uri": f"resource:///block/{block['id']}",
            "name": metadata.get("title"),
            "mimeType": "text/plain",
        }
        if metadata.get("description"):
            resource["description"] = metadata["description"]
        resources.append(resource)
    return {"_meta": {}, "resources": resources}
