# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""``{{variable}}`` substitution for prompt template messages."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

from .exceptions import MissingVariablesError

VARIABLE_PATTERN = re.compile(r"\{\{([^{}]+)\}\}")


def find_variables(text: str) -> list[str]:
    """Unique placeholder names in ``text``, in order of first appearance."""
    names: list[str] = []
    for name in VARIABLE_PATTERN.findall(text):
        if name not in names:
            names.append(name)
    return names


def _render(value: Any) -> str:
    return "" if value is None else str(value)


def inject_variables_into_text(text: str, variables: Mapping[str, Any]) -> str:
    """Replace every ``{{name}}`` in ``text`` with ``variables[name]``.

    Raises:
        MissingVariablesError: listing every referenced name absent from
            ``variables``; nothing is substituted in that case.
    """
    names = find_variables(text)
    if not names:
        return text

    missing = [name for name in names if name not in variables]
    if missing:
        raise MissingVariablesError(missing)

    return VARIABLE_PATTERN.sub(lambda m: _render(variables[m.group(1)]), text)


def inject_variables(message: dict[str, Any], variables: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of a prompt message with its text content injected.

    Messages whose content is not text are returned unchanged.
    """
    content = message.get("content") or {}
    if content.get("type") != "text":
        return message
    return {
        **message,
        "content": {**content, "text": inject_variables_into_text(content.get("text", ""), variables)},
    }


def inject_messages(messages: Iterable[dict[str, Any]], variables: Mapping[str, Any]) -> list[dict[str, Any]]:
    """Inject ``variables`` into every text message of a sequence."""
    return [inject_variables(message, variables) for message in messages]
