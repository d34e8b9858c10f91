# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Service context shared by every request handler.

Built once at startup from the loaded configuration and handed to the
handlers explicitly; nothing mutates it afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass

from notion_mcp.services.notion_service import NotionService
from notion_mcp.services.systemprompt_service import SystemPromptService

from .config import CoreSettings


@dataclass(frozen=True)
class ServiceContext:
    """Handles to the external collaborators."""

    notion: NotionService
    systemprompt: SystemPromptService

    @classmethod
    def from_config(cls, config: CoreSettings) -> ServiceContext:
        """Construct the services; each constructor rejects an empty credential."""
        return cls(
            systemprompt=SystemPromptService(
                config.systemprompt_api_key,
                base_url=config.systemprompt_base_url,
                timeout=config.request_timeout,
            ),
            notion=NotionService(config.notion_api_key),
        )


_context: ServiceContext | None = None


def initialize_context(config: CoreSettings) -> ServiceContext:
    """Build the process-wide context. Re-initialization is not supported.

    Raises:
        RuntimeError: If the context was already initialized.
    """
    global _context
    if _context is not None:
        raise RuntimeError("Service context is already initialized")
    _context = ServiceContext.from_config(config)
    return _context


def get_context() -> ServiceContext:
    """Get the service context.

    Raises:
        RuntimeError: If initialize_context() has not run yet.
    """
    if _context is None:
        raise RuntimeError("Service context must be initialized before use")
    return _context


def set_context(context: ServiceContext | None) -> None:
    """Install a prebuilt context (or clear it). Primarily for testing."""
    global _context
    _context = context


def clear_context() -> None:
    """Clear the service context. Primarily for testing."""
    set_context(None)
