# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""Clients for the external services this server adapts."""

from .notion_service import NotionService
from .systemprompt_service import SystemPromptService

__all__ = ["NotionService", "SystemPromptService"]
