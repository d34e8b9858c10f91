# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""List-changed notifications carrying the content service's prompts and blocks."""

from __future__ import annotations

import logging
from typing import Any, Literal

from mcp import types

from notion_mcp.core.context import ServiceContext

from ..mappers import map_blocks_to_list_resources_result, map_prompts_to_list_prompts_result

logger = logging.getLogger(__name__)

PROMPTS_CHANGED = "notifications/prompts/list_changed"
RESOURCES_CHANGED = "notifications/resources/list_changed"


# The protocol's own list_changed types only keep `_meta` in params, which
# would drop the mapped listing; these carry params as a plain dict.
class PromptListChangedNotification(
    types.Notification[dict[str, Any], Literal["notifications/prompts/list_changed"]]
):
    pass


class ResourceListChangedNotification(
    types.Notification[dict[str, Any], Literal["notifications/resources/list_changed"]]
):
    pass


async def send_prompt_changed_notification(ctx: ServiceContext, session: Any) -> None:
    prompts = await ctx.systemprompt.get_all_prompts()
    notification = PromptListChangedNotification(
        method=PROMPTS_CHANGED,
        params=map_prompts_to_list_prompts_result(prompts),
    )
    await session.send_notification(notification)
    logger.debug("Sent %s with %d prompts", PROMPTS_CHANGED, len(prompts))


async def send_resource_changed_notification(ctx: ServiceContext, session: Any) -> None:
    blocks = await ctx.systemprompt.list_blocks()
    notification = ResourceListChangedNotification(
        method=RESOURCES_CHANGED,
        params=map_blocks_to_list_resources_result(blocks),
    )
    await session.send_notification(notification)
    logger.debug("Sent %s with %d blocks", RESOURCES_CHANGED, len(blocks))
