# SPDX-License-Identifier: MIT
# Copyright (c) 2026 Ourochronos Contributors

"""HTTP client for the systemprompt content service.

The service hosts prompts (``/prompt``) and content blocks (``/block``)
that are republished to MCP clients through list-changed notifications.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from notion_mcp.core.config import DEFAULT_SYSTEMPROMPT_BASE_URL
from notion_mcp.core.exceptions import ConfigException, UpstreamAPIError

logger = logging.getLogger(__name__)

STATUS_MESSAGES = {
    403: "Invalid API key",
    404: "Resource not found - it may have been deleted",
    409: "Resource conflict - it may have been edited",
}


class SystemPromptService:
    """Thin async client authenticated with the ``api-key`` header."""

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        if not api_key:
            raise ConfigException("API key is required")
        self.api_key = api_key
        self.base_url = (base_url or DEFAULT_SYSTEMPROMPT_BASE_URL).rstrip("/")
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        return {"Content-Type": "application/json", "api-key": self.api_key}

    def _handle_response(self, resp: httpx.Response) -> Any:
        """Decode the body and map error statuses to fixed messages."""
        data: Any = None
        if resp.status_code != 204:
            try:
                data = resp.json()
            except (json.JSONDecodeError, ValueError):
                raise UpstreamAPIError("Failed to parse API response", status_code=resp.status_code)

        if resp.is_success:
            return data

        body_message = data.get("message") if isinstance(data, dict) else None
        if resp.status_code in STATUS_MESSAGES:
            message = STATUS_MESSAGES[resp.status_code]
        elif resp.status_code == 400:
            message = body_message or "Invalid request parameters"
        else:
            message = body_message or f"API request failed with status {resp.status_code}"
        raise UpstreamAPIError(message, status_code=resp.status_code)

    async def request(self, endpoint: str, method: str = "GET", data: Any = None) -> Any:
        """Execute a request against ``base_url + endpoint``."""
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                resp = await client.request(
                    method,
                    f"{self.base_url}{endpoint}",
                    headers=self._headers(),
                    content=json.dumps(data) if data is not None else None,
                )
        except httpx.HTTPError as e:
            logger.warning("Content service request %s %s failed: %s", method, endpoint, e)
            raise UpstreamAPIError(str(e) or "API request failed") from e
        return self._handle_response(resp)

    async def get_all_prompts(self) -> list[dict[str, Any]]:
        return await self.request("/prompt", "GET")

    async def list_blocks(self) -> list[dict[str, Any]]:
        return await self.request("/block", "GET")

    async def get_block(self, block_id: str) -> dict[str, Any]:
        return await self.request(f"/block/{block_id}", "GET")
