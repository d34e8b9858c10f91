"""Tests for the sampling-backed page tools."""

from __future__ import annotations

import json

import pytest

from notion_mcp.core.exceptions import ConfigException, ToolCallFailed, ValidationException
from notion_mcp.mcp.handlers.complex import run_sampling_tool
from notion_mcp.mcp.prompts import CREATE_PAGE_CALLBACK, EDIT_PAGE_CALLBACK
from notion_mcp.mcp.server import handle_tool_call
from notion_mcp.mcp.tools import ToolDescriptor

PAGE_ID = "123e4567-e89b-12d3-a456-426614174000"


def sent_params(host):
    return host.create_message.await_args.args[0]


class TestCreatePageComplex:
    @pytest.mark.asyncio
    async def test_samples_and_creates(self, ctx, mock_notion_client, sampling_host, completion, page_factory):
        draft = {"parent": {"database_id": "db1"}, "properties": {"title": [{"text": {"content": "Trip"}}]}}
        sampling_host.create_message.return_value = completion(json.dumps(draft))
        mock_notion_client.pages.create.return_value = page_factory(page_id="trip", title="Trip")

        result = await handle_tool_call(
            ctx,
            "systemprompt_create_notion_page_complex",
            {"databaseId": "db1", "userInstructions": "Plan a trip to Lisbon"},
            sampling_host,
        )

        params = sent_params(sampling_host)
        assert params["maxTokens"] == 100000
        assert params["temperature"] == 0.7
        assert params["_meta"] == {"callback": CREATE_PAGE_CALLBACK}
        assert params["messages"][0]["role"] == "assistant"
        user_text = params["messages"][1]["content"]["text"]
        assert "<databaseId>db1</databaseId>" in user_text
        assert "<userInstructions>Plan a trip to Lisbon</userInstructions>" in user_text

        assert result[0].type == "text"
        assert json.loads(result[0].text)["id"] == "trip"

    @pytest.mark.asyncio
    async def test_llm_validation_error_not_wrapped(self, ctx, mock_notion_client, sampling_host, completion):
        sampling_host.create_message.return_value = completion("not json")

        with pytest.raises(ValidationException, match="^LLM response is not valid JSON"):
            await handle_tool_call(
                ctx,
                "systemprompt_create_notion_page_complex",
                {"databaseId": "db1", "userInstructions": "x"},
                sampling_host,
            )

        mock_notion_client.pages.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_host_failure_wrapped(self, ctx, sampling_host):
        sampling_host.create_message.side_effect = RuntimeError("user rejected sampling")

        with pytest.raises(ToolCallFailed) as exc_info:
            await handle_tool_call(
                ctx,
                "systemprompt_create_notion_page_complex",
                {"databaseId": "db1", "userInstructions": "x"},
                sampling_host,
            )

        assert str(exc_info.value) == "Tool call failed: Sampling request failed: user rejected sampling"


class TestEditPageComplex:
    @pytest.mark.asyncio
    async def test_injects_current_page(self, ctx, mock_notion_client, sampling_host, completion, page_factory):
        blocks = [{"id": "b1", "type": "paragraph"}]
        mock_notion_client.blocks.children.list.return_value = {"results": blocks}
        sampling_host.create_message.return_value = completion(json.dumps({"pageId": PAGE_ID, "archived": False}))
        mock_notion_client.pages.update.return_value = page_factory(page_id=PAGE_ID)

        await handle_tool_call(
            ctx,
            "systemprompt_edit_notion_page_complex",
            {"pageId": PAGE_ID, "userInstructions": "Tidy up"},
            sampling_host,
        )

        mock_notion_client.blocks.children.list.assert_awaited_once_with(block_id=PAGE_ID)
        params = sent_params(sampling_host)
        assert params["_meta"] == {"callback": EDIT_PAGE_CALLBACK}
        user_text = params["messages"][1]["content"]["text"]
        assert f"<currentPage>{json.dumps(blocks, indent=2)}</currentPage>" in user_text
        assert "{{" not in user_text

    @pytest.mark.asyncio
    async def test_missing_sampling_config(self, ctx, sampling_host):
        tool = ToolDescriptor(name="systemprompt_broken", description="", input_schema={"type": "object"})

        with pytest.raises(ConfigException, match="^Tool is missing required sampling configuration$"):
            await run_sampling_tool(ctx, tool, {}, sampling_host)

        sampling_host.create_message.assert_not_awaited()
