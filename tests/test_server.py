"""
MCP surface tests: the handler methods behind list/call tools, resources and prompts.
"""

import json

import pytest
from mcp.shared.exceptions import McpError

from postgsail_mcp.server import PostgSailServer


@pytest.fixture
def server(client):
    return PostgSailServer(client)


class TestTools:

    @pytest.mark.asyncio
    async def test_list_tools_are_read_only(self, server):
        tools = await server.list_tools()
        assert len(tools) == len(server.tool_registry.tools)
        assert all(tool.annotations.readOnlyHint for tool in tools)

    @pytest.mark.asyncio
    async def test_output_schema_travels_in_meta(self, server):
        tools = {tool.name: tool for tool in await server.list_tools()}
        assert tools["get_vessel"].outputSchema is None
        assert "outputSchema" in tools["get_vessel"].meta

    @pytest.mark.asyncio
    async def test_call_tool_success(self, server, backend):
        backend.respond("badges_view", status_code=200, json=[{"badge": "Helmsman"}])
        result = await server.call_tool("get_badges", {})
        assert result.isError is False
        assert json.loads(result.content[0].text) == [{"badge": "Helmsman"}]

    @pytest.mark.asyncio
    async def test_call_tool_failure_is_content(self, server, backend):
        backend.respond("stay_view", status_code=500, json={})
        result = await server.call_tool("get_stay", {"id": "3"})
        assert result.isError is True
        assert "500" in result.content[0].text

    @pytest.mark.asyncio
    async def test_unknown_tool_is_content(self, server, backend):
        result = await server.call_tool("delete_vessel", None)
        assert result.isError is True
        assert "Unknown tool: delete_vessel" in result.content[0].text
        assert backend.requests == []

    def test_build_registers_handlers(self, server):
        assert server.build().name == "postgsail-server"


class TestResources:

    @pytest.mark.asyncio
    async def test_list_resources(self, server):
        resources = await server.list_resources()
        assert any(str(r.uri).startswith("postgsail://postgsail_overview") for r in resources)

    @pytest.mark.asyncio
    async def test_read_resource(self, server, backend):
        contents = list(await server.read_resource("postgsail://path_categories_guide"))
        assert contents[0].mime_type == "application/json"
        assert "navigation" in json.loads(contents[0].content)
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_unknown_resource_is_protocol_error(self, server):
        with pytest.raises(McpError) as exc_info:
            await server.read_resource("postgsail://missing")
        assert "postgsail://missing" in exc_info.value.error.message


class TestPrompts:

    @pytest.mark.asyncio
    async def test_list_prompts(self, server):
        prompts = {p.name: p for p in await server.list_prompts()}
        assert prompts["anchor-stay-history"].arguments[0].name == "month"
        assert prompts["anchor-stay-history"].arguments[0].required is True

    @pytest.mark.asyncio
    async def test_get_prompt_makes_no_request(self, server, backend):
        result = await server.get_prompt("system-monitoring", None)
        assert result.messages[0].role == "assistant"
        assert result.messages[0].content.text == "List any alerts or events from the vessel today."
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_unknown_prompt_is_protocol_error(self, server):
        with pytest.raises(McpError):
            await server.get_prompt("weather-report", {})
