"""Tests for the MCP server wrapper."""

import json

import mcp.types as types

from conftest import FakeClient
from veracode_mcp.server import SERVER_NAME, VeracodeMCPServer, serve, to_mcp_tool
from veracode_mcp.tools import get_tool


class TestToMcpTool:
    """Tests for tool definition conversion."""

    def test_copies_schema(self):
        definition = get_tool("get-findings")
        tool = to_mcp_tool(definition)
        assert isinstance(tool, types.Tool)
        assert tool.name == "get-findings"
        assert tool.inputSchema == definition["input_schema"]


class TestVeracodeMCPServer:
    """Tests for VeracodeMCPServer."""

    async def test_call_tool_returns_envelope_text(self, metamail_client: FakeClient):
        server = VeracodeMCPServer(metamail_client)
        content = await server.call_tool(
            "get-findings-paginated", {"application": "Metamail", "page_size": 3}
        )
        assert len(content) == 1
        assert content[0].type == "text"
        envelope = json.loads(content[0].text)
        assert envelope["success"] is True
        assert envelope["data"]["page_info"]["display"] == "Page 1 of 34"

    async def test_call_tool_failure_is_envelope(self, metamail_client: FakeClient):
        server = VeracodeMCPServer(metamail_client)
        content = await server.call_tool("nope", None)
        assert json.loads(content[0].text) == {"success": False, "error": "Unknown tool: nope"}

    def test_one_context_per_server(self, metamail_client: FakeClient):
        server = VeracodeMCPServer(metamail_client)
        assert server.context.client is metamail_client
        assert server.context.fetcher.client is metamail_client
        assert server.server.name == SERVER_NAME

    async def test_serve_opens_and_closes_client(self, metamail_client: FakeClient, monkeypatch):
        async def fake_run(self):
            metamail_client.calls.append(("run", None))

        monkeypatch.setattr(VeracodeMCPServer, "run", fake_run)
        await serve(metamail_client)
        assert [call for call, _ in metamail_client.calls] == ["open", "run", "close"]
