"""Tests for the stdio MCP server wiring."""

import mcp.types
import pytest
from mcp.shared.exceptions import McpError
from mcp.shared.memory import create_connected_server_and_client_session
from mcp.types import INTERNAL_ERROR

from minimax_mcp.errors import InvariantViolation
from minimax_mcp.models.config import Config
from minimax_mcp.server import MinimaxMcpServer


@pytest.fixture
def server(fake_registry, sleep):
    return MinimaxMcpServer({"api_key": "base-key-1234567890"}, registry=fake_registry, sleep=sleep)


class TestMinimaxMcpServer:
    def test_baseline(self, server):
        assert server.config.api_key == "base-key-1234567890"
        assert server.config.server.mode == "stdio"

    def test_update_config(self, server):
        before = server.config

        after = server.update_config({"resourceMode": "local"})

        assert after.resource_mode == "local"
        assert server.config is after
        assert before.resource_mode == "url"

    def test_env_baseline(self, monkeypatch, fake_registry):
        monkeypatch.setenv("MINIMAX_API_KEY", "env-key")

        assert MinimaxMcpServer(registry=fake_registry).config.api_key == "env-key"

    def test_prebuilt_baseline(self, fake_registry):
        baseline = Config(api_key="prebuilt")

        server = MinimaxMcpServer({"api_key": "ignored"}, baseline=baseline, registry=fake_registry, rest=True)

        assert server.config.api_key == "prebuilt"
        assert server.config.server.mode == "rest"

    def test_default_registry(self):
        assert len(MinimaxMcpServer().registry) == 10


class TestSession:
    async def test_list_tools(self, server):
        async with create_connected_server_and_client_session(server.server) as session:
            result = await session.list_tools()

        assert [tool.name for tool in result.tools] == [
            "text_to_audio",
            "list_voices",
            "query_video_generation",
            "play_audio",
        ]

    async def test_call_tool(self, server, fake_registry):
        async with create_connected_server_and_client_session(server.server) as session:
            result = await session.call_tool("text_to_audio", {"text": "hi"})

        assert not result.isError
        assert isinstance(result.content[0], mcp.types.TextContent)
        assert result.content[0].text == "ok"
        _, config = fake_registry.get("text_to_audio").handler.await_args.args
        assert config.api_key == "base-key-1234567890"

    async def test_failure_text_returned(self, server):
        async with create_connected_server_and_client_session(server.server) as session:
            result = await session.call_tool("text_to_audio", {"speed": 3})

        assert result.isError
        assert result.content[0].text.startswith("Invalid arguments for text_to_audio")

    async def test_unknown_tool_is_error_result(self, server):
        async with create_connected_server_and_client_session(server.server) as session:
            result = await session.call_tool("nope", {})

        assert result.isError

    async def test_fatal_error_becomes_jsonrpc_error(self, server, fake_registry):
        fake_registry.get("text_to_audio").handler.side_effect = InvariantViolation("broken")

        async with create_connected_server_and_client_session(server.server) as session:
            with pytest.raises(McpError) as exc_info:
                await session.call_tool("text_to_audio", {"text": "hi"})

        assert exc_info.value.error.code == INTERNAL_ERROR
        assert "broken" in exc_info.value.error.message
