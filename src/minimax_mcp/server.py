"""MCP server wiring.

``MinimaxMcpServer`` owns the baseline configuration, the tool registry and
the dispatcher. The stdio form serves a single session with the baseline
configuration; the REST form (``minimax_mcp.main``) additionally applies
per-request credentials.
"""

import os
from typing import Any

import mcp.server.stdio
import mcp.types
from mcp.server.lowlevel import Server
from mcp.shared.exceptions import McpError
from mcp.types import INTERNAL_ERROR, ErrorData

from minimax_mcp import __version__
from minimax_mcp.config import ConfigStore, FragmentLike, load_baseline
from minimax_mcp.const import SERVER_NAME, TRANSPORT_MODE_REST
from minimax_mcp.dispatcher import RequestDispatcher
from minimax_mcp.logging import get_logger
from minimax_mcp.models.config import Config
from minimax_mcp.tools import ToolRegistry, default_registry

logger = get_logger("server")


def create_mcp_server(dispatcher: RequestDispatcher) -> Server:
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[mcp.types.Tool]:
        return dispatcher.registry.mcp_tools()

    async def call_tool(request: mcp.types.CallToolRequest) -> mcp.types.ServerResult:
        name = request.params.name
        try:
            result = await dispatcher.dispatch(name, request.params.arguments or {})
        except Exception as e:
            logger.error(f"Internal error while calling {name}: {e}")
            raise McpError(ErrorData(code=INTERNAL_ERROR, message=f"Internal error: {e}")) from e
        return mcp.types.ServerResult(result.to_mcp_result())

    # Fatal errors reach the client as JSON-RPC errors; the dispatcher validates arguments
    server.request_handlers[mcp.types.CallToolRequest] = call_tool

    return server


class MinimaxMcpServer:
    """Server instance with a cached baseline configuration.

    Args:
        config: Explicit override layer (highest baseline priority).
        config_path: Config file location; falls back to
            ``MINIMAX_CONFIG_PATH`` and then ``./minimax-config.json``.
        registry: Tool bindings; the MiniMax tool set by default.
        rest: Pin ``server.mode`` to ``"rest"`` across configuration updates.
        baseline: An already resolved baseline; ``config`` and ``config_path``
            are ignored when given.
        **dispatch_options: Passed to ``RequestDispatcher``.
    """

    def __init__(
        self,
        config: FragmentLike = None,
        *,
        config_path: str | os.PathLike[str] | None = None,
        registry: ToolRegistry | None = None,
        rest: bool = False,
        baseline: Config | None = None,
        **dispatch_options: Any,
    ):
        if baseline is None:
            baseline = load_baseline(config, config_path=config_path)
        pinned = {"server": {"mode": TRANSPORT_MODE_REST}} if rest else None
        self.store = ConfigStore(baseline, pinned=pinned)
        self.registry = registry if registry is not None else default_registry()
        self.dispatcher = RequestDispatcher(self.store, self.registry, **dispatch_options)
        self.server = create_mcp_server(self.dispatcher)

    @property
    def config(self) -> Config:
        return self.store.snapshot

    def update_config(self, fragment: FragmentLike) -> Config:
        """Publish a new baseline; in-flight invocations keep their own copy."""
        return self.store.update(fragment)

    async def run_stdio(self) -> None:
        missing = self.config.missing_fields()
        if missing:
            logger.warning(f"Missing configuration: {', '.join(missing)}; API tools will fail")

        logger.info("Starting MiniMax MCP server on stdio")
        async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )
