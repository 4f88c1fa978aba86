import asyncio
import gc
import json
import os
import sys
import warnings
from typing import Any

import mcp
import typer
from dotenv import load_dotenv
from fastmcp import Client
from fastmcp.client.transports import StdioTransport
from rich.console import Console
from rich.table import Table

from minimax_mcp.config import load_baseline
from minimax_mcp.const import RESOURCE_MODES, TRANSPORT_MODE_REST, TRANSPORT_MODE_STDIO, TRANSPORT_MODES
from minimax_mcp.logging import configure_logging, mask_api_key
from minimax_mcp.server import MinimaxMcpServer

app = typer.Typer()
console = Console()


def _setup(log_level: str | None) -> None:
    load_dotenv()
    configure_logging(log_level or os.getenv("LOG_LEVEL", "INFO"))


def build_overrides(
    mode: str | None = None,
    port: int | None = None,
    endpoint: str | None = None,
    api_key: str | None = None,
    api_host: str | None = None,
    base_path: str | None = None,
    resource_mode: str | None = None,
) -> dict[str, Any]:
    """Collect the options given on the command line into an explicit config layer."""
    if mode is not None and mode not in TRANSPORT_MODES:
        raise typer.BadParameter(f"mode must be one of: {', '.join(TRANSPORT_MODES)}")
    if resource_mode is not None and resource_mode not in RESOURCE_MODES:
        raise typer.BadParameter(f"resource mode must be one of: {', '.join(RESOURCE_MODES)}")

    values = {
        "api_key": api_key,
        "api_host": api_host,
        "base_path": base_path,
        "resource_mode": resource_mode,
    }
    overrides: dict[str, Any] = {k: v for k, v in values.items() if v is not None}

    server = {"mode": mode, "port": port, "endpoint": endpoint}
    server = {k: v for k, v in server.items() if v is not None}
    if server:
        overrides["server"] = server
    return overrides


@app.command()
def serve(
    mode: str | None = typer.Option(None, help="Transport: stdio or rest"),
    port: int | None = typer.Option(None, help="REST listener port"),
    endpoint: str | None = typer.Option(None, help="REST endpoint path"),
    host: str = typer.Option("0.0.0.0", help="REST listener host"),
    config_path: str | None = typer.Option(None, help="Path to the JSON config file"),
    api_key: str | None = typer.Option(None, help="MiniMax API key"),
    api_host: str | None = typer.Option(None, help="MiniMax API host"),
    base_path: str | None = typer.Option(None, help="Base directory for relative output paths"),
    resource_mode: str | None = typer.Option(None, help="url or local"),
    log_level: str | None = typer.Option(None, help="Log level (defaults to LOG_LEVEL or INFO)"),
) -> None:
    """
    Start the MiniMax MCP server.
    """
    _setup(log_level)
    overrides = build_overrides(mode, port, endpoint, api_key, api_host, base_path, resource_mode)
    baseline = load_baseline(overrides, config_path=config_path)
    rest = baseline.server.mode == TRANSPORT_MODE_REST
    server = MinimaxMcpServer(baseline=baseline, rest=rest)

    if rest:
        from minimax_mcp.main import run_rest

        run_rest(server, host=host)
    else:
        asyncio.run(server.run_stdio())


@app.command()
def config(
    config_path: str | None = typer.Option(None, help="Path to the JSON config file"),
) -> None:
    """
    Show the effective baseline configuration
    """
    load_dotenv()
    current = MinimaxMcpServer(config_path=config_path).config
    table = Table("Setting", "Value")

    table.add_row("apiKey", mask_api_key(current.api_key))
    table.add_row("apiHost", current.api_host or "")
    table.add_row("basePath", current.base_path or "(desktop)")
    table.add_row("resourceMode", current.resource_mode)
    table.add_row("server.mode", current.server.mode)
    table.add_row("server.port", str(current.server.port))
    table.add_row("server.endpoint", current.server.endpoint)

    console.print(table)


def stdio_client(config_path: str | None = None) -> Client[Any]:
    """A fastmcp client that spawns this package's stdio server."""
    args = ["-m", "minimax_mcp.cli", "serve", "--mode", TRANSPORT_MODE_STDIO]
    if config_path:
        args += ["--config-path", config_path]
    transport = StdioTransport(command=sys.executable, args=args, env=dict(os.environ))
    return Client(transport)


def run_async_with_cleanup(coro: Any) -> Any:
    """Run async coroutine, ignoring "Event loop is closed" noise from subprocess transports."""
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", message="Event loop is closed")
        try:
            return asyncio.run(coro)
        finally:
            gc.collect()


async def get_tools_and_cleanup(client: Client[Any]) -> list[mcp.Tool]:
    try:
        async with client:
            return await client.list_tools()
    finally:
        # Give transports time to close cleanly
        await asyncio.sleep(0.1)


async def call_tool_and_cleanup(
    client: Client[Any], name: str, arguments: dict[str, Any]
) -> mcp.types.CallToolResult:
    try:
        async with client:
            return await client.call_tool_mcp(name, arguments)
    finally:
        await asyncio.sleep(0.1)


@app.command()
def tools(
    config_path: str | None = typer.Option(None, help="Path to the JSON config file"),
) -> None:
    load_dotenv()
    table = Table("Name", "Description")
    tool_list = run_async_with_cleanup(get_tools_and_cleanup(stdio_client(config_path)))
    for tool in tool_list:
        table.add_row(tool.name, tool.description or "")
    console.print(table)


@app.command()
def call(
    name: str = typer.Argument(..., help="Tool name"),
    args: str = typer.Option("{}", "--args", help="Tool arguments as a JSON object"),
    config_path: str | None = typer.Option(None, help="Path to the JSON config file"),
) -> None:
    """
    Invoke a single tool through a freshly spawned stdio server
    """
    try:
        arguments = json.loads(args)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"--args is not valid JSON: {e}")
    if not isinstance(arguments, dict):
        raise typer.BadParameter("--args must be a JSON object")

    load_dotenv()
    result = run_async_with_cleanup(call_tool_and_cleanup(stdio_client(config_path), name, arguments))
    for item in result.content:
        if isinstance(item, mcp.types.TextContent):
            console.print(item.text, style="red" if result.isError else None)

    if result.isError:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
