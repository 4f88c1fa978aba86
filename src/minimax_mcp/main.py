"""Multi-tenant REST listener.

JSON-RPC 2.0 over HTTP POST at ``server.endpoint``. Each ``tools/call`` may
carry its own credentials under ``params._meta.auth`` (or ``params.meta.auth``),
which override the server baseline for that call only.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import mcp.types
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel, Field, ValidationError

from minimax_mcp import __version__
from minimax_mcp.const import SERVER_NAME
from minimax_mcp.logging import get_logger, mask_api_key
from minimax_mcp.server import MinimaxMcpServer

logger = get_logger("main")

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


class JsonRpcRequest(BaseModel):
    jsonrpc: str = "2.0"
    id: int | str | None = None
    method: str
    params: dict[str, Any] = Field(default_factory=dict)


class JsonRpcError(Exception):
    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class AppState:
    """Holds the server instance shared by all requests."""

    server: MinimaxMcpServer


def _result(request_id: Any, result: dict[str, Any]) -> JSONResponse:
    return JSONResponse({"jsonrpc": "2.0", "id": request_id, "result": result})


def _error(request_id: Any, code: int, message: str) -> JSONResponse:
    return JSONResponse(
        {"jsonrpc": "2.0", "id": request_id, "error": {"code": code, "message": message}}
    )


async def handle_call(server: MinimaxMcpServer, params: dict[str, Any]) -> dict[str, Any]:
    """Run ``tools/call``; ``name``/``arguments`` with ``tool``/``params`` accepted as legacy keys."""
    tool_name = params.get("name") or params.get("tool")
    if not isinstance(tool_name, str) or not tool_name:
        raise JsonRpcError(INVALID_PARAMS, "Missing tool name")

    arguments = params.get("arguments")
    if arguments is None:
        arguments = params.get("params")
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise JsonRpcError(INVALID_PARAMS, "Tool arguments must be an object")

    try:
        result = await server.dispatcher.dispatch(tool_name, arguments, metadata=params)
    except Exception as e:
        logger.error(f"Internal error while calling {tool_name}: {e}")
        raise JsonRpcError(INTERNAL_ERROR, f"Internal error: {e}") from e

    return result.to_call_result()


async def handle_method(server: MinimaxMcpServer, method: str, params: dict[str, Any]) -> dict[str, Any]:
    if method == "initialize":
        return {
            "protocolVersion": params.get("protocolVersion") or mcp.types.LATEST_PROTOCOL_VERSION,
            "capabilities": {"tools": {}, "resources": {}, "prompts": {}},
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
        }
    if method == "ping":
        return {}
    if method == "tools/list":
        return {
            "tools": [
                tool.model_dump(by_alias=True, exclude_none=True, mode="json")
                for tool in server.registry.mcp_tools()
            ]
        }
    if method == "tools/call":
        return await handle_call(server, params)
    if method == "resources/list":
        return {"resources": []}
    if method == "prompts/list":
        return {"prompts": []}
    raise JsonRpcError(METHOD_NOT_FOUND, f"Method not found: {method}")


def create_app(server: MinimaxMcpServer | None = None) -> FastAPI:
    """Build the FastAPI app; the route is mounted at the configured endpoint."""
    if server is None:
        server = MinimaxMcpServer(rest=True)

    state = AppState()
    state.server = server

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        config = state.server.config
        logger.info(
            f"REST listener ready on {config.server.endpoint} "
            f"(baseline api key: {mask_api_key(config.api_key)})"
        )
        yield
        logger.info("REST listener shut down")

    app = FastAPI(title=SERVER_NAME, version=__version__, lifespan=lifespan)
    app.state.minimax = state

    @app.post(server.config.server.endpoint)
    async def rpc(request: Request) -> Response:
        try:
            body = await request.json()
        except ValueError:
            return _error(None, PARSE_ERROR, "Parse error")

        try:
            rpc_request = JsonRpcRequest.model_validate(body)
        except ValidationError as e:
            request_id = body.get("id") if isinstance(body, dict) else None
            return _error(request_id, INVALID_REQUEST, f"Invalid request: {e.error_count()} error(s)")

        # Notifications get no response body
        if rpc_request.id is None and rpc_request.method.startswith("notifications/"):
            return Response(status_code=202)

        try:
            result = await handle_method(state.server, rpc_request.method, rpc_request.params)
        except JsonRpcError as e:
            return _error(rpc_request.id, e.code, e.message)

        return _result(rpc_request.id, result)

    return app


def run_rest(server: MinimaxMcpServer, host: str = "0.0.0.0") -> None:
    uvicorn.run(create_app(server), host=host, port=server.config.server.port)
