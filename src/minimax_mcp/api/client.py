"""Async HTTP client for the MiniMax API.

One client is created per invocation from that invocation's resolved
Config, so credentials never cross between concurrent calls. The client
never retries; the dispatcher owns the retry policy.
"""

from pathlib import Path
from typing import Any

import httpx

from minimax_mcp.errors import (
    ConfigurationError,
    MinimaxAPIError,
    MinimaxAuthError,
    MinimaxRequestError,
    match_terminal_kind,
)
from minimax_mcp.files import read_file
from minimax_mcp.logging import get_logger
from minimax_mcp.models.config import Config

logger = get_logger("api.client")

DEFAULT_TIMEOUT = 60.0
AUTH_ERROR_CODE = 1004


class MinimaxClient:
    def __init__(
        self,
        config: Config,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        missing = config.missing_fields()
        if missing:
            raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")

        self.config = config
        self._timeout = timeout
        self._transport = transport
        self._client = httpx.AsyncClient(
            base_url=config.api_host.rstrip("/"),
            headers={
                "Authorization": f"Bearer {config.api_key}",
                "MM-API-Source": "Minimax-MCP",
            },
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "MinimaxClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def post(self, endpoint: str, payload: dict[str, Any]) -> dict[str, Any]:
        logger.debug(f"POST {endpoint}")
        response = await self._send("POST", endpoint, json=payload)
        return self._check(response)

    async def get(self, endpoint: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        logger.debug(f"GET {endpoint}")
        response = await self._send("GET", endpoint, params=params)
        return self._check(response)

    async def upload(
        self,
        endpoint: str,
        file_path: Path,
        data: dict[str, str],
    ) -> dict[str, Any]:
        logger.debug(f"UPLOAD {endpoint} {file_path.name}")
        content = await read_file(file_path)
        files = {"file": (file_path.name, content)}
        response = await self._send("POST", endpoint, data=data, files=files)
        return self._check(response)

    async def download(self, url: str) -> bytes:
        """Fetch an absolute URL (result files, remote inputs) without API auth."""
        try:
            async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
                response = await client.get(url, follow_redirects=True)
        except httpx.RequestError as e:
            raise MinimaxRequestError(f"Failed to download {url}: {e}") from e
        if response.status_code >= 400:
            raise MinimaxRequestError(f"Failed to download {url}: HTTP {response.status_code}")
        return response.content

    async def _send(self, method: str, endpoint: str, **kwargs: Any) -> httpx.Response:
        try:
            return await self._client.request(method, endpoint, **kwargs)
        except httpx.TimeoutException as e:
            raise MinimaxRequestError(f"Request to {endpoint} timed out: {e}") from e
        except httpx.RequestError as e:
            raise MinimaxRequestError(f"Request to {endpoint} failed: {e}") from e

    def _check(self, response: httpx.Response) -> dict[str, Any]:
        trace_id = response.headers.get("Trace-Id")

        if response.status_code == 401:
            raise MinimaxAuthError(
                f"API Error: unauthorized, Trace-Id: {trace_id}",
                status_code=401,
                trace_id=trace_id,
            )
        if response.status_code >= 400:
            raise MinimaxAPIError(
                f"API Error: HTTP {response.status_code}, Trace-Id: {trace_id}",
                status_code=response.status_code,
                trace_id=trace_id,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise MinimaxRequestError(f"Invalid JSON response, Trace-Id: {trace_id}") from e
        if not isinstance(body, dict):
            raise MinimaxRequestError(f"Unexpected response shape, Trace-Id: {trace_id}")

        base_resp = body.get("base_resp") or {}
        status_code = base_resp.get("status_code", 0)
        if status_code != 0:
            message = f"API Error: {base_resp.get('status_msg', 'unknown error')}, Trace-Id: {trace_id}"
            error_cls = MinimaxAuthError if status_code == AUTH_ERROR_CODE else MinimaxAPIError
            raise error_cls(
                message,
                status_code=status_code,
                trace_id=trace_id,
                kind=match_terminal_kind(message),
            )

        return body
