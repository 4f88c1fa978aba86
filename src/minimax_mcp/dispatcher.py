"""Request dispatch: configuration, routing, validation and retries.

Every tool invocation from every transport goes through
``RequestDispatcher.dispatch``. Expected failures come back as
``ToolResult`` values; only errors classified as fatal are raised.
"""

import asyncio
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from pydantic import BaseModel, ValidationError

from minimax_mcp.config import ConfigStore, resolve
from minimax_mcp.const import (
    ERROR_API_HOST_REQUIRED,
    ERROR_API_KEY_REQUIRED,
    MAX_RETRY_ATTEMPTS,
    RETRY_BASE_DELAY,
)
from minimax_mcp.credentials import extract_fragment
from minimax_mcp.errors import InvariantViolation, Outcome, classify, remediation_for
from minimax_mcp.logging import get_logger, mask_api_key
from minimax_mcp.models.config import Config
from minimax_mcp.models.tool_result import ToolResult
from minimax_mcp.tools import ToolRegistry, ToolSpec

logger = get_logger("dispatcher")

Sleep = Callable[[float], Awaitable[None]]


def retry_delay(attempt: int, base_delay: float = RETRY_BASE_DELAY) -> float:
    """Delay before ``attempt`` (2 waits base_delay, 3 waits twice that)."""
    return base_delay * 2 ** (attempt - 2)


def _format_validation_error(tool_name: str, error: ValidationError) -> str:
    problems = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        problems.append(f"{location}: {item['msg']}")
    return f"Invalid arguments for {tool_name}: " + "; ".join(problems)


class RequestDispatcher:
    """Routes tool invocations to their handlers.

    Args:
        store: Holder of the server's baseline configuration.
        registry: Tool name to ToolSpec bindings.
        max_attempts: Attempt budget for retryable failures.
        base_delay: Seconds to wait before the second attempt; doubles after.
        sleep: Awaitable used for retry delays.
    """

    def __init__(
        self,
        store: ConfigStore,
        registry: ToolRegistry,
        *,
        max_attempts: int = MAX_RETRY_ATTEMPTS,
        base_delay: float = RETRY_BASE_DELAY,
        sleep: Sleep = asyncio.sleep,
    ):
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.store = store
        self.registry = registry
        self.max_attempts = max_attempts
        self.base_delay = base_delay
        self._sleep = sleep

    def resolve_config(self, metadata: Any = None) -> Config:
        """Per-invocation configuration: the baseline plus any request fragment."""
        baseline = self.store.snapshot
        if metadata is None:
            return baseline
        return resolve(extract_fragment(metadata), baseline)

    async def dispatch(
        self,
        tool_name: str,
        args: Mapping[str, Any] | None = None,
        metadata: Any = None,
    ) -> ToolResult:
        config = self.resolve_config(metadata)

        spec = self.registry.get(tool_name)

        # Local-only tools (playback) run without credentials
        if spec is None or spec.requires_credentials:
            if not config.api_key:
                return ToolResult.failure(ERROR_API_KEY_REQUIRED, "configuration")
            if not config.api_host:
                return ToolResult.failure(ERROR_API_HOST_REQUIRED, "configuration")

        if spec is None:
            logger.warning(f"Unknown tool: {tool_name}")
            return ToolResult.failure(f"Unknown tool: {tool_name}", "unknown_tool")

        try:
            parsed = spec.args_model.model_validate(dict(args or {}))
        except ValidationError as e:
            return ToolResult.failure(_format_validation_error(tool_name, e), "invalid_arguments")

        logger.info(f"Calling {tool_name} (api key: {mask_api_key(config.api_key)})")
        attempts = self.max_attempts if spec.retry else 1
        return await self._run(spec, parsed, config, attempts)

    async def _run(self, spec: ToolSpec, args: BaseModel, config: Config, max_attempts: int) -> ToolResult:
        last_error: Exception | None = None

        for attempt in range(1, max_attempts + 1):
            if attempt > 1:
                delay = retry_delay(attempt, self.base_delay)
                logger.info(f"Retrying {spec.name} in {delay:.1f}s (attempt {attempt}/{max_attempts})")
                await self._sleep(delay)

            try:
                text = await spec.handler(args, config)
            except Exception as e:
                classification = classify(e)

                if classification.outcome is Outcome.FATAL:
                    logger.error(f"Fatal error in {spec.name}: {e}")
                    raise

                if classification.outcome is Outcome.TERMINAL:
                    if classification.kind is None:
                        raise InvariantViolation(f"Terminal error without a kind from {spec.name}") from e
                    logger.warning(f"{spec.name} failed with terminal error: {classification.kind.value}")
                    return ToolResult.failure(
                        remediation_for(classification.kind),
                        "terminal",
                        kind=classification.kind.value,
                        attempts=attempt,
                    )

                last_error = e
                logger.warning(f"{spec.name} attempt {attempt}/{max_attempts} failed: {e}")
                continue

            return ToolResult.success(text, attempts=attempt)

        error_type = "exhausted" if max_attempts > 1 else "failed"
        return ToolResult.failure(
            f"Failed to {spec.operation}: {last_error}",
            error_type,
            attempts=max_attempts,
        )
