"""Shared pytest fixtures."""

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from minimax_mcp.api.client import MinimaxClient
from minimax_mcp.config import ConfigStore
from minimax_mcp.dispatcher import RequestDispatcher
from minimax_mcp.models import Config, ListVoicesArgs, PlayAudioArgs, QueryVideoArgs, TextToAudioArgs
from minimax_mcp.tools import ToolRegistry, ToolSpec


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    """Keep the developer's MiniMax settings and config file out of tests."""
    for name in (
        "MINIMAX_API_KEY",
        "MINIMAX_API_HOST",
        "MINIMAX_MCP_BASE_PATH",
        "MINIMAX_API_RESOURCE_MODE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MINIMAX_CONFIG_PATH", str(tmp_path / "absent-config.json"))


@pytest.fixture
def baseline():
    """A complete baseline configuration."""
    return Config(api_key="base-key-1234567890", api_host="https://api.minimax.chat")


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def make_spec():
    """Build a ToolSpec around an AsyncMock handler."""

    def _make(
        name: str = "text_to_audio",
        handler: Any = None,
        args_model: Any = TextToAudioArgs,
        retry: bool = True,
        requires_credentials: bool = True,
        operation: str = "generate speech",
    ) -> ToolSpec:
        return ToolSpec(
            name=name,
            description=f"{name} tool",
            args_model=args_model,
            handler=handler if handler is not None else AsyncMock(return_value="ok"),
            operation=operation,
            retry=retry,
            requires_credentials=requires_credentials,
        )

    return _make


@pytest.fixture
def fake_registry(make_spec):
    """Registry with mock handlers for a retried tool and both exempt tools."""
    return ToolRegistry(
        [
            make_spec("text_to_audio"),
            make_spec("list_voices", args_model=ListVoicesArgs, operation="list voices"),
            make_spec(
                "query_video_generation",
                args_model=QueryVideoArgs,
                retry=False,
                operation="query video generation",
            ),
            make_spec(
                "play_audio",
                args_model=PlayAudioArgs,
                retry=False,
                requires_credentials=False,
                operation="play audio",
            ),
        ]
    )


@pytest.fixture
def dispatcher(baseline, fake_registry, sleep):
    return RequestDispatcher(ConfigStore(baseline), fake_registry, sleep=sleep)


@pytest.fixture
def mock_api() -> Callable[..., Callable[[Config], MinimaxClient]]:
    """Client factory whose requests are answered by ``handler``."""

    def _factory(handler: Callable[[httpx.Request], httpx.Response]) -> Callable[[Config], MinimaxClient]:
        transport = httpx.MockTransport(handler)

        def create(config: Config) -> MinimaxClient:
            return MinimaxClient(config, transport=transport)

        return create

    return _factory
