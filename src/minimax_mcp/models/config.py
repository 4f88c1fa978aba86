"""Configuration models.

``Config`` is the effective, immutable configuration used for one invocation
(or as a server baseline). ``ConfigFragment`` is a partial overlay produced
by a single source (file, environment, explicit override or request
metadata); only fields that were explicitly set to a non-``None`` value take
part in a merge.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from minimax_mcp.const import (
    DEFAULT_API_HOST,
    DEFAULT_SERVER_ENDPOINT,
    DEFAULT_SERVER_PORT,
    RESOURCE_MODE_URL,
    TRANSPORT_MODE_STDIO,
)

TransportMode = Literal["stdio", "rest"]


class ServerOptions(BaseModel):
    """Listener settings, only meaningful for the standalone REST form."""

    model_config = ConfigDict(frozen=True)

    mode: TransportMode = TRANSPORT_MODE_STDIO
    port: int = DEFAULT_SERVER_PORT
    endpoint: str = DEFAULT_SERVER_ENDPOINT


class Config(BaseModel):
    """Effective configuration.

    Attributes:
        api_key: MiniMax API key. Empty by default; never fabricated.
        base_path: Root directory for locally saved output files.
        api_host: MiniMax API host, e.g. ``https://api.minimax.chat``.
        resource_mode: ``"url"`` returns remote URLs, ``"local"`` saves files.
        server: Listener options for the REST form.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    api_key: str = ""
    base_path: str | None = None
    api_host: str = DEFAULT_API_HOST
    resource_mode: str = RESOURCE_MODE_URL
    server: ServerOptions = Field(default_factory=ServerOptions)

    def missing_fields(self) -> list[str]:
        """Names of mandatory fields that are empty."""
        missing: list[str] = []
        if not self.api_key:
            missing.append("api_key")
        if not self.api_host:
            missing.append("api_host")
        return missing


class ServerFragment(BaseModel):
    model_config = ConfigDict(extra="ignore")

    mode: TransportMode | None = None
    port: int | None = None
    endpoint: str | None = None


class ConfigFragment(BaseModel):
    """A partial configuration contributed by one source."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    api_key: str | None = None
    base_path: str | None = None
    api_host: str | None = None
    resource_mode: str | None = None
    server: ServerFragment | None = None

    def defined(self) -> dict[str, Any]:
        """Fields explicitly set to a non-None value, ``server`` included as a dict."""
        return self.model_dump(exclude_unset=True, exclude_none=True)

    def is_empty(self) -> bool:
        return not self.defined()
