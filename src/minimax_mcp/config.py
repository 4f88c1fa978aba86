"""Configuration resolution.

Sources, lowest to highest precedence:

1. compiled-in defaults (``Config()``)
2. the JSON config file (``./minimax-config.json`` unless overridden)
3. environment variables
4. an explicit override (constructor argument or CLI options)
5. a per-request fragment extracted from protocol metadata

Top-level fields are replaced wholesale by any higher source that defines
them; ``server`` is merged key by key. Resolution never raises.
"""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from minimax_mcp.const import (
    DEFAULT_CONFIG_PATH,
    ENV_CONFIG_PATH,
    ENV_MINIMAX_API_HOST,
    ENV_MINIMAX_API_KEY,
    ENV_MINIMAX_MCP_BASE_PATH,
    ENV_RESOURCE_MODE,
)
from minimax_mcp.logging import get_logger
from minimax_mcp.models.config import Config, ConfigFragment

logger = get_logger("config")

FragmentLike = ConfigFragment | Mapping[str, Any] | None

ENV_FIELD_MAP = {
    ENV_MINIMAX_API_KEY: "api_key",
    ENV_MINIMAX_API_HOST: "api_host",
    ENV_MINIMAX_MCP_BASE_PATH: "base_path",
    ENV_RESOURCE_MODE: "resource_mode",
}


def coerce_fragment(value: FragmentLike, source: str = "explicit") -> ConfigFragment:
    """Turn a mapping (or None) into a ConfigFragment.

    Invalid input contributes nothing rather than raising.
    """
    if value is None:
        return ConfigFragment()
    if isinstance(value, ConfigFragment):
        return value
    try:
        return ConfigFragment.model_validate(dict(value))
    except (ValidationError, TypeError, ValueError) as e:
        logger.warning(f"Ignoring invalid {source} configuration: {e}")
        return ConfigFragment()


def get_config_path(config_path: str | os.PathLike[str] | None = None) -> Path:
    """Explicit path, then ``MINIMAX_CONFIG_PATH``, then ``./minimax-config.json``."""
    if config_path:
        return Path(config_path)
    return Path(os.getenv(ENV_CONFIG_PATH) or DEFAULT_CONFIG_PATH)


def load_file_config(config_path: str | os.PathLike[str] | None = None) -> ConfigFragment:
    path = get_config_path(config_path)
    if not path.is_file():
        logger.debug(f"No config file at {path}")
        return ConfigFragment()

    try:
        with path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read config file {path}: {e}")
        return ConfigFragment()

    if not isinstance(raw, dict):
        logger.warning(f"Config file {path} does not contain a JSON object")
        return ConfigFragment()

    return coerce_fragment(raw, source=f"file ({path})")


def load_env_config(environ: Mapping[str, str] | None = None) -> ConfigFragment:
    environ = os.environ if environ is None else environ
    values = {
        field: environ[name] for name, field in ENV_FIELD_MAP.items() if name in environ
    }
    return coerce_fragment(values, source="environment")


def merge_config(base: Config, *fragments: ConfigFragment) -> Config:
    """Apply fragments on top of ``base`` in order, returning a new Config."""
    data = base.model_dump()
    for fragment in fragments:
        overrides = fragment.defined()
        server = overrides.pop("server", None)
        data.update(overrides)
        if server:
            data["server"] = {**data["server"], **server}
    return Config.model_validate(data)


def load_baseline(
    explicit: FragmentLike = None,
    *,
    config_path: str | os.PathLike[str] | None = None,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Defaults, file, environment and explicit layers merged once."""
    return merge_config(
        Config(),
        load_file_config(config_path),
        load_env_config(environ),
        coerce_fragment(explicit),
    )


def resolve(explicit: FragmentLike = None, baseline: Config | None = None) -> Config:
    """Resolve the effective configuration.

    Args:
        explicit: Highest-priority overlay (an explicit override or a
            request fragment).
        baseline: Already-resolved lower layers. Loaded from defaults, file
            and environment when omitted.

    Returns:
        A new frozen Config. Mandatory fields may be empty; callers validate
        them at the point of use.
    """
    if baseline is None:
        baseline = load_baseline()
    return merge_config(baseline, coerce_fragment(explicit))


class ConfigStore:
    """Holds the server's baseline configuration.

    Readers take ``snapshot`` and keep using that object; ``update`` publishes
    a new frozen Config instead of mutating the current one, so invocations
    already in flight are unaffected.
    """

    def __init__(self, baseline: Config, pinned: FragmentLike = None):
        self._pinned = coerce_fragment(pinned, source="pinned")
        self._snapshot = merge_config(baseline, self._pinned)

    @property
    def snapshot(self) -> Config:
        return self._snapshot

    def update(self, fragment: FragmentLike) -> Config:
        new_config = merge_config(self._snapshot, coerce_fragment(fragment), self._pinned)
        self._snapshot = new_config
        logger.info("Configuration updated")
        return new_config
