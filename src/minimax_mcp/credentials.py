"""Extraction of per-request credentials from protocol metadata.

Requests to the REST listener may carry an auth fragment under
``params._meta.auth`` (preferred) or ``params.meta.auth``. Only the first
present path is used.
"""

from collections.abc import Mapping
from typing import Any

from minimax_mcp.config import coerce_fragment
from minimax_mcp.logging import get_logger
from minimax_mcp.models.config import ConfigFragment

logger = get_logger("credentials")

META_PATHS = (("_meta", "auth"), ("meta", "auth"))

# Fragment field -> accepted keys, in priority order
AUTH_KEYS: dict[str, tuple[str, ...]] = {
    "api_key": ("api_key", "apiKey"),
    "api_host": ("api_host",),
    "base_path": ("base_path",),
    "resource_mode": ("resource_mode",),
}


def _lookup(container: Any, key: str) -> Any:
    if container is None:
        return None
    if isinstance(container, Mapping):
        return container.get(key)
    value = getattr(container, key, None)
    if value is None:
        # pydantic models keep unknown keys in model_extra
        extra = getattr(container, "model_extra", None)
        if isinstance(extra, Mapping):
            value = extra.get(key)
    return value


def _find_auth(metadata: Any) -> Any:
    for path in META_PATHS:
        node = metadata
        for key in path:
            node = _lookup(node, key)
        if node is not None:
            return node
    return None


def extract_fragment(metadata: Any) -> ConfigFragment:
    """Build a ConfigFragment from an invocation envelope.

    Returns an empty fragment when no auth block is present or anything about
    it is malformed.
    """
    try:
        auth = _find_auth(metadata)
        if auth is None:
            return ConfigFragment()

        values: dict[str, str] = {}
        for field, keys in AUTH_KEYS.items():
            for key in keys:
                value = _lookup(auth, key)
                if isinstance(value, str):
                    values[field] = value
                    # An empty spelling gives way to a later non-empty one
                    if value:
                        break
        return coerce_fragment(values, source="request")
    except Exception as e:
        logger.debug(f"Could not extract request credentials: {e}")
        return ConfigFragment()
