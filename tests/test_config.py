"""Tests for configuration resolution."""

import json

import pytest
from pydantic import ValidationError

from minimax_mcp.config import (
    ConfigStore,
    coerce_fragment,
    get_config_path,
    load_baseline,
    load_env_config,
    load_file_config,
    merge_config,
    resolve,
)
from minimax_mcp.const import DEFAULT_API_HOST
from minimax_mcp.models import Config, ConfigFragment


@pytest.fixture
def config_file(tmp_path):
    """Write a config file and return its path."""

    def _write(data) -> str:
        path = tmp_path / "minimax-config.json"
        path.write_text(data if isinstance(data, str) else json.dumps(data))
        return str(path)

    return _write


class TestDefaults:
    def test_defaults_only(self):
        """With no sources, the compiled-in defaults apply."""
        config = load_baseline(environ={})

        assert config.api_key == ""
        assert config.api_host == DEFAULT_API_HOST
        assert config.base_path is None
        assert config.resource_mode == "url"
        assert config.server.mode == "stdio"
        assert config.server.port == 3000
        assert config.server.endpoint == "/rest"

    def test_missing_fields(self):
        assert Config().missing_fields() == ["api_key"]
        assert Config(api_key="k", api_host="").missing_fields() == ["api_host"]
        assert Config(api_key="k").missing_fields() == []

    def test_config_is_frozen(self):
        config = Config(api_key="k")
        with pytest.raises(ValidationError):
            config.api_key = "other"


class TestPrecedence:
    """Tests for the defaults < file < env < explicit < request ordering."""

    def test_file_overrides_defaults(self, config_file):
        path = config_file({"apiKey": "file-key", "resourceMode": "local"})

        config = load_baseline(config_path=path, environ={})

        assert config.api_key == "file-key"
        assert config.resource_mode == "local"
        assert config.api_host == DEFAULT_API_HOST

    def test_env_overrides_file(self, config_file):
        path = config_file({"apiKey": "file-key", "apiHost": "https://file.example"})
        environ = {"MINIMAX_API_KEY": "env-key"}

        config = load_baseline(config_path=path, environ=environ)

        assert config.api_key == "env-key"
        assert config.api_host == "https://file.example"

    def test_explicit_overrides_env(self):
        environ = {"MINIMAX_API_KEY": "env-key", "MINIMAX_API_HOST": "https://env.example"}

        config = load_baseline({"api_key": "explicit-key"}, environ=environ)

        assert config.api_key == "explicit-key"
        assert config.api_host == "https://env.example"

    def test_request_fragment_overrides_everything(self, config_file):
        path = config_file({"apiKey": "file-key"})
        baseline = load_baseline({"api_key": "explicit-key"}, config_path=path, environ={})

        config = resolve({"api_key": "K2"}, baseline)

        assert config.api_key == "K2"

    def test_env_names(self):
        environ = {
            "MINIMAX_API_KEY": "k",
            "MINIMAX_API_HOST": "https://h",
            "MINIMAX_MCP_BASE_PATH": "/tmp/out",
            "MINIMAX_API_RESOURCE_MODE": "local",
        }

        fragment = load_env_config(environ)

        assert fragment.defined() == {
            "api_key": "k",
            "api_host": "https://h",
            "base_path": "/tmp/out",
            "resource_mode": "local",
        }

    def test_empty_string_counts_as_defined(self):
        """An explicitly empty value still replaces the lower layer."""
        baseline = Config(api_key="base")

        config = resolve({"api_key": ""}, baseline)

        assert config.api_key == ""

    def test_none_is_not_defined(self):
        baseline = Config(api_key="base")

        config = resolve({"api_key": None}, baseline)

        assert config.api_key == "base"


class TestServerMerge:
    """``server`` is merged key by key; other fields are replaced wholesale."""

    def test_partial_server_keeps_lower_keys(self, config_file):
        path = config_file({"server": {"port": 8080, "endpoint": "/mcp"}})

        config = load_baseline({"server": {"mode": "rest"}}, config_path=path, environ={})

        assert config.server.mode == "rest"
        assert config.server.port == 8080
        assert config.server.endpoint == "/mcp"

    def test_later_server_key_wins(self):
        base = Config()
        merged = merge_config(
            base,
            ConfigFragment.model_validate({"server": {"port": 4000}}),
            ConfigFragment.model_validate({"server": {"port": 5000}}),
        )

        assert merged.server.port == 5000
        assert merged.server.endpoint == "/rest"

    def test_merge_does_not_mutate_base(self):
        base = Config(api_key="base")

        merge_config(base, ConfigFragment(api_key="other"))

        assert base.api_key == "base"


class TestFileLoading:
    """Tests for load_file_config."""

    def test_absent_file_contributes_nothing(self, tmp_path):
        fragment = load_file_config(tmp_path / "nope.json")
        assert fragment.is_empty()

    def test_invalid_json_contributes_nothing(self, config_file):
        path = config_file("not valid json {")
        assert load_file_config(path).is_empty()

    def test_non_object_contributes_nothing(self, config_file):
        path = config_file([1, 2, 3])
        assert load_file_config(path).is_empty()

    def test_invalid_values_contribute_nothing(self, config_file):
        path = config_file({"server": {"port": "not-a-port"}})
        assert load_file_config(path).is_empty()

    def test_unknown_keys_ignored(self, config_file):
        path = config_file({"apiKey": "k", "somethingElse": True})
        assert load_file_config(path).defined() == {"api_key": "k"}

    def test_path_from_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("MINIMAX_CONFIG_PATH", str(tmp_path / "custom.json"))
        assert get_config_path() == tmp_path / "custom.json"

    def test_explicit_path_wins_over_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("MINIMAX_CONFIG_PATH", str(tmp_path / "custom.json"))
        assert get_config_path(tmp_path / "explicit.json") == tmp_path / "explicit.json"

    def test_default_path(self, monkeypatch):
        monkeypatch.delenv("MINIMAX_CONFIG_PATH", raising=False)
        assert str(get_config_path()) == "minimax-config.json"


class TestIdempotence:
    """Resolving the same overlay twice gives the same configuration."""

    @pytest.mark.parametrize(
        "fragment",
        [
            {"apiKey": "B", "server": {"mode": "rest"}},
            {"api_host": "https://api.minimaxi.com", "server": {"port": 9000}},
            {"resourceMode": "local", "basePath": ""},
            {},
        ],
    )
    def test_resolve_twice(self, baseline, fragment):
        once = resolve(fragment, baseline)

        assert resolve(fragment, once) == once

    def test_merge_twice(self, baseline):
        fragment = coerce_fragment({"apiKey": "B", "server": {"mode": "rest"}})
        once = merge_config(baseline, fragment)

        assert merge_config(once, fragment) == once
        assert merge_config(baseline, fragment, fragment) == once


class TestCoerceFragment:
    def test_none(self):
        assert coerce_fragment(None).is_empty()

    def test_passthrough(self):
        fragment = ConfigFragment(api_key="k")
        assert coerce_fragment(fragment) is fragment

    def test_camel_and_snake_case(self):
        assert coerce_fragment({"apiKey": "a"}).api_key == "a"
        assert coerce_fragment({"api_key": "b"}).api_key == "b"

    def test_invalid_mode_ignored(self):
        assert coerce_fragment({"server": {"mode": "sse"}}).is_empty()


class TestConfigStore:
    """Tests for ConfigStore snapshots."""

    def test_update_publishes_new_snapshot(self, baseline):
        store = ConfigStore(baseline)
        before = store.snapshot

        after = store.update({"api_host": "https://api.minimaxi.com"})

        assert store.snapshot is after
        assert after.api_host == "https://api.minimaxi.com"
        assert after.api_key == baseline.api_key
        # Earlier readers keep their snapshot
        assert before.api_host == "https://api.minimax.chat"

    def test_pinned_fields_survive_updates(self, baseline):
        store = ConfigStore(baseline, pinned={"server": {"mode": "rest"}})

        store.update({"server": {"mode": "stdio", "port": 9000}})

        assert store.snapshot.server.mode == "rest"
        assert store.snapshot.server.port == 9000
