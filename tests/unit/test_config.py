"""
Tests for configuration loading.

Covers:
- Endpoint defaults
- Field validation and normalization
- Header parsing
- TOML loading
- LAMBDA_RELAY_* environment overrides
"""

from pathlib import Path
from types import MappingProxyType

import pytest
from pydantic import ValidationError

from lambda_relay.config import (
    EndpointConfig,
    RelayConfig,
    apply_env_overrides,
    default_config,
    load_config,
    parse_headers,
)


class TestEndpointConfig:
    """Defaults and validation for EndpointConfig."""

    def test_defaults(self) -> None:
        config = EndpointConfig()
        assert config.host == "localhost"
        assert config.port == 8080
        assert config.path == "/"
        assert config.method == "POST"
        assert config.timeout_seconds is None
        assert config.verbose is False
        assert config.url == "http://localhost:8080/"

    def test_method_is_uppercased(self) -> None:
        assert EndpointConfig(method="get").method == "GET"

    def test_unsupported_method_rejected(self) -> None:
        with pytest.raises(ValidationError):
            EndpointConfig(method="DELETE")

    def test_path_gets_leading_slash(self) -> None:
        assert EndpointConfig(path="events").path == "/events"

    def test_port_range(self) -> None:
        with pytest.raises(ValidationError):
            EndpointConfig(port=0)
        with pytest.raises(ValidationError):
            EndpointConfig(port=70000)

    def test_timeout_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            EndpointConfig(timeout_seconds=0)


class TestParseHeaders:
    """Header entries are 'Name: Value' strings."""

    def test_valid_entries(self) -> None:
        assert parse_headers(["X-A: 1", "X-B:two"]) == {"X-A": "1", "X-B": "two"}

    def test_entries_without_single_separator_are_skipped(self) -> None:
        assert parse_headers(["no-separator", "X-Url: http://host"]) == {}

    def test_empty_name_skipped(self) -> None:
        assert parse_headers([": value"]) == {}

    def test_endpoint_parsed_headers(self) -> None:
        config = EndpointConfig(headers=["X-Trace: abc"])
        assert config.parsed_headers() == {"X-Trace": "abc"}


class TestLoadConfig:
    """TOML loading."""

    def test_load_full_file(self, tmp_path: Path) -> None:
        path = tmp_path / "relay.toml"
        path.write_text(
            """
[endpoint]
host = "127.0.0.1"
port = 9000
path = "/events"
method = "post"
headers = ["X-Trace: abc"]
timeout_seconds = 2.5
verbose = true

[logging]
level = "DEBUG"
log_file = "logs/relay.log"
""",
            encoding="utf-8",
        )

        config = load_config(path, environ={})

        assert config.endpoint.url == "http://127.0.0.1:9000/events"
        assert config.endpoint.method == "POST"
        assert config.endpoint.headers == ["X-Trace: abc"]
        assert config.endpoint.timeout_seconds == 2.5
        assert config.endpoint.verbose is True
        assert config.logging.level == "DEBUG"
        assert config.logging.log_file == Path("logs/relay.log")

    def test_empty_file_uses_defaults(self, tmp_path: Path) -> None:
        path = tmp_path / "relay.toml"
        path.write_text("", encoding="utf-8")

        config = load_config(path, environ={})

        assert config.endpoint == EndpointConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_invalid_values(self, tmp_path: Path) -> None:
        path = tmp_path / "relay.toml"
        path.write_text('[endpoint]\nmethod = "PATCH"\n', encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid configuration"):
            load_config(path, environ={})

    def test_env_overrides_file(self, tmp_path: Path) -> None:
        path = tmp_path / "relay.toml"
        path.write_text('[endpoint]\nport = 9000\n', encoding="utf-8")

        config = load_config(path, environ={"LAMBDA_RELAY_PORT": "9100"})

        assert config.endpoint.port == 9100


class TestEnvOverrides:
    """LAMBDA_RELAY_* variables."""

    def test_no_overrides_returns_same_config(self) -> None:
        config = RelayConfig()
        assert apply_env_overrides(config, environ={}) is config

    def test_all_overrides(self) -> None:
        config = default_config(
            environ={
                "LAMBDA_RELAY_HOST": "10.0.0.5",
                "LAMBDA_RELAY_PORT": "8181",
                "LAMBDA_RELAY_PATH": "hook",
                "LAMBDA_RELAY_METHOD": "get",
                "LAMBDA_RELAY_TIMEOUT": "3",
                "LAMBDA_RELAY_VERBOSE": "1",
            }
        )

        assert config.endpoint.url == "http://10.0.0.5:8181/hook"
        assert config.endpoint.method == "GET"
        assert config.endpoint.timeout_seconds == 3.0
        assert config.endpoint.verbose is True

    def test_verbose_false_values(self) -> None:
        config = default_config(environ={"LAMBDA_RELAY_VERBOSE": "0"})
        assert config.endpoint.verbose is False

    def test_invalid_override(self) -> None:
        with pytest.raises(ValueError, match="Invalid environment override"):
            default_config(environ={"LAMBDA_RELAY_PORT": "not-a-port"})

    def test_reads_os_environ_by_default(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("LAMBDA_RELAY_PORT", "9200")
        assert default_config().endpoint.port == 9200

    def test_accepts_read_only_mapping(self) -> None:
        environ = MappingProxyType({"LAMBDA_RELAY_HOST": "relay.internal"})
        assert default_config(environ=environ).endpoint.host == "relay.internal"
