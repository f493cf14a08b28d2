"""
Configuration loading and validation for lambda-relay.

Loads relay.toml files and validates settings using Pydantic. Environment
variables (LAMBDA_RELAY_*) override values from the file.
"""

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

ENV_PREFIX = "LAMBDA_RELAY_"


class EndpointConfig(BaseModel):
    """Connection settings for the local endpoint events are forwarded to."""

    host: str = "localhost"
    port: int = Field(default=8080, ge=1, le=65535)
    path: str = "/"
    method: Literal["GET", "POST"] = "POST"
    headers: list[str] = Field(default_factory=list)  # "Name: Value" entries
    timeout_seconds: float | None = Field(default=None, gt=0)  # None = transport default
    verbose: bool = False

    @field_validator("method", mode="before")
    @classmethod
    def normalize_method(cls, v: str) -> str:
        """Accept lowercase method names."""
        if isinstance(v, str):
            return v.upper()
        return v

    @field_validator("path")
    @classmethod
    def ensure_leading_slash(cls, v: str) -> str:
        """Paths are always absolute."""
        if not v.startswith("/"):
            return f"/{v}"
        return v

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}{self.path}"

    def parsed_headers(self) -> dict[str, str]:
        """
        Parse "Name: Value" header entries.

        Entries without exactly one ':' separator are skipped.

        Returns:
            Dict mapping header name to value
        """
        return parse_headers(self.headers)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_file: Path | None = None


class RelayConfig(BaseModel):
    """Complete relay configuration."""

    endpoint: EndpointConfig = Field(default_factory=EndpointConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def parse_headers(entries: list[str]) -> dict[str, str]:
    """
    Turn "Name: Value" strings into a header dict.

    Args:
        entries: Raw header strings

    Returns:
        Dict mapping header name to value
    """
    headers: dict[str, str] = {}
    for entry in entries:
        parts = entry.split(":")
        if len(parts) != 2:
            continue
        name, value = parts[0].strip(), parts[1].strip()
        if name:
            headers[name] = value
    return headers


def _env_overrides(environ: Mapping[str, str]) -> dict[str, object]:
    """Collect endpoint overrides from LAMBDA_RELAY_* variables."""
    overrides: dict[str, object] = {}

    for field in ("host", "port", "path", "method"):
        value = environ.get(f"{ENV_PREFIX}{field.upper()}")
        if value:
            overrides[field] = value

    timeout = environ.get(f"{ENV_PREFIX}TIMEOUT")
    if timeout:
        overrides["timeout_seconds"] = timeout

    verbose = environ.get(f"{ENV_PREFIX}VERBOSE")
    if verbose:
        overrides["verbose"] = verbose.strip().lower() in ("1", "true", "yes", "on")

    return overrides


def apply_env_overrides(
    config: RelayConfig,
    environ: Mapping[str, str] | None = None,
) -> RelayConfig:
    """
    Apply LAMBDA_RELAY_* environment variables on top of a config.

    Args:
        config: Base configuration
        environ: Environment mapping (defaults to os.environ)

    Returns:
        New RelayConfig with overrides applied

    Raises:
        ValueError: If an override fails validation
    """
    overrides = _env_overrides(os.environ if environ is None else environ)
    if not overrides:
        return config

    endpoint_data = config.endpoint.model_dump()
    endpoint_data.update(overrides)

    try:
        endpoint = EndpointConfig(**endpoint_data)
    except Exception as e:
        raise ValueError(f"Invalid environment override: {e}") from e

    return config.model_copy(update={"endpoint": endpoint})


def load_config(config_path: Path, environ: Mapping[str, str] | None = None) -> RelayConfig:
    """
    Load relay configuration from TOML file.

    Args:
        config_path: Path to relay.toml
        environ: Environment mapping for overrides (defaults to os.environ)

    Returns:
        Validated RelayConfig

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValueError: If config is invalid
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "rb") as f:
        config_data = tomllib.load(f)

    try:
        config = RelayConfig(**config_data)
    except Exception as e:
        raise ValueError(f"Invalid configuration: {e}") from e

    return apply_env_overrides(config, environ)


def default_config(environ: Mapping[str, str] | None = None) -> RelayConfig:
    """Defaults (localhost:8080, POST /) with environment overrides applied."""
    return apply_env_overrides(RelayConfig(), environ)
