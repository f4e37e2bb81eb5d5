"""
Runtime Configuration

Central configuration for the HTTP client, the upstream API used by the
records controller, and logging.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.schemas.errors import ConfigurationException

load_dotenv()


@dataclass
class HttpConfig:
    """Configuration for HTTP client."""
    timeout: float = 30.0
    user_agent: Optional[str] = None


@dataclass
class UpstreamConfig:
    """Configuration for the upstream API the records controller forwards to."""
    base_url: Optional[str] = None
    api_token: Optional[str] = None

    @property
    def configured(self) -> bool:
        return bool(self.base_url)


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    http: HttpConfig = field(default_factory=HttpConfig)
    upstream: UpstreamConfig = field(default_factory=UpstreamConfig)
    log_level: str = "INFO"
    extra: dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - FOUNDATION_HTTP_TIMEOUT: HTTP timeout in seconds
        - FOUNDATION_HTTP_USER_AGENT: User-Agent header for outgoing calls
        - FOUNDATION_UPSTREAM_URL: Base URL of the upstream records API
        - FOUNDATION_UPSTREAM_TOKEN: Bearer token for the upstream API
        - FOUNDATION_LOG_LEVEL: Log level
        """
        overrides: dict[str, Any] = {}

        if os.getenv("FOUNDATION_HTTP_TIMEOUT"):
            raw = os.getenv("FOUNDATION_HTTP_TIMEOUT", "")
            try:
                overrides.setdefault("http", {})["timeout"] = float(raw)
            except ValueError as e:
                raise ConfigurationException(
                    f"FOUNDATION_HTTP_TIMEOUT must be a number, got {raw!r}"
                ) from e
        if os.getenv("FOUNDATION_HTTP_USER_AGENT"):
            overrides.setdefault("http", {})["user_agent"] = os.getenv("FOUNDATION_HTTP_USER_AGENT")

        if os.getenv("FOUNDATION_UPSTREAM_URL"):
            overrides.setdefault("upstream", {})["base_url"] = os.getenv("FOUNDATION_UPSTREAM_URL")
        if os.getenv("FOUNDATION_UPSTREAM_TOKEN"):
            overrides.setdefault("upstream", {})["api_token"] = os.getenv("FOUNDATION_UPSTREAM_TOKEN")

        if os.getenv("FOUNDATION_LOG_LEVEL"):
            overrides["log_level"] = os.getenv("FOUNDATION_LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls.from_dict(data or {})

    @classmethod
    def from_json_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        if not isinstance(data, dict):
            raise ConfigurationException(
                f"Configuration must be a mapping, got {type(data).__name__}"
            )
        http_data = data.get("http") or {}
        upstream_data = data.get("upstream") or {}

        try:
            http = HttpConfig(**http_data)
            upstream = UpstreamConfig(**upstream_data)
        except TypeError as e:
            raise ConfigurationException(f"Invalid configuration: {e}") from e

        return cls(
            http=http,
            upstream=upstream,
            log_level=data.get("log_level", "INFO"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        new_config = copy.deepcopy(self)

        for key, value in overrides.get("http", {}).items():
            setattr(new_config.http, key, value)
        for key, value in overrides.get("upstream", {}).items():
            setattr(new_config.upstream, key, value)
        if "log_level" in overrides:
            new_config.log_level = overrides["log_level"]

        return new_config

    def to_dict(self, *, redact: bool = True) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        token = self.upstream.api_token
        if redact and token:
            token = "***"
        return {
            "http": {
                "timeout": self.http.timeout,
                "user_agent": self.http.user_agent,
            },
            "upstream": {
                "base_url": self.upstream.base_url,
                "api_token": token,
            },
            "log_level": self.log_level,
            "extra": self.extra,
        }


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: Optional[RuntimeConfig]) -> None:
    """Set (or reset, with None) the default runtime configuration."""
    global _default_config
    _default_config = config
