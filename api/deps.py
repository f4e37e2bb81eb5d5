"""
API Dependencies

Dependency injection for the API.
Provides the runtime config and the upstream HTTP client.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import Depends

from api.errors import NotConfiguredError
from core.config.runtime import RuntimeConfig
from core.http import HttpClient
from core.support import HeaderBag

logger = logging.getLogger(__name__)


def _load_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig from config file, then overlay environment variables.

    Search order for config file:
      1. ./foundation.json
      2. ./.foundation.json
      3. ~/.config/foundation/config.json

    Environment variables ALWAYS override config file values.
    The .env file is loaded automatically by core.config.runtime on import.
    """
    search_paths = [
        Path.cwd() / "foundation.json",
        Path.cwd() / ".foundation.json",
        Path.home() / ".config" / "foundation" / "config.json",
    ]

    config: RuntimeConfig | None = None

    for path in search_paths:
        if path.exists():
            try:
                config = RuntimeConfig.from_json_file(path)
                logger.info(f"Loaded config from {path}")
                break
            except Exception as e:
                logger.warning(f"Failed to parse {path}: {e}")

    if config is None:
        config = RuntimeConfig()

    return config.with_env_overrides()


def get_runtime_config() -> RuntimeConfig:
    return _load_runtime_config()


def get_upstream_base_url(config: RuntimeConfig = Depends(get_runtime_config)) -> str:
    """Base URL of the upstream records API, without a trailing slash."""
    if not config.upstream.configured:
        raise NotConfiguredError(
            "Upstream API is not configured on this server "
            "(set FOUNDATION_UPSTREAM_URL or upstream.base_url)"
        )
    return config.upstream.base_url.rstrip("/")


def build_upstream_headers(config: RuntimeConfig) -> HeaderBag:
    headers = HeaderBag({
        "Accept": "application/json",
        "Content-Type": "application/json",
    })
    if config.upstream.api_token:
        headers.set("Authorization", f"Bearer {config.upstream.api_token}")
    if config.http.user_agent:
        headers.set("User-Agent", config.http.user_agent)
    return headers


def get_http_client(config: RuntimeConfig = Depends(get_runtime_config)) -> HttpClient:
    """Create an HttpClient for the upstream API. One client per request."""
    return HttpClient.with_headers(
        build_upstream_headers(config),
        timeout=config.http.timeout,
    )
