"""
Runtime Configuration Module

Provides configuration loading and management.
"""

from .runtime import (
    HttpConfig,
    RuntimeConfig,
    UpstreamConfig,
    get_default_config,
    set_default_config,
)

__all__ = [
    "HttpConfig",
    "RuntimeConfig",
    "UpstreamConfig",
    "get_default_config",
    "set_default_config",
]
