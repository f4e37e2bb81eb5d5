"""
CLI Configuration

Configuration loading for the foundation CLI.
Supports configuration files (JSON or YAML) and environment variables.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.config.runtime import RuntimeConfig


DEFAULT_CONFIG_PATHS = (
    Path("foundation.json"),
    Path(".foundation.json"),
    Path("foundation.yaml"),
)


def load_config_from_file(path: Path) -> RuntimeConfig:
    """Load configuration from a JSON or YAML file, chosen by extension."""
    if path.suffix.lower() in (".yaml", ".yml"):
        return RuntimeConfig.from_yaml(path)
    return RuntimeConfig.from_json_file(path)


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings.

    Args:
        config_path: Optional path to config file. When omitted, the
            default locations are searched, then ~/.config/foundation/config.json.

    Returns:
        Merged configuration
    """
    config = RuntimeConfig()

    if config_path is not None:
        config = load_config_from_file(config_path)
    else:
        candidates = [Path.cwd() / p for p in DEFAULT_CONFIG_PATHS]
        candidates.append(Path.home() / ".config" / "foundation" / "config.json")
        for candidate in candidates:
            if candidate.exists():
                config = load_config_from_file(candidate)
                break

    return config.with_env_overrides()


def get_default_config_template() -> str:
    """Get a template configuration file content."""
    template = {
        "http": {
            "timeout": 30.0,
            "user_agent": None,
        },
        "upstream": {
            "base_url": "https://api.example.com",
            "api_token": None,
        },
        "log_level": "INFO",
    }
    return json.dumps(template, indent=2) + "\n"
