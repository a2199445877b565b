"""
Configuration loader for qaskills.

Loads and merges configuration from multiple sources:
1. Default values
2. Global config (~/.qaskills/config.yaml)
3. Environment variables (QASKILLS_*)
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from qaskills.config.merger import deep_merge, set_nested_value
from qaskills.config.schema import Config
from qaskills.storage.paths import get_global_config_path

logger = logging.getLogger(__name__)

ENV_PREFIX = "QASKILLS_"

# Variables with their own meaning, never mapped onto config keys
_RESERVED_ENV = {"QASKILLS_HOME", "QASKILLS_TELEMETRY"}

# Short aliases kept for compatibility with the JavaScript CLI
_ENV_ALIASES = {"QASKILLS_API_URL": "registry.url"}


class ConfigurationError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed configuration dictionary (empty if the file does not exist).

    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    try:
        with open(path, encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except FileNotFoundError:
        return {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(f"{path} must contain a YAML mapping")
    return content


def _resolve_env_key(config: dict[str, Any], parts: list[str]) -> str | None:
    """
    Map underscore-separated env name parts onto an existing dotted key.

    Keys may themselves contain underscores (``max_lines``), so at each
    level the longest run of parts naming an existing key wins.
    """
    path: list[str] = []
    current: Any = config
    index = 0

    while index < len(parts):
        if not isinstance(current, dict):
            return None
        for end in range(len(parts), index, -1):
            candidate = "_".join(parts[index:end])
            if candidate in current:
                path.append(candidate)
                current = current[candidate]
                index = end
                break
        else:
            return None

    if isinstance(current, dict):
        return None
    return ".".join(path)


def apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Environment variables follow the pattern QASKILLS_<SECTION>_<KEY>=<value>,
    e.g. QASKILLS_VALIDATION_MAX_LINES=800. Values are passed through as
    strings and coerced by the Config model.

    Args:
        config: Configuration dictionary to modify.

    Returns:
        Configuration with environment overrides applied.
    """
    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX) or key in _RESERVED_ENV:
            continue

        config_key = _ENV_ALIASES.get(key)
        if config_key is None:
            parts = key[len(ENV_PREFIX) :].lower().split("_")
            config_key = _resolve_env_key(config, parts)

        if config_key is None:
            logger.debug(f"Ignoring unknown environment override: {key}")
            continue

        config = set_nested_value(config, config_key, value)

    return config


def load_config(config_path: Path | None = None, skip_env: bool = False) -> Config:
    """
    Load and merge configuration from all sources.

    Args:
        config_path: Explicit config file (defaults to ~/.qaskills/config.yaml).
        skip_env: Skip environment variable overrides.

    Returns:
        Merged and validated Config object.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    config_dict = Config().model_dump(mode="json")

    path = config_path or get_global_config_path()
    file_config = load_yaml_file(path)
    if file_config:
        config_dict = deep_merge(config_dict, file_config)

    if not skip_env:
        config_dict = apply_env_overrides(config_dict)

    try:
        return Config.model_validate(config_dict)
    except ValidationError as e:
        raise ConfigurationError(f"Configuration validation failed: {e}") from e


# Singleton for cached config
_cached_config: Config | None = None


def get_config(reload: bool = False) -> Config:
    """
    Get the global configuration instance.

    Args:
        reload: Force reload configuration from disk.

    Returns:
        Config instance.
    """
    global _cached_config

    if _cached_config is None or reload:
        _cached_config = load_config()

    return _cached_config


def clear_config_cache() -> None:
    """Clear the cached configuration."""
    global _cached_config
    _cached_config = None
