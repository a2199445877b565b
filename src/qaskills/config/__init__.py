"""Configuration system for qaskills."""

from qaskills.config.loader import (
    ConfigurationError,
    apply_env_overrides,
    clear_config_cache,
    get_config,
    load_config,
    load_yaml_file,
)
from qaskills.config.merger import deep_merge, set_nested_value
from qaskills.config.schema import (
    DEFAULT_REGISTRY_URL,
    Config,
    InstallConfig,
    LoggingConfig,
    RegistryConfig,
    TelemetryConfig,
    ValidationConfig,
)

__all__ = [
    "DEFAULT_REGISTRY_URL",
    "Config",
    "ConfigurationError",
    "InstallConfig",
    "LoggingConfig",
    "RegistryConfig",
    "TelemetryConfig",
    "ValidationConfig",
    "apply_env_overrides",
    "clear_config_cache",
    "deep_merge",
    "get_config",
    "load_config",
    "load_yaml_file",
    "set_nested_value",
]
