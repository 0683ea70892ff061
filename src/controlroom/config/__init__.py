"""Control room configuration.

This module provides the public API for configuration management,
including loading, validation, and typed access to configuration values.

Example:
    >>> from controlroom.config import Config
    >>> config = Config.load()
    >>> config.supervisor.binary
    'pm2'
"""

from controlroom.exceptions import (
    ConfigError,
    ConfigLoadError,
    ConfigValidationError,
)

from ._defaults import DEFAULT_CONFIG
from ._discovery import discover_sources, get_project_config_path, get_user_config_path
from ._load import safe_load_config
from ._loader import deep_merge, parse_env_vars, read_toml_file, set_nested_key
from ._models import (
    Config,
    ConfigSource,
    ConfigSourceName,
    HealthConfig,
    HostConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    LogsConfig,
    SupervisorConfig,
)
from ._validation import ValidationIssue, validate_config

__all__ = [
    "DEFAULT_CONFIG",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigSource",
    "ConfigSourceName",
    "ConfigValidationError",
    "HealthConfig",
    "HostConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "LogsConfig",
    "SupervisorConfig",
    "ValidationIssue",
    "deep_merge",
    "discover_sources",
    "get_project_config_path",
    "get_user_config_path",
    "parse_env_vars",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
    "validate_config",
]
