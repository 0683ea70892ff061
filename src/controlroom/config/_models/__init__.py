"""Configuration models."""

from ._common import ConfigSource, ConfigSourceName, LogFormat, LogLevel
from ._config import Config
from ._health import HealthConfig
from ._host import HostConfig
from ._logging import LoggingConfig
from ._logs import LogsConfig
from ._supervisor import SupervisorConfig

__all__ = [
    "Config",
    "ConfigSource",
    "ConfigSourceName",
    "HealthConfig",
    "HostConfig",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "LogsConfig",
    "SupervisorConfig",
]
