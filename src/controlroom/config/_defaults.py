"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.

Note: DEFAULT_CONFIG is intentionally a plain dict for type compatibility
with functions like deep_merge. The merge functions create copies, so mutation
of the original is not a concern in practice.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "host": {
        "name": "localhost",
        "port": 22,
        "user": "",
    },
    "supervisor": {
        "binary": "pm2",
        "query_timeout": 10.0,
        "action_timeout": 30.0,
        "log_timeout": 10.0,
    },
    "logs": {
        "snapshot_lines": 100,
        "array_lines": 50,
        "max_lines": 10000,
        "max_output_bytes": 1048576,
    },
    "health": {
        "units": ["nginx"],
        "timeout": 5.0,
    },
}
