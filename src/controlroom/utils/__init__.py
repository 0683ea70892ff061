"""Shared utilities for the control room."""

from ._exec import (
    DEFAULT_TIMEOUT,
    MAX_OUTPUT_BYTES,
    CommandExecutor,
    CommandResult,
    LocalExecutor,
    truncate_output,
)
from ._logging import create_cli_logger, create_null_logger, create_server_logger

__all__ = [
    "DEFAULT_TIMEOUT",
    "MAX_OUTPUT_BYTES",
    "CommandExecutor",
    "CommandResult",
    "LocalExecutor",
    "create_cli_logger",
    "create_null_logger",
    "create_server_logger",
    "truncate_output",
]
