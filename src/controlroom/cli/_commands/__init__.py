"""Control room CLI commands."""
# pyright: reportUnusedCallResult=false

from typing import TYPE_CHECKING

from ._context import CLIContext, OutputFormat
from ._health import health
from ._logs import logs
from ._serve import serve
from ._services import action, services
from ._shared import (
    ExitCode,
    FormattableData,
    exit_with_control_error,
    exit_with_error,
    format_json,
    format_table,
    format_yaml,
    get_client,
    get_error_console,
)

if TYPE_CHECKING:
    from cyclopts import App

__all__ = [
    "CLIContext",
    "ExitCode",
    "FormattableData",
    "OutputFormat",
    "exit_with_control_error",
    "exit_with_error",
    "format_json",
    "format_table",
    "format_yaml",
    "get_client",
    "get_error_console",
    "register_commands",
]


def register_commands(app: "App") -> None:
    app.command(services)
    app.command(action)
    app.command(logs)
    app.command(health)
    app.command(serve)
