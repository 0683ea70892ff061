# pyright: reportExplicitAny=false
"""Shared CLI utilities for commands.

This module provides common utilities used across CLI command implementations:
- Standardized exit codes
- Generic output formatters (JSON, YAML, table)
- Console utilities for error handling
- Construction of the supervisor client from the CLI context
"""

from enum import IntEnum
from typing import TYPE_CHECKING, Any, Never

from controlroom.exceptions import ValidationError
from controlroom.supervisor import SupervisorClient

from ._context import CLIContext

if TYPE_CHECKING:
    from rich.console import Console

    from controlroom.exceptions import ControlRoomError

# Type alias for formattable data - uses Any to match library signatures
FormattableData = dict[str, Any]

__all__ = [
    "ExitCode",
    "FormattableData",
    "exit_with_control_error",
    "exit_with_error",
    "format_json",
    "format_table",
    "format_yaml",
    "get_client",
    "get_error_console",
]


class ExitCode(IntEnum):
    """Standard exit codes for control room CLI commands."""

    SUCCESS = 0
    VALIDATION_ERROR = 2
    INTERNAL_ERROR = 5


def format_json(data: FormattableData, *, indent: bool = True) -> str:
    """Format data as JSON.

    Args:
        data: Dictionary to format as JSON.
        indent: Whether to pretty-print with indentation.

    Returns:
        JSON-formatted string representation.
    """
    import orjson

    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")


def format_yaml(data: FormattableData) -> str:
    """Format data as YAML.

    Args:
        data: Dictionary to format as YAML.

    Returns:
        YAML-formatted string representation.
    """
    import yaml

    return yaml.safe_dump(
        data, default_flow_style=False, allow_unicode=True, sort_keys=False
    )


def format_table(headers: list[str], rows: list[list[str]]) -> str:
    """Format data as a Markdown table.

    Args:
        headers: Column headers for the table.
        rows: List of rows, where each row is a list of cell values.

    Returns:
        Markdown table string representation.
    """
    from pytablewriter import MarkdownTableWriter

    writer = MarkdownTableWriter(
        headers=headers,
        value_matrix=rows,
        margin=1,
    )
    return writer.dumps()


def get_error_console() -> "Console":
    """Get a Rich console configured for error output to stderr.

    Returns:
        Console instance writing to stderr.
    """
    from rich.console import Console

    return Console(stderr=True)


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.INTERNAL_ERROR,
    *,
    console: "Console | None" = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use (defaults to INTERNAL_ERROR).
        console: Optional Rich console for output. If not provided,
            a new stderr console will be created.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    from rich.markup import escape

    if console is None:
        console = get_error_console()

    console.print(f"[red]Error:[/red] {escape(message)}")
    raise SystemExit(code)


def exit_with_control_error(error: "ControlRoomError", *, command: str) -> Never:
    """Log a control layer error and exit with the matching code.

    Validation failures exit with VALIDATION_ERROR; every other failure
    exits with INTERNAL_ERROR.

    Args:
        error: The error raised by the control layer.
        command: Name of the CLI command, for the log entry.

    Raises:
        SystemExit: Always raised.
    """
    code = (
        ExitCode.VALIDATION_ERROR
        if isinstance(error, ValidationError)
        else ExitCode.INTERNAL_ERROR
    )

    logger = CLIContext.get_current().logger
    if logger is not None:
        logger.warning(
            "command_failed",
            command=command,
            error_type=type(error).__name__,
            error=str(error),
        )

    exit_with_error(str(error), code)


def get_client() -> SupervisorClient:
    """Build a supervisor client from the current CLI context."""
    ctx = CLIContext.get_current()
    return SupervisorClient.from_config(
        ctx.config, executor=ctx.executor, logger=ctx.logger
    )
