"""Supervisor command construction.

Every supervisor invocation is built here as an argument vector. Service
names are passed as single arguments and never interpolated into a shell.
"""

from types import MappingProxyType
from typing import TYPE_CHECKING

from controlroom.exceptions import ExecutionError

from ._models import LifecycleAction

if TYPE_CHECKING:
    from controlroom.utils import CommandResult

ACTION_SUBCOMMANDS: MappingProxyType[LifecycleAction, str] = MappingProxyType(
    {
        LifecycleAction.RESTART: "restart",
        LifecycleAction.STOP: "stop",
        LifecycleAction.START: "start",
        LifecycleAction.DELETE: "delete",
    }
)

# Import-time totality check over the closed action set
_missing = set(LifecycleAction) - set(ACTION_SUBCOMMANDS)
if _missing:  # pragma: no cover
    msg = f"No supervisor subcommand for actions: {sorted(_missing)}"
    raise RuntimeError(msg)


def list_command(binary: str) -> tuple[str, ...]:
    """Build the machine-readable process listing command."""
    return (binary, "jlist")


def action_command(
    binary: str, action: LifecycleAction, service_name: str
) -> tuple[str, ...]:
    """Build the command for a lifecycle action against one service.

    Args:
        binary: Supervisor executable.
        action: The lifecycle action.
        service_name: Target service name.

    Returns:
        Argument vector for the action.
    """
    return (binary, ACTION_SUBCOMMANDS[action], service_name)


def persist_command(binary: str) -> tuple[str, ...]:
    """Build the command that saves the current process table."""
    return (binary, "save")


def logs_command(
    binary: str, service_name: str, line_count: int, *, raw: bool = False
) -> tuple[str, ...]:
    """Build the log tail command for one service.

    Args:
        binary: Supervisor executable.
        service_name: Service whose logs are read.
        line_count: Number of trailing lines per stream.
        raw: Request unformatted lines without supervisor prefixes.

    Returns:
        Argument vector for a blocking, non-streaming log tail.
    """
    command = (binary, "logs", service_name, "--lines", str(line_count), "--nostream")
    if raw:
        command += ("--raw",)
    return command


def command_failure(what: str, result: "CommandResult") -> ExecutionError:
    """Build the error for a supervisor command that exited non-zero.

    Args:
        what: Short description of what the command was doing.
        result: The completed command.

    Returns:
        An ExecutionError carrying the supervisor's own message.
    """
    detail = result.stderr.strip() or result.stdout.strip() or "no output"
    msg = f"Failed to {what} (exit code {result.exit_code}): {detail}"
    return ExecutionError(
        msg, argv=result.argv, exit_code=result.exit_code, stderr=result.stderr
    )
