"""Command execution for supervisor calls.

This module provides the leaf of the control stack: a synchronous executor
that runs one external command in a fresh process, captures both output
streams in full, and enforces a wall-clock timeout by killing the child.
"""

import os
import subprocess
import time
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from controlroom.exceptions import CommandTimeoutError, SpawnError

from ._logging import create_null_logger

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

# Default timeout in seconds
DEFAULT_TIMEOUT: float = 10.0

# Default ceiling for text shown to callers, per stream
MAX_OUTPUT_BYTES: int = 1048576  # 1MiB


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a command that ran to completion.

    A non-zero exit code is not an error at this layer; callers decide
    what a failing exit code means for their operation.

    Attributes:
        argv: The command and arguments that were executed.
        exit_code: Process exit code.
        stdout: Standard output, decoded as UTF-8.
        stderr: Standard error, decoded as UTF-8.
    """

    argv: tuple[str, ...]
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        """Return True if the command exited with status 0."""
        return self.exit_code == 0


@runtime_checkable
class CommandExecutor(Protocol):
    """Protocol for running a single external command.

    Implementations must block until the command exits or the timeout
    elapses, and must terminate the child process on timeout.
    """

    def run(
        self, argv: Sequence[str], *, timeout: float | None = None
    ) -> CommandResult:
        """Run a command and capture its output.

        Args:
            argv: Command and arguments.
            timeout: Wall-clock limit in seconds, or None for no limit.

        Returns:
            CommandResult with exit code and captured output.

        Raises:
            CommandTimeoutError: If the command exceeded the timeout.
            SpawnError: If the command could not be started.
        """
        ...


def truncate_output(output: str, max_bytes: int = MAX_OUTPUT_BYTES) -> str:
    """Truncate output to max bytes, preserving valid UTF-8.

    Args:
        output: The string to truncate.
        max_bytes: Maximum size in bytes.

    Returns:
        Truncated string with indicator if truncated.
    """
    if not output:
        return output

    encoded = output.encode("utf-8")
    if len(encoded) <= max_bytes:
        return output

    # Drop any incomplete multi-byte sequence at the cut
    truncated = encoded[:max_bytes].decode("utf-8", errors="ignore")

    return truncated + "\n... [output truncated]"


@dataclass(frozen=True, slots=True)
class LocalExecutor:
    """Run commands as child processes of the current host.

    Commands are always given as argument vectors and never passed
    through a shell.

    Attributes:
        env: Additional environment variables for every command.
        max_output_bytes: Per-stream capture ceiling, or None to keep the
            whole output. Structured output must never be cut, so leave this
            unset for executors that run listing commands.
        logger: Structured logger for command tracing.
    """

    env: dict[str, str] = field(default_factory=dict)
    max_output_bytes: int | None = None
    logger: "FilteringBoundLogger" = field(
        default_factory=create_null_logger, repr=False
    )

    def run(
        self, argv: Sequence[str], *, timeout: float | None = DEFAULT_TIMEOUT
    ) -> CommandResult:
        """Run a command and capture its output.

        Args:
            argv: Command and arguments.
            timeout: Wall-clock limit in seconds, or None for no limit.

        Returns:
            CommandResult with exit code and captured output.

        Raises:
            CommandTimeoutError: If the command exceeded the timeout. The
                child is killed and reaped before this is raised.
            SpawnError: If the command could not be started.
        """
        cmd = tuple(argv)
        if not cmd:
            msg = "No command specified"
            raise SpawnError(msg)

        env = {**os.environ, **self.env}
        started = time.monotonic()

        try:
            process = subprocess.Popen(  # noqa: S603
                cmd,
                env=env,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
            )
        except FileNotFoundError as e:
            msg = f"Command not found: {cmd[0]}"
            raise SpawnError(msg, argv=cmd) from e
        except OSError as e:
            msg = f"Failed to start {cmd[0]}: {e}"
            raise SpawnError(msg, argv=cmd) from e

        with process:
            try:
                raw_stdout, raw_stderr = process.communicate(timeout=timeout)
            except subprocess.TimeoutExpired as e:
                process.kill()
                _ = process.communicate()
                self.logger.warning("command_timed_out", argv=list(cmd), timeout=timeout)
                msg = f"Command timed out after {timeout}s: {' '.join(cmd)}"
                raise CommandTimeoutError(msg, argv=cmd, timeout=timeout) from e

        stdout = raw_stdout.decode("utf-8", errors="replace")
        stderr = raw_stderr.decode("utf-8", errors="replace")
        if self.max_output_bytes is not None:
            stdout = truncate_output(stdout, self.max_output_bytes)
            stderr = truncate_output(stderr, self.max_output_bytes)
        result = CommandResult(
            argv=cmd,
            exit_code=process.returncode,
            stdout=stdout,
            stderr=stderr,
        )

        self.logger.debug(
            "command_completed",
            argv=list(cmd),
            exit_code=result.exit_code,
            duration_ms=round((time.monotonic() - started) * 1000),
        )

        return result
