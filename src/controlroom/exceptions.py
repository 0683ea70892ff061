"""Control room exceptions."""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class ControlRoomError(Exception):
    """Base exception for control room errors."""


class ValidationError(ControlRoomError, ValueError):
    """Raised when a request is missing a required field or has an invalid value.

    Always raised before any subprocess is spawned.

    Attributes:
        field: Name of the offending request field, if known.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        """Initialize with error message and field context.

        Args:
            message: Human-readable error message.
            field: Name of the offending request field.
        """
        super().__init__(message)
        self.field: str | None = field


class ExecutionError(ControlRoomError):
    """Raised when a supervisor command ran but reported a failure.

    Attributes:
        argv: The command that was executed.
        exit_code: Exit code of the command, or None if it never ran.
        stderr: Captured standard error text.
    """

    def __init__(
        self,
        message: str,
        *,
        argv: Sequence[str] = (),
        exit_code: int | None = None,
        stderr: str = "",
    ) -> None:
        """Initialize with error message and command context."""
        super().__init__(message)
        self.argv: tuple[str, ...] = tuple(argv)
        self.exit_code: int | None = exit_code
        self.stderr: str = stderr


class SpawnError(ExecutionError):
    """Raised when a command cannot be started at all (missing binary, permissions)."""


class ParseError(ControlRoomError):
    """Raised when supervisor output cannot be interpreted as the expected structure.

    Attributes:
        output: The raw output that failed to parse.
    """

    def __init__(self, message: str, *, output: str = "") -> None:
        """Initialize with error message and the offending output."""
        super().__init__(message)
        self.output: str = output


class CommandTimeoutError(ControlRoomError, TimeoutError):
    """Raised when a command exceeds its wall-clock limit and was killed.

    Attributes:
        argv: The command that timed out.
        timeout: The limit in seconds that was exceeded.
    """

    def __init__(
        self,
        message: str,
        *,
        argv: Sequence[str] = (),
        timeout: float | None = None,
    ) -> None:
        """Initialize with error message and timeout context."""
        super().__init__(message)
        self.argv: tuple[str, ...] = tuple(argv)
        self.timeout: float | None = timeout


class ConfigError(ControlRoomError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: "Path | None" = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
