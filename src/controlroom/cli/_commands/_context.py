# pyright: reportUnusedCallResult=false
"""CLI context for global state management.

The CLIContext is set once at CLI startup and made available to all
commands via contextvars.
"""

import contextvars
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from controlroom.config import Config

if TYPE_CHECKING:
    from pathlib import Path

    from structlog.typing import FilteringBoundLogger

    from controlroom.utils import CommandExecutor


class OutputFormat(StrEnum):
    """Supported output formats for commands."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


# Thread-safe context variable for CLIContext
_current_cli_context: "contextvars.ContextVar[CLIContext | None]" = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with configuration and options.

    Attributes:
        config: Loaded configuration object.
        verbose: Enable verbose output with additional details.
        config_error: Error message if config loading failed.
        config_path: Explicit config file given with --config.
        project_dir: Directory given with --project-dir.
        logger: Structured logger for CLI commands.
        executor: Command executor override; commands use a LocalExecutor
            built from configuration when None.
    """

    config: Config = field(repr=False)
    verbose: bool = False
    config_error: str | None = None
    config_path: "Path | None" = None
    project_dir: "Path | None" = None
    logger: "FilteringBoundLogger | None" = field(default=None, repr=False)
    executor: "CommandExecutor | None" = field(default=None, repr=False)

    @classmethod
    def get_current(cls) -> "CLIContext":
        """Get current active CLIContext, or create a default if not set.

        Returns:
            The currently active CLIContext, or a default instance if none is set.
        """
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx

        return cls(config=Config.from_dict({}))

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:
        """Set the current active CLIContext.

        Args:
            ctx: The CLIContext to set as current.
        """
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to default context.

        This is primarily useful for testing to ensure a clean state between tests.
        """
        _current_cli_context.set(None)
