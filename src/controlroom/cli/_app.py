"""The command-line interface for the control room."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from controlroom.config import LogLevel, safe_load_config
from controlroom.utils import create_cli_logger

from ._commands import CLIContext, register_commands

_HELP = "Query and control the services of a process supervisor."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    """Create the CLI application.

    Global options are handled by the meta app, which loads configuration
    and sets the CLIContext before dispatching to a command.

    Args:
        console: Console for normal output.
        error_console: Console for error output.
        exit_on_error: Whether parse errors exit the process.

    Returns:
        The configured App.
    """
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="controlroom",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Enable verbose output")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
        project_dir: Annotated[
            Path | None,
            Parameter(name="--project-dir", help="Directory holding controlroom.toml"),
        ] = None,
    ) -> None:
        """Run a control room command with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Enable verbose output with debug logging.
            config: Explicit path to config file.
            project_dir: Directory to search for controlroom.toml.
        """
        cli_overrides: dict[str, object] | None = None
        if verbose:
            cli_overrides = {"logging": {"level": LogLevel.DEBUG.value}}

        loaded_config, config_error = safe_load_config(
            config_path=config,
            project_dir=project_dir,
            cli_overrides=cli_overrides,
        )

        # Logs share stderr with command errors unless a file is configured
        log_config = loaded_config.logging
        level = log_config.level.value
        if not verbose and not log_config.file:
            level = LogLevel.WARNING.value

        cli_logger = create_cli_logger(
            level=level,
            log_format=log_config.format.value,  # type: ignore[arg-type]
            log_file=log_config.file,
        )

        ctx = CLIContext(
            config=loaded_config,
            verbose=verbose,
            config_error=config_error,
            config_path=config,
            project_dir=project_dir,
            logger=cli_logger,
        )
        CLIContext.set_current(ctx)

        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `controlroom` CLI."""
    create_app().meta()


if __name__ == "__main__":
    main()
