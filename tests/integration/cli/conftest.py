from collections.abc import Callable, Iterator

import pytest
from rich.console import Console

from controlroom.cli import CLIContext, create_app
from controlroom.config import Config
from controlroom.utils import create_null_logger
from tests.conftest import FakeExecutor


@pytest.fixture(autouse=True)
def cli_context(executor: FakeExecutor) -> Iterator[CLIContext]:
    """Route every command through the fake executor."""
    ctx = CLIContext(
        config=Config.from_dict({}),
        logger=create_null_logger(),
        executor=executor,
    )
    CLIContext.set_current(ctx)
    yield ctx
    CLIContext.reset()


@pytest.fixture
def controlroom_cli(console: Console) -> Callable[..., int]:
    """Create the CLI app for testing and return a runner.

    The runner dispatches to a command directly, skipping the meta app
    so the injected CLIContext is kept. It returns the exit code.
    """
    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        try:
            app(args)
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run
