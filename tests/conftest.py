"""Shared test fixtures for control room tests."""

import json
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

import pytest
from rich.console import Console

from controlroom.utils import CommandResult


@dataclass(frozen=True, slots=True)
class RecordedCall:
    """One command the fake executor was asked to run."""

    argv: tuple[str, ...]
    timeout: float | None


@dataclass(slots=True)
class FakeExecutor:
    """CommandExecutor double with scripted results.

    Commands are matched on their exact argument vector. Unscripted commands
    fail with exit code 127, like a shell that cannot find the program.
    """

    scripted: dict[tuple[str, ...], CommandResult | Exception] = field(
        default_factory=dict
    )
    calls: list[RecordedCall] = field(default_factory=list)

    def script(
        self,
        argv: Sequence[str],
        *,
        stdout: str = "",
        stderr: str = "",
        exit_code: int = 0,
    ) -> None:
        key = tuple(argv)
        self.scripted[key] = CommandResult(
            argv=key, exit_code=exit_code, stdout=stdout, stderr=stderr
        )

    def script_error(self, argv: Sequence[str], error: Exception) -> None:
        self.scripted[tuple(argv)] = error

    def run(
        self, argv: Sequence[str], *, timeout: float | None = None
    ) -> CommandResult:
        key = tuple(argv)
        self.calls.append(RecordedCall(argv=key, timeout=timeout))
        outcome = self.scripted.get(key)
        if isinstance(outcome, Exception):
            raise outcome
        if outcome is None:
            return CommandResult(argv=key, exit_code=127, stderr="not scripted")
        return outcome

    @property
    def argvs(self) -> list[tuple[str, ...]]:
        return [call.argv for call in self.calls]


@pytest.fixture
def executor() -> FakeExecutor:
    return FakeExecutor()


ProcessFactory = Callable[..., dict[str, object]]


@pytest.fixture
def make_process() -> ProcessFactory:
    """Return a factory for one entry of the supervisor's JSON process list."""

    def _make(  # noqa: PLR0913
        name: str,
        *,
        status: str = "online",
        cpu: float = 0.0,
        memory: int = 0,
        pm_uptime: int = 0,
        restart_time: int = 0,
        pid: int | None = 1000,
    ) -> dict[str, object]:
        return {
            "name": name,
            "pid": pid,
            "pm_id": 0,
            "pm2_env": {
                "status": status,
                "pm_uptime": pm_uptime,
                "restart_time": restart_time,
                "exec_mode": "fork_mode",
            },
            "monit": {"cpu": cpu, "memory": memory},
        }

    return _make


def jlist(*entries: dict[str, object]) -> str:
    """Render process entries as the supervisor prints them."""
    return json.dumps(list(entries))


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
