"""Lifecycle action dispatch.

An action runs as two supervisor calls: the action itself, then a save of
the process table so the change survives a supervisor restart. The save
is attempted whether the action succeeded or failed; its failure never
undoes or masks the action.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from controlroom.config import SupervisorConfig
from controlroom.exceptions import ControlRoomError
from controlroom.utils import CommandResult, create_null_logger

from ._commands import action_command, command_failure, persist_command
from ._models import ActionRequest, ActionResult
from ._validation import parse_action_request

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

    from controlroom.utils import CommandExecutor


def _join_output(*parts: str) -> str:
    joined = ""
    for part in parts:
        if not part:
            continue
        if joined and not joined.endswith("\n"):
            joined += "\n"
        joined += part
    return joined


@dataclass(frozen=True, slots=True)
class ActionDispatcher:
    """Validate and run lifecycle actions against named services.

    Attributes:
        executor: Runs the action and persist commands.
        settings: Supervisor binary and timeouts.
        logger: Structured logger.
    """

    executor: "CommandExecutor"
    settings: SupervisorConfig = field(default_factory=SupervisorConfig)
    logger: "FilteringBoundLogger" = field(
        default_factory=create_null_logger, repr=False
    )

    def dispatch(self, request: ActionRequest) -> ActionResult:
        """Run one lifecycle action and persist the supervisor state.

        Args:
            request: Raw action request from the caller.

        Returns:
            ActionResult for an action the supervisor accepted. If only the
            persist call failed, ``persisted`` is False and its message is
            appended to ``stderr``.

        Raises:
            ValidationError: If the request is malformed. Nothing is executed.
            ExecutionError: If the supervisor rejected the action.
            CommandTimeoutError: If the action command timed out. No persist
                call is made since the supervisor state is unknown.
        """
        action, service_name = parse_action_request(request)
        log = self.logger.bind(action=action.value, service=service_name)

        result = self.executor.run(
            action_command(self.settings.binary, action, service_name),
            timeout=self.settings.action_timeout,
        )
        persist_result, persist_error = self._persist(log)

        if not result.ok:
            log.warning(
                "action_failed",
                exit_code=result.exit_code,
                persisted=persist_error is None,
            )
            raise command_failure(f"{action.value} {service_name}", result)

        stdout = result.stdout
        stderr = result.stderr
        if persist_result is not None:
            stdout = _join_output(stdout, persist_result.stdout)
        if persist_error is not None:
            stderr = _join_output(stderr, f"State was not persisted: {persist_error}")
        elif persist_result is not None:
            stderr = _join_output(stderr, persist_result.stderr)

        log.info("action_dispatched", persisted=persist_error is None)
        return ActionResult(
            action=action,
            service_name=service_name,
            stdout=stdout,
            stderr=stderr,
            succeeded=True,
            persisted=persist_error is None,
        )

    def _persist(
        self, log: "FilteringBoundLogger"
    ) -> tuple[CommandResult | None, str | None]:
        """Save the supervisor's process table.

        Returns:
            Tuple of (command result if the command ran, error message if
            the save did not succeed).
        """
        try:
            result = self.executor.run(
                persist_command(self.settings.binary),
                timeout=self.settings.action_timeout,
            )
        except ControlRoomError as e:
            log.warning("state_persist_failed", error=str(e))
            return None, str(e)

        if not result.ok:
            error = command_failure("persist supervisor state", result)
            log.warning("state_persist_failed", error=str(error))
            return result, str(error)

        return result, None
