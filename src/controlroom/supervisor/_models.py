"""Data models for the service control layer.

This module defines the core data types exchanged with callers:
- ServiceStatus: Normalized run state of a supervised service
- ServiceDescriptor: Point-in-time snapshot of one service
- LifecycleAction: The closed set of actions a caller may request
- ActionRequest / ActionResult: Input and outcome of an action
- LogQuery / LogSnapshot: Input and raw outcome of a log tail
"""

from dataclasses import dataclass
from enum import StrEnum


class ServiceStatus(StrEnum):
    """Service run states as reported by the supervisor.

    - ONLINE: Process is running
    - STOPPED: Process was stopped and is not running
    - ERRORED: Process crashed and the supervisor gave up on it
    - LAUNCHING: Process is starting
    - UNKNOWN: Any other state reported by the supervisor
    """

    ONLINE = "online"
    STOPPED = "stopped"
    ERRORED = "errored"
    LAUNCHING = "launching"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str) -> "ServiceStatus":
        """Map a raw supervisor status string to a ServiceStatus.

        Args:
            value: Status string from the supervisor.

        Returns:
            The matching member, or UNKNOWN for unrecognized values.
        """
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class LifecycleAction(StrEnum):
    """Lifecycle actions a caller may dispatch against a named service."""

    RESTART = "restart"
    STOP = "stop"
    START = "start"
    DELETE = "delete"


@dataclass(frozen=True, slots=True)
class ServiceDescriptor:
    """Immutable snapshot of one supervised service.

    Attributes:
        name: Service name, the join key into the supervisor's table.
        status: Normalized run state.
        cpu_percent: CPU usage in percent.
        memory_bytes: Resident memory in bytes.
        uptime_epoch_millis: Epoch milliseconds of the last (re)start.
        restart_count: Number of restarts recorded by the supervisor.
        pid: Process ID, or None if the service has no running process.
    """

    name: str
    status: ServiceStatus
    cpu_percent: float = 0.0
    memory_bytes: int = 0
    uptime_epoch_millis: int = 0
    restart_count: int = 0
    pid: int | None = None


@dataclass(frozen=True, slots=True)
class ActionRequest:
    """Unvalidated request to run a lifecycle action.

    Fields are kept as raw caller input; the dispatcher validates them
    before anything is executed.

    Attributes:
        action: Requested action name.
        service_name: Target service name.
    """

    action: str | None
    service_name: str | None


@dataclass(frozen=True, slots=True)
class ActionResult:
    """Outcome of a dispatched lifecycle action.

    Attributes:
        action: The action that was run.
        service_name: The service it was run against.
        stdout: Captured standard output of the action and persist calls.
        stderr: Captured standard error of the action and persist calls.
        succeeded: Always True. A failed action raises ExecutionError
            instead of returning a result.
        persisted: Whether the supervisor state was saved afterwards.
    """

    action: LifecycleAction
    service_name: str
    stdout: str = ""
    stderr: str = ""
    succeeded: bool = True
    persisted: bool = True


@dataclass(frozen=True, slots=True)
class LogQuery:
    """Validated log tail request.

    Attributes:
        service_name: Service whose log stream is read.
        line_count: Number of trailing lines to return.
    """

    service_name: str
    line_count: int


@dataclass(frozen=True, slots=True)
class LogSnapshot:
    """Raw log tail as emitted by the supervisor.

    Attributes:
        service_name: Service whose log stream was read.
        logs: Captured standard output text.
        errors: Captured standard error text.
    """

    service_name: str
    logs: str
    errors: str = ""
