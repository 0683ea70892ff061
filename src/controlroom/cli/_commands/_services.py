# ruff: noqa: A002
"""Service listing and lifecycle commands."""

from typing import TYPE_CHECKING, Annotated

import pendulum
from cyclopts import Parameter

from controlroom.exceptions import ControlRoomError
from controlroom.supervisor import ActionRequest

from ._context import OutputFormat
from ._shared import (
    ExitCode,
    exit_with_control_error,
    format_json,
    format_table,
    format_yaml,
    get_client,
)

if TYPE_CHECKING:
    from controlroom.supervisor import ActionResult, ServiceDescriptor

_SERVICE_HEADERS = ["Name", "Status", "CPU", "Memory", "Started", "Restarts", "PID"]


def _service_data(service: "ServiceDescriptor") -> dict[str, object]:
    return {
        "name": service.name,
        "status": service.status.value,
        "cpu": service.cpu_percent,
        "memory": service.memory_bytes,
        "uptime": service.uptime_epoch_millis,
        "restarts": service.restart_count,
        "pid": service.pid,
    }


def _format_memory(memory_bytes: int) -> str:
    return f"{memory_bytes / (1024 * 1024):.1f} MB"


def _format_started(uptime_epoch_millis: int) -> str:
    if uptime_epoch_millis <= 0:
        return "-"
    started = pendulum.from_timestamp(uptime_epoch_millis / 1000, tz="UTC")
    return started.diff_for_humans()


def _service_row(service: "ServiceDescriptor") -> list[str]:
    return [
        service.name,
        service.status.value,
        f"{service.cpu_percent:g}%",
        _format_memory(service.memory_bytes),
        _format_started(service.uptime_epoch_millis),
        str(service.restart_count),
        str(service.pid) if service.pid is not None else "-",
    ]


def _action_data(result: "ActionResult") -> dict[str, object]:
    return {
        "action": result.action.value,
        "serviceName": result.service_name,
        "output": result.stdout,
        "error": result.stderr,
        "persisted": result.persisted,
    }


def services(
    *,
    format: Annotated[
        OutputFormat, Parameter(name=["--format", "-f"], help="Output format")
    ] = OutputFormat.TABLE,
) -> None:
    """List supervised services and their status."""
    try:
        descriptors = get_client().list_services()
    except ControlRoomError as e:
        exit_with_control_error(e, command="services")

    if format == OutputFormat.JSON:
        print(format_json({"services": [_service_data(s) for s in descriptors]}))
    elif format == OutputFormat.YAML:
        print(format_yaml({"services": [_service_data(s) for s in descriptors]}))
    elif not descriptors:
        print("No services are managed by the supervisor.")
    else:
        print(format_table(_SERVICE_HEADERS, [_service_row(s) for s in descriptors]))

    raise SystemExit(ExitCode.SUCCESS)


def action(
    action: Annotated[str, Parameter(help="One of restart, stop, start, delete")],
    service: Annotated[str, Parameter(help="Name of the target service")],
    /,
    *,
    format: Annotated[
        OutputFormat, Parameter(name=["--format", "-f"], help="Output format")
    ] = OutputFormat.TABLE,
) -> None:
    """Run a lifecycle action against a service and save the process list."""
    try:
        result = get_client().dispatch(
            ActionRequest(action=action, service_name=service)
        )
    except ControlRoomError as e:
        exit_with_control_error(e, command="action")

    if format == OutputFormat.JSON:
        print(format_json(_action_data(result)))
    elif format == OutputFormat.YAML:
        print(format_yaml(_action_data(result)))
    else:
        print(f"{result.action.value} {result.service_name}: done")
        if result.stdout.strip():
            print(result.stdout.rstrip())
        if not result.persisted:
            print(f"Warning: {result.stderr.strip()}")

    raise SystemExit(ExitCode.SUCCESS)
