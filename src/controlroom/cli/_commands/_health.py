# ruff: noqa: A002
"""Host health command."""

from typing import TYPE_CHECKING, Annotated

from cyclopts import Parameter

from controlroom.exceptions import ControlRoomError

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
    from controlroom.supervisor import HostHealth


def _health_data(report: "HostHealth") -> dict[str, object]:
    disk = report.disk
    memory = report.memory
    supervisor = report.supervisor
    return {
        "timestamp": report.timestamp,
        "host": {
            "name": report.host,
            "uptime": report.uptime,
            "disk": {
                "total": disk.total,
                "used": disk.used,
                "available": disk.available,
                "percentage": disk.percentage,
            }
            if disk
            else None,
            "memory": {
                "total": memory.total,
                "used": memory.used,
                "free": memory.free,
                "percentage": memory.percentage,
            }
            if memory
            else None,
            "cpu": report.cpu_percent,
        },
        "services": {"count": supervisor.count, "running": supervisor.running}
        if supervisor
        else None,
        "units": {
            unit: "running" if active else "stopped"
            for unit, active in report.units.items()
        },
        "overall": report.overall.value,
    }


def _health_rows(report: "HostHealth") -> list[list[str]]:
    unknown = "unknown"
    rows = [
        ["host", report.host],
        ["uptime", report.uptime],
        [
            "disk",
            f"{report.disk.percentage}% of {report.disk.total}"
            if report.disk
            else unknown,
        ],
        [
            "memory",
            f"{report.memory.percentage}% of {report.memory.total} MB"
            if report.memory
            else unknown,
        ],
        [
            "cpu",
            f"{report.cpu_percent}%" if report.cpu_percent is not None else unknown,
        ],
        [
            "services",
            f"{report.supervisor.running}/{report.supervisor.count} online"
            if report.supervisor
            else unknown,
        ],
    ]
    rows.extend(
        [unit, "running" if active else "stopped"]
        for unit, active in report.units.items()
    )
    rows.append(["overall", report.overall.value])
    return rows


def health(
    *,
    format: Annotated[
        OutputFormat, Parameter(name=["--format", "-f"], help="Output format")
    ] = OutputFormat.TABLE,
) -> None:
    """Check host resources, supervised services and system units."""
    try:
        report = get_client().check_health()
    except ControlRoomError as e:
        exit_with_control_error(e, command="health")

    if format == OutputFormat.JSON:
        print(format_json(_health_data(report)))
    elif format == OutputFormat.YAML:
        print(format_yaml(_health_data(report)))
    else:
        print(format_table(["Check", "Result"], _health_rows(report)))

    raise SystemExit(ExitCode.SUCCESS)
