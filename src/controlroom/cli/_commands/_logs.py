# ruff: noqa: A002
"""Log tail command."""

import sys
from typing import Annotated

from cyclopts import Parameter

from controlroom.exceptions import ControlRoomError

from ._context import OutputFormat
from ._shared import (
    ExitCode,
    exit_with_control_error,
    format_json,
    format_yaml,
    get_client,
)


def logs(
    service: Annotated[str, Parameter(help="Name of the service")],
    /,
    *,
    lines: Annotated[
        int | None,
        Parameter(name=["--lines", "-n"], help="Number of trailing lines"),
    ] = None,
    raw: Annotated[
        bool,
        Parameter(help="Print unprefixed log lines with blank lines removed"),
    ] = False,
    format: Annotated[
        OutputFormat, Parameter(name=["--format", "-f"], help="Output format")
    ] = OutputFormat.TABLE,
) -> None:
    """Show the recent log output of a service."""
    client = get_client()
    try:
        if raw:
            log_lines = client.fetch_log_lines(service, lines)
        else:
            snapshot = client.fetch_logs(service, lines)
    except ControlRoomError as e:
        exit_with_control_error(e, command="logs")

    if raw:
        data: dict[str, object] = {"serviceName": service.strip(), "logs": log_lines}
        if format == OutputFormat.JSON:
            print(format_json(data))
        elif format == OutputFormat.YAML:
            print(format_yaml(data))
        else:
            for line in log_lines:
                print(line)
        raise SystemExit(ExitCode.SUCCESS)

    data = {
        "serviceName": snapshot.service_name,
        "logs": snapshot.logs,
        "errors": snapshot.errors,
    }
    if format == OutputFormat.JSON:
        print(format_json(data))
    elif format == OutputFormat.YAML:
        print(format_yaml(data))
    else:
        print(snapshot.logs, end="")
        if snapshot.errors:
            print(snapshot.errors, end="", file=sys.stderr)

    raise SystemExit(ExitCode.SUCCESS)
