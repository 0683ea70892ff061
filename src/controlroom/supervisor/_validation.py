"""Request validation shared by the dispatcher and the log retriever.

Everything here runs before a command is built, so invalid input never
reaches the executor.
"""

from controlroom.exceptions import ValidationError

from ._models import ActionRequest, LifecycleAction, LogQuery

_VALID_ACTIONS = ", ".join(action.value for action in LifecycleAction)

# PM2 reads these as selectors over every process, not as one service
_SELECTOR_NAMES = frozenset({"all"})


def require_service_name(value: object, *, message: str, field: str) -> str:
    """Validate a service name supplied by a caller.

    Args:
        value: Raw caller input.
        message: Error message used when the value is missing.
        field: Request field name reported on failure.

    Returns:
        The name with surrounding whitespace removed.

    Raises:
        ValidationError: If the name is missing, blank or not a string, or
            if the supervisor would read it as an option flag, a process
            id, or the ``all`` selector.
    """
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(message, field=field)

    name = value.strip()
    if name.startswith("-") or name.isdigit() or name in _SELECTOR_NAMES:
        msg = f"Invalid service name: {name!r}"
        raise ValidationError(msg, field=field)
    return name


def parse_action_request(request: ActionRequest) -> tuple[LifecycleAction, str]:
    """Validate an action request.

    Args:
        request: Raw action request.

    Returns:
        Tuple of (action, service name).

    Raises:
        ValidationError: If either field is missing or the action is not
            one of the lifecycle actions.
    """
    missing = "Missing action or serviceName"
    if not isinstance(request.action, str) or not request.action.strip():
        raise ValidationError(missing, field="action")
    service_name = require_service_name(
        request.service_name, message=missing, field="serviceName"
    )

    try:
        action = LifecycleAction(request.action.strip())
    except ValueError:
        msg = f"Invalid action: {request.action!r} (expected one of {_VALID_ACTIONS})"
        raise ValidationError(msg, field="action") from None

    return action, service_name


def build_log_query(
    service_name: object,
    line_count: object,
    *,
    default_lines: int,
    max_lines: int,
    missing_message: str,
) -> LogQuery:
    """Validate a log tail request.

    Args:
        service_name: Raw service name.
        line_count: Raw line count, or None to use the default.
        default_lines: Line count used when none is given.
        max_lines: Largest accepted line count.
        missing_message: Error message used when the name is missing.

    Returns:
        A validated LogQuery.

    Raises:
        ValidationError: If the name is missing or the line count is not an
            integer in ``1..max_lines``.
    """
    name = require_service_name(
        service_name, message=missing_message, field="serviceName"
    )

    if line_count is None:
        return LogQuery(service_name=name, line_count=default_lines)

    if isinstance(line_count, bool) or not isinstance(line_count, int):
        msg = f"Invalid line count: {line_count!r}"
        raise ValidationError(msg, field="lines")
    if line_count <= 0 or line_count > max_lines:
        msg = f"Line count must be between 1 and {max_lines}, got {line_count}"
        raise ValidationError(msg, field="lines")

    return LogQuery(service_name=name, line_count=line_count)
