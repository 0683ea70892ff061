# pyright: reportAny=false, reportExplicitAny=false, reportUnknownArgumentType=false, reportUnknownMemberType=false, reportUnknownVariableType=false
"""Configuration validation using Pydantic schemas.

This module validates merged configuration dictionaries against the
frozen Pydantic models from _models/, with a strict variant that rejects
unknown keys.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from controlroom.config._models._health import HealthConfig
from controlroom.config._models._host import HostConfig
from controlroom.config._models._logging import LoggingConfig
from controlroom.config._models._logs import LogsConfig
from controlroom.config._models._supervisor import SupervisorConfig
from controlroom.exceptions import ConfigValidationError

if TYPE_CHECKING:
    from pydantic_core import ErrorDetails


@dataclass(frozen=True, slots=True)
class ValidationIssue:
    """Represents a configuration validation issue.

    Attributes:
        key: Dotted path to the configuration key (e.g., "logging.level").
        message: Human-readable description of the issue.
        expected: Description of expected value or type, if available.
        actual: The actual value that caused the issue.
        source: Name of the ConfigSource where the issue was found, or None.
        severity: Whether this is an error or warning.
    """

    key: str
    message: str
    expected: str | None
    actual: Any
    source: str | None
    severity: Literal["error", "warning"]


class ConfigSchema(BaseModel):
    """Pydantic schema for root configuration (lenient mode)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="ignore")

    logging: LoggingConfig = LoggingConfig()
    host: HostConfig = HostConfig()
    supervisor: SupervisorConfig = SupervisorConfig()
    logs: LogsConfig = LogsConfig()
    health: HealthConfig = HealthConfig()


class ConfigSchemaStrict(ConfigSchema):
    """Pydantic schema for root configuration (strict mode)."""

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")


def _pydantic_error_to_issue(
    error: "ErrorDetails",
    source: str | None,
) -> ValidationIssue:
    """Convert a Pydantic error dict to a ValidationIssue.

    Args:
        error: A single error dict from ValidationError.errors().
        source: The ConfigSourceName value, or None for merged config.

    Returns:
        A ValidationIssue representing the validation error.
    """
    loc = error.get("loc", ())
    key = ".".join(str(part) for part in loc)
    message = str(error.get("msg", "Validation error"))

    ctx = error.get("ctx")
    expected: str | None = None
    if ctx is not None:
        if "expected" in ctx:
            expected = str(ctx["expected"])
        elif "gt" in ctx:
            expected = f"greater than {ctx['gt']}"
        elif "ge" in ctx:
            expected = f"at least {ctx['ge']}"

    return ValidationIssue(
        key=key,
        message=message,
        expected=expected,
        actual=error.get("input"),
        source=source,
        severity="error",
    )


def validate_config(
    config: dict[str, Any],
    *,
    strict: bool = False,
) -> list[ValidationIssue]:
    """Validate a merged configuration dictionary.

    Args:
        config: The merged configuration dictionary to validate.
        strict: If True, unknown top-level keys are errors.

    Returns:
        List of ValidationIssue objects. Empty list indicates valid config.
    """
    schema_class = ConfigSchemaStrict if strict else ConfigSchema

    try:
        _ = schema_class.model_validate(config)
    except ValidationError as e:
        return [_pydantic_error_to_issue(err, source=None) for err in e.errors()]
    else:
        return []


def raise_if_validation_errors(
    issues: list[ValidationIssue],
    source: str | None = None,
) -> None:
    """Raise ConfigValidationError for the first error in the list.

    Args:
        issues: List of ValidationIssue objects to check.
        source: Optional source string to use in the exception.

    Raises:
        ConfigValidationError: If any issues have severity="error".
    """
    errors = [i for i in issues if i.severity == "error"]
    if errors:
        issue = errors[0]
        msg = f"Invalid configuration value for '{issue.key}'"
        raise ConfigValidationError(
            msg,
            key=issue.key,
            value=issue.actual,
            expected=issue.expected or issue.message,
            source=source or issue.source,
        )
