"""Schema for the supervisor's machine-readable process listing.

The listing is decoded against these models before anything reads it,
so a shape mismatch fails with ParseError instead of surfacing as a
KeyError or a silently wrong descriptor.
"""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from controlroom.exceptions import ParseError

from ._models import ServiceDescriptor, ServiceStatus

# Longest slice of raw output carried in a ParseError message
_EXCERPT_CHARS = 200


class Monit(BaseModel):
    """Resource usage block of a process entry."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    cpu: float = Field(default=0.0, ge=0)
    memory: int = Field(default=0, ge=0)


class Pm2Env(BaseModel):
    """Supervisor environment block of a process entry."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    status: str
    pm_uptime: int = Field(default=0, ge=0)
    restart_time: int = Field(default=0, ge=0)


class ProcessEntry(BaseModel):
    """One entry of the process listing."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    name: str = Field(min_length=1)
    pid: int | None = Field(default=None, ge=0)
    pm2_env: Pm2Env
    monit: Monit = Monit()

    def to_descriptor(self) -> ServiceDescriptor:
        """Flatten this entry into a ServiceDescriptor.

        A pid of 0 is how the supervisor reports a service without a
        running process; it maps to None.
        """
        return ServiceDescriptor(
            name=self.name,
            status=ServiceStatus.parse(self.pm2_env.status),
            cpu_percent=self.monit.cpu,
            memory_bytes=self.monit.memory,
            uptime_epoch_millis=self.pm2_env.pm_uptime,
            restart_count=self.pm2_env.restart_time,
            pid=self.pid or None,
        )


_process_list_adapter: TypeAdapter[list[ProcessEntry]] = TypeAdapter(
    list[ProcessEntry]
)


def _excerpt(output: str) -> str:
    text = output.strip()
    if len(text) <= _EXCERPT_CHARS:
        return text
    return text[:_EXCERPT_CHARS] + "..."


def decode_process_list(output: str) -> list[ServiceDescriptor]:
    """Decode the supervisor's process listing into service descriptors.

    Args:
        output: Raw JSON text printed by the listing command.

    Returns:
        Descriptors in the supervisor's native order.

    Raises:
        ParseError: If the output is not a well-formed list of process entries.
    """
    if not output.strip():
        msg = "Supervisor returned an empty process listing"
        raise ParseError(msg, output=output)

    try:
        entries = _process_list_adapter.validate_json(output)
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"]) or "<root>"
        msg = (
            f"Could not interpret supervisor process listing at {location}: "
            f"{first['msg']} (output: {_excerpt(output)!r})"
        )
        raise ParseError(msg, output=output) from e

    return [entry.to_descriptor() for entry in entries]
