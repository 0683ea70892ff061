"""Managed host configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class HostConfig(BaseModel):
    """Identity of the machine whose supervisor is managed.

    These values are reported in health output. Commands always execute
    on the local host; no connection is made to ``name``/``port``.

    Attributes:
        name: Hostname or address of the managed machine.
        port: Management port of the managed machine.
        user: Account used on the managed machine.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    name: str = "localhost"
    port: int = Field(default=22, ge=1, le=65535)
    user: str = ""
