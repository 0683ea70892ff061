"""Host health check configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class HealthConfig(BaseModel):
    """Host health probe settings.

    Attributes:
        units: System units whose active state is part of the report.
        timeout: Seconds allowed for each probe command.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    units: tuple[str, ...] = ("nginx",)
    timeout: float = Field(default=5.0, gt=0)
