"""Process supervisor configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class SupervisorConfig(BaseModel):
    """Supervisor invocation settings.

    Attributes:
        binary: Supervisor executable, resolved through PATH.
        query_timeout: Seconds allowed for the process listing.
        action_timeout: Seconds allowed for each lifecycle or persist call.
        log_timeout: Seconds allowed for a log tail.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    binary: str = Field(default="pm2", min_length=1)
    query_timeout: float = Field(default=10.0, gt=0)
    action_timeout: float = Field(default=30.0, gt=0)
    log_timeout: float = Field(default=10.0, gt=0)
