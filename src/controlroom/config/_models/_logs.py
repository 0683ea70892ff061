"""Log retrieval configuration model."""

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class LogsConfig(BaseModel):
    """Log tail defaults and limits.

    Attributes:
        snapshot_lines: Default line count for raw text retrieval.
        array_lines: Default line count for line-array retrieval.
        max_lines: Largest line count a caller may request.
        max_output_bytes: Per-stream ceiling on raw log text returned by a
            snapshot. Line arrays are bounded by their line count instead.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    snapshot_lines: int = Field(default=100, gt=0)
    array_lines: int = Field(default=50, gt=0)
    max_lines: int = Field(default=10000, gt=0)
    max_output_bytes: int = Field(default=1048576, gt=0)
