"""
Snake configuration.

Grids smaller than the minimum are clamped up rather than rejected.
"""

from pydantic import BaseModel, Field, field_validator


MIN_COLUMNS = 8
MIN_ROWS = 12
INITIAL_LENGTH = 3


class SnakeConfig(BaseModel):
    """Grid size and tick rate for a Snake game."""
    columns: int = Field(16, description="Grid width in cells (at least 8)")
    rows: int = Field(24, description="Grid height in cells (at least 12)")
    tick_interval: float = Field(0.18, gt=0, description="Seconds between ticks")

    model_config = {"frozen": True}

    @field_validator("columns")
    @classmethod
    def _clamp_columns(cls, value: int) -> int:
        return max(MIN_COLUMNS, value)

    @field_validator("rows")
    @classmethod
    def _clamp_rows(cls, value: int) -> int:
        return max(MIN_ROWS, value)
