"""
Memory configuration.

Pair counts outside the supported range are clamped rather than rejected.
"""

from pydantic import BaseModel, Field, field_validator

from .state import ContentSet


MIN_PAIRS = 2
MAX_PAIRS = 12

REVEAL_DURATION = 0.7
FLIP_BACK_DELAY = 0.7


class MemoryConfig(BaseModel):
    """Deck size and card faces for a Memory game."""
    pairs_count: int = Field(8, description="Number of pairs (2-12)")
    content_set: ContentSet = ContentSet.SYMBOLS

    model_config = {"frozen": True}

    @field_validator("pairs_count")
    @classmethod
    def _clamp_pairs(cls, value: int) -> int:
        return max(MIN_PAIRS, min(MAX_PAIRS, value))
