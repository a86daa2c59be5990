"""
Memory - card matching with a two-card selection window.
"""

from .config import MemoryConfig, MIN_PAIRS, MAX_PAIRS, REVEAL_DURATION, FLIP_BACK_DELAY
from .state import ContentSet, MemoryCard, MemoryState, MemoryStatus
from .engine import MemoryEngine

__all__ = [
    "MemoryConfig",
    "MIN_PAIRS",
    "MAX_PAIRS",
    "REVEAL_DURATION",
    "FLIP_BACK_DELAY",
    "ContentSet",
    "MemoryCard",
    "MemoryState",
    "MemoryStatus",
    "MemoryEngine",
]
