"""
Snake - grid movement, self/wall collision and growth.
"""

from .config import SnakeConfig, MIN_COLUMNS, MIN_ROWS, INITIAL_LENGTH
from .state import Direction, Position, SnakeState
from .engine import SnakeEngine

__all__ = [
    "SnakeConfig",
    "MIN_COLUMNS",
    "MIN_ROWS",
    "INITIAL_LENGTH",
    "Direction",
    "Position",
    "SnakeState",
    "SnakeEngine",
]
