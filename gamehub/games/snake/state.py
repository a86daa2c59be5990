"""
Snake State - Grid positions, directions and the immutable snapshot.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Movement directions. The y axis grows downward."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    def is_opposite(self, other: Direction) -> bool:
        return self.opposite is other


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Position:
    """A grid cell, 0-indexed from the top-left corner."""
    x: int
    y: int

    def moved(self, direction: Direction) -> Position:
        """Return the neighbouring cell in `direction`."""
        dx, dy = direction.delta
        return Position(self.x + dx, self.y + dy)

    def in_bounds(self, columns: int, rows: int) -> bool:
        return 0 <= self.x < columns and 0 <= self.y < rows


@dataclass(frozen=True)
class SnakeState:
    """
    Snapshot of a Snake game.

    The body is head-first. Its length is always the initial length
    plus the score.
    """
    columns: int
    rows: int
    body: tuple[Position, ...]
    direction: Direction
    pending_direction: Direction | None
    food: Position
    score: int
    is_game_over: bool

    @property
    def head(self) -> Position:
        return self.body[0]

    @property
    def length(self) -> int:
        return len(self.body)
