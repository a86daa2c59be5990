"""
Snake Engine - Grid movement, collision and growth.

State machine: RUNNING -> GAME_OVER (terminal). reset() returns to a
fresh RUNNING game.

One tick:
1. Apply the buffered direction, if any
2. Move the head one cell
3. Wall hit -> game over
4. Self hit -> game over (the tail cell counts only when eating,
   since otherwise the tail vacates it this tick)
5. Commit: grow and respawn food when eating, else drop the tail

Invalid input is ignored silently.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import logging

from ...engine_core import GameEngine, TimerHandle
from .config import SnakeConfig, INITIAL_LENGTH
from .state import Direction, Position, SnakeState

if TYPE_CHECKING:
    import random
    from ...engine_core import Scheduler


logger = logging.getLogger(__name__)


class SnakeEngine(GameEngine):
    """
    Snake game engine.

    Usage:
        engine = SnakeEngine(SnakeConfig(columns=16, rows=24))
        engine.subscribe(render)

        engine.set_direction(Direction.UP)
        engine.advance(0.18)  # one tick
    """

    game_type = "snake"

    def __init__(
        self,
        config: SnakeConfig | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
    ):
        super().__init__(scheduler=scheduler, rng=rng)
        self.config = config or SnakeConfig()

        self._body: list[Position] = []
        self._direction = Direction.RIGHT
        self._next_direction: Direction | None = None
        self._food = Position(0, 0)
        self._score = 0
        self._game_over = False
        self._tick_timer: TimerHandle | None = None

        self.reset()

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def columns(self) -> int:
        return self.config.columns

    @property
    def rows(self) -> int:
        return self.config.rows

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def effective_direction(self) -> Direction:
        """The buffered direction if one is pending, else the current one."""
        return self._next_direction or self._direction

    @property
    def score(self) -> int:
        return self._score

    @property
    def is_game_over(self) -> bool:
        return self._game_over

    def snapshot(self) -> SnakeState:
        return SnakeState(
            columns=self.columns,
            rows=self.rows,
            body=tuple(self._body),
            direction=self._direction,
            pending_direction=self._next_direction,
            food=self._food,
            score=self._score,
            is_game_over=self._game_over,
        )

    # =========================================================================
    # Commands
    # =========================================================================

    def reset(
        self,
        columns: int | None = None,
        rows: int | None = None,
        tick_interval: float | None = None,
    ) -> None:
        """
        Start a new game, optionally with a new grid size or tick rate.

        An invalid setting raises ValidationError and leaves the current
        game running untouched.
        """
        updates = {
            key: value
            for key, value in (
                ("columns", columns),
                ("rows", rows),
                ("tick_interval", tick_interval),
            )
            if value is not None
        }
        if updates:
            self.config = SnakeConfig(**{**self.config.model_dump(), **updates})

        self._cancel_timer(self._tick_timer)
        self._tick_timer = None

        start_x = self.columns // 3
        start_y = self.rows // 2
        self._body = [
            Position(start_x + offset, start_y)
            for offset in reversed(range(INITIAL_LENGTH))
        ]
        self._direction = Direction.RIGHT
        self._next_direction = None
        self._game_over = False
        self._score = 0
        self._spawn_food()

        logger.info("New snake game on %dx%d grid", self.columns, self.rows)

        self._schedule_tick()
        self.start()
        self._publish()

    def set_direction(self, direction: Direction) -> None:
        """
        Buffer a turn for the next tick.

        Reversing into the neck is rejected. Later calls before the
        next tick overwrite the buffer.
        """
        if self._game_over:
            logger.debug("Ignoring direction %s after game over", direction.value)
            return
        if direction.is_opposite(self.effective_direction):
            logger.debug("Ignoring reversal to %s", direction.value)
            return

        self._next_direction = direction
        self._publish()

    def tick(self) -> None:
        """Advance the snake by one cell."""
        if self._game_over or not self._body:
            return

        if self._next_direction is not None:
            self._direction = self._next_direction
            self._next_direction = None

        new_head = self._body[0].moved(self._direction)

        if not new_head.in_bounds(self.columns, self.rows):
            self._end_game("wall")
            self._publish()
            return

        will_eat = new_head == self._food
        body_to_check = self._body if will_eat else self._body[:-1]
        if new_head in body_to_check:
            self._end_game("self")
            self._publish()
            return

        self._body.insert(0, new_head)
        if will_eat:
            self._score += 1
            self._spawn_food()
        else:
            self._body.pop()

        self._publish()

    # =========================================================================
    # Internals
    # =========================================================================

    def _schedule_tick(self):
        self._tick_timer = self.scheduler.schedule(
            self.config.tick_interval, self._on_tick, label="snake.tick"
        )

    def _on_tick(self):
        self._tick_timer = None
        self.tick()
        if not self._game_over:
            self._schedule_tick()

    def _spawn_food(self):
        """Place food on a random free cell. A full board ends the game."""
        occupied = set(self._body)
        free_cells = [
            Position(x, y)
            for y in range(self.rows)
            for x in range(self.columns)
            if Position(x, y) not in occupied
        ]
        if free_cells:
            self._food = self.rng.choice(free_cells)
        else:
            self._end_game("board full")

    def _end_game(self, reason: str):
        self._game_over = True
        self._next_direction = None
        self._cancel_timer(self._tick_timer)
        self._tick_timer = None
        logger.info("Snake game over (%s), score %d", reason, self._score)
