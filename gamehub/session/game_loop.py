"""
Game Loop - Feeds monotonic clock time into one engine.

The shell calls pump() from its frame loop (or a timer of its own):
1. Shell attaches the loop when the game screen becomes visible
2. Every frame, pump() passes the time since the last pump to the engine
3. Engine fires any due ticks and deferred actions
4. Shell renders the snapshot it gets back
5. Shell detaches the loop when the screen goes away

While detached, clock time never reaches the engine, so pending
timers resume with their remaining time after the next attach.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, TYPE_CHECKING
import time

if TYPE_CHECKING:
    from ..engine_core import GameEngine


class LoopState(Enum):
    """Whether the loop is passing time to its engine."""
    DETACHED = "detached"
    ATTACHED = "attached"


@dataclass
class PumpResult:
    """Outcome of one pump call."""
    loop_state: LoopState
    elapsed: float
    callbacks_fired: int
    snapshot: Any


class GameLoop:
    """
    Clock driver for a single engine.

    Usage:
        loop = GameLoop(engine)
        loop.attach()

        # every frame
        result = loop.pump()
        render(result.snapshot)

        # screen hidden
        loop.detach()
    """

    def __init__(
        self,
        engine: GameEngine,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.engine = engine
        self.clock = clock
        self.state = LoopState.DETACHED
        self._last_timestamp: float | None = None

    @property
    def is_attached(self) -> bool:
        return self.state is LoopState.ATTACHED

    def attach(self, timestamp: float | None = None):
        """Start passing time to the engine from `timestamp` onward."""
        self._last_timestamp = self.clock() if timestamp is None else timestamp
        self.state = LoopState.ATTACHED
        self.engine.start()

    def detach(self):
        """Stop passing time to the engine."""
        self.state = LoopState.DETACHED
        self._last_timestamp = None
        self.engine.stop()

    def pump(self, timestamp: float | None = None) -> PumpResult:
        """
        Advance the engine to `timestamp` (defaults to the clock).

        A timestamp earlier than the previous one advances nothing.
        """
        now = self.clock() if timestamp is None else timestamp

        if not self.is_attached or self._last_timestamp is None:
            return PumpResult(
                loop_state=self.state,
                elapsed=0.0,
                callbacks_fired=0,
                snapshot=self.engine.snapshot(),
            )

        elapsed = max(0.0, now - self._last_timestamp)
        self._last_timestamp = max(now, self._last_timestamp)
        fired = self.engine.advance(elapsed)

        return PumpResult(
            loop_state=self.state,
            elapsed=elapsed,
            callbacks_fired=fired,
            snapshot=self.engine.snapshot(),
        )
