"""
Game Engine - Interface every mini-game engine implements.

An engine is a single-threaded state machine:
- snapshot() returns an immutable view of the current state
- input methods (set_direction, tap, tap_card) mutate state
- advance() passes clock time into the engine's scheduler
- listeners are notified synchronously after every mutation

The shell never touches engine fields directly.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, Callable
import random

from .scheduler import Scheduler, TimerHandle


Listener = Callable[[Any], None]


class GameEngine(ABC):
    """
    Abstract base class for game engines.

    Subclasses own all of their state and call _publish() once per
    state transition.
    """

    game_type: str = ""

    def __init__(
        self,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
    ):
        self.scheduler = scheduler or Scheduler()
        self.rng = rng or random.Random()
        self._listeners: list[Listener] = []

    @abstractmethod
    def snapshot(self) -> Any:
        """Return an immutable snapshot of the current state."""
        pass

    @abstractmethod
    def reset(self) -> None:
        """
        Start a fresh game.

        Must cancel every pending deferred action before reinitializing
        state, so that no stale callback can touch the new game.
        """
        pass

    @property
    def is_running(self) -> bool:
        """Whether the engine is attached to the clock."""
        return self.scheduler.running

    def start(self):
        """Attach to the clock."""
        self.scheduler.resume()

    def stop(self):
        """Detach from the clock. Timers keep their remaining time."""
        self.scheduler.pause()

    def advance(self, elapsed: float) -> int:
        """Pass `elapsed` seconds of clock time into the engine."""
        return self.scheduler.advance(elapsed)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for state snapshots.

        Returns a callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _publish(self):
        """Notify listeners with a fresh snapshot."""
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    def _cancel_timer(self, handle: TimerHandle | None) -> None:
        if handle is not None:
            handle.cancel()
