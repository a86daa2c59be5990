"""
Scheduler - Cooperative timer queue over a logical monotonic clock.

The scheduler holds no thread and no real timer. Time only moves when
the owner calls advance(). Due timers fire in fire-time order, and a
callback that schedules a follow-up inside the same window fires in the
same call, with `now` set to each timer's own fire time. Chained delays
therefore add up exactly, whatever the size of the advance steps.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable
import heapq
import itertools


@dataclass(eq=False)
class TimerHandle:
    """
    A single-shot deferred callback.

    Engines keep one handle per concern (a "timer slot") and cancel it
    before scheduling the next one.
    """
    fire_at: float
    callback: Callable[[], None] = field(repr=False)
    label: str = ""
    cancelled: bool = False
    fired: bool = False

    @property
    def active(self) -> bool:
        """True while the timer is still waiting to fire."""
        return not (self.cancelled or self.fired)

    def cancel(self):
        """Cancel the timer. No-op if it already fired."""
        if not self.fired:
            self.cancelled = True


class Scheduler:
    """
    Timer queue driven by explicit advance calls.

    Usage:
        scheduler = Scheduler()
        handle = scheduler.schedule(0.7, flip_back, label="memory.flip_back")

        scheduler.advance(0.5)   # nothing fires
        scheduler.advance(0.2)   # flip_back fires
    """

    def __init__(self, start_time: float = 0.0):
        self._now = start_time
        self._queue: list[tuple[float, int, TimerHandle]] = []
        self._counter = itertools.count()
        self._running = True
        self._advancing = False

    @property
    def now(self) -> float:
        """Current logical time in seconds."""
        return self._now

    @property
    def running(self) -> bool:
        return self._running

    @property
    def pending(self) -> int:
        """Number of timers that have not fired and are not cancelled."""
        return sum(1 for _, _, handle in self._queue if handle.active)

    def schedule(
        self,
        delay: float,
        callback: Callable[[], None],
        label: str = "",
    ) -> TimerHandle:
        """Schedule callback to fire `delay` seconds from now."""
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay}")

        handle = TimerHandle(fire_at=self._now + delay, callback=callback, label=label)
        heapq.heappush(self._queue, (handle.fire_at, next(self._counter), handle))
        return handle

    def advance(self, elapsed: float) -> int:
        """
        Move logical time forward and fire every due timer.

        Returns the number of callbacks fired. A paused scheduler
        ignores the call and its clock stays where it is.
        """
        if elapsed < 0:
            raise ValueError(f"Cannot advance by a negative interval: {elapsed}")
        if self._advancing:
            raise RuntimeError("Scheduler.advance() called from inside a timer callback")
        if not self._running:
            return 0

        target = self._now + elapsed
        fired = 0
        self._advancing = True
        try:
            while self._queue and self._queue[0][0] <= target:
                fire_at, _, handle = heapq.heappop(self._queue)
                if not handle.active:
                    continue
                self._now = fire_at
                handle.fired = True
                handle.callback()
                fired += 1
            self._now = target
        finally:
            self._advancing = False

        return fired

    def pause(self):
        """Detach from the clock. Pending timers keep their remaining time."""
        self._running = False

    def resume(self):
        """Reattach to the clock."""
        self._running = True

    def cancel_all(self):
        """Cancel and drop every pending timer."""
        for _, _, handle in self._queue:
            handle.cancel()
        self._queue.clear()
