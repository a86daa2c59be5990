"""
Engine Core - Shared contract for all game engines.

Every engine:
1. Owns its state exclusively
2. Publishes an immutable snapshot after each change
3. Accepts discrete input calls
4. Advances only when an external driver passes time in
5. Schedules delays as cancellable timers, never as blocking waits
"""

from .scheduler import Scheduler, TimerHandle
from .engine import GameEngine, Listener

__all__ = [
    "Scheduler",
    "TimerHandle",
    "GameEngine",
    "Listener",
]
