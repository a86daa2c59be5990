"""
Pytest fixtures for GameHub tests.
"""

import random

import pytest

from ..engine_core import Scheduler
from ..games.snake import SnakeConfig, SnakeEngine, Position
from ..games.simon import SimonEngine, SimonTiming
from ..games.memory import MemoryConfig, MemoryEngine


class ScriptedRandom(random.Random):
    """
    Random source whose choice() returns scripted values.

    Each call to choice() pops the next scripted value if it is among
    the candidates; otherwise it returns the first candidate.
    """

    def __init__(self, choices=None, seed=0):
        super().__init__(seed)
        self.choices = list(choices or [])

    def choice(self, seq):
        if self.choices and self.choices[0] in seq:
            return self.choices.pop(0)
        return seq[0]


class FakeClock:
    """Manually driven monotonic clock."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


# Binary-exact durations keep timing assertions free of float drift.
EXACT_TIMING = SimonTiming(
    note_duration=0.5,
    gap_duration=0.25,
    min_gap_duration=0.125,
    round_pause=0.5,
    tap_flash=0.125,
)


@pytest.fixture
def scheduler() -> Scheduler:
    return Scheduler()


@pytest.fixture
def snake_engine() -> SnakeEngine:
    """16x24 snake whose food always lands on (0, 0)."""
    return SnakeEngine(
        SnakeConfig(columns=16, rows=24, tick_interval=0.25),
        rng=ScriptedRandom(),
    )


@pytest.fixture
def feeding_snake_engine() -> SnakeEngine:
    """16x24 snake with food placed on the next three cells to its right."""
    return SnakeEngine(
        SnakeConfig(columns=16, rows=24, tick_interval=0.25),
        rng=ScriptedRandom([Position(8, 12), Position(9, 12), Position(10, 12)]),
    )


@pytest.fixture
def simon_engine() -> SimonEngine:
    return SimonEngine(timing=EXACT_TIMING, rng=random.Random(42))


@pytest.fixture
def memory_engine() -> MemoryEngine:
    return MemoryEngine(MemoryConfig(pairs_count=8), rng=random.Random(7))


@pytest.fixture
def revealed_memory_engine(memory_engine: MemoryEngine) -> MemoryEngine:
    """Memory engine past the reveal-all phase, ready for taps."""
    memory_engine.advance(0.7)
    return memory_engine


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
