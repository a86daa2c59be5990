"""
Simon State - Pads, phases, timing defaults and the immutable snapshot.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field


class SimonPad(Enum):
    """The four colored pads."""
    GREEN = 0
    RED = 1
    YELLOW = 2
    BLUE = 3

    @property
    def color(self) -> str:
        """Display color (hex RGB)."""
        return _PAD_COLORS[self][0]

    @property
    def highlight_color(self) -> str:
        """Color while lit (hex RGB)."""
        return _PAD_COLORS[self][1]


_PAD_COLORS = {
    SimonPad.GREEN: ("#34C759", "#5EE07F"),
    SimonPad.RED: ("#FF3B30", "#FF6B63"),
    SimonPad.YELLOW: ("#FFCC00", "#FFE066"),
    SimonPad.BLUE: ("#007AFF", "#4DA3FF"),
}


class SimonPhase(Enum):
    """Where the engine is in the round cycle."""
    IDLE = "idle"
    PLAYING_BACK = "playing_back"
    AWAITING_INPUT = "awaiting_input"
    ROUND_COMPLETE = "round_complete"
    GAME_OVER = "game_over"


class SimonTiming(BaseModel):
    """
    Timing and difficulty constants.

    These are internal defaults, not player-facing settings.
    """
    note_duration: float = Field(0.5, gt=0)
    gap_duration: float = Field(0.22, gt=0)
    min_gap_duration: float = Field(0.12, gt=0)
    speedup_every: int = Field(4, ge=1, description="Rounds between speed-ups")
    speed_multiplier: float = Field(0.92, gt=0, le=1)
    round_pause: float = Field(0.45, ge=0, description="Pause before the next round")
    tap_flash: float = Field(0.15, gt=0, description="Highlight time for a tapped pad")

    model_config = {"frozen": True}


@dataclass(frozen=True)
class SimonState:
    """Snapshot of a Simon game. The sequence itself stays inside the engine."""
    phase: SimonPhase
    sequence_length: int
    playback_index: int | None
    highlighted_pad: SimonPad | None
    accepting_input: bool
    user_index: int
    score: int
    note_duration: float
    gap_duration: float
    is_game_over: bool

    @property
    def is_playing_back(self) -> bool:
        return self.phase is SimonPhase.PLAYING_BACK
