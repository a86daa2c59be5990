"""
Simon - growing pad sequence, timed playback and input matching.
"""

from .state import SimonPad, SimonPhase, SimonState, SimonTiming
from .engine import SimonEngine

__all__ = [
    "SimonPad",
    "SimonPhase",
    "SimonState",
    "SimonTiming",
    "SimonEngine",
]
