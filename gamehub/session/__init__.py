"""
Session Module - The hub and its clock drivers.

A session represents one play-through of one mini-game:
- Created when the player opens a game from the hub
- Holds the engine and the loop that feeds it time
- Paused while the game screen is not visible
- Destroyed when the player leaves

Sessions are EPHEMERAL: nothing is persisted.
"""

from .manager import SessionManager, Session, SessionState, GameType, create_engine
from .game_loop import GameLoop, LoopState, PumpResult

__all__ = [
    "SessionManager",
    "Session",
    "SessionState",
    "GameType",
    "create_engine",
    "GameLoop",
    "LoopState",
    "PumpResult",
]
