"""
Session Manager - The hub that creates and tracks game sessions.

LIFECYCLE:
1. Shell picks a game from the hub -> create_session(game_type)
2. Session owns one engine and one GameLoop
3. During play:
   - Shell forwards input to the engine
   - Shell pumps the loop from its frame clock
   - Shell renders the snapshots
   - Shell detaches the loop while the screen is hidden
4. Shell leaves the game -> end_session()
   - Pending timers are cancelled
   - Session is dropped

PERSISTENCE RULES:
- Sessions live in memory only
- Scores are not kept across sessions
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable
import logging
import os
import random
import time
import uuid

from ..engine_core import GameEngine
from ..games.snake import SnakeConfig, SnakeEngine
from ..games.simon import SimonEngine
from ..games.memory import MemoryConfig, MemoryEngine
from .game_loop import GameLoop


logger = logging.getLogger(__name__)

SESSION_MAX_AGE = int(os.getenv("GAMEHUB_SESSION_MAX_AGE", "3600"))


class GameType(str, Enum):
    """Games available from the hub, in hub order."""
    MEMORY = "memory"
    SIMON = "simon"
    SNAKE = "snake"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()

    @property
    def icon(self) -> str:
        return _GAME_ICONS[self]


_GAME_ICONS = {
    GameType.MEMORY: "rectangle.on.rectangle.angled",
    GameType.SIMON: "square.grid.2x2.fill",
    GameType.SNAKE: "s.square.fill",
}


class SessionState(Enum):
    """State of a game session."""
    ACTIVE = "active"  # Attached to the clock
    PAUSED = "paused"  # Detached, screen not visible
    GAME_OVER = "game_over"  # Engine reached its terminal state
    ENDED = "ended"  # Removed from the hub


def create_engine(
    game_type: GameType | str,
    config: SnakeConfig | MemoryConfig | dict[str, Any] | None = None,
    seed: int | None = None,
) -> GameEngine:
    """
    Build an engine for `game_type`.

    `config` may be the game's config model or a plain dict of its
    fields. Simon takes no config.
    """
    try:
        game_type = GameType(game_type)
    except ValueError:
        raise ValueError(f"Unknown game type: {game_type}")

    rng = random.Random(seed)

    if game_type is GameType.SNAKE:
        if isinstance(config, dict):
            config = SnakeConfig(**config)
        return SnakeEngine(config=config, rng=rng)

    if game_type is GameType.MEMORY:
        if isinstance(config, dict):
            config = MemoryConfig(**config)
        return MemoryEngine(config=config, rng=rng)

    if config:
        raise ValueError("Simon does not accept configuration")
    return SimonEngine(rng=rng)


@dataclass
class Session:
    """
    One play-through of one game.

    Holds the engine and the loop that feeds it clock time.
    """
    session_id: str
    game_type: GameType
    engine: GameEngine
    loop: GameLoop
    created_at: float

    ended: bool = False

    @property
    def state(self) -> SessionState:
        if self.ended:
            return SessionState.ENDED
        if self.engine.snapshot().is_game_over:
            return SessionState.GAME_OVER
        if self.loop.is_attached:
            return SessionState.ACTIVE
        return SessionState.PAUSED

    def is_active(self) -> bool:
        """Check if the session is still playable."""
        return self.state in {SessionState.ACTIVE, SessionState.PAUSED}


class SessionManager:
    """
    Manages game sessions for the hub.

    No persistence - sessions are in-memory only.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self.clock = clock
        self._sessions: dict[str, Session] = {}

    def create_session(
        self,
        game_type: GameType | str,
        config: SnakeConfig | MemoryConfig | dict[str, Any] | None = None,
        seed: int | None = None,
        attach: bool = True,
    ) -> Session:
        """
        Create a new game session.

        Args:
            game_type: Which game to play
            config: Optional game config (model or dict)
            seed: Seed for the engine's random source
            attach: Attach to the clock right away

        Returns:
            New Session with a fresh game
        """
        engine = create_engine(game_type, config=config, seed=seed)
        loop = GameLoop(engine, clock=self.clock)
        if attach:
            loop.attach()
        else:
            loop.detach()

        session = Session(
            session_id=str(uuid.uuid4()),
            game_type=GameType(engine.game_type),
            engine=engine,
            loop=loop,
            created_at=self.clock(),
        )
        self._sessions[session.session_id] = session

        logger.info("Created %s session %s", session.game_type.value, session.session_id)
        return session

    def get_session(self, session_id: str) -> Session | None:
        """Get a session by ID."""
        return self._sessions.get(session_id)

    def end_session(self, session_id: str) -> bool:
        """
        End a session and clean up.

        The loop is detached and every pending engine timer is
        cancelled before the session is dropped.
        """
        session = self._sessions.pop(session_id, None)
        if not session:
            return False

        session.loop.detach()
        session.engine.scheduler.cancel_all()
        session.ended = True

        logger.info("Ended session %s", session_id)
        return True

    def list_active_sessions(self) -> list[str]:
        """List IDs of sessions that are still playable."""
        return [
            sid for sid, session in self._sessions.items()
            if session.is_active()
        ]

    def cleanup_stale_sessions(self, max_age_seconds: float | None = None) -> int:
        """
        Remove finished sessions older than max_age.

        Returns the number of sessions removed.
        """
        max_age = SESSION_MAX_AGE if max_age_seconds is None else max_age_seconds
        current_time = self.clock()

        to_remove = [
            session_id
            for session_id, session in self._sessions.items()
            if current_time - session.created_at > max_age and not session.is_active()
        ]
        for session_id in to_remove:
            self.end_session(session_id)

        return len(to_remove)
