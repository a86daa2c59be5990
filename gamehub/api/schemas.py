"""
Pydantic Schemas - Request/response models for the presentation shell.

These models define the exact contract between the shell and the
engines. Snapshots are flattened to plain values (names, not enum
members) so a shell can render them or hand them to a view layer as
JSON.

Error Codes:
- SESSION_NOT_FOUND: Session does not exist or has ended
- INVALID_INPUT: Input does not fit the session's game
- VALIDATION_ERROR: Request fields failed validation
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field

from ..games.snake import SnakeConfig
from ..games.memory import MemoryConfig
from ..session import GameType


# =============================================================================
# Enums
# =============================================================================

class SessionStatus(str, Enum):
    """Session status values."""
    ACTIVE = "active"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    ENDED = "ended"


class DirectionInput(str, Enum):
    """Snake turn directions."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class PadInput(str, Enum):
    """Simon pads."""
    GREEN = "green"
    RED = "red"
    YELLOW = "yellow"
    BLUE = "blue"


class ErrorCode(str, Enum):
    """Structured error codes."""
    SESSION_NOT_FOUND = "SESSION_NOT_FOUND"
    INVALID_INPUT = "INVALID_INPUT"
    VALIDATION_ERROR = "VALIDATION_ERROR"


# =============================================================================
# Hub
# =============================================================================

class GameInfo(BaseModel):
    """One entry on the hub screen."""
    game_type: GameType
    name: str
    icon: str


class HubResponse(BaseModel):
    """Games offered by the hub, in display order."""
    games: list[GameInfo] = Field(default_factory=list)


# =============================================================================
# Snapshots
# =============================================================================

class PositionInfo(BaseModel):
    """A grid cell."""
    x: int
    y: int

    model_config = {"from_attributes": True}


class SnakeSnapshot(BaseModel):
    """Snake state for rendering."""
    columns: int
    rows: int
    body: list[PositionInfo] = Field(description="Head first")
    direction: DirectionInput
    pending_direction: Optional[DirectionInput] = None
    food: PositionInfo
    score: int = 0
    length: int
    is_game_over: bool = False


class SimonSnapshot(BaseModel):
    """Simon state for rendering."""
    phase: str = Field(description="idle, playing_back, awaiting_input, round_complete, game_over")
    highlighted_pad: Optional[PadInput] = None
    highlight_color: Optional[str] = None
    is_playing_back: bool = False
    accepting_input: bool = False
    sequence_length: int = 0
    user_index: int = 0
    playback_index: Optional[int] = None
    score: int = 0
    is_game_over: bool = False


class CardInfo(BaseModel):
    """A Memory card for display."""
    card_id: str
    content: str
    is_face_up: bool = False
    is_matched: bool = False


class MemorySnapshot(BaseModel):
    """Memory state for rendering."""
    cards: list[CardInfo] = Field(default_factory=list)
    score: int = 0
    moves: int = 0
    status: str
    is_game_over: bool = False
    is_revealing: bool = False
    pairs_count: int
    content_set: str


# =============================================================================
# Requests
# =============================================================================

class CreateSessionRequest(BaseModel):
    """Open a game from the hub."""
    game_type: GameType
    snake: Optional[SnakeConfig] = None
    memory: Optional[MemoryConfig] = None
    seed: Optional[int] = Field(None, description="Seed for a reproducible game")
    attach: bool = Field(True, description="Attach to the clock immediately")


class InputRequest(BaseModel):
    """
    A player input.

    Exactly the field matching the session's game is used:
    direction (snake), pad (simon) or card_id (memory).
    """
    direction: Optional[DirectionInput] = None
    pad: Optional[PadInput] = None
    card_id: Optional[str] = None


class RestartRequest(BaseModel):
    """Start a fresh game in an existing session."""
    snake: Optional[SnakeConfig] = None
    memory: Optional[MemoryConfig] = None


# =============================================================================
# Responses
# =============================================================================

class SessionResponse(BaseModel):
    """Session status plus the snapshot of its game."""
    session_id: str
    game_type: GameType
    status: SessionStatus
    snake: Optional[SnakeSnapshot] = None
    simon: Optional[SimonSnapshot] = None
    memory: Optional[MemorySnapshot] = None


class PumpResponse(BaseModel):
    """Result of passing clock time into a session."""
    session_id: str
    elapsed: float = 0.0
    callbacks_fired: int = 0
    session: SessionResponse


class SessionListResponse(BaseModel):
    """Active session IDs."""
    sessions: list[str] = Field(default_factory=list)
    count: int = 0


class EndSessionResponse(BaseModel):
    """Result of ending a session."""
    success: bool
    session_id: str


class ErrorResponse(BaseModel):
    """Structured error."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None
