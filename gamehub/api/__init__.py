"""
API Module - Interface for the presentation shell.

The shell:
1. Lists the hub's games
2. Opens a session for the chosen game
3. Pumps clock time every frame and renders the snapshot
4. Forwards taps and swipes as input
5. Pauses, restarts or ends the session

Everything runs in-process; there is no network surface.
"""

from .schemas import (
    # Requests
    CreateSessionRequest,
    InputRequest,
    RestartRequest,
    # Responses
    HubResponse,
    GameInfo,
    SessionResponse,
    PumpResponse,
    SessionListResponse,
    EndSessionResponse,
    ErrorResponse,
    # Snapshots
    SnakeSnapshot,
    SimonSnapshot,
    MemorySnapshot,
    PositionInfo,
    CardInfo,
    # Enums
    SessionStatus,
    ErrorCode,
    DirectionInput,
    PadInput,
)
from .service import HubService

__all__ = [
    # Requests
    "CreateSessionRequest",
    "InputRequest",
    "RestartRequest",
    # Responses
    "HubResponse",
    "GameInfo",
    "SessionResponse",
    "PumpResponse",
    "SessionListResponse",
    "EndSessionResponse",
    "ErrorResponse",
    # Snapshots
    "SnakeSnapshot",
    "SimonSnapshot",
    "MemorySnapshot",
    "PositionInfo",
    "CardInfo",
    # Enums
    "SessionStatus",
    "ErrorCode",
    "DirectionInput",
    "PadInput",
    # Service
    "HubService",
]
