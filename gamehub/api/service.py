"""
Hub Service - Business logic layer between the shell and the engines.

The service:
1. Lists the games on the hub
2. Creates and ends sessions
3. Routes player input to the right engine
4. Pumps clock time into sessions
5. Converts engine snapshots to response models

This layer is framework-agnostic. A shell calls it in-process.
Unknown sessions and input that does not fit the game come back as
ErrorResponse values; input that the game rules reject is ignored by
the engine and simply leaves the snapshot unchanged.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

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
from ..session import SessionManager, Session, GameType
from ..games.snake import Direction, SnakeEngine, SnakeState
from ..games.simon import SimonEngine, SimonPad, SimonState
from ..games.memory import MemoryEngine, MemoryState


@dataclass
class HubService:
    """
    Main service for the presentation shell.

    Usage:
        service = HubService()

        # Open a game
        response = service.create_session(CreateSessionRequest(game_type="snake"))

        # Every frame
        frame = service.pump(response.session_id)

        # Player input
        service.send_input(response.session_id, InputRequest(direction="up"))
    """
    session_manager: SessionManager = field(default_factory=SessionManager)

    def list_games(self) -> HubResponse:
        """Games offered by the hub."""
        return HubResponse(games=[
            GameInfo(game_type=game_type, name=game_type.display_name, icon=game_type.icon)
            for game_type in GameType
        ])

    def create_session(
        self, request: CreateSessionRequest
    ) -> SessionResponse | ErrorResponse:
        """Create a new game session."""
        config = self._config_for(request.game_type, request.snake, request.memory)
        try:
            session = self.session_manager.create_session(
                request.game_type,
                config=config,
                seed=request.seed,
                attach=request.attach,
            )
        except (ValueError, ValidationError) as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.VALIDATION_ERROR,
            )

        return self._session_to_response(session)

    def get_session(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Get the current status and snapshot of a session."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        return self._session_to_response(session)

    def send_input(
        self, session_id: str, request: InputRequest
    ) -> SessionResponse | ErrorResponse:
        """Forward a player input to the session's engine."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        engine = session.engine
        if isinstance(engine, SnakeEngine):
            if request.direction is None:
                return self._invalid_input(session, "direction")
            engine.set_direction(Direction(request.direction.value))
        elif isinstance(engine, SimonEngine):
            if request.pad is None:
                return self._invalid_input(session, "pad")
            engine.tap(SimonPad[request.pad.name])
        elif isinstance(engine, MemoryEngine):
            if request.card_id is None:
                return self._invalid_input(session, "card_id")
            engine.tap_card(request.card_id)

        return self._session_to_response(session)

    def pump(
        self, session_id: str, timestamp: float | None = None
    ) -> PumpResponse | ErrorResponse:
        """Pass clock time into a session."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        result = session.loop.pump(timestamp)
        return PumpResponse(
            session_id=session_id,
            elapsed=result.elapsed,
            callbacks_fired=result.callbacks_fired,
            session=self._session_to_response(session),
        )

    def pause(self, session_id: str) -> SessionResponse | ErrorResponse:
        """Detach a session from the clock (screen hidden)."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        session.loop.detach()
        return self._session_to_response(session)

    def resume(
        self, session_id: str, timestamp: float | None = None
    ) -> SessionResponse | ErrorResponse:
        """Reattach a session to the clock (screen visible again)."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)
        session.loop.attach(timestamp)
        return self._session_to_response(session)

    def restart_session(
        self, session_id: str, request: RestartRequest | None = None
    ) -> SessionResponse | ErrorResponse:
        """Start a fresh game in an existing session."""
        session = self.session_manager.get_session(session_id)
        if not session:
            return self._not_found(session_id)

        request = request or RestartRequest()
        engine = session.engine
        if isinstance(engine, SnakeEngine) and request.snake:
            engine.reset(
                columns=request.snake.columns,
                rows=request.snake.rows,
                tick_interval=request.snake.tick_interval,
            )
        elif isinstance(engine, MemoryEngine) and request.memory:
            engine.start_new_game(
                pairs_count=request.memory.pairs_count,
                content_set=request.memory.content_set,
            )
        else:
            engine.reset()

        if not session.loop.is_attached:
            engine.stop()

        return self._session_to_response(session)

    def end_session(self, session_id: str) -> EndSessionResponse:
        """End a game session and release its timers."""
        success = self.session_manager.end_session(session_id)
        return EndSessionResponse(success=success, session_id=session_id)

    def list_sessions(self) -> SessionListResponse:
        """List active session IDs."""
        sessions = self.session_manager.list_active_sessions()
        return SessionListResponse(sessions=sessions, count=len(sessions))

    # =========================================================================
    # Conversion helpers
    # =========================================================================

    def _config_for(self, game_type: GameType, snake: Any, memory: Any) -> Any:
        if game_type is GameType.SNAKE:
            return snake
        if game_type is GameType.MEMORY:
            return memory
        return None

    def _session_to_response(self, session: Session) -> SessionResponse:
        snapshot = session.engine.snapshot()
        response = SessionResponse(
            session_id=session.session_id,
            game_type=session.game_type,
            status=SessionStatus(session.state.value),
        )

        if isinstance(snapshot, SnakeState):
            response.snake = snake_snapshot(snapshot)
        elif isinstance(snapshot, SimonState):
            response.simon = simon_snapshot(snapshot)
        elif isinstance(snapshot, MemoryState):
            response.memory = memory_snapshot(snapshot)

        return response

    def _not_found(self, session_id: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"Session {session_id} not found",
            error_code=ErrorCode.SESSION_NOT_FOUND,
        )

    def _invalid_input(self, session: Session, expected_field: str) -> ErrorResponse:
        return ErrorResponse(
            error=f"{session.game_type.display_name} input requires '{expected_field}'",
            error_code=ErrorCode.INVALID_INPUT,
            details={"game_type": session.game_type.value, "field": expected_field},
        )


def snake_snapshot(state: SnakeState) -> SnakeSnapshot:
    """Convert a SnakeState to its response model."""
    return SnakeSnapshot(
        columns=state.columns,
        rows=state.rows,
        body=[PositionInfo.model_validate(p) for p in state.body],
        direction=DirectionInput(state.direction.value),
        pending_direction=(
            DirectionInput(state.pending_direction.value)
            if state.pending_direction else None
        ),
        food=PositionInfo.model_validate(state.food),
        score=state.score,
        length=state.length,
        is_game_over=state.is_game_over,
    )


def simon_snapshot(state: SimonState) -> SimonSnapshot:
    """Convert a SimonState to its response model."""
    pad = state.highlighted_pad
    return SimonSnapshot(
        phase=state.phase.value,
        highlighted_pad=PadInput[pad.name] if pad else None,
        highlight_color=pad.highlight_color if pad else None,
        is_playing_back=state.is_playing_back,
        accepting_input=state.accepting_input,
        sequence_length=state.sequence_length,
        user_index=state.user_index,
        playback_index=state.playback_index,
        score=state.score,
        is_game_over=state.is_game_over,
    )


def memory_snapshot(state: MemoryState) -> MemorySnapshot:
    """Convert a MemoryState to its response model."""
    return MemorySnapshot(
        cards=[
            CardInfo(
                card_id=card.id,
                content=card.content,
                is_face_up=card.is_face_up,
                is_matched=card.is_matched,
            )
            for card in state.cards
        ],
        score=state.score,
        moves=state.moves,
        status=state.status.value,
        is_game_over=state.is_game_over,
        is_revealing=state.is_revealing,
        pairs_count=state.pairs_count,
        content_set=state.content_set.value,
    )
