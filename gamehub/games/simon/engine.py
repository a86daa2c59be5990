"""
Simon Engine - Sequence memory game.

State machine:
    IDLE -> PLAYING_BACK -> AWAITING_INPUT
         -> ROUND_COMPLETE -> PLAYING_BACK (next, longer round)
         -> GAME_OVER (first wrong tap)

Playback is a chain of timers with exact durations: note i lights at
t0 + i * (note + gap), goes dark `note` later, and input opens once the
last gap has passed. Every `speedup_every` rounds both durations shrink
by `speed_multiplier`; the gap never drops below `min_gap_duration`.

Tap correctness is evaluated synchronously. Only the tap highlight is
deferred, so fast tapping cannot desynchronize progress.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import logging

from ...engine_core import GameEngine, TimerHandle
from .state import SimonPad, SimonPhase, SimonState, SimonTiming

if TYPE_CHECKING:
    import random
    from ...engine_core import Scheduler


logger = logging.getLogger(__name__)


class SimonEngine(GameEngine):
    """
    Simon game engine.

    Usage:
        engine = SimonEngine()       # first round starts playing back
        engine.advance(0.72)         # one note + one gap
        engine.tap(SimonPad.RED)     # once accepting_input is True
    """

    game_type = "simon"

    def __init__(
        self,
        timing: SimonTiming | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
    ):
        super().__init__(scheduler=scheduler, rng=rng)
        self.timing = timing or SimonTiming()

        self._sequence: list[SimonPad] = []
        self._phase = SimonPhase.IDLE
        self._playback_index: int | None = None
        self._highlighted: SimonPad | None = None
        self._accepting_input = False
        self._user_index = 0
        self._score = 0
        self._game_over = False
        self._note_duration = self.timing.note_duration
        self._gap_duration = self.timing.gap_duration

        # Timer slots
        self._playback_timer: TimerHandle | None = None
        self._round_timer: TimerHandle | None = None
        self._flash_timer: TimerHandle | None = None

        self.new_game()

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def sequence(self) -> tuple[SimonPad, ...]:
        return tuple(self._sequence)

    @property
    def phase(self) -> SimonPhase:
        return self._phase

    @property
    def user_index(self) -> int:
        return self._user_index

    @property
    def score(self) -> int:
        return self._score

    @property
    def accepting_input(self) -> bool:
        return self._accepting_input

    @property
    def highlighted_pad(self) -> SimonPad | None:
        return self._highlighted

    @property
    def note_duration(self) -> float:
        return self._note_duration

    @property
    def gap_duration(self) -> float:
        return self._gap_duration

    @property
    def is_game_over(self) -> bool:
        return self._game_over

    def snapshot(self) -> SimonState:
        return SimonState(
            phase=self._phase,
            sequence_length=len(self._sequence),
            playback_index=self._playback_index,
            highlighted_pad=self._highlighted,
            accepting_input=self._accepting_input,
            user_index=self._user_index,
            score=self._score,
            note_duration=self._note_duration,
            gap_duration=self._gap_duration,
            is_game_over=self._game_over,
        )

    # =========================================================================
    # Commands
    # =========================================================================

    def new_game(self) -> None:
        """Clear the sequence, score and difficulty, then start round one."""
        self._cancel_all_timers()

        self._sequence = []
        self._score = 0
        self._game_over = False
        self._accepting_input = False
        self._playback_index = None
        self._user_index = 0
        self._highlighted = None
        self._note_duration = self.timing.note_duration
        self._gap_duration = self.timing.gap_duration
        self._phase = SimonPhase.IDLE

        logger.info("New simon game")
        self._start_turn()

    def reset(self) -> None:
        self.new_game()

    def tap(self, pad: SimonPad) -> None:
        """Evaluate a pad tap against the sequence."""
        if (
            not self._accepting_input
            or self._phase is not SimonPhase.AWAITING_INPUT
            or self._game_over
        ):
            logger.debug("Ignoring tap on %s in phase %s", pad.name, self._phase.value)
            return

        self._flash(pad)

        expected = self._sequence[self._user_index]
        if pad is not expected:
            self._end_game()
            return

        self._user_index += 1
        if self._user_index == len(self._sequence):
            self._complete_round()

        self._publish()

    # =========================================================================
    # Round cycle
    # =========================================================================

    def _start_turn(self):
        self._round_timer = None
        self._sequence.append(self.rng.choice(list(SimonPad)))
        self._user_index = 0
        self._play_sequence()

    def _play_sequence(self):
        self._cancel_timer(self._playback_timer)
        self._cancel_timer(self._flash_timer)
        self._flash_timer = None

        self._phase = SimonPhase.PLAYING_BACK
        self._accepting_input = False
        self._playback_index = None
        self._highlighted = None
        self._begin_note(0)

    def _begin_note(self, index: int):
        self._playback_index = index
        self._highlighted = self._sequence[index]
        self._playback_timer = self.scheduler.schedule(
            self._note_duration,
            lambda: self._end_note(index),
            label="simon.note_off",
        )
        self._publish()

    def _end_note(self, index: int):
        self._highlighted = None
        next_index = index + 1
        if next_index < len(self._sequence):
            callback = lambda: self._begin_note(next_index)
        else:
            callback = self._finish_playback
        self._playback_timer = self.scheduler.schedule(
            self._gap_duration, callback, label="simon.gap"
        )
        self._publish()

    def _finish_playback(self):
        self._playback_timer = None
        self._playback_index = None
        self._highlighted = None
        self._accepting_input = True
        self._phase = SimonPhase.AWAITING_INPUT
        self._publish()

    def _complete_round(self):
        self._score += 1
        self._accepting_input = False
        self._phase = SimonPhase.ROUND_COMPLETE

        if self._score % self.timing.speedup_every == 0:
            self._note_duration *= self.timing.speed_multiplier
            self._gap_duration = max(
                self.timing.min_gap_duration,
                self._gap_duration * self.timing.speed_multiplier,
            )
            logger.debug(
                "Speed-up after round %d: note=%.3fs gap=%.3fs",
                self._score, self._note_duration, self._gap_duration,
            )

        self._cancel_timer(self._round_timer)
        self._round_timer = self.scheduler.schedule(
            self.timing.round_pause, self._start_turn, label="simon.next_round"
        )

    def _flash(self, pad: SimonPad):
        """Briefly light a tapped pad."""
        self._cancel_timer(self._flash_timer)
        self._highlighted = pad
        self._flash_timer = self.scheduler.schedule(
            self.timing.tap_flash, self._clear_flash, label="simon.tap_flash"
        )

    def _clear_flash(self):
        self._flash_timer = None
        self._highlighted = None
        self._publish()

    def _end_game(self):
        self._game_over = True
        self._accepting_input = False
        self._phase = SimonPhase.GAME_OVER
        self._playback_index = None
        self._highlighted = None
        self._cancel_all_timers()
        logger.info("Simon game over, score %d", self._score)
        self._publish()

    def _cancel_all_timers(self):
        for handle in (self._playback_timer, self._round_timer, self._flash_timer):
            self._cancel_timer(handle)
        self._playback_timer = None
        self._round_timer = None
        self._flash_timer = None
