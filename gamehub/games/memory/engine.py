"""
Memory Engine - Card matching with a two-card selection window.

Per pair of taps:
    NO_SELECTION -> ONE_SELECTED -> match    -> NO_SELECTION (score + 1)
                                 -> mismatch -> flip-back pending
                                             -> NO_SELECTION after the delay

A new game briefly shows every card face up (reveal-all) before play.
A tap that arrives while a flip-back is still pending resolves it at
once: the mismatched pair goes face down and the timer is cancelled.
"""

from __future__ import annotations
from dataclasses import replace
from typing import TYPE_CHECKING
import logging
import uuid

from ...engine_core import GameEngine, TimerHandle
from .config import MemoryConfig, REVEAL_DURATION, FLIP_BACK_DELAY
from .state import ContentSet, MemoryCard, MemoryState, MemoryStatus

if TYPE_CHECKING:
    import random
    from ...engine_core import Scheduler


logger = logging.getLogger(__name__)


class MemoryEngine(GameEngine):
    """
    Memory game engine.

    Usage:
        engine = MemoryEngine(MemoryConfig(pairs_count=8))
        engine.advance(0.7)             # end of reveal-all
        engine.tap_card(card.id)
    """

    game_type = "memory"

    def __init__(
        self,
        config: MemoryConfig | None = None,
        scheduler: Scheduler | None = None,
        rng: random.Random | None = None,
    ):
        super().__init__(scheduler=scheduler, rng=rng)
        self.config = config or MemoryConfig()

        self._cards: list[MemoryCard] = []
        self._score = 0
        self._moves = 0
        self._status = MemoryStatus.READY
        self._game_over = False
        self._first_selected: int | None = None
        self._mismatched: tuple[int, int] | None = None

        # Timer slots
        self._reveal_timer: TimerHandle | None = None
        self._flip_back_timer: TimerHandle | None = None

        self.start_new_game()

    # =========================================================================
    # Read access
    # =========================================================================

    @property
    def cards(self) -> tuple[MemoryCard, ...]:
        return tuple(self._cards)

    @property
    def score(self) -> int:
        return self._score

    @property
    def moves(self) -> int:
        return self._moves

    @property
    def status(self) -> MemoryStatus:
        return self._status

    @property
    def is_game_over(self) -> bool:
        return self._game_over

    @property
    def is_revealing(self) -> bool:
        return self._reveal_timer is not None and self._reveal_timer.active

    def snapshot(self) -> MemoryState:
        return MemoryState(
            cards=tuple(self._cards),
            score=self._score,
            moves=self._moves,
            status=self._status,
            is_game_over=self._game_over,
            is_revealing=self.is_revealing,
            pairs_count=self.config.pairs_count,
            content_set=self.config.content_set,
        )

    # =========================================================================
    # Commands
    # =========================================================================

    def start_new_game(
        self,
        pairs_count: int | None = None,
        content_set: ContentSet | None = None,
    ) -> None:
        """
        Deal a fresh shuffled deck and start the reveal-all phase.

        An invalid setting raises ValidationError and leaves the current
        game untouched, pending reveal or flip-back included.
        """
        updates = {}
        if pairs_count is not None:
            updates["pairs_count"] = pairs_count
        if content_set is not None:
            updates["content_set"] = content_set
        if updates:
            self.config = MemoryConfig(**{**self.config.model_dump(), **updates})

        self._cancel_timer(self._reveal_timer)
        self._cancel_timer(self._flip_back_timer)
        self._reveal_timer = None
        self._flip_back_timer = None

        self._score = 0
        self._moves = 0
        self._game_over = False
        self._first_selected = None
        self._mismatched = None
        self._status = MemoryStatus.MEMORIZE

        contents = self.rng.sample(self.config.content_set.items, self.config.pairs_count)
        deck = [
            MemoryCard(id=self._new_card_id(), content=content, is_face_up=True)
            for content in contents
            for _ in range(2)
        ]
        self.rng.shuffle(deck)
        self._cards = deck

        logger.info(
            "New memory game: %d pairs of %s",
            self.config.pairs_count, self.config.content_set.value,
        )

        self._reveal_timer = self.scheduler.schedule(
            REVEAL_DURATION, self._end_reveal, label="memory.reveal"
        )
        self._publish()

    def reset(
        self,
        pairs_count: int | None = None,
        content_set: ContentSet | None = None,
    ) -> None:
        self.start_new_game(pairs_count=pairs_count, content_set=content_set)

    def tap_card(self, card_id: str) -> None:
        """Flip a face-down card and resolve the selection window."""
        index = self._index_of(card_id)
        if index is None:
            logger.debug("Ignoring tap on unknown card %s", card_id)
            return

        card = self._cards[index]
        if card.is_face_up or card.is_matched or self._game_over:
            logger.debug("Ignoring tap on card %s", card_id)
            return

        if self._flip_back_timer is not None:
            self._flip_back_now()

        self._cards[index] = replace(card, is_face_up=True)

        if self._first_selected is None:
            self._first_selected = index
            self._status = MemoryStatus.PICK_ANOTHER
        else:
            first_index = self._first_selected
            self._moves += 1
            self._first_selected = None
            self._check_for_match(first_index, index)

        self._publish()

    # =========================================================================
    # Internals
    # =========================================================================

    def _check_for_match(self, first_index: int, second_index: int):
        first = self._cards[first_index]
        second = self._cards[second_index]

        if first.content == second.content:
            self._score += 1
            self._cards[first_index] = replace(first, is_matched=True)
            self._cards[second_index] = replace(second, is_matched=True)
            self._status = MemoryStatus.MATCH
            self._check_game_over()
        else:
            self._status = MemoryStatus.MISMATCH
            self._mismatched = (first_index, second_index)
            self._flip_back_timer = self.scheduler.schedule(
                FLIP_BACK_DELAY, self._on_flip_back, label="memory.flip_back"
            )

    def _on_flip_back(self):
        self._flip_back_timer = None
        self._turn_mismatched_down()
        self._status = MemoryStatus.TRY_AGAIN
        self._publish()

    def _flip_back_now(self):
        """Resolve a pending flip-back early because the player moved on."""
        self._cancel_timer(self._flip_back_timer)
        self._flip_back_timer = None
        self._turn_mismatched_down()

    def _turn_mismatched_down(self):
        if self._mismatched is None:
            return
        for index in self._mismatched:
            card = self._cards[index]
            if not card.is_matched:
                self._cards[index] = replace(card, is_face_up=False)
        self._mismatched = None

    def _end_reveal(self):
        self._reveal_timer = None
        self._cards = [
            card if card.is_matched else replace(card, is_face_up=False)
            for card in self._cards
        ]
        self._status = MemoryStatus.FIND_PAIRS
        self._publish()

    def _check_game_over(self):
        if all(card.is_matched for card in self._cards):
            self._game_over = True
            self._status = MemoryStatus.COMPLETED
            logger.info("Memory game completed in %d moves", self._moves)

    def _index_of(self, card_id: str) -> int | None:
        for index, card in enumerate(self._cards):
            if card.id == card_id:
                return index
        return None

    def _new_card_id(self) -> str:
        return uuid.UUID(int=self.rng.getrandbits(128), version=4).hex
