"""
Tests for the Memory engine.

Tests:
- Deck construction and configuration
- Reveal-all phase
- Match / mismatch resolution and flip-back
- Move counting and completion
"""

from collections import Counter, defaultdict
import random

import pytest
from pydantic import ValidationError

from ..games.memory import (
    ContentSet,
    MemoryConfig,
    MemoryEngine,
    MemoryStatus,
    MAX_PAIRS,
    MIN_PAIRS,
)


def pairs_by_content(engine: MemoryEngine) -> list[tuple[str, str]]:
    """Card ids grouped into their matching pairs."""
    groups = defaultdict(list)
    for card in engine.cards:
        groups[card.content].append(card.id)
    return [tuple(ids) for ids in groups.values()]


def mismatched_ids(engine: MemoryEngine) -> tuple[str, str]:
    """Two unmatched cards from different pairs."""
    first, second = pairs_by_content(engine)[:2]
    return first[0], second[0]


def face_up_ids(engine: MemoryEngine) -> set[str]:
    return {card.id for card in engine.cards if card.is_face_up and not card.is_matched}


class TestDeck:
    """Tests for dealing a new game."""

    def test_deck_holds_pairs(self, memory_engine):
        cards = memory_engine.cards

        assert len(cards) == 16
        counts = Counter(card.content for card in cards)
        assert len(counts) == 8
        assert set(counts.values()) == {2}

    def test_card_ids_unique(self, memory_engine):
        ids = [card.id for card in memory_engine.cards]

        assert len(set(ids)) == len(ids)

    def test_pairs_clamped(self):
        small = MemoryEngine(MemoryConfig(pairs_count=1), rng=random.Random(0))
        large = MemoryEngine(MemoryConfig(pairs_count=20), rng=random.Random(0))

        assert len(small.cards) == MIN_PAIRS * 2
        assert len(large.cards) == MAX_PAIRS * 2

    def test_emoji_set(self):
        engine = MemoryEngine(
            MemoryConfig(pairs_count=4, content_set=ContentSet.EMOJIS),
            rng=random.Random(0),
        )

        assert {card.content for card in engine.cards} <= set(ContentSet.EMOJIS.items)

    def test_same_seed_same_deal(self):
        first = MemoryEngine(rng=random.Random(5)).cards
        second = MemoryEngine(rng=random.Random(5)).cards

        assert first == second

    def test_start_new_game_with_new_config(self, revealed_memory_engine):
        engine = revealed_memory_engine

        engine.start_new_game(pairs_count=3, content_set=ContentSet.EMOJIS)

        state = engine.snapshot()
        assert state.pairs_count == 3
        assert state.content_set is ContentSet.EMOJIS
        assert len(state.cards) == 6


class TestReveal:
    """Tests for the reveal-all phase."""

    def test_all_cards_face_up_at_start(self, memory_engine):
        state = memory_engine.snapshot()

        assert all(card.is_face_up for card in state.cards)
        assert state.is_revealing
        assert state.status is MemoryStatus.MEMORIZE

    def test_taps_ignored_while_revealing(self, memory_engine):
        memory_engine.tap_card(memory_engine.cards[0].id)

        assert memory_engine.moves == 0
        assert memory_engine.status is MemoryStatus.MEMORIZE

    def test_cards_turn_down_after_reveal(self, memory_engine):
        memory_engine.advance(0.6)
        assert memory_engine.is_revealing

        memory_engine.advance(0.2)

        state = memory_engine.snapshot()
        assert not state.is_revealing
        assert not any(card.is_face_up for card in state.cards)
        assert state.status is MemoryStatus.FIND_PAIRS


class TestSelection:
    """Tests for tapping cards."""

    def test_first_tap_flips_card(self, revealed_memory_engine):
        engine = revealed_memory_engine
        card_id = engine.cards[0].id

        engine.tap_card(card_id)

        assert engine.snapshot().get_card(card_id).is_face_up
        assert engine.status is MemoryStatus.PICK_ANOTHER
        assert engine.moves == 0

    def test_match(self, revealed_memory_engine):
        engine = revealed_memory_engine
        first, second = pairs_by_content(engine)[0]

        engine.tap_card(first)
        engine.tap_card(second)

        state = engine.snapshot()
        assert state.get_card(first).is_matched
        assert state.get_card(second).is_matched
        assert state.score == 1
        assert state.moves == 1
        assert state.status is MemoryStatus.MATCH

    def test_mismatch_flips_back_after_delay(self, revealed_memory_engine):
        engine = revealed_memory_engine
        first, second = mismatched_ids(engine)

        engine.tap_card(first)
        engine.tap_card(second)

        assert engine.status is MemoryStatus.MISMATCH
        assert face_up_ids(engine) == {first, second}
        assert engine.moves == 1
        assert engine.score == 0

        engine.advance(0.6)
        assert face_up_ids(engine) == {first, second}

        engine.advance(0.2)
        assert face_up_ids(engine) == set()
        assert engine.status is MemoryStatus.TRY_AGAIN

    def test_tap_during_flip_back_resolves_it(self, revealed_memory_engine):
        """A third card tapped early turns the mismatched pair down at once."""
        engine = revealed_memory_engine
        first, second = mismatched_ids(engine)
        third = pairs_by_content(engine)[2][0]

        engine.tap_card(first)
        engine.tap_card(second)
        stale = engine._flip_back_timer
        engine.tap_card(third)

        assert stale.cancelled
        assert face_up_ids(engine) == {third}
        assert engine.status is MemoryStatus.PICK_ANOTHER

        engine.advance(1.0)
        assert face_up_ids(engine) == {third}

    def test_tapping_face_up_card_ignored(self, revealed_memory_engine):
        engine = revealed_memory_engine
        card_id = engine.cards[0].id
        engine.tap_card(card_id)

        engine.tap_card(card_id)

        assert engine.moves == 0
        assert face_up_ids(engine) == {card_id}

    def test_tapping_matched_card_ignored(self, revealed_memory_engine):
        engine = revealed_memory_engine
        first, second = pairs_by_content(engine)[0]
        engine.tap_card(first)
        engine.tap_card(second)
        before = engine.snapshot()

        engine.tap_card(first)

        assert engine.snapshot() == before

    def test_unknown_card_ignored(self, revealed_memory_engine):
        before = revealed_memory_engine.snapshot()

        revealed_memory_engine.tap_card("no-such-card")

        assert revealed_memory_engine.snapshot() == before

    def test_moves_count_pairs_of_taps(self, revealed_memory_engine):
        engine = revealed_memory_engine
        pairs = pairs_by_content(engine)

        for index in range(3):
            engine.tap_card(pairs[index][0])
            engine.tap_card(pairs[index + 1][0])
            engine.advance(0.7)

        assert engine.moves == 3
        assert engine.score == 0


class TestCompletion:
    """Tests for finishing a game."""

    def test_game_over_when_all_matched(self, revealed_memory_engine):
        engine = revealed_memory_engine
        pairs = pairs_by_content(engine)

        for first, second in pairs[:-1]:
            engine.tap_card(first)
            engine.tap_card(second)
            assert not engine.is_game_over

        first, second = pairs[-1]
        engine.tap_card(first)
        engine.tap_card(second)

        state = engine.snapshot()
        assert state.is_game_over
        assert state.status is MemoryStatus.COMPLETED
        assert state.score == 8
        assert state.moves == 8

    def test_taps_ignored_after_completion(self, revealed_memory_engine):
        engine = revealed_memory_engine
        for first, second in pairs_by_content(engine):
            engine.tap_card(first)
            engine.tap_card(second)
        before = engine.snapshot()

        for card in before.cards:
            engine.tap_card(card.id)

        assert engine.snapshot() == before


class TestCancellation:
    """Tests for new games while deferred work is pending."""

    def test_new_game_during_flip_back(self, revealed_memory_engine):
        engine = revealed_memory_engine
        first, second = mismatched_ids(engine)
        engine.tap_card(first)
        engine.tap_card(second)
        stale = engine._flip_back_timer

        engine.start_new_game()

        assert stale.cancelled
        assert engine.scheduler.pending == 1
        assert engine.status is MemoryStatus.MEMORIZE

        engine.advance(0.7)
        state = engine.snapshot()
        assert state.status is MemoryStatus.FIND_PAIRS
        assert state.moves == 0

    def test_new_game_during_reveal(self, memory_engine):
        stale = memory_engine._reveal_timer

        memory_engine.start_new_game()

        assert stale.cancelled
        assert memory_engine.scheduler.pending == 1
        assert memory_engine.is_revealing

    def test_invalid_new_game_keeps_reveal(self, memory_engine):
        """A rejected setting leaves the reveal-all phase to finish normally."""
        with pytest.raises(ValidationError):
            memory_engine.start_new_game(content_set="bogus")

        assert memory_engine.is_revealing
        assert memory_engine.config.content_set is ContentSet.SYMBOLS

        memory_engine.advance(0.7)

        state = memory_engine.snapshot()
        assert state.status is MemoryStatus.FIND_PAIRS
        assert not any(card.is_face_up for card in state.cards)

    def test_invalid_new_game_keeps_flip_back(self, revealed_memory_engine):
        engine = revealed_memory_engine
        first, second = mismatched_ids(engine)
        engine.tap_card(first)
        engine.tap_card(second)

        with pytest.raises(ValidationError):
            engine.start_new_game(pairs_count="many")

        assert engine.config.pairs_count == 8
        engine.advance(0.7)
        assert face_up_ids(engine) == set()
        assert engine.status is MemoryStatus.TRY_AGAIN
