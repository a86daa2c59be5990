"""
Memory State - Cards, content palettes, status texts and the snapshot.

Cards are immutable values. The engine swaps in a replaced card
whenever a flag changes, so a published snapshot never changes under
the shell's feet.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class ContentSet(Enum):
    """Palettes of card faces."""
    SYMBOLS = "symbols"
    EMOJIS = "emojis"

    @property
    def items(self) -> list[str]:
        return list(_PALETTES[self])


_PALETTES = {
    ContentSet.SYMBOLS: (
        "leaf.fill", "flame.fill", "bolt.fill", "moon.fill",
        "heart.fill", "star.fill", "cloud.fill", "umbrella.fill",
        "paperplane.fill", "scissors", "hare.fill", "tortoise.fill",
        "car.fill", "bicycle", "tram.fill", "ferry.fill",
    ),
    ContentSet.EMOJIS: (
        "\U0001F34E", "\U0001F34C", "\U0001F347", "\U0001F353",
        "\U0001F352", "\U0001F351", "\U0001F34D", "\U0001F95D",
        "\U0001F349", "\U0001F965", "\U0001F955", "\U0001F33D",
        "\U0001F344", "\U0001F950", "\U0001F369", "\U0001F36A",
    ),
}


class MemoryStatus(Enum):
    """Status line shown above the board."""
    READY = "Ready"
    MEMORIZE = "Memorize the cards"
    FIND_PAIRS = "Find all pairs"
    PICK_ANOTHER = "Pick another card"
    MATCH = "Nice! It's a match"
    MISMATCH = "Not a match"
    TRY_AGAIN = "Try again"
    COMPLETED = "Completed!"


@dataclass(frozen=True)
class MemoryCard:
    """A single card. Once matched, a card never changes again."""
    id: str
    content: str
    is_face_up: bool = False
    is_matched: bool = False


@dataclass(frozen=True)
class MemoryState:
    """Snapshot of a Memory game."""
    cards: tuple[MemoryCard, ...]
    score: int
    moves: int
    status: MemoryStatus
    is_game_over: bool
    is_revealing: bool
    pairs_count: int
    content_set: ContentSet

    def get_card(self, card_id: str) -> MemoryCard | None:
        for card in self.cards:
            if card.id == card_id:
                return card
        return None
