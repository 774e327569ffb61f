"""Card and Deck — the card source a hand draws from."""

from __future__ import annotations

import random
from enum import IntEnum, Enum
from typing import Any

from pokerhand.errors import CollaboratorError


class Suit(str, Enum):
    HEARTS = "h"
    DIAMONDS = "d"
    CLUBS = "c"
    SPADES = "s"


class Rank(IntEnum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14


RANK_SYMBOLS = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "T",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

_SYMBOL_RANKS = {v: k for k, v in RANK_SYMBOLS.items()}


class Card:
    __slots__ = ("rank", "suit")

    def __init__(self, rank: Rank, suit: Suit) -> None:
        self.rank = rank
        self.suit = suit

    def __repr__(self) -> str:
        return f"{RANK_SYMBOLS[self.rank]}{self.suit.value}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Card):
            return NotImplemented
        return self.rank == other.rank and self.suit == other.suit

    def __hash__(self) -> int:
        return hash((self.rank, self.suit))

    def to_dict(self) -> dict:
        return {"rank": self.rank.value, "suit": self.suit.value}

    @classmethod
    def from_dict(cls, data: dict) -> Card:
        return cls(Rank(data["rank"]), Suit(data["suit"]))

    @classmethod
    def from_str(cls, s: str) -> Card:
        """Parse 'Ah', 'Ts', '2c' etc."""
        return cls(_SYMBOL_RANKS[s[0].upper()], Suit(s[1].lower()))


class Deck:
    """Standard 52-card deck.

    Cards leave the deck as they are dealt, so every card a hand receives
    from one deck is distinct.  The remaining cards are persisted with the
    hand so later board reveals keep drawing from the same deck.
    """

    def __init__(self, cards: list[Card] | None = None) -> None:
        if cards is None:
            self._cards: list[Card] = [
                Card(rank, suit) for suit in Suit for rank in Rank
            ]
            self.shuffle()
        else:
            self._cards = list(cards)

    def shuffle(self) -> None:
        random.shuffle(self._cards)

    def deal(self, n: int = 1) -> list[Card]:
        if n > len(self._cards):
            raise CollaboratorError(
                f"Not enough cards in deck ({len(self._cards)} left, {n} requested)"
            )
        dealt = self._cards[:n]
        self._cards = self._cards[n:]
        return dealt

    def deal_one(self) -> Card:
        return self.deal(1)[0]

    @property
    def remaining(self) -> int:
        return len(self._cards)

    def to_dict(self) -> dict[str, Any]:
        return {"cards": [c.to_dict() for c in self._cards]}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Deck:
        return cls([Card.from_dict(c) for c in data["cards"]])
