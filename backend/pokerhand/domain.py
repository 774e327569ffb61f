"""Domain objects: games, seated players, hands and their participants.

Every object serializes to a JSON-safe dict for Redis storage.  Identities
(`id`) are ``None`` until the object is first stored.
"""

from __future__ import annotations

import functools
from typing import Any, Optional

from pokerhand.blinds import BlindLevel, BlindSchedule
from pokerhand.board import CommunityBoard
from pokerhand.cards import Card, Deck


class Player:
    """A seat at one game."""

    def __init__(
        self,
        name: str,
        position: int,
        chips: int,
        game_id: Optional[int] = None,
        player_id: Optional[int] = None,
    ) -> None:
        self.id = player_id
        self.game_id = game_id
        self.name = name
        self.position = position
        self.chips = chips

    def __repr__(self) -> str:
        return f"Player(id={self.id}, name={self.name!r}, position={self.position})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "game_id": self.game_id,
            "name": self.name,
            "position": self.position,
            "chips": self.chips,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Player:
        return cls(
            name=data["name"],
            position=data["position"],
            chips=data["chips"],
            game_id=data.get("game_id"),
            player_id=data.get("id"),
        )


class Game:
    """One table: its roster, blind schedule and button/big-blind holders."""

    def __init__(
        self,
        name: str,
        schedule: BlindSchedule,
        starting_chips: int,
        game_id: Optional[int] = None,
    ) -> None:
        self.id = game_id
        self.name = name
        self.schedule = schedule
        self.starting_chips = starting_chips
        self.player_ids: list[int] = []
        self.started: bool = False
        self.btn_player_id: Optional[int] = None
        self.bb_player_id: Optional[int] = None
        self.hand_count: int = 0
        self.current_hand_id: Optional[int] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "schedule": self.schedule.to_dict(),
            "starting_chips": self.starting_chips,
            "player_ids": self.player_ids,
            "started": self.started,
            "btn_player_id": self.btn_player_id,
            "bb_player_id": self.bb_player_id,
            "hand_count": self.hand_count,
            "current_hand_id": self.current_hand_id,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Game:
        game = cls(
            name=data["name"],
            schedule=BlindSchedule.from_dict(data["schedule"]),
            starting_chips=data["starting_chips"],
            game_id=data.get("id"),
        )
        game.player_ids = list(data.get("player_ids", []))
        game.started = data.get("started", False)
        game.btn_player_id = data.get("btn_player_id")
        game.bb_player_id = data.get("bb_player_id")
        game.hand_count = data.get("hand_count", 0)
        game.current_hand_id = data.get("current_hand_id")
        return game


@functools.total_ordering
class HandParticipant:
    """A player's seat in one specific hand, ordered by rotation from the button."""

    def __init__(
        self, player_id: int, position: int, rotation_order: int
    ) -> None:
        self.player_id = player_id
        self.position = position
        self.rotation_order = rotation_order
        self.hole_cards: list[Card] = []

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandParticipant):
            return NotImplemented
        return (
            self.rotation_order == other.rotation_order
            and self.player_id == other.player_id
        )

    def __lt__(self, other: HandParticipant) -> bool:
        if not isinstance(other, HandParticipant):
            return NotImplemented
        return self.rotation_order < other.rotation_order

    def __hash__(self) -> int:
        return hash((self.player_id, self.rotation_order))

    def __repr__(self) -> str:
        return (
            f"HandParticipant(player_id={self.player_id}, "
            f"position={self.position}, rotation_order={self.rotation_order})"
        )

    def to_dict(self, reveal_cards: bool = True) -> dict[str, Any]:
        d: dict[str, Any] = {
            "player_id": self.player_id,
            "position": self.position,
            "rotation_order": self.rotation_order,
        }
        if reveal_cards:
            d["hole_cards"] = [c.to_dict() for c in self.hole_cards]
        return d

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HandParticipant:
        hp = cls(data["player_id"], data["position"], data["rotation_order"])
        hp.hole_cards = [Card.from_dict(c) for c in data.get("hole_cards", [])]
        return hp


class Hand:
    """One played hand.

    ``blind_level`` is a snapshot taken when the hand starts; later
    escalation of the game's schedule never changes it.
    """

    def __init__(
        self,
        game_id: int,
        hand_number: int,
        blind_level: BlindLevel,
        board: CommunityBoard,
        participants: list[HandParticipant],
        current_to_act: Optional[int] = None,
        deck: Optional[Deck] = None,
        hand_id: Optional[int] = None,
        started_at: Optional[float] = None,
    ) -> None:
        self.id = hand_id
        self.game_id = game_id
        self.hand_number = hand_number
        self.blind_level = blind_level
        self.board = board
        self.participants = sorted(participants)
        self.current_to_act = current_to_act
        self.deck = deck
        self.started_at = started_at

    def to_dict(self) -> dict[str, Any]:
        """Serialize for storage.  The board is stored separately by id."""
        return {
            "id": self.id,
            "game_id": self.game_id,
            "hand_number": self.hand_number,
            "blind_level": [self.blind_level.small_blind, self.blind_level.big_blind],
            "board_id": self.board.id,
            "participants": [hp.to_dict() for hp in self.participants],
            "current_to_act": self.current_to_act,
            "deck": self.deck.to_dict() if self.deck else None,
            "started_at": self.started_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], board: CommunityBoard) -> Hand:
        deck_data = data.get("deck")
        sb, bb = data["blind_level"]
        return cls(
            game_id=data["game_id"],
            hand_number=data["hand_number"],
            blind_level=BlindLevel(sb, bb),
            board=board,
            participants=[HandParticipant.from_dict(p) for p in data["participants"]],
            current_to_act=data.get("current_to_act"),
            deck=Deck.from_dict(deck_data) if deck_data else None,
            hand_id=data.get("id"),
            started_at=data.get("started_at"),
        )

    def to_view(self) -> dict[str, Any]:
        """Public view of the hand (no hole cards, no deck)."""
        return {
            "id": self.id,
            "game_id": self.game_id,
            "hand_number": self.hand_number,
            "small_blind": self.blind_level.small_blind,
            "big_blind": self.blind_level.big_blind,
            "board": self.board.to_dict(),
            "participants": [hp.to_dict(reveal_cards=False) for hp in self.participants],
            "current_to_act": self.current_to_act,
            "started_at": self.started_at,
        }
