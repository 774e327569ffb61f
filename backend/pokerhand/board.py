"""Community board — five write-once slots revealed flop, turn, river."""

from __future__ import annotations

from enum import Enum
from typing import Any, Optional

from pokerhand.cards import Card
from pokerhand.errors import InvalidStageError


class Stage(str, Enum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"
    RIVER = "river"


# stage a reveal moves to -> stage the board has to be in beforehand
_REQUIRED_STAGE = {
    Stage.FLOP: Stage.PREFLOP,
    Stage.TURN: Stage.FLOP,
    Stage.RIVER: Stage.TURN,
}


class CommunityBoard:
    """Shared cards for one hand.

    The stage is derived from which slots are filled, so there is no
    separate field to drift out of sync.  Slots are never cleared.
    """

    def __init__(self, board_id: Optional[int] = None) -> None:
        self.id = board_id
        self.flop1: Optional[Card] = None
        self.flop2: Optional[Card] = None
        self.flop3: Optional[Card] = None
        self.turn: Optional[Card] = None
        self.river: Optional[Card] = None

    @property
    def stage(self) -> Stage:
        if self.river is not None:
            return Stage.RIVER
        if self.turn is not None:
            return Stage.TURN
        if self.flop1 is not None:
            return Stage.FLOP
        return Stage.PREFLOP

    @property
    def cards(self) -> list[Card]:
        slots = [self.flop1, self.flop2, self.flop3, self.turn, self.river]
        return [c for c in slots if c is not None]

    def check_can_deal(self, target: Stage) -> None:
        """Raise InvalidStageError unless ``target`` is the next reveal."""
        required = _REQUIRED_STAGE.get(target)
        if required is None:
            raise InvalidStageError(f"Cannot deal {target.value}")
        current = self.stage
        if current != required:
            raise InvalidStageError(
                f"Cannot deal {target.value} while board is at {current.value}"
            )

    def deal_flop(self, cards: list[Card]) -> None:
        self.check_can_deal(Stage.FLOP)
        if len(cards) != 3:
            raise ValueError(f"Flop needs exactly 3 cards, got {len(cards)}")
        self.flop1, self.flop2, self.flop3 = cards

    def deal_turn(self, card: Card) -> None:
        self.check_can_deal(Stage.TURN)
        self.turn = card

    def deal_river(self, card: Card) -> None:
        self.check_can_deal(Stage.RIVER)
        self.river = card

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "stage": self.stage.value,
            "flop1": self.flop1.to_dict() if self.flop1 else None,
            "flop2": self.flop2.to_dict() if self.flop2 else None,
            "flop3": self.flop3.to_dict() if self.flop3 else None,
            "turn": self.turn.to_dict() if self.turn else None,
            "river": self.river.to_dict() if self.river else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CommunityBoard:
        board = cls(data.get("id"))
        for slot in ("flop1", "flop2", "flop3", "turn", "river"):
            raw = data.get(slot)
            setattr(board, slot, Card.from_dict(raw) if raw else None)
        return board
