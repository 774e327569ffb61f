"""Seat rotation for a freshly started hand.

Rotation order counts clockwise from the button: BTN is 0, the next seat is
1 and so on.  The player who acts first is the one directly clockwise of the
big blind.  With contiguous seat positions this is

    rotation_order = (position - btn.position + N) % N

Heads-up (N == 2) needs no special case: BB sits at rotation 1, so the
button acts first preflop, which is the usual heads-up convention.  A lone
player (N == 1) must hold both BTN and BB and is also first to act.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from pokerhand.domain import HandParticipant, Player
from pokerhand.errors import InvalidConfigurationError


class SeatOrder(NamedTuple):
    participants: list[HandParticipant]
    first_to_act: HandParticipant


def compute_seat_order(
    players: Sequence[Player], btn_player_id: int | None, bb_player_id: int | None
) -> SeatOrder:
    """Order the seated players from the button and pick the first to act."""
    if not players:
        raise InvalidConfigurationError("Cannot seat a hand with no players")

    seated = sorted(players, key=lambda p: p.position)
    positions = [p.position for p in seated]
    if len(set(positions)) != len(positions):
        raise InvalidConfigurationError(f"Duplicate seat positions: {positions}")

    ids = [p.id for p in seated]
    if btn_player_id not in ids:
        raise InvalidConfigurationError(f"Button player {btn_player_id} is not seated")
    if bb_player_id not in ids:
        raise InvalidConfigurationError(f"Big blind player {bb_player_id} is not seated")

    n = len(seated)
    if n > 1 and btn_player_id == bb_player_id:
        raise InvalidConfigurationError("Button and big blind must be different players")

    # Rank seats clockwise so gaps in positions (an emptied seat) are skipped
    btn_idx = ids.index(btn_player_id)
    participants = [
        HandParticipant(p.id, p.position, (i - btn_idx + n) % n)
        for i, p in enumerate(seated)
    ]
    participants.sort()

    # participants[k].rotation_order == k after sorting
    bb = next(hp for hp in participants if hp.player_id == bb_player_id)
    first_to_act = participants[(bb.rotation_order + 1) % n]

    return SeatOrder(participants, first_to_act)
