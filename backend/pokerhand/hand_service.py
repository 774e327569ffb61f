"""Hand lifecycle — starting hands and revealing the board.

All operations for one game run under that game's lock: blind escalation and
board reveals are check-then-act sequences.  Different games never share a
lock.
"""

from __future__ import annotations

import asyncio
import logging
import time
import weakref

from pokerhand import redis_client
from pokerhand.board import CommunityBoard, Stage
from pokerhand.cards import Deck
from pokerhand.domain import Game, Hand, Player
from pokerhand.errors import (
    CollaboratorError,
    InvalidConfigurationError,
    RecordNotFoundError,
)
from pokerhand.seating import compute_seat_order

logger = logging.getLogger(__name__)

HOLE_CARDS = 2

_locks: weakref.WeakValueDictionary[int, asyncio.Lock] = weakref.WeakValueDictionary()


def _get_lock(game_id: int) -> asyncio.Lock:
    # Entries vanish once no coroutine holds or waits on the lock
    lock = _locks.get(game_id)
    if lock is None:
        lock = asyncio.Lock()
        _locks[game_id] = lock
    return lock


# ------------------------------------------------------------------
# Persistence helpers
# ------------------------------------------------------------------


async def save_game(game: Game) -> Game:
    if game.id is None:
        game.id = await redis_client.next_id("game")
    await redis_client.store_game(game.id, game.to_dict())
    return game


async def load_game(game_id: int) -> Game:
    data = await redis_client.load_game(game_id)
    if data is None:
        raise RecordNotFoundError(f"Game {game_id} not found")
    return Game.from_dict(data)


async def save_player(player: Player) -> Player:
    if player.game_id is None:
        raise InvalidConfigurationError("Player must belong to a game")
    if player.id is None:
        player.id = await redis_client.next_id("player")
    await redis_client.store_player(player.game_id, player.id, player.to_dict())
    return player


async def load_players(game_id: int) -> list[Player]:
    rows = await redis_client.load_players(game_id)
    return sorted((Player.from_dict(r) for r in rows), key=lambda p: p.position)


async def get_hand(hand_id: int) -> Hand:
    data = await redis_client.load_hand(hand_id)
    if data is None:
        raise RecordNotFoundError(f"Hand {hand_id} not found")
    board_data = await redis_client.load_board(data["board_id"])
    if board_data is None:
        raise RecordNotFoundError(f"Board {data['board_id']} of hand {hand_id} not found")
    return Hand.from_dict(data, CommunityBoard.from_dict(board_data))


# ------------------------------------------------------------------
# Starting a hand
# ------------------------------------------------------------------


async def _start_new_hand(game: Game) -> Hand:
    if not game.started:
        raise InvalidConfigurationError(f"Game {game.id} has not started")

    # Work on a copy so a failure below leaves the caller's game untouched
    updated = Game.from_dict(game.to_dict())
    now = time.time()
    updated.schedule.ensure_started(now)
    updated.schedule.advance_if_expired(now)
    blind_level = updated.schedule.current_level

    players = await load_players(game.id)
    missing = set(game.player_ids) - {p.id for p in players}
    if missing:
        raise RecordNotFoundError(
            f"Players {sorted(missing)} of game {game.id} not found"
        )
    order = compute_seat_order(players, game.btn_player_id, game.bb_player_id)

    deck = Deck()
    for hp in order.participants:
        hp.hole_cards = deck.deal(HOLE_CARDS)

    board = CommunityBoard(board_id=await redis_client.next_id("board"))
    hand = Hand(
        game_id=game.id,
        hand_number=game.hand_count + 1,
        blind_level=blind_level,
        board=board,
        participants=order.participants,
        current_to_act=order.first_to_act.player_id,
        deck=deck,
        hand_id=await redis_client.next_id("hand"),
        started_at=now,
    )
    updated.hand_count = hand.hand_number
    updated.current_hand_id = hand.id

    await redis_client.store_hand_records(
        hand.id,
        hand.to_dict(),
        board.id,
        board.to_dict(),
        game_id=updated.id,
        game_data=updated.to_dict(),
    )

    game.schedule = updated.schedule
    game.hand_count = updated.hand_count
    game.current_hand_id = updated.current_hand_id

    logger.info(
        "Hand started: game=%s hand=%s number=%d blinds=%s players=%d first_to_act=%s",
        game.id,
        hand.id,
        hand.hand_number,
        blind_level,
        len(hand.participants),
        hand.current_to_act,
    )
    return hand


async def start_new_hand(game: Game) -> Hand:
    """Start a new hand for an already loaded game.

    Escalates the game's blinds if the current level has expired, snapshots
    the level into the hand, seats the participants in rotation order from
    the button and gives the hand its own empty board.  The game (with its
    updated blind timer) is stored along with the hand.
    """
    if game.id is None:
        raise InvalidConfigurationError("Game must be stored before a hand can start")
    async with _get_lock(game.id):
        return await _start_new_hand(game)


async def deal_next_hand(game_id: int) -> Hand:
    """Load a game by id and start its next hand."""
    async with _get_lock(game_id):
        game = await load_game(game_id)
        return await _start_new_hand(game)


# ------------------------------------------------------------------
# Board reveals
# ------------------------------------------------------------------


async def _reveal(hand: Hand, stage: Stage) -> Hand:
    hand.board.check_can_deal(stage)
    if hand.deck is None:
        raise CollaboratorError(f"Hand {hand.id} has no card source")

    # Deal onto copies; the hand only changes once both records are stored
    board = CommunityBoard.from_dict(hand.board.to_dict())
    deck = Deck.from_dict(hand.deck.to_dict())
    deck.deal_one()  # burn
    if stage == Stage.FLOP:
        board.deal_flop(deck.deal(3))
    elif stage == Stage.TURN:
        board.deal_turn(deck.deal_one())
    else:
        board.deal_river(deck.deal_one())

    data = hand.to_dict()
    data["deck"] = deck.to_dict()
    await redis_client.store_hand_records(hand.id, data, board.id, board.to_dict())
    hand.board = board
    hand.deck = deck

    logger.info(
        "Board %s: game=%s hand=%s cards=%s",
        stage.value,
        hand.game_id,
        hand.id,
        board.cards,
    )
    return hand


async def _reveal_locked(hand: Hand, stage: Stage) -> Hand:
    async with _get_lock(hand.game_id):
        return await _reveal(hand, stage)


async def flop(hand: Hand) -> Hand:
    """Burn one card and deal the three flop cards."""
    return await _reveal_locked(hand, Stage.FLOP)


async def turn(hand: Hand) -> Hand:
    """Burn one card and deal the turn."""
    return await _reveal_locked(hand, Stage.TURN)


async def river(hand: Hand) -> Hand:
    """Burn one card and deal the river."""
    return await _reveal_locked(hand, Stage.RIVER)


async def reveal(hand_id: int, stage: Stage) -> Hand:
    """Load a hand by id and reveal the given stage on its board."""
    data = await redis_client.load_hand(hand_id)
    if data is None:
        raise RecordNotFoundError(f"Hand {hand_id} not found")
    async with _get_lock(data["game_id"]):
        hand = await get_hand(hand_id)
        return await _reveal(hand, stage)
