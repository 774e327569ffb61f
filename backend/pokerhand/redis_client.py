"""Redis client wrapper for game, player, hand and board persistence.

Records are stored as JSON documents.  Identities come from per-kind INCR
counters the first time a record is stored and never change afterwards.
"""

from __future__ import annotations

import json
import os
from typing import Any, Optional

import redis.asyncio as redis

REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")

_pool: Optional[redis.Redis] = None


async def get_redis() -> redis.Redis:
    global _pool
    if _pool is None:
        _pool = redis.from_url(REDIS_URL, decode_responses=True)
    return _pool


def _seq_key(kind: str) -> str:
    return f"seq:{kind}"


def _game_key(game_id: int) -> str:
    return f"game:{game_id}"


def _game_players_key(game_id: int) -> str:
    return f"game:{game_id}:players"


def _player_key(player_id: int) -> str:
    return f"player:{player_id}"


def _hand_key(hand_id: int) -> str:
    return f"hand:{hand_id}"


def _board_key(board_id: int) -> str:
    return f"board:{board_id}"


async def next_id(kind: str) -> int:
    """Allocate a new identity for a record kind."""
    r = await get_redis()
    return int(await r.incr(_seq_key(kind)))


async def _store(key: str, data: dict[str, Any]) -> None:
    r = await get_redis()
    await r.set(key, json.dumps(data))


async def _load(key: str) -> Optional[dict[str, Any]]:
    r = await get_redis()
    raw = await r.get(key)
    if raw is None:
        return None
    return json.loads(raw)


async def store_game(game_id: int, data: dict[str, Any]) -> None:
    await _store(_game_key(game_id), data)


async def load_game(game_id: int) -> Optional[dict[str, Any]]:
    return await _load(_game_key(game_id))


async def store_player(game_id: int, player_id: int, data: dict[str, Any]) -> None:
    r = await get_redis()
    await r.set(_player_key(player_id), json.dumps(data))
    await r.sadd(_game_players_key(game_id), player_id)


async def load_player(player_id: int) -> Optional[dict[str, Any]]:
    return await _load(_player_key(player_id))


async def load_players(game_id: int) -> list[dict[str, Any]]:
    r = await get_redis()
    player_ids = await r.smembers(_game_players_key(game_id))
    players = []
    for pid in player_ids:
        data = await load_player(int(pid))
        if data:
            players.append(data)
    return players


async def store_hand_records(
    hand_id: int,
    hand_data: dict[str, Any],
    board_id: int,
    board_data: dict[str, Any],
    game_id: Optional[int] = None,
    game_data: Optional[dict[str, Any]] = None,
) -> None:
    """Write a hand, its board and optionally its game in one MULTI/EXEC.

    Either every record is written or none is.
    """
    r = await get_redis()
    async with r.pipeline(transaction=True) as pipe:
        pipe.set(_hand_key(hand_id), json.dumps(hand_data))
        pipe.set(_board_key(board_id), json.dumps(board_data))
        if game_id is not None and game_data is not None:
            pipe.set(_game_key(game_id), json.dumps(game_data))
        await pipe.execute()


async def load_hand(hand_id: int) -> Optional[dict[str, Any]]:
    return await _load(_hand_key(hand_id))


async def load_board(board_id: int) -> Optional[dict[str, Any]]:
    return await _load(_board_key(board_id))


async def close() -> None:
    global _pool
    if _pool is not None:
        await _pool.aclose()
        _pool = None
