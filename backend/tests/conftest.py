"""Shared fixtures: an in-memory stand-in for the Redis persistence layer."""

from __future__ import annotations

import json
from collections import defaultdict
from typing import Any, Optional
from unittest.mock import patch

import pytest

from pokerhand import hand_service

PATCH_BASE = "pokerhand.hand_service.redis_client"


class InMemoryStore:
    """Mirrors the redis_client functions, JSON round-tripping every record."""

    def __init__(self) -> None:
        self.records: dict[str, str] = {}
        self.game_players: dict[int, set[int]] = defaultdict(set)
        self.counters: dict[str, int] = defaultdict(int)

    async def next_id(self, kind: str) -> int:
        self.counters[kind] += 1
        return self.counters[kind]

    def _set(self, key: str, data: dict[str, Any]) -> None:
        self.records[key] = json.dumps(data)

    def _get(self, key: str) -> Optional[dict[str, Any]]:
        raw = self.records.get(key)
        return json.loads(raw) if raw is not None else None

    async def store_game(self, game_id: int, data: dict[str, Any]) -> None:
        self._set(f"game:{game_id}", data)

    async def load_game(self, game_id: int) -> Optional[dict[str, Any]]:
        return self._get(f"game:{game_id}")

    async def store_player(self, game_id: int, player_id: int, data: dict[str, Any]) -> None:
        self._set(f"player:{player_id}", data)
        self.game_players[game_id].add(player_id)

    async def load_players(self, game_id: int) -> list[dict[str, Any]]:
        rows = [self._get(f"player:{pid}") for pid in self.game_players[game_id]]
        return [r for r in rows if r is not None]

    async def store_hand_records(
        self,
        hand_id: int,
        hand_data: dict[str, Any],
        board_id: int,
        board_data: dict[str, Any],
        game_id: Optional[int] = None,
        game_data: Optional[dict[str, Any]] = None,
    ) -> None:
        self._set(f"hand:{hand_id}", hand_data)
        self._set(f"board:{board_id}", board_data)
        if game_id is not None and game_data is not None:
            self._set(f"game:{game_id}", game_data)

    async def load_hand(self, hand_id: int) -> Optional[dict[str, Any]]:
        return self._get(f"hand:{hand_id}")

    async def load_board(self, board_id: int) -> Optional[dict[str, Any]]:
        return self._get(f"board:{board_id}")


@pytest.fixture
def store():
    """Patch the persistence collaborator with an in-memory store."""
    mem = InMemoryStore()
    names = [
        "next_id",
        "store_game",
        "load_game",
        "store_player",
        "load_players",
        "store_hand_records",
        "load_hand",
        "load_board",
    ]
    patchers = [patch(f"{PATCH_BASE}.{name}", getattr(mem, name)) for name in names]
    for p in patchers:
        p.start()
    try:
        yield mem
    finally:
        for p in patchers:
            p.stop()


@pytest.fixture(autouse=True)
def _reset_game_locks():
    """Each test runs on its own event loop; don't share per-game locks."""
    hand_service._locks.clear()
    yield
    hand_service._locks.clear()
