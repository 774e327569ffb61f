"""Game manager — seats a roster and prepares a game for its first hand."""

from __future__ import annotations

import logging

from pokerhand import hand_service
from pokerhand.blinds import BlindLevel, BlindSchedule, TournamentFormat
from pokerhand.domain import Game, Player
from pokerhand.errors import InvalidConfigurationError
from pokerhand.models import BlindInfo, CreateGameRequest, GameState, PlayerInfo

logger = logging.getLogger(__name__)


def _initial_blind_seats(players: list[Player]) -> tuple[Player, Player]:
    """BTN is the lowest seat; BB sits two seats clockwise (one when heads-up)."""
    seated = sorted(players, key=lambda p: p.position)
    if len(seated) < 2:
        raise InvalidConfigurationError("Need at least 2 players to start")
    btn = seated[0]
    bb = seated[1] if len(seated) == 2 else seated[2]
    return btn, bb


async def create_game(req: CreateGameRequest) -> GameState:
    """Create a game, seat its players at positions 1..N and start it."""
    names = [n.strip() for n in req.player_names]
    if any(not n for n in names):
        raise InvalidConfigurationError("Player names must not be blank")
    if len({n.lower() for n in names}) != len(names):
        raise InvalidConfigurationError("Player names must be unique")

    try:
        fmt = TournamentFormat[req.tournament_format.upper()]
    except KeyError:
        raise InvalidConfigurationError(
            f"Unknown tournament format: {req.tournament_format}"
        ) from None

    starting_level = BlindLevel.parse(req.starting_level) if req.starting_level else None
    schedule = BlindSchedule.from_format(fmt, starting_level)
    if req.blind_level_duration > 0:
        schedule.level_duration = req.blind_level_duration

    game = Game(name=req.name, schedule=schedule, starting_chips=req.starting_chips)
    await hand_service.save_game(game)

    players: list[Player] = []
    for position, name in enumerate(names, start=1):
        player = Player(name, position, req.starting_chips, game_id=game.id)
        await hand_service.save_player(player)
        players.append(player)

    btn, bb = _initial_blind_seats(players)
    game.player_ids = [p.id for p in players]
    game.btn_player_id = btn.id
    game.bb_player_id = bb.id
    game.started = True
    await hand_service.save_game(game)

    logger.info(
        "Game created: id=%s players=%d format=%s level=%s",
        game.id,
        len(players),
        fmt.name,
        schedule.current_level,
    )
    return _build_game_state(game, players)


async def get_game_state(game_id: int) -> GameState:
    game = await hand_service.load_game(game_id)
    players = await hand_service.load_players(game_id)
    return _build_game_state(game, players)


def _build_game_state(game: Game, players: list[Player]) -> GameState:
    level = game.schedule.current_level
    return GameState(
        id=game.id,
        name=game.name,
        started=game.started,
        starting_chips=game.starting_chips,
        blinds=BlindInfo(
            small_blind=level.small_blind,
            big_blind=level.big_blind,
            level_index=game.schedule.level_index,
            level_duration=game.schedule.level_duration,
            expires_at=game.schedule.current_expiry,
        ),
        players=[
            PlayerInfo(id=p.id, name=p.name, position=p.position, chips=p.chips)
            for p in sorted(players, key=lambda p: p.position)
        ],
        btn_player_id=game.btn_player_id,
        bb_player_id=game.bb_player_id,
        hand_count=game.hand_count,
        current_hand_id=game.current_hand_id,
    )
