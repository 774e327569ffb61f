"""Pydantic models for the hand lifecycle API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from pokerhand.blinds import TournamentFormat


# --- Request models ---


class CreateGameRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=40)
    player_names: list[str] = Field(..., min_length=2, max_length=10)
    starting_chips: int = Field(default=2000, ge=100, le=100000)
    tournament_format: str = Field(default=TournamentFormat.TWO_HR_SIX_PLAYERS.name)
    starting_level: Optional[str] = Field(default=None, pattern=r"^\d+/\d+$")
    blind_level_duration: int = Field(default=0, ge=0, le=120)  # minutes, 0 = format default


# --- Response / state models ---


class PlayerInfo(BaseModel):
    id: int
    name: str
    position: int
    chips: int


class BlindInfo(BaseModel):
    small_blind: int
    big_blind: int
    level_index: int
    level_duration: int  # minutes
    expires_at: Optional[float] = None


class GameState(BaseModel):
    id: int
    name: str
    started: bool
    starting_chips: int
    blinds: BlindInfo
    players: list[PlayerInfo]
    btn_player_id: Optional[int] = None
    bb_player_id: Optional[int] = None
    hand_count: int = 0
    current_hand_id: Optional[int] = None


class CardInfo(BaseModel):
    rank: int
    suit: str


class BoardState(BaseModel):
    id: Optional[int] = None
    stage: str
    flop1: Optional[CardInfo] = None
    flop2: Optional[CardInfo] = None
    flop3: Optional[CardInfo] = None
    turn: Optional[CardInfo] = None
    river: Optional[CardInfo] = None


class ParticipantInfo(BaseModel):
    player_id: int
    position: int
    rotation_order: int


class HandState(BaseModel):
    id: int
    game_id: int
    hand_number: int
    small_blind: int
    big_blind: int
    board: BoardState
    participants: list[ParticipantInfo]
    current_to_act: Optional[int] = None
    started_at: Optional[float] = None
