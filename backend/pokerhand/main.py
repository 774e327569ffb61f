"""FastAPI application — REST endpoints for games, hands and board reveals."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from pokerhand import game_manager, hand_service, redis_client
from pokerhand.board import Stage
from pokerhand.domain import Hand
from pokerhand.errors import (
    CollaboratorError,
    InvalidConfigurationError,
    InvalidStageError,
    RecordNotFoundError,
)
from pokerhand.models import CreateGameRequest, GameState, HandState

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    await redis_client.close()


app = FastAPI(title="Poker Hand API", lifespan=lifespan)

# ---------- Rate Limiting ----------

_rate_limit_enabled = os.getenv("RATE_LIMIT_ENABLED", "1") != "0"

limiter = Limiter(
    key_func=get_remote_address,
    enabled=_rate_limit_enabled,
)
app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def _rate_limit_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": "Rate limit exceeded. Please slow down."},
    )


# ---------- Domain errors ----------


@app.exception_handler(InvalidStageError)
async def _invalid_stage_handler(request: Request, exc: InvalidStageError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(InvalidConfigurationError)
async def _invalid_config_handler(request: Request, exc: InvalidConfigurationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(RecordNotFoundError)
async def _not_found_handler(request: Request, exc: RecordNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(CollaboratorError)
async def _collaborator_handler(request: Request, exc: CollaboratorError):
    logger.error("Collaborator failure on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=502, content={"detail": str(exc)})


_cors_origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _hand_state(hand: Hand) -> HandState:
    return HandState(**hand.to_view())


# ---------- REST endpoints ----------


@app.post("/api/games", response_model=GameState)
@limiter.limit("5/minute")
async def create_game(request: Request, req: CreateGameRequest):
    return await game_manager.create_game(req)


@app.get("/api/games/{game_id}", response_model=GameState)
@limiter.limit("30/minute")
async def get_game(request: Request, game_id: int):
    return await game_manager.get_game_state(game_id)


@app.post("/api/games/{game_id}/hands", response_model=HandState)
@limiter.limit("30/minute")
async def start_hand(request: Request, game_id: int):
    hand = await hand_service.deal_next_hand(game_id)
    return _hand_state(hand)


@app.get("/api/hands/{hand_id}", response_model=HandState)
@limiter.limit("60/minute")
async def get_hand(request: Request, hand_id: int):
    hand = await hand_service.get_hand(hand_id)
    return _hand_state(hand)


@app.post("/api/hands/{hand_id}/{stage}", response_model=HandState)
@limiter.limit("60/minute")
async def reveal(request: Request, hand_id: int, stage: str):
    if stage not in (Stage.FLOP.value, Stage.TURN.value, Stage.RIVER.value):
        raise HTTPException(status_code=404, detail=f"Unknown board stage: {stage}")
    hand = await hand_service.reveal(hand_id, Stage(stage))
    return _hand_state(hand)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
