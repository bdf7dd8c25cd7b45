from __future__ import annotations

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field

from tictactoe.core.board import BOARD_CELLS


class GameCreateRequest(BaseModel):
    player_one: str = Field(..., min_length=1, max_length=200)
    player_two: str = Field(..., min_length=1, max_length=200)


class MoveRequest(BaseModel):
    # Upper bound is checked by the engine so it can report InvalidPosition.
    position: int = Field(..., ge=0)


class GamePhase(StrEnum):
    in_progress = "in_progress"
    won = "won"
    drawn = "drawn"


class GameState(BaseModel):
    game_id: UUID
    created_at: datetime
    last_updated_at: datetime

    player_one: str
    player_two: str

    # None once the game has been won or drawn.
    current_turn: str | None = None
    move_count: int = 0

    # Row-major 3x3 grid; each cell holds the occupying player id or None.
    board: list[str | None] = Field(
        default_factory=lambda: [None] * BOARD_CELLS,
        min_length=BOARD_CELLS,
        max_length=BOARD_CELLS,
    )

    phase: GamePhase = GamePhase.in_progress

    # When won.
    winner: str | None = None


class OutcomeStatus(StrEnum):
    ongoing = "ongoing"
    won = "won"
    drawn = "drawn"


class OutcomeResponse(BaseModel):
    game_id: UUID
    status: OutcomeStatus
    winner: str | None = None
    current_turn: str | None = None
    move_count: int


class GameListResponse(BaseModel):
    games: list[GameState]


class ErrorDetail(BaseModel):
    code: str
    message: str
