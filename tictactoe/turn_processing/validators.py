from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from tictactoe.api.models import GamePhase, GameState
from tictactoe.core.board import BOARD_CELLS, is_cell_empty, is_valid_position
from tictactoe.core.errors import (
    CellIsNotEmpty,
    GameHasNotEnded,
    InvalidPosition,
    NotAParticipant,
)
from tictactoe.turn_processing.turns import assert_is_players_turn, is_participant


@dataclass(frozen=True, slots=True)
class ValidationContext:
    """Inputs available to validators.

    Keep this tight and serializable-ish so we can safely log it.
    """

    game_id: str
    player_id: str
    action: str
    position: int | None = None


class TurnValidator(ABC):
    """A small, composable validation unit for an incoming action."""

    @abstractmethod
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        raise NotImplementedError


@dataclass(frozen=True, slots=True)
class CurrentTurnValidator(TurnValidator):
    """Only the player holding the turn may act. Rejects everyone once the game is over."""

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        assert_is_players_turn(state=state, player_id=ctx.player_id)


@dataclass(frozen=True, slots=True)
class PositionValidator(TurnValidator):
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if ctx.position is None or not is_valid_position(ctx.position):
            raise InvalidPosition(f"Position {ctx.position} is outside 0..{BOARD_CELLS - 1}")


@dataclass(frozen=True, slots=True)
class EmptyCellValidator(TurnValidator):
    """Occupied cells are never overwritten. Expects PositionValidator to have run first."""

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        assert ctx.position is not None
        if not is_cell_empty(state.board, ctx.position):
            raise CellIsNotEmpty(f"Cell {ctx.position} is already occupied")


@dataclass(frozen=True, slots=True)
class ParticipantValidator(TurnValidator):
    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if not is_participant(state=state, player_id=ctx.player_id):
            raise NotAParticipant(f"Action '{ctx.action}' is limited to the game's players")


@dataclass(frozen=True, slots=True)
class GameEndedValidator(TurnValidator):
    """Deny the action until the game has been won or drawn."""

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        if state.phase == GamePhase.in_progress:
            raise GameHasNotEnded(f"Action '{ctx.action}' requires a finished game")


@dataclass(frozen=True, slots=True)
class ValidatorPipeline:
    validators: tuple[TurnValidator, ...]

    def validate(self, *, ctx: ValidationContext, state: GameState) -> None:
        for v in self.validators:
            v.validate(ctx=ctx, state=state)


# Order matters: a move reports the turn error before position or occupancy.
DEFAULT_ACTION_PIPELINES: dict[str, ValidatorPipeline] = {
    "move": ValidatorPipeline(
        validators=(
            CurrentTurnValidator(),
            PositionValidator(),
            EmptyCellValidator(),
        )
    ),
    "restart": ValidatorPipeline(
        validators=(
            ParticipantValidator(),
            GameEndedValidator(),
        )
    ),
}


def pipeline_for_action(action: str) -> ValidatorPipeline:
    pipe = DEFAULT_ACTION_PIPELINES.get(action)
    if pipe is None:
        raise ValueError(f"Unknown action: {action}")
    return pipe
