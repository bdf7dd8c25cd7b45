from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from tictactoe.api.models import GamePhase, GameState, OutcomeStatus
from tictactoe.core.board import MIN_MOVES_FOR_OUTCOME, empty_board, has_won, is_full
from tictactoe.core.errors import InvalidPlayers
from tictactoe.core.events import GameEvent, game_drawn_event, game_won_event, new_game_event
from tictactoe.fsm import GameFSM
from tictactoe.turn_processing.turns import other_player
from tictactoe.turn_processing.validators import ValidationContext, pipeline_for_action


@dataclass(frozen=True, slots=True)
class Outcome:
    status: OutcomeStatus
    winner: str | None = None


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _reset(state: GameState) -> None:
    state.board = empty_board()
    state.current_turn = state.player_one
    state.move_count = 0
    state.winner = None
    state.phase = GamePhase.in_progress


def new_game(*, game_id: UUID, player_one: str, player_two: str) -> tuple[GameState, list[GameEvent]]:
    """Build a fresh game where `player_one` moves first."""

    if player_one == player_two:
        raise InvalidPlayers()

    now = _now()
    state = GameState(
        game_id=game_id,
        created_at=now,
        last_updated_at=now,
        player_one=player_one,
        player_two=player_two,
    )
    _reset(state)
    return state, [new_game_event(game_id=str(game_id), player_one=player_one, player_two=player_two)]


def restart(*, state: GameState, caller: str) -> list[GameEvent]:
    """Clear a finished game in place, keeping both players and the game id."""

    ctx = ValidationContext(game_id=str(state.game_id), player_id=caller, action="restart")
    pipeline_for_action("restart").validate(ctx=ctx, state=state)

    GameFSM(state).reopen()
    _reset(state)
    return [new_game_event(game_id=str(state.game_id), player_one=state.player_one, player_two=state.player_two)]


def move(*, state: GameState, caller: str, position: int) -> list[GameEvent]:
    """Place `caller`'s stone at `position` and settle the turn or the outcome.

    All checks run before the first write, so a rejected move leaves `state`
    untouched.
    """

    ctx = ValidationContext(game_id=str(state.game_id), player_id=caller, action="move", position=position)
    pipeline_for_action("move").validate(ctx=ctx, state=state)

    fsm = GameFSM(state)
    fsm.require_in_progress()

    mover = caller
    state.board[position] = mover
    state.move_count += 1

    events: list[GameEvent] = []
    gid = str(state.game_id)

    if state.move_count >= MIN_MOVES_FOR_OUTCOME:
        if has_won(state.board, mover):
            state.current_turn = None
            state.winner = mover
            fsm.finish("win")
            events.append(game_won_event(game_id=gid, player=mover))
            return events
        if is_full(state.board):
            state.current_turn = None
            fsm.finish("draw")
            events.append(game_drawn_event(game_id=gid, player_one=state.player_one, player_two=state.player_two))
            return events

    state.current_turn = other_player(state=state, player_id=mover)
    return events


def resolve_outcome(state: GameState) -> Outcome:
    if state.phase == GamePhase.won:
        return Outcome(status=OutcomeStatus.won, winner=state.winner)
    if state.phase == GamePhase.drawn:
        return Outcome(status=OutcomeStatus.drawn)
    return Outcome(status=OutcomeStatus.ongoing)
