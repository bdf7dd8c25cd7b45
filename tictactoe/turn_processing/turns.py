from __future__ import annotations

from tictactoe.api.models import GameState
from tictactoe.core.errors import IncorrectPlayerTurn


def authorize(*, state: GameState, caller: str) -> bool:
    """Return whether `caller` may place the next stone.

    Only the identity held in `current_turn` may move; once the game has ended
    `current_turn` is None and nobody matches.
    """

    return state.current_turn is not None and caller == state.current_turn


def is_participant(*, state: GameState, player_id: str) -> bool:
    return player_id in (state.player_one, state.player_two)


def other_player(*, state: GameState, player_id: str) -> str:
    if player_id == state.player_one:
        return state.player_two
    if player_id == state.player_two:
        return state.player_one
    raise ValueError(f"Not a player in this game: {player_id}")


def assert_is_players_turn(*, state: GameState, player_id: str) -> None:
    if not authorize(state=state, caller=player_id):
        if state.current_turn is None:
            raise IncorrectPlayerTurn("Game is over; no player has the turn")
        raise IncorrectPlayerTurn(f"Not your turn (expected player_id={state.current_turn})")
