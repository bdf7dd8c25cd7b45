from __future__ import annotations

import random
from uuid import uuid4

import pytest

from tictactoe.api.models import GamePhase, GameState, OutcomeStatus
from tictactoe.core import engine
from tictactoe.core.board import occupied_count
from tictactoe.core.errors import (
    CellIsNotEmpty,
    GameHasEnded,
    GameHasNotEnded,
    IncorrectPlayerTurn,
    InvalidPlayers,
    InvalidPosition,
    NotAParticipant,
)

A = "alice"
B = "bob"


def _play(state: GameState, positions: list[int]) -> list:
    """Alternate A/B starting with whoever holds the turn; return all emitted events."""

    events = []
    for pos in positions:
        assert state.current_turn is not None
        events.extend(engine.move(state=state, caller=state.current_turn, position=pos))
    return events


def test_new_game_initial_state() -> None:
    gid = uuid4()
    state, events = engine.new_game(game_id=gid, player_one=A, player_two=B)

    assert state.game_id == gid
    assert state.board == [None] * 9
    assert state.current_turn == A
    assert state.move_count == 0
    assert state.phase == GamePhase.in_progress
    assert state.winner is None

    assert len(events) == 1
    assert events[0].type == "new_game"
    assert events[0].payload == {"player_one": A, "player_two": B}


def test_new_game_rejects_identical_players() -> None:
    with pytest.raises(InvalidPlayers):
        engine.new_game(game_id=uuid4(), player_one=A, player_two=A)


def test_turn_alternates_on_every_non_terminal_move(game: GameState) -> None:
    expected = [A, B, A, B]
    for i, pos in enumerate([0, 4, 8, 1]):
        assert game.current_turn == expected[i]
        assert engine.move(state=game, caller=expected[i], position=pos) == []
    assert game.current_turn == A
    assert game.move_count == 4


def test_top_row_win_scenario(game: GameState) -> None:
    events = _play(game, [0, 3, 1, 4])
    assert events == []

    events = engine.move(state=game, caller=A, position=2)

    assert [e.type for e in events] == ["game_won"]
    assert events[0].payload == {"player": A}
    assert game.current_turn is None
    assert game.phase == GamePhase.won
    assert game.winner == A
    assert game.move_count == 5

    for caller in (A, B):
        with pytest.raises(IncorrectPlayerTurn):
            engine.move(state=game, caller=caller, position=5)


def test_second_player_wins_on_diagonal(game: GameState) -> None:
    events = _play(game, [0, 2, 1, 4, 8, 6])

    assert [e.type for e in events] == ["game_won"]
    assert events[0].payload == {"player": B}
    assert game.winner == B
    assert game.current_turn is None


def test_draw_scenario(game: GameState) -> None:
    # Final board (A = O, B = X):  X O X / O X O / O X O
    events = _play(game, [1, 0, 3, 2, 5, 4, 6, 7, 8])

    assert [e.type for e in events] == ["game_drawn"]
    assert events[0].payload == {"player_one": A, "player_two": B}
    assert game.current_turn is None
    assert game.phase == GamePhase.drawn
    assert game.winner is None
    assert game.move_count == 9


def test_win_on_last_cell_is_a_win_not_a_draw(game: GameState) -> None:
    events = _play(game, [1, 0, 2, 5, 3, 7, 4, 8, 6])

    assert [e.type for e in events] == ["game_won"]
    assert game.winner == A
    assert game.phase == GamePhase.won


def test_wrong_player_is_rejected_without_mutation(game: GameState) -> None:
    before = game.model_dump()
    with pytest.raises(IncorrectPlayerTurn):
        engine.move(state=game, caller=B, position=0)
    assert game.model_dump() == before


def test_outsider_is_rejected(game: GameState) -> None:
    with pytest.raises(IncorrectPlayerTurn):
        engine.move(state=game, caller="mallory", position=0)


def test_invalid_position_is_rejected_without_mutation(game: GameState) -> None:
    before = game.model_dump()
    for pos in (9, 10, 1_000):
        with pytest.raises(InvalidPosition):
            engine.move(state=game, caller=A, position=pos)
    assert game.model_dump() == before


def test_occupied_cell_is_rejected_without_mutation(game: GameState) -> None:
    engine.move(state=game, caller=A, position=4)
    before = game.model_dump()

    with pytest.raises(CellIsNotEmpty):
        engine.move(state=game, caller=B, position=4)

    assert game.model_dump() == before
    assert game.board[4] == A


def test_precondition_order(game: GameState) -> None:
    engine.move(state=game, caller=A, position=0)

    # Wrong caller wins over a bad position or an occupied cell.
    with pytest.raises(IncorrectPlayerTurn):
        engine.move(state=game, caller=A, position=99)
    with pytest.raises(IncorrectPlayerTurn):
        engine.move(state=game, caller=A, position=0)

    # Bad position is reported before occupancy is looked at.
    with pytest.raises(InvalidPosition):
        engine.move(state=game, caller=B, position=9)


def test_terminal_phase_guard_rejects_move() -> None:
    state, _ = engine.new_game(game_id=uuid4(), player_one=A, player_two=B)
    # Inconsistent record: turn still set but phase already final.
    state.phase = GamePhase.won

    with pytest.raises(GameHasEnded):
        engine.move(state=state, caller=A, position=0)
    assert state.board == [None] * 9
    assert state.move_count == 0


@pytest.mark.parametrize("seed", range(20))
def test_random_games_keep_move_count_in_sync(seed: int) -> None:
    rng = random.Random(seed)
    state, _ = engine.new_game(game_id=uuid4(), player_one=A, player_two=B)

    while state.current_turn is not None:
        mover = state.current_turn
        free = [i for i, c in enumerate(state.board) if c is None]
        events = engine.move(state=state, caller=mover, position=rng.choice(free))

        assert state.move_count == occupied_count(state.board)
        if events:
            assert state.current_turn is None
            assert len(events) == 1
        else:
            assert state.current_turn == (B if mover == A else A)

    assert state.phase in {GamePhase.won, GamePhase.drawn}
    assert 5 <= state.move_count <= 9


def test_resolve_outcome(game: GameState) -> None:
    assert engine.resolve_outcome(game).status == OutcomeStatus.ongoing

    _play(game, [0, 3, 1, 4, 2])
    outcome = engine.resolve_outcome(game)
    assert outcome.status == OutcomeStatus.won
    assert outcome.winner == A

    drawn, _ = engine.new_game(game_id=uuid4(), player_one=A, player_two=B)
    _play(drawn, [1, 0, 3, 2, 5, 4, 6, 7, 8])
    assert engine.resolve_outcome(drawn).status == OutcomeStatus.drawn
    assert engine.resolve_outcome(drawn).winner is None


def test_restart_after_game_end(game: GameState) -> None:
    gid = game.game_id
    _play(game, [0, 3, 1, 4, 2])

    events = engine.restart(state=game, caller=B)

    assert [e.type for e in events] == ["new_game"]
    assert game.game_id == gid
    assert game.board == [None] * 9
    assert game.current_turn == A
    assert game.move_count == 0
    assert game.phase == GamePhase.in_progress
    assert game.winner is None


def test_restart_rejected_while_in_progress(game: GameState) -> None:
    engine.move(state=game, caller=A, position=0)
    before = game.model_dump()

    with pytest.raises(GameHasNotEnded):
        engine.restart(state=game, caller=A)
    assert game.model_dump() == before


def test_restart_rejected_for_outsider(game: GameState) -> None:
    _play(game, [0, 3, 1, 4, 2])
    with pytest.raises(NotAParticipant):
        engine.restart(state=game, caller="mallory")
    assert game.phase == GamePhase.won
