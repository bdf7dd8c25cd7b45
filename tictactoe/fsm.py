from __future__ import annotations

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from tictactoe.api.models import GamePhase, GameState
from tictactoe.core.errors import GameHasEnded, GameHasNotEnded


class GameFSM(StateMachine):
    """FSM wrapper around GameState.phase.

    - in_progress -> won | drawn when a move ends the game
    - won | drawn -> in_progress on restart
    The engine applies board mutations; the FSM only guards phase transitions.
    """

    in_progress = State(GamePhase.in_progress.value, value=GamePhase.in_progress.value, initial=True)
    won = State(GamePhase.won.value, value=GamePhase.won.value)
    drawn = State(GamePhase.drawn.value, value=GamePhase.drawn.value)

    win = in_progress.to(won)
    draw = in_progress.to(drawn)
    restart = won.to(in_progress) | drawn.to(in_progress)

    def __init__(self, game: GameState):
        self.game = game
        super().__init__(start_value=game.phase.value)

    @property
    def is_terminal(self) -> bool:
        return self.current_state != self.in_progress

    def require_in_progress(self) -> None:
        if self.is_terminal:
            raise GameHasEnded(f"Game has ended ({self.current_state.value})")

    def finish(self, event: str) -> None:
        """Move to a terminal phase via `win` or `draw`."""

        try:
            self.send(event)
        except TransitionNotAllowed as e:
            raise GameHasEnded(f"Game has ended ({self.current_state.value})") from e
        self.sync_phase_to_model()

    def reopen(self) -> None:
        try:
            self.restart()
        except TransitionNotAllowed as e:
            raise GameHasNotEnded() from e
        self.sync_phase_to_model()

    def sync_phase_to_model(self) -> None:
        self.game.phase = GamePhase(str(self.current_state.value))
