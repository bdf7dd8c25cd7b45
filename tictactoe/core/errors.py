from __future__ import annotations


class GameError(ValueError):
    """A rejected game action. Raised before any state is written."""

    code = "game_error"
    default_message = "Game action rejected"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class IncorrectPlayerTurn(GameError):
    code = "incorrect_player_turn"
    default_message = "It is not this player's turn"


class InvalidPosition(GameError):
    code = "invalid_position"
    default_message = "Position must be between 0 and 8"


class CellIsNotEmpty(GameError):
    code = "cell_is_not_empty"
    default_message = "Cell is already occupied"


class GameHasEnded(GameError):
    code = "game_has_ended"
    default_message = "Game has ended"


class GameHasNotEnded(GameError):
    code = "game_has_not_ended"
    default_message = "Game has not ended"


class InvalidPlayers(GameError):
    code = "invalid_players"
    default_message = "A game needs two distinct players"


class NotAParticipant(GameError):
    code = "not_a_participant"
    default_message = "Caller is not a player in this game"


class GameNotFound(LookupError):
    def __init__(self, game_id: object) -> None:
        super().__init__("Game not found")
        self.game_id = game_id


class GameBusy(RuntimeError):
    """Another mutation of the same game holds the lock."""

    def __init__(self, game_id: str) -> None:
        super().__init__("Game is busy")
        self.game_id = game_id
