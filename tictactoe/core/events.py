from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Literal

EventType = Literal[
    "new_game",
    "game_won",
    "game_drawn",
]


@dataclass(frozen=True, slots=True)
class GameEvent:
    """Outcome notification produced by the engine.

    The engine only returns these; the service layer hands them to the event sink.
    """

    type: EventType
    game_id: str
    payload: dict[str, str]
    ts: datetime

    @staticmethod
    def now(*, type: EventType, game_id: str, payload: dict[str, str]) -> "GameEvent":
        return GameEvent(type=type, game_id=game_id, payload=payload, ts=datetime.now(timezone.utc))

    def to_fields(self) -> dict[str, str]:
        return {"type": self.type, "game_id": self.game_id, **self.payload, "ts": self.ts.isoformat()}


def new_game_event(*, game_id: str, player_one: str, player_two: str) -> GameEvent:
    return GameEvent.now(
        type="new_game",
        game_id=game_id,
        payload={"player_one": player_one, "player_two": player_two},
    )


def game_won_event(*, game_id: str, player: str) -> GameEvent:
    return GameEvent.now(type="game_won", game_id=game_id, payload={"player": player})


def game_drawn_event(*, game_id: str, player_one: str, player_two: str) -> GameEvent:
    return GameEvent.now(
        type="game_drawn",
        game_id=game_id,
        payload={"player_one": player_one, "player_two": player_two},
    )
