from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, Sequence, cast

import redis

from tictactoe.core.events import GameEvent


@dataclass(frozen=True, slots=True)
class GameStream:
    game_id: str

    @property
    def key(self) -> str:
        return f"tictactoe:events:{self.game_id}"


class EventSink(Protocol):
    """Receives outcome notifications. Fire-and-forget from the engine's point of view."""

    def emit(self, events: Sequence[GameEvent]) -> list[str]: ...


class RedisStreamEventSink:
    """Append each event to its game's Redis Stream."""

    def __init__(self, r: redis.Redis) -> None:
        self._r = r

    def emit(self, events: Sequence[GameEvent]) -> list[str]:
        ids: list[str] = []
        for event in events:
            key = GameStream(game_id=event.game_id).key
            # redis-py stubs expect field/value unions; every field we write is a string.
            stream_id = self._r.xadd(key, {str(k): str(v) for k, v in event.to_fields().items()})
            ids.append(cast(str, stream_id))
        return ids


def read_events(
    *,
    r: redis.Redis,
    game_id: str,
    count: int = 20,
    start: str = "-",
    end: str = "+",
) -> list[tuple[str, dict[str, str]]]:
    entries = r.xrange(GameStream(game_id=game_id).key, min=start, max=end, count=count)
    return cast(list[tuple[str, dict[str, str]]], entries)
