from __future__ import annotations

from datetime import UTC, datetime
from uuid import UUID, uuid4

import redis

from tictactoe.api.models import GameState
from tictactoe.core import engine
from tictactoe.core.errors import GameNotFound
from tictactoe.core.events import GameEvent


GAMES_SET_KEY = "tictactoe:games"
GAME_KEY_PREFIX = "tictactoe:game:"  # + {uuid}


def _now() -> datetime:
    return datetime.now(tz=UTC)


def _game_key(game_id: UUID) -> str:
    return f"{GAME_KEY_PREFIX}{game_id}"


def save_game(*, r: redis.Redis, state: GameState) -> None:
    state.last_updated_at = _now()
    r.set(_game_key(state.game_id), state.model_dump_json())


def get_game(*, r: redis.Redis, game_id: UUID) -> GameState | None:
    raw = r.get(_game_key(game_id))
    if not raw:
        return None
    return GameState.model_validate_json(raw)


def require_game(*, r: redis.Redis, game_id: UUID) -> GameState:
    state = get_game(r=r, game_id=game_id)
    if state is None:
        raise GameNotFound(game_id)
    return state


def create_game(*, r: redis.Redis, player_one: str, player_two: str) -> tuple[GameState, list[GameEvent]]:
    """Initialise and persist a new game under a fresh id.

    A new id per game means starting a game never discards another one.
    """

    state, events = engine.new_game(game_id=uuid4(), player_one=player_one, player_two=player_two)

    r.set(_game_key(state.game_id), state.model_dump_json())
    r.sadd(GAMES_SET_KEY, str(state.game_id))
    return state, events


def list_games(*, r: redis.Redis) -> list[GameState]:
    ids = sorted(r.smembers(GAMES_SET_KEY))
    out: list[GameState] = []
    for sid in ids:
        try:
            gid = UUID(sid)
        except ValueError:
            continue
        state = get_game(r=r, game_id=gid)
        if state is not None:
            out.append(state)
    out.sort(key=lambda s: s.created_at, reverse=True)
    return out
