from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal
from uuid import UUID

import redis

from tictactoe.api.models import GameState
from tictactoe.core import engine
from tictactoe.core.board import render
from tictactoe.core.errors import GameError
from tictactoe.core.events import GameEvent
from tictactoe.game_store import create_game, require_game, save_game
from tictactoe.lock import game_lock
from tictactoe.streams import EventSink, RedisStreamEventSink

logger = logging.getLogger(__name__)

ActionName = Literal["move", "restart"]


@dataclass(frozen=True, slots=True)
class ActionResult:
    state: GameState
    events: list[GameEvent]
    stream_entry_ids: list[str]


def _sink_for(r: redis.Redis, sink: EventSink | None) -> EventSink:
    return sink if sink is not None else RedisStreamEventSink(r)


def start_game(*, r: redis.Redis, player_one: str, player_two: str, sink: EventSink | None = None) -> ActionResult:
    state, events = create_game(r=r, player_one=player_one, player_two=player_two)
    ids = _sink_for(r, sink).emit(events)
    logger.info("game %s started: %s vs %s", state.game_id, player_one, player_two)
    return ActionResult(state=state, events=events, stream_entry_ids=ids)


def dispatch_action(
    *,
    r: redis.Redis,
    game_id: UUID,
    player_id: str,
    action: ActionName,
    position: int | None = None,
    sink: EventSink | None = None,
) -> ActionResult:
    """Entry point for every mutation of an existing game.

    Applies an action by:
    - acquiring a per-game lock
    - loading game state
    - running the engine (validation first, then mutation)
    - persisting state
    - emitting outcome events to the sink

    A rejected action raises before the save, so nothing is committed.
    """

    gid_str = str(game_id)

    with game_lock(r=r, game_id=gid_str):
        state = require_game(r=r, game_id=game_id)

        try:
            if action == "move":
                if position is None:
                    raise ValueError("position is required")
                events = engine.move(state=state, caller=player_id, position=position)
            elif action == "restart":
                events = engine.restart(state=state, caller=player_id)
            else:
                raise ValueError(f"Unknown action: {action}")
        except GameError as e:
            logger.info("game %s: %s by %s rejected (%s): %s", gid_str, action, player_id, e.code, e)
            raise

        save_game(r=r, state=state)
        ids = _sink_for(r, sink).emit(events)

    if action == "move":
        logger.debug("game %s: %s played %s\n%s", gid_str, player_id, position, render(state.board))
    for event in events:
        logger.info("game %s: %s %s", gid_str, event.type, event.payload)

    return ActionResult(state=state, events=events, stream_entry_ids=ids)


def submit_move(
    *, r: redis.Redis, game_id: UUID, player_id: str, position: int, sink: EventSink | None = None
) -> ActionResult:
    return dispatch_action(r=r, game_id=game_id, player_id=player_id, action="move", position=position, sink=sink)


def restart_game(*, r: redis.Redis, game_id: UUID, player_id: str, sink: EventSink | None = None) -> ActionResult:
    return dispatch_action(r=r, game_id=game_id, player_id=player_id, action="restart", sink=sink)
