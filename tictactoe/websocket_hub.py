from __future__ import annotations

import asyncio
from collections import defaultdict

from fastapi import WebSocket

from tictactoe.api.models import GameState


class GameWebSocketHub:
    """In-process WebSocket pub/sub keyed by game_id.

    Clients subscribe with `connect(game_id, websocket)` and get a small
    `game_updated` message after every committed change to that game; they
    fetch the full state over REST. Runs per process, so replicas do not see
    each other's subscribers.
    """

    def __init__(self) -> None:
        self._by_game: dict[str, set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def connect(self, game_id: str, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self._by_game[game_id].add(websocket)

    async def disconnect(self, game_id: str, websocket: WebSocket) -> None:
        async with self._lock:
            conns = self._by_game.get(game_id)
            if not conns:
                return
            conns.discard(websocket)
            if not conns:
                self._by_game.pop(game_id, None)

    async def broadcast(self, game_id: str, payload: dict[str, object]) -> None:
        async with self._lock:
            conns = list(self._by_game.get(game_id, set()))

        if not conns:
            return

        dead: list[WebSocket] = []
        for ws in conns:
            try:
                await ws.send_json(payload)
            except Exception:
                dead.append(ws)

        if dead:
            async with self._lock:
                for ws in dead:
                    self._by_game.get(game_id, set()).discard(ws)

    async def game_updated(self, state: GameState) -> None:
        await self.broadcast(
            str(state.game_id),
            {
                "type": "game_updated",
                "game_id": str(state.game_id),
                "phase": state.phase.value,
                "current_turn": state.current_turn,
                "move_count": state.move_count,
            },
        )


hub = GameWebSocketHub()
