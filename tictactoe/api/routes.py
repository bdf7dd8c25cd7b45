from __future__ import annotations

from uuid import UUID

import redis
from fastapi import APIRouter, Depends, HTTPException, WebSocket, WebSocketDisconnect, status

from tictactoe.actions import restart_game, start_game, submit_move
from tictactoe.api.deps import get_current_player, get_redis
from tictactoe.api.models import (
    ErrorDetail,
    GameCreateRequest,
    GameListResponse,
    GameState,
    MoveRequest,
    OutcomeResponse,
)
from tictactoe.core.engine import resolve_outcome
from tictactoe.core.errors import GameBusy, GameError, GameNotFound
from tictactoe.game_store import get_game, list_games
from tictactoe.streams import GameStream, read_events
from tictactoe.websocket_hub import hub

router = APIRouter()


def _http_error(e: Exception) -> HTTPException:
    if isinstance(e, GameNotFound):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")
    if isinstance(e, GameBusy):
        return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    code = e.code if isinstance(e, GameError) else "invalid_request"
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=ErrorDetail(code=code, message=str(e)).model_dump(),
    )


@router.websocket("/ws/game/{game_id}")
async def game_updates_ws(websocket: WebSocket, game_id: UUID) -> None:
    gid = str(game_id)
    await hub.connect(gid, websocket)

    try:
        # Keep the socket open; client can optionally send pings.
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        await hub.disconnect(gid, websocket)
    except Exception:
        await hub.disconnect(gid, websocket)
        raise


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.post("/game", response_model=GameState, status_code=status.HTTP_201_CREATED)
async def create_game_route(payload: GameCreateRequest, r: redis.Redis = Depends(get_redis)) -> GameState:
    try:
        result = start_game(r=r, player_one=payload.player_one, player_two=payload.player_two)
    except ValueError as e:
        raise _http_error(e) from e

    await hub.game_updated(result.state)
    return result.state


@router.get("/game", response_model=GameListResponse)
async def list_games_route(r: redis.Redis = Depends(get_redis)) -> GameListResponse:
    return GameListResponse(games=list_games(r=r))


@router.get("/game/{game_id}", response_model=GameState)
async def get_game_route(game_id: UUID, r: redis.Redis = Depends(get_redis)) -> GameState:
    state = get_game(r=r, game_id=game_id)
    if state is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")
    return state


@router.get("/game/{game_id}/outcome", response_model=OutcomeResponse)
async def get_outcome_route(game_id: UUID, r: redis.Redis = Depends(get_redis)) -> OutcomeResponse:
    state = get_game(r=r, game_id=game_id)
    if state is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")

    outcome = resolve_outcome(state)
    return OutcomeResponse(
        game_id=state.game_id,
        status=outcome.status,
        winner=outcome.winner,
        current_turn=state.current_turn,
        move_count=state.move_count,
    )


@router.post("/game/{game_id}/move", response_model=GameState)
async def move_route(
    game_id: UUID,
    payload: MoveRequest,
    player_id: str = Depends(get_current_player),
    r: redis.Redis = Depends(get_redis),
) -> GameState:
    try:
        result = submit_move(r=r, game_id=game_id, player_id=player_id, position=payload.position)
    except (ValueError, GameNotFound, GameBusy) as e:
        raise _http_error(e) from e

    await hub.game_updated(result.state)
    return result.state


@router.post("/game/{game_id}/restart", response_model=GameState)
async def restart_route(
    game_id: UUID,
    player_id: str = Depends(get_current_player),
    r: redis.Redis = Depends(get_redis),
) -> GameState:
    try:
        result = restart_game(r=r, game_id=game_id, player_id=player_id)
    except (ValueError, GameNotFound, GameBusy) as e:
        raise _http_error(e) from e

    await hub.game_updated(result.state)
    return result.state


@router.get("/game/{game_id}/events")
async def get_game_events_route(
    game_id: UUID,
    count: int = 20,
    start: str = "-",
    end: str = "+",
    r: redis.Redis = Depends(get_redis),
) -> dict[str, object]:
    """Debug endpoint: read a game's event stream.

    Intended for local/dev testing when redis-cli isn't available.
    """

    if count < 1 or count > 200:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="count must be between 1 and 200")

    try:
        entries = read_events(r=r, game_id=str(game_id), count=count, start=start, end=end)
    except redis.ResponseError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e)) from e

    events = [{"id": eid, "fields": fields} for eid, fields in entries]
    return {"game_id": str(game_id), "stream": GameStream(game_id=str(game_id)).key, "events": events}
