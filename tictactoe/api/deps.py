from __future__ import annotations

from collections.abc import Generator

import redis
from fastapi import Header, HTTPException, status

from tictactoe.infra.redis_client import create_redis

PLAYER_ID_HEADER = "X-Player-Id"


def get_redis() -> Generator[redis.Redis, None, None]:
    client = create_redis()
    try:
        yield client
    finally:
        client.close()


def get_current_player(x_player_id: str | None = Header(default=None, alias=PLAYER_ID_HEADER)) -> str:
    """Caller identity, as established by whatever sits in front of the API.

    The gateway is trusted to authenticate the caller and forward the id.
    """

    if not x_player_id or not x_player_id.strip():
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"{PLAYER_ID_HEADER} header is required",
        )
    return x_player_id.strip()
