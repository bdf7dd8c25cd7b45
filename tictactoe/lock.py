from __future__ import annotations

import os
import time
from contextlib import contextmanager

import redis

from tictactoe.core.errors import GameBusy


def get_lock_ttl_ms() -> int:
    return int(os.environ.get("TICTACTOE_LOCK_TTL_MS", "5000"))


@contextmanager
def game_lock(*, r: redis.Redis, game_id: str, ttl_ms: int | None = None):
    """Best-effort per-game lock.

    Serialises mutations of one game across requests. A second caller fails
    fast with GameBusy instead of waiting. The TTL frees the key if a holder
    dies mid-call.
    """

    key = f"tictactoe:lock:game:{game_id}"
    acquired = r.set(key, "1", nx=True, px=ttl_ms if ttl_ms is not None else get_lock_ttl_ms())
    if not acquired:
        raise GameBusy(game_id)
    try:
        yield
    finally:
        # Only safe while each lock has a single holder.
        r.delete(key)
        time.sleep(0)
