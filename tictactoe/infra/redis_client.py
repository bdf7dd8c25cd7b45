from __future__ import annotations

import os

import redis


def get_redis_url() -> str:
    # Service-specific override first, then the conventional REDIS_URL.
    return os.environ.get("TICTACTOE_REDIS_URL") or os.environ.get("REDIS_URL", "redis://localhost:6379/0")


def create_redis() -> redis.Redis:
    # decode_responses=True => game JSON and stream fields come back as str
    return redis.Redis.from_url(get_redis_url(), decode_responses=True)
