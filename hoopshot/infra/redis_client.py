from __future__ import annotations

import os

import redis

DEFAULT_REDIS_URL = "redis://localhost:6379/0"

# A frame edit stuck on Redis longer than this fails the game instead of stalling its ticks.
SOCKET_TIMEOUT_SECONDS = 2.0


def get_redis_url() -> str:
    return os.environ.get("HOOPSHOT_REDIS_URL") or os.environ.get("REDIS_URL", DEFAULT_REDIS_URL)


def create_redis(url: str | None = None) -> redis.Redis:
    """Client shared by the render sink and the read endpoints (strings in and out)."""

    return redis.Redis.from_url(
        url or get_redis_url(),
        decode_responses=True,
        socket_timeout=SOCKET_TIMEOUT_SECONDS,
        socket_connect_timeout=SOCKET_TIMEOUT_SECONDS,
    )
