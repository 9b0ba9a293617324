from __future__ import annotations

import redis
from fastapi.requests import HTTPConnection

from hoopshot.engine import HoopEngine


def get_redis(conn: HTTPConnection) -> redis.Redis:
    """The app-wide client; typed on HTTPConnection so WebSocket routes can depend on it too."""

    client: redis.Redis | None = getattr(conn.app.state, "redis", None)
    if client is None:
        raise RuntimeError("Redis client not initialized. It is created on application startup.")
    return client


def get_engine(conn: HTTPConnection) -> HoopEngine:
    engine: HoopEngine | None = getattr(conn.app.state, "engine", None)
    if engine is None:
        raise RuntimeError("Engine not initialized. It is created on application startup.")
    return engine
