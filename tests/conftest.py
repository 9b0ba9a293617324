from __future__ import annotations

import os
from collections.abc import Generator
from pathlib import Path

import fakeredis
import pytest
from fastapi.testclient import TestClient

from hoopshot.config import GameSettings


@pytest.fixture(scope="session", autouse=True)
def _load_dotenv_for_tests() -> None:
    """Load repo .env for local runs (PyCharm/CLI).

    In CI, we *don't* auto-load `.env` by default so local tuning of timings
    (HOOPSHOT_*) never leaks into the suite.
    """

    if os.environ.get("CI") and os.environ.get("HOOPSHOT_LOAD_DOTENV_FOR_TESTS") != "1":
        return

    env_path = Path(__file__).resolve().parents[1] / ".env"
    if env_path.exists():
        from dotenv import load_dotenv

        load_dotenv(dotenv_path=env_path, override=False)


@pytest.fixture()
def r() -> fakeredis.FakeRedis:
    return fakeredis.FakeRedis(decode_responses=True)


@pytest.fixture()
def fast_settings() -> GameSettings:
    """Sub-second game: instant countdown, 5ms ticks."""

    return GameSettings(
        tick_interval=0.005,
        countdown_seconds=3,
        countdown_interval=0.0,
        single_player_duration=5.0,
        tournament_duration=5.0,
        cleanup_delay=5.0,
    )


@pytest.fixture()
def frozen_settings() -> GameSettings:
    """Aiming starts immediately but no tick fires during the test, so positions stay put."""

    return GameSettings(
        tick_interval=60.0,
        countdown_seconds=3,
        countdown_interval=0.0,
        single_player_duration=120.0,
        tournament_duration=120.0,
        cleanup_delay=60.0,
    )


@pytest.fixture()
def client_and_redis() -> Generator[tuple[TestClient, fakeredis.FakeRedis], None, None]:
    """FastAPI TestClient wired to an engine that renders into fakeredis."""

    from hoopshot.api.deps import get_engine, get_redis
    from hoopshot.engine import HoopEngine
    from hoopshot.main import app
    from hoopshot.registry import GameRegistry
    from hoopshot.sinks import RedisRenderSink
    from hoopshot.websocket_hub import hub

    r = fakeredis.FakeRedis(decode_responses=True)
    engine = HoopEngine(
        registry=GameRegistry(),
        sink=RedisRenderSink(r=r, hub=hub),
        settings=GameSettings(
            tick_interval=0.01,
            countdown_seconds=2,
            countdown_interval=0.01,
            single_player_duration=10.0,
            tournament_duration=10.0,
            cleanup_delay=10.0,
        ),
    )

    def _override_redis() -> Generator[fakeredis.FakeRedis, None, None]:
        yield r

    app.dependency_overrides[get_redis] = _override_redis
    app.dependency_overrides[get_engine] = lambda: engine
    with TestClient(app) as c:
        yield c, r
        c.portal.call(engine.shutdown)
    app.dependency_overrides.clear()
