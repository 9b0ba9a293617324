from fastapi import FastAPI
import logging

import redis

from hoopshot.api.routes import router
from hoopshot.config import settings_from_env
from hoopshot.engine import HoopEngine
from hoopshot.infra.redis_client import create_redis
from hoopshot.registry import GameRegistry
from hoopshot.sinks import RedisRenderSink
from hoopshot.websocket_hub import hub

app = FastAPI(title="hoopshot", version="0.1.0")
app.include_router(router)
# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def create_engine(r: redis.Redis) -> HoopEngine:
    return HoopEngine(
        registry=GameRegistry(),
        sink=RedisRenderSink(r=r, hub=hub),
        settings=settings_from_env(),
    )


@app.on_event("startup")
async def _startup() -> None:
    app.state.redis = create_redis()
    app.state.engine = create_engine(app.state.redis)
    logger.info("Engine ready")


@app.on_event("shutdown")
async def _shutdown() -> None:
    engine: HoopEngine | None = getattr(app.state, "engine", None)
    if engine is not None:
        await engine.shutdown()
    client: redis.Redis | None = getattr(app.state, "redis", None)
    if client is not None:
        client.close()


@app.get("/info")
async def info() -> dict[str, str]:
    return {"name": "hoopshot", "version": "0.1.0"}
