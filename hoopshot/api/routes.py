from __future__ import annotations

import redis
from fastapi import APIRouter, Depends, HTTPException, Response, WebSocket, WebSocketDisconnect, status

from hoopshot.api.deps import get_engine, get_redis
from hoopshot.api.models import GameCreateRequest, GameListResponse, GameSnapshot, ReactionRequest, ShotResponse
from hoopshot.commands import resolve_command
from hoopshot.engine import HoopEngine
from hoopshot.sinks import RenderSinkError, read_channel, replay_events
from hoopshot.websocket_hub import hub

router = APIRouter()


@router.websocket("/ws/channel/{channel_id}")
async def channel_updates_ws(
    websocket: WebSocket,
    channel_id: str,
    engine: HoopEngine = Depends(get_engine),
    r: redis.Redis = Depends(get_redis),
) -> None:
    boards = [g.message_id for g in await engine.registry.list() if g.channel_id == channel_id]
    await hub.subscribe(channel_id, websocket, replay=replay_events(r=r, channel_id=channel_id, message_ids=boards))

    try:
        # Inbound text is ignored; clients may send pings.
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await hub.unsubscribe(channel_id, websocket)


@router.get("/healthcheck")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


async def _start(engine: HoopEngine, *, channel_id: str, is_tournament: bool) -> GameSnapshot:
    try:
        state = await engine.start_game(channel_id=channel_id, is_tournament=is_tournament)
    except RenderSinkError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    return GameSnapshot.from_state(state)


@router.post("/channels/{channel_id}/commands/{command}", response_model=GameSnapshot, status_code=status.HTTP_201_CREATED)
async def slash_command_route(
    channel_id: str,
    command: str,
    engine: HoopEngine = Depends(get_engine),
) -> GameSnapshot:
    try:
        command_spec = resolve_command(command)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown command: {command}") from e

    return await _start(engine, channel_id=channel_id, is_tournament=command_spec.is_tournament)


@router.post("/games", response_model=GameSnapshot, status_code=status.HTTP_201_CREATED)
async def create_game_route(payload: GameCreateRequest, engine: HoopEngine = Depends(get_engine)) -> GameSnapshot:
    return await _start(engine, channel_id=payload.channel_id, is_tournament=payload.tournament)


@router.get("/games", response_model=GameListResponse)
async def list_games_route(engine: HoopEngine = Depends(get_engine)) -> GameListResponse:
    games = await engine.registry.list()
    return GameListResponse(games=[GameSnapshot.from_state(g) for g in games])


@router.get("/games/{message_id}", response_model=GameSnapshot)
async def get_game_route(message_id: str, engine: HoopEngine = Depends(get_engine)) -> GameSnapshot:
    state = await engine.registry.lookup(message_id)
    if state is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Game not found")
    return GameSnapshot.from_state(state)


@router.post("/games/{message_id}/reactions", response_model=ShotResponse)
async def reaction_route(
    message_id: str,
    payload: ReactionRequest,
    engine: HoopEngine = Depends(get_engine),
) -> ShotResponse:
    try:
        result = await engine.on_shot(message_id=message_id, user_id=payload.user_id, reaction=payload.reaction)
    except RenderSinkError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e)) from e
    return ShotResponse.from_result(result)


@router.delete("/games/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_game_route(message_id: str, engine: HoopEngine = Depends(get_engine)) -> Response:
    await engine.cleanup(message_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/channels/{channel_id}/messages")
async def get_channel_messages_route(
    channel_id: str,
    count: int = 20,
    r: redis.Redis = Depends(get_redis),
) -> dict[str, object]:
    """Debug endpoint: read the most recent posts/edits of a channel.

    Intended for local/dev testing when redis-cli isn't available.
    """

    if count < 1 or count > 200:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail="count must be between 1 and 200")

    entries = read_channel(r=r, channel_id=channel_id, count=count)
    messages = [{"id": mid, "fields": fields} for mid, fields in entries]
    return {"channel_id": channel_id, "messages": messages}
