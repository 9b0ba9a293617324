from __future__ import annotations

import asyncio
from collections.abc import Iterable
from typing import Literal

from fastapi import WebSocket
from pydantic import BaseModel


class ChannelEvent(BaseModel):
    """One post or edit of a channel message, as pushed to WebSocket subscribers."""

    type: Literal["message_posted", "message_edited", "message_replayed"]
    message_id: str
    text: str


class ChannelWebSocketHub:
    """Live feed of a channel's messages.

    A socket that joins while games are running first receives a `message_replayed`
    event per game board it passes as `replay`, then every later post and edit.
    Replay and registration happen under the hub lock, so an edit published at the
    same time cannot reach the socket ahead of the older replayed text.

    Sockets that fail a send are dropped.
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, set[WebSocket]] = {}
        self._lock = asyncio.Lock()

    async def subscribe(
        self,
        channel_id: str,
        websocket: WebSocket,
        *,
        replay: Iterable[ChannelEvent] = (),
    ) -> None:
        await websocket.accept()
        async with self._lock:
            for event in replay:
                await websocket.send_json(event.model_dump())
            self._subscribers.setdefault(channel_id, set()).add(websocket)

    async def unsubscribe(self, channel_id: str, websocket: WebSocket) -> None:
        async with self._lock:
            self._drop(channel_id, [websocket])

    async def publish(self, channel_id: str, event: ChannelEvent) -> None:
        async with self._lock:
            subscribers = list(self._subscribers.get(channel_id, ()))
        if not subscribers:
            return

        payload = event.model_dump()
        results = await asyncio.gather(*(ws.send_json(payload) for ws in subscribers), return_exceptions=True)
        gone = [ws for ws, res in zip(subscribers, results) if isinstance(res, Exception)]
        if gone:
            async with self._lock:
                self._drop(channel_id, gone)

    def subscriber_count(self, channel_id: str) -> int:
        return len(self._subscribers.get(channel_id, ()))

    def _drop(self, channel_id: str, websockets: Iterable[WebSocket]) -> None:
        subscribers = self._subscribers.get(channel_id)
        if subscribers is None:
            return
        subscribers.difference_update(websockets)
        if not subscribers:
            del self._subscribers[channel_id]


hub = ChannelWebSocketHub()
