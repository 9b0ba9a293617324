from __future__ import annotations

from typing import Protocol, cast

import redis

from hoopshot.websocket_hub import ChannelEvent, ChannelWebSocketHub

# Frames are edited ten times a second; keep each channel's history bounded.
STREAM_MAXLEN = 1_000


class RenderSinkError(RuntimeError):
    """The surface could not post or edit a message."""


class RenderSink(Protocol):
    async def send(self, channel_id: str, text: str) -> str:  # pragma: no cover
        """Post a new message and return its id (the game's correlation key)."""
        ...

    async def edit(self, channel_id: str, message_id: str, text: str) -> None:  # pragma: no cover
        ...


def channel_stream_key(channel_id: str) -> str:
    return f"channel:{channel_id}:messages"


def message_key(channel_id: str, message_id: str) -> str:
    return f"channel:{channel_id}:message:{message_id}"


class RedisRenderSink:
    """Chat surface backed by Redis.

    - every post/edit is appended to the channel's stream (an activity log clients can replay)
    - the latest text of each message lives in a hash, so `edit` on an unknown message fails
    - subscribers of the channel on the WebSocket hub get the same payloads live
    """

    def __init__(self, *, r: redis.Redis, hub: ChannelWebSocketHub | None = None) -> None:
        self.r = r
        self.hub = hub

    async def send(self, channel_id: str, text: str) -> str:
        try:
            message_id = cast(
                str,
                self.r.xadd(
                    channel_stream_key(channel_id),
                    {"type": "message_posted", "text": text},
                    maxlen=STREAM_MAXLEN,
                    approximate=True,
                ),
            )
            self.r.hset(message_key(channel_id, message_id), mapping={"text": text, "edits": "0"})
        except redis.RedisError as e:
            raise RenderSinkError(f"Failed to post to channel {channel_id}") from e

        await self._publish(channel_id, ChannelEvent(type="message_posted", message_id=message_id, text=text))
        return message_id

    async def edit(self, channel_id: str, message_id: str, text: str) -> None:
        key = message_key(channel_id, message_id)
        try:
            if not self.r.exists(key):
                raise RenderSinkError(f"Message {message_id} not found in channel {channel_id}")
            # One round-trip for the writes of a frame; edits run at tick rate.
            pipe = self.r.pipeline()
            pipe.hset(key, "text", text)
            pipe.hincrby(key, "edits", 1)
            pipe.xadd(
                channel_stream_key(channel_id),
                {"type": "message_edited", "message_id": message_id, "text": text},
                maxlen=STREAM_MAXLEN,
                approximate=True,
            )
            pipe.execute()
        except redis.RedisError as e:
            raise RenderSinkError(f"Failed to edit message {message_id}") from e

        await self._publish(channel_id, ChannelEvent(type="message_edited", message_id=message_id, text=text))

    async def _publish(self, channel_id: str, event: ChannelEvent) -> None:
        if self.hub is None:
            return
        await self.hub.publish(channel_id, event)


def get_message_text(*, r: redis.Redis, channel_id: str, message_id: str) -> str | None:
    raw = r.hget(message_key(channel_id, message_id), "text")
    return cast(str | None, raw)


def read_channel(*, r: redis.Redis, channel_id: str, count: int = 20) -> list[tuple[str, dict[str, str]]]:
    """Most recent stream entries of a channel, oldest first."""

    entries = r.xrevrange(channel_stream_key(channel_id), count=count)
    return list(reversed(cast(list[tuple[str, dict[str, str]]], entries)))


def replay_events(*, r: redis.Redis, channel_id: str, message_ids: list[str]) -> list[ChannelEvent]:
    """Current text of the given messages, for a subscriber joining the channel mid-game.

    Messages whose text is gone are skipped.
    """

    pipe = r.pipeline(transaction=False)
    for message_id in message_ids:
        pipe.hget(message_key(channel_id, message_id), "text")
    texts = cast(list[str | None], pipe.execute())
    return [
        ChannelEvent(type="message_replayed", message_id=message_id, text=text)
        for message_id, text in zip(message_ids, texts)
        if text is not None
    ]
