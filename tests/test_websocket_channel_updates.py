from __future__ import annotations

import fakeredis
from fastapi.testclient import TestClient


def test_ws_channel_receives_countdown_and_frames(client_and_redis: tuple[TestClient, fakeredis.FakeRedis]) -> None:
    client, _ = client_and_redis

    with client.websocket_connect("/ws/channel/arena") as ws:
        res = client.post("/channels/arena/commands/hoopshot")
        assert res.status_code == 201
        mid = res.json()["message_id"]

        posted = ws.receive_json()
        assert posted["type"] == "message_posted"
        assert posted["message_id"] == mid
        assert posted["text"].endswith("Starting in 2...")

        edited = ws.receive_json()
        assert edited["type"] == "message_edited"
        assert edited["message_id"] == mid


def test_ws_joining_mid_game_gets_current_board_first(
    client_and_redis: tuple[TestClient, fakeredis.FakeRedis],
) -> None:
    client, _ = client_and_redis

    mid = client.post("/channels/arena/commands/hooptourney").json()["message_id"]
    client.post("/channels/elsewhere/commands/hooptourney")

    with client.websocket_connect("/ws/channel/arena") as ws:
        replayed = ws.receive_json()
        assert replayed["type"] == "message_replayed"
        assert replayed["message_id"] == mid
        assert replayed["text"]

        live = ws.receive_json()
        assert live["type"] == "message_edited"
        assert live["message_id"] == mid
