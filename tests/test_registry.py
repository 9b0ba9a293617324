from __future__ import annotations

import asyncio

import pytest

from hoopshot.models import GameState
from hoopshot.registry import GameAlreadyRegistered, GameRegistry


def _game(key: str) -> GameState:
    return GameState(message_id=key, channel_id="c")


@pytest.mark.asyncio
async def test_register_and_lookup() -> None:
    registry = GameRegistry()
    game = _game("k1")

    await registry.register("k1", game)

    assert await registry.lookup("k1") is game
    assert await registry.lookup("missing") is None
    assert len(registry) == 1


@pytest.mark.asyncio
async def test_register_refuses_to_overwrite() -> None:
    registry = GameRegistry()
    first = _game("k1")
    await registry.register("k1", first)

    with pytest.raises(GameAlreadyRegistered):
        await registry.register("k1", _game("k1"))

    assert await registry.lookup("k1") is first


@pytest.mark.asyncio
async def test_remove_is_idempotent() -> None:
    registry = GameRegistry()
    game = _game("k1")
    await registry.register("k1", game)

    assert not game.released
    assert await registry.remove("k1") is game
    assert await registry.remove("k1") is None
    assert await registry.remove("never-registered") is None
    assert len(registry) == 0


@pytest.mark.asyncio
async def test_remove_cancels_held_tasks() -> None:
    registry = GameRegistry()
    game = _game("k1")
    tick = asyncio.create_task(asyncio.sleep(60))
    cleanup = asyncio.create_task(asyncio.sleep(60))
    game.task = tick
    game.cleanup_task = cleanup
    await registry.register("k1", game)

    await registry.remove("k1")
    await asyncio.gather(tick, cleanup, return_exceptions=True)

    assert tick.cancelled()
    assert cleanup.cancelled()
    assert game.task is None
    assert game.cleanup_task is None
    assert game.released


@pytest.mark.asyncio
async def test_remove_from_the_games_own_task_does_not_cancel_itself() -> None:
    registry = GameRegistry()
    game = _game("k1")
    await registry.register("k1", game)

    async def _self_cleanup() -> str:
        await registry.remove("k1")
        await asyncio.sleep(0)
        return "done"

    game.task = asyncio.create_task(_self_cleanup())
    task = game.task

    assert await task == "done"
    assert await registry.lookup("k1") is None


@pytest.mark.asyncio
async def test_concurrent_registration_of_distinct_games() -> None:
    registry = GameRegistry()
    games = [_game(f"k{i}") for i in range(50)]

    await asyncio.gather(*(registry.register(g.message_id, g) for g in games))
    assert sorted(await registry.keys()) == sorted(g.message_id for g in games)

    await asyncio.gather(*(registry.remove(g.message_id) for g in games), registry.remove("k0"))
    assert await registry.list() == []
