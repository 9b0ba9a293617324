from __future__ import annotations

import asyncio

from hoopshot.models import GameState


class GameAlreadyRegistered(ValueError):
    pass


class GameRegistry:
    """Active games keyed by correlation key (the id of the message the game renders into).

    Contract:
      - `register` refuses to overwrite a live game under a reused key.
      - `remove` is idempotent, marks the game released and cancels its task and cleanup timer.

    Every mutation goes through these methods; callers never touch the mapping directly.
    """

    def __init__(self) -> None:
        self._games: dict[str, GameState] = {}
        self._lock = asyncio.Lock()

    async def register(self, key: str, state: GameState) -> None:
        async with self._lock:
            if key in self._games:
                raise GameAlreadyRegistered(f"Game already registered for message {key}")
            self._games[key] = state

    async def lookup(self, key: str) -> GameState | None:
        async with self._lock:
            return self._games.get(key)

    async def remove(self, key: str) -> GameState | None:
        async with self._lock:
            state = self._games.pop(key, None)

        if state is not None:
            _release(state)
        return state

    async def list(self) -> list[GameState]:
        async with self._lock:
            return list(self._games.values())

    async def keys(self) -> list[str]:
        async with self._lock:
            return list(self._games)

    def __len__(self) -> int:
        return len(self._games)


def _release(state: GameState) -> None:
    state.released = True
    # A game's own task may be the one tearing it down; never cancel ourselves.
    current = asyncio.current_task()
    for task in (state.task, state.cleanup_task):
        if task is not None and task is not current and not task.done():
            task.cancel()
    state.task = None
    state.cleanup_task = None
