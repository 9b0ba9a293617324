from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from enum import StrEnum

from pydantic import BaseModel

from hoopshot.core.kinematics import AIM_START, HOOP_START


class GamePhase(StrEnum):
    intro = "intro"
    countdown = "countdown"
    aiming = "aiming"
    shooting = "shooting"
    result = "result"


class PlayerShot(BaseModel):
    user_id: str
    hoop_pos: int
    aim_pos: int
    distance: int
    score: int
    # Wall clock (epoch seconds). Only used to break ranking ties.
    shot_time: float


class ShotData(BaseModel):
    """Snapshot of the shot that ended a single-player game (replay hook)."""

    hoop_pos: int
    aim_pos: int
    distance: int
    score: int
    animation_frame: int = 0


@dataclass(slots=True, eq=False)
class GameState:
    # Correlation key: identity of the rendered message this game lives in.
    message_id: str
    channel_id: str
    is_tournament: bool = False

    phase: GamePhase = GamePhase.intro
    # Monotonic clock; reset when aiming begins.
    start_time: float = 0.0
    frame_count: int = 0

    hoop_position: float = HOOP_START
    hoop_direction: int = 1
    aim_position: float = AIM_START
    aim_direction: int = 1

    shot_data: ShotData | None = None
    players: dict[str, PlayerShot] = field(default_factory=dict)

    # Countdown + aiming ticks run in this single task.
    task: asyncio.Task[None] | None = None
    cleanup_task: asyncio.Task[None] | None = None
    # Serializes ticks and reactions for this game.
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    # Set once the registry forgets the game; nothing may render or schedule for it after that.
    released: bool = False

    @property
    def rounded_hoop(self) -> int:
        return round(self.hoop_position)

    @property
    def rounded_aim(self) -> int:
        return round(self.aim_position)
