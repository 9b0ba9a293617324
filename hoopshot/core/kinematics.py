from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hoopshot.models import GameState

WIDTH = 50
MIN_POS = 5
MAX_POS = 45

HOOP_SPEED = 0.8
AIM_SPEED = 1.3

HOOP_START = 25.0
AIM_START = 15.0


def advance(position: float, direction: int, speed: float) -> tuple[float, int]:
    """Move one marker by one tick, bouncing off the track bounds.

    Reaching a bound exactly also counts as contact: the direction flips and the
    position is clamped on that same tick.
    """

    position += direction * speed
    if position <= MIN_POS or position >= MAX_POS:
        direction = -direction
        position = max(MIN_POS, min(MAX_POS, position))
    return position, direction


def step(game: GameState) -> None:
    game.hoop_position, game.hoop_direction = advance(game.hoop_position, game.hoop_direction, HOOP_SPEED)
    game.aim_position, game.aim_direction = advance(game.aim_position, game.aim_direction, AIM_SPEED)
