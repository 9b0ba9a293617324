from __future__ import annotations

import pytest

from hoopshot.core.kinematics import AIM_SPEED, HOOP_SPEED, MAX_POS, MIN_POS, advance, step
from hoopshot.models import GameState


def test_advance_moves_by_direction_times_speed() -> None:
    assert advance(25.0, 1, HOOP_SPEED) == (pytest.approx(25.8), 1)
    assert advance(25.0, -1, AIM_SPEED) == (pytest.approx(23.7), -1)


def test_advance_bounces_and_clamps_at_upper_bound() -> None:
    pos, direction = advance(44.5, 1, HOOP_SPEED)
    assert pos == MAX_POS
    assert direction == -1


def test_advance_bounces_and_clamps_at_lower_bound() -> None:
    pos, direction = advance(5.5, -1, AIM_SPEED)
    assert pos == MIN_POS
    assert direction == 1


def test_landing_exactly_on_bound_flips_direction() -> None:
    pos, direction = advance(44.0, 1, 1.0)
    assert pos == MAX_POS
    assert direction == -1


def test_step_moves_both_markers_independently() -> None:
    game = GameState(message_id="m", channel_id="c")
    step(game)
    assert game.hoop_position == pytest.approx(25.8)
    assert game.aim_position == pytest.approx(16.3)
    assert (game.hoop_direction, game.aim_direction) == (1, 1)


def test_positions_stay_in_bounds_and_flip_on_clamp() -> None:
    game = GameState(message_id="m", channel_id="c")

    for _ in range(5_000):
        hoop_dir, aim_dir = game.hoop_direction, game.aim_direction
        step(game)

        assert MIN_POS <= game.hoop_position <= MAX_POS
        assert MIN_POS <= game.aim_position <= MAX_POS

        if game.hoop_position in (MIN_POS, MAX_POS):
            assert game.hoop_direction == -hoop_dir
        if game.aim_position in (MIN_POS, MAX_POS):
            assert game.aim_direction == -aim_dir
