from __future__ import annotations

import os
from dataclasses import dataclass


def _ms_from_env(name: str, default_ms: int) -> float:
    return int(os.environ.get(name, str(default_ms))) / 1000


@dataclass(frozen=True, slots=True)
class GameSettings:
    """Timing knobs for a game. All values are seconds."""

    tick_interval: float = 0.1
    countdown_seconds: int = 3
    countdown_interval: float = 1.0
    single_player_duration: float = 20.0
    tournament_duration: float = 30.0
    # How long a finished game stays registered (reactions on it are ignored).
    cleanup_delay: float = 60.0

    def max_duration(self, *, is_tournament: bool) -> float:
        return self.tournament_duration if is_tournament else self.single_player_duration


def settings_from_env() -> GameSettings:
    return GameSettings(
        tick_interval=_ms_from_env("HOOPSHOT_TICK_MS", 100),
        countdown_seconds=int(os.environ.get("HOOPSHOT_COUNTDOWN_SECONDS", "3")),
        countdown_interval=_ms_from_env("HOOPSHOT_COUNTDOWN_INTERVAL_MS", 1000),
        single_player_duration=_ms_from_env("HOOPSHOT_SINGLE_DURATION_MS", 20_000),
        tournament_duration=_ms_from_env("HOOPSHOT_TOURNAMENT_DURATION_MS", 30_000),
        cleanup_delay=_ms_from_env("HOOPSHOT_CLEANUP_DELAY_MS", 60_000),
    )
