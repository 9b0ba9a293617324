from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from hoopshot.core.scoring import PERFECT, SCORED

if TYPE_CHECKING:
    from hoopshot.models import GameState, PlayerShot

MEDALS = ("🥇", "🥈", "🥉")
RUNNER_UP = "👏"


@dataclass(frozen=True, slots=True)
class TournamentSummary:
    ranked: list[PlayerShot]
    scored: int
    perfect: int
    duration: float

    @property
    def champion(self) -> PlayerShot | None:
        return self.ranked[0] if self.ranked else None

    @property
    def is_empty(self) -> bool:
        return not self.ranked


def ranking_key(shot: PlayerShot) -> tuple[int, int, float]:
    return (-shot.score, shot.distance, shot.shot_time)


def rank_shots(shots: Iterable[PlayerShot]) -> list[PlayerShot]:
    """Best first: score desc, then distance asc, then earlier shot wins."""

    return sorted(shots, key=ranking_key)


def medal(rank: int) -> str:
    return MEDALS[rank] if 0 <= rank < len(MEDALS) else RUNNER_UP


def summarize(game: GameState, *, now: float) -> TournamentSummary:
    ranked = rank_shots(game.players.values())
    return TournamentSummary(
        ranked=ranked,
        scored=sum(1 for p in ranked if p.distance <= SCORED),
        perfect=sum(1 for p in ranked if p.distance == PERFECT),
        duration=max(0.0, now - game.start_time),
    )
