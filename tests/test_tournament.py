from __future__ import annotations

from hoopshot.core.tournament import medal, rank_shots, summarize
from hoopshot.models import GameState, PlayerShot


def _shot(user_id: str, *, score: int, distance: int, t: float) -> PlayerShot:
    return PlayerShot(user_id=user_id, hoop_pos=20, aim_pos=20 + distance, distance=distance, score=score, shot_time=t)


def test_ranking_orders_by_score_then_distance_then_time() -> None:
    a = _shot("A", score=50, distance=2, t=10)
    b = _shot("B", score=50, distance=1, t=5)
    c = _shot("C", score=100, distance=0, t=20)

    assert [s.user_id for s in rank_shots([a, b, c])] == ["C", "B", "A"]


def test_earlier_shot_wins_full_tie() -> None:
    late = _shot("late", score=10, distance=4, t=8.5)
    early = _shot("early", score=10, distance=4, t=3.0)

    assert [s.user_id for s in rank_shots([late, early])] == ["early", "late"]


def test_medals() -> None:
    assert [medal(i) for i in range(5)] == ["🥇", "🥈", "🥉", "👏", "👏"]


def test_summary_counts_scored_and_perfect() -> None:
    game = GameState(message_id="m", channel_id="c", is_tournament=True, start_time=100.0)
    for shot in [
        _shot("p", score=100, distance=0, t=1),
        _shot("s", score=50, distance=2, t=2),
        _shot("c", score=10, distance=3, t=3),
        _shot("m", score=0, distance=12, t=4),
    ]:
        game.players[shot.user_id] = shot

    summary = summarize(game, now=112.5)

    assert summary.scored == 2
    assert summary.perfect == 1
    assert summary.duration == 12.5
    assert summary.champion is not None and summary.champion.user_id == "p"
    assert not summary.is_empty


def test_summary_without_shots_is_empty() -> None:
    game = GameState(message_id="m", channel_id="c", is_tournament=True, start_time=0.0)

    summary = summarize(game, now=30.0)

    assert summary.is_empty
    assert summary.champion is None
