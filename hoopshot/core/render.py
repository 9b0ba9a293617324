"""Text rendering for the hoop challenge.

Everything here is a pure function of its inputs: the same game snapshot (and the same
`now`) always yields the same text. Callers pass the clock in explicitly.
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from hoopshot.core.kinematics import WIDTH
from hoopshot.core.scoring import distance, mention, proximity_status, result_message, verdict
from hoopshot.core.tournament import medal, summarize

if TYPE_CHECKING:
    from hoopshot.models import GameState

TITLE = "🏀 **MOVING HOOP CHALLENGE**"
RULE = "═" * WIDTH
COURT_HEIGHT = 20

PLAYER_COLUMN = 25
FREE_THROW_LEFT = 15
FREE_THROW_RIGHT = 35

# Half-width of the backboard; it is only drawn when it fits on the canvas.
BACKBOARD_HALF = 6


def _put(line: list[str], x: int, ch: str) -> None:
    if 0 <= x < WIDTH:
        line[x] = ch


def _span(line: list[str], left: int, right: int, edges: tuple[str, str], fill: str) -> None:
    for i in range(left, right + 1):
        if i == left:
            _put(line, i, edges[0])
        elif i == right:
            _put(line, i, edges[1])
        else:
            _put(line, i, fill)


def _backboard_fits(x: int) -> bool:
    return BACKBOARD_HALF <= x <= WIDTH - BACKBOARD_HALF - 1


def _draw_hoop(line: list[str], x: int, y: int) -> None:
    left, right = x - BACKBOARD_HALF, x + BACKBOARD_HALF

    if y == 3:
        if _backboard_fits(x):
            _span(line, left, right, ("╔", "╗"), "═")
    elif 4 <= y <= 7:
        if _backboard_fits(x):
            _span(line, left, right, ("║", "║"), "▓")
        # 3x3 target square in the middle of the backboard.
        if y == 5:
            _span(line, x - 1, x + 1, ("╔", "╗"), "═")
        elif y == 6:
            _put(line, x - 1, "║")
            _put(line, x + 1, "║")
            _put(line, x, " ")
        elif y == 7:
            _span(line, x - 1, x + 1, ("╚", "╝"), "═")
    elif y == 8:
        if _backboard_fits(x):
            _span(line, left, right, ("╚", "╝"), "═")
            _put(line, x, "╤")
    elif y == 9:
        _put(line, x, "│")
    elif y == 10:
        _put(line, x, "○")
    elif y == 11:
        _span(line, x - 1, x + 1, ("═", "═"), "═")
    elif y == 12:
        _span(line, x - 2, x + 2, ("\\", "/"), "│")
    elif y == 13:
        _span(line, x - 1, x + 1, ("\\", "/"), "│")
    elif y == 14:
        _put(line, x, "V")


def _court_row(y: int, hoop_x: int, aim_x: int) -> str:
    line = [" "] * WIDTH

    if 3 <= y <= 14:
        _draw_hoop(line, hoop_x, y)

    if y == 15:
        _put(line, aim_x, "▲")
    elif y == 16:
        _put(line, aim_x, "│")
    elif y == 17:
        _put(line, PLAYER_COLUMN, "🧍")
    elif y == 18:
        for x in range(FREE_THROW_LEFT, FREE_THROW_RIGHT + 1):
            _put(line, x, "─")

    return "".join(line)


def _bar(x: int, marker: str) -> str:
    bar = ["░"] * WIDTH
    _put(bar, x, marker)
    return "".join(bar)


def render_countdown(count: int) -> str:
    return "\n".join(
        [
            TITLE,
            RULE,
            "",
            "The hoop 🏀 and your aim ▲ are both moving!",
            "React with 🏀 when they align perfectly!",
            "",
            f"Starting in {count}...",
        ]
    )


def render_frame(game: GameState) -> str:
    hoop_x = game.rounded_hoop
    aim_x = game.rounded_aim

    lines = [TITLE, "```", RULE]
    lines.extend(_court_row(y, hoop_x, aim_x) for y in range(COURT_HEIGHT))
    lines.extend([RULE, "```"])

    lines.append("HOOP:  [" + _bar(hoop_x, "█") + "]")
    lines.append("AIM:   [" + _bar(aim_x, "▲") + "]")

    lines.append("")
    lines.append(proximity_status(distance(game.hoop_position, game.aim_position)))
    return "\n".join(lines)


def render_single_result(game: GameState, *, now: float) -> str:
    player = next(iter(game.players.values()), None)
    if player is None:
        return "\n".join(
            [
                "🏀 **GAME OVER**",
                "",
                "No shots taken! The game has ended.",
                "",
                "Time to try again? Use /hoopshot to play!",
            ]
        )

    elapsed = max(0.0, now - game.start_time)
    if player.score >= 50:
        closing = "🏆 Excellent shooting!"
    elif player.score > 0:
        closing = "💪 Keep practicing!"
    else:
        closing = "😅 Better luck next time!"

    return "\n".join(
        [
            "🏀 **GAME OVER**",
            "",
            result_message(player.distance),
            "",
            "📊 **Final Stats:**",
            f"• Distance: {player.distance} positions",
            f"• Score: {player.score} points",
            f"• Reaction time: {elapsed:.1f}s",
            "",
            closing,
        ]
    )


def render_tournament_results(game: GameState, *, now: float) -> str:
    summary = summarize(game, now=now)
    lines = ["🏀 **TOURNAMENT RESULTS**", RULE, ""]

    if summary.is_empty:
        lines.extend(["No shots taken! The tournament has ended.", "", "Try again with /hooptourney!"])
        return "\n".join(lines)

    for rank, shot in enumerate(summary.ranked):
        lines.append(
            f"{medal(rank)} {mention(shot.user_id)} - {verdict(shot.distance)} "
            f"Distance: {shot.distance} ({shot.score} pts)"
        )

    total = len(summary.ranked)
    plural = "" if summary.perfect == 1 else "s"
    lines.append("")
    lines.append(f"📊 Stats: {summary.scored}/{total} scored | {summary.perfect} perfect shot{plural}")
    lines.append(f"⏱️ Game duration: {summary.duration:.1f} seconds")
    lines.append("")
    lines.append(f"🏆 Champion: {mention(summary.ranked[0].user_id)} 🏆")
    return "\n".join(lines)


def render_result(game: GameState, *, now: float) -> str:
    if game.is_tournament:
        return render_tournament_results(game, now=now)
    return render_single_result(game, now=now)

