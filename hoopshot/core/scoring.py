from __future__ import annotations

PERFECT = 0
SCORED = 2
CLOSE = 5


def distance(a: float, b: float) -> int:
    """Alignment distance in whole track cells (positions are rounded first)."""

    return abs(round(a) - round(b))


def calculate_score(d: int) -> int:
    if d == PERFECT:
        return 100
    if d <= SCORED:
        return 50
    if d <= CLOSE:
        return 10
    return 0


def result_message(d: int) -> str:
    if d == PERFECT:
        return "🏆 PERFECT! Nothing but net!"
    if d <= SCORED:
        return "✅ GREAT SHOT! It went in!"
    if d <= CLOSE:
        return "😅 CLOSE! Rim out!"
    return "❌ MISSED! Way off!"


def verdict(d: int) -> str:
    """Short label used in the tournament leaderboard."""

    if d == PERFECT:
        return "PERFECT!"
    if d <= SCORED:
        return "SCORED!"
    if d <= CLOSE:
        return "CLOSE!"
    return "MISSED!"


def proximity_status(d: int) -> str:
    if d == PERFECT:
        return "🔥 **PERFECT ZONE! React with 🏀 NOW!** 🔥"
    if d <= SCORED:
        return "🎯 **VERY CLOSE!** Almost perfect! 🎯"
    if d <= CLOSE:
        return "⚠️ Getting closer..."
    return "⏱️ Wait for alignment..."


def mention(user_id: str) -> str:
    return f"<@{user_id}>"


def shot_feedback(user_id: str, d: int) -> str:
    if d == PERFECT:
        return f"🎯 PERFECT timing {mention(user_id)}!"
    if d <= SCORED:
        return f"✅ Great timing {mention(user_id)}!"
    if d <= CLOSE:
        return f"👍 Good attempt {mention(user_id)}!"
    return f"💪 Shot taken {mention(user_id)}!"


def already_shot_notice(user_id: str) -> str:
    return f"{mention(user_id)} You already took your shot!"
