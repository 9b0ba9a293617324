from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from hoopshot.config import GameSettings
from hoopshot.core.kinematics import step
from hoopshot.core.render import render_countdown, render_frame, render_result
from hoopshot.core.scoring import already_shot_notice, calculate_score, shot_feedback
from hoopshot.fsm import transition
from hoopshot.models import GamePhase, GameState, PlayerShot, ShotData
from hoopshot.registry import GameRegistry
from hoopshot.sinks import RenderSink, RenderSinkError

logger = logging.getLogger(__name__)

SHOT_REACTION = "🏀"
TECHNICAL_DIFFICULTIES = "⚠️ Game ended due to technical difficulties."


class ShotStatus(StrEnum):
    recorded = "recorded"
    duplicate = "duplicate"
    ignored = "ignored"


@dataclass(frozen=True, slots=True)
class ShotResult:
    status: ShotStatus
    shot: PlayerShot | None = None


class HoopEngine:
    """Runs moving-hoop games: countdown, aiming ticks, reactions, results and cleanup.

    Each game gets one asyncio task that performs the countdown and then the aiming
    ticks in sequence. A per-game lock serializes those ticks with incoming reactions,
    so the first shot of a participant always wins and later ones are rejected.

    Render failures are fatal to the affected game only: it is aborted and removed,
    the channel gets a best-effort notice, and other games keep running.
    """

    def __init__(
        self,
        *,
        registry: GameRegistry,
        sink: RenderSink,
        settings: GameSettings | None = None,
        clock: Callable[[], float] = time.monotonic,
        wall_clock: Callable[[], float] = time.time,
    ) -> None:
        self.registry = registry
        self.sink = sink
        self.settings = settings or GameSettings()
        self.clock = clock
        self.wall_clock = wall_clock

    # ---- commands and reactions ----

    async def start_game(self, *, channel_id: str, is_tournament: bool = False) -> GameState:
        """Post the countdown message and start the game that lives in it.

        Raises RenderSinkError if the countdown could not be posted; nothing is registered then.
        """

        message_id = await self.sink.send(channel_id, render_countdown(self.settings.countdown_seconds))

        game = GameState(
            message_id=message_id,
            channel_id=channel_id,
            is_tournament=is_tournament,
            start_time=self.clock(),
        )
        transition(game, "begin_countdown")
        await self.registry.register(message_id, game)
        game.task = asyncio.create_task(self._run(game), name=f"hoopshot-game:{message_id}")

        logger.info(
            "Started %s game %s in channel %s",
            "tournament" if is_tournament else "single-player",
            message_id,
            channel_id,
        )
        return game

    async def on_shot(self, *, message_id: str, user_id: str, reaction: str = SHOT_REACTION) -> ShotResult:
        """Handle a reaction on a game message.

        Reactions other than the basketball, unknown messages and games that are not
        aiming are ignored without any output.
        """

        if reaction != SHOT_REACTION:
            return ShotResult(ShotStatus.ignored)

        game = await self.registry.lookup(message_id)
        if game is None:
            return ShotResult(ShotStatus.ignored)

        async with game.lock:
            if game.phase != GamePhase.aiming:
                return ShotResult(ShotStatus.ignored)

            try:
                existing = game.players.get(user_id)
                if existing is not None:
                    await self.sink.send(game.channel_id, already_shot_notice(user_id))
                    return ShotResult(ShotStatus.duplicate, shot=existing)

                shot = self._record_shot(game, user_id)
                logger.info("Game %s: %s shot at distance %s", message_id, user_id, shot.distance)
                await self.sink.send(game.channel_id, shot_feedback(user_id, shot.distance))

                if game.released:
                    logger.debug("Game %s was cleaned up while %s's shot was posted", message_id, user_id)
                elif not game.is_tournament:
                    game.shot_data = ShotData(
                        hoop_pos=shot.hoop_pos,
                        aim_pos=shot.aim_pos,
                        distance=shot.distance,
                        score=shot.score,
                    )
                    await self._finish(game)
            except RenderSinkError:
                logger.exception("Render failed while handling a shot in game %s", message_id)
                await self._abort(game)
                raise

        return ShotResult(ShotStatus.recorded, shot=shot)

    async def cleanup(self, message_id: str) -> bool:
        """Forget a game and release its timers. Safe to call more than once."""

        removed = await self.registry.remove(message_id)
        if removed is not None:
            logger.debug("Cleaned up game %s", message_id)
        return removed is not None

    async def shutdown(self) -> None:
        """Cancel every running game and pending cleanup timer."""

        games = await self.registry.list()
        tasks = [t for g in games for t in (g.task, g.cleanup_task) if t is not None]
        for game in games:
            await self.registry.remove(game.message_id)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    # ---- game task ----

    async def _run(self, game: GameState) -> None:
        try:
            if await self._countdown(game):
                await self._aim(game)
        except RenderSinkError:
            logger.exception("Render failed in game %s (%s)", game.message_id, game.phase.value)
            await self._abort(game)

    async def _countdown(self, game: GameState) -> bool:
        for count in range(self.settings.countdown_seconds - 1, 0, -1):
            await asyncio.sleep(self.settings.countdown_interval)
            async with game.lock:
                if game.phase != GamePhase.countdown:
                    return False
                await self.sink.edit(game.channel_id, game.message_id, render_countdown(count))

        await asyncio.sleep(self.settings.countdown_interval)
        async with game.lock:
            if game.phase != GamePhase.countdown:
                return False
            transition(game, "begin_aiming")
            game.start_time = self.clock()
            game.frame_count = 0
            logger.debug("Game %s is aiming", game.message_id)
            await self.sink.edit(game.channel_id, game.message_id, render_frame(game))
        return True

    async def _aim(self, game: GameState) -> None:
        max_duration = self.settings.max_duration(is_tournament=game.is_tournament)

        while True:
            await asyncio.sleep(self.settings.tick_interval)
            async with game.lock:
                if game.phase != GamePhase.aiming:
                    return

                if self.clock() - game.start_time >= max_duration:
                    logger.info("Game %s timed out with %s shot(s)", game.message_id, len(game.players))
                    await self._finish(game)
                    return

                step(game)
                game.frame_count += 1
                await self.sink.edit(game.channel_id, game.message_id, render_frame(game))

    # ---- transitions (called with game.lock held) ----

    def _record_shot(self, game: GameState, user_id: str) -> PlayerShot:
        hoop_pos = game.rounded_hoop
        aim_pos = game.rounded_aim
        distance = abs(hoop_pos - aim_pos)
        shot = PlayerShot(
            user_id=user_id,
            hoop_pos=hoop_pos,
            aim_pos=aim_pos,
            distance=distance,
            score=calculate_score(distance),
            shot_time=self.wall_clock(),
        )
        game.players[user_id] = shot
        return shot

    async def _finish(self, game: GameState) -> None:
        if game.released:
            return
        # Raises TransitionNotAllowed if the game already ended: one summary per game.
        transition(game, "finish")
        self._stop_ticking(game)
        summary = render_result(game, now=self.clock())
        game.cleanup_task = asyncio.create_task(
            self._cleanup_later(game.message_id), name=f"hoopshot-cleanup:{game.message_id}"
        )
        await self.sink.edit(game.channel_id, game.message_id, summary)

    async def _abort(self, game: GameState) -> None:
        if game.phase != GamePhase.result:
            transition(game, "abort")
        self._stop_ticking(game)
        await self.cleanup(game.message_id)

        try:
            await self.sink.send(game.channel_id, TECHNICAL_DIFFICULTIES)
        except RenderSinkError:
            logger.warning("Could not notify channel %s about aborted game %s", game.channel_id, game.message_id)

    async def _cleanup_later(self, message_id: str) -> None:
        await asyncio.sleep(self.settings.cleanup_delay)
        await self.cleanup(message_id)

    def _stop_ticking(self, game: GameState) -> None:
        task, game.task = game.task, None
        if task is not None and task is not asyncio.current_task() and not task.done():
            task.cancel()
