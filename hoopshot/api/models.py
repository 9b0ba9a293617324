from __future__ import annotations

from pydantic import BaseModel, Field

from hoopshot.core.tournament import rank_shots
from hoopshot.engine import SHOT_REACTION, ShotResult, ShotStatus
from hoopshot.models import GamePhase, GameState, PlayerShot, ShotData


class GameCreateRequest(BaseModel):
    channel_id: str = Field(..., min_length=1, max_length=200)
    tournament: bool = False


class ReactionRequest(BaseModel):
    user_id: str = Field(..., min_length=1, max_length=200)
    reaction: str = SHOT_REACTION


class GameSnapshot(BaseModel):
    message_id: str
    channel_id: str
    phase: GamePhase
    is_tournament: bool
    frame_count: int

    hoop_position: float
    hoop_direction: int
    aim_position: float
    aim_direction: int

    # Ranked best first.
    players: list[PlayerShot] = Field(default_factory=list)
    shot_data: ShotData | None = None

    @classmethod
    def from_state(cls, state: GameState) -> "GameSnapshot":
        return cls(
            message_id=state.message_id,
            channel_id=state.channel_id,
            phase=state.phase,
            is_tournament=state.is_tournament,
            frame_count=state.frame_count,
            hoop_position=state.hoop_position,
            hoop_direction=state.hoop_direction,
            aim_position=state.aim_position,
            aim_direction=state.aim_direction,
            players=rank_shots(state.players.values()),
            shot_data=state.shot_data,
        )


class GameListResponse(BaseModel):
    games: list[GameSnapshot]


class ShotResponse(BaseModel):
    status: ShotStatus
    # Set for recorded and duplicate shots; a duplicate reports the first attempt.
    distance: int | None = None
    score: int | None = None
    shot: PlayerShot | None = None

    @classmethod
    def from_result(cls, result: ShotResult) -> "ShotResponse":
        if result.shot is None:
            return cls(status=result.status)
        return cls(status=result.status, distance=result.shot.distance, score=result.shot.score, shot=result.shot)
