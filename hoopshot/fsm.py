from __future__ import annotations

from statemachine import State, StateMachine
from statemachine.exceptions import TransitionNotAllowed

from hoopshot.models import GamePhase, GameState

__all__ = ["GameFSM", "TransitionNotAllowed", "transition"]


class GameFSM(StateMachine):
    """FSM wrapper around GameState.

    The engine drives the clock; the FSM only guards which phase changes are legal:
    - intro -> countdown -> aiming -> result
    - any live phase -> result on abort (render failure)
    - aiming <-> shooting is reserved for a shot animation and not entered by the engine

    `result` is final, so a second finish/abort raises TransitionNotAllowed. That is what
    keeps the final summary from being emitted twice.
    """

    intro = State(GamePhase.intro.value, value=GamePhase.intro.value, initial=True)
    countdown = State(GamePhase.countdown.value, value=GamePhase.countdown.value)
    aiming = State(GamePhase.aiming.value, value=GamePhase.aiming.value)
    shooting = State(GamePhase.shooting.value, value=GamePhase.shooting.value)
    finished = State(GamePhase.result.value, value=GamePhase.result.value, final=True)

    begin_countdown = intro.to(countdown)
    begin_aiming = countdown.to(aiming)
    capture = aiming.to(shooting)
    resume = shooting.to(aiming)
    finish = aiming.to(finished) | shooting.to(finished)
    abort = countdown.to(finished) | aiming.to(finished) | shooting.to(finished)

    def __init__(self, game: GameState):
        self.game = game
        super().__init__(start_value=game.phase.value)

    def sync_phase_to_model(self) -> None:
        self.game.phase = GamePhase(str(self.current_state.value))


def transition(game: GameState, event: str) -> None:
    """Apply `event` to the game's phase or raise TransitionNotAllowed."""

    fsm = GameFSM(game)
    fsm.send(event)
    fsm.sync_phase_to_model()
