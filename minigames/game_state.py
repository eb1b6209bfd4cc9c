"""
Session state machine.

States:
    INTRO: Lead-in before play starts (input ignored)
    PLAYING: Simulation running; the only state that mutates entities, score or lives
    PAUSED: Simulation frozen; only resume and quit are accepted
    GAME_OVER: Round ended; score finalized, overlay revealed after a delay
    ERROR: Unrecoverable failure; terminal

Transitions are checked against :data:`TRANSITIONS`. Every exit from a
state cancels all outstanding timers of the session before listeners run,
so a timer scheduled for one state can never fire in another.

Usage:
    machine = GameStateMachine(timers)
    machine.on_transition(lambda old, new: print(old, '->', new))
    machine.transition(GameState.PLAYING)
    machine.transition(GameState.PAUSED)
"""
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional

from minigames.errors import IllegalTransitionError
from minigames.logging import get_logger
from minigames.timers import TimerRegistry

log = get_logger('game_state')


class GameState(Enum):
    INTRO = "intro"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "game_over"
    ERROR = "error"


TRANSITIONS: Dict[GameState, FrozenSet[GameState]] = {
    GameState.INTRO: frozenset({GameState.PLAYING, GameState.ERROR}),
    GameState.PLAYING: frozenset({GameState.PAUSED, GameState.GAME_OVER, GameState.ERROR}),
    GameState.PAUSED: frozenset({GameState.PLAYING, GameState.ERROR}),
    GameState.GAME_OVER: frozenset({GameState.PLAYING, GameState.INTRO, GameState.ERROR}),
    GameState.ERROR: frozenset(),
}

TransitionListener = Callable[[GameState, GameState], None]


class GameStateMachine:
    """Validated state holder for one session.

    Args:
        timers: The session's timer registry, swept on every state exit
        initial: Starting state
    """

    def __init__(self, timers: TimerRegistry, initial: GameState = GameState.INTRO):
        self.timers = timers
        self._state = initial
        self._listeners: List[TransitionListener] = []
        self.error: Optional[BaseException] = None

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_playing(self) -> bool:
        """Entity updates, collisions and scoring are allowed."""
        return self._state is GameState.PLAYING

    @property
    def is_failed(self) -> bool:
        return self._state is GameState.ERROR

    def can_transition(self, target: GameState) -> bool:
        return target in TRANSITIONS[self._state]

    def on_transition(self, listener: TransitionListener) -> None:
        """Register ``listener(old, new)``, called after every state change."""
        self._listeners.append(listener)

    def transition(self, target: GameState) -> None:
        """Move to ``target``.

        Raises:
            IllegalTransitionError: If the table does not allow it
        """
        if not self.can_transition(target):
            raise IllegalTransitionError(self._state, target)
        old = self._state
        self.timers.cancel_all()
        self._state = target
        log.info("%s -> %s", old.name, target.name)
        for listener in list(self._listeners):
            listener(old, target)

    def fail(self, exc: Optional[BaseException] = None) -> None:
        """Enter ERROR from any state. Repeated calls are no-ops.

        Listener failures are logged rather than raised, since this is
        already the error path.
        """
        if self._state is GameState.ERROR:
            return
        old = self._state
        self.error = exc
        self.timers.cancel_all()
        self._state = GameState.ERROR
        log.error("%s -> ERROR: %s", old.name, exc)
        for listener in list(self._listeners):
            try:
                listener(old, GameState.ERROR)
            except Exception as e:
                log.exception("Transition listener failed while entering ERROR", exc=e)
