"""
Game loop controller.

Drives one session of one game: owns the clock, timers, state machine
and world, and runs the fixed per-tick pipeline while PLAYING.

Tick pipeline:
    1. fire due timers (runs in every state, so the intro lead-in and the
       game-over overlay work while the simulation is stopped)
    2. stop here unless PLAYING
    3. dt from the clock, capped at max_dt
    4. elapsed += dt, difficulty level recomputed from elapsed
    5. spawn due entities, player physics, advance entities
    6. collisions (score and lives change through the ScoreKeeper)
    7. pass scoring, game-specific failure check
    8. cull consumed / expired / off-field entities
    9. hand a snapshot to the render callback

Any exception inside a tick is logged and moves the session to ERROR,
which is terminal.

Usage:
    controller = GameLoopController(CoreProtector(), store=JsonFileStore(path),
                                    render=renderer.draw)
    controller.start()
    while not controller.quit_requested:
        controller.dispatch(...)   # translated input
        controller.tick(time.monotonic())
"""
import os
import random
import time
from typing import Any, Callable, Optional

from minigames import config
from minigames.base_game import BaseGame
from minigames.clock import Clock, TimeSource
from minigames.collision import CollisionDetector, award_passes
from minigames.commands import Command, CommandType
from minigames.entities import EntityStore
from minigames.errors import GameInitError, IllegalTransitionError
from minigames.game_state import GameState, GameStateMachine
from minigames.logging import get_logger
from minigames.scoring import ScoreKeeper
from minigames.storage import HighScoreStore, MemoryStore
from minigames.timers import TimerRegistry
from minigames.world import World, WorldSnapshot, take_snapshot

RenderCallback = Callable[[WorldSnapshot], None]


class GameLoopController:
    """Runs a game through INTRO -> PLAYING <-> PAUSED -> GAME_OVER.

    Args:
        game: The game definition supplying hooks
        store: High-score store (in-memory if omitted)
        render: Called with a WorldSnapshot after every simulated tick
            and after every state change
        time_source: Monotonic seconds, used when no timestamp is passed
        seed: Seed for the world's random source (random if omitted)
        max_dt: Cap on a single step in seconds
    """

    def __init__(
        self,
        game: BaseGame,
        store: Optional[HighScoreStore] = None,
        render: Optional[RenderCallback] = None,
        time_source: TimeSource = time.monotonic,
        seed: Optional[int] = None,
        max_dt: Optional[float] = None,
    ):
        self.game = game
        self.log = get_logger('game_loop', game.GAME_ID)
        self.store = store if store is not None else MemoryStore()
        self.render = render
        self.clock = Clock(max_dt=max_dt, time_source=time_source)
        self.timers = TimerRegistry()
        self.machine = GameStateMachine(self.timers, initial=GameState.INTRO)
        self.machine.on_transition(self._on_transition)
        self.seed = seed if seed is not None else int.from_bytes(os.urandom(8), 'big')

        self.quit_requested = False
        self.last_error: Optional[BaseException] = None
        self.world: Optional[World] = None
        self._started = False
        self._frame_time: Optional[float] = None

        try:
            self.ramp = game.difficulty_ramp()
            self.detector = CollisionDetector(
                single_hit=game.SINGLE_HIT,
                hit_flash=game.HIT_FLASH_DURATION,
                invincibility=game.INVINCIBLE_DURATION,
            )
            keeper = ScoreKeeper(game.GAME_ID, self.store, game.INITIAL_LIVES,
                                 on_depleted=self._on_lives_depleted)
            self.world = World(
                player=game.create_player(),
                entities=EntityStore(),
                keeper=keeper,
                bounds=game.bounds,
                rng=random.Random(self.seed),
            )
        except Exception as e:
            error = GameInitError(f"{game.GAME_ID} failed to initialize: {e}")
            error.__cause__ = e
            self._fail("Game initialization failed", error, e)
            return

        self.log.debug("Session created (seed %d)", self.seed)

    # =========================================================================
    # State
    # =========================================================================

    @property
    def state(self) -> GameState:
        return self.machine.state

    @property
    def is_playing(self) -> bool:
        return self.machine.is_playing

    def snapshot(self) -> Optional[WorldSnapshot]:
        """Copy of the current world, or None if the game never initialized."""
        if self.world is None:
            return None
        return take_snapshot(self.world, self.machine.state)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def start(self, timestamp: Optional[float] = None) -> None:
        """Begin the session: play immediately or after the intro delay."""
        if self.quit_requested:
            return
        if self.machine.is_failed:
            self.log.warning("Not starting: session is in ERROR")
            return
        if self._started:
            self.log.debug("start() called twice, ignoring")
            return
        self._started = True
        now = self._stamp(timestamp)

        try:
            if self.game.INTRO_DELAY is None:
                self.machine.transition(GameState.PLAYING)
            else:
                self._schedule_intro(now, self.game.INTRO_DELAY)
                self._render()
        except Exception as e:
            self._fail("Failed to start round", e)

    def tick(self, timestamp: Optional[float] = None) -> bool:
        """Run one frame.

        Args:
            timestamp: Frame time in seconds (defaults to the time source)

        Returns:
            True while the session is PLAYING and should keep ticking
        """
        now = self._stamp(timestamp)
        if self.machine.is_failed or self.quit_requested:
            return False
        try:
            self.timers.run_due(now)
            if self.machine.is_playing:
                self._step(now)
        except Exception as e:
            self._fail("Tick failed", e)
        return self.machine.is_playing

    def _step(self, now: float) -> None:
        world = self.world
        game = self.game

        dt = self.clock.delta(now)
        world.tick_count += 1
        world.elapsed += dt
        level = self.ramp.at(world.elapsed)
        world.level = level

        world.entities.spawn_due(dt, level.spawn_interval,
                                 lambda: game.spawn(world, level), now=world.elapsed)
        game.update_player(world, dt)
        world.entities.advance(dt, level.speed)

        self.detector.evaluate(world.player, world.entities, world.keeper, world.elapsed)
        # A collision may already have ended the round
        if self.machine.is_playing:
            award_passes(world.player, world.entities, world.keeper, game.has_passed)
            if game.check_failed(world):
                self.log.debug("Game reported failure")
                self.machine.transition(GameState.GAME_OVER)

        world.entities.cull(world.bounds, game.CULL_MARGIN, now=world.elapsed)
        self._render()

    # =========================================================================
    # Input
    # =========================================================================

    def move(self, value: Any) -> bool:
        """Forward a MOVE to the game. Ignored unless PLAYING."""
        if self.quit_requested or not self.machine.is_playing:
            self.log.debug("Ignoring move in %s", self.machine.state.name)
            return False
        return self._run_hook("on_move", self.game.on_move, self.world, value)

    def action(self) -> bool:
        """Forward an ACTION to the game. Ignored unless PLAYING."""
        if self.quit_requested or not self.machine.is_playing:
            self.log.debug("Ignoring action in %s", self.machine.state.name)
            return False
        return self._run_hook("on_action", self.game.on_action, self.world)

    def toggle_pause(self, timestamp: Optional[float] = None) -> None:
        """Pause while PLAYING, resume while PAUSED.

        Resuming resets the clock reference to ``timestamp`` so the paused
        interval is not simulated.

        Raises:
            IllegalTransitionError: From INTRO or GAME_OVER
        """
        state = self.machine.state
        if state is GameState.ERROR or self.quit_requested:
            return
        self._stamp(timestamp)
        if state is GameState.PLAYING:
            self._command_transition(GameState.PAUSED)
        elif state is GameState.PAUSED:
            self._command_transition(GameState.PLAYING)
        else:
            raise IllegalTransitionError(state, GameState.PAUSED)

    def restart(self, timestamp: Optional[float] = None, with_intro: bool = False) -> None:
        """Start a new round from GAME_OVER.

        Raises:
            IllegalTransitionError: From any state but GAME_OVER
        """
        state = self.machine.state
        if state is GameState.ERROR or self.quit_requested:
            return
        target = GameState.INTRO if with_intro else GameState.PLAYING
        if state is not GameState.GAME_OVER:
            raise IllegalTransitionError(state, target)
        self._stamp(timestamp)
        self._command_transition(target)

    def quit(self) -> None:
        """Stop the session from any state.

        Outstanding timers are cancelled; later ticks and commands do nothing.
        """
        if self.quit_requested:
            return
        self.quit_requested = True
        self.timers.cancel_all()
        self.log.info("Quit requested in %s", self.machine.state.name)

    def dispatch(self, command: Command) -> bool:
        """Apply a translated input command.

        Commands that do not apply to the current state are ignored.

        Returns:
            True if the command was applied
        """
        state = self.machine.state
        if state is GameState.ERROR:
            self.log.debug("Ignoring %s in ERROR", command.type.name)
            return False
        if self.quit_requested:
            self.log.debug("Ignoring %s after quit", command.type.name)
            return False

        if command.type is CommandType.QUIT:
            self.quit()
            return True
        if command.type is CommandType.TOGGLE_PAUSE:
            if state in (GameState.PLAYING, GameState.PAUSED):
                self.toggle_pause(command.timestamp)
                return True
        elif command.type is CommandType.RESTART:
            if state is GameState.GAME_OVER:
                self.restart(command.timestamp)
                return True
        elif command.type is CommandType.MOVE:
            return self.move(command.value)
        elif command.type is CommandType.ACTION:
            return self.action()

        self.log.debug("Ignoring %s in %s", command.type.name, state.name)
        return False

    # =========================================================================
    # Internals
    # =========================================================================

    def _stamp(self, timestamp: Optional[float]) -> float:
        if timestamp is None:
            timestamp = self.clock.now()
        self._frame_time = timestamp
        return timestamp

    def _now(self) -> float:
        return self._frame_time if self._frame_time is not None else self.clock.now()

    def _command_transition(self, target: GameState) -> None:
        """Transition on behalf of a command; hook or render failures end in ERROR."""
        try:
            self.machine.transition(target)
        except Exception as e:
            self._fail(f"Transition to {target.name} failed", e)

    def _run_hook(self, name: str, hook: Callable[..., None], *args) -> bool:
        try:
            hook(*args)
        except Exception as e:
            self._fail(f"{self.game.GAME_ID}.{name} failed", e)
            return False
        return True

    def _fail(self, message: str, error: BaseException, cause: Optional[BaseException] = None) -> None:
        self.log.exception(message, exc=cause or error)
        self.last_error = error
        self.machine.fail(error)

    def _render(self) -> None:
        if self.render is not None and self.world is not None:
            self.render(take_snapshot(self.world, self.machine.state))

    def _schedule_intro(self, now: float, delay: float) -> None:
        self.timers.schedule(delay, self._end_intro, now, label='intro')

    def _end_intro(self) -> None:
        self.machine.transition(GameState.PLAYING)

    def _reveal_overlay(self) -> None:
        self.world.overlay_visible = True
        self._render()

    def _on_lives_depleted(self) -> None:
        self.machine.transition(GameState.GAME_OVER)

    def _reset_world(self) -> None:
        world = self.world
        world.player = self.game.create_player()
        world.entities.clear()
        world.keeper.reset()
        world.elapsed = 0.0
        world.level = None
        world.tick_count = 0
        world.overlay_visible = False

    def _begin_round(self, now: float) -> None:
        self.clock.reset(now)
        self.game.on_round_start(self.world)
        self.log.info("Round started (high score %d)", self.world.keeper.high_score)

    def _on_transition(self, old: GameState, new: GameState) -> None:
        now = self._now()
        if new is GameState.PLAYING:
            if old is GameState.PAUSED:
                self.clock.reset(now)
            else:
                if old is GameState.GAME_OVER:
                    self._reset_world()
                self._begin_round(now)
        elif new is GameState.GAME_OVER:
            keeper = self.world.keeper
            high = keeper.finalize_round()
            self.log.info("Game over: scored %d (high score %d)", keeper.score, high)
            self.timers.schedule(config.GAME_OVER_REVEAL_DELAY, self._reveal_overlay, now,
                                 label='game_over_overlay')
        elif new is GameState.INTRO:
            self._reset_world()
            delay = self.game.INTRO_DELAY
            self._schedule_intro(now, config.DEFAULT_INTRO_DELAY if delay is None else delay)

        if new is not GameState.ERROR:
            self._render()
