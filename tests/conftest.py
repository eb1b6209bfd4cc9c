"""Pytest fixtures shared by the mini-game tests."""
from typing import Any, List

import pytest

from minigames.base_game import BaseGame
from minigames.difficulty import DifficultyRamp
from minigames.entities import Entity, Player
from minigames.logging import configure_logging
from minigames.loop import GameLoopController
from minigames.shapes import Circle
from minigames.storage import MemoryStore


class ManualTime:
    """Time source the test advances by hand."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        self.now += seconds
        return self.now


class SampleGame(BaseGame):
    """Minimal game: static player at (400, 300), spawns whatever is queued."""

    GAME_ID = "sample_game"
    NAME = "Sample Game"
    INITIAL_LIVES = 3
    INTRO_DELAY = None
    HIT_FLASH_DURATION = 0.15
    INVINCIBLE_DURATION = 0.0

    def __init__(self, width: int = 800, height: int = 600,
                 speed: float = 100.0, spawn_interval: float = 1.0, **kwargs):
        super().__init__(width=width, height=height, **kwargs)
        self.speed = speed
        self.spawn_interval = spawn_interval
        self.queued: List[Entity] = []
        self.moves: List[Any] = []
        self.actions = 0
        self.failed = False

    def create_player(self) -> Player:
        return Player(x=400.0, y=300.0, shape=Circle(10.0))

    def difficulty_ramp(self) -> DifficultyRamp:
        return DifficultyRamp.constant(self.speed, self.spawn_interval)

    def spawn(self, world, level):
        if self.queued:
            return self.queued.pop(0)
        return None

    def on_move(self, world, value) -> None:
        self.moves.append(value)

    def on_action(self, world) -> None:
        self.actions += 1

    def check_failed(self, world) -> bool:
        return self.failed


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep test output clean; errors still show."""
    configure_logging(level='ERROR')
    yield
    configure_logging(level='INFO')


@pytest.fixture
def manual_time():
    return ManualTime()


@pytest.fixture
def memory_store():
    return MemoryStore()


@pytest.fixture
def sample_game():
    return SampleGame()


@pytest.fixture
def make_controller(manual_time, memory_store):
    """Factory building a controller on manual time and an in-memory store."""
    def _make(game=None, **kwargs):
        kwargs.setdefault('store', memory_store)
        kwargs.setdefault('time_source', manual_time)
        kwargs.setdefault('seed', 1234)
        return GameLoopController(game if game is not None else SampleGame(), **kwargs)
    return _make


def run_ticks(controller, start: float, count: int, step: float = 0.1) -> float:
    """Tick ``count`` times from ``start``; returns the last timestamp.

    Timestamps are computed from the index so float error never accumulates.
    """
    timestamp = start
    for i in range(1, count + 1):
        timestamp = start + i * step
        controller.tick(timestamp)
    return timestamp
