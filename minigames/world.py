"""
Session state and the read-only view handed to renderers.
"""
import copy
import random
from dataclasses import dataclass
from typing import Optional, Tuple

from minigames.difficulty import DifficultyLevel
from minigames.entities import Entity, EntityStore, Player
from minigames.game_state import GameState
from minigames.scoring import ScoreKeeper
from models import Rectangle


@dataclass
class World:
    """Everything one session owns. Replaced piecewise on restart.

    Attributes:
        player: The avatar
        entities: Spawned entities in spawn order
        keeper: Score, lives and high score
        bounds: Playfield rectangle in screen pixels
        rng: Seeded random source for spawns
        elapsed: Simulation seconds played this round (pauses excluded)
        level: Difficulty at ``elapsed``, recomputed every tick
        tick_count: Simulation steps run this round
        overlay_visible: Game-over overlay has been revealed
    """
    player: Player
    entities: EntityStore
    keeper: ScoreKeeper
    bounds: Rectangle
    rng: random.Random
    elapsed: float = 0.0
    level: Optional[DifficultyLevel] = None
    tick_count: int = 0
    overlay_visible: bool = False

    @property
    def center(self) -> Tuple[float, float]:
        center = self.bounds.center
        return (center.x, center.y)


@dataclass(frozen=True)
class WorldSnapshot:
    """Copy of the world at the end of a tick. Mutating it changes nothing."""
    state: GameState
    player: Player
    entities: Tuple[Entity, ...]
    score: int
    lives: int
    high_score: int
    elapsed: float
    tick_count: int
    overlay_visible: bool
    bounds: Rectangle
    level: Optional[DifficultyLevel] = None


def take_snapshot(world: World, state: GameState) -> WorldSnapshot:
    return WorldSnapshot(
        state=state,
        player=copy.deepcopy(world.player),
        entities=tuple(copy.deepcopy(list(world.entities))),
        score=world.keeper.score,
        lives=world.keeper.lives,
        high_score=world.keeper.high_score,
        elapsed=world.elapsed,
        tick_count=world.tick_count,
        overlay_visible=world.overlay_visible,
        bounds=world.bounds,
        level=world.level,
    )
