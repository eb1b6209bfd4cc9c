"""
Core Protector game mode.

Projectiles fly in from every direction toward the core at the center of
the screen. The player rotates a shield arc around the core to block
them. Each block scores a point; each projectile reaching the core costs
a life.
"""
import math
from enum import Enum
from typing import Any

from minigames.base_game import BaseGame
from minigames.difficulty import DifficultyLevel, DifficultyRamp, RampCurve
from minigames.entities import Entity, Player, Role
from minigames.motion import Radial
from minigames.shapes import TAU, Arc, Circle
from minigames.world import World
from games.CoreProtector import config


class ProjectileKind(Enum):
    PROJECTILE = "projectile"


class CoreProtector(BaseGame):
    """
    Core Protector game mode.

    MOVE with a pointer position aims the shield at it; MOVE with -1/+1
    rotates it one step.
    """

    GAME_ID = "core_protector"
    NAME = "Core Protector"
    DESCRIPTION = "Rotate the shield to deflect projectiles before they hit the core."
    VERSION = "1.0.0"
    AUTHOR = "Mini-Games Team"
    POINTER_INPUT = True

    INITIAL_LIVES = config.INITIAL_LIVES
    INTRO_DELAY = config.INTRO_DELAY
    HIT_FLASH_DURATION = config.HIT_FLASH

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Projectiles spawn outside the screen and must survive culling
        self.CULL_MARGIN = max(self.width, self.height)

    @property
    def center(self):
        return self.width / 2, self.height / 2

    def create_player(self) -> Player:
        cx, cy = self.center
        player = Player(x=cx, y=cy, shape=Circle(config.CORE_RADIUS))
        self._aim(player, 0.0)
        return player

    def difficulty_ramp(self) -> DifficultyRamp:
        return DifficultyRamp(
            speed=RampCurve(initial=config.INITIAL_SPEED, limit=config.MAX_SPEED,
                            rate=config.SPEED_INCREASE),
            spawn_interval=RampCurve(initial=config.INITIAL_SPAWN_INTERVAL,
                                     limit=config.MIN_SPAWN_INTERVAL,
                                     rate=config.SPAWN_INTERVAL_DECREASE),
        )

    def spawn(self, world: World, level: DifficultyLevel) -> Entity:
        cx, cy = self.center
        angle = world.rng.uniform(0, TAU)
        distance = max(self.width, self.height) / 2 + config.SPAWN_OFFSET
        return Entity(
            x=cx + math.cos(angle) * distance,
            y=cy + math.sin(angle) * distance,
            shape=Circle(config.PROJECTILE_RADIUS),
            motion=Radial(center_x=cx, center_y=cy, angle=angle, distance=distance,
                          speed=level.speed),
            kind=ProjectileKind.PROJECTILE,
            role=Role.HAZARD,
            points=config.BLOCK_POINTS,
        )

    def on_move(self, world: World, value: Any) -> None:
        player = world.player
        if isinstance(value, (tuple, list)):
            px, py = value
            self._aim(player, math.atan2(py - player.y, px - player.x))
        else:
            self._aim(player, player.angle + config.SHIELD_KEY_STEP * value)

    @staticmethod
    def _aim(player: Player, angle: float) -> None:
        player.angle = angle
        player.shield = Arc.facing(angle, config.SHIELD_ARC,
                                   config.SHIELD_RADIUS, config.SHIELD_THICKNESS)
