"""
Orbit Dodge game mode.

The player circles the center of the screen at a fixed radius. Blocks
fly in toward the center from off-screen; ACTION flips the direction of
travel to dodge them. The score is the number of whole seconds survived.
"""
import math
from enum import Enum
from typing import Any

from minigames.base_game import BaseGame
from minigames.difficulty import DifficultyLevel, DifficultyRamp, RampCurve
from minigames.entities import Entity, Player, Role
from minigames.motion import Radial
from minigames.shapes import TAU, Circle, Rect
from minigames.world import World
from games.OrbitDodge import config


class ObstacleKind(Enum):
    BLOCK = "block"


class OrbitDodge(BaseGame):
    """Orbit Dodge game mode. Starts playing immediately (no intro)."""

    GAME_ID = "orbit_dodge"
    NAME = "Orbit Dodge"
    DESCRIPTION = "Circle the core and flip direction to dodge incoming blocks."
    VERSION = "1.0.0"
    AUTHOR = "Mini-Games Team"

    INITIAL_LIVES = config.INITIAL_LIVES
    INTRO_DELAY = None
    SINGLE_HIT = True
    HIT_FLASH_DURATION = config.HIT_FLASH

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.orbit_radius = min(self.width, self.height) * config.ORBIT_RADIUS_FACTOR
        self.spawn_distance = max(self.width, self.height) * config.SPAWN_DISTANCE_FACTOR
        self.CULL_MARGIN = self.spawn_distance

    def create_player(self) -> Player:
        player = Player(x=0.0, y=0.0, shape=Circle(config.PLAYER_RADIUS))
        player.data['direction'] = 1
        self._place(player)
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
        cx, cy = world.center
        angle = world.rng.uniform(0, TAU)
        distance = self.spawn_distance
        # Blocks vanish once they reach the center region
        travel = max(0.0, distance - config.OBSTACLE_SIZE)
        return Entity(
            x=cx + math.cos(angle) * distance,
            y=cy + math.sin(angle) * distance,
            shape=Rect(config.OBSTACLE_SIZE, config.OBSTACLE_SIZE),
            motion=Radial(center_x=cx, center_y=cy, angle=angle, distance=distance,
                          speed=level.speed),
            kind=ObstacleKind.BLOCK,
            role=Role.HAZARD,
            expires_at=world.elapsed + travel / level.speed,
        )

    def update_player(self, world: World, dt: float) -> None:
        player = world.player
        step = config.PLAYER_ANGULAR_SPEED * player.data['direction'] * dt
        player.angle = (player.angle + step) % TAU
        self._place(player)

        survived = int(world.elapsed)
        if survived > world.keeper.score:
            world.keeper.add_points(survived - world.keeper.score)

    def on_action(self, world: World) -> None:
        world.player.data['direction'] *= -1

    def on_move(self, world: World, value: Any) -> None:
        if value in (-1, 1):
            world.player.data['direction'] = value

    def _place(self, player: Player) -> None:
        player.x = self.width / 2 + math.cos(player.angle) * self.orbit_radius
        player.y = self.height / 2 + math.sin(player.angle) * self.orbit_radius
