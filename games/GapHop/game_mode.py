"""
Gap Hop game mode.

A ball sits on a ground line halfway down the screen while triangular
spikes slide in from the right. ACTION jumps (only from the ground).
Every spike that slides past the player scores a point; touching one
costs a life and grants a short invincibility window.
"""
from enum import Enum

from minigames.base_game import BaseGame
from minigames.difficulty import DifficultyLevel, DifficultyRamp, RampCurve, RampMode
from minigames.entities import Entity, Player, Role
from minigames.motion import Linear
from minigames.shapes import Circle, Polygon
from minigames.world import World
from games.GapHop import config


class SpikeKind(Enum):
    SPIKE = "spike"


class GapHop(BaseGame):
    """Gap Hop game mode."""

    GAME_ID = "gap_hop"
    NAME = "Gap Hop"
    DESCRIPTION = "Jump over the spikes sliding along the ground."
    VERSION = "1.0.0"
    AUTHOR = "Mini-Games Team"

    INITIAL_LIVES = config.INITIAL_LIVES
    INTRO_DELAY = config.INTRO_DELAY
    HIT_FLASH_DURATION = config.HIT_FLASH
    INVINCIBLE_DURATION = config.INVINCIBLE_DURATION

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.ground_y = self.height / 2

    @property
    def rest_y(self) -> float:
        """Player center height when standing on the ground."""
        return self.ground_y - config.PLAYER_RADIUS

    def create_player(self) -> Player:
        return Player(x=config.PLAYER_X, y=self.rest_y, shape=Circle(config.PLAYER_RADIUS))

    def difficulty_ramp(self) -> DifficultyRamp:
        return DifficultyRamp(
            speed=RampCurve(initial=config.BASE_SPEED, limit=config.MAX_SPEED,
                            rate=config.SPEED_FACTOR, mode=RampMode.STEP,
                            step_seconds=config.SPEED_STEP_SECONDS),
            spawn_interval=RampCurve(initial=config.INITIAL_SPAWN_INTERVAL,
                                     limit=config.MIN_SPAWN_INTERVAL,
                                     rate=config.SPAWN_FACTOR, mode=RampMode.STEP,
                                     step_seconds=config.SPAWN_STEP_SECONDS),
        )

    def spawn(self, world: World, level: DifficultyLevel) -> Entity:
        height = world.rng.uniform(config.SPIKE_MIN_HEIGHT, config.SPIKE_MAX_HEIGHT)
        half = config.SPIKE_WIDTH / 2
        # Origin is the middle of the spike's base on the ground line
        return Entity(
            x=self.width + half,
            y=self.ground_y,
            shape=Polygon(vertices=((-half, 0.0), (0.0, -height), (half, 0.0))),
            motion=Linear(vx=-1.0, vy=0.0, follow_speed=True),
            kind=SpikeKind.SPIKE,
            role=Role.HAZARD,
            points=1,
        )

    def update_player(self, world: World, dt: float) -> None:
        player = world.player
        player.vy += config.GRAVITY * dt
        player.y += player.vy * dt
        if player.y >= self.rest_y:
            player.y = self.rest_y
            player.vy = 0.0

    def on_action(self, world: World) -> None:
        player = world.player
        if player.y >= self.rest_y:
            player.vy = config.JUMP_VELOCITY

    def has_passed(self, entity: Entity, player: Player) -> bool:
        # Fully clear of the player collider
        _, _, right, _ = entity.box()
        left, _, _, _ = player.shape.box_at(player.x, player.y)
        return right < left
