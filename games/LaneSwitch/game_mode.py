"""
Lane Switch game mode.

Blocks fall down one of three lanes. The player slides between lanes at
the bottom of the screen (MOVE -1/+1, or a pointer position picks the
lane under it). Each block that falls off the bottom scores a point.
"""
from enum import Enum
from typing import Any

from minigames.base_game import BaseGame
from minigames.difficulty import DifficultyLevel, DifficultyRamp, RampCurve, RampMode
from minigames.entities import Entity, Player, Role
from minigames.motion import Linear
from minigames.shapes import Rect
from minigames.world import World
from games.LaneSwitch import config


class BlockKind(Enum):
    BLOCK = "block"


class LaneSwitch(BaseGame):
    """Lane Switch game mode."""

    GAME_ID = "lane_switch"
    NAME = "Lane Switch"
    DESCRIPTION = "Switch lanes to dodge the falling blocks."
    VERSION = "1.0.0"
    AUTHOR = "Mini-Games Team"

    ARGUMENTS = [
        {
            'name': '--lanes',
            'type': int,
            'default': config.LANES,
            'help': 'Number of lanes'
        },
    ]

    INITIAL_LIVES = config.INITIAL_LIVES
    INTRO_DELAY = config.INTRO_DELAY
    HIT_FLASH_DURATION = config.HIT_FLASH

    def __init__(self, lanes: int = config.LANES, **kwargs):
        super().__init__(**kwargs)
        if lanes < 1:
            raise ValueError(f"Need at least one lane, got {lanes}")
        self.lanes = lanes
        self.lane_width = self.width / lanes

    def lane_center(self, lane: int) -> float:
        return lane * self.lane_width + self.lane_width / 2

    def create_player(self) -> Player:
        lane = min(config.START_LANE, self.lanes - 1)
        y = self.height - config.PLAYER_BOTTOM_MARGIN - config.PLAYER_HEIGHT / 2
        return Player(x=self.lane_center(lane), y=y, lane=lane,
                      shape=Rect(config.BLOCK_WIDTH, config.PLAYER_HEIGHT))

    def difficulty_ramp(self) -> DifficultyRamp:
        return DifficultyRamp(
            speed=RampCurve(initial=config.INITIAL_SPEED, limit=config.MAX_SPEED,
                            rate=config.SPEED_FACTOR, mode=RampMode.STEP,
                            step_seconds=config.STEP_SECONDS),
            spawn_interval=RampCurve(initial=config.INITIAL_SPAWN_INTERVAL,
                                     limit=config.MIN_SPAWN_INTERVAL,
                                     rate=1 / config.SPEED_FACTOR, mode=RampMode.STEP,
                                     step_seconds=config.STEP_SECONDS),
        )

    def spawn(self, world: World, level: DifficultyLevel) -> Entity:
        lane = world.rng.randrange(self.lanes)
        return Entity(
            x=self.lane_center(lane),
            y=-config.BLOCK_HEIGHT / 2,
            shape=Rect(config.BLOCK_WIDTH, config.BLOCK_HEIGHT),
            motion=Linear(vx=0.0, vy=1.0, follow_speed=True),
            kind=BlockKind.BLOCK,
            role=Role.HAZARD,
            points=1,
            data={'lane': lane},
        )

    def update_player(self, world: World, dt: float) -> None:
        player = world.player
        target = self.lane_center(player.lane)
        player.x += (target - player.x) * min(1.0, dt * config.LANE_SWITCH_SPEED)

    def on_move(self, world: World, value: Any) -> None:
        player = world.player
        if isinstance(value, (tuple, list)):
            lane = int(value[0] // self.lane_width)
        else:
            lane = player.lane + int(value)
        player.lane = max(0, min(self.lanes - 1, lane))

    def has_passed(self, entity: Entity, player: Player) -> bool:
        _, top, _, _ = entity.box()
        return top > self.height
