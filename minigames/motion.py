"""
Motion laws for entities.

Each law moves its entity by ``dt`` seconds of simulated time. Laws never
look at frame counts, so movement is frame-rate independent.

``speed`` is the current difficulty speed. Laws created with
``follow_speed=True`` use it on every frame (obstacles that all speed up
together); the rest keep the velocity they were spawned with.
"""
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

if TYPE_CHECKING:
    from minigames.entities import Entity


@dataclass
class Static:
    """Does not move (targets that wait to be clicked, gates)."""

    def advance(self, entity: 'Entity', dt: float, speed: float) -> None:
        pass


@dataclass
class Linear:
    """Straight-line translation.

    With ``follow_speed`` the (vx, vy) pair is a direction and the
    magnitude comes from the difficulty speed.
    """
    vx: float
    vy: float
    follow_speed: bool = False

    def advance(self, entity: 'Entity', dt: float, speed: float) -> None:
        if self.follow_speed:
            length = math.hypot(self.vx, self.vy)
            if length == 0:
                return
            scale = speed / length
            entity.x += self.vx * scale * dt
            entity.y += self.vy * scale * dt
        else:
            entity.x += self.vx * dt
            entity.y += self.vy * dt


@dataclass
class Radial:
    """Travels along a ray through (center_x, center_y).

    ``angle`` is the direction from the center to the entity; ``distance``
    shrinks while ``inward`` (projectiles homing on a core) and grows
    otherwise (fragments flying out).
    """
    center_x: float
    center_y: float
    angle: float
    distance: float
    speed: float = 0.0
    inward: bool = True
    follow_speed: bool = False

    def advance(self, entity: 'Entity', dt: float, speed: float) -> None:
        step = (speed if self.follow_speed else self.speed) * dt
        self.distance += -step if self.inward else step
        entity.x = self.center_x + math.cos(self.angle) * self.distance
        entity.y = self.center_y + math.sin(self.angle) * self.distance


@dataclass
class Orbital:
    """Circular motion around a center at fixed radius."""
    center_x: float
    center_y: float
    radius: float
    angle: float
    angular_speed: float  # radians/second, negative = counter-clockwise on screen

    def advance(self, entity: 'Entity', dt: float, speed: float) -> None:
        self.angle = (self.angle + self.angular_speed * dt) % (2 * math.pi)
        entity.x = self.center_x + math.cos(self.angle) * self.radius
        entity.y = self.center_y + math.sin(self.angle) * self.radius


@dataclass
class Ballistic:
    """Gravity-affected arc (semi-implicit Euler)."""
    vx: float
    vy: float
    gravity: float

    def advance(self, entity: 'Entity', dt: float, speed: float) -> None:
        self.vy += self.gravity * dt
        entity.x += self.vx * dt
        entity.y += self.vy * dt


Motion = Union[Static, Linear, Radial, Orbital, Ballistic]
