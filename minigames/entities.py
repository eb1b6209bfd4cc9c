"""
Player avatar, spawned entities and the store that owns them.

The store keeps entities in spawn order. That order is the iteration
order everywhere (advance, collision, culling), which makes collision
tie-breaking deterministic.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Union

from minigames.logging import get_logger
from minigames.motion import Motion, Static
from minigames.shapes import Arc, Circle, Shape
from models import Rectangle

log = get_logger('entities')


class Role(Enum):
    """What touching the entity does to the player."""
    HAZARD = "hazard"    # costs a life
    TARGET = "target"    # awards points
    NEUTRAL = "neutral"  # decoration/fragments, never collides


@dataclass
class Entity:
    """A spawned obstacle, projectile, target, fragment or gate.

    Attributes:
        x, y: Position (shape center, polygon origin)
        shape: Collider variant
        motion: Motion law applied every tick
        kind: Game-specific tag from the game's own Enum
        role: Collision role
        points: Points for collecting, blocking or passing it
        passed: Already scored for being passed; never scored again
        consumed: Resolved this round; culled at end of tick
        created_at: Simulation seconds at spawn
        expires_at: Optional simulation time after which it is culled
        id: Spawn sequence number assigned by the store
    """
    x: float
    y: float
    shape: Shape
    motion: Motion = field(default_factory=Static)
    kind: Optional[Enum] = None
    role: Role = Role.HAZARD
    points: int = 0
    passed: bool = False
    consumed: bool = False
    created_at: float = 0.0
    expires_at: Optional[float] = None
    id: int = 0
    data: Dict[str, Any] = field(default_factory=dict)

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at

    def box(self):
        """Axis-aligned (left, top, right, bottom) of the collider."""
        return self.shape.box_at(self.x, self.y)


@dataclass
class Player:
    """The avatar of one session. Recreated on every restart.

    Position semantics vary per game: screen coordinates, an ``angle`` on
    an orbit, or a ``lane`` index. Games keep ``x``/``y`` in sync with
    whichever they use since collision always works in screen space.

    ``invincible_until`` and ``hit_flash_until`` are simulation seconds.
    """
    x: float
    y: float
    shape: Shape = field(default_factory=lambda: Circle(10.0))
    vx: float = 0.0
    vy: float = 0.0
    angle: float = 0.0
    lane: int = 0
    shield: Optional[Arc] = None
    invincible_until: float = 0.0
    hit_flash_until: float = 0.0
    data: Dict[str, Any] = field(default_factory=dict)

    def is_invincible(self, now: float) -> bool:
        return now < self.invincible_until

    def is_flashing(self, now: float) -> bool:
        return now < self.hit_flash_until


SpawnResult = Union[Entity, Sequence[Entity], None]


class EntityStore:
    """Ordered, mutable collection of the entities of one round.

    Per tick the loop calls, in order: :meth:`spawn_due`, :meth:`advance`,
    collision evaluation, then :meth:`cull`.
    """

    def __init__(self) -> None:
        self._entities: List[Entity] = []
        self._next_id = 1
        self._countdown: Optional[float] = None

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(list(self._entities))

    @property
    def spawn_countdown(self) -> Optional[float]:
        """Seconds until the next spawn (None before the first tick)."""
        return self._countdown

    def active(self) -> List[Entity]:
        """Entities not consumed, in spawn order."""
        return [e for e in self._entities if not e.consumed]

    def add(self, entity: Entity, now: Optional[float] = None) -> Entity:
        """Insert an entity, assigning its id (and creation time if given)."""
        if not isinstance(entity, Entity):
            raise TypeError(f"Expected Entity, got {type(entity).__name__}")
        entity.id = self._next_id
        self._next_id += 1
        if now is not None:
            entity.created_at = now
        self._entities.append(entity)
        return entity

    def clear(self) -> None:
        """Drop every entity and reset the spawn countdown (new round)."""
        self._entities.clear()
        self._countdown = None

    def spawn_due(
        self,
        dt: float,
        interval: float,
        factory: Callable[[], SpawnResult],
        now: Optional[float] = None,
    ) -> List[Entity]:
        """Count down and spawn when the countdown elapses.

        The countdown is seeded from ``interval`` on first use and, after
        each spawn, reset to the ``interval`` passed on that call, so a
        difficulty change only affects the next spawn.

        Args:
            dt: Seconds since last tick
            interval: Current spawn interval from the difficulty ramp
            factory: Creates the entity (or entities, or None to skip)
            now: Simulation time stamped on new entities

        Returns:
            Newly added entities
        """
        if self._countdown is None:
            self._countdown = interval
        self._countdown -= dt
        if self._countdown > 0:
            return []

        self._countdown = interval
        result = factory()
        if result is None:
            spawned: List[Entity] = []
        elif isinstance(result, Entity):
            spawned = [result]
        else:
            spawned = list(result)

        for entity in spawned:
            self.add(entity, now)
            log.trace("Spawned entity %d (%s) at (%.1f, %.1f)",
                      entity.id, entity.kind, entity.x, entity.y)
        return spawned

    def advance(self, dt: float, speed: float) -> None:
        """Apply every active entity's motion law for ``dt`` seconds."""
        for entity in self._entities:
            if not entity.consumed:
                entity.motion.advance(entity, dt, speed)

    def cull(self, bounds: Rectangle, margin: float = 0.0, now: Optional[float] = None) -> List[Entity]:
        """Remove consumed, expired and out-of-bounds entities.

        An entity is out of bounds once its collider box no longer touches
        ``bounds`` grown by ``margin``. Removal rebuilds the list in one
        pass, so nothing is skipped or visited twice.

        Returns:
            The removed entities, in spawn order
        """
        limits = bounds.expanded(margin) if margin else bounds
        kept: List[Entity] = []
        removed: List[Entity] = []
        for entity in self._entities:
            if (entity.consumed
                    or (now is not None and entity.is_expired(now))
                    or not limits.overlaps_box(*entity.box())):
                removed.append(entity)
            else:
                kept.append(entity)
        self._entities = kept
        return removed
