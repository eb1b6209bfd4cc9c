"""
Collision detection between the player and entities.

All tests are inclusive: shapes that exactly touch are colliding
(distance == sum of radii counts as a hit). Circle tests compare squared
distances and never take a square root.

Shape pairs supported by :func:`overlaps`:
    circle-circle, circle-rect, rect-rect, circle-arc,
    circle-polygon, rect-polygon, polygon-polygon
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Sequence, Tuple, TYPE_CHECKING

from minigames import config
from minigames.entities import Entity, Player, Role
from minigames.logging import get_logger
from minigames.shapes import TAU, Arc, Circle, Polygon, Rect, Shape

if TYPE_CHECKING:
    from minigames.scoring import ScoreKeeper

log = get_logger('collision')

Point = Tuple[float, float]


# =============================================================================
# Primitive tests
# =============================================================================

def circles_overlap(x1: float, y1: float, r1: float,
                    x2: float, y2: float, r2: float) -> bool:
    """Squared distance <= (r1 + r2)^2."""
    dx = x2 - x1
    dy = y2 - y1
    reach = r1 + r2
    return dx * dx + dy * dy <= reach * reach


def circle_rect_overlap(cx: float, cy: float, radius: float,
                        rx: float, ry: float, half_w: float, half_h: float) -> bool:
    """Circle vs axis-aligned rect centered on (rx, ry).

    Clamps the circle center onto the rect to find the closest point,
    then runs the circle test against that point.
    """
    closest_x = min(max(cx, rx - half_w), rx + half_w)
    closest_y = min(max(cy, ry - half_h), ry + half_h)
    dx = cx - closest_x
    dy = cy - closest_y
    return dx * dx + dy * dy <= radius * radius


def rects_overlap(ax: float, ay: float, a_half_w: float, a_half_h: float,
                  bx: float, by: float, b_half_w: float, b_half_h: float) -> bool:
    """Axis-aligned rects centered on their positions."""
    return (abs(ax - bx) <= a_half_w + b_half_w and
            abs(ay - by) <= a_half_h + b_half_h)


def normalize_angle(angle: float) -> float:
    """Map any angle (radians) into [0, 2pi)."""
    result = angle % TAU
    # -1e-17 % TAU rounds to TAU itself
    return 0.0 if result >= TAU else result


def angle_in_arc(angle: float, start: float, end: float) -> bool:
    """True if ``angle`` lies on the arc running from ``start`` to ``end``.

    All three are normalized into [0, 2pi). When the normalized start is
    greater than the normalized end the arc crosses 0 and membership is
    ``angle >= start or angle <= end``. Both ends are inclusive.

    Examples:
        >>> angle_in_arc(math.radians(5), math.radians(350), math.radians(20))
        True
        >>> angle_in_arc(math.radians(180), math.radians(350), math.radians(20))
        False
    """
    if end - start >= TAU:
        return True
    a = normalize_angle(angle)
    s = normalize_angle(start)
    e = normalize_angle(end)
    if s <= e:
        return s <= a <= e
    # Arc wraps past 0
    return a >= s or a <= e


def circle_arc_overlap(cx: float, cy: float, radius: float,
                       ax: float, ay: float, arc: Arc) -> bool:
    """Circle vs ring segment centered on (ax, ay).

    The circle must sit inside the ring band widened by its radius, and
    its center angle (seen from the arc center) must be on the arc.
    """
    dx = cx - ax
    dy = cy - ay
    dist_sq = dx * dx + dy * dy
    outer = arc.radius + arc.thickness / 2 + radius
    inner = arc.radius - arc.thickness / 2 - radius
    if dist_sq > outer * outer:
        return False
    if inner > 0 and dist_sq < inner * inner:
        return False
    return angle_in_arc(math.atan2(dy, dx), arc.start, arc.end)


def point_in_polygon(px: float, py: float, points: Sequence[Point]) -> bool:
    """Even-odd ray casting test."""
    inside = False
    j = len(points) - 1
    for i in range(len(points)):
        xi, yi = points[i]
        xj, yj = points[j]
        if (yi > py) != (yj > py):
            cross_x = xi + (py - yi) * (xj - xi) / (yj - yi)
            if px < cross_x:
                inside = not inside
        j = i
    return inside


def _segment_distance_sq(px: float, py: float, a: Point, b: Point) -> float:
    ax, ay = a
    bx, by = b
    abx = bx - ax
    aby = by - ay
    length_sq = abx * abx + aby * aby
    if length_sq == 0:
        t = 0.0
    else:
        t = max(0.0, min(1.0, ((px - ax) * abx + (py - ay) * aby) / length_sq))
    dx = px - (ax + t * abx)
    dy = py - (ay + t * aby)
    return dx * dx + dy * dy


def circle_polygon_overlap(cx: float, cy: float, radius: float, points: Sequence[Point]) -> bool:
    """Circle center inside the polygon, or within ``radius`` of an edge."""
    if point_in_polygon(cx, cy, points):
        return True
    r_sq = radius * radius
    count = len(points)
    return any(
        _segment_distance_sq(cx, cy, points[i], points[(i + 1) % count]) <= r_sq
        for i in range(count)
    )


def _project(points: Sequence[Point], axis: Point) -> Tuple[float, float]:
    dots = [x * axis[0] + y * axis[1] for x, y in points]
    return min(dots), max(dots)


def convex_polygons_overlap(a: Sequence[Point], b: Sequence[Point]) -> bool:
    """Separating axis test for convex polygons (touching counts)."""
    for poly in (a, b):
        count = len(poly)
        for i in range(count):
            x1, y1 = poly[i]
            x2, y2 = poly[(i + 1) % count]
            axis = (y1 - y2, x2 - x1)
            min_a, max_a = _project(a, axis)
            min_b, max_b = _project(b, axis)
            if max_a < min_b or max_b < min_a:
                return False
    return True


# =============================================================================
# Shape dispatch
# =============================================================================

def _as_points(shape: Shape, x: float, y: float) -> List[Point]:
    if isinstance(shape, Rect):
        return shape.corners_at(x, y)
    return shape.points_at(x, y)


def overlaps(a: Shape, ax: float, ay: float, b: Shape, bx: float, by: float) -> bool:
    """Dispatch to the test for this pair of shape variants.

    Raises:
        TypeError: For pairs with no defined test (arc vs anything but a circle)
    """
    if isinstance(a, Circle):
        if isinstance(b, Circle):
            return circles_overlap(ax, ay, a.radius, bx, by, b.radius)
        if isinstance(b, Rect):
            return circle_rect_overlap(ax, ay, a.radius, bx, by, b.half_width, b.half_height)
        if isinstance(b, Arc):
            return circle_arc_overlap(ax, ay, a.radius, bx, by, b)
        if isinstance(b, Polygon):
            return circle_polygon_overlap(ax, ay, a.radius, b.points_at(bx, by))
    elif isinstance(a, Rect):
        if isinstance(b, Circle):
            return overlaps(b, bx, by, a, ax, ay)
        if isinstance(b, Rect):
            return rects_overlap(ax, ay, a.half_width, a.half_height,
                                 bx, by, b.half_width, b.half_height)
        if isinstance(b, Polygon):
            return convex_polygons_overlap(_as_points(a, ax, ay), _as_points(b, bx, by))
    elif isinstance(a, Polygon):
        if isinstance(b, (Circle, Rect)):
            return overlaps(b, bx, by, a, ax, ay)
        if isinstance(b, Polygon):
            return convex_polygons_overlap(_as_points(a, ax, ay), _as_points(b, bx, by))
    elif isinstance(a, Arc):
        if isinstance(b, Circle):
            return overlaps(b, bx, by, a, ax, ay)

    raise TypeError(f"No collision test for {type(a).__name__} vs {type(b).__name__}")


# =============================================================================
# Detector
# =============================================================================

class Outcome(Enum):
    """What a collision did."""
    BLOCKED = "blocked"      # hazard stopped by the player's shield
    HIT = "hit"              # hazard reached the player, life lost
    COLLECTED = "collected"  # target touched, points awarded
    PASSED = "passed"        # entity got past the player, points awarded


@dataclass(frozen=True)
class CollisionOutcome:
    entity_id: int
    outcome: Outcome
    points: int = 0


class CollisionDetector:
    """Evaluates the player against the round's entities once per tick.

    Args:
        single_hit: Stop evaluating after the first hazard hit of a tick
        hit_flash: Seconds of hit feedback set on the player after a hit
        invincibility: Seconds during which further hazards are ignored
    """

    def __init__(
        self,
        single_hit: bool = False,
        hit_flash: float = config.HIT_FLASH_DURATION,
        invincibility: float = config.INVINCIBLE_DURATION,
    ):
        self.single_hit = single_hit
        self.hit_flash = hit_flash
        self.invincibility = invincibility

    def evaluate(
        self,
        player: Player,
        entities: Iterable[Entity],
        keeper: 'ScoreKeeper',
        now: float,
    ) -> List[CollisionOutcome]:
        """Apply at most one outcome per entity, in spawn order.

        Flags are set before the score/life side effect. Evaluation stops
        once the keeper runs out of lives, since the round has ended.

        Args:
            player: The session's avatar
            entities: Entities in spawn order
            keeper: Receives add_points / reduce_life
            now: Simulation seconds, for hit timers

        Returns:
            Outcomes applied this tick
        """
        outcomes: List[CollisionOutcome] = []

        for entity in entities:
            if keeper.is_depleted:
                break
            if entity.consumed or entity.passed or entity.role is Role.NEUTRAL:
                continue

            if (player.shield is not None and entity.role is Role.HAZARD
                    and overlaps(entity.shape, entity.x, entity.y,
                                 player.shield, player.x, player.y)):
                entity.consumed = True
                keeper.add_points(entity.points)
                outcomes.append(CollisionOutcome(entity.id, Outcome.BLOCKED, entity.points))
                log.debug("Entity %d blocked by shield", entity.id)
                continue

            if not overlaps(player.shape, player.x, player.y,
                            entity.shape, entity.x, entity.y):
                continue

            if entity.role is Role.TARGET:
                entity.consumed = True
                keeper.add_points(entity.points)
                outcomes.append(CollisionOutcome(entity.id, Outcome.COLLECTED, entity.points))
                log.debug("Entity %d collected (+%d)", entity.id, entity.points)
                continue

            if player.is_invincible(now):
                continue

            entity.consumed = True
            player.hit_flash_until = now + self.hit_flash
            if self.invincibility > 0:
                player.invincible_until = now + self.invincibility
            outcomes.append(CollisionOutcome(entity.id, Outcome.HIT))
            log.debug("Player hit by entity %d", entity.id)
            keeper.reduce_life()

            if self.single_hit:
                break

        return outcomes


def award_passes(
    player: Player,
    entities: Iterable[Entity],
    keeper: 'ScoreKeeper',
    has_passed: Callable[[Entity, Player], bool],
) -> List[CollisionOutcome]:
    """Score every entity that got past the player, once each."""
    outcomes: List[CollisionOutcome] = []
    for entity in entities:
        if entity.passed or entity.consumed:
            continue
        if has_passed(entity, player):
            entity.passed = True
            keeper.add_points(entity.points)
            outcomes.append(CollisionOutcome(entity.id, Outcome.PASSED, entity.points))
    return outcomes
