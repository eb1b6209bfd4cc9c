"""
Collider shapes.

Shapes carry only geometry; the owning entity or player supplies the
position. Every shape is centered on that position except Polygon,
whose vertices are offsets from it.

Variants:
    Circle   - radius
    Rect     - width/height, axis aligned
    Arc      - ring segment (shield or gate) between two angles
    Polygon  - convex polygon given by vertex offsets
"""
import math
from dataclasses import dataclass
from typing import List, Tuple, Union

TAU = 2 * math.pi

Box = Tuple[float, float, float, float]  # left, top, right, bottom


@dataclass(frozen=True)
class Circle:
    radius: float

    def __post_init__(self):
        if self.radius <= 0:
            raise ValueError(f'Circle radius must be positive, got {self.radius}')

    def box_at(self, x: float, y: float) -> Box:
        r = self.radius
        return (x - r, y - r, x + r, y + r)


@dataclass(frozen=True)
class Rect:
    width: float
    height: float

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f'Rect dimensions must be positive, got {self.width}x{self.height}')

    @property
    def half_width(self) -> float:
        return self.width / 2

    @property
    def half_height(self) -> float:
        return self.height / 2

    def box_at(self, x: float, y: float) -> Box:
        return (x - self.half_width, y - self.half_height,
                x + self.half_width, y + self.half_height)

    def corners_at(self, x: float, y: float) -> List[Tuple[float, float]]:
        left, top, right, bottom = self.box_at(x, y)
        return [(left, top), (right, top), (right, bottom), (left, bottom)]


@dataclass(frozen=True)
class Arc:
    """Ring segment centered on its owner's position.

    Covers radii ``radius +/- thickness / 2`` and angles from ``start`` to
    ``end`` (radians, increasing direction). ``start > end`` after
    normalization means the arc crosses the 0 angle.
    """
    radius: float
    thickness: float
    start: float
    end: float

    @classmethod
    def facing(cls, angle: float, span: float, radius: float, thickness: float) -> 'Arc':
        """Arc of angular width ``span`` centered on ``angle``."""
        return cls(radius=radius, thickness=thickness,
                   start=angle - span / 2, end=angle + span / 2)

    def box_at(self, x: float, y: float) -> Box:
        outer = self.radius + self.thickness / 2
        return (x - outer, y - outer, x + outer, y + outer)


@dataclass(frozen=True)
class Polygon:
    """Convex polygon; vertices are (dx, dy) offsets from the owner position."""
    vertices: Tuple[Tuple[float, float], ...]

    def __post_init__(self):
        if len(self.vertices) < 3:
            raise ValueError(f'Polygon needs at least 3 vertices, got {len(self.vertices)}')

    @classmethod
    def regular(cls, sides: int, radius: float, rotation: float = 0.0) -> 'Polygon':
        """Regular polygon (triangle, hexagon, ...) around the origin."""
        step = TAU / sides
        return cls(vertices=tuple(
            (radius * math.cos(rotation + i * step), radius * math.sin(rotation + i * step))
            for i in range(sides)
        ))

    def points_at(self, x: float, y: float) -> List[Tuple[float, float]]:
        return [(x + dx, y + dy) for dx, dy in self.vertices]

    def box_at(self, x: float, y: float) -> Box:
        xs = [x + dx for dx, _ in self.vertices]
        ys = [y + dy for _, dy in self.vertices]
        return (min(xs), min(ys), max(xs), max(ys))


Shape = Union[Circle, Rect, Arc, Polygon]
