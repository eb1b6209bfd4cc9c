"""
Shared primitive data types for the mini-game core.

Validated, immutable geometric types used for configuration-level data
(playfield bounds, spawn origins). Per-frame entity state lives in plain
dataclasses in minigames.entities.
"""

from pydantic import BaseModel, ConfigDict, computed_field, field_validator


class Point2D(BaseModel):
    """Immutable 2D point/vector.

    Attributes:
        x: X coordinate (horizontal, grows to the right)
        y: Y coordinate (vertical, grows downward)

    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"


class Rectangle(BaseModel):
    """Immutable axis-aligned rectangle, positioned by its top-left corner.

    Used for the playfield and for culling bounds.

    Attributes:
        x: X coordinate of top-left corner
        y: Y coordinate of top-left corner
        width: Width of rectangle (must be positive)
        height: Height of rectangle (must be positive)

    Examples:
        >>> field = Rectangle(x=0.0, y=0.0, width=800.0, height=600.0)
        >>> field.center
        Point2D(x=400.0, y=300.0)
        >>> field.expanded(50).left
        -50.0
    """
    x: float
    y: float
    width: float
    height: float

    model_config = ConfigDict(frozen=True)

    @field_validator('width', 'height')
    @classmethod
    def validate_positive_dimensions(cls, v: float) -> float:
        """Validate dimensions are positive."""
        if v <= 0:
            raise ValueError(f'Rectangle dimensions must be positive, got {v}')
        return v

    @computed_field
    @property
    def center(self) -> Point2D:
        """Center point of the rectangle."""
        return Point2D(x=self.x + self.width / 2, y=self.y + self.height / 2)

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def expanded(self, margin: float) -> 'Rectangle':
        """Return a copy grown by ``margin`` on every side."""
        return Rectangle(
            x=self.x - margin,
            y=self.y - margin,
            width=self.width + 2 * margin,
            height=self.height + 2 * margin,
        )

    def overlaps_box(self, left: float, top: float, right: float, bottom: float) -> bool:
        """Inclusive overlap test against a raw (left, top, right, bottom) box."""
        return not (right < self.left or left > self.right or
                    bottom < self.top or top > self.bottom)

    def __str__(self) -> str:
        """String representation for debugging."""
        return f"Rectangle(x={self.x:.2f}, y={self.y:.2f}, w={self.width:.2f}, h={self.height:.2f})"
