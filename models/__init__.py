"""
Shared pydantic models for the mini-game core.

Usage:
    >>> from models import Point2D, Rectangle
"""

from .primitives import (
    Point2D,
    Rectangle,
)

__all__ = [
    'Point2D',
    'Rectangle',
]
