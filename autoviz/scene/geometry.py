"""
Planar geometry types shared by the scene model and the renderer.
"""

import math
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Vector2D:
    """2D vector in world coordinates [m]."""
    x: float
    y: float

    def __add__(self, other: 'Vector2D') -> 'Vector2D':
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vector2D') -> 'Vector2D':
        return Vector2D(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> 'Vector2D':
        return Vector2D(self.x * scalar, self.y * scalar)

    def __truediv__(self, scalar: float) -> 'Vector2D':
        return Vector2D(self.x / scalar, self.y / scalar)

    def __iter__(self):
        yield self.x
        yield self.y

    def magnitude(self) -> float:
        """Calculate vector magnitude."""
        return math.hypot(self.x, self.y)

    def to_tuple(self) -> Tuple[float, float]:
        """Convert to tuple."""
        return (self.x, self.y)


@dataclass(frozen=True)
class Pose2D:
    """Position plus heading (x [m], y [m], theta [rad])."""
    x: float
    y: float
    theta: float = 0.0

    @property
    def position(self) -> Vector2D:
        return Vector2D(self.x, self.y)

    def to_tuple(self) -> Tuple[float, float, float]:
        return (self.x, self.y, self.theta)
