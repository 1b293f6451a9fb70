"""2D vector value type and bounding boxes for shadow geometry.

This module provides the immutable Vector used by every light and shape,
the axis-aligned Bounds returned by ``bounds()`` queries, and the
constants shared by the sampling code.

Example:
    >>> from src.lightcast.core.vector import Vector
    >>> a = Vector(3.0, 4.0)
    >>> a.length2()
    25.0
    >>> a.normalize()
    Vector(x=0.6, y=0.8)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Angle between successive samples of the golden-angle spiral
GOLDEN_ANGLE = math.pi * (3.0 - math.sqrt(5.0))


class ZeroLengthVectorError(ValueError):
    """Raised when normalizing a vector with zero length."""


@dataclass(frozen=True)
class Vector:
    """An immutable 2D vector.

    Attributes:
        x: Horizontal component (grows to the right).
        y: Vertical component (grows downward, raster convention).
    """

    x: float = 0.0
    y: float = 0.0

    def add(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def sub(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def mul(self, factor: float) -> Vector:
        return Vector(self.x * factor, self.y * factor)

    def inv(self) -> Vector:
        return Vector(-self.x, -self.y)

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y

    def perp(self) -> Vector:
        """Return the perpendicular (y, -x)."""
        return Vector(self.y, -self.x)

    def dist2(self, other: Vector) -> float:
        """Compute the squared distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def length2(self) -> float:
        """Compute the squared length of the vector."""
        return self.x * self.x + self.y * self.y

    def length(self) -> float:
        return math.sqrt(self.length2())

    def normalize(self) -> Vector:
        """Return a unit vector in the same direction.

        Returns:
            A vector of length 1.

        Raises:
            ZeroLengthVectorError: If the vector has zero length, which has
                no direction to preserve.
        """
        length = self.length()
        if length == 0.0:
            raise ZeroLengthVectorError(f"Cannot normalize zero-length vector {self!r}")
        return Vector(self.x / length, self.y / length)

    def rounded(self) -> tuple[int, int]:
        """Round both components half-up to integer pixel coordinates."""
        return math.floor(self.x + 0.5), math.floor(self.y + 0.5)

    def __add__(self, other: Vector) -> Vector:
        return self.add(other)

    def __sub__(self, other: Vector) -> Vector:
        return self.sub(other)

    def __mul__(self, factor: float) -> Vector:
        return self.mul(factor)

    __rmul__ = __mul__

    def __neg__(self) -> Vector:
        return self.inv()


@dataclass(frozen=True)
class Bounds:
    """An axis-aligned bounding box.

    Attributes:
        topleft: Minimum corner.
        bottomright: Maximum corner.
    """

    topleft: Vector
    bottomright: Vector

    @property
    def width(self) -> float:
        return self.bottomright.x - self.topleft.x

    @property
    def height(self) -> float:
        return self.bottomright.y - self.topleft.y

    def strictly_contains(self, point: Vector) -> bool:
        """Check whether a point lies inside the box, borders excluded."""
        return (
            self.topleft.x < point.x < self.bottomright.x
            and self.topleft.y < point.y < self.bottomright.y
        )

    @classmethod
    def around(cls, center: Vector, half_extent: float) -> Bounds:
        """Build the square box ``center +- half_extent`` on both axes."""
        delta = Vector(half_extent, half_extent)
        return cls(center - delta, center + delta)
