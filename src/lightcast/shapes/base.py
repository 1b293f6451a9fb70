"""Abstract opaque shape and shared shadow-projection helpers."""

from __future__ import annotations

from abc import ABC, abstractmethod

from src.lightcast.core.raster import Path
from src.lightcast.core.vector import Bounds, Vector


def shadow_reach(bounds: Bounds) -> float:
    """Distance shadow points are pushed away from the light.

    The average of the clip box's width and height. It is an estimate of
    "far enough to leave the lit area", not an exact clip.
    """
    return (bounds.width + bounds.height) / 2


def project(origin: Vector, point: Vector, reach: float) -> Vector:
    """Return the offset that pushes ``point`` ``reach`` further from ``origin``."""
    return (point - origin).normalize() * reach


class OpaqueShape(ABC):
    """Interface of an object that blocks light."""

    @abstractmethod
    def bounds(self) -> Bounds:
        """Return the axis-aligned box enclosing the shape."""

    @abstractmethod
    def contains(self, point: Vector) -> bool:
        """Check whether a point is inside the shape."""

    @abstractmethod
    def path(self) -> Path:
        """Return the outline of the shape as a fillable path."""

    @abstractmethod
    def cast(self, origin: Vector, bounds: Bounds) -> Path:
        """Return the shadow the shape casts when lit from ``origin``.

        Args:
            origin: Position of the (sample) light.
            bounds: Clip box of the light; sets how far the shadow reaches.

        Returns:
            The shadow geometry. It is empty when nothing is cast.
        """

    @abstractmethod
    def cache_key(self) -> tuple:
        """Return the geometry as a hashable tuple."""
