"""Opaque shapes that block light and cast shadows.

Components:
    base: Abstract OpaqueShape and the projection helpers
    disc: Circular object with an approximate tangent-point shadow
    polygon: Polygon plus Triangle, Rectangle and Line

Each shape answers bounds(), contains(point), path() and
cast(origin, bounds); the last returns the shadow geometry as a Path for
the lighting compositor to fill.
"""

from .base import OpaqueShape, project, shadow_reach
from .disc import Disc
from .polygon import Line, Polygon, Rectangle, Triangle, closest_point_on_segment

__all__ = [
    "OpaqueShape",
    "Disc",
    "Polygon",
    "Triangle",
    "Rectangle",
    "Line",
    "closest_point_on_segment",
    "project",
    "shadow_reach",
]
