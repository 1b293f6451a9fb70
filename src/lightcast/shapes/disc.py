"""Disc: a circular opaque object.

The shadow of a disc is built from two points offset from the center,
perpendicular to the light direction, by the radius. They are close to,
but not exactly, the tangent points of the circle seen from the light, so
the shadow is slightly narrower than the true one for nearby lights.
"""

from __future__ import annotations

from src.lightcast.core.raster import Path
from src.lightcast.core.vector import Bounds, Vector
from src.lightcast.shapes.base import OpaqueShape, project, shadow_reach


class Disc(OpaqueShape):
    """A filled circle.

    Attributes:
        center: Center of the disc.
        radius: Radius of the disc (>= 0).
    """

    def __init__(self, center: Vector, radius: float) -> None:
        if radius < 0:
            raise ValueError(f"Disc radius = {radius} is negative.")
        self.center = center
        self.radius = radius

    def bounds(self) -> Bounds:
        return Bounds.around(self.center, self.radius)

    def contains(self, point: Vector) -> bool:
        return point.dist2(self.center) < self.radius * self.radius

    def path(self) -> Path:
        return Path().disc(self.center, self.radius)

    def cast(self, origin: Vector, bounds: Bounds) -> Path:
        origin_to_center = self.center - origin
        if origin_to_center.length2() == 0.0:
            return Path()
        direction = origin_to_center.normalize()
        offset = direction.perp() * self.radius
        a = self.center + offset
        b = self.center - offset

        reach = shadow_reach(bounds)
        along = direction * reach
        shadow = Path().polygon(
            [
                b,
                b + project(origin, b, reach),
                b + along,
                a + along,
                a + project(origin, a, reach),
                a,
            ]
        )
        # Round cap on the far side, between a and b
        return shadow.disc(self.center, self.radius, facing=direction)

    def cache_key(self) -> tuple:
        return ("disc", self.center, self.radius)

    def __repr__(self) -> str:
        return f"Disc(center={self.center!r}, radius={self.radius!r})"
