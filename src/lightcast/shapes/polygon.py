"""Polygon opaque objects and their fixed-size specializations.

Point order matters twice: the crossing-number containment test walks the
edges in order, and the shadow cast keeps only the edges whose normal
``(aToB.y, -aToB.x)`` points away from the light. All points of a polygon
must therefore be listed with one consistent winding.

Shadow projection per kept edge a->b:

    m   = point of segment [a, b] closest to the light
    a'  = a + (a - origin) scaled to the reach distance
    b'  = b + (b - origin) scaled to the reach distance
    m'  = m + (m - origin) scaled to the reach distance
    fill [a, b, b', m', a']

The reach distance is the mean of the clip box's width and height.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from src.lightcast.core.raster import Path
from src.lightcast.core.vector import Bounds, Vector
from src.lightcast.shapes.base import OpaqueShape, project, shadow_reach


def closest_point_on_segment(point: Vector, a: Vector, b: Vector) -> Vector:
    """Return the point of segment [a, b] nearest to ``point``.

    The parameter ``t = (point - a).(b - a) / |b - a|^2`` is clamped to the
    segment ends.
    """
    a_to_b = b - a
    length2 = a_to_b.length2()
    if length2 == 0.0:
        return a
    t = (point - a).dot(a_to_b) / length2
    if t < 0:
        return a
    if t > 1:
        return b
    return a + a_to_b * t


class Polygon(OpaqueShape):
    """A closed polygon.

    Attributes:
        points: Vertices in order, with a consistent winding.
    """

    def __init__(self, points: Sequence[Vector]) -> None:
        if len(points) < 2:
            raise ValueError(f"A polygon needs at least 2 points, got {len(points)}.")
        self.points = list(points)

    def bounds(self) -> Bounds:
        xs = [p.x for p in self.points]
        ys = [p.y for p in self.points]
        return Bounds(Vector(min(xs), min(ys)), Vector(max(xs), max(ys)))

    def contains(self, point: Vector) -> bool:
        """Even-odd test.

        A crossing is counted for an edge when the point's y lies in the
        half-open range between the edge's end ys, so a ray through a shared
        vertex is only counted once. Points on the right or bottom edge of a
        square count as inside, points on the left or top edge do not.
        """
        points = self.points
        x, y = point.x, point.y
        odd = False
        j = len(points) - 1
        for i in range(len(points)):
            pi = points[i]
            pj = points[j]
            if ((pi.y < y <= pj.y) or (pj.y < y <= pi.y)) and (pi.x <= x or pj.x <= x):
                if pi.x + (y - pi.y) / (pj.y - pi.y) * (pj.x - pi.x) < x:
                    odd = not odd
            j = i
        return odd

    def path(self) -> Path:
        return Path().polygon(self.points)

    def edges(self) -> Iterator[tuple[Vector, Vector]]:
        """Yield every edge (a, b), starting with the closing edge last -> first."""
        a = self.points[-1]
        for b in self.points:
            yield a, b
            a = b

    def visible_edges(self, origin: Vector, bounds: Bounds) -> Iterator[tuple[Vector, Vector]]:
        """Yield the edges that bound the shadow cast from ``origin``.

        An edge is kept when its start lies strictly inside ``bounds`` and
        its normal faces away from the light.
        """
        for a, b in self.edges():
            if not bounds.strictly_contains(a):
                continue
            normal = (b - a).perp()
            if normal.dot(a - origin) < 0:
                yield a, b

    def cast(self, origin: Vector, bounds: Bounds) -> Path:
        reach = shadow_reach(bounds)
        shadow = Path()
        for a, b in self.visible_edges(origin, bounds):
            m = closest_point_on_segment(origin, a, b)
            # A light sitting on b has no direction to push b (or m) along
            if (b - origin).length2() == 0.0 or (m - origin).length2() == 0.0:
                continue
            shadow.polygon(
                [
                    a,
                    b,
                    b + project(origin, b, reach),
                    m + project(origin, m, reach),
                    a + project(origin, a, reach),
                ]
            )
        return shadow

    def cache_key(self) -> tuple:
        return ("polygon", tuple(self.points))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(points={self.points!r})"


class Triangle(Polygon):
    def __init__(self, a: Vector, b: Vector, c: Vector) -> None:
        super().__init__([a, b, c])


class Rectangle(Polygon):
    """Axis-aligned rectangle, listed topleft, topright, bottomright, bottomleft."""

    def __init__(self, topleft: Vector, bottomright: Vector) -> None:
        super().__init__(
            [
                topleft,
                Vector(bottomright.x, topleft.y),
                bottomright,
                Vector(topleft.x, bottomright.y),
            ]
        )


class Line(Polygon):
    """A segment; one of its two sides always faces away from the light."""

    def __init__(self, a: Vector, b: Vector) -> None:
        super().__init__([a, b])
