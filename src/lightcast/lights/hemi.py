"""Hemi: a lamp whose bright spot leans toward a facing angle."""

from __future__ import annotations

import math
from collections.abc import Hashable

from src.lightcast.core.color import ColorLike
from src.lightcast.core.vector import Vector
from src.lightcast.lights.base import DEFAULT_DISTANCE
from src.lightcast.lights.lamp import DEFAULT_LAMP_COLOR, Lamp

DEFAULT_ROUGHNESS = 0.8


class Hemi(Lamp):
    """An oriented lamp.

    The gradient's focal point is pushed away from the bitmap center along
    ``angle``, by ``roughness`` times the distance. A roughness of 0 gives
    the plain Lamp gradient.

    Attributes:
        angle: Facing angle in radians.
        roughness: How far the bright spot shifts, in [0, 1].
    """

    def __init__(
        self,
        position: Vector,
        distance: float = DEFAULT_DISTANCE,
        color: ColorLike = DEFAULT_LAMP_COLOR,
        radius: float = 0.0,
        samples: int = 1,
        angle: float = 0.0,
        roughness: float = DEFAULT_ROUGHNESS,
    ) -> None:
        super().__init__(position, distance, color, radius, samples)
        if not 0.0 <= roughness <= 1.0:
            raise ValueError(f"Hemi roughness = {roughness} is outside [0, 1].")
        self.angle = angle
        self.roughness = roughness

    def center(self) -> Vector:
        return Vector(
            self.distance * (1 - math.cos(self.angle) * self.roughness),
            self.distance * (1 + math.sin(self.angle) * self.roughness),
        )

    def gradient_key(self) -> Hashable:
        return (self.color, self.distance, self.angle, self.roughness)
