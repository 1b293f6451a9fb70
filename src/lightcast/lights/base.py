"""Abstract light source.

A light has a position and a maximum effect distance. Concrete lights
decide how they are sampled for soft shadows and how their illumination
raster looks; every light shares the visibility mask used by the dark
mask overlay.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterator

from src.lightcast.core.cache import ResourceCache
from src.lightcast.core.color import BLACK
from src.lightcast.core.raster import CompositeMode, Surface
from src.lightcast.core.vector import Bounds, Vector

logger = logging.getLogger(__name__)

# Default maximum distance a light reaches, in pixels
DEFAULT_DISTANCE = 100.0

# Radius of the visibility mask relative to the light distance
VISIBILITY_MASK_SCALE = 1.4


class Light(ABC):
    """Interface shared by all lights.

    Attributes:
        position: Where the light is in surface coordinates.
        distance: Radius of the light's domain of effect (> 0).
        samples: Number of sample positions used for soft shadows.
    """

    samples: int = 1

    def __init__(self, position: Vector, distance: float = DEFAULT_DISTANCE) -> None:
        if distance <= 0:
            raise ValueError(f"Light distance = {distance} must be positive.")
        self.position = position
        self.distance = distance
        self._mask_cache: ResourceCache[int, Surface] = ResourceCache(
            "visibility-mask", max_size=1
        )

    def bounds(self) -> Bounds:
        """Return the box outside of which the light has no effect."""
        return Bounds.around(self.position, self.distance)

    def center(self) -> Vector:
        """Offset from the raster's top-left corner to its brightest point."""
        return Vector(self.distance, self.distance)

    def sample_points(self) -> Iterator[Vector]:
        """Yield the positions used to cast shadows."""
        yield self.position

    @abstractmethod
    def render(self, surface: Surface) -> None:
        """Draw the light's illumination onto a surface."""

    @abstractmethod
    def gradient_key(self) -> Hashable:
        """Return the parameters the illumination raster depends on."""

    def mask_key(self) -> int:
        return math.floor(self.distance * VISIBILITY_MASK_SCALE)

    def visibility_mask(self) -> Surface:
        """Return the cached soft black disc used to cut holes in the dark mask."""
        return self._mask_cache.get_or_create(self.mask_key(), self._build_visibility_mask)

    def _build_visibility_mask(self) -> Surface:
        radius = max(self.mask_key(), 1)
        mask = Surface(2 * radius, 2 * radius)
        middle = Vector(radius, radius)
        mask.fill_radial_gradient(middle, middle, radius, BLACK)
        return mask

    def mask(self, surface: Surface, mode: CompositeMode = CompositeMode.SOURCE_OVER) -> None:
        """Draw the visibility mask centered on the light's position."""
        mask = self.visibility_mask()
        x, y = (self.position - Vector(mask.width / 2, mask.height / 2)).rounded()
        surface.draw(mask, x, y, mode)

    def state_key(self) -> tuple:
        """Return every parameter that affects the light's shadowed output."""
        return (
            type(self).__name__,
            self.position,
            self.distance,
            self.samples,
            self.gradient_key(),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(position={self.position!r}, distance={self.distance!r})"
