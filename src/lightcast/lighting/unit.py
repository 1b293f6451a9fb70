"""Lighting compositor: one light, its shadows, one cached raster.

``LightingUnit.compute`` produces the light's illumination with the
shadows of every registered shape cut out of it:

1. The light's gradient is drawn into the output raster.
2. A second raster accumulates shadows. For every sample position of the
   light, each shape's cast geometry is filled in black at alpha
   ``1 / samples`` with additive blending, so a pixel every sample agrees
   is shadowed reaches full opacity while penumbra pixels stay partial.
   Each shape's own outline is then filled at alpha ``1 - diffuse`` to
   model light passing through the object.
3. The shadow raster is subtracted from the output with destination-out.

A light sitting inside a shape is fully occluded and leaves the output
blank.

Both rasters are kept between calls. They are reallocated when the
requested size changes, and the output is only redrawn when the content
key (light state, shape geometry, diffuse) differs from the last compute.

Example:
    >>> from src.lightcast.core.vector import Vector
    >>> from src.lightcast.lighting.unit import LightingUnit
    >>> from src.lightcast.lights.lamp import Lamp
    >>> from src.lightcast.shapes.polygon import Rectangle
    >>> lamp = Lamp(Vector(40, 60), distance=120, radius=8, samples=12)
    >>> unit = LightingUnit(lamp, [Rectangle(Vector(80, 40), Vector(100, 80))])
    >>> unit.compute(256, 128)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from src.lightcast.core.cache import CacheStats
from src.lightcast.core.color import BLACK
from src.lightcast.core.raster import CompositeMode, Surface
from src.lightcast.lights.base import Light
from src.lightcast.shapes.base import OpaqueShape

logger = logging.getLogger(__name__)


class LightingUnit:
    """Illumination of one light with soft shadows from a set of shapes.

    Attributes:
        light: The light being shadowed.
        objects: Shapes that block the light. The list is kept by reference,
            so the caller may add or remove shapes between computes.
        diffuse: Fraction of light passing through the shapes, in [0, 1].
        stats: Cache hits and misses of compute().
    """

    def __init__(
        self,
        light: Light,
        objects: Sequence[OpaqueShape] | None = None,
        diffuse: float = 0.0,
    ) -> None:
        if not 0.0 <= diffuse <= 1.0:
            raise ValueError(f"Diffuse = {diffuse} is outside [0, 1].")
        self.light = light
        self.objects = objects if objects is not None else []
        self.diffuse = diffuse
        self.stats = CacheStats()

        self._output: Surface | None = None
        self._shadows: Surface | None = None
        self._content_key: tuple | None = None

    @property
    def output(self) -> Surface:
        """The last computed raster."""
        if self._output is None:
            raise RuntimeError("LightingUnit has not been computed. Call compute() first.")
        return self._output

    def _create_cache(self, width: int, height: int) -> None:
        logger.debug("Allocating %dx%d lighting rasters for %r", width, height, self.light)
        self._output = Surface(width, height)
        self._shadows = Surface(width, height)
        self._content_key = None

    def content_key(self) -> tuple:
        """Return every input that changes the computed raster."""
        return (
            self.light.state_key(),
            tuple(shape.cache_key() for shape in self.objects),
            self.diffuse,
        )

    def light_in_object(self) -> bool:
        """Check whether the light's position is inside any shape."""
        return any(shape.contains(self.light.position) for shape in self.objects)

    def compute(self, width: int, height: int) -> None:
        """Render the shadowed illumination for a viewport size.

        Args:
            width: Viewport width in pixels.
            height: Viewport height in pixels.
        """
        if self._output is None or self._output.size != (width, height):
            self._create_cache(width, height)
        assert self._output is not None

        key = self.content_key()
        if key == self._content_key:
            self.stats.hits += 1
            return
        self.stats.misses += 1

        self._output.clear()
        if not self.light_in_object():
            self.light.render(self._output)
            self.cast(self._output)
        self._content_key = key

    def cast(self, surface: Surface) -> None:
        """Accumulate every shadow and erase it from ``surface``."""
        assert self._shadows is not None
        shadows = self._shadows
        shadows.clear()

        light = self.light
        sample_color = BLACK.with_alpha(1.0 / light.samples)
        bounds = light.bounds()
        for position in light.sample_points():
            for shape in self.objects:
                shadows.fill_path(shape.cast(position, bounds), sample_color, CompositeMode.LIGHTER)

        # Light absorbed by the objects themselves
        body_color = BLACK.with_alpha(1.0 - self.diffuse)
        for shape in self.objects:
            shadows.fill_path(shape.path(), body_color)

        surface.draw(shadows, 0, 0, CompositeMode.DESTINATION_OUT)

    def render(self, surface: Surface, mode: CompositeMode = CompositeMode.SOURCE_OVER) -> None:
        """Draw the computed raster onto a surface."""
        surface.draw(self.output, 0, 0, mode)
