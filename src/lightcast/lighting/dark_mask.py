"""Dark-mask compositor: ambient darkness with holes at each light.

The mask is the viewport filled with the ambient color, minus every
light's visibility mask (a soft black disc of 1.4 times the light's
distance) using destination-out. Drawn over a scene, it darkens everything
except the areas the lights reach.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from src.lightcast.core.cache import CacheStats
from src.lightcast.core.color import Color, ColorLike, parse_color
from src.lightcast.core.raster import CompositeMode, Surface
from src.lightcast.lights.base import Light

logger = logging.getLogger(__name__)

DEFAULT_AMBIENT_COLOR = "rgba(0,0,0,0.9)"


class DarkMaskUnit:
    """Ambient darkness overlay for a set of lights.

    Attributes:
        lights: Lights cutting holes in the mask, kept by reference.
        color: The ambient color.
        stats: Cache hits and misses of compute().
    """

    def __init__(
        self,
        lights: Sequence[Light] | None = None,
        color: ColorLike = DEFAULT_AMBIENT_COLOR,
    ) -> None:
        self.lights = lights if lights is not None else []
        self.color = color
        self.stats = CacheStats()

        self._output: Surface | None = None
        self._content_key: tuple | None = None

    @property
    def color(self) -> Color:
        return self._color

    @color.setter
    def color(self, value: ColorLike) -> None:
        self._color = parse_color(value)

    @property
    def output(self) -> Surface:
        if self._output is None:
            raise RuntimeError("DarkMaskUnit has not been computed. Call compute() first.")
        return self._output

    def content_key(self) -> tuple:
        return (
            self.color,
            tuple((light.position, light.mask_key()) for light in self.lights),
        )

    def compute(self, width: int, height: int) -> None:
        if self._output is None or self._output.size != (width, height):
            logger.debug("Allocating %dx%d dark mask raster", width, height)
            self._output = Surface(width, height)
            self._content_key = None

        key = self.content_key()
        if key == self._content_key:
            self.stats.hits += 1
            return
        self.stats.misses += 1

        output = self._output
        output.clear()
        output.fill_rect(self.color)
        for light in self.lights:
            light.mask(output, CompositeMode.DESTINATION_OUT)
        self._content_key = key

    def render(self, surface: Surface, mode: CompositeMode = CompositeMode.SOURCE_OVER) -> None:
        """Draw the computed mask onto a surface."""
        surface.draw(self.output, 0, 0, mode)
