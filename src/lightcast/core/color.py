"""RGBA colors and color-string parsing.

Colors are stored as straight (non-premultiplied) RGBA floats in [0, 1].
Strings are parsed with Pillow's ImageColor, which understands hex codes,
color names, ``rgb()`` and ``hsl()``. CSS ``rgba()`` strings whose alpha is
a fraction (``rgba(250,230,200,0.5)``) are handled here first since
ImageColor expects an integer alpha.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from PIL import ImageColor

_CSS_RGBA = re.compile(
    r"^rgba\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d*\.?\d+)\s*\)$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class Color:
    """A straight-alpha RGBA color.

    Attributes:
        r: Red channel in [0, 1].
        g: Green channel in [0, 1].
        b: Blue channel in [0, 1].
        a: Alpha (opacity) in [0, 1].
    """

    r: float
    g: float
    b: float
    a: float = 1.0

    def __post_init__(self) -> None:
        for name, value in (("r", self.r), ("g", self.g), ("b", self.b), ("a", self.a)):
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"Color channel {name} = {value} is outside [0, 1].")

    @classmethod
    def from_rgba8(cls, r: int, g: int, b: int, a: float = 255) -> Color:
        """Create a color from 8-bit channel values."""
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    def with_alpha(self, alpha: float) -> Color:
        return Color(self.r, self.g, self.b, alpha)

    def premultiplied(self) -> tuple[float, float, float, float]:
        """Return (r*a, g*a, b*a, a)."""
        return (self.r * self.a, self.g * self.a, self.b * self.a, self.a)

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)


ColorLike = Color | str | Sequence[float]

BLACK = Color(0.0, 0.0, 0.0, 1.0)


def parse_color(value: ColorLike) -> Color:
    """Convert a color-like value into a Color.

    Args:
        value: A Color, a color string, or a sequence of 3 or 4 floats in
            [0, 1].

    Returns:
        The parsed Color.

    Raises:
        ValueError: If the value cannot be interpreted as a color.
    """
    if isinstance(value, Color):
        return value
    if isinstance(value, str):
        match = _CSS_RGBA.match(value.strip())
        if match:
            r, g, b = (int(match.group(i)) for i in range(1, 4))
            alpha = float(match.group(4))
            if alpha > 1.0:
                raise ValueError(f"Alpha {alpha} in {value!r} is outside [0, 1].")
            return Color.from_rgba8(r, g, b, alpha * 255.0)
        # ImageColor raises ValueError for unknown specifiers
        return Color.from_rgba8(*ImageColor.getcolor(value, "RGBA"))
    channels = tuple(float(c) for c in value)
    if len(channels) not in (3, 4):
        raise ValueError(f"Expected 3 or 4 color channels, got {len(channels)}.")
    return Color(*channels)
