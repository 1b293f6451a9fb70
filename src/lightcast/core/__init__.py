"""Core building blocks shared by lights, shapes and compositors.

Components:
    vector: 2D Vector and Bounds value types, sampling constants
    color: RGBA Color and color-string parsing
    raster: Surface drawing target, Path and compositing modes
    cache: Keyed LRU cache for expensive rasters

All per-pixel work in the raster module runs in Taichi kernels; call
``ti.init()`` before drawing (Taichi initializes itself with defaults
otherwise).
"""

from .cache import CacheStats, ResourceCache
from .color import BLACK, Color, ColorLike, parse_color
from .raster import CompositeMode, Path, Surface
from .vector import GOLDEN_ANGLE, Bounds, Vector, ZeroLengthVectorError

__all__ = [
    "Vector",
    "Bounds",
    "ZeroLengthVectorError",
    "GOLDEN_ANGLE",
    "Color",
    "ColorLike",
    "parse_color",
    "BLACK",
    "Surface",
    "Path",
    "CompositeMode",
    "ResourceCache",
    "CacheStats",
]
