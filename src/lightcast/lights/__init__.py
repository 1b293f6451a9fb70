"""Light sources.

Components:
    base: Abstract Light with bounds, sampling and the visibility mask
    lamp: Isotropic circular light with golden-angle soft-shadow sampling
    hemi: Lamp whose gradient leans toward a facing angle

Every light can render its illumination gradient and its visibility mask
onto a Surface; both rasters are cached under a key of the parameters that
change their pixels.
"""

from .base import DEFAULT_DISTANCE, VISIBILITY_MASK_SCALE, Light
from .hemi import DEFAULT_ROUGHNESS, Hemi
from .lamp import DEFAULT_LAMP_COLOR, Lamp

__all__ = [
    "Light",
    "Lamp",
    "Hemi",
    "DEFAULT_DISTANCE",
    "DEFAULT_LAMP_COLOR",
    "DEFAULT_ROUGHNESS",
    "VISIBILITY_MASK_SCALE",
]
