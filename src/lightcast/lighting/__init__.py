"""Compositors turning lights and shapes into rasters.

Components:
    unit: LightingUnit, one light's illumination with soft shadows
    dark_mask: DarkMaskUnit, ambient darkness with cutouts at lights
"""

from .dark_mask import DEFAULT_AMBIENT_COLOR, DarkMaskUnit
from .unit import LightingUnit

__all__ = [
    "LightingUnit",
    "DarkMaskUnit",
    "DEFAULT_AMBIENT_COLOR",
]
