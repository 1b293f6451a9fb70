"""Preview module for exporting rendered surfaces.

Components:
    export: Surface to Pillow image conversion, PNG export, RMSE

Example:
    >>> from src.lightcast.preview import save_png
    >>> save_png(frame, "output.png")
"""

from src.lightcast.preview.export import (
    compute_rmse,
    save_png,
    surface_to_image,
    surface_to_uint8,
)

__all__ = [
    "save_png",
    "surface_to_image",
    "surface_to_uint8",
    "compute_rmse",
]
