"""Image export utilities for rendered surfaces.

Surfaces hold premultiplied float RGBA; exported images are straight-alpha
8-bit RGBA written with Pillow.

Example:
    >>> from src.lightcast.preview.export import save_png
    >>> from src.lightcast.scene.demo import create_demo_scene
    >>>
    >>> frame = create_demo_scene().render(480, 320)
    >>> save_png(frame, "lighting.png")
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

if TYPE_CHECKING:
    from src.lightcast.core.raster import Surface


def surface_to_uint8(surface: Surface) -> npt.NDArray[np.uint8]:
    """Convert a surface to a straight-alpha uint8 array of shape (H, W, 4)."""
    pixels = surface.pixels.astype(np.float64)
    alpha = pixels[:, :, 3:4]
    # Un-premultiply; fully transparent pixels keep black color channels
    rgb = np.divide(pixels[:, :, :3], alpha, out=np.zeros_like(pixels[:, :, :3]), where=alpha > 0)
    straight = np.concatenate([rgb, alpha], axis=2)
    return np.rint(np.clip(straight, 0.0, 1.0) * 255.0).astype(np.uint8)


def surface_to_image(surface: Surface) -> PILImage.Image:
    """Convert a surface to a Pillow RGBA image."""
    return PILImage.fromarray(surface_to_uint8(surface))


def save_png(surface: Surface, filepath: str) -> None:
    """Save a surface as an RGBA PNG file.

    Args:
        surface: The surface to save.
        filepath: Output file path (should end in .png).
    """
    surface_to_image(surface).save(filepath)


def compute_rmse(first: Surface, second: Surface) -> float:
    """Root mean squared difference between two surfaces' premultiplied pixels.

    Used to check that two renders of the same scene agree.

    Raises:
        ValueError: If the surfaces differ in size.
    """
    if first.size != second.size:
        raise ValueError(f"Surface sizes differ: {first.size} vs {second.size}")

    delta = first.pixels.astype(np.float64) - second.pixels
    return float(np.sqrt(np.square(delta).mean()))
