"""Unit tests for image export.

Tests cover:
- Un-premultiplying to 8-bit straight alpha
- PNG output readable by Pillow
- RMSE between rendered surfaces
"""

import numpy as np
import pytest


class TestSurfaceToUint8:
    """Tests for surface_to_uint8."""

    def test_straight_alpha(self):
        """Test that color channels are divided by alpha."""
        from src.lightcast.core.raster import Surface
        from src.lightcast.preview.export import surface_to_uint8

        surface = Surface(2, 2)
        surface.fill_rect("rgba(255,0,0,0.5)")
        image = surface_to_uint8(surface)

        assert image.dtype == np.uint8
        assert image.shape == (2, 2, 4)
        assert image[0, 0].tolist() == [255, 0, 0, 128]

    def test_transparent_pixels_are_zero(self):
        """Test that transparent pixels export as transparent black."""
        from src.lightcast.core.raster import Surface
        from src.lightcast.preview.export import surface_to_uint8

        image = surface_to_uint8(Surface(3, 3))
        assert np.all(image == 0)


class TestSavePng:
    """Tests for PNG output."""

    def test_save_and_reload(self, tmp_path):
        """Test that the saved PNG has the surface's size and pixels."""
        from PIL import Image

        from src.lightcast.core.raster import Surface
        from src.lightcast.preview.export import save_png, surface_to_uint8

        surface = Surface(5, 3)
        surface.fill_rect("rgba(0,128,255,0.75)")
        path = tmp_path / "frame.png"
        save_png(surface, str(path))

        with Image.open(path) as image:
            assert image.mode == "RGBA"
            assert image.size == (5, 3)
            np.testing.assert_array_equal(np.asarray(image), surface_to_uint8(surface))


class TestComputeRmse:
    """Tests for compute_rmse."""

    def test_identical_surfaces(self):
        """Test that a surface and its copy have zero error."""
        from src.lightcast.core.raster import Surface
        from src.lightcast.preview.export import compute_rmse

        surface = Surface(4, 4)
        surface.fill_rect("rgba(10,200,30,0.4)")
        assert compute_rmse(surface, surface.copy()) == 0.0

    def test_known_error(self):
        """Test the error between a blank and a half-opaque black surface."""
        from src.lightcast.core.raster import Surface
        from src.lightcast.preview.export import compute_rmse

        half = Surface(2, 2)
        half.fill_rect("rgba(0,0,0,0.5)")
        # Only the alpha channel differs: sqrt(0.25 / 4)
        assert compute_rmse(Surface(2, 2), half) == pytest.approx(0.25)

    def test_size_mismatch_raises(self):
        """Test that surfaces of different sizes are rejected."""
        from src.lightcast.core.raster import Surface
        from src.lightcast.preview.export import compute_rmse

        with pytest.raises(ValueError):
            compute_rmse(Surface(2, 2), Surface(3, 2))
