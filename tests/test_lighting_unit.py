"""Unit tests for the LightingUnit compositor.

Tests cover:
- Output access before and after compute
- Fully occluded light inside an object
- Hard shadows behind an occluder
- Soft penumbra from area lamps
- Diffuse light passing through objects
- Content-keyed caching and reallocation on resize
"""

import numpy as np
import pytest


def _lamp(**kwargs):
    from src.lightcast.core.vector import Vector
    from src.lightcast.lights.lamp import Lamp

    params = {"distance": 60, "color": "rgba(255,255,255,1)"}
    params.update(kwargs)
    return Lamp(Vector(10, 32), **params)


def _block():
    from src.lightcast.core.vector import Vector
    from src.lightcast.shapes.polygon import Rectangle

    return Rectangle(Vector(20, 22), Vector(30, 42))


class TestLightingUnitBasics:
    """Tests for construction and output access."""

    def test_output_before_compute_raises(self):
        """Test that reading the output before computing fails."""
        from src.lightcast.lighting.unit import LightingUnit

        unit = LightingUnit(_lamp())
        with pytest.raises(RuntimeError):
            _ = unit.output

    def test_invalid_diffuse_raises(self):
        """Test that diffuse must be in [0, 1]."""
        from src.lightcast.lighting.unit import LightingUnit

        with pytest.raises(ValueError):
            LightingUnit(_lamp(), diffuse=1.5)

    def test_output_matches_viewport(self):
        """Test that the output raster has the requested size."""
        from src.lightcast.lighting.unit import LightingUnit

        unit = LightingUnit(_lamp())
        unit.compute(80, 64)
        assert unit.output.size == (80, 64)

    def test_without_objects_output_is_the_light(self):
        """Test that an unobstructed unit draws the plain gradient."""
        from src.lightcast.core.raster import Surface
        from src.lightcast.lighting.unit import LightingUnit

        lamp = _lamp()
        unit = LightingUnit(lamp)
        unit.compute(80, 64)

        expected = Surface(80, 64)
        lamp.render(expected)
        np.testing.assert_array_equal(unit.output.pixels, expected.pixels)


class TestShadows:
    """Tests for the shadowed output."""

    def test_light_inside_object_is_blank(self):
        """Test that a light inside an object leaves the output empty."""
        from src.lightcast.core.vector import Vector
        from src.lightcast.lighting.unit import LightingUnit

        unit = LightingUnit(_lamp(), [_block()])
        unit.light.position = Vector(25, 32)
        unit.compute(80, 64)

        assert unit.light_in_object()
        assert unit.output.is_blank()

    def test_hard_shadow_behind_occluder(self):
        """Test that the area behind an occluder is dark and the rest lit."""
        from src.lightcast.lighting.unit import LightingUnit

        unit = LightingUnit(_lamp(), [_block()])
        unit.compute(80, 64)

        alpha = unit.output.alpha()
        assert alpha[32, 50] == 0.0
        assert alpha[32, 25] == 0.0
        assert alpha[50, 10] > 0.0
        assert alpha[32, 15] > 0.0

    def test_penumbra_from_area_lamp(self):
        """Test that an area lamp partially lights pixels a point lamp fully shadows."""
        from src.lightcast.core.vector import Vector
        from src.lightcast.lighting.unit import LightingUnit
        from src.lightcast.shapes.polygon import Rectangle

        post = [Rectangle(Vector(20, 30), Vector(24, 34))]
        width, height = 120, 64

        unlit = LightingUnit(_lamp(distance=100))
        unlit.compute(width, height)
        hard = LightingUnit(_lamp(distance=100), post)
        hard.compute(width, height)
        soft = LightingUnit(_lamp(distance=100, radius=6, samples=16), post)
        soft.compute(width, height)

        full = unlit.output.alpha()[32, 70]
        assert full > 0.0
        assert hard.output.alpha()[32, 70] == 0.0
        partial = soft.output.alpha()[32, 70]
        assert 1e-3 < partial < full - 1e-3

    def test_umbra_is_fully_dark_with_many_samples(self):
        """Test that pixels every sample shadows reach zero light."""
        from src.lightcast.lighting.unit import LightingUnit

        unit = LightingUnit(_lamp(radius=3, samples=12), [_block()])
        unit.compute(80, 64)
        assert unit.output.alpha()[32, 50] == pytest.approx(0.0, abs=1e-6)

    def test_diffuse_lets_light_through_object(self):
        """Test that diffuse scales the light on the lit half of a disc."""
        from src.lightcast.core.vector import Vector
        from src.lightcast.lighting.unit import LightingUnit
        from src.lightcast.shapes.disc import Disc

        disc = Disc(Vector(40, 32), 6)

        unlit = LightingUnit(_lamp())
        unlit.compute(80, 64)
        opaque = LightingUnit(_lamp(), [disc])
        opaque.compute(80, 64)
        translucent = LightingUnit(_lamp(), [disc], diffuse=0.5)
        translucent.compute(80, 64)

        full = unlit.output.alpha()[32, 36]
        assert opaque.output.alpha()[32, 36] == 0.0
        assert translucent.output.alpha()[32, 36] == pytest.approx(full * 0.5, rel=1e-5)


class TestCaching:
    """Tests for content-keyed recomputation."""

    def test_second_compute_is_a_hit(self):
        """Test that recomputing an unchanged unit reuses the output."""
        from src.lightcast.lighting.unit import LightingUnit

        unit = LightingUnit(_lamp(radius=4, samples=4), [_block()])
        unit.compute(80, 64)
        before = unit.output.pixels.copy()
        unit.compute(80, 64)

        assert unit.stats.misses == 1
        assert unit.stats.hits == 1
        np.testing.assert_array_equal(unit.output.pixels, before)

    def test_moving_the_light_recomputes(self):
        """Test that a light move invalidates the output."""
        from src.lightcast.core.vector import Vector
        from src.lightcast.lighting.unit import LightingUnit

        unit = LightingUnit(_lamp(), [_block()])
        unit.compute(80, 64)
        before = unit.output.pixels.copy()
        unit.light.position = Vector(10, 20)
        unit.compute(80, 64)

        assert unit.stats.misses == 2
        assert not np.array_equal(unit.output.pixels, before)

    def test_adding_a_shape_recomputes(self):
        """Test that the shape list is read by reference."""
        from src.lightcast.lighting.unit import LightingUnit

        shapes = []
        unit = LightingUnit(_lamp(), shapes)
        unit.compute(80, 64)
        shapes.append(_block())
        unit.compute(80, 64)

        assert unit.stats.misses == 2
        assert unit.output.alpha()[32, 50] == 0.0

    def test_resize_reallocates(self):
        """Test that a new viewport size rebuilds the rasters."""
        from src.lightcast.lighting.unit import LightingUnit

        unit = LightingUnit(_lamp(), [_block()])
        unit.compute(80, 64)
        unit.compute(40, 40)

        assert unit.output.size == (40, 40)
        assert unit.stats.misses == 2

    def test_render_draws_output(self):
        """Test that render blits the computed raster."""
        from src.lightcast.core.raster import CompositeMode, Surface
        from src.lightcast.lighting.unit import LightingUnit

        unit = LightingUnit(_lamp(), [_block()])
        unit.compute(80, 64)
        target = Surface(80, 64)
        unit.render(target, CompositeMode.LIGHTER)
        np.testing.assert_array_equal(target.pixels, unit.output.pixels)
