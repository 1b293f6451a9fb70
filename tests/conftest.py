"""Pytest configuration for lightcast tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls which can cause
    segmentation faults due to Taichi runtime conflicts.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture
def square():
    """A 10x10 axis-aligned square polygon with screen-clockwise winding."""
    from src.lightcast.core.vector import Vector
    from src.lightcast.shapes.polygon import Polygon

    return Polygon([Vector(0, 0), Vector(10, 0), Vector(10, 10), Vector(0, 10)])
