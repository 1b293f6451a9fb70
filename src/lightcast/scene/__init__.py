"""Scene management.

Components:
    manager: SceneManager holding lights, shapes and compositors, with
        SceneConfig serialization
    demo: Factory for the demo scene used by the example script
"""

from .demo import DEMO_HEIGHT, DEMO_WIDTH, DemoParams, create_demo_scene
from .manager import SceneConfig, SceneManager

__all__ = [
    "SceneManager",
    "SceneConfig",
    "DemoParams",
    "create_demo_scene",
    "DEMO_WIDTH",
    "DEMO_HEIGHT",
]
