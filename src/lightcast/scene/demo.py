"""Demo scene: a small room lit by an area lamp and a hemi light.

The scene contains a few blocks, a pillar (disc), a triangular prism seen
from above and a thin wall (line), lit by a soft warm lamp and a cooler
hemi light leaning to the right. It exercises every light and shape type
and is used by the example script and the integration tests.

Example:
    >>> from src.lightcast.scene.demo import create_demo_scene
    >>> scene = create_demo_scene()
    >>> frame = scene.render(480, 320)
"""

from dataclasses import dataclass

from src.lightcast.core.vector import Vector
from src.lightcast.scene.manager import SceneManager
from src.lightcast.shapes.polygon import Line, Triangle

# Reference viewport size the demo layout was designed for
DEMO_WIDTH = 480
DEMO_HEIGHT = 320


@dataclass
class DemoParams:
    """Parameters for the demo scene.

    Attributes:
        lamp_samples: Shadow samples of the area lamp.
        lamp_radius: Emitting radius of the area lamp.
        ambient: Ambient darkness color.
        diffuse: Fraction of light passing through the objects.
    """

    lamp_samples: int = 16
    lamp_radius: float = 8.0
    ambient: str = "rgba(0,0,0,0.9)"
    diffuse: float = 0.0


def create_demo_scene(params: DemoParams | None = None) -> SceneManager:
    """Build the demo scene.

    Args:
        params: Scene parameters; defaults to DemoParams().

    Returns:
        A SceneManager holding two lights and five shapes.
    """
    if params is None:
        params = DemoParams()

    scene = SceneManager(ambient=params.ambient, diffuse=params.diffuse)

    scene.add_lamp(
        position=(160, 160),
        distance=260,
        color="rgba(250,220,150,0.8)",
        radius=params.lamp_radius,
        samples=params.lamp_samples,
    )
    scene.add_hemi(
        position=(400, 60),
        distance=180,
        color="rgba(150,200,255,0.6)",
        angle=0.0,
        roughness=0.6,
    )

    scene.add_rectangle(topleft=(220, 120), bottomright=(250, 200))
    scene.add_rectangle(topleft=(90, 230), bottomright=(150, 250))
    scene.add_disc(center=(300, 220), radius=18)
    scene.add_shape(Triangle(Vector(100, 60), Vector(130, 110), Vector(70, 110)))
    scene.add_shape(Line(Vector(340, 110), Vector(420, 140)))

    return scene
