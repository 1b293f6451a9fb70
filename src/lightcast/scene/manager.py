"""Scene manager coordinating lights, shapes and compositors.

The SceneManager owns the lights and opaque shapes of a scene, keeps one
LightingUnit per light (all sharing the scene's shape list) and one
DarkMaskUnit over all lights, and composes complete frames:

    frame = sum of every light's shadowed illumination (additive)
            + ambient dark mask drawn on top

Scenes can be exported to and loaded from a SceneConfig made of plain
dicts, suitable for JSON.

Example:
    >>> from src.lightcast.scene.manager import SceneManager
    >>> scene = SceneManager(ambient="rgba(0,0,0,0.8)")
    >>> scene.add_lamp(position=(120, 80), distance=200, radius=6, samples=10)
    >>> scene.add_rectangle(topleft=(160, 60), bottomright=(190, 100))
    >>> frame = scene.render(320, 200)
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from src.lightcast.core.color import ColorLike, parse_color
from src.lightcast.core.raster import CompositeMode, Surface
from src.lightcast.core.vector import Vector
from src.lightcast.lighting.dark_mask import DEFAULT_AMBIENT_COLOR, DarkMaskUnit
from src.lightcast.lighting.unit import LightingUnit
from src.lightcast.lights.base import DEFAULT_DISTANCE, Light
from src.lightcast.lights.hemi import DEFAULT_ROUGHNESS, Hemi
from src.lightcast.lights.lamp import DEFAULT_LAMP_COLOR, Lamp
from src.lightcast.shapes.base import OpaqueShape
from src.lightcast.shapes.disc import Disc
from src.lightcast.shapes.polygon import Line, Polygon, Rectangle, Triangle

logger = logging.getLogger(__name__)

PointLike = Vector | Sequence[float]


def _vector(value: PointLike) -> Vector:
    if isinstance(value, Vector):
        return value
    return Vector(float(value[0]), float(value[1]))


def _light_from_config(light_config: dict[str, Any]) -> Light:
    light_type = light_config.get("type", "").lower()
    position = _vector(light_config.get("position", [0.0, 0.0]))
    common = {
        "distance": light_config.get("distance", DEFAULT_DISTANCE),
        "color": light_config.get("color", DEFAULT_LAMP_COLOR),
        "radius": light_config.get("radius", 0.0),
        "samples": light_config.get("samples", 1),
    }
    if light_type == "lamp":
        return Lamp(position, **common)
    if light_type == "hemi":
        return Hemi(
            position,
            **common,
            angle=light_config.get("angle", 0.0),
            roughness=light_config.get("roughness", DEFAULT_ROUGHNESS),
        )
    raise ValueError(f"Unknown light type: {light_type}")


def _shape_from_config(shape_config: dict[str, Any]) -> OpaqueShape:
    shape_type = shape_config.get("type", "").lower()
    if shape_type == "disc":
        return Disc(_vector(shape_config.get("center", [0.0, 0.0])), shape_config.get("radius", 1.0))
    if shape_type == "polygon":
        return Polygon([_vector(p) for p in shape_config.get("points", [])])
    if shape_type == "triangle":
        a, b, c = (_vector(p) for p in shape_config["points"])
        return Triangle(a, b, c)
    if shape_type == "rectangle":
        return Rectangle(_vector(shape_config["topleft"]), _vector(shape_config["bottomright"]))
    if shape_type == "line":
        a, b = (_vector(p) for p in shape_config["points"])
        return Line(a, b)
    raise ValueError(f"Unknown shape type: {shape_type}")


@dataclass
class SceneConfig:
    """Configuration for scene serialization.

    Attributes:
        lights: List of light configurations ({"type": "lamp" | "hemi", ...}).
        shapes: List of shape configurations ({"type": "disc" | "polygon" |
            "triangle" | "rectangle" | "line", ...}).
        ambient: Ambient color of the dark mask, as RGBA floats or a string.
        diffuse: Fraction of light passing through the shapes.
    """

    lights: list[dict[str, Any]] = field(default_factory=list)
    shapes: list[dict[str, Any]] = field(default_factory=list)
    ambient: Any = DEFAULT_AMBIENT_COLOR
    diffuse: float = 0.0


class SceneManager:
    """Lights, opaque shapes and the compositors that render them.

    Attributes:
        lights: Lights of the scene, in insertion order.
        shapes: Opaque shapes of the scene, shared by every LightingUnit.
        dark_mask: The ambient darkness overlay.
    """

    def __init__(self, ambient: ColorLike = DEFAULT_AMBIENT_COLOR, diffuse: float = 0.0) -> None:
        if not 0.0 <= diffuse <= 1.0:
            raise ValueError(f"Diffuse = {diffuse} is outside [0, 1].")
        self.lights: list[Light] = []
        self.shapes: list[OpaqueShape] = []
        self._units: list[LightingUnit] = []
        self._diffuse = diffuse
        self.dark_mask = DarkMaskUnit(self.lights, ambient)

    @property
    def diffuse(self) -> float:
        return self._diffuse

    @diffuse.setter
    def diffuse(self, value: float) -> None:
        if not 0.0 <= value <= 1.0:
            raise ValueError(f"Diffuse = {value} is outside [0, 1].")
        self._diffuse = value
        for unit in self._units:
            unit.diffuse = value

    @property
    def units(self) -> list[LightingUnit]:
        """The lighting compositors, one per light."""
        return list(self._units)

    def clear(self) -> None:
        """Remove every light and shape."""
        self.lights.clear()
        self.shapes.clear()
        self._units.clear()

    # =========================================================================
    # Lights
    # =========================================================================

    def add_light(self, light: Light) -> Light:
        """Register a light and create its LightingUnit."""
        self.lights.append(light)
        self._units.append(LightingUnit(light, self.shapes, self._diffuse))
        return light

    def add_lamp(
        self,
        position: PointLike,
        distance: float = DEFAULT_DISTANCE,
        color: ColorLike = DEFAULT_LAMP_COLOR,
        radius: float = 0.0,
        samples: int = 1,
    ) -> Lamp:
        lamp = Lamp(_vector(position), distance, color, radius, samples)
        self.add_light(lamp)
        return lamp

    def add_hemi(
        self,
        position: PointLike,
        distance: float = DEFAULT_DISTANCE,
        color: ColorLike = DEFAULT_LAMP_COLOR,
        radius: float = 0.0,
        samples: int = 1,
        angle: float = 0.0,
        roughness: float = DEFAULT_ROUGHNESS,
    ) -> Hemi:
        hemi = Hemi(_vector(position), distance, color, radius, samples, angle, roughness)
        self.add_light(hemi)
        return hemi

    def remove_light(self, light: Light) -> None:
        """Remove a light and its LightingUnit.

        Raises:
            ValueError: If the light is not part of the scene.
        """
        index = self.lights.index(light)
        del self.lights[index]
        del self._units[index]

    # =========================================================================
    # Shapes
    # =========================================================================

    def add_shape(self, shape: OpaqueShape) -> OpaqueShape:
        self.shapes.append(shape)
        return shape

    def add_disc(self, center: PointLike, radius: float) -> Disc:
        disc = Disc(_vector(center), radius)
        self.add_shape(disc)
        return disc

    def add_polygon(self, points: Sequence[PointLike]) -> Polygon:
        polygon = Polygon([_vector(p) for p in points])
        self.add_shape(polygon)
        return polygon

    def add_rectangle(self, topleft: PointLike, bottomright: PointLike) -> Rectangle:
        rectangle = Rectangle(_vector(topleft), _vector(bottomright))
        self.add_shape(rectangle)
        return rectangle

    def remove_shape(self, shape: OpaqueShape) -> None:
        """Remove a shape.

        Raises:
            ValueError: If the shape is not part of the scene.
        """
        self.shapes.remove(shape)

    # =========================================================================
    # Rendering
    # =========================================================================

    def compute(self, width: int, height: int) -> None:
        """Bring every compositor up to date for a viewport size."""
        for unit in self._units:
            unit.compute(width, height)
        self.dark_mask.compute(width, height)

    def render(self, width: int, height: int) -> Surface:
        """Compose a full frame.

        Returns:
            A new Surface with every light added together and the dark mask
            drawn over them.
        """
        self.compute(width, height)
        frame = Surface(width, height)
        for unit in self._units:
            unit.render(frame, CompositeMode.LIGHTER)
        self.dark_mask.render(frame)
        logger.debug(
            "Rendered %dx%d frame: %d lights, %d shapes",
            width,
            height,
            len(self.lights),
            len(self.shapes),
        )
        return frame

    # =========================================================================
    # Scene Serialization
    # =========================================================================

    def to_config(self) -> SceneConfig:
        """Export the scene to a configuration object."""
        config = SceneConfig(
            ambient=list(self.dark_mask.color.as_tuple()),
            diffuse=self._diffuse,
        )

        for light in self.lights:
            if not isinstance(light, Lamp):
                raise ValueError(f"Cannot serialize light of type {type(light).__name__}")
            light_config: dict[str, Any] = {
                "type": "hemi" if isinstance(light, Hemi) else "lamp",
                "position": [light.position.x, light.position.y],
                "distance": light.distance,
                "color": list(light.color.as_tuple()),
                "radius": light.radius,
                "samples": light.samples,
            }
            if isinstance(light, Hemi):
                light_config["angle"] = light.angle
                light_config["roughness"] = light.roughness
            config.lights.append(light_config)

        for shape in self.shapes:
            if isinstance(shape, Disc):
                config.shapes.append(
                    {
                        "type": "disc",
                        "center": [shape.center.x, shape.center.y],
                        "radius": shape.radius,
                    }
                )
            elif isinstance(shape, Polygon):
                config.shapes.append(
                    {"type": "polygon", "points": [[p.x, p.y] for p in shape.points]}
                )
            else:
                raise ValueError(f"Cannot serialize shape of type {type(shape).__name__}")

        return config

    def from_config(self, config: SceneConfig) -> None:
        """Load a scene from a configuration object.

        The whole configuration is parsed before the current scene is
        cleared, so a rejected configuration leaves the scene untouched.

        Raises:
            ValueError: If the configuration contains an unknown type or
                out-of-range values.
        """
        ambient = parse_color(config.ambient)
        if not 0.0 <= config.diffuse <= 1.0:
            raise ValueError(f"Diffuse = {config.diffuse} is outside [0, 1].")
        lights = [_light_from_config(light_config) for light_config in config.lights]
        shapes = [_shape_from_config(shape_config) for shape_config in config.shapes]

        self.clear()
        self.dark_mask.color = ambient
        self.diffuse = config.diffuse
        for light in lights:
            self.add_light(light)
        for shape in shapes:
            self.add_shape(shape)
        logger.debug("Loaded scene with %d lights and %d shapes", len(lights), len(shapes))

    def to_dict(self) -> dict[str, Any]:
        """Export the scene to a dictionary (for JSON serialization)."""
        config = self.to_config()
        return {
            "lights": config.lights,
            "shapes": config.shapes,
            "ambient": config.ambient,
            "diffuse": config.diffuse,
        }

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene from a dictionary with 'lights', 'shapes', 'ambient', 'diffuse' keys."""
        config = SceneConfig(
            lights=data.get("lights", []),
            shapes=data.get("shapes", []),
            ambient=data.get("ambient", DEFAULT_AMBIENT_COLOR),
            diffuse=data.get("diffuse", 0.0),
        )
        self.from_config(config)
