"""2D soft-shadow lighting on Taichi-accelerated rasters.

This package renders lights and the shadows opaque shapes cast from them,
with support for:
- Lamps (isotropic) and hemi lights (oriented) with area sampling
- Discs, polygons, triangles, rectangles and lines as occluders
- Soft penumbras from multi-sample shadow accumulation
- An ambient darkness overlay with holes at each light
- Cached gradient, mask and output rasters

Subpackages:
    core: Vectors, colors, the Surface drawing target and raster caches
    lights: Light sources
    shapes: Opaque shapes and shadow projection
    lighting: LightingUnit and DarkMaskUnit compositors
    scene: Scene management and serialization
    preview: PNG export
"""

__version__ = "0.1.0"
