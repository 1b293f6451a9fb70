"""Drawing surface backed by a NumPy buffer and Taichi kernels.

A Surface is the immediate-mode 2D drawing target used by lights, shapes
and compositors. Pixels are stored premultiplied as float32 RGBA in a
NumPy array of shape (height, width, 4). All per-pixel work (path
rasterization, gradients, blits) runs in Taichi kernels that take the
array directly as an ndarray argument.

Supported operations:
    - clear / fill_rect with a solid color
    - fill_path: union of polygons (nonzero winding) and full or half discs,
      2x2 supersampled coverage
    - fill_radial_gradient: two-point conical gradient from a color at the
      focal point to transparent at the outer circle
    - draw: blit another surface at an integer offset
    - compositing modes: source-over, destination-out, lighter (additive)

Pixel centers sit at (col + 0.5, row + 0.5).

Example:
    >>> import taichi as ti
    >>> ti.init(arch=ti.cpu)
    >>> from src.lightcast.core.raster import Path, Surface
    >>> from src.lightcast.core.vector import Vector
    >>> surface = Surface(64, 64)
    >>> path = Path().polygon([Vector(4, 4), Vector(60, 4), Vector(32, 60)])
    >>> surface.fill_path(path, "black")
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import IntEnum

import numpy as np
import numpy.typing as npt
import taichi as ti
import taichi.math as tm

from src.lightcast.core.color import ColorLike, parse_color
from src.lightcast.core.vector import Vector

logger = logging.getLogger(__name__)

# Kernel annotations are read when the module loads, so they must stay real objects
vec4 = tm.vec4

# Gradient parameter returned for pixels no circle of the gradient reaches
_OUTSIDE_GRADIENT = 2.0


class CompositeMode(IntEnum):
    """Blend modes for combining a source with the destination pixels.

    SOURCE_OVER draws the source on top. DESTINATION_OUT erases the
    destination in proportion to the source alpha. LIGHTER adds source and
    destination, clamped to 1.
    """

    SOURCE_OVER = 0
    DESTINATION_OUT = 1
    LIGHTER = 2


@dataclass
class Path:
    """A fillable shape made of polygon and disc subpaths.

    Filling a path paints the union of its subpaths once, so overlapping
    subpaths do not accumulate opacity.

    Attributes:
        polygons: Closed polygons, each a list of vertices.
        discs: Tuples of (center, radius, facing). When facing is set only
            the half disc on that side of the center is part of the path.
    """

    polygons: list[list[Vector]] = field(default_factory=list)
    discs: list[tuple[Vector, float, Vector | None]] = field(default_factory=list)

    def polygon(self, points: Iterable[Vector]) -> "Path":
        """Add a closed polygon subpath."""
        vertices = list(points)
        if len(vertices) >= 2:
            self.polygons.append(vertices)
        return self

    def disc(self, center: Vector, radius: float, facing: Vector | None = None) -> "Path":
        """Add a full disc, or the half disc on the ``facing`` side."""
        self.discs.append((center, radius, facing))
        return self

    def is_empty(self) -> bool:
        return not self.polygons and not self.discs

    def extent(self) -> tuple[float, float, float, float]:
        """Return (min_x, min_y, max_x, max_y) over all subpaths."""
        xs: list[float] = []
        ys: list[float] = []
        for vertices in self.polygons:
            xs.extend(p.x for p in vertices)
            ys.extend(p.y for p in vertices)
        for center, radius, _facing in self.discs:
            xs.extend((center.x - radius, center.x + radius))
            ys.extend((center.y - radius, center.y + radius))
        return min(xs), min(ys), max(xs), max(ys)

    def _pack(self) -> tuple[npt.NDArray[np.float32], npt.NDArray[np.int32], npt.NDArray[np.float32]]:
        """Flatten the subpaths into arrays for the rasterization kernel.

        Taichi cannot take zero-length arrays, so each array keeps at least
        one (unused) row; the kernel receives the real counts separately.
        """
        total = sum(len(vertices) for vertices in self.polygons)
        vertices = np.zeros((max(total, 1), 2), dtype=np.float32)
        ranges = np.zeros((max(len(self.polygons), 1), 2), dtype=np.int32)
        start = 0
        for index, polygon in enumerate(self.polygons):
            for offset, point in enumerate(polygon):
                vertices[start + offset] = (point.x, point.y)
            ranges[index] = (start, len(polygon))
            start += len(polygon)

        discs = np.zeros((max(len(self.discs), 1), 5), dtype=np.float32)
        for index, (center, radius, facing) in enumerate(self.discs):
            fx, fy = (facing.x, facing.y) if facing is not None else (0.0, 0.0)
            discs[index] = (center.x, center.y, radius, fx, fy)
        return vertices, ranges, discs


# =============================================================================
# Taichi kernels
# =============================================================================


@ti.func
def _composite(dst: vec4, src: vec4, mode: ti.i32) -> vec4:
    """Blend one premultiplied source pixel into a destination pixel."""
    result = dst
    if mode == 0:
        result = src + dst * (1.0 - src[3])
    elif mode == 1:
        result = dst * (1.0 - src[3])
    else:
        result = ti.min(dst + src, vec4(1.0, 1.0, 1.0, 1.0))
    return result


@ti.func
def _gradient_t(qx: ti.f32, qy: ti.f32, dx: ti.f32, dy: ti.f32, radius: ti.f32) -> ti.f32:
    """Solve for the gradient parameter of a point.

    The gradient circles are c(t) = focal + t * (center - focal) with radius
    t * radius. (qx, qy) is the point relative to the focal point and
    (dx, dy) the vector from focal point to outer center. The largest t with
    a non-negative radius is returned.
    """
    a = dx * dx + dy * dy - radius * radius
    b = qx * dx + qy * dy
    c = qx * qx + qy * qy
    t = _OUTSIDE_GRADIENT
    if ti.abs(a) < 1e-9:
        if b > 0.0:
            t = c / (2.0 * b)
    else:
        discriminant = b * b - a * c
        if discriminant >= 0.0:
            root = ti.sqrt(discriminant)
            t = ti.max((b + root) / a, (b - root) / a)
            if t < 0.0:
                t = _OUTSIDE_GRADIENT
    return t


@ti.kernel
def _fill_solid_kernel(
    pixels: ti.types.ndarray(dtype=ti.f32, ndim=3),
    color: vec4,
    mode: ti.i32,
):
    for row, col in ti.ndrange(pixels.shape[0], pixels.shape[1]):
        dst = vec4(pixels[row, col, 0], pixels[row, col, 1], pixels[row, col, 2], pixels[row, col, 3])
        out = _composite(dst, color, mode)
        for k in ti.static(range(4)):
            pixels[row, col, k] = out[k]


@ti.kernel
def _fill_path_kernel(
    pixels: ti.types.ndarray(dtype=ti.f32, ndim=3),
    vertices: ti.types.ndarray(dtype=ti.f32, ndim=2),
    ranges: ti.types.ndarray(dtype=ti.i32, ndim=2),
    num_polygons: ti.i32,
    discs: ti.types.ndarray(dtype=ti.f32, ndim=2),
    num_discs: ti.i32,
    row_begin: ti.i32,
    row_end: ti.i32,
    col_begin: ti.i32,
    col_end: ti.i32,
    color: vec4,
    mode: ti.i32,
):
    for row, col in ti.ndrange((row_begin, row_end), (col_begin, col_end)):
        hits = 0
        for sub in range(4):
            px = col + 0.25 + 0.5 * (sub % 2)
            py = row + 0.25 + 0.5 * (sub // 2)
            inside = 0
            for p in range(num_polygons):
                start = ranges[p, 0]
                count = ranges[p, 1]
                winding = 0
                for k in range(count):
                    x0 = vertices[start + k, 0]
                    y0 = vertices[start + k, 1]
                    x1 = vertices[start + (k + 1) % count, 0]
                    y1 = vertices[start + (k + 1) % count, 1]
                    side = (x1 - x0) * (py - y0) - (px - x0) * (y1 - y0)
                    if y0 <= py:
                        if y1 > py and side > 0.0:
                            winding += 1
                    elif y1 <= py and side < 0.0:
                        winding -= 1
                if winding != 0:
                    inside = 1
            for d in range(num_discs):
                ox = px - discs[d, 0]
                oy = py - discs[d, 1]
                radius = discs[d, 2]
                if ox * ox + oy * oy < radius * radius and ox * discs[d, 3] + oy * discs[d, 4] >= 0.0:
                    inside = 1
            hits += inside
        if hits > 0:
            coverage = hits / 4.0
            dst = vec4(pixels[row, col, 0], pixels[row, col, 1], pixels[row, col, 2], pixels[row, col, 3])
            out = _composite(dst, color * coverage, mode)
            for k in ti.static(range(4)):
                pixels[row, col, k] = out[k]


@ti.kernel
def _radial_gradient_kernel(
    pixels: ti.types.ndarray(dtype=ti.f32, ndim=3),
    focal_x: ti.f32,
    focal_y: ti.f32,
    center_x: ti.f32,
    center_y: ti.f32,
    radius: ti.f32,
    color: vec4,
    mode: ti.i32,
):
    for row, col in ti.ndrange(pixels.shape[0], pixels.shape[1]):
        t = _gradient_t(
            col + 0.5 - focal_x,
            row + 0.5 - focal_y,
            center_x - focal_x,
            center_y - focal_y,
            radius,
        )
        weight = ti.max(0.0, 1.0 - t)
        if weight > 0.0:
            dst = vec4(pixels[row, col, 0], pixels[row, col, 1], pixels[row, col, 2], pixels[row, col, 3])
            out = _composite(dst, color * weight, mode)
            for k in ti.static(range(4)):
                pixels[row, col, k] = out[k]


@ti.kernel
def _draw_kernel(
    dst: ti.types.ndarray(dtype=ti.f32, ndim=3),
    src: ti.types.ndarray(dtype=ti.f32, ndim=3),
    offset_x: ti.i32,
    offset_y: ti.i32,
    row_begin: ti.i32,
    row_end: ti.i32,
    col_begin: ti.i32,
    col_end: ti.i32,
    mode: ti.i32,
):
    # Loop ranges are in source coordinates, already clipped to the target
    for row, col in ti.ndrange((row_begin, row_end), (col_begin, col_end)):
        y = row + offset_y
        x = col + offset_x
        source = vec4(src[row, col, 0], src[row, col, 1], src[row, col, 2], src[row, col, 3])
        target = vec4(dst[y, x, 0], dst[y, x, 1], dst[y, x, 2], dst[y, x, 3])
        out = _composite(target, source, mode)
        for k in ti.static(range(4)):
            dst[y, x, k] = out[k]


# =============================================================================
# Surface
# =============================================================================


class Surface:
    """An RGBA raster that lights, shapes and compositors draw into.

    Attributes:
        width: Width in pixels.
        height: Height in pixels.
    """

    def __init__(self, width: int, height: int) -> None:
        """Allocate a fully transparent surface.

        Args:
            width: Width in pixels (at least 1).
            height: Height in pixels (at least 1).

        Raises:
            ValueError: If either dimension is smaller than 1.
        """
        if width < 1 or height < 1:
            raise ValueError(f"Surface dimensions must be positive, got {width}x{height}")
        self.width = int(width)
        self.height = int(height)
        self._pixels = np.zeros((self.height, self.width, 4), dtype=np.float32)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def pixels(self) -> npt.NDArray[np.float32]:
        """Read-only view of the premultiplied RGBA buffer, shape (H, W, 4)."""
        view = self._pixels.view()
        view.flags.writeable = False
        return view

    def copy(self) -> "Surface":
        clone = Surface(self.width, self.height)
        clone._pixels[...] = self._pixels
        return clone

    def clear(self) -> None:
        """Reset every pixel to transparent black."""
        self._pixels.fill(0.0)

    def fill_rect(self, color: ColorLike, mode: CompositeMode = CompositeMode.SOURCE_OVER) -> None:
        """Fill the whole surface with a solid color."""
        _fill_solid_kernel(self._pixels, vec4(*parse_color(color).premultiplied()), int(mode))

    def fill_path(
        self,
        path: Path,
        color: ColorLike,
        mode: CompositeMode = CompositeMode.SOURCE_OVER,
    ) -> None:
        """Fill a path with a solid color.

        Only the pixels inside the path's extent are visited.
        """
        if path.is_empty():
            return
        min_x, min_y, max_x, max_y = path.extent()
        col_begin = max(0, int(np.floor(min_x)))
        col_end = min(self.width, int(np.ceil(max_x)) + 1)
        row_begin = max(0, int(np.floor(min_y)))
        row_end = min(self.height, int(np.ceil(max_y)) + 1)
        if col_begin >= col_end or row_begin >= row_end:
            return

        vertices, ranges, discs = path._pack()
        _fill_path_kernel(
            self._pixels,
            vertices,
            ranges,
            len(path.polygons),
            discs,
            len(path.discs),
            row_begin,
            row_end,
            col_begin,
            col_end,
            vec4(*parse_color(color).premultiplied()),
            int(mode),
        )

    def fill_radial_gradient(
        self,
        focal: Vector,
        center: Vector,
        radius: float,
        color: ColorLike,
        mode: CompositeMode = CompositeMode.SOURCE_OVER,
    ) -> None:
        """Fill the surface with a gradient from color to transparent.

        The gradient starts as a zero-radius circle at ``focal`` and ends at
        the circle of ``radius`` around ``center``. Beyond the outer circle
        the last stop (transparent) is used. Stops are interpolated in
        premultiplied space.
        """
        _radial_gradient_kernel(
            self._pixels,
            focal.x,
            focal.y,
            center.x,
            center.y,
            radius,
            vec4(*parse_color(color).premultiplied()),
            int(mode),
        )

    def draw(
        self,
        source: "Surface",
        x: int = 0,
        y: int = 0,
        mode: CompositeMode = CompositeMode.SOURCE_OVER,
    ) -> None:
        """Blit another surface with its top-left corner at (x, y).

        Parts of the source falling outside this surface are clipped.
        """
        col_begin = max(0, -x)
        col_end = min(source.width, self.width - x)
        row_begin = max(0, -y)
        row_end = min(source.height, self.height - y)
        if col_begin >= col_end or row_begin >= row_end:
            return
        _draw_kernel(
            self._pixels,
            source._pixels,
            int(x),
            int(y),
            row_begin,
            row_end,
            col_begin,
            col_end,
            int(mode),
        )

    def alpha(self) -> npt.NDArray[np.float32]:
        """Return a copy of the alpha channel, shape (H, W)."""
        return self._pixels[:, :, 3].copy()

    def is_blank(self) -> bool:
        """Check whether every pixel is fully transparent."""
        return not np.any(self._pixels)

    def __repr__(self) -> str:
        return f"Surface({self.width}x{self.height})"
