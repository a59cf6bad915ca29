"""Pixel loop for whole-image rendering.

Pixels are visited the way the PPM format stores them: rows from the top of
the image down (j = height - 1 .. 0), columns left to right. Each pixel's color
depends only on its own coordinates, so the loop has no state and re-running
it with the same inputs reproduces the same image exactly.

Two backends produce the same image:

- "python": the reference implementation built on ``Point``/``Color``
- "taichi": the serialized Taichi kernel in ``core.kernels``

Example:
    >>> from src.raycaster.core.renderer import Renderer, RenderSettings
    >>> renderer = Renderer(RenderSettings(width=200, height=100, mode="normals"))
    >>> image = renderer.render()
    >>> image.shape
    (100, 200, 3)
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Literal, get_args

import numpy as np
import numpy.typing as npt

from src.raycaster.camera.viewport import ViewportCamera, pixel_uv
from src.raycaster.core.shading import SHADE_MODES, ShadeMode, shade_pixel
from src.raycaster.core.vec3 import Color
from src.raycaster.geometry.sphere import DEFAULT_SPHERE, Sphere

# Type alias for the rendering backends
Backend = Literal["python", "taichi"]

BACKENDS: tuple[str, ...] = get_args(Backend)

# Callback receives (rows_done, rows_total)
ProgressCallback = Callable[[int, int], None]


def iter_pixels(width: int, height: int) -> Iterator[tuple[int, int]]:
    """Yield (i, j) pixel indices in output order.

    j counts rows from the bottom, so the first pixel yielded is the top-left
    one, (0, height - 1).
    """
    for j in range(height - 1, -1, -1):
        for i in range(width):
            yield i, j


def render_colors(
    width: int,
    height: int,
    mode: ShadeMode = "normals",
    camera: ViewportCamera | None = None,
    sphere: Sphere = DEFAULT_SPHERE,
) -> Iterator[Color]:
    """Yield one color per pixel in output order (top row first).

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        mode: Shade mode ("uv", "gradient", or "normals").
        camera: Camera to shoot rays from (defaults to ViewportCamera()).
        sphere: Sphere for the "normals" mode.

    Raises:
        ValueError: If mode is unknown or dimensions are not positive.
    """
    _validate(width, height, mode)
    if camera is None:
        camera = ViewportCamera()

    for i, j in iter_pixels(width, height):
        u, v = pixel_uv(i, j, width, height)
        ray = camera.get_ray(u, v)
        yield shade_pixel(mode, u, v, ray, sphere)


def render_image(
    width: int,
    height: int,
    mode: ShadeMode = "normals",
    camera: ViewportCamera | None = None,
    sphere: Sphere = DEFAULT_SPHERE,
    callback: ProgressCallback | None = None,
) -> npt.NDArray[np.float64]:
    """Render the image with the pure-Python backend.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        mode: Shade mode ("uv", "gradient", or "normals").
        camera: Camera to shoot rays from (defaults to ViewportCamera()).
        sphere: Sphere for the "normals" mode.
        callback: Optional callback called after each finished row with
            (rows_done, rows_total).

    Returns:
        Float64 array of shape (height, width, 3); row 0 is the top row.

    Raises:
        ValueError: If mode is unknown or dimensions are not positive.
    """
    _validate(width, height, mode)
    image = np.empty((height, width, 3), dtype=np.float64)
    colors = render_colors(width, height, mode, camera, sphere)

    for row in range(height):
        for i in range(width):
            image[row, i] = next(colors).to_numpy()
        if callback is not None:
            callback(row + 1, height)

    return image


def _validate(width: int, height: int, mode: str) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if mode not in SHADE_MODES:
        raise ValueError(f"Unknown shade mode: {mode!r} (expected one of {SHADE_MODES})")


@dataclass
class RenderSettings:
    """Configuration for one render.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        mode: Shade mode ("uv", "gradient", or "normals").
        backend: "python" or "taichi".
        camera: Camera to shoot rays from.
        sphere: Sphere for the "normals" mode.
    """

    width: int = 200
    height: int = 100
    mode: ShadeMode = "normals"
    backend: Backend = "python"
    camera: ViewportCamera = field(default_factory=ViewportCamera)
    sphere: Sphere = DEFAULT_SPHERE


class Renderer:
    """Renders images for a fixed set of settings.

    Attributes:
        settings: The render configuration.
    """

    def __init__(self, settings: RenderSettings | None = None) -> None:
        """Initialize the renderer.

        Args:
            settings: Render configuration (defaults to RenderSettings()).

        Raises:
            ValueError: If dimensions, mode, or backend are invalid.
        """
        self.settings = settings if settings is not None else RenderSettings()
        _validate(self.settings.width, self.settings.height, self.settings.mode)
        if self.settings.backend not in BACKENDS:
            raise ValueError(
                f"Unknown backend: {self.settings.backend!r} (expected one of {BACKENDS})"
            )

    @property
    def width(self) -> int:
        return self.settings.width

    @property
    def height(self) -> int:
        return self.settings.height

    def render(self, callback: ProgressCallback | None = None) -> npt.NDArray[np.float64]:
        """Render the full image.

        Args:
            callback: Optional progress callback. The Python backend reports
                every row; the Taichi backend reports once when done.
                The Taichi backend initializes Taichi itself if needed.

        Returns:
            Float64 array of shape (height, width, 3), top row first.
        """
        s = self.settings
        if s.backend == "taichi":
            # Deferred so the Python backend works without compiling kernels
            from src.raycaster.core.kernels import render_image_taichi

            image = render_image_taichi(s.width, s.height, s.mode, s.camera, s.sphere)
            if callback is not None:
                callback(s.height, s.height)
            return image

        return render_image(s.width, s.height, s.mode, s.camera, s.sphere, callback)

    def colors(self) -> Iterator[Color]:
        """Yield pixel colors in output order using the Python backend."""
        s = self.settings
        return render_colors(s.width, s.height, s.mode, s.camera, s.sphere)

    def __repr__(self) -> str:
        s = self.settings
        return (
            f"Renderer(width={s.width}, height={s.height}, "
            f"mode={s.mode!r}, backend={s.backend!r})"
        )
