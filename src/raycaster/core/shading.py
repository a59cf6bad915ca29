"""Ray-to-color mapping.

Three closed-form shaders, none of which can fail:

- ``color_uv``: a test pattern that depends only on image coordinates
- ``color_gradient``: a vertical sky gradient from white to light blue
- ``color_map``: the sky gradient, except where the ray hits the sphere, in
  which case the unit surface normal is remapped from [-1, 1] to [0, 1]

Malformed input (a zero-length ray direction) yields NaN components in the
returned color rather than an exception.
"""

from __future__ import annotations

from typing import Literal, get_args

from src.raycaster.core.ray import Ray
from src.raycaster.core.vec3 import Color
from src.raycaster.geometry.sphere import DEFAULT_SPHERE, Sphere

# Type alias for the available shaders
ShadeMode = Literal["uv", "gradient", "normals"]

SHADE_MODES: tuple[str, ...] = get_args(ShadeMode)

WHITE = Color(1.0, 1.0, 1.0)
SKY_BLUE = Color(0.5, 0.7, 1.0)

# Constant blue channel of the uv test pattern
UV_BLUE = 0.2


def color_uv(u: float, v: float) -> Color:
    """Test pattern: red follows u, green follows v, blue is constant."""
    return Color(u, v, UV_BLUE)


def color_gradient(ray: Ray) -> Color:
    """Background color for a ray that hits nothing.

    Blends white (looking down) into sky blue (looking up) based on the y
    component of the normalized ray direction.

    Args:
        ray: The ray to shade.

    Returns:
        (1 - t) * white + t * sky_blue with t = 0.5 * (unit_direction.y + 1).
    """
    unit_direction = ray.direction.normalized()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t


def color_map(ray: Ray, sphere: Sphere = DEFAULT_SPHERE) -> Color:
    """Shade a ray against the scene's sphere.

    On a hit, the surface normal at the nearest root is visualized as
    ``(n + 1) * 0.5``. No lighting or shadowing is applied. On a miss the
    sky gradient is returned.

    Args:
        ray: The ray to shade.
        sphere: The sphere to test against.

    Returns:
        The color seen along the ray.
    """
    t = sphere.hit(ray)
    if t is None:
        return color_gradient(ray)

    n = (ray.point_at_parameter(t) - sphere.center).normalized()
    return (Color.from_point(n) + 1.0) * 0.5


def shade_pixel(
    mode: ShadeMode,
    u: float,
    v: float,
    ray: Ray,
    sphere: Sphere = DEFAULT_SPHERE,
) -> Color:
    """Dispatch to the shader selected by ``mode``.

    Args:
        mode: One of "uv", "gradient", or "normals".
        u: Horizontal image coordinate in [0, 1).
        v: Vertical image coordinate in [0, 1).
        ray: The primary ray through (u, v).
        sphere: The sphere used by the "normals" shader.

    Raises:
        ValueError: If mode is not a known shader.
    """
    if mode == "uv":
        return color_uv(u, v)
    if mode == "gradient":
        return color_gradient(ray)
    if mode == "normals":
        return color_map(ray, sphere)
    raise ValueError(f"Unknown shade mode: {mode!r} (expected one of {SHADE_MODES})")
