"""Taichi backend for the per-pixel shading function.

Every pixel's color is a pure function of its coordinates, so the whole image
can be produced by one Taichi kernel. The functions here mirror the pure-Python
path (``vec3``, ``ray``, ``sphere``, ``shading``) in double precision, and the
kernel loop is serialized so the backend stays single-threaded and its output
matches the Python renderer pixel for pixel.

Taichi must run with ``default_fp=ti.f64``. ``render_image_taichi`` initializes
it on first use when nothing else has, and refuses a single-precision runtime.

Example:
    >>> from src.raycaster.core.kernels import init_taichi, render_image_taichi
    >>> init_taichi()
    >>> image = render_image_taichi(200, 100, "normals")
    >>> image.shape
    (100, 200, 3)
"""

import numpy as np
import numpy.typing as npt
import taichi as ti
from taichi.lang import impl

from src.raycaster.camera.viewport import ViewportCamera
from src.raycaster.core.shading import SHADE_MODES, UV_BLUE, ShadeMode
from src.raycaster.geometry.sphere import DEFAULT_SPHERE, Sphere

# Double precision 3-vector, shared by points and colors inside kernels
dvec3 = ti.types.vector(3, ti.f64)

# Integer codes for the shade modes (kernels take scalars, not strings)
MODE_CODES: dict[str, int] = {mode: code for code, mode in enumerate(SHADE_MODES)}

_UV = MODE_CODES["uv"]
_GRADIENT = MODE_CODES["gradient"]
_NORMALS = MODE_CODES["normals"]


def init_taichi(arch: str = "cpu") -> None:
    """Initialize Taichi in double precision.

    Args:
        arch: "cpu" or "gpu". A GPU request falls back to CPU when Taichi
            cannot find a device.
    """
    ti.init(arch=ti.gpu if arch == "gpu" else ti.cpu, default_fp=ti.f64)


def ensure_taichi(arch: str = "cpu") -> None:
    """Make sure Taichi is ready to run the kernels in double precision.

    Initializes Taichi when nothing has called ``ti.init`` yet. An existing
    runtime is reused as long as it was set up with ``default_fp=ti.f64``.

    Args:
        arch: Architecture to use when Taichi has to be initialized here.

    Raises:
        ValueError: If Taichi is already running with another float type.
    """
    runtime = impl.get_runtime()
    if runtime.prog is None:
        init_taichi(arch)
    elif runtime.default_fp != ti.f64:
        raise ValueError(
            f"Taichi was initialized with default_fp={runtime.default_fp}; "
            "the kernel backend needs default_fp=ti.f64"
        )


# =============================================================================
# Vector helpers (Taichi functions)
# =============================================================================


@ti.func
def dot3(a: dvec3, b: dvec3) -> ti.f64:
    """Dot product, summed in component order."""
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


@ti.func
def unit3(v: dvec3) -> dvec3:
    """Scale by 1 / length. Zero-length input gives NaN components."""
    k = 1.0 / ti.sqrt(dot3(v, v))
    return v * k


@ti.func
def point_at_parameter(origin: dvec3, direction: dvec3, t: ti.f64) -> dvec3:
    return origin + direction * t


# =============================================================================
# Intersection and shading (Taichi functions)
# =============================================================================


@ti.func
def hit_sphere(center: dvec3, radius: ti.f64, origin: dvec3, direction: dvec3):
    """Closed-form ray-sphere test.

    Returns:
        A tuple (hit, t): hit is 1 when the discriminant is non-negative, and
        t is then the smaller root.
    """
    oc = origin - center
    a = dot3(direction, direction)
    b = 2.0 * dot3(oc, direction)
    c = dot3(oc, oc) - radius * radius
    discriminant = b * b - 4.0 * a * c

    hit = 0
    t = 0.0
    if not (discriminant < 0.0):
        hit = 1
        t = (-b - ti.sqrt(discriminant)) / (2.0 * a)
    return hit, t


@ti.func
def color_gradient(direction: dvec3) -> dvec3:
    unit_direction = unit3(direction)
    t = 0.5 * (unit_direction[1] + 1.0)
    return dvec3(1.0, 1.0, 1.0) * (1.0 - t) + dvec3(0.5, 0.7, 1.0) * t


@ti.func
def color_map(center: dvec3, radius: ti.f64, origin: dvec3, direction: dvec3) -> dvec3:
    """Normal visualization on a hit, sky gradient otherwise."""
    color = dvec3(0.0, 0.0, 0.0)
    hit, t = hit_sphere(center, radius, origin, direction)
    if hit == 1:
        n = unit3(point_at_parameter(origin, direction, t) - center)
        color = (n + 1.0) * 0.5
    else:
        color = color_gradient(direction)
    return color


# =============================================================================
# Rendering kernel
# =============================================================================


@ti.kernel
def _render_kernel(
    mode: ti.i32,
    camera: ti.types.ndarray(dtype=ti.f64, ndim=2),
    sphere: ti.types.ndarray(dtype=ti.f64, ndim=1),
    out: ti.types.ndarray(dtype=ti.f64, ndim=3),
):
    """Shade every pixel of ``out`` (shape (height, width, 3), top row first).

    Args:
        mode: Shade mode code from MODE_CODES.
        camera: (4, 3) array from ViewportCamera.to_array().
        sphere: (4,) array (center x, y, z, radius).
        out: Output color buffer.
    """
    height = out.shape[0]
    width = out.shape[1]

    lower_left = dvec3(camera[0, 0], camera[0, 1], camera[0, 2])
    horizontal = dvec3(camera[1, 0], camera[1, 1], camera[1, 2])
    vertical = dvec3(camera[2, 0], camera[2, 1], camera[2, 2])
    origin = dvec3(camera[3, 0], camera[3, 1], camera[3, 2])
    center = dvec3(sphere[0], sphere[1], sphere[2])
    radius = sphere[3]

    ti.loop_config(serialize=True)
    for row, i in ti.ndrange(height, width):
        # Output row 0 is the top of the image, i.e. the highest j
        j = height - 1 - row
        u = ti.cast(i, ti.f64) / ti.cast(width, ti.f64)
        v = ti.cast(j, ti.f64) / ti.cast(height, ti.f64)
        direction = lower_left + horizontal * u + vertical * v

        color = dvec3(u, v, UV_BLUE)
        if mode == _GRADIENT:
            color = color_gradient(direction)
        elif mode == _NORMALS:
            color = color_map(center, radius, origin, direction)

        for c in ti.static(range(3)):
            out[row, i, c] = color[c]


def render_image_taichi(
    width: int,
    height: int,
    mode: ShadeMode = "normals",
    camera: ViewportCamera | None = None,
    sphere: Sphere = DEFAULT_SPHERE,
) -> npt.NDArray[np.float64]:
    """Render the whole image with the Taichi kernel.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        mode: Shade mode ("uv", "gradient", or "normals").
        camera: Camera to shoot rays from (defaults to ViewportCamera()).
        sphere: Sphere for the "normals" mode.

    Returns:
        Float64 array of shape (height, width, 3), top row first.

    Raises:
        ValueError: If mode is unknown, dimensions are not positive, or Taichi
            is running in single precision.
    """
    if mode not in MODE_CODES:
        raise ValueError(f"Unknown shade mode: {mode!r} (expected one of {SHADE_MODES})")
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")

    ensure_taichi()

    if camera is None:
        camera = ViewportCamera()

    camera_data = np.ascontiguousarray(camera.to_array(), dtype=np.float64)
    sphere_data = np.array([*sphere.center.to_tuple(), sphere.radius], dtype=np.float64)
    out = np.zeros((height, width, 3), dtype=np.float64)

    _render_kernel(MODE_CODES[mode], camera_data, sphere_data, out)
    return out
