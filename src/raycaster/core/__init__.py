"""Core rendering module.

Components:
    vec3: Point and Color values sharing one vector algebra
    ray: Ray data structure
    shading: Ray-to-color mapping (uv pattern, sky gradient, normal map)
    renderer: Pixel loop producing whole images
    kernels: Taichi backend for the same per-pixel function

The shading function is a pure function of pixel coordinates, so images are
deterministic and the pixel loop carries no state between pixels.
"""

from .ray import Ray, make_ray
from .vec3 import Color, Point, Vec3, cross, dot, unit_vector

# Note: shading, renderer and kernels are NOT imported here to avoid circular
# imports (they depend on geometry and camera, which depend on core.ray).
# Import them directly:
#   from src.raycaster.core.shading import color_map
#   from src.raycaster.core.renderer import Renderer
#   from src.raycaster.core.kernels import render_image_taichi

__all__ = [
    "Vec3",
    "Point",
    "Color",
    "dot",
    "cross",
    "unit_vector",
    "Ray",
    "make_ray",
]
