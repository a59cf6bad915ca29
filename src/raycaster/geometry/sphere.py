"""Sphere primitive with closed-form ray-sphere intersection.

The intersection is found by solving

    |origin + t * direction - center|^2 = radius^2

which expands to the quadratic ``a*t^2 + b*t + c = 0`` with

    a = dot(direction, direction)
    b = 2 * dot(oc, direction)
    c = dot(oc, oc) - radius^2
    oc = origin - center

Only the smaller root is reported. There is no t_min/t_max window, so a
sphere behind the ray origin still produces a (negative) hit parameter, and a
ray starting inside the sphere reports the entry root behind it.

Example:
    >>> from src.raycaster.core.ray import Ray
    >>> from src.raycaster.core.vec3 import Point
    >>> from src.raycaster.geometry.sphere import hit_sphere
    >>> ray = Ray(Point(0.0, 0.0, 0.0), Point(0.0, 0.0, -1.0))
    >>> hit_sphere(Point(0.0, 0.0, -1.0), 0.5, ray)
    0.5
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from src.raycaster.core.ray import Ray
from src.raycaster.core.vec3 import Point, dot


def hit_sphere(center: Point, radius: float, ray: Ray) -> float | None:
    """Test a ray against a sphere.

    Args:
        center: Center of the sphere.
        radius: Radius of the sphere.
        ray: The ray to test. Its direction need not be normalized.

    Returns:
        The smaller root ``(-b - sqrt(discriminant)) / (2a)`` when the
        discriminant is non-negative, otherwise None.
    """
    oc = ray.origin - center

    a = dot(ray.direction, ray.direction)
    b = 2.0 * dot(oc, ray.direction)
    c = dot(oc, oc) - radius * radius
    discriminant = b * b - 4.0 * a * c

    if discriminant < 0.0:
        return None
    if a == 0.0:
        # Zero-length direction forces b == 0 and discriminant == 0: 0 / 0
        return math.nan
    return (-b - math.sqrt(discriminant)) / (2.0 * a)


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere.
    """

    center: Point
    radius: float

    def hit(self, ray: Ray) -> float | None:
        """Intersect a ray with this sphere. See ``hit_sphere``."""
        return hit_sphere(self.center, self.radius, ray)


def make_sphere(center: Point, radius: float) -> Sphere:
    """Create a sphere from center and radius."""
    return Sphere(center=center, radius=radius)


# The scene's single sphere: radius 0.5, one unit in front of the camera
DEFAULT_SPHERE = Sphere(center=Point(0.0, 0.0, -1.0), radius=0.5)
