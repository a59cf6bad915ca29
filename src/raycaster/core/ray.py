"""Ray data structure.

A ray is a half-line ``origin + t * direction``. Rays are built once per pixel,
never modified, and discarded after shading.

Example:
    >>> from src.raycaster.core.ray import Ray
    >>> from src.raycaster.core.vec3 import Point
    >>> ray = Ray(origin=Point(0.0, 0.0, 0.0), direction=Point(0.0, 0.0, -1.0))
    >>> ray.point_at_parameter(5.0)
    Point(0.0, 0.0, -5.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.raycaster.core.vec3 import Point


@dataclass(frozen=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Not required to be unit length;
            callers normalize it where that matters.
    """

    origin: Point
    direction: Point

    def __post_init__(self) -> None:
        # The ray owns its endpoints: later mutation of the caller's points
        # must not move the ray.
        if not isinstance(self.origin, Point) or not isinstance(self.direction, Point):
            raise TypeError("Ray origin and direction must both be Point values")
        object.__setattr__(self, "origin", self.origin.copy())
        object.__setattr__(self, "direction", self.direction.copy())

    def point_at_parameter(self, t: float) -> Point:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. No bounds check; negative values lie
                behind the origin.

        Returns:
            The point origin + direction * t.
        """
        return self.origin + self.direction * t


def make_ray(origin: Point, direction: Point) -> Ray:
    """Create a ray from origin and direction."""
    return Ray(origin=origin, direction=direction)
