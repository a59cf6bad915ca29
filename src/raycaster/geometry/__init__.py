"""Geometry module for shape primitives.

Components:
    sphere: Sphere primitive with closed-form ray-sphere intersection

Intersection returns the nearest root parameter t, or None for a miss:
    t = hit_sphere(center, radius, ray)
"""

from .sphere import DEFAULT_SPHERE, Sphere, hit_sphere, make_sphere

__all__ = [
    "Sphere",
    "DEFAULT_SPHERE",
    "hit_sphere",
    "make_sphere",
]
