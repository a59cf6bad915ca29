"""Unit tests for the ray module.

Tests cover:
- Ray construction and ownership of its endpoints
- point_at_parameter at zero, positive, and negative t
"""

import dataclasses

import pytest


class TestRayBasics:
    """Tests for Ray dataclass and basic operations."""

    def test_point_at_zero_is_origin(self):
        """Test point_at_parameter returns origin when t=0."""
        from src.raycaster.core.ray import Ray
        from src.raycaster.core.vec3 import Point

        ray = Ray(origin=Point(1.0, 2.0, 3.0), direction=Point(0.0, 0.0, -1.0))
        assert ray.point_at_parameter(0.0) == ray.origin

    def test_point_at_one_is_origin_plus_direction(self):
        """Test point_at_parameter(1) == origin + direction."""
        from src.raycaster.core.ray import Ray
        from src.raycaster.core.vec3 import Point

        ray = Ray(origin=Point(1.0, -2.0, 0.5), direction=Point(0.25, 4.0, -3.0))
        assert ray.point_at_parameter(1.0) == ray.origin + ray.direction

    def test_point_at_positive_t(self):
        """Test point_at_parameter computes the correct point along the ray."""
        from src.raycaster.core.ray import Ray
        from src.raycaster.core.vec3 import Point

        ray = Ray(origin=Point(0.0, 0.0, 0.0), direction=Point(1.0, 0.0, 0.0))
        assert ray.point_at_parameter(5.0).to_tuple() == (5.0, 0.0, 0.0)

    def test_point_at_negative_t(self):
        """Test point_at_parameter accepts negative t (behind origin)."""
        from src.raycaster.core.ray import Ray
        from src.raycaster.core.vec3 import Point

        ray = Ray(origin=Point(0.0, 0.0, 0.0), direction=Point(0.0, 1.0, 0.0))
        assert ray.point_at_parameter(-3.0).to_tuple() == (0.0, -3.0, 0.0)

    def test_direction_not_normalized(self):
        """Test the direction is stored as given."""
        from src.raycaster.core.ray import Ray
        from src.raycaster.core.vec3 import Point

        ray = Ray(origin=Point(0.0, 0.0, 0.0), direction=Point(0.0, 0.0, -2.0))
        assert ray.direction.length() == 2.0
        assert ray.point_at_parameter(0.5).to_tuple() == (0.0, 0.0, -1.0)

    def test_make_ray(self):
        """Test make_ray convenience function."""
        from src.raycaster.core.ray import make_ray
        from src.raycaster.core.vec3 import Point

        ray = make_ray(Point(1.0, 1.0, 1.0), Point(0.0, 0.0, 1.0))
        assert ray.point_at_parameter(2.0).to_tuple() == (1.0, 1.0, 3.0)


class TestRayOwnership:
    """Tests that a ray is immutable and owns its endpoints."""

    def test_ray_is_frozen(self):
        """Test fields cannot be reassigned."""
        from src.raycaster.core.ray import Ray
        from src.raycaster.core.vec3 import Point

        ray = Ray(origin=Point(0.0, 0.0, 0.0), direction=Point(0.0, 0.0, -1.0))
        with pytest.raises(dataclasses.FrozenInstanceError):
            ray.origin = Point(1.0, 1.0, 1.0)

    def test_ray_copies_endpoints(self):
        """Test later mutation of the caller's points does not move the ray."""
        from src.raycaster.core.ray import Ray
        from src.raycaster.core.vec3 import Point

        origin = Point(0.0, 0.0, 0.0)
        direction = Point(0.0, 0.0, -1.0)
        ray = Ray(origin=origin, direction=direction)

        origin.x = 10.0
        direction += 5.0
        assert ray.origin.to_tuple() == (0.0, 0.0, 0.0)
        assert ray.direction.to_tuple() == (0.0, 0.0, -1.0)

    def test_ray_rejects_colors(self):
        """Test a ray is built from points only."""
        from src.raycaster.core.ray import Ray
        from src.raycaster.core.vec3 import Color, Point

        with pytest.raises(TypeError):
            Ray(origin=Color(0.0, 0.0, 0.0), direction=Point(0.0, 0.0, -1.0))
