"""Unit tests for the viewport camera.

Tests cover:
- Default image-plane geometry
- Ray generation at corners and center
- Pixel index to (u, v) conversion
- Kernel upload packing
"""

import numpy as np
import pytest


class TestViewportCamera:
    """Tests for ViewportCamera ray generation."""

    def test_default_geometry(self):
        """Test default camera vectors."""
        from src.raycaster.camera.viewport import ViewportCamera, get_camera_info

        info = get_camera_info(ViewportCamera())
        assert info["lower_left"] == (-2.0, -1.0, -1.0)
        assert info["horizontal"] == (4.0, 0.0, 0.0)
        assert info["vertical"] == (0.0, 2.0, 0.0)
        assert info["origin"] == (0.0, 0.0, 0.0)

    def test_center_ray_looks_down_negative_z(self):
        """Test (0.5, 0.5) maps to direction (0, 0, -1)."""
        from src.raycaster.camera.viewport import ViewportCamera
        from src.raycaster.core.vec3 import Point

        ray = ViewportCamera().get_ray(0.5, 0.5)
        assert ray.direction == Point(0.0, 0.0, -1.0)
        assert ray.origin == Point(0.0, 0.0, 0.0)

    def test_corner_rays(self):
        """Test the corners of the image plane."""
        from src.raycaster.camera.viewport import ViewportCamera

        camera = ViewportCamera()
        assert camera.get_ray(0.0, 0.0).direction.to_tuple() == (-2.0, -1.0, -1.0)
        assert camera.get_ray(1.0, 0.0).direction.to_tuple() == (2.0, -1.0, -1.0)
        assert camera.get_ray(0.0, 1.0).direction.to_tuple() == (-2.0, 1.0, -1.0)
        assert camera.get_ray(1.0, 1.0).direction.to_tuple() == (2.0, 1.0, -1.0)

    def test_direction_not_offset_by_origin(self):
        """Test moving the origin does not change ray directions."""
        from src.raycaster.camera.viewport import ViewportCamera
        from src.raycaster.core.vec3 import Point

        camera = ViewportCamera(origin=Point(0.0, 0.0, 5.0))
        ray = camera.get_ray(0.5, 0.5)
        assert ray.origin.to_tuple() == (0.0, 0.0, 5.0)
        assert ray.direction.to_tuple() == (0.0, 0.0, -1.0)

    def test_cameras_do_not_share_defaults(self):
        """Test each camera gets its own default vectors."""
        from src.raycaster.camera.viewport import ViewportCamera

        a = ViewportCamera()
        b = ViewportCamera()
        a.horizontal *= 2.0
        assert b.horizontal.to_tuple() == (4.0, 0.0, 0.0)

    def test_to_array(self):
        """Test packing for the kernel backend."""
        from src.raycaster.camera.viewport import ViewportCamera

        arr = ViewportCamera().to_array()
        assert arr.shape == (4, 3)
        assert arr.dtype == np.float64
        np.testing.assert_array_equal(arr[0], [-2.0, -1.0, -1.0])
        np.testing.assert_array_equal(arr[3], [0.0, 0.0, 0.0])


class TestPixelUV:
    """Tests for pixel coordinate normalization."""

    def test_bottom_left(self):
        """Test pixel (0, 0) maps to (0, 0)."""
        from src.raycaster.camera.viewport import pixel_uv

        assert pixel_uv(0, 0, 200, 100) == (0.0, 0.0)

    def test_top_left(self):
        """Test the first pixel written (top-left) has v just under 1."""
        from src.raycaster.camera.viewport import pixel_uv

        assert pixel_uv(0, 99, 200, 100) == pytest.approx((0.0, 0.99))

    def test_far_edge_not_reached(self):
        """Test the last column stops short of u = 1."""
        from src.raycaster.camera.viewport import pixel_uv

        u, _ = pixel_uv(199, 0, 200, 100)
        assert u == pytest.approx(0.995)
