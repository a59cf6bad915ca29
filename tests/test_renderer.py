"""Tests for the pixel loop and Renderer wrapper.

Tests cover:
- Pixel visiting order
- Image layout (row 0 is the top)
- Progress callbacks
- Settings validation
- Determinism
"""

import numpy as np
import pytest


class TestIterPixels:
    """Tests for pixel ordering."""

    def test_order_top_row_first(self):
        """Test rows run top to bottom, columns left to right."""
        from src.raycaster.core.renderer import iter_pixels

        assert list(iter_pixels(3, 2)) == [(0, 1), (1, 1), (2, 1), (0, 0), (1, 0), (2, 0)]

    def test_count(self):
        """Test every pixel is visited once."""
        from src.raycaster.core.renderer import iter_pixels

        pixels = list(iter_pixels(7, 5))
        assert len(pixels) == 35
        assert len(set(pixels)) == 35


class TestRenderColors:
    """Tests for the color generator."""

    def test_first_color_is_top_left(self, small_size):
        """Test the first color belongs to pixel (0, height - 1)."""
        from src.raycaster.camera.viewport import ViewportCamera, pixel_uv
        from src.raycaster.core.renderer import render_colors
        from src.raycaster.core.shading import color_map

        width, height = small_size
        first = next(render_colors(width, height, "normals"))
        u, v = pixel_uv(0, height - 1, width, height)
        assert first == color_map(ViewportCamera().get_ray(u, v))

    def test_invalid_dimensions(self):
        """Test non-positive dimensions are rejected."""
        from src.raycaster.core.renderer import render_colors

        with pytest.raises(ValueError, match="positive"):
            list(render_colors(0, 10))

    def test_invalid_mode(self):
        """Test unknown modes are rejected."""
        from src.raycaster.core.renderer import render_colors

        with pytest.raises(ValueError, match="Unknown shade mode"):
            list(render_colors(4, 4, "phong"))


class TestRenderImage:
    """Tests for whole-image rendering with the Python backend."""

    def test_shape_and_dtype(self, small_size):
        """Test image shape is (height, width, 3)."""
        from src.raycaster.core.renderer import render_image

        width, height = small_size
        image = render_image(width, height, "gradient")
        assert image.shape == (height, width, 3)
        assert image.dtype == np.float64

    def test_uv_layout(self):
        """Test the uv pattern puts v = 0 on the last row."""
        from src.raycaster.core.renderer import render_image

        image = render_image(4, 2, "uv")
        np.testing.assert_allclose(image[0, 0], [0.0, 0.5, 0.2])
        np.testing.assert_allclose(image[1, 0], [0.0, 0.0, 0.2])
        np.testing.assert_allclose(image[1, 3], [0.75, 0.0, 0.2])

    def test_center_pixel_hits_sphere(self):
        """Test the pixel at (u, v) = (0.5, 0.5) sees the sphere head-on."""
        from src.raycaster.core.renderer import render_image

        image = render_image(20, 10, "normals")
        # j = 5 is output row 10 - 1 - 5 = 4; i = 10
        np.testing.assert_allclose(image[4, 10], [0.5, 0.5, 1.0], atol=1e-12)

    def test_corners_are_sky(self):
        """Test the image corners miss the sphere."""
        from src.raycaster.camera.viewport import ViewportCamera
        from src.raycaster.core.renderer import render_image
        from src.raycaster.core.shading import color_gradient

        image = render_image(20, 10, "normals")
        expected = color_gradient(ViewportCamera().get_ray(0.0, 0.0)).to_numpy()
        np.testing.assert_array_equal(image[-1, 0], expected)

    def test_gradient_brighter_blue_at_top(self, small_size):
        """Test the sky gets bluer (less red) toward the top."""
        from src.raycaster.core.renderer import render_image

        width, height = small_size
        image = render_image(width, height, "gradient")
        assert image[0, width // 2, 0] < image[-1, width // 2, 0]

    def test_callback_reports_rows(self):
        """Test the progress callback is called once per row."""
        from src.raycaster.core.renderer import render_image

        calls = []
        render_image(5, 3, "uv", callback=lambda done, total: calls.append((done, total)))
        assert calls == [(1, 3), (2, 3), (3, 3)]

    def test_deterministic(self, small_size):
        """Test repeated renders are identical."""
        from src.raycaster.core.renderer import render_image

        width, height = small_size
        a = render_image(width, height, "normals")
        b = render_image(width, height, "normals")
        np.testing.assert_array_equal(a, b)


class TestRenderer:
    """Tests for the Renderer class."""

    def test_default_settings(self):
        """Test defaults match the classic 200x100 normal-map render."""
        from src.raycaster.core.renderer import Renderer

        renderer = Renderer()
        assert renderer.width == 200
        assert renderer.height == 100
        assert renderer.settings.mode == "normals"
        assert renderer.settings.backend == "python"

    def test_render_python_backend(self, small_size):
        """Test Renderer.render matches render_image."""
        from src.raycaster.core.renderer import Renderer, RenderSettings, render_image

        width, height = small_size
        renderer = Renderer(RenderSettings(width=width, height=height, mode="gradient"))
        np.testing.assert_array_equal(renderer.render(), render_image(width, height, "gradient"))

    def test_colors_matches_render(self):
        """Test the color iterator and the image agree."""
        from src.raycaster.core.renderer import Renderer, RenderSettings

        renderer = Renderer(RenderSettings(width=6, height=4))
        image = renderer.render()
        colors = np.array([c.to_tuple() for c in renderer.colors()])
        np.testing.assert_array_equal(colors.reshape(4, 6, 3), image)

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"width": 0}, "positive"),
            ({"height": -1}, "positive"),
            ({"mode": "phong"}, "Unknown shade mode"),
            ({"backend": "cuda"}, "Unknown backend"),
        ],
    )
    def test_invalid_settings(self, kwargs, message):
        """Test invalid settings are rejected at construction."""
        from src.raycaster.core.renderer import Renderer, RenderSettings

        with pytest.raises(ValueError, match=message):
            Renderer(RenderSettings(**kwargs))

    def test_repr(self):
        """Test repr shows the settings."""
        from src.raycaster.core.renderer import Renderer, RenderSettings

        renderer = Renderer(RenderSettings(width=8, height=4, mode="uv"))
        assert repr(renderer) == "Renderer(width=8, height=4, mode='uv', backend='python')"
