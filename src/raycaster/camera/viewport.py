"""Fixed viewport camera for primary ray generation.

The camera is described directly by its image plane rather than by look-at
parameters: a lower-left corner plus horizontal and vertical spans. A pixel's
normalized coordinates (u, v) select the point

    lower_left_corner + horizontal * u + vertical * v

and the primary ray runs from the camera origin with that point as its
direction. The origin is not subtracted, so the image-plane vectors are
relative to the camera, and the direction is not normalized.

Coordinates are normalized so that:
    - u = 0: left edge, u -> 1: right edge
    - v = 0: bottom edge, v -> 1: top edge

Example:
    >>> from src.raycaster.camera.viewport import ViewportCamera
    >>> camera = ViewportCamera()
    >>> ray = camera.get_ray(0.5, 0.5)
    >>> ray.direction
    Point(0.0, 0.0, -1.0)
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np
import numpy.typing as npt

from src.raycaster.core.ray import Ray
from src.raycaster.core.vec3 import Point


@dataclass
class ViewportCamera:
    """Image-plane description of a pinhole camera.

    Attributes:
        lower_left_corner: Lower-left corner of the image plane.
        horizontal: Full width of the image plane.
        vertical: Full height of the image plane.
        origin: Camera position.
    """

    lower_left_corner: Point = field(default_factory=lambda: Point(-2.0, -1.0, -1.0))
    horizontal: Point = field(default_factory=lambda: Point(4.0, 0.0, 0.0))
    vertical: Point = field(default_factory=lambda: Point(0.0, 2.0, 0.0))
    origin: Point = field(default_factory=lambda: Point(0.0, 0.0, 0.0))

    def get_ray(self, u: float, v: float) -> Ray:
        """Generate the primary ray through normalized image coordinates.

        Args:
            u: Horizontal coordinate (0 = left edge).
            v: Vertical coordinate (0 = bottom edge).

        Returns:
            A ray from the camera origin whose direction is the image-plane
            point at (u, v).
        """
        direction = self.lower_left_corner + self.horizontal * u + self.vertical * v
        return Ray(origin=self.origin, direction=direction)

    def to_array(self) -> npt.NDArray[np.float64]:
        """Pack the camera as a (4, 3) float64 array for kernel upload.

        Rows are lower_left_corner, horizontal, vertical, origin.
        """
        return np.stack(
            [
                self.lower_left_corner.to_numpy(),
                self.horizontal.to_numpy(),
                self.vertical.to_numpy(),
                self.origin.to_numpy(),
            ]
        )


def pixel_uv(i: int, j: int, width: int, height: int) -> tuple[float, float]:
    """Convert pixel indices to normalized image coordinates.

    Args:
        i: Column index (0 = left).
        j: Row index counted from the bottom (0 = bottom row).
        width: Image width in pixels.
        height: Image height in pixels.

    Returns:
        Tuple (u, v) = (i / width, j / height). The far edges are never
        reached: the last column has u = (width - 1) / width.
    """
    return i / width, j / height


def get_camera_info(camera: ViewportCamera) -> dict[str, tuple[float, float, float]]:
    """Get the camera vectors as plain tuples for debugging or display."""
    return {
        "lower_left": camera.lower_left_corner.to_tuple(),
        "horizontal": camera.horizontal.to_tuple(),
        "vertical": camera.vertical.to_tuple(),
        "origin": camera.origin.to_tuple(),
    }
