"""Camera module for primary ray generation.

Components:
    viewport: Fixed image-plane camera mapping (u, v) to rays
"""

from .viewport import ViewportCamera, get_camera_info, pixel_uv

__all__ = [
    "ViewportCamera",
    "get_camera_info",
    "pixel_uv",
]
