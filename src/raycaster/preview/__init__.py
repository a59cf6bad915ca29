"""Preview module for output and visualization.

Components:
    export: PPM (P3) text and PNG image export
    display: Matplotlib-based preview window

Example:
    >>> from src.raycaster.core.renderer import render_image
    >>> from src.raycaster.preview import save_png, write_ppm
    >>>
    >>> image = render_image(200, 100, "normals")
    >>> write_ppm(image, "sphere.ppm")
    >>> save_png(image, "sphere.png")
"""

from src.raycaster.preview.display import prepare_for_display, show_preview
from src.raycaster.preview.export import (
    format_ppm,
    image_to_uint8,
    quantize,
    read_ppm,
    save_png,
    write_ppm,
    write_ppm_stream,
)

__all__ = [
    # Display functions
    "show_preview",
    "prepare_for_display",
    # Export functions
    "quantize",
    "format_ppm",
    "write_ppm",
    "write_ppm_stream",
    "read_ppm",
    "image_to_uint8",
    "save_png",
]
