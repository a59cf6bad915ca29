"""Matplotlib-based preview display for rendered images.

Example:
    >>> from src.raycaster.core.renderer import render_image
    >>> from src.raycaster.preview.display import show_preview
    >>> show_preview(render_image(200, 100, "normals"))
"""

from __future__ import annotations

from typing import Any

import numpy as np
import numpy.typing as npt


def prepare_for_display(image: npt.NDArray[np.floating]) -> npt.NDArray[np.float64]:
    """Clamp an image to [0, 1] for display. NaN pixels are shown black."""
    return np.clip(np.nan_to_num(np.asarray(image, dtype=np.float64), nan=0.0), 0.0, 1.0)


def show_preview(
    image: npt.NDArray[np.floating],
    *,
    title: str | None = None,
    figsize: tuple[float, float] = (8, 4),
    block: bool = True,
) -> Any:
    """Display a rendered image in a Matplotlib figure.

    Args:
        image: Float array of shape (H, W, 3), top row first.
        title: Custom title (default shows the image size).
        figsize: Figure size in inches (width, height).
        block: Whether to block execution until the figure is closed.

    Returns:
        The Matplotlib figure.
    """
    import matplotlib.pyplot as plt

    fig, ax = plt.subplots(1, 1, figsize=figsize)
    ax.imshow(prepare_for_display(image))
    ax.axis("off")

    if title is None:
        title = f"Render Preview - {image.shape[1]}x{image.shape[0]}"
    ax.set_title(title)

    plt.tight_layout()
    plt.show(block=block)
    return fig
