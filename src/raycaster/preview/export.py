"""Image export utilities for rendered images.

Supported formats:
    - PPM, plain-text "P3" variant (exact, unclamped quantization)
    - PNG (8-bit via Pillow, clamped)

The PPM writer reproduces the classic output byte for byte: each channel is
multiplied by 255.9 and truncated toward zero. Nothing is clamped, so colors
outside [0, 1] produce integers outside [0, 255].

Example:
    >>> from src.raycaster.core.renderer import render_image
    >>> from src.raycaster.preview.export import write_ppm
    >>> image = render_image(200, 100, "gradient")
    >>> write_ppm(image, "gradient.ppm")
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TextIO

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

from src.raycaster.core.vec3 import Color, truncate_components

# Scale applied before truncation; just under 256 so 1.0 maps to 255
QUANTIZE_SCALE = 255.9

PPM_MAGIC = "P3"
PPM_MAX_VALUE = 255


def quantize(image: npt.NDArray[np.floating]) -> npt.NDArray[np.int64]:
    """Convert linear colors to integer channel values without clamping.

    Args:
        image: Float array of any shape (typically (H, W, 3)).

    Returns:
        int64 array of trunc(image * 255.9). NaN becomes 0.
    """
    with np.errstate(invalid="ignore", over="ignore"):
        scaled = np.asarray(image, dtype=np.float64) * QUANTIZE_SCALE
    return truncate_components(scaled)


def _ppm_header(width: int, height: int) -> str:
    return f"{PPM_MAGIC}\n{width} {height}\n{PPM_MAX_VALUE}\n"


def format_ppm(image: npt.NDArray[np.floating]) -> str:
    """Serialize an image as P3 text.

    Args:
        image: Float array of shape (height, width, 3), top row first.

    Returns:
        The header followed by one "r g b" line per pixel in row-major order.

    Raises:
        ValueError: If the image is not (H, W, 3).
    """
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError(f"Expected image of shape (H, W, 3), got {image.shape}")

    height, width = image.shape[0], image.shape[1]
    pixels = quantize(image).reshape(-1, 3)
    lines = [f"{r} {g} {b}" for r, g, b in pixels.tolist()]
    return _ppm_header(width, height) + "".join(line + "\n" for line in lines)


def write_ppm(image: npt.NDArray[np.floating], filepath: str | Path) -> None:
    """Save an image as a P3 text file."""
    Path(filepath).write_text(format_ppm(image), encoding="ascii")


def write_ppm_stream(
    colors: Iterable[Color],
    width: int,
    height: int,
    stream: TextIO,
) -> int:
    """Write pixel colors to a text stream as they are produced.

    Args:
        colors: Colors in output order (top row first), e.g. from
            ``render_colors``.
        width: Image width in pixels.
        height: Image height in pixels.
        stream: Destination, such as ``sys.stdout`` or an open file.

    Returns:
        The number of pixels written.

    Raises:
        ValueError: If the number of colors does not match width * height.
            The check runs after the last pixel, so by then the header and
            every color received have already been written to the stream.
    """
    stream.write(_ppm_header(width, height))
    count = 0
    for color in colors:
        stream.write((color * QUANTIZE_SCALE).to_ppm_tuple_int())
        stream.write("\n")
        count += 1
    if count != width * height:
        raise ValueError(f"Expected {width * height} pixels, got {count}")
    return count


def read_ppm(filepath: str | Path) -> npt.NDArray[np.int64]:
    """Read a P3 text file.

    Comments (from "#" to the end of a line) are ignored, as P3 allows.

    Args:
        filepath: Path to the file.

    Returns:
        int64 array of shape (height, width, 3).

    Raises:
        ValueError: If the file is not a well-formed P3 image with a maximum
            value of 255.
    """
    text = Path(filepath).read_text(encoding="ascii")
    tokens = [tok for line in text.splitlines() for tok in line.split("#", 1)[0].split()]
    if len(tokens) < 4 or tokens[0] != PPM_MAGIC:
        raise ValueError(f"Not a P3 image: {filepath}")

    if tokens[3] != str(PPM_MAX_VALUE):
        raise ValueError(f"Unsupported max value {tokens[3]}, expected {PPM_MAX_VALUE}")

    width, height = int(tokens[1]), int(tokens[2])
    values = tokens[4:]
    if len(values) != width * height * 3:
        raise ValueError(
            f"Expected {width * height * 3} channel values, got {len(values)}"
        )
    return np.array([int(v) for v in values], dtype=np.int64).reshape(height, width, 3)


def image_to_uint8(image: npt.NDArray[np.floating]) -> npt.NDArray[np.uint8]:
    """Quantize an image for 8-bit export, clamping to [0, 255].

    Args:
        image: Float array of shape (H, W, 3).

    Returns:
        uint8 array of shape (H, W, 3).
    """
    return np.clip(quantize(image), 0, PPM_MAX_VALUE).astype(np.uint8)


def save_png(image: npt.NDArray[np.floating], filepath: str | Path) -> None:
    """Save an image as an 8-bit PNG file.

    Uses the same 255.9 quantization as the PPM writer, but clamps each
    channel to [0, 255] since PNG cannot store anything else.

    Args:
        image: Float array of shape (H, W, 3), top row first.
        filepath: Output file path (should end in .png).
    """
    pil_image = PILImage.fromarray(image_to_uint8(image))
    pil_image.save(filepath)
