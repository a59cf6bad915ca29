#!/usr/bin/env python3
"""Render the single-sphere scene.

Casts one ray per pixel from the fixed camera and writes the result as a
plain-text PPM (P3) image, optionally also as PNG and in a preview window.

Usage:
    python -m examples.render_sphere [options]

Options:
    --width WIDTH       Image width in pixels (default: 200)
    --height HEIGHT     Image height in pixels (default: 100)
    --mode MODE         Shader: uv, gradient, or normals (default: normals)
    --backend BACKEND   python or taichi (default: python)
    --arch ARCH         Taichi architecture: cpu or gpu (default: cpu)
    --output OUTPUT     Output PPM path, "-" for stdout (default: sphere.ppm)
    --png PNG           Also save an 8-bit PNG to this path
    --show              Open a Matplotlib preview window
    --quiet             Suppress progress output

Example:
    python -m examples.render_sphere --mode gradient --output - > sky.ppm
"""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    from src.raycaster.core.renderer import BACKENDS
    from src.raycaster.core.shading import SHADE_MODES

    parser = argparse.ArgumentParser(
        description="Render the single-sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=200,
        help="Image width in pixels (default: 200)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=100,
        help="Image height in pixels (default: 100)",
    )
    parser.add_argument(
        "--mode",
        choices=SHADE_MODES,
        default="normals",
        help="Shader to use (default: normals)",
    )
    parser.add_argument(
        "--backend",
        choices=BACKENDS,
        default="python",
        help="Rendering backend (default: python)",
    )
    parser.add_argument(
        "--arch",
        choices=["cpu", "gpu"],
        default="cpu",
        help="Taichi architecture for the taichi backend (default: cpu)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="sphere.ppm",
        help='Output PPM path, "-" for stdout (default: sphere.ppm)',
    )
    parser.add_argument(
        "--png",
        type=str,
        default=None,
        help="Also save an 8-bit PNG to this path",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Open a Matplotlib preview window",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args(argv)


def render_sphere(
    width: int = 200,
    height: int = 100,
    mode: str = "normals",
    backend: str = "python",
    output_path: str = "sphere.ppm",
    png_path: str | None = None,
    show: bool = False,
    quiet: bool = False,
) -> Path | None:
    """Render the scene and save it.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        mode: Shader ("uv", "gradient", or "normals").
        backend: "python" or "taichi". Taichi must already be initialized.
        output_path: PPM output path, or "-" to write to stdout.
        png_path: Optional PNG output path.
        show: If True, open a preview window after rendering.
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved PPM file, or None when written to stdout.
    """
    from src.raycaster.core.renderer import Renderer, RenderSettings
    from src.raycaster.preview.export import format_ppm, save_png, write_ppm

    # Progress goes to stderr when the image itself goes to stdout
    log = sys.stderr if output_path == "-" else sys.stdout

    renderer = Renderer(RenderSettings(width=width, height=height, mode=mode, backend=backend))

    if not quiet:
        print(f"Rendering {width}x{height} ({mode}, {backend} backend)...", file=log)

    start_time = time.time()

    def progress_callback(current: int, target: int) -> None:
        if not quiet:
            progress_pct = (current / target) * 100 if target > 0 else 0
            print(
                f"\r  Progress: {current}/{target} rows ({progress_pct:.1f}%)",
                end="",
                flush=True,
                file=log,
            )

    image = renderer.render(callback=progress_callback)

    if not quiet:
        print(file=log)  # Newline after progress

    output_file: Path | None = None
    if output_path == "-":
        sys.stdout.write(format_ppm(image))
    else:
        output_file = Path(output_path)
        write_ppm(image, output_file)
        if not quiet:
            print(f"Saved to: {output_file.absolute()}", file=log)

    if png_path is not None:
        save_png(image, png_path)
        if not quiet:
            print(f"Saved PNG to: {Path(png_path).absolute()}", file=log)

    total_time = time.time() - start_time
    if not quiet:
        print(f"Total time: {total_time:.2f}s", file=log)

    if show:
        from src.raycaster.preview.display import show_preview

        show_preview(image)

    return output_file


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    if args.backend == "taichi":
        from src.raycaster.core.kernels import init_taichi

        init_taichi(args.arch)

    try:
        render_sphere(
            width=args.width,
            height=args.height,
            mode=args.mode,
            backend=args.backend,
            output_path=args.output,
            png_path=args.png,
            show=args.show,
            quiet=args.quiet,
        )
        return 0
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
