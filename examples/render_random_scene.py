#!/usr/bin/env python3
"""Render the random spheres scene.

This script demonstrates end-to-end rendering with the path tracer library:
it builds the procedural spheres scene, renders it with each requested
compute mode, and saves the image of the last mode.

Usage:
    python -m examples.render_random_scene [options]

Options:
    --width WIDTH       Image width in pixels (default: 400)
    --height HEIGHT     Image height in pixels (default: 225)
    --samples SAMPLES   Number of samples per pixel (default: 10)
    --depth DEPTH       Maximum bounces per path (default: 20)
    --modes MODES       Comma separated compute modes (default: multicore)
    --seed SEED         Random seed for the scene and the render (default: 7)
    --output OUTPUT     Output file path (default: random_scene.png)
    --quiet             Suppress progress output

Example:
    python -m examples.render_random_scene --modes naive,multicore,threaded --samples 4
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pathtracer import ComputeMode, render
from pathtracer.execute.errors import RendererError
from pathtracer.logging_config import setup_logging
from pathtracer.output import save_png
from pathtracer.scene import random_scene


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the random spheres scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=225,
        help="Image height in pixels (default: 225)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=10,
        help="Number of samples per pixel (default: 10)",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=20,
        help="Maximum bounces per path (default: 20)",
    )
    parser.add_argument(
        "--modes",
        type=str,
        default="multicore",
        help="Comma separated compute modes to compare (default: multicore)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=7,
        help="Random seed for the scene and the render (default: 7)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="random_scene.png",
        help="Output file path (default: random_scene.png)",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser.parse_args()


def render_random_scene(
    width: int = 400,
    height: int = 225,
    samples: int = 10,
    max_depth: int = 20,
    modes: list[ComputeMode] | None = None,
    seed: int = 7,
    output_path: str = "random_scene.png",
    quiet: bool = False,
) -> Path:
    """Render the random spheres scene and save to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Number of samples per pixel.
        max_depth: Maximum bounces per path.
        modes: Compute modes to run, in order. The image of the last one is
            saved.
        seed: Seed for the scene layout and the render.
        output_path: Output file path (PNG).
        quiet: If True, suppress progress output.

    Returns:
        Path to the saved image file.
    """
    modes = modes or [ComputeMode.MULTICORE]

    if not quiet:
        print(f"Building random scene (seed {seed})...")
    scene = random_scene(seed=seed)

    pixels = bytearray(width * height * 3)
    for mode in modes:
        if not quiet:
            print(f"Rendering {width}x{height}, {samples} spp with {mode.value}...")
        stats = render(mode, samples, max_depth, scene, pixels, (width, height), seed=seed)
        if not quiet:
            print(
                f"  {stats.effective_mode.value}: {stats.elapsed:.2f}s on {stats.workers} "
                f"workers ({stats.pixels_per_second:.0f} pixels/s)"
            )

    output_file = Path(output_path)
    save_png(pixels, (width, height), output_file)
    if not quiet:
        print(f"Saved to: {output_file.absolute()}")

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()
    setup_logging("WARNING")

    try:
        modes = [ComputeMode.parse(name) for name in args.modes.split(",") if name.strip()]
        render_random_scene(
            width=args.width,
            height=args.height,
            samples=args.samples,
            max_depth=args.depth,
            modes=modes,
            seed=args.seed,
            output_path=args.output,
            quiet=args.quiet,
        )
        return 0
    except (RendererError, OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
