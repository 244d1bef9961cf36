"""Command-line interface for the path tracer.

Usage:
    pathtracer SOURCE DEST [options]
    python -m pathtracer SOURCE DEST [options]

SOURCE is a scene file (.json) or the word ``random`` for the procedurally
generated spheres scene. DEST is the output image; the format follows its
extension.

Options:
    --compute MODE      naive, multicore, threaded, cuda or opencl
                        (default: multicore)
    --width WIDTH       Image width in pixels (default: 1920)
    --height HEIGHT     Image height in pixels (default: 1080)
    --samples SAMPLES   Samples per pixel (default: 10)
    --depth DEPTH       Maximum bounces per path (default: 50)
    --workers N         Worker threads (default: number of CPUs)
    --seed SEED         Random seed for reproducible renders
    --log-level LEVEL   DEBUG, INFO, WARNING or ERROR
    --log-file PATH     Also write the log to a rotating file
    --quiet             Only log warnings and errors

Example:
    pathtracer random spheres.png --width 640 --height 360 --samples 20 --seed 7
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pathtracer.config import (
    DEFAULT_HEIGHT,
    DEFAULT_MAX_DEPTH,
    DEFAULT_SAMPLES,
    DEFAULT_WIDTH,
    LOG_LEVEL,
    MAX_IMAGE_DIMENSION,
)
from pathtracer.execute.errors import RendererError
from pathtracer.logging_config import setup_logging
from pathtracer.output.export import save_png
from pathtracer.render import ComputeMode, render
from pathtracer.scene.builder import random_scene
from pathtracer.scene.loader import ParserError, load_scene
from pathtracer.scene.region import Region

logger = logging.getLogger(__name__)

RANDOM_SCENE = "random"


def _compute_mode(value: str) -> ComputeMode:
    try:
        return ComputeMode.parse(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render a scene with the Monte Carlo path tracer.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "source",
        help=f"Scene file (.json) or '{RANDOM_SCENE}' for the random spheres scene",
    )
    parser.add_argument(
        "dest",
        type=Path,
        help="Output image path (format follows the extension, e.g. .png)",
    )
    parser.add_argument(
        "--compute",
        type=_compute_mode,
        default=ComputeMode.MULTICORE,
        help="Compute mode: naive, multicore, threaded, cuda or opencl (default: multicore)",
    )
    parser.add_argument(
        "--width",
        type=int,
        default=DEFAULT_WIDTH,
        help=f"Image width in pixels (default: {DEFAULT_WIDTH})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=DEFAULT_HEIGHT,
        help=f"Image height in pixels (default: {DEFAULT_HEIGHT})",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=DEFAULT_SAMPLES,
        help=f"Number of samples per pixel (default: {DEFAULT_SAMPLES})",
    )
    parser.add_argument(
        "--depth",
        type=int,
        default=DEFAULT_MAX_DEPTH,
        help=f"Maximum bounces per path (default: {DEFAULT_MAX_DEPTH})",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker threads for the parallel modes (default: number of CPUs)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible renders",
    )
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        help=f"Log level (default: {LOG_LEVEL})",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write the log to this rotating file",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Only log warnings and errors",
    )
    return parser.parse_args(argv)


def _allocate_buffer(width: int, height: int) -> bytearray:
    # Out of range sizes get an empty buffer and are rejected by render()
    if 0 < width <= MAX_IMAGE_DIMENSION and 0 < height <= MAX_IMAGE_DIMENSION:
        return bytearray(width * height * 3)
    return bytearray()


def load_source(source: str, seed: int | None = None) -> Region:
    """Load the scene named on the command line."""
    if source == RANDOM_SCENE:
        logger.info("Generating random scene")
        return random_scene(seed=seed)
    return load_scene(source)


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns:
        0 on success, 1 if the scene could not be loaded, the render failed
        or the image could not be written.
    """
    args = parse_args(argv)
    setup_logging("WARNING" if args.quiet else args.log_level, args.log_file)

    bounds = (args.width, args.height)
    try:
        scene = load_source(args.source, args.seed)
        pixels = _allocate_buffer(args.width, args.height)
        stats = render(
            args.compute,
            args.samples,
            args.depth,
            scene,
            pixels,
            bounds,
            workers=args.workers,
            seed=args.seed,
        )
        save_png(pixels, bounds, args.dest)
    except ParserError as e:
        logger.error("Could not load scene %s: %s", args.source, e)
        return 1
    except RendererError as e:
        logger.error("Render failed: %s", e)
        return 1
    except (OSError, ValueError) as e:
        logger.error("Could not write %s: %s", args.dest, e)
        return 1

    logger.info(
        "Rendered %dx%d in %.2fs (%s, %d workers), saved to %s",
        stats.width,
        stats.height,
        stats.elapsed,
        stats.effective_mode.value,
        stats.workers,
        args.dest,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
