"""Render entry point.

``render`` validates its inputs, binds the scene camera to the output size,
and hands the work to the dispatch strategy selected by the compute mode.
All preconditions are checked before any worker is started; a failed check
is logged and raised as one of the RendererError subclasses.

Example:
    >>> from pathtracer import ComputeMode, render
    >>> from pathtracer.scene import random_scene
    >>> width, height = 320, 180
    >>> pixels = bytearray(width * height * 3)
    >>> stats = render(ComputeMode.MULTICORE, 10, 50, random_scene(seed=1), pixels, (width, height))
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum

from pathtracer.camera.thin_lens import Camera
from pathtracer.config import DEFAULT_WORKERS, MAX_IMAGE_DIMENSION
from pathtracer.core.integrator import render_pixel
from pathtracer.execute.context import RenderContext
from pathtracer.execute.dispatch import PixelOp, render_columns, render_naive, render_rows
from pathtracer.execute.errors import (
    BufferSizeError,
    InvalidParameterError,
    InvalidSceneError,
    RendererError,
)
from pathtracer.scene.region import Region

logger = logging.getLogger(__name__)


class ComputeMode(str, Enum):
    """How the render work is executed.

    NAIVE runs on the calling thread. MULTICORE renders rows in parallel.
    THREADED renders column bands in parallel and collects the results on the
    calling thread. CUDA and OPENCL are accepted for compatibility and run
    the MULTICORE strategy.
    """

    NAIVE = "naive"
    MULTICORE = "multicore"
    THREADED = "threaded"
    CUDA = "cuda"
    OPENCL = "opencl"

    @property
    def is_accelerated(self) -> bool:
        return self in (ComputeMode.CUDA, ComputeMode.OPENCL)

    @classmethod
    def parse(cls, value: str | ComputeMode) -> ComputeMode:
        """Parse a mode name, case-insensitively.

        Raises:
            ValueError: If the name is not a known compute mode.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError as e:
            choices = ", ".join(mode.value for mode in cls)
            raise ValueError(f"Unknown compute mode {value!r}, expected one of: {choices}") from e


@dataclass(frozen=True)
class RenderStats:
    """Summary of a completed render.

    Attributes:
        mode: The requested compute mode.
        effective_mode: The mode that actually ran.
        width: Image width in pixels.
        height: Image height in pixels.
        samples: Samples per pixel.
        max_depth: Maximum bounces per path.
        workers: Number of threads that rendered pixels.
        elapsed: Wall-clock render time in seconds.
    """

    mode: ComputeMode
    effective_mode: ComputeMode
    width: int
    height: int
    samples: int
    max_depth: int
    workers: int
    elapsed: float

    @property
    def pixels_per_second(self) -> float:
        if self.elapsed <= 0.0:
            return float("inf")
        return self.width * self.height / self.elapsed


def _precondition_failed(error_cls: type[RendererError], message: str) -> RendererError:
    logger.error("API precondition check failed: %s", message)
    return error_cls(message)


def _check_buffer(pixels, width: int, height: int) -> None:
    if not 0 < width <= MAX_IMAGE_DIMENSION or not 0 < height <= MAX_IMAGE_DIMENSION:
        raise _precondition_failed(
            BufferSizeError,
            f"Image dimensions {width}x{height} must be within (0, {MAX_IMAGE_DIMENSION}]",
        )

    try:
        view = memoryview(pixels)
    except TypeError as e:
        raise _precondition_failed(
            BufferSizeError, f"Output buffer of type {type(pixels).__name__} is not a buffer"
        ) from e

    with view:
        expected = width * height * 3
        if view.nbytes != expected:
            raise _precondition_failed(
                BufferSizeError,
                f"Output buffer has {view.nbytes} bytes, expected {expected} "
                f"for a {width}x{height} RGB image",
            )
        if view.readonly:
            raise _precondition_failed(BufferSizeError, "Output buffer is read-only")
        if not view.c_contiguous:
            raise _precondition_failed(BufferSizeError, "Output buffer is not contiguous")


def render(
    compute_mode: ComputeMode | str,
    samples_per_pixel: int,
    max_depth: int,
    scene: Region,
    pixels,
    bounds: tuple[int, int],
    *,
    workers: int | None = None,
    seed: int | None = None,
    pixel_op: PixelOp = render_pixel,
) -> RenderStats:
    """Render a scene into a caller-owned RGB byte buffer.

    Args:
        compute_mode: Strategy to use, as a ComputeMode or its name.
        samples_per_pixel: Samples averaged per pixel (> 0).
        max_depth: Maximum bounces per path (> 0).
        scene: The scene. Its camera configuration is used for the view.
        pixels: Writable buffer of exactly width * height * 3 bytes, filled
            row-major with 8-bit RGB.
        bounds: Image size as (width, height), each in (0, 4096].
        workers: Thread count for the parallel strategies. Defaults to
            ``config.DEFAULT_WORKERS``.
        seed: Root seed for the random generators. None draws fresh entropy.
        pixel_op: Per-pixel operator, replaceable for testing.

    Returns:
        RenderStats describing the completed render.

    Raises:
        InvalidParameterError: For a non-positive sample count, depth or
            worker count, or an unknown compute mode.
        BufferSizeError: For out-of-range dimensions or a buffer of the wrong
            size, read-only or not contiguous.
        InvalidSceneError: For an empty scene or an unusable camera.
        ComputeError: If a worker failed. The buffer contents are undefined.
    """
    if samples_per_pixel <= 0:
        raise _precondition_failed(
            InvalidParameterError, f"Samples per pixel = {samples_per_pixel} must be positive"
        )
    if max_depth <= 0:
        raise _precondition_failed(
            InvalidParameterError, f"Maximum depth = {max_depth} must be positive"
        )
    if workers is not None and workers < 1:
        raise _precondition_failed(
            InvalidParameterError, f"Worker count = {workers} must be at least 1"
        )
    try:
        mode = ComputeMode.parse(compute_mode)
    except ValueError as e:
        raise _precondition_failed(InvalidParameterError, str(e)) from e

    width, height = bounds
    _check_buffer(pixels, width, height)

    if len(scene) == 0:
        raise _precondition_failed(InvalidSceneError, "Scene contains no objects")
    try:
        camera = Camera(scene.camera_config, width, height)
    except ValueError as e:
        raise _precondition_failed(InvalidSceneError, f"Invalid camera: {e}") from e

    effective = mode
    if mode.is_accelerated:
        logger.warning(
            "%s compute is not supported, falling back to %s",
            mode.value,
            ComputeMode.MULTICORE.value,
        )
        effective = ComputeMode.MULTICORE

    context = RenderContext.full_frame(camera, max_depth=max_depth, samples=samples_per_pixel)
    pool_size = workers if workers is not None else DEFAULT_WORKERS

    logger.info(
        "Rendering %dx%d, %d spp, depth %d, %s mode",
        width,
        height,
        samples_per_pixel,
        max_depth,
        effective.value,
    )
    start = time.perf_counter()

    if effective is ComputeMode.NAIVE:
        render_naive(context, scene, pixels, pixel_op, seed=seed)
        used = 1
    elif effective is ComputeMode.THREADED:
        render_columns(context, scene, pixels, pixel_op, workers=pool_size, seed=seed)
        used = min(pool_size, width)
    else:
        render_rows(context, scene, pixels, pixel_op, workers=pool_size, seed=seed)
        used = min(pool_size, height)

    elapsed = time.perf_counter() - start
    logger.info("Render finished in %.2fs", elapsed)

    return RenderStats(
        mode=mode,
        effective_mode=effective,
        width=width,
        height=height,
        samples=samples_per_pixel,
        max_depth=max_depth,
        workers=used,
        elapsed=elapsed,
    )
