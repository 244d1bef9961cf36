"""Dispatch strategies that fill an output buffer with rendered pixels.

The output buffer is caller-owned, flat, row-major RGB with three bytes per
pixel and no row padding. Each strategy renders the tile selected by the
RenderContext and leaves the rest of the buffer untouched.

Strategies:
    render_naive: Single-threaded nested loop. The correctness baseline.
    render_rows: One task per image row on a thread pool. Each task owns a
        disjoint row view of the buffer and writes it directly.
    render_columns: The tile is split into contiguous column bands. Workers
        send ``(x, y, rgb)`` messages through a queue and the calling thread
        is the only writer of the buffer.

All strategies call the same pixel operator ``(context, scene, x, y, rng)``,
so a deterministic operator yields byte-identical output across strategies.

Worker exceptions are converted into ThreadPanickedError at the point where
the calling thread joins the workers. A column band that closes its side of
the channel without delivering its pixels, and without raising, surfaces as
CommunicationError.

Example:
    >>> buffer = bytearray(width * height * 3)
    >>> render_rows(context, scene, buffer, workers=8, seed=42)
"""

from __future__ import annotations

import logging
import queue
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

import numpy as np

from pathtracer.config import DEFAULT_WORKERS
from pathtracer.core.integrator import color_to_rgb8, render_pixel
from pathtracer.core.vector import Color, RandomSource
from pathtracer.execute.context import RenderContext
from pathtracer.execute.errors import CommunicationError, ThreadPanickedError
from pathtracer.scene.region import Region

logger = logging.getLogger(__name__)

PixelOp = Callable[[RenderContext, Region, int, int, RandomSource], Color]

# Marker sent by a column producer when it stops, successfully or not
_CLOSED = object()


def pixel_view(pixels, context: RenderContext) -> np.ndarray:
    """View a flat RGB buffer as a (height, width, 3) uint8 array.

    The view shares memory with ``pixels``; writes go straight to the
    caller's buffer.
    """
    flat = np.frombuffer(pixels, dtype=np.uint8)
    return flat.reshape(context.height, context.width, 3)


def _spawn_rngs(seed: int | None, count: int) -> list[np.random.Generator]:
    """Independent generators, one per task, from a single seed."""
    children = np.random.SeedSequence(seed).spawn(count)
    return [np.random.default_rng(child) for child in children]


def _resolve_workers(workers: int | None) -> int:
    if workers is None:
        return DEFAULT_WORKERS
    if workers < 1:
        raise ValueError(f"Worker count = {workers} must be at least 1")
    return workers


def _raise_on_failure(futures: list[Future], strategy: str) -> None:
    """Raise ThreadPanickedError for the first failed worker, if any."""
    failures = [exc for exc in (f.exception() for f in futures) if exc is not None]
    if failures:
        logger.error(
            "%d of %d %s workers failed: %r", len(failures), len(futures), strategy, failures[0]
        )
        raise ThreadPanickedError(
            f"Compute thread panicked in {strategy} strategy: {failures[0]!r}"
        ) from failures[0]


# =============================================================================
# Single-threaded
# =============================================================================


def render_naive(
    context: RenderContext,
    scene: Region,
    pixels,
    pixel_op: PixelOp = render_pixel,
    rng: RandomSource | None = None,
    seed: int | None = None,
) -> None:
    """Render the tile on the calling thread.

    Args:
        context: Render parameters and tile.
        scene: The scene to render.
        pixels: Writable flat RGB buffer of the full image.
        pixel_op: Pixel operator.
        rng: Random source. Defaults to a generator seeded with ``seed``.
        seed: Seed used when no rng is given.
    """
    if rng is None:
        rng = np.random.default_rng(seed)
    view = pixel_view(pixels, context)

    for y in range(context.start_y, context.end_y):
        row = view[y]
        for x in range(context.start_x, context.end_x):
            row[x] = color_to_rgb8(pixel_op(context, scene, x, y, rng))


# =============================================================================
# Row-parallel
# =============================================================================


def _render_row(
    context: RenderContext,
    scene: Region,
    row: np.ndarray,
    y: int,
    pixel_op: PixelOp,
    rng: RandomSource,
) -> None:
    for x in range(context.start_x, context.end_x):
        row[x] = color_to_rgb8(pixel_op(context, scene, x, y, rng))


def render_rows(
    context: RenderContext,
    scene: Region,
    pixels,
    pixel_op: PixelOp = render_pixel,
    workers: int | None = None,
    seed: int | None = None,
) -> None:
    """Render the tile with one thread pool task per row.

    Each task receives the row's view of the buffer and its own random
    generator. Rows never overlap, so no locking is needed.

    Args:
        context: Render parameters and tile.
        scene: The scene to render.
        pixels: Writable flat RGB buffer of the full image.
        pixel_op: Pixel operator.
        workers: Pool size, capped by the tile height.
        seed: Root seed for the per-row generators.

    Raises:
        ThreadPanickedError: If any row task raised.
    """
    rows = context.tile_height
    if rows == 0 or context.tile_width == 0:
        return

    pool_size = min(_resolve_workers(workers), rows)
    view = pixel_view(pixels, context)
    rngs = _spawn_rngs(seed, rows)
    logger.debug("Rendering %d rows on %d threads", rows, pool_size)

    with ThreadPoolExecutor(max_workers=pool_size, thread_name_prefix="pathtracer-row") as executor:
        futures = [
            executor.submit(_render_row, context, scene, view[y], y, pixel_op, rng)
            for y, rng in zip(range(context.start_y, context.end_y), rngs)
        ]

    _raise_on_failure(futures, "row")


# =============================================================================
# Column-parallel with collector
# =============================================================================


def partition_columns(start: int, end: int, workers: int) -> list[tuple[int, int]]:
    """Split ``[start, end)`` into ``min(workers, end - start)`` contiguous bands.

    Every band has ``(end - start) // n`` columns except the last one, which
    absorbs the remainder.

    Args:
        start: First column.
        end: One past the last column.
        workers: Requested number of bands (at least 1).

    Returns:
        A list of ``(band_start, band_end)`` pairs covering the range exactly
        once. Empty when the range is empty.
    """
    width = end - start
    if width <= 0:
        return []

    count = min(max(workers, 1), width)
    step = width // count
    bands = [(start + i * step, start + (i + 1) * step) for i in range(count)]
    bands[-1] = (bands[-1][0], end)
    return bands


def _render_column_band(
    channel: queue.Queue,
    context: RenderContext,
    scene: Region,
    x_start: int,
    x_end: int,
    pixel_op: PixelOp,
    rng: RandomSource,
) -> None:
    for x in range(x_start, x_end):
        for y in range(context.start_y, context.end_y):
            channel.put((x, y, color_to_rgb8(pixel_op(context, scene, x, y, rng))))


def _produce(
    channel: queue.Queue,
    context: RenderContext,
    scene: Region,
    band: tuple[int, int],
    pixel_op: PixelOp,
    rng: RandomSource,
) -> None:
    try:
        _render_column_band(channel, context, scene, band[0], band[1], pixel_op, rng)
    finally:
        channel.put(_CLOSED)


def render_columns(
    context: RenderContext,
    scene: Region,
    pixels,
    pixel_op: PixelOp = render_pixel,
    workers: int | None = None,
    seed: int | None = None,
) -> None:
    """Render the tile with column band producers and a single collector.

    The calling thread collects ``tile_width * tile_height`` messages and is
    the only thread that writes the buffer. Producers always close their side
    of the channel, so collection ends even when a producer fails.

    Args:
        context: Render parameters and tile.
        scene: The scene to render.
        pixels: Writable flat RGB buffer of the full image.
        pixel_op: Pixel operator.
        workers: Requested number of column bands, capped by the tile width.
        seed: Root seed for the per-band generators.

    Raises:
        ThreadPanickedError: If any producer raised.
        CommunicationError: If the channel closed before every pixel arrived
            and no producer raised.
    """
    bands = partition_columns(context.start_x, context.end_x, _resolve_workers(workers))
    if not bands or context.tile_height == 0:
        return

    expected = context.tile_width * context.tile_height
    view = pixel_view(pixels, context)
    channel: queue.Queue = queue.Queue()
    rngs = _spawn_rngs(seed, len(bands))
    logger.debug("Rendering %d column bands, collecting %d pixels", len(bands), expected)

    received = 0
    with ThreadPoolExecutor(
        max_workers=len(bands), thread_name_prefix="pathtracer-column"
    ) as executor:
        futures = [
            executor.submit(_produce, channel, context, scene, band, pixel_op, rng)
            for band, rng in zip(bands, rngs)
        ]

        open_producers = len(futures)
        while received < expected and open_producers > 0:
            message = channel.get()
            if message is _CLOSED:
                open_producers -= 1
                continue
            x, y, rgb = message
            view[y, x] = rgb
            received += 1

    _raise_on_failure(futures, "column")

    if received < expected:
        logger.error("Result channel closed after %d of %d pixels", received, expected)
        raise CommunicationError(
            f"Result channel closed after {received} of {expected} pixels"
        )
