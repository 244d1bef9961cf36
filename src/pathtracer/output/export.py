"""Image export utilities for rendered images.

The renderer produces a flat row-major RGB byte buffer that is already gamma
corrected and quantized. These helpers view that buffer as an image array
and write it to disk.

Supported formats:
    - PNG (8-bit RGB via Pillow), or any other format Pillow infers from
      the file extension

Example:
    >>> from pathtracer.output.export import save_png
    >>> pixels = bytearray(320 * 180 * 3)
    >>> # ... render into pixels ...
    >>> save_png(pixels, (320, 180), "output.png")
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import numpy.typing as npt
from PIL import Image as PILImage

logger = logging.getLogger(__name__)


def buffer_to_array(pixels, bounds: tuple[int, int]) -> npt.NDArray[np.uint8]:
    """View a flat RGB byte buffer as a (height, width, 3) array.

    Args:
        pixels: Buffer of exactly width * height * 3 bytes.
        bounds: Image size as (width, height).

    Returns:
        A uint8 array sharing memory with ``pixels``.

    Raises:
        ValueError: If the buffer size does not match the bounds.
    """
    width, height = bounds
    flat = np.frombuffer(pixels, dtype=np.uint8)
    if flat.size != width * height * 3:
        raise ValueError(
            f"Buffer has {flat.size} bytes, expected {width * height * 3} "
            f"for a {width}x{height} RGB image"
        )
    return flat.reshape(height, width, 3)


def save_png(pixels, bounds: tuple[int, int], filepath: str | Path) -> None:
    """Save a rendered RGB byte buffer as an image file.

    Args:
        pixels: Buffer of exactly width * height * 3 bytes.
        bounds: Image size as (width, height).
        filepath: Output file path. The format follows the extension.

    Raises:
        ValueError: If the buffer size does not match the bounds, or Pillow
            cannot infer a format from the extension.
        OSError: If the file cannot be written.
    """
    image = buffer_to_array(pixels, bounds)
    PILImage.fromarray(image).save(filepath)
    logger.info("Saved %dx%d image to %s", bounds[0], bounds[1], filepath)
