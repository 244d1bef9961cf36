"""Unit tests for image export.

Tests cover:
- Viewing the flat buffer as an image array
- Size mismatch errors
- Writing PNG files readable by Pillow
"""

import numpy as np
import pytest
from PIL import Image

from pathtracer.output.export import buffer_to_array, save_png


def gradient_buffer(width, height):
    pixels = bytearray(width * height * 3)
    for y in range(height):
        for x in range(width):
            offset = (y * width + x) * 3
            pixels[offset:offset + 3] = bytes((x * 10 % 256, y * 20 % 256, 128))
    return pixels


class TestBufferToArray:
    """Tests for buffer_to_array()."""

    def test_shape_and_layout(self):
        """Test (height, width, 3) layout with row-major pixels."""
        array = buffer_to_array(gradient_buffer(4, 3), (4, 3))
        assert array.shape == (3, 4, 3)
        assert array.dtype == np.uint8
        assert tuple(array[2, 1]) == (10, 40, 128)

    def test_shares_memory(self):
        """Test that the array is a view of the buffer."""
        pixels = bytearray(2 * 2 * 3)
        array = buffer_to_array(pixels, (2, 2))
        array[1, 1] = (1, 2, 3)
        assert pixels[9:12] == b"\x01\x02\x03"

    @pytest.mark.parametrize("size", [0, 11, 13])
    def test_size_mismatch(self, size):
        """Test that the buffer must match the bounds."""
        with pytest.raises(ValueError, match="expected 12"):
            buffer_to_array(bytearray(size), (2, 2))


class TestSavePng:
    """Tests for save_png()."""

    def test_png_round_trip(self, tmp_path):
        """Test that the written PNG holds the buffer pixels."""
        pixels = gradient_buffer(5, 4)
        path = tmp_path / "image.png"
        save_png(pixels, (5, 4), path)

        with Image.open(path) as image:
            assert image.mode == "RGB"
            assert image.size == (5, 4)
            assert image.getpixel((3, 2)) == (30, 40, 128)
            assert np.asarray(image).tobytes() == bytes(pixels)

    def test_format_from_extension(self, tmp_path):
        """Test that other Pillow formats are chosen by extension."""
        path = tmp_path / "image.bmp"
        save_png(gradient_buffer(2, 2), (2, 2), path)
        with Image.open(path) as image:
            assert image.format == "BMP"

    def test_unknown_extension(self, tmp_path):
        """Test that an unknown extension is a ValueError."""
        with pytest.raises(ValueError):
            save_png(gradient_buffer(2, 2), (2, 2), tmp_path / "image.unknown")

    def test_missing_directory(self, tmp_path):
        """Test that an unwritable path is an OSError."""
        with pytest.raises(OSError):
            save_png(gradient_buffer(2, 2), (2, 2), tmp_path / "missing" / "image.png")
