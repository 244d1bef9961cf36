"""Unit tests for the render entry point.

Tests cover:
- ComputeMode parsing
- Precondition checks and their error types
- No work is started when a precondition fails
- Accelerated modes falling back to multicore
- RenderStats contents
- End-to-end rendering of a small scene with every mode
"""

import logging

import numpy as np
import pytest
from conftest import expected_gradient_bytes, gradient_pixel_op

from pathtracer import ComputeMode, RenderStats, render
from pathtracer.camera.thin_lens import CameraConfig
from pathtracer.core.vector import WHITE, Point3
from pathtracer.execute.errors import (
    BufferSizeError,
    InvalidParameterError,
    InvalidSceneError,
    RendererError,
    ThreadPanickedError,
)
from pathtracer.geometry.sphere import Sphere
from pathtracer.scene.region import Region


def exploding_op(context, scene, x, y, rng):
    raise AssertionError("no pixel may be rendered when a precondition fails")


class TestComputeMode:
    """Tests for ComputeMode."""

    @pytest.mark.parametrize(
        "name,mode",
        [
            ("naive", ComputeMode.NAIVE),
            ("MultiCore", ComputeMode.MULTICORE),
            (" threaded ", ComputeMode.THREADED),
            ("CUDA", ComputeMode.CUDA),
            ("opencl", ComputeMode.OPENCL),
        ],
    )
    def test_parse(self, name, mode):
        """Test case-insensitive parsing of mode names."""
        assert ComputeMode.parse(name) is mode

    def test_parse_passes_modes_through(self):
        """Test that a ComputeMode is returned unchanged."""
        assert ComputeMode.parse(ComputeMode.THREADED) is ComputeMode.THREADED

    def test_parse_unknown(self):
        """Test that unknown names list the valid choices."""
        with pytest.raises(ValueError, match="naive, multicore, threaded, cuda, opencl"):
            ComputeMode.parse("gpu")

    def test_accelerated(self):
        """Test which modes are accelerated."""
        assert ComputeMode.CUDA.is_accelerated
        assert ComputeMode.OPENCL.is_accelerated
        assert not ComputeMode.MULTICORE.is_accelerated


class TestPreconditions:
    """Tests for the checks run before any rendering."""

    @pytest.mark.parametrize(
        "samples,depth,workers",
        [(0, 5, None), (-3, 5, None), (1, 0, None), (1, -1, None), (1, 5, 0)],
    )
    def test_invalid_parameters(self, samples, depth, workers, unit_sphere_scene):
        """Test non-positive samples, depth and workers."""
        with pytest.raises(InvalidParameterError):
            render(
                ComputeMode.NAIVE,
                samples,
                depth,
                unit_sphere_scene,
                bytearray(12),
                (2, 2),
                workers=workers,
                pixel_op=exploding_op,
            )

    def test_unknown_mode(self, unit_sphere_scene):
        """Test that an unknown mode name is an invalid parameter."""
        with pytest.raises(InvalidParameterError, match="Unknown compute mode"):
            render("quantum", 1, 5, unit_sphere_scene, bytearray(12), (2, 2))

    @pytest.mark.parametrize("mode", list(ComputeMode))
    @pytest.mark.parametrize("bounds", [(0, 10), (10, 0), (0, 0), (4097, 1), (1, 5000)])
    def test_dimensions_out_of_range(self, mode, bounds, unit_sphere_scene):
        """Test that no worker runs for out-of-range dimensions."""
        width, height = bounds
        pixels = bytearray(max(width * height * 3, 0))
        with pytest.raises(BufferSizeError):
            render(mode, 1, 5, unit_sphere_scene, pixels, bounds, pixel_op=exploding_op)

    @pytest.mark.parametrize("size", [11, 13, 0, 300])
    def test_wrong_buffer_size(self, size, unit_sphere_scene):
        """Test that the buffer must hold exactly width * height * 3 bytes."""
        with pytest.raises(BufferSizeError, match="expected 12"):
            render(ComputeMode.NAIVE, 1, 5, unit_sphere_scene, bytearray(size), (2, 2))

    def test_read_only_buffer(self, unit_sphere_scene):
        """Test that an immutable buffer is rejected."""
        with pytest.raises(BufferSizeError, match="read-only"):
            render(ComputeMode.NAIVE, 1, 5, unit_sphere_scene, bytes(12), (2, 2))

    def test_non_contiguous_buffer(self, unit_sphere_scene):
        """Test that a strided view is rejected."""
        strided = np.zeros(24, dtype=np.uint8)[::2]
        with pytest.raises(BufferSizeError, match="contiguous"):
            render(ComputeMode.NAIVE, 1, 5, unit_sphere_scene, strided, (2, 2))

    def test_not_a_buffer(self, unit_sphere_scene):
        """Test that objects without the buffer protocol are rejected."""
        with pytest.raises(BufferSizeError, match="not a buffer"):
            render(ComputeMode.NAIVE, 1, 5, unit_sphere_scene, [0] * 12, (2, 2))

    def test_empty_scene(self):
        """Test that a scene without objects is rejected."""
        with pytest.raises(InvalidSceneError, match="no objects"):
            render(ComputeMode.NAIVE, 1, 5, Region(background=WHITE), bytearray(12), (2, 2))

    def test_invalid_camera(self, grey):
        """Test that an unusable camera is an invalid scene."""
        region = Region(background=WHITE, camera_config=CameraConfig(vertical_fov=0.0))
        region.push(Sphere(Point3(0.0, 0.0, -1.0), 0.5, grey))
        with pytest.raises(InvalidSceneError, match="Invalid camera"):
            render(ComputeMode.NAIVE, 1, 5, region, bytearray(12), (2, 2))

    def test_parameters_checked_before_buffer(self):
        """Test the check order: parameters, then buffer, then scene."""
        empty = Region(background=WHITE)
        with pytest.raises(InvalidParameterError):
            render(ComputeMode.NAIVE, 0, 5, empty, bytes(1), (0, 0))
        with pytest.raises(BufferSizeError):
            render(ComputeMode.NAIVE, 1, 5, empty, bytes(1), (0, 0))

    def test_errors_share_base(self, unit_sphere_scene):
        """Test that precondition errors are RendererErrors and ValueErrors."""
        with pytest.raises(RendererError):
            render(ComputeMode.NAIVE, 1, 5, unit_sphere_scene, bytearray(1), (2, 2))
        with pytest.raises(ValueError):
            render(ComputeMode.NAIVE, 1, 5, unit_sphere_scene, bytearray(1), (2, 2))

    def test_failure_is_logged(self, unit_sphere_scene, caplog):
        """Test that a failed check is logged before raising."""
        with caplog.at_level(logging.ERROR, logger="pathtracer"):
            with pytest.raises(BufferSizeError):
                render(ComputeMode.NAIVE, 1, 5, unit_sphere_scene, bytearray(5), (2, 2))
        assert "API precondition check failed" in caplog.text


class TestRender:
    """Tests for successful renders."""

    @pytest.mark.parametrize("mode", list(ComputeMode))
    def test_every_mode_fills_buffer(self, mode, unit_sphere_scene):
        """Test that every mode writes the deterministic gradient."""
        pixels = bytearray(7 * 5 * 3)
        render(mode, 1, 5, unit_sphere_scene, pixels, (7, 5), workers=3, pixel_op=gradient_pixel_op)
        assert pixels == expected_gradient_bytes(7, 5)

    def test_stats(self, unit_sphere_scene):
        """Test the reported statistics."""
        pixels = bytearray(8 * 2 * 3)
        stats = render(
            "threaded", 3, 4, unit_sphere_scene, pixels, (8, 2), workers=4, pixel_op=gradient_pixel_op
        )
        assert isinstance(stats, RenderStats)
        assert stats.mode is ComputeMode.THREADED
        assert stats.effective_mode is ComputeMode.THREADED
        assert (stats.width, stats.height) == (8, 2)
        assert stats.samples == 3
        assert stats.max_depth == 4
        assert stats.workers == 4
        assert stats.elapsed >= 0.0
        assert stats.pixels_per_second > 0.0

    def test_worker_counts(self, unit_sphere_scene):
        """Test workers reported per strategy."""
        pixels = bytearray(3 * 2 * 3)
        naive = render("naive", 1, 1, unit_sphere_scene, pixels, (3, 2), workers=8,
                       pixel_op=gradient_pixel_op)
        rows = render("multicore", 1, 1, unit_sphere_scene, pixels, (3, 2), workers=8,
                      pixel_op=gradient_pixel_op)
        columns = render("threaded", 1, 1, unit_sphere_scene, pixels, (3, 2), workers=8,
                         pixel_op=gradient_pixel_op)
        assert (naive.workers, rows.workers, columns.workers) == (1, 2, 3)

    @pytest.mark.parametrize("mode", [ComputeMode.CUDA, ComputeMode.OPENCL])
    def test_accelerated_falls_back(self, mode, unit_sphere_scene, caplog):
        """Test that accelerated modes warn and run the multicore strategy."""
        pixels = bytearray(2 * 2 * 3)
        with caplog.at_level(logging.WARNING, logger="pathtracer"):
            stats = render(mode, 1, 5, unit_sphere_scene, pixels, (2, 2), pixel_op=gradient_pixel_op)
        assert stats.mode is mode
        assert stats.effective_mode is ComputeMode.MULTICORE
        assert "falling back to multicore" in caplog.text

    def test_seeded_render_is_reproducible(self, small_scene):
        """Test that a fixed seed gives identical images."""
        first = bytearray(6 * 4 * 3)
        second = bytearray(6 * 4 * 3)
        render(ComputeMode.MULTICORE, 2, 5, small_scene, first, (6, 4), seed=7)
        render(ComputeMode.MULTICORE, 2, 5, small_scene, second, (6, 4), seed=7)
        assert first == second

    def test_real_render_sky_and_ground(self, small_scene):
        """Test that the top of the image is sky and the bottom is darker ground."""
        width, height = 16, 16
        pixels = bytearray(width * height * 3)
        render(ComputeMode.NAIVE, 4, 8, small_scene, pixels, (width, height), seed=3)
        image = np.frombuffer(bytes(pixels), dtype=np.uint8).reshape(height, width, 3)

        top = image[0].astype(float).mean(axis=0)
        bottom = image[-1].astype(float).mean(axis=0)
        # Blue sky dominates the top row
        assert top[2] > top[0]
        assert bottom.sum() < top.sum()

    def test_worker_failure(self, unit_sphere_scene):
        """Test that pixel operator failures surface as ThreadPanickedError."""

        def broken(context, scene, x, y, rng):
            raise RuntimeError("bad pixel")

        with pytest.raises(ThreadPanickedError):
            render("multicore", 1, 5, unit_sphere_scene, bytearray(12), (2, 2), pixel_op=broken)
