"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules: deterministic
random sources, small scenes, render contexts and deterministic pixel
operators for comparing dispatch strategies byte for byte.
"""

import itertools
import logging

import pytest

from pathtracer.camera.thin_lens import Camera, CameraConfig
from pathtracer.core.vector import WHITE, Color, Point3
from pathtracer.execute.context import RenderContext
from pathtracer.geometry.sphere import Sphere
from pathtracer.logging_config import ROOT_LOGGER_NAME
from pathtracer.materials import LambertianMaterial
from pathtracer.scene.region import Region


class SequenceRng:
    """Random source that replays a fixed sequence of values, cycling."""

    def __init__(self, *values: float) -> None:
        self.values = values or (0.5,)
        self._cycle = itertools.cycle(self.values)
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return next(self._cycle)


class CountingRegion(Region):
    """Region that records how many times it was queried."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.queries = 0

    def hit(self, ray, t_min, t_max):
        self.queries += 1
        return super().hit(ray, t_min, t_max)


def gradient_pixel_op(context, scene, x, y, rng):
    """Deterministic pixel operator that ignores the scene and rng."""
    return Color(0.013 * x, 0.017 * y, 0.21)


def expected_gradient_bytes(width, height):
    """Bytes produced by gradient_pixel_op for a full frame."""
    from pathtracer.core.integrator import color_to_rgb8

    out = bytearray()
    for y in range(height):
        for x in range(width):
            out.extend(color_to_rgb8(gradient_pixel_op(None, None, x, y, None)))
    return out


def make_context(width, height, samples=1, max_depth=5, config=None):
    """Full-frame render context for an image of the given size."""
    camera = Camera(config or CameraConfig(), width, height)
    return RenderContext.full_frame(camera, max_depth=max_depth, samples=samples)


@pytest.fixture
def rng_factory():
    """Build deterministic random sources: ``rng_factory(0.1, 0.7)``."""
    return SequenceRng


@pytest.fixture
def grey():
    """Mid-grey Lambertian material."""
    return LambertianMaterial(albedo=Color(0.5, 0.5, 0.5))


@pytest.fixture
def unit_sphere_scene(grey):
    """One sphere of radius 0.5 at (0, 0, -1) under a white sky."""
    region = Region(background=WHITE)
    region.push(Sphere(center=Point3(0.0, 0.0, -1.0), radius=0.5, material=grey))
    return region


@pytest.fixture
def small_scene(grey):
    """Two spheres with a blue sky, viewed by the default camera."""
    region = Region(background=Color(0.5, 0.7, 1.0))
    region.push(Sphere(center=Point3(0.0, 0.0, -1.0), radius=0.5, material=grey))
    region.push(Sphere(center=Point3(0.0, -100.5, -1.0), radius=100.0, material=grey))
    return region


@pytest.fixture
def reset_logging():
    """Remove handlers installed by setup_logging() after the test."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    level = logger.level
    yield logger
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(level)
