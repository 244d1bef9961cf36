"""Unit tests for the path tracing integrator.

Tests cover:
- Depth termination (depth 0 is black without querying the scene)
- Background on miss, absorption, per-bounce attenuation
- Pixel sampling (film coordinates, vertical flip, averaging)
- Byte conversion (gamma, clamping, NaN and negative handling)
"""

import math

import numpy as np
import pytest
from conftest import CountingRegion, SequenceRng, make_context

from pathtracer.core.integrator import color_to_rgb8, ray_color, render_pixel
from pathtracer.core.ray import Ray
from pathtracer.core.vector import BLACK, WHITE, Color, Point3, Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials import LambertianMaterial, MetalMaterial
from pathtracer.scene.region import Region


class Absorber:
    """Material that absorbs every ray."""

    def scatter(self, ray, hit, rng):
        return None


class TestRayColor:
    """Tests for ray_color()."""

    def test_depth_zero_is_black(self, small_scene):
        """Test that a zero depth returns exact black."""
        ray = Ray(Point3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
        assert ray_color(ray, small_scene, 0, SequenceRng()) == BLACK

    def test_depth_zero_does_not_query_scene(self, grey):
        """Test that no intersection test happens with depth 0."""
        region = CountingRegion(background=WHITE)
        region.push(Sphere(Point3(0.0, 0.0, -1.0), 0.5, grey))
        ray_color(Ray(Point3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0)), region, 0, SequenceRng())
        assert region.queries == 0

    def test_miss_returns_background(self):
        """Test that a ray leaving the scene gets the sky color."""
        region = Region(background=Color(0.2, 0.4, 0.6))
        region.push(Sphere(Point3(0.0, 0.0, -1.0), 0.5, LambertianMaterial(albedo=WHITE)))
        up = Ray(Point3(0.0, 0.0, 0.0), Vec3(0.0, 1.0, 0.0))
        assert ray_color(up, region, 5, SequenceRng()) == Color(0.2, 0.4, 0.6)

    def test_absorption_is_black(self):
        """Test that an absorbed ray contributes nothing."""
        region = Region(background=WHITE)
        region.push(Sphere(Point3(0.0, 0.0, -2.0), 1.0, Absorber()))
        ray = Ray(Point3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
        assert ray_color(ray, region, 5, SequenceRng()) == BLACK

    def test_attenuation_multiplies_per_bounce(self):
        """Test that a mirror bounce tints the background by the albedo."""
        mirror = MetalMaterial(albedo=Color(0.5, 0.25, 1.0), fuzz=0.0)
        region = Region(background=WHITE)
        region.push(Sphere(Point3(0.0, 0.0, -2.0), 1.0, mirror))
        ray = Ray(Point3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))

        # Reflected straight back to +z, which misses; white sky at y = 0 is 1.0
        assert ray_color(ray, region, 5, SequenceRng()) == Color(0.5, 0.25, 1.0)

    def test_depth_exhausted_is_black(self):
        """Test that a path still bouncing at max depth is black."""
        mirror = MetalMaterial(albedo=WHITE, fuzz=0.0)
        region = Region(background=WHITE)
        region.push(Sphere(Point3(0.0, 0.0, -2.0), 1.0, mirror))
        ray = Ray(Point3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
        assert ray_color(ray, region, 1, SequenceRng()) == BLACK

    def test_inside_mirror_sphere_never_escapes(self):
        """Test that a path trapped inside a mirror runs out of depth."""
        mirror = MetalMaterial(albedo=WHITE, fuzz=0.0)
        region = Region(background=WHITE)
        region.push(Sphere(Point3(0.0, 0.0, 0.0), 1.0, mirror))
        ray = Ray(Point3(0.0, 0.0, 0.0), Vec3(0.3, 0.1, -1.0))
        assert ray_color(ray, region, 10, SequenceRng()) == BLACK

    def test_diffuse_result_is_bounded(self, small_scene):
        """Test that radiance never exceeds the white sky."""
        rng = np.random.default_rng(4)
        for _ in range(50):
            ray = Ray(Point3(0.0, 0.0, 0.0), Vec3(0.0, -0.2, -1.0))
            color = ray_color(ray, small_scene, 10, rng)
            assert all(0.0 <= c <= 1.0 for c in color)


class TestRenderPixel:
    """Tests for render_pixel()."""

    def test_averages_samples(self, unit_sphere_scene):
        """Test that the result is the mean of the sample colors."""
        # A constant source makes every sample identical, so the mean equals one sample
        color = render_pixel(make_context(4, 4, samples=4), unit_sphere_scene, 0, 0, SequenceRng(0.5))
        single = render_pixel(make_context(4, 4, samples=1), unit_sphere_scene, 0, 0, SequenceRng(0.5))
        assert abs(color.x - single.x) < 1e-12
        assert abs(color.y - single.y) < 1e-12
        assert abs(color.z - single.z) < 1e-12

    def test_vertical_flip(self):
        """Test that image row 0 looks up and the last row looks down."""
        region = Region(background=Color(0.0, 0.0, 1.0))
        # Far away sphere so every primary ray misses
        region.push(Sphere(Point3(0.0, 0.0, 100.0), 1.0, LambertianMaterial(albedo=WHITE)))
        context = make_context(3, 3, samples=1)

        top = render_pixel(context, region, 1, 0, SequenceRng(0.0))
        bottom = render_pixel(context, region, 1, 2, SequenceRng(0.0))
        # Looking up blends toward the blue background, looking down toward white
        assert abs(top.z - 1.0) < 1e-12
        assert top.x < bottom.x

    def test_single_pixel_image(self, unit_sphere_scene):
        """Test that a 1x1 image produces finite values."""
        context = make_context(1, 1, samples=2)
        color = render_pixel(context, unit_sphere_scene, 0, 0, SequenceRng(0.5))
        assert all(math.isfinite(c) for c in color)

    def test_draws_jitter_per_sample(self):
        """Test that each sample draws two jitter values before tracing."""
        region = Region(background=WHITE)
        region.push(Sphere(Point3(0.0, 0.0, 100.0), 1.0, LambertianMaterial(albedo=WHITE)))
        rng = SequenceRng(0.5)
        render_pixel(make_context(4, 4, samples=3), region, 2, 2, rng)
        # Pinhole camera and only misses: the jitter is the only randomness
        assert rng.calls == 6

    def test_center_pixel_hits_sphere(self, unit_sphere_scene):
        """Test that the pixel at the image center sees the grey sphere."""
        context = make_context(101, 101, samples=4)
        rng = np.random.default_rng(0)
        color = render_pixel(context, unit_sphere_scene, 50, 50, rng)
        # Diffuse grey under a white sky: darker than the sky in every channel
        assert all(c < 1.0 for c in color)


class TestColorToRgb8:
    """Tests for color_to_rgb8()."""

    def test_black_and_white(self):
        """Test the extremes clamp to 0 and 255."""
        assert color_to_rgb8(BLACK) == (0, 0, 0)
        assert color_to_rgb8(WHITE) == (255, 255, 255)

    def test_gamma_two(self):
        """Test sqrt gamma correction and truncation."""
        assert color_to_rgb8(Color(0.25, 0.0625, 0.01)) == (128, 64, 25)

    def test_overbright_clamps(self):
        """Test that values above 1 clamp to 255."""
        assert color_to_rgb8(Color(4.0, 1.5, 0.999)) == (255, 255, 255)

    @pytest.mark.parametrize("value", [-0.5, float("nan"), -math.inf])
    def test_invalid_channels_are_zero(self, value):
        """Test that negative and NaN channels map to 0."""
        assert color_to_rgb8(Color(value, 0.25, 0.25)) == (0, 128, 128)

    @pytest.mark.parametrize("x", [0, 1, 2, 3])
    def test_matches_reference_formula(self, x):
        """Test floor(clamp(sqrt(c), 0, 0.999) * 256)."""
        c = 0.013 * x
        expected = int(min(max(math.sqrt(c), 0.0), 0.999) * 256)
        assert color_to_rgb8(Color(c, 0.0, 0.0))[0] == expected
