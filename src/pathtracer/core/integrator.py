"""Path tracing integrator for Monte Carlo light transport.

This module evaluates the color seen through one pixel. Rays are traced from
the camera into the scene and bounce off surfaces according to their
materials until they escape to the background, are absorbed, or reach the
maximum depth.

The path is evaluated iteratively. A running throughput starts at white and
is multiplied by each bounce's attenuation in bounce order, which gives the
same result as the recursive form ``attenuation * ray_color(scattered,
depth - 1)``:

    color = a_1 * a_2 * ... * a_k * background(ray_k)

A path that hits max_depth bounces without escaping contributes black.

Example:
    >>> import numpy as np
    >>> from pathtracer.core.integrator import ray_color
    >>> color = ray_color(ray, scene, depth=50, rng=np.random.default_rng())
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from pathtracer.config import T_MIN
from pathtracer.core.ray import Ray
from pathtracer.core.vector import BLACK, WHITE, Color, RandomSource

if TYPE_CHECKING:
    from pathtracer.execute.context import RenderContext
    from pathtracer.scene.region import Region

# Largest value of the gamma corrected channel before scaling to a byte
MAX_CHANNEL = 0.999


def ray_color(ray: Ray, scene: Region, depth: int, rng: RandomSource) -> Color:
    """Compute the radiance carried back along a ray.

    Args:
        ray: The ray to trace.
        scene: The scene to query.
        depth: Maximum number of bounces. 0 yields black immediately.
        rng: The random source handed to the materials.

    Returns:
        The color along the ray path.
    """
    throughput = WHITE
    current = ray

    for _ in range(depth):
        hit = scene.hit(current, T_MIN, math.inf)
        if hit is None:
            return throughput * scene.background_color(current)

        scattered = hit.material.scatter(current, hit, rng)
        if scattered is None:
            return BLACK

        current, attenuation = scattered
        throughput = throughput * attenuation

    return BLACK


def render_pixel(
    context: RenderContext, scene: Region, x: int, y: int, rng: RandomSource
) -> Color:
    """Average ``context.samples`` jittered paths through pixel (x, y).

    Image row 0 is the top of the image while film coordinate v = 1 is the
    top of the film, hence the vertical flip. For single-pixel dimensions
    the film coordinate denominator is clamped to 1.

    Args:
        context: The render parameters and camera.
        scene: The scene to render.
        x: Pixel column.
        y: Pixel row.
        rng: The random source for jitter, lens and material sampling.

    Returns:
        The mean color of all samples, before gamma correction.
    """
    width = context.width
    height = context.height
    u_scale = max(width - 1, 1)
    v_scale = max(height - 1, 1)
    camera = context.camera

    r = g = b = 0.0
    for _ in range(context.samples):
        u = (x + rng.random()) / u_scale
        v = (height - (y + rng.random())) / v_scale
        color = ray_color(camera.get_ray(u, v, rng), scene, context.max_depth, rng)
        r += color.x
        g += color.y
        b += color.z

    n = context.samples
    return Color(r / n, g / n, b / n)


def _channel_to_byte(value: float) -> int:
    # NaN fails the comparison and is treated as 0
    if not value > 0.0:
        return 0
    return int(min(math.sqrt(value), MAX_CHANNEL) * 256)


def color_to_rgb8(color: Color) -> tuple[int, int, int]:
    """Convert a linear color to 8-bit sRGB-ish bytes.

    Each channel is gamma corrected with sqrt (gamma 2), clamped to
    [0, 0.999] and scaled by 256, then truncated. Negative and NaN channels
    map to 0.

    Args:
        color: Linear color.

    Returns:
        The (r, g, b) byte values.
    """
    return (
        _channel_to_byte(color.x),
        _channel_to_byte(color.y),
        _channel_to_byte(color.z),
    )
