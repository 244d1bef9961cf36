"""Procedurally generated scenes.

``random_scene`` builds the classic "many spheres" scene: a large ground
sphere, a grid of small randomly placed and randomly shaded spheres, and
three large feature spheres (glass, diffuse and mirror metal).

Example:
    >>> from pathtracer.scene.builder import random_scene
    >>> region = random_scene(seed=7)
    >>> region.camera_config.vertical_fov
    20.0
"""

from __future__ import annotations

import numpy as np

from pathtracer.camera.thin_lens import CameraConfig
from pathtracer.core.vector import Color, Point3, RandomSource, Vec3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials import DielectricMaterial, LambertianMaterial, MetalMaterial
from pathtracer.scene.region import Region

# Small spheres are placed on a GRID_EXTENT x GRID_EXTENT grid around the origin
GRID_EXTENT = 11
SMALL_RADIUS = 0.2
GLASS_IOR = 1.5

# Small spheres closer than this to the metal feature sphere are skipped
CLEARANCE = 0.9

BACKGROUND = Color(0.5, 0.7, 0.9)


def _small_sphere_material(choice: float, rng: RandomSource):
    if choice < 0.8:
        albedo = Vec3.random_range(0.0, 1.0, rng) * Vec3.random_range(0.0, 1.0, rng)
        return LambertianMaterial(albedo=albedo)
    if choice < 0.95:
        return MetalMaterial(albedo=Vec3.random_range(0.5, 1.0, rng), fuzz=rng.random())
    return DielectricMaterial(ior=GLASS_IOR)


def random_scene(rng: RandomSource | None = None, seed: int | None = None) -> Region:
    """Build the random spheres scene.

    Args:
        rng: Random source for placement and materials. Defaults to a numpy
            generator seeded with ``seed``.
        seed: Seed used when no rng is given.

    Returns:
        A Region with its camera configured to look at the feature spheres.
    """
    if rng is None:
        rng = np.random.default_rng(seed)

    camera_config = CameraConfig(
        look_from=Point3(13.0, 2.0, 3.0),
        look_at=Point3(0.0, 0.0, 0.0),
        up=Vec3(0.0, 1.0, 0.0),
        vertical_fov=20.0,
        aperture=0.1,
        focal_distance=10.0,
    )
    region = Region(background=BACKGROUND, camera_config=camera_config)

    # Ground
    region.push(
        Sphere(
            center=Point3(0.0, -1000.0, 0.0),
            radius=1000.0,
            material=LambertianMaterial(albedo=Color(0.5, 0.5, 0.5)),
        )
    )

    keep_out = Point3(4.0, SMALL_RADIUS, 0.0)
    for a in range(-GRID_EXTENT, GRID_EXTENT):
        for b in range(-GRID_EXTENT, GRID_EXTENT):
            choice = rng.random()
            center = Point3(a + 0.9 * rng.random(), SMALL_RADIUS, b + 0.9 * rng.random())
            if (center - keep_out).length() <= CLEARANCE:
                continue
            region.push(
                Sphere(
                    center=center,
                    radius=SMALL_RADIUS,
                    material=_small_sphere_material(choice, rng),
                )
            )

    # Large feature spheres
    features = (
        (Point3(0.0, 1.0, 0.0), DielectricMaterial(ior=GLASS_IOR)),
        (Point3(-4.0, 1.0, 0.0), LambertianMaterial(albedo=Color(0.4, 0.2, 0.1))),
        (Point3(4.0, 1.0, 0.0), MetalMaterial(albedo=Color(0.7, 0.6, 0.5), fuzz=0.0)),
    )
    for center, material in features:
        region.push(Sphere(center=center, radius=1.0, material=material))

    return region
