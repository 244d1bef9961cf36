"""Lambertian (ideal diffuse) material implementation.

This module implements ideal diffuse reflection. The scattered direction is
the surface normal plus a random unit vector, which yields a cosine-weighted
distribution over the hemisphere around the normal. With that sampling the
cosine and PDF terms cancel and the attenuation is simply the albedo.

Example:
    >>> import numpy as np
    >>> from pathtracer.materials.lambertian import LambertianMaterial
    >>> from pathtracer.core.vector import Color
    >>> matte = LambertianMaterial(albedo=Color(0.8, 0.3, 0.3))
    >>> # scattered, attenuation = matte.scatter(ray, hit, np.random.default_rng())
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, RandomSource, random_unit_vector
from pathtracer.materials._validation import check_albedo
from pathtracer.materials.material_type import MaterialType

if TYPE_CHECKING:
    from pathtracer.geometry.hittable import HitRecord


@dataclass(frozen=True)
class LambertianMaterial:
    """Lambertian (ideal diffuse) material properties.

    Attributes:
        albedo: The diffuse reflectance color (RGB, each component in [0, 1]).
            Represents the fraction of light reflected for each color channel.
    """

    albedo: Color

    kind: ClassVar[MaterialType] = MaterialType.LAMBERT

    def __post_init__(self) -> None:
        check_albedo(self.albedo)

    def scatter(
        self, ray: Ray, hit: HitRecord, rng: RandomSource
    ) -> tuple[Ray, Color] | None:
        """Sample a scattered ray for the diffuse surface.

        Args:
            ray: The incoming ray (unused, diffuse scattering does not depend
                on the incident direction).
            hit: The hit record at the surface.
            rng: The random source.

        Returns:
            A tuple of (scattered_ray, attenuation). Lambertian surfaces
            always scatter.
        """
        scatter_direction = hit.normal + random_unit_vector(rng)

        # Catch degenerate scatter direction (random vector opposite to normal)
        if scatter_direction.near_zero():
            scatter_direction = hit.normal

        return Ray(hit.point, scatter_direction), self.albedo
