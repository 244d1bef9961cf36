"""Dielectric (glass/water) material implementation.

This module implements transparent materials like glass and water with
refraction and Fresnel reflectance.

Key physics:
    - Snell's law for refraction: n1 * sin(theta1) = n2 * sin(theta2)
    - Schlick's approximation for Fresnel reflectance
    - Total internal reflection when sin(theta_t) > 1

The material randomly chooses between reflection and refraction based on
the Fresnel reflectance probability, which increases at grazing angles.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from pathtracer.core.ray import Ray
from pathtracer.core.vector import (
    WHITE,
    Color,
    RandomSource,
    dot,
    reflect,
    refract,
    unit_vector,
)
from pathtracer.materials.material_type import MaterialType

if TYPE_CHECKING:
    from pathtracer.geometry.hittable import HitRecord


def schlick_reflectance(cosine: float, ref_idx: float) -> float:
    """Compute Fresnel reflectance using Schlick's approximation.

    Args:
        cosine: Cosine of the angle between incident direction and normal.
        ref_idx: Ratio of refractive indices.

    Returns:
        The approximate Fresnel reflectance coefficient.
    """
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


@dataclass(frozen=True)
class DielectricMaterial:
    """Dielectric (glass/water) material properties.

    Attributes:
        ior: Index of refraction. Common values:
            - Air: 1.0
            - Water: 1.33
            - Glass: 1.5
            - Diamond: 2.4
    """

    ior: float = 1.5

    kind: ClassVar[MaterialType] = MaterialType.DIELECTRIC

    def __post_init__(self) -> None:
        if self.ior < 1.0:
            raise ValueError(
                f"Index of refraction = {self.ior} is less than 1.0. "
                "IOR must be >= 1.0 for physically meaningful materials."
            )

    def refraction_ratio(self, front_face: bool) -> float:
        """Ratio n_incident / n_transmitted for the side that was hit."""
        return 1.0 / self.ior if front_face else self.ior

    def scatter(
        self, ray: Ray, hit: HitRecord, rng: RandomSource
    ) -> tuple[Ray, Color] | None:
        """Reflect or refract the incoming ray.

        Total internal reflection occurs when light travels from a denser
        medium to a less dense medium at a steep enough angle. Otherwise the
        ray is reflected with the Schlick probability and refracted the rest
        of the time.

        Args:
            ray: The incoming ray.
            hit: The hit record at the surface.
            rng: The random source.

        Returns:
            A tuple of (scattered_ray, attenuation). Dielectrics always
            scatter and do not absorb, so attenuation is white.
        """
        ratio = self.refraction_ratio(hit.front_face)

        unit_direction = unit_vector(ray.direction)
        cos_theta = min(dot(-unit_direction, hit.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = ratio * sin_theta > 1.0
        if cannot_refract or schlick_reflectance(cos_theta, ratio) > rng.random():
            direction = reflect(unit_direction, hit.normal)
        else:
            direction = refract(unit_direction, hit.normal, ratio)

        return Ray(hit.point, direction), WHITE
