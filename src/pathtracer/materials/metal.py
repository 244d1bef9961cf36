"""Metal (specular reflective) material implementation.

This module implements specular reflection with optional fuzziness. Perfect
metals (fuzz=0) produce mirror-like reflections, while fuzzier metals perturb
the reflected direction by a random unit vector scaled by the fuzz value.

The reflection formula is:
    R = I - 2(I . N)N

where I is the incident direction and N is the surface normal.

Rays whose perturbed direction ends up below the surface are absorbed, which
models self-shadowing at grazing angles.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, RandomSource, dot, random_unit_vector, reflect
from pathtracer.materials._validation import check_albedo
from pathtracer.materials.material_type import MaterialType

if TYPE_CHECKING:
    from pathtracer.geometry.hittable import HitRecord


@dataclass(frozen=True)
class MetalMaterial:
    """Metal (specular reflective) material properties.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
            Represents the color tint of reflected light.
        fuzz: The reflection blur in [0, 1].
            0 = perfect mirror, 1 = maximum fuzziness.
    """

    albedo: Color
    fuzz: float = 0.0

    kind: ClassVar[MaterialType] = MaterialType.METAL

    def __post_init__(self) -> None:
        check_albedo(self.albedo)
        if self.fuzz < 0.0 or self.fuzz > 1.0:
            raise ValueError(
                f"Fuzz = {self.fuzz} is outside [0, 1]. "
                "Fuzz must be between 0 (perfect mirror) and 1 (maximum fuzz)."
            )

    def scatter(
        self, ray: Ray, hit: HitRecord, rng: RandomSource
    ) -> tuple[Ray, Color] | None:
        """Compute the reflected ray for the metal surface.

        Args:
            ray: The incoming ray.
            hit: The hit record at the surface.
            rng: The random source, only drawn from when fuzz > 0.

        Returns:
            A tuple of (scattered_ray, attenuation) where attenuation is the
            albedo, or None if the reflected ray points into the surface.
        """
        direction = reflect(ray.direction, hit.normal)
        if self.fuzz > 0.0:
            direction = direction + self.fuzz * random_unit_vector(rng)

        if dot(direction, hit.normal) > 0.0:
            return Ray(hit.point, direction), self.albedo
        return None
