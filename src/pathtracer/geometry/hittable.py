"""Hit records and the interface shared by everything a ray can hit.

A HitRecord is produced by one successful intersection test and lives only
until the material at the hit point has been asked to scatter the ray.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from pathtracer.core.vector import Point3, Vec3, dot

if TYPE_CHECKING:
    from pathtracer.core.aabb import Aabb
    from pathtracer.core.ray import Ray
    from pathtracer.materials.material import Material


@dataclass
class HitRecord:
    """Record of a ray-object intersection.

    Attributes:
        point: The 3D point where the ray intersected the surface.
        normal: The surface normal at the intersection point (unit length).
            Always points against the incoming ray.
        t: The parameter value along the ray where intersection occurred.
        front_face: Whether the ray hit the outside of the surface. When
            False the stored normal is the flipped outward normal.
        material: The material of the object that was hit.
    """

    point: Point3
    normal: Vec3
    t: float
    front_face: bool
    material: Material

    @classmethod
    def from_outward_normal(
        cls,
        ray: Ray,
        t: float,
        point: Point3,
        outward_normal: Vec3,
        material: Material,
    ) -> HitRecord:
        """Build a record, orienting the normal against the ray.

        Args:
            ray: The ray that produced the hit.
            t: The ray parameter of the hit.
            point: The hit point.
            outward_normal: The geometric normal pointing out of the object.
            material: The material of the hit object.

        Returns:
            A HitRecord whose front_face flag is True iff the ray direction
            opposes the outward normal.
        """
        front_face = dot(ray.direction, outward_normal) < 0.0
        normal = outward_normal if front_face else -outward_normal
        return cls(point=point, normal=normal, t=t, front_face=front_face, material=material)


class Hittable(Protocol):
    """Capability interface for objects a ray can intersect."""

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Return the closest hit with t in [t_min, t_max], or None."""
        ...

    def bounds(self) -> Aabb:
        """Return the axis-aligned bounding box of the object."""
        ...
