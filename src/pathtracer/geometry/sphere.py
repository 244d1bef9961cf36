"""Sphere primitive with ray-sphere intersection.

The intersection solves |origin + t*direction - center|^2 = radius^2, a
quadratic in t. Using the half-b formulation:

    a      = dot(direction, direction)
    half_b = dot(oc, direction)          with oc = origin - center
    c      = dot(oc, oc) - radius^2
    discriminant = half_b^2 - a*c

The smaller root is tried first, then the larger one.

Example:
    >>> from pathtracer.geometry.sphere import Sphere
    >>> from pathtracer.materials import DEFAULT_MATERIAL
    >>> from pathtracer.core.vector import Point3
    >>> sphere = Sphere(center=Point3(0, 0, -1), radius=0.5, material=DEFAULT_MATERIAL)
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pathtracer.core.aabb import Aabb
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Point3, Vec3, dot
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials.material import Material


@dataclass(frozen=True)
class Sphere:
    """A sphere defined by center point and radius.

    A negative radius keeps the geometry but flips the outward normal, which
    is the usual way to model the inside surface of a hollow glass sphere.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere.
        material: The material of the surface.
    """

    center: Point3
    radius: float
    material: Material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Test for ray-sphere intersection.

        Args:
            ray: The ray to test.
            t_min: Minimum t value to consider a valid hit (avoids
                self-intersection).
            t_max: Maximum t value to consider a valid hit.

        Returns:
            A HitRecord for the nearest root in [t_min, t_max], or None if
            the ray misses. A zero-length ray direction is always a miss.
        """
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        if a == 0.0:
            return None

        half_b = dot(oc, ray.direction)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = half_b * half_b - a * c
        if discriminant < 0.0:
            return None

        sqrt_d = math.sqrt(discriminant)

        # Find the nearest root that lies in the acceptable range
        root = (-half_b - sqrt_d) / a
        if root < t_min or t_max < root:
            root = (-half_b + sqrt_d) / a
            if root < t_min or t_max < root:
                return None

        point = ray.at(root)
        outward_normal = (point - self.center) / self.radius
        return HitRecord.from_outward_normal(ray, root, point, outward_normal, self.material)

    def bounds(self) -> Aabb:
        """Axis-aligned box enclosing the sphere."""
        r = abs(self.radius)
        extent = Vec3(r, r, r)
        return Aabb(self.center - extent, self.center + extent)
