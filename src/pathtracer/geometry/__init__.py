"""Geometry module for shape primitives and intersection records.

Components:
    hittable: HitRecord and the Hittable interface
    sphere: Sphere primitive with ray-sphere intersection

Every primitive implements the Hittable interface: ``hit(ray, t_min, t_max)``
returning a HitRecord or None, and ``bounds()`` returning its Aabb.
"""

from .hittable import HitRecord, Hittable
from .sphere import Sphere

__all__ = ["HitRecord", "Hittable", "Sphere"]
