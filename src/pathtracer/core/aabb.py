"""Axis-aligned bounding boxes.

An AABB is used as an O(1) rejection test before scanning the objects of a
region. Boxes are immutable; ``expand`` returns the union of two boxes, which
is commutative and associative, so bounds can be folded in any order.

The empty box spans ``(+inf, +inf, +inf) .. (-inf, -inf, -inf)`` so that the
first expansion establishes valid bounds.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Point3


@dataclass(frozen=True)
class Aabb:
    """An axis-aligned bounding box.

    Attributes:
        min: The lower corner of the box.
        max: The upper corner of the box. ``min <= max`` componentwise once
            any object has been merged in.
    """

    min: Point3
    max: Point3

    @classmethod
    def empty(cls) -> Aabb:
        """Create the empty box, the identity element of expand()."""
        return cls(
            Point3(math.inf, math.inf, math.inf),
            Point3(-math.inf, -math.inf, -math.inf),
        )

    def is_empty(self) -> bool:
        """Check whether the box contains no point at all."""
        return self.min.x > self.max.x or self.min.y > self.max.y or self.min.z > self.max.z

    def expand(self, other: Aabb) -> Aabb:
        """Return the smallest box containing both this box and other."""
        return Aabb(
            Point3(
                min(self.min.x, other.min.x),
                min(self.min.y, other.min.y),
                min(self.min.z, other.min.z),
            ),
            Point3(
                max(self.max.x, other.max.x),
                max(self.max.y, other.max.y),
                max(self.max.z, other.max.z),
            ),
        )

    def hit(self, ray: Ray, t_max: float) -> bool:
        """Test whether a ray intersects the box (slab method).

        For each axis the entry and exit distances are computed from the
        ray's inverse direction and the three intervals are intersected.
        An axis along which the ray does not move is handled explicitly:
        the ray misses when its origin is outside that slab and the axis
        is otherwise unconstrained, so 0 * inf never produces a NaN.

        Args:
            ray: The ray to test.
            t_max: Hits starting at or beyond this distance are ignored.

        Returns:
            True if the overlap interval is non-empty and starts before t_max.
        """
        if self.is_empty():
            return False

        t_near = -math.inf
        t_far = math.inf

        for lo, hi, origin, direction, inv in (
            (self.min.x, self.max.x, ray.origin.x, ray.direction.x, ray.inv_direction.x),
            (self.min.y, self.max.y, ray.origin.y, ray.direction.y, ray.inv_direction.y),
            (self.min.z, self.max.z, ray.origin.z, ray.direction.z, ray.inv_direction.z),
        ):
            if direction == 0.0:
                if origin < lo or origin > hi:
                    return False
                continue

            t1 = (lo - origin) * inv
            t2 = (hi - origin) * inv
            if t1 > t2:
                t1, t2 = t2, t1
            t_near = max(t_near, t1)
            t_far = min(t_far, t2)

        return t_far >= max(0.0, t_near) and t_near < t_max
