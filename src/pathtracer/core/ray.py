"""Ray data structure.

A ray is a half-line ``origin + t * direction``. Rays are transient: one is
created for every camera sample and for every bounce, and discarded right
after the scatter evaluation that consumes it.

Example:
    >>> from pathtracer.core.ray import Ray
    >>> from pathtracer.core.vector import Vec3
    >>> ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
    >>> ray.at(5.0)  # Point 5 units along the ray
    Vec3(0.0, 0.0, -5.0)
"""

from __future__ import annotations

import math

from pathtracer.core.vector import Point3, Vec3


def _inverse(component: float) -> float:
    """Reciprocal that maps a (signed) zero to a signed infinity."""
    if component == 0.0:
        return math.copysign(math.inf, component)
    return 1.0 / component


class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. It is not required to
            be normalized.
        inv_direction: Componentwise reciprocal of the direction, precomputed
            for the bounding box slab test. Zero components become signed
            infinities.
    """

    __slots__ = ("origin", "direction", "inv_direction")

    def __init__(self, origin: Point3, direction: Vec3) -> None:
        self.origin = origin
        self.direction = direction
        self.inv_direction = Vec3(
            _inverse(direction.x),
            _inverse(direction.y),
            _inverse(direction.z),
        )

    def at(self, t: float) -> Point3:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point origin + t * direction.
        """
        return self.origin + t * self.direction

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin!r}, direction={self.direction!r})"
