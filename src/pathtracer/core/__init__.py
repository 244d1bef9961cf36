"""Core module containing fundamental types and the path integrator.

This module provides the core data structures and algorithms:

Components:
    vector: Vec3 value type, vector helpers and random sampling
    ray: Ray representation with a precomputed inverse direction
    aabb: Axis-aligned bounding boxes (slab test)
    integrator: Path tracing integrator and byte conversion

The integrator is imported from its own module to keep this package free of
scene dependencies.
"""

from .aabb import Aabb
from .ray import Ray
from .vector import (
    BLACK,
    WHITE,
    Color,
    Point3,
    RandomSource,
    Vec3,
    cross,
    dot,
    lerp,
    random_in_unit_disk,
    random_in_unit_sphere,
    random_unit_vector,
    reflect,
    refract,
    unit_vector,
)

__all__ = [
    "Aabb",
    "Ray",
    "Vec3",
    "Point3",
    "Color",
    "RandomSource",
    "WHITE",
    "BLACK",
    "dot",
    "cross",
    "unit_vector",
    "lerp",
    "reflect",
    "refract",
    "random_in_unit_sphere",
    "random_unit_vector",
    "random_in_unit_disk",
]
