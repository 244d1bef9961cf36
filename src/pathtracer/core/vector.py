"""Vector data type and utilities for Monte Carlo ray tracing.

This module provides the Vec3 value type used for points, directions and
colors throughout the renderer, together with the geometric helpers
(reflection, refraction) and the random sampling routines needed by the
camera and the materials.

All random helpers take an explicit random number generator. Any object with
a ``random()`` method returning a uniform float in [0, 1) works, which covers
``numpy.random.Generator`` as well as deterministic test doubles.

Example:
    >>> import numpy as np
    >>> from pathtracer.core.vector import Vec3, random_unit_vector, reflect
    >>> rng = np.random.default_rng(7)
    >>> d = reflect(Vec3(1.0, -1.0, 0.0), Vec3(0.0, 1.0, 0.0))
    >>> d
    Vec3(1.0, 1.0, 0.0)
    >>> n = random_unit_vector(rng)  # uniformly distributed on the sphere
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from typing import Protocol

# Maximum draws for the rejection samplers below
MAX_REJECTION_DRAWS = 100

# Threshold used by near_zero()
NEAR_ZERO_EPSILON = 1e-8


class RandomSource(Protocol):
    """Anything able to produce uniform floats in [0, 1)."""

    def random(self) -> float: ...


class Vec3:
    """A three component vector.

    Vec3 is a value type: operators always return new instances and the
    components are never modified after construction. ``Point3`` and
    ``Color`` are aliases with no structural difference.

    Attributes:
        x: First component (red channel for colors).
        y: Second component (green channel for colors).
        z: Third component (blue channel for colors).
    """

    __slots__ = ("x", "y", "z")

    def __init__(self, x: float = 0.0, y: float = 0.0, z: float = 0.0) -> None:
        self.x = float(x)
        self.y = float(y)
        self.z = float(z)

    @classmethod
    def from_iterable(cls, values) -> Vec3:
        """Build a vector from any sequence of exactly three numbers."""
        x, y, z = values
        return cls(x, y, z)

    @classmethod
    def random_range(cls, low: float, high: float, rng: RandomSource) -> Vec3:
        """Generate a vector with each component uniform in [low, high).

        Args:
            low: Lower bound for every component.
            high: Upper bound for every component.
            rng: The random source.

        Returns:
            A new random vector.
        """
        span = high - low
        return cls(
            low + span * rng.random(),
            low + span * rng.random(),
            low + span * rng.random(),
        )

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __mul__(self, other) -> Vec3:
        # Vec3 * Vec3 is the elementwise (Hadamard) product
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vec3:
        return Vec3(self.x / scalar, self.y / scalar, self.z / scalar)

    # -------------------------------------------------------------------------
    # Value semantics
    # -------------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Vec3):
            return NotImplemented
        return self.x == other.x and self.y == other.y and self.z == other.z

    def __hash__(self) -> int:
        return hash((self.x, self.y, self.z))

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __repr__(self) -> str:
        return f"Vec3({self.x!r}, {self.y!r}, {self.z!r})"

    # -------------------------------------------------------------------------
    # Measurements
    # -------------------------------------------------------------------------

    def length_squared(self) -> float:
        """Squared Euclidean length, avoiding the square root."""
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.length_squared())

    def near_zero(self) -> bool:
        """Check whether all components are close to zero.

        Used to detect degenerate scatter directions.
        """
        s = NEAR_ZERO_EPSILON
        return abs(self.x) < s and abs(self.y) < s and abs(self.z) < s

    def to_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)


Point3 = Vec3
Color = Vec3

WHITE = Color(1.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0)


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product a . b."""
    return a.x * b.x + a.y * b.y + a.z * b.z


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product a x b."""
    return Vec3(
        a.y * b.z - a.z * b.y,
        a.z * b.x - a.x * b.z,
        a.x * b.y - a.y * b.x,
    )


def unit_vector(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v. If v is zero-length,
        returns a zero vector.
    """
    length = v.length()
    if length == 0.0:
        return Vec3(0.0, 0.0, 0.0)
    return v / length


def lerp(start: Color, end: Color, t: float) -> Color:
    """Linearly interpolate between two colors, t=0 gives start."""
    return (1.0 - t) * start + t * end


def reflect(incident: Vec3, normal: Vec3) -> Vec3:
    """Reflect an incident vector about a normal.

    Computes R = I - 2(I . N)N. The normal should be unit length; the
    incident vector keeps its length.

    Args:
        incident: The incoming direction vector (pointing toward the surface).
        normal: The surface normal (should be normalized).

    Returns:
        The reflected direction vector.
    """
    return incident - 2.0 * dot(incident, normal) * normal


def refract(uv: Vec3, normal: Vec3, etai_over_etat: float) -> Vec3:
    """Refract a unit vector through a surface using Snell's law.

    The caller is responsible for checking total internal reflection
    beforehand; this function always returns a transmitted direction.

    Args:
        uv: The incoming direction (unit length).
        normal: The surface normal facing the incoming ray (unit length).
        etai_over_etat: Ratio of refractive indices (n_incident / n_transmitted).

    Returns:
        The refracted direction vector.
    """
    cos_theta = min(dot(-uv, normal), 1.0)
    r_out_perp = etai_over_etat * (uv + cos_theta * normal)
    r_out_parallel = -math.sqrt(abs(1.0 - r_out_perp.length_squared())) * normal
    return r_out_perp + r_out_parallel


# =============================================================================
# Random Sampling Utilities for Monte Carlo
# =============================================================================


def random_in_unit_sphere(rng: RandomSource) -> Vec3:
    """Generate a random point inside the unit sphere.

    Uses rejection sampling on the [-1, 1) cube. The loop is capped at
    MAX_REJECTION_DRAWS candidates; the last candidate is returned if none
    was accepted.

    Args:
        rng: The random source.

    Returns:
        A random point, normally with length < 1.
    """
    p = Vec3(0.0, 0.0, 0.0)
    for _ in range(MAX_REJECTION_DRAWS):
        p = Vec3.random_range(-1.0, 1.0, rng)
        if p.length_squared() < 1.0:
            break
    return p


def random_unit_vector(rng: RandomSource) -> Vec3:
    """Generate a random unit vector uniformly distributed on the sphere.

    This is the normalized version of random_in_unit_sphere().
    """
    return unit_vector(random_in_unit_sphere(rng))


def random_in_unit_disk(rng: RandomSource) -> Vec3:
    """Generate a random point inside the unit disk in the xy-plane.

    Used by the camera to sample the lens aperture.

    Returns:
        A random point (x, y, 0) with x^2 + y^2 < 1.
    """
    p = Vec3(0.0, 0.0, 0.0)
    for _ in range(MAX_REJECTION_DRAWS):
        p = Vec3(rng.random() * 2.0 - 1.0, rng.random() * 2.0 - 1.0, 0.0)
        if p.length_squared() < 1.0:
            break
    return p
