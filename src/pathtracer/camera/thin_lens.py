"""Thin-lens camera model for perspective ray generation with depth of field.

This module implements a camera that generates primary rays for rendering.
The camera supports:
- Look-at positioning (look_from, look_at, up)
- Vertical field of view
- Arbitrary aspect ratios (taken from the output image size)
- Depth of field through a circular lens aperture and a focal distance

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from look_at toward look_from (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

Example:
    >>> import numpy as np
    >>> from pathtracer.camera.thin_lens import Camera, CameraConfig
    >>> from pathtracer.core.vector import Point3
    >>> config = CameraConfig(
    ...     look_from=Point3(0.0, 0.0, 3.0),
    ...     look_at=Point3(0.0, 0.0, 0.0),
    ...     vertical_fov=60.0,
    ... )
    >>> camera = Camera(config, 320, 240)
    >>> ray = camera.get_ray(0.5, 0.5, np.random.default_rng())  # image center
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Point3, RandomSource, Vec3, random_in_unit_disk

# =============================================================================
# Camera Configuration
# =============================================================================


@dataclass(frozen=True)
class CameraConfig:
    """Serializable camera configuration.

    Attributes:
        look_from: Camera position in world space.
        look_at: Point the camera is looking at in world space.
        up: Up direction vector for camera orientation (typically (0, 1, 0)).
        vertical_fov: Vertical field of view in degrees, in (0, 180).
        aperture: Lens diameter. 0 gives a pinhole camera with everything in
            focus.
        focal_distance: Distance from look_from to the plane in perfect focus.
    """

    look_from: Point3 = field(default_factory=lambda: Point3(0.0, 0.0, 0.0))
    look_at: Point3 = field(default_factory=lambda: Point3(0.0, 0.0, -1.0))
    up: Vec3 = field(default_factory=lambda: Vec3(0.0, 1.0, 0.0))
    vertical_fov: float = 90.0
    aperture: float = 0.0
    focal_distance: float = 1.0

    def validate(self) -> None:
        """Check that the configuration describes a usable camera.

        Raises:
            ValueError: If the field of view is outside (0, 180) degrees,
                the aperture is negative, the focal distance is not positive,
                look_from equals look_at, or up is parallel to the viewing
                direction.
        """
        if not 0.0 < self.vertical_fov < 180.0:
            raise ValueError(
                f"Vertical field of view = {self.vertical_fov} is outside (0, 180) degrees."
            )
        if self.aperture < 0.0:
            raise ValueError(f"Aperture = {self.aperture} must not be negative.")
        if self.focal_distance <= 0.0:
            raise ValueError(f"Focal distance = {self.focal_distance} must be positive.")

        view = np.array(tuple(self.look_from - self.look_at), dtype=np.float64)
        if not np.any(view):
            raise ValueError("look_from and look_at must be different points.")
        up = np.array(tuple(self.up), dtype=np.float64)
        if np.linalg.norm(np.cross(up, view)) == 0.0:
            raise ValueError("The up vector must not be parallel to the viewing direction.")


# =============================================================================
# Camera
# =============================================================================


class Camera:
    """A thin-lens camera bound to an output image size.

    The viewport is a virtual image plane at focal_distance from the camera.
    Ray directions are computed by interpolating across this viewport, and
    ray origins are jittered across the lens to produce defocus blur.

    Attributes:
        config: The configuration the camera was built from.
        film_width: Output image width in pixels.
        film_height: Output image height in pixels.
        origin: Camera position (look_from).
        u: Right direction of the camera frame.
        v: Up direction of the camera frame.
        w: Backward direction (opposite view direction).
        horizontal: Full viewport width vector at the focal plane.
        vertical: Full viewport height vector at the focal plane.
        lower_left_corner: Lower-left corner of the viewport.
        lens_radius: Half the aperture.
    """

    def __init__(self, config: CameraConfig, width: int, height: int) -> None:
        """Initialize camera state from configuration.

        Args:
            config: Camera configuration with position, orientation and lens.
            width: Output image width in pixels (positive).
            height: Output image height in pixels (positive).

        Raises:
            ValueError: If the configuration is degenerate or the image size
                is not positive.
        """
        config.validate()
        if width <= 0 or height <= 0:
            raise ValueError(f"Image dimensions ({width}x{height}) must be positive.")

        self.config = config
        self.film_width = width
        self.film_height = height

        # Convert FOV from degrees to radians
        theta = math.radians(config.vertical_fov)
        h = math.tan(theta / 2.0)

        # Viewport dimensions at unit distance
        viewport_height = 2.0 * h
        viewport_width = viewport_height * (width / height)

        # Build orthonormal basis using NumPy
        look_from = np.array(tuple(config.look_from), dtype=np.float64)
        look_at = np.array(tuple(config.look_at), dtype=np.float64)
        vup = np.array(tuple(config.up), dtype=np.float64)

        # w points from look_at toward look_from (backward)
        w = look_from - look_at
        w = w / np.linalg.norm(w)

        # u points right (perpendicular to w and up)
        u = np.cross(vup, w)
        u = u / np.linalg.norm(u)

        # v points up in the camera's frame
        v = np.cross(w, u)

        horizontal = config.focal_distance * viewport_width * u
        vertical = config.focal_distance * viewport_height * v
        lower_left = look_from - horizontal / 2.0 - vertical / 2.0 - config.focal_distance * w

        self.origin = Point3.from_iterable(look_from.tolist())
        self.u = Vec3.from_iterable(u.tolist())
        self.v = Vec3.from_iterable(v.tolist())
        self.w = Vec3.from_iterable(w.tolist())
        self.horizontal = Vec3.from_iterable(horizontal.tolist())
        self.vertical = Vec3.from_iterable(vertical.tolist())
        self.lower_left_corner = Point3.from_iterable(lower_left.tolist())
        self.lens_radius = config.aperture / 2.0

    @property
    def aspect_ratio(self) -> float:
        return self.film_width / self.film_height

    def get_ray(self, s: float, t: float, rng: RandomSource, fuzz: float = 1.0) -> Ray:
        """Generate a ray through normalized film coordinates (s, t).

        The coordinates are normalized:
        - s = 0: left edge of the film, s = 1: right edge
        - t = 0: bottom edge of the film, t = 1: top edge

        The ray origin is offset across the lens disk and the direction is
        corrected by the same offset, so all rays for a film point converge
        on the focal plane.

        Args:
            s: Horizontal film coordinate.
            t: Vertical film coordinate.
            rng: The random source used for lens sampling.
            fuzz: Scale applied to the lens radius. 0 disables defocus blur.

        Returns:
            A Ray from the (jittered) lens position through the film point.
        """
        radius = self.lens_radius * fuzz
        if radius > 0.0:
            rd = radius * random_in_unit_disk(rng)
            offset = self.u * rd.x + self.v * rd.y
        else:
            offset = Vec3(0.0, 0.0, 0.0)

        target = self.lower_left_corner + s * self.horizontal + t * self.vertical
        return Ray(self.origin + offset, target - self.origin - offset)

    def __repr__(self) -> str:
        return (
            f"Camera(origin={self.origin!r}, film={self.film_width}x{self.film_height}, "
            f"lens_radius={self.lens_radius!r})"
        )
