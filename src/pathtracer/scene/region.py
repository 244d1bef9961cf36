"""Region: the scene graph queried by the path integrator.

A Region is a flat collection of hittable objects with one aggregate
axis-aligned bounding box, a background color and the camera configuration
the scene was authored with.

Ray queries first test the aggregate box and return immediately on a miss,
so no object is consulted for rays that leave the scene. Otherwise every
object is tested in turn with a shrinking upper bound, which yields the
closest hit.

The bounding box is maintained by push(). Objects appended to ``objects``
directly are not reflected in the box until recalculate_bounds() is called.

Example:
    >>> from pathtracer.core.vector import Color, Point3
    >>> from pathtracer.geometry import Sphere
    >>> from pathtracer.materials import DEFAULT_MATERIAL
    >>> from pathtracer.scene.region import Region
    >>> region = Region(background=Color(0.5, 0.7, 1.0))
    >>> region.push(Sphere(Point3(0, 0, -1), 0.5, DEFAULT_MATERIAL))
    >>> len(region)
    1
"""

from __future__ import annotations

from pathtracer.camera.thin_lens import CameraConfig
from pathtracer.core.aabb import Aabb
from pathtracer.core.ray import Ray
from pathtracer.core.vector import WHITE, Color, lerp, unit_vector
from pathtracer.geometry.hittable import HitRecord, Hittable


class Region:
    """A scene: objects, their aggregate bounds, background and camera.

    The region is built once and then shared read-only by every render
    worker.

    Attributes:
        objects: The hittable objects, in insertion order.
        bounding_box: Union of the bounds of all objects. Empty for an
            empty region.
        background: Color returned for rays that leave the scene.
        camera_config: The camera the scene is meant to be viewed with.
    """

    def __init__(
        self,
        background: Color,
        camera_config: CameraConfig | None = None,
        objects: list[Hittable] | None = None,
    ) -> None:
        self.background = background
        self.camera_config = camera_config if camera_config is not None else CameraConfig()
        self.objects: list[Hittable] = list(objects) if objects else []
        self.bounding_box = Aabb.empty()
        self.recalculate_bounds()

    def push(self, obj: Hittable) -> None:
        """Add an object and grow the bounding box to include it."""
        self.objects.append(obj)
        self.bounding_box = self.bounding_box.expand(obj.bounds())

    def recalculate_bounds(self) -> None:
        """Recompute the bounding box from scratch over all objects."""
        box = Aabb.empty()
        for obj in self.objects:
            box = box.expand(obj.bounds())
        self.bounding_box = box

    def bounds(self) -> Aabb:
        return self.bounding_box

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Find the closest intersection with t in [t_min, t_max].

        Args:
            ray: The ray to trace.
            t_min: Minimum accepted ray parameter.
            t_max: Maximum accepted ray parameter.

        Returns:
            The HitRecord of the nearest object hit, or None.
        """
        if not self.bounding_box.hit(ray, t_max):
            return None

        closest: HitRecord | None = None
        closest_so_far = t_max
        for obj in self.objects:
            record = obj.hit(ray, t_min, closest_so_far)
            if record is not None:
                closest_so_far = record.t
                closest = record
        return closest

    def background_color(self, ray: Ray) -> Color:
        """Sky gradient from white at the horizon-down to the background color.

        The blend factor is 0.5 * (y + 1) of the unit ray direction, so rays
        pointing straight up get the pure background color.
        """
        t = 0.5 * (unit_vector(ray.direction).y + 1.0)
        return lerp(WHITE, self.background, t)

    def __len__(self) -> int:
        return len(self.objects)

    def __repr__(self) -> str:
        return f"Region(objects={len(self.objects)}, background={self.background!r})"
