"""Material type tags."""

from enum import Enum


class MaterialType(str, Enum):
    """Enumeration of supported material types.

    The values are the tags used by the scene file format.
    """

    LAMBERT = "lambert"
    METAL = "metal"
    DIELECTRIC = "dielectric"
