"""Materials module for scattering models.

This module implements the material models for light scattering:

Components:
    lambertian: Ideal diffuse (Lambertian) reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like materials with refraction (Schlick Fresnel)
    material: The closed Material union and its serialized form

Each material provides ``scatter(ray, hit, rng)`` returning either a
``(scattered_ray, attenuation)`` pair or None when the ray is absorbed.
Materials are immutable and are shared read-only by all render workers.
"""

from .dielectric import DielectricMaterial, schlick_reflectance
from .lambertian import LambertianMaterial
from .material import (
    DEFAULT_MATERIAL,
    Material,
    material_from_dict,
    material_to_dict,
    vec3_from_value,
    vec3_to_value,
)
from .material_type import MaterialType
from .metal import MetalMaterial

__all__ = [
    "Material",
    "MaterialType",
    "DEFAULT_MATERIAL",
    "LambertianMaterial",
    "MetalMaterial",
    "DielectricMaterial",
    "schlick_reflectance",
    "material_from_dict",
    "material_to_dict",
    "vec3_from_value",
    "vec3_to_value",
]
