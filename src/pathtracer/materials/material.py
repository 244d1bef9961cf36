"""The closed set of materials and their serialized form.

A Material is one of LambertianMaterial, MetalMaterial or DielectricMaterial.
The set is closed on purpose: every material is an immutable dataclass with a
``scatter`` method, and adding one means adding a class here plus a branch in
the two conversion functions below.

The serialized form is externally tagged, matching the scene file format:

    {"lambert": {"albedo": {"x": 0.5, "y": 0.5, "z": 0.5}}}
    {"metal": {"albedo": {"x": 0.7, "y": 0.6, "z": 0.5}, "fuzz": 0.0}}
    {"dielectric": {"ior": 1.5}}

The bare string "default" is accepted as a grey Lambertian material.
"""

from __future__ import annotations

from typing import Any, Union

from pathtracer.core.vector import Color, Vec3
from pathtracer.materials.dielectric import DielectricMaterial
from pathtracer.materials.lambertian import LambertianMaterial
from pathtracer.materials.material_type import MaterialType
from pathtracer.materials.metal import MetalMaterial

Material = Union[LambertianMaterial, MetalMaterial, DielectricMaterial]

DEFAULT_MATERIAL = LambertianMaterial(albedo=Color(0.5, 0.5, 0.5))


def vec3_from_value(value: Any) -> Vec3:
    """Parse a vector given as {"x", "y", "z"} or as a three number list.

    Raises:
        ValueError: If the value has any other shape.
    """
    if isinstance(value, dict):
        try:
            return Vec3(float(value["x"]), float(value["y"]), float(value["z"]))
        except KeyError as e:
            raise ValueError(f"Vector is missing component {e.args[0]!r}") from e
    if isinstance(value, (list, tuple)) and len(value) == 3:
        return Vec3(float(value[0]), float(value[1]), float(value[2]))
    raise ValueError(f"Cannot interpret {value!r} as a 3D vector")


def vec3_to_value(v: Vec3) -> dict[str, float]:
    return {"x": v.x, "y": v.y, "z": v.z}


def material_from_dict(data: Any) -> Material:
    """Build a material from its externally tagged dictionary form.

    Args:
        data: Either the string "default" or a single-key dictionary whose
            key is a MaterialType value.

    Returns:
        The material instance.

    Raises:
        ValueError: If the tag is unknown, a parameter is missing, or a
            parameter is outside its valid range.
    """
    if data == "default":
        return DEFAULT_MATERIAL

    if not isinstance(data, dict) or len(data) != 1:
        raise ValueError(f"Material must be a single-key mapping, got {data!r}")

    (tag, params), = data.items()
    try:
        kind = MaterialType(tag)
    except ValueError as e:
        raise ValueError(f"Unknown material type {tag!r}") from e

    params = params or {}
    try:
        if kind is MaterialType.LAMBERT:
            return LambertianMaterial(albedo=vec3_from_value(params["albedo"]))
        if kind is MaterialType.METAL:
            return MetalMaterial(
                albedo=vec3_from_value(params["albedo"]),
                fuzz=float(params.get("fuzz", 0.0)),
            )
        return DielectricMaterial(ior=float(params.get("ior", 1.5)))
    except KeyError as e:
        raise ValueError(f"Material {tag!r} is missing parameter {e.args[0]!r}") from e


def material_to_dict(material: Material) -> dict[str, Any]:
    """Convert a material to its externally tagged dictionary form."""
    if isinstance(material, LambertianMaterial):
        return {material.kind.value: {"albedo": vec3_to_value(material.albedo)}}
    if isinstance(material, MetalMaterial):
        return {
            material.kind.value: {
                "albedo": vec3_to_value(material.albedo),
                "fuzz": material.fuzz,
            }
        }
    if isinstance(material, DielectricMaterial):
        return {material.kind.value: {"ior": material.ior}}
    raise TypeError(f"Unsupported material {material!r}")
