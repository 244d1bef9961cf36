"""Scene file loading and dumping.

Scene files are selected by extension through SceneLoaderFactory. JSON is the
only supported format:

    {
        "background": {"x": 0.5, "y": 0.7, "z": 1.0},
        "camera": {
            "look_from": {"x": 13, "y": 2, "z": 3},
            "look_at": {"x": 0, "y": 0, "z": 0},
            "up": {"x": 0, "y": 1, "z": 0},
            "vertical_fov": 20.0,
            "aperture": 0.1,
            "focal_distance": 10.0
        },
        "spheres": [
            {
                "center": {"x": 0, "y": 0, "z": -1},
                "radius": 0.5,
                "material": {"lambert": {"albedo": {"x": 0.1, "y": 0.2, "z": 0.5}}}
            }
        ]
    }

The camera block and every key in it are optional and default to the values
of CameraConfig. A sphere without a material uses the default grey
Lambertian. Vectors may also be written as three element lists.

Example:
    >>> from pathtracer.scene.loader import load_scene
    >>> region = load_scene("examples/scenes/three_spheres.json")
"""

from __future__ import annotations

import json
import logging
from dataclasses import fields
from pathlib import Path
from typing import Any

from pathtracer.camera.thin_lens import CameraConfig
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.material import (
    DEFAULT_MATERIAL,
    material_from_dict,
    material_to_dict,
    vec3_from_value,
    vec3_to_value,
)
from pathtracer.scene.region import Region

logger = logging.getLogger(__name__)

_VECTOR_CAMERA_FIELDS = ("look_from", "look_at", "up")
_SCALAR_CAMERA_FIELDS = ("vertical_fov", "aperture", "focal_distance")


# =============================================================================
# Errors
# =============================================================================


class ParserError(Exception):
    """Base class for scene file errors."""


class FileExtensionError(ParserError):
    """The scene file has no supported extension."""


class SceneNotFoundError(ParserError, FileNotFoundError):
    """The scene file does not exist."""


class SceneFormatError(ParserError):
    """The file cannot be parsed as its declared format."""


class SceneCorruptedError(ParserError):
    """The file parses but does not describe a valid scene."""


# =============================================================================
# Document mapping
# =============================================================================


def camera_config_from_dict(data: dict[str, Any]) -> CameraConfig:
    """Build a CameraConfig from its dictionary form, defaulting missing keys.

    Raises:
        ValueError: If a key is unknown or a value has the wrong shape.
    """
    known = {f.name for f in fields(CameraConfig)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown camera keys: {', '.join(sorted(unknown))}")

    kwargs: dict[str, Any] = {}
    for name in _VECTOR_CAMERA_FIELDS:
        if name in data:
            kwargs[name] = vec3_from_value(data[name])
    for name in _SCALAR_CAMERA_FIELDS:
        if name in data:
            kwargs[name] = float(data[name])
    return CameraConfig(**kwargs)


def camera_config_to_dict(config: CameraConfig) -> dict[str, Any]:
    data: dict[str, Any] = {
        name: vec3_to_value(getattr(config, name)) for name in _VECTOR_CAMERA_FIELDS
    }
    data.update({name: getattr(config, name) for name in _SCALAR_CAMERA_FIELDS})
    return data


def sphere_from_dict(data: dict[str, Any]) -> Sphere:
    if not isinstance(data, dict):
        raise ValueError(f"Sphere must be an object, got {data!r}")
    material = data.get("material")
    return Sphere(
        center=vec3_from_value(data["center"]),
        radius=float(data["radius"]),
        material=DEFAULT_MATERIAL if material is None else material_from_dict(material),
    )


def sphere_to_dict(sphere: Sphere) -> dict[str, Any]:
    return {
        "center": vec3_to_value(sphere.center),
        "radius": sphere.radius,
        "material": material_to_dict(sphere.material),
    }


def scene_from_dict(document: Any) -> Region:
    """Build a Region from a parsed scene document.

    Raises:
        SceneCorruptedError: If the document does not match the scene schema.
    """
    try:
        if not isinstance(document, dict):
            raise ValueError("Scene document must be an object")

        camera_data = document.get("camera") or {}
        if not isinstance(camera_data, dict):
            raise ValueError("'camera' must be an object")

        region = Region(
            background=vec3_from_value(document["background"]),
            camera_config=camera_config_from_dict(camera_data),
        )
        spheres = document["spheres"]
        if not isinstance(spheres, list):
            raise ValueError("'spheres' must be a list")
        for index, sphere_data in enumerate(spheres):
            try:
                region.push(sphere_from_dict(sphere_data))
            except (KeyError, TypeError, ValueError) as e:
                raise ValueError(f"sphere {index}: {e}") from e
    except KeyError as e:
        raise SceneCorruptedError(f"Scene is missing required key {e.args[0]!r}") from e
    except (TypeError, ValueError) as e:
        raise SceneCorruptedError(f"Scene does not match the schema: {e}") from e

    region.recalculate_bounds()
    return region


def scene_to_dict(region: Region) -> dict[str, Any]:
    """Convert a Region of spheres to its JSON document form.

    Raises:
        TypeError: If the region holds objects other than spheres.
    """
    spheres = []
    for obj in region.objects:
        if not isinstance(obj, Sphere):
            raise TypeError(f"Cannot serialize scene object {obj!r}")
        spheres.append(sphere_to_dict(obj))

    return {
        "background": vec3_to_value(region.background),
        "camera": camera_config_to_dict(region.camera_config),
        "spheres": spheres,
    }


# =============================================================================
# Loaders
# =============================================================================


class JsonSceneLoader:
    """Loads a Region from a JSON scene file.

    Attributes:
        path: The scene file.
    """

    extension = ".json"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> Region:
        """Read, parse and map the scene file.

        Returns:
            The Region with up to date bounds.

        Raises:
            SceneNotFoundError: If the file does not exist.
            SceneFormatError: If the file is not valid JSON.
            SceneCorruptedError: If the JSON does not describe a scene.
        """
        logger.info("Parsing scene file %s", self.path)
        if not self.path.is_file():
            logger.error("Scene file does not exist at %s", self.path)
            raise SceneNotFoundError(f"Scene file does not exist: {self.path}")

        try:
            with open(self.path, encoding="utf-8") as f:
                document = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Scene file %s is not valid JSON: %s", self.path, e)
            raise SceneFormatError(f"Scene file {self.path} is not valid JSON: {e}") from e

        try:
            region = scene_from_dict(document)
        except SceneCorruptedError as e:
            logger.error("Scene file %s is corrupted: %s", self.path, e)
            raise

        logger.info("Loaded %d objects from %s", len(region), self.path)
        return region


class SceneLoaderFactory:
    """Chooses a scene loader from the file extension."""

    loaders = {JsonSceneLoader.extension: JsonSceneLoader}

    @classmethod
    def get_loader(cls, path: str | Path) -> JsonSceneLoader:
        """Create the loader for a scene file.

        Raises:
            FileExtensionError: If no loader handles the file extension.
        """
        suffix = Path(path).suffix.lower()
        loader_cls = cls.loaders.get(suffix)
        if loader_cls is None:
            logger.error("Unknown file extension on the scene file %s", path)
            raise FileExtensionError(
                f"Unsupported scene file extension {suffix or '(none)'!r} for {path}"
            )
        return loader_cls(path)


def load_scene(path: str | Path) -> Region:
    """Load a scene file with the loader matching its extension."""
    return SceneLoaderFactory.get_loader(path).load()


def dump_scene(region: Region, path: str | Path) -> None:
    """Write a Region of spheres as a JSON scene file."""
    path = Path(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(scene_to_dict(region), f, indent=2)
        f.write("\n")
    logger.info("Wrote %d objects to %s", len(region), path)
