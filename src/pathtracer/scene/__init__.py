"""Scene module: the Region scene graph and ways to build one.

Components:
    region: Region, a flat list of hittables with one aggregate bounding box
    loader: Scene file loading (JSON) and dumping, with the ParserError family
    builder: Procedurally generated scenes
"""

from .builder import random_scene
from .loader import (
    FileExtensionError,
    JsonSceneLoader,
    ParserError,
    SceneCorruptedError,
    SceneFormatError,
    SceneLoaderFactory,
    SceneNotFoundError,
    dump_scene,
    load_scene,
    scene_from_dict,
    scene_to_dict,
)
from .region import Region

__all__ = [
    "Region",
    "random_scene",
    "SceneLoaderFactory",
    "JsonSceneLoader",
    "load_scene",
    "dump_scene",
    "scene_from_dict",
    "scene_to_dict",
    "ParserError",
    "FileExtensionError",
    "SceneNotFoundError",
    "SceneFormatError",
    "SceneCorruptedError",
]
