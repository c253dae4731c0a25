"""Scene serialization."""

from .scene_writer import scene_to_json, write_scene

__all__ = [
    "scene_to_json",
    "write_scene",
]
