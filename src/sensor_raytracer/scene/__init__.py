"""Scene module for primitive collections and color resolution.

Components:
    scene: Ordered primitive/color collection with nearest-hit queries
    resolver: Ray to color mapping with a flat background fallback
    presets: Built-in scenes (the default two-sphere scene)
"""

from .presets import SCENES, get_scene, two_sphere_scene, two_sphere_scene_with_ground
from .resolver import resolve_color
from .scene import T_MAX, T_MIN, Intersectable, Scene, SceneHit, SceneObject

__all__ = [
    "Scene",
    "SceneObject",
    "SceneHit",
    "Intersectable",
    "T_MIN",
    "T_MAX",
    "resolve_color",
    "two_sphere_scene",
    "two_sphere_scene_with_ground",
    "get_scene",
    "SCENES",
]
