"""Map rays to colors through a scene."""

from __future__ import annotations

from sensor_raytracer.core.color import Color
from sensor_raytracer.core.ray import Ray
from sensor_raytracer.scene.scene import T_MAX, T_MIN, Scene


def resolve_color(ray: Ray, scene: Scene, t_min: float = T_MIN, t_max: float = T_MAX) -> Color:
    """Return the fixed color of the nearest primitive hit, or the background.

    Raises:
        InvalidRayError: If the ray direction has zero length.
    """
    hit = scene.nearest_hit(ray, t_min, t_max)
    if hit is None:
        return scene.background
    return hit.color
