"""Built-in scenes."""

from __future__ import annotations

from sensor_raytracer.core.color import GREEN, MAGENTA, RED, Color
from sensor_raytracer.core.ray import vec3
from sensor_raytracer.geometry.quad import Quad
from sensor_raytracer.geometry.sphere import Sphere
from sensor_raytracer.scene.scene import Scene

GROUND_COLOR = Color(90, 90, 90)


def two_sphere_scene() -> Scene:
    """Create the default scene: a red sphere with a green sphere on top.

    Sphere A: center (0, 0, 0), radius 2, red.
    Sphere B: center (0, 3, 0), radius 1, green.
    Background: magenta.
    """
    scene = Scene(background=MAGENTA)
    scene.add(Sphere(center=vec3(0.0, 0.0, 0.0), radius=2.0), RED)
    scene.add(Sphere(center=vec3(0.0, 3.0, 0.0), radius=1.0), GREEN)
    return scene


def two_sphere_scene_with_ground(size: float = 20.0, height: float = -2.0) -> Scene:
    """The default scene standing on a square gray ground quad.

    Args:
        size: Edge length of the ground square, centered under the origin.
        height: y coordinate of the ground plane.
    """
    scene = two_sphere_scene()
    half = size / 2.0
    ground = Quad(
        corner=vec3(-half, height, -half),
        edge_u=vec3(0.0, 0.0, size),
        edge_v=vec3(size, 0.0, 0.0),
    )
    scene.add(ground, GROUND_COLOR)
    return scene


SCENES = {
    "two-spheres": two_sphere_scene,
    "two-spheres-ground": two_sphere_scene_with_ground,
}


def get_scene(name: str) -> Scene:
    """Build a named preset.

    Raises:
        KeyError: If no preset has that name.
    """
    try:
        factory = SCENES[name]
    except KeyError:
        raise KeyError(f"Unknown scene {name!r}; choose from {sorted(SCENES)}") from None
    return factory()
