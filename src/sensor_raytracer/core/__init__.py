"""Core rendering module.

Components:
    ray: Ray data structure and host-side vector utilities
    color: 8-bit RGB colors
    framebuffer: Long-lived pixel buffer written once per frame
    integrator: Taichi kernel that renders a whole frame in parallel
    frame: Frame driver orchestrating camera, scene and presenter

The reference path walks the sample generator one ray at a time in Python;
the Taichi integrator computes the same frame with one thread per pixel.
"""

from .color import BLACK, GREEN, MAGENTA, RED, Color
from .framebuffer import Framebuffer
from .ray import (
    Ray,
    Vec3,
    as_vec3,
    check_direction,
    cross,
    dot,
    length,
    length_squared,
    make_ray,
    normalize,
    ray_at,
    vec3,
)

# Note: frame and integrator are NOT imported here to avoid circular imports.
# Import them from sensor_raytracer.core.frame / sensor_raytracer.core.integrator.

__all__ = [
    "Ray",
    "Vec3",
    "ray_at",
    "make_ray",
    "vec3",
    "as_vec3",
    "check_direction",
    "length",
    "length_squared",
    "normalize",
    "dot",
    "cross",
    "Color",
    "BLACK",
    "RED",
    "GREEN",
    "MAGENTA",
    "Framebuffer",
]
