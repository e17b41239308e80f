"""Geometry module for shape primitives and intersection.

Components:
    hit: HitRecord returned by the Python-side intersection routines
    sphere: Sphere primitive with ray-sphere intersection
    quad: Parallelogram primitive with ray-quad intersection

Each primitive exposes ``intersect(ray, t_min, t_max)`` returning a
HitRecord or None, and has a ``@ti.func`` twin used by the parallel
frame kernel.
"""

from .hit import HitRecord
from .quad import Quad, hit_quad, hit_quad_kernel
from .sphere import Sphere, hit_sphere, hit_sphere_kernel

__all__ = [
    "HitRecord",
    "Sphere",
    "hit_sphere",
    "hit_sphere_kernel",
    "Quad",
    "hit_quad",
    "hit_quad_kernel",
]
