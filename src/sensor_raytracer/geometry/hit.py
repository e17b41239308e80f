"""Hit record produced by the intersection routines."""

from __future__ import annotations

from dataclasses import dataclass

from sensor_raytracer.core.ray import Vec3, as_vec3


@dataclass(frozen=True, eq=False)
class HitRecord:
    """Record of a successful ray-primitive intersection.

    A miss is represented by ``None`` rather than a flagged record. Inside
    Taichi kernels, where None is unavailable, the ``*_kernel`` intersection
    twins return a ``(hit, t)`` pair instead.

    Attributes:
        t: Distance along the ray to the intersection, within [t_min, t_max].
        point: World-space intersection point.
        normal: Unit surface normal at the point (outward for spheres).
    """

    t: float
    point: Vec3
    normal: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "t", float(self.t))
        object.__setattr__(self, "point", as_vec3(self.point))
        object.__setattr__(self, "normal", as_vec3(self.normal))
