"""Quad primitive with ray-quad intersection.

A quad is the parallelogram with vertices Q, Q+u, Q+v, Q+u+v. Intersection
first finds where the ray meets the quad's plane, then expresses the hit
point as ``Q + alpha * u + beta * v`` and accepts it when both alpha and
beta lie in [0, 1].

The helper vectors used to recover alpha and beta come from the unnormalized
plane normal ``n = u x v``::

    w_u = (v x n) / dot(n, n)     alpha = dot(w_u, P - Q)
    w_v = (n x u) / dot(n, n)     beta  = dot(w_v, P - Q)

Example:
    >>> from sensor_raytracer.core.ray import Ray, vec3
    >>> from sensor_raytracer.geometry.quad import Quad, hit_quad
    >>> floor = Quad(vec3(-1.0, 0.0, -1.0), vec3(2.0, 0.0, 0.0), vec3(0.0, 0.0, 2.0))
    >>> ray = Ray(vec3(0.0, 5.0, 0.0), vec3(0.0, -1.0, 0.0))
    >>> hit_quad(ray, floor, 0.0, 100.0).t
    5.0
"""

import math
from dataclasses import dataclass, field

import numpy as np
import taichi as ti
import taichi.math as tm

from sensor_raytracer.core.ray import (
    Ray,
    Vec3,
    as_vec3,
    check_direction,
    cross,
    dot,
    is_finite,
    length,
)
from sensor_raytracer.errors import ConfigurationError
from sensor_raytracer.geometry.hit import HitRecord

# Type alias for 3D vectors inside kernels
vec3 = tm.vec3

# Rays whose direction is this close to parallel with the plane miss
PARALLEL_EPSILON = 1e-8

# Edge pairs whose cross product is shorter than this are degenerate
DEGENERATE_EPSILON = 1e-10


@dataclass(frozen=True, eq=False)
class Quad:
    """A quad (parallelogram) defined by a corner point and two edge vectors.

    Attributes:
        corner: The corner point Q.
        edge_u: Edge vector from Q to an adjacent corner.
        edge_v: Edge vector from Q to the other adjacent corner.
        normal: Unit plane normal, normalize(cross(edge_u, edge_v)). Derived.

    Raises:
        ConfigurationError: If the edges are zero or parallel.
    """

    corner: Vec3
    edge_u: Vec3
    edge_v: Vec3
    normal: Vec3 = field(init=False, repr=False)
    _w_u: Vec3 = field(init=False, repr=False)
    _w_v: Vec3 = field(init=False, repr=False)

    def __post_init__(self) -> None:
        corner = as_vec3(self.corner)
        u = as_vec3(self.edge_u)
        v = as_vec3(self.edge_v)
        if not (is_finite(corner) and is_finite(u) and is_finite(v)):
            raise ConfigurationError("Quad corner and edges must be finite")

        n = cross(u, v)
        n_dot_n = dot(n, n)
        if n_dot_n < DEGENERATE_EPSILON:
            raise ConfigurationError(
                f"Quad edges {tuple(u)} and {tuple(v)} are zero or parallel"
            )

        normal = n / math.sqrt(n_dot_n)
        w_u = np.cross(v, n) / n_dot_n
        w_v = np.cross(n, u) / n_dot_n

        object.__setattr__(self, "corner", corner)
        object.__setattr__(self, "edge_u", u)
        object.__setattr__(self, "edge_v", v)
        object.__setattr__(self, "normal", as_vec3(normal))
        object.__setattr__(self, "_w_u", as_vec3(w_u))
        object.__setattr__(self, "_w_v", as_vec3(w_v))

    @property
    def area(self) -> float:
        """Area of the parallelogram, |u x v|."""
        return length(cross(self.edge_u, self.edge_v))

    def local_coordinates(self, point: Vec3) -> tuple[float, float]:
        """Express a point on the plane as (alpha, beta) in edge units."""
        p_minus_q = point - self.corner
        return dot(self._w_u, p_minus_q), dot(self._w_v, p_minus_q)

    def intersect(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Intersect a ray with this quad. See :func:`hit_quad`."""
        return hit_quad(ray, self, t_min, t_max)


def hit_quad(ray: Ray, quad: Quad, t_min: float, t_max: float) -> HitRecord | None:
    """Test for ray-quad intersection.

    Args:
        ray: The ray to test. Its direction must be non-zero.
        quad: The quad to test against.
        t_min: Minimum accepted distance (inclusive).
        t_max: Maximum accepted distance (inclusive).

    Returns:
        A HitRecord with the quad's plane normal, or None if the ray is
        parallel to the plane, the plane is out of range, or the plane hit
        falls outside the parallelogram.

    Raises:
        InvalidRayError: If the ray direction has zero length.
    """
    check_direction(ray)

    denom = dot(quad.normal, ray.direction)
    if abs(denom) <= PARALLEL_EPSILON:
        return None

    d = dot(quad.normal, quad.corner)
    t = (d - dot(quad.normal, ray.origin)) / denom
    if t < t_min or t_max < t:
        return None

    point = ray.origin + ray.direction * t
    alpha, beta = quad.local_coordinates(point)
    if not (0.0 <= alpha <= 1.0 and 0.0 <= beta <= 1.0):
        return None

    return HitRecord(t=t, point=point, normal=quad.normal)


@ti.func
def hit_quad_kernel(
    ray_origin: vec3,
    ray_direction: vec3,
    corner: vec3,
    edge_u: vec3,
    edge_v: vec3,
    t_min: ti.f32,
    t_max: ti.f32,
):
    """Kernel-side twin of :func:`hit_quad`.

    Edges are validated when the Quad is constructed on the Python side.

    Returns:
        Tuple (hit, t) where hit is 1 on an intersection and 0 otherwise.
    """
    n = tm.cross(edge_u, edge_v)
    n_dot_n = tm.dot(n, n)
    normal = n / ti.sqrt(n_dot_n)
    w_u = tm.cross(edge_v, n) / n_dot_n
    w_v = tm.cross(n, edge_u) / n_dot_n

    denom = tm.dot(normal, ray_direction)

    did_hit = 0
    hit_t = 0.0

    if ti.abs(denom) > PARALLEL_EPSILON:
        t = (tm.dot(normal, corner) - tm.dot(normal, ray_origin)) / denom
        if t >= t_min and t <= t_max:
            p_minus_q = ray_origin + t * ray_direction - corner
            alpha = tm.dot(w_u, p_minus_q)
            beta = tm.dot(w_v, p_minus_q)
            if alpha >= 0.0 and alpha <= 1.0 and beta >= 0.0 and beta <= 1.0:
                did_hit = 1
                hit_t = t

    return did_hit, hit_t
