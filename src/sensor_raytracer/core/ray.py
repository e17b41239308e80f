"""Ray data structure and host-side vector utilities.

Vectors on the Python side are read-only float64 NumPy arrays of shape (3,).
The Taichi kernels in :mod:`sensor_raytracer.core.integrator` use
``ti.math.vec3`` instead; the helpers here mirror their arithmetic.

Example:
    >>> from sensor_raytracer.core.ray import make_ray, ray_at, vec3
    >>> ray = make_ray(vec3(0.0, 0.0, 10.0), vec3(0.0, 0.0, -2.0))
    >>> ray_at(ray, 8.0)
    array([0., 0., 2.])
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from sensor_raytracer.errors import InvalidRayError

# Type alias for 3D vectors
Vec3 = npt.NDArray[np.float64]

# Squared direction lengths below this are treated as zero
MIN_DIRECTION_LENGTH_SQUARED = 1e-12


def vec3(x: float, y: float, z: float) -> Vec3:
    """Build a read-only 3D vector."""
    v = np.array((x, y, z), dtype=np.float64)
    v.setflags(write=False)
    return v


def as_vec3(value: Iterable[float]) -> Vec3:
    """Convert any 3-element sequence into a read-only 3D vector.

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    v = np.array(value, dtype=np.float64).reshape(-1)
    if v.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {v.shape}")
    v.setflags(write=False)
    return v


def _frozen(v: npt.NDArray[np.float64]) -> Vec3:
    v.setflags(write=False)
    return v


def dot(a: Vec3, b: Vec3) -> float:
    """Compute the dot product of two vectors."""
    return float(a[0] * b[0] + a[1] * b[1] + a[2] * b[2])


def cross(a: Vec3, b: Vec3) -> Vec3:
    """Compute the cross product a x b."""
    return _frozen(np.cross(a, b))


def length_squared(v: Vec3) -> float:
    """Compute the squared length of a vector."""
    return dot(v, v)


def length(v: Vec3) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(length_squared(v))


def normalize(v: Vec3) -> Vec3:
    """Normalize a vector to unit length.

    Raises:
        InvalidRayError: If the vector has (near) zero length.
    """
    n = length(v)
    if n * n < MIN_DIRECTION_LENGTH_SQUARED:
        raise InvalidRayError(f"Cannot normalize zero-length vector {tuple(v)}")
    return _frozen(np.asarray(v, dtype=np.float64) / n)


def is_finite(v: Vec3) -> bool:
    """Check that every component is a finite number."""
    return bool(np.all(np.isfinite(v)))


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction of the ray. Rays built by :func:`make_ray`
            or the sample generator are unit length. The intersection
            routines reject zero-length directions with InvalidRayError.
    """

    origin: Vec3
    direction: Vec3

    def __post_init__(self) -> None:
        object.__setattr__(self, "origin", as_vec3(self.origin))
        object.__setattr__(self, "direction", as_vec3(self.direction))

    def at(self, t: float) -> Vec3:
        """Compute the point origin + t * direction."""
        return ray_at(self, t)

    def same_as(self, other: Ray) -> bool:
        """Bitwise comparison of origin and direction."""
        return (
            self.origin.tobytes() == other.origin.tobytes()
            and self.direction.tobytes() == other.direction.tobytes()
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ray):
            return NotImplemented
        return self.same_as(other)

    def __hash__(self) -> int:
        return hash((self.origin.tobytes(), self.direction.tobytes()))

    def __repr__(self) -> str:
        o = ", ".join(f"{c:.6g}" for c in self.origin)
        d = ", ".join(f"{c:.6g}" for c in self.direction)
        return f"Ray(origin=({o}), direction=({d}))"


def ray_at(ray: Ray, t: float) -> Vec3:
    """Compute the point along the ray at parameter t."""
    return _frozen(ray.origin + t * ray.direction)


def make_ray(origin: Iterable[float], direction: Iterable[float]) -> Ray:
    """Create a ray with a normalized direction.

    Raises:
        InvalidRayError: If the direction has zero length.
    """
    return Ray(as_vec3(origin), normalize(as_vec3(direction)))


def check_direction(ray: Ray) -> float:
    """Return dot(direction, direction), rejecting zero-length directions.

    Raises:
        InvalidRayError: If the direction is (near) zero length or not finite.
    """
    a = length_squared(ray.direction)
    if not math.isfinite(a) or a < MIN_DIRECTION_LENGTH_SQUARED:
        raise InvalidRayError(f"Ray direction must be non-zero and finite: {ray!r}")
    return a
