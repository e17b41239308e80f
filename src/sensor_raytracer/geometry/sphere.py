"""Sphere primitive with ray-sphere intersection.

The intersection solves the quadratic

    |origin + t * direction - center|^2 = radius^2

in its half-b form:

    a = dot(direction, direction)
    half_b = dot(oc, direction),  oc = origin - center
    c = dot(oc, oc) - radius^2
    disc = half_b^2 - a*c

The nearer root ``(-half_b - sqrt(disc)) / a`` is tried first and the
farther root only if the nearer one falls outside ``[t_min, t_max]``.

Two implementations share this arithmetic: :func:`hit_sphere` for Python
callers (returns ``None`` on a miss, raises on invalid input) and
:func:`hit_sphere_kernel` for use inside Taichi kernels.

Example:
    >>> from sensor_raytracer.core.ray import Ray, vec3
    >>> from sensor_raytracer.geometry.sphere import Sphere, hit_sphere
    >>> sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=2.0)
    >>> ray = Ray(vec3(0.0, 0.0, 10.0), vec3(0.0, 0.0, -1.0))
    >>> hit_sphere(ray, sphere, 0.0, 10_000.0).t
    8.0
"""

import math
from dataclasses import dataclass

import taichi as ti
import taichi.math as tm

from sensor_raytracer.core.ray import Ray, Vec3, as_vec3, check_direction, dot, is_finite
from sensor_raytracer.errors import ConfigurationError
from sensor_raytracer.geometry.hit import HitRecord

# Type alias for 3D vectors inside kernels
vec3 = tm.vec3

# Discriminants within this fraction of the quadratic's scale count as zero
TANGENT_TOLERANCE = 1e-12


@dataclass(frozen=True, eq=False)
class Sphere:
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).

    Raises:
        ConfigurationError: If the radius is not a positive finite number.
    """

    center: Vec3
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", as_vec3(self.center))
        object.__setattr__(self, "radius", float(self.radius))
        if not math.isfinite(self.radius) or self.radius <= 0.0:
            raise ConfigurationError(f"Sphere radius must be positive, got {self.radius}")
        if not is_finite(self.center):
            raise ConfigurationError(f"Sphere center must be finite, got {tuple(self.center)}")

    def intersect(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Intersect a ray with this sphere. See :func:`hit_sphere`."""
        return hit_sphere(ray, self, t_min, t_max)


def hit_sphere(ray: Ray, sphere: Sphere, t_min: float, t_max: float) -> HitRecord | None:
    """Test for ray-sphere intersection.

    Args:
        ray: The ray to test. Its direction need not be normalized but must
            be non-zero.
        sphere: The sphere to test against.
        t_min: Minimum accepted distance (inclusive).
        t_max: Maximum accepted distance (inclusive).

    Returns:
        A HitRecord for the first root inside ``[t_min, t_max]``, or None if
        the ray misses the sphere or both roots are out of range. A tangent
        ray produces a single hit.

    Raises:
        InvalidRayError: If the ray direction has zero length.
    """
    a = check_direction(ray)

    oc = ray.origin - sphere.center
    half_b = dot(oc, ray.direction)
    c = dot(oc, oc) - sphere.radius * sphere.radius

    disc = half_b * half_b - a * c
    scale = max(half_b * half_b, abs(a * c))
    if disc < 0.0:
        if disc < -TANGENT_TOLERANCE * scale:
            return None
        disc = 0.0

    sqrt_disc = math.sqrt(disc)

    root = (-half_b - sqrt_disc) / a
    if root < t_min or t_max < root:
        root = (-half_b + sqrt_disc) / a
        if root < t_min or t_max < root:
            return None

    point = ray.origin + ray.direction * root
    normal = (point - sphere.center) / sphere.radius
    return HitRecord(t=root, point=point, normal=normal)


@ti.func
def hit_sphere_kernel(
    ray_origin: vec3,
    ray_direction: vec3,
    center: vec3,
    radius: ti.f32,
    t_min: ti.f32,
    t_max: ti.f32,
):
    """Kernel-side twin of :func:`hit_sphere`.

    The ray direction is validated on the Python side before launch.

    Returns:
        Tuple (hit, t) where hit is 1 on an intersection and 0 otherwise.
    """
    oc = ray_origin - center
    a = tm.dot(ray_direction, ray_direction)
    half_b = tm.dot(oc, ray_direction)
    c = tm.dot(oc, oc) - radius * radius

    disc = half_b * half_b - a * c

    did_hit = 0
    hit_t = 0.0

    if disc >= 0.0:
        sqrt_disc = ti.sqrt(disc)

        root = (-half_b - sqrt_disc) / a
        valid = root >= t_min and root <= t_max
        if not valid:
            root = (-half_b + sqrt_disc) / a
            valid = root >= t_min and root <= t_max

        if valid:
            did_hit = 1
            hit_t = root

    return did_hit, hit_t
