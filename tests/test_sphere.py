"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside (nearer root)
- Ray missing sphere
- Ray tangent to sphere (exact and within rounding)
- Ray starting inside sphere (farther root)
- Inclusive [t_min, t_max] range handling
- Zero-length direction and invalid sphere rejection
- Kernel twin agreement
"""

import math

import numpy as np
import pytest
import taichi as ti


class TestSphereBasics:
    """Tests for the Sphere dataclass."""

    def test_sphere_fields(self):
        from sensor_raytracer.geometry.sphere import Sphere

        sphere = Sphere(center=(1.0, 2.0, 3.0), radius=0.5)
        assert sphere.center.tolist() == [1.0, 2.0, 3.0]
        assert sphere.radius == 0.5

    @pytest.mark.parametrize("radius", [0.0, -1.0, math.inf, math.nan])
    def test_invalid_radius_raises(self, radius):
        """Radius must be a positive finite number."""
        from sensor_raytracer.errors import ConfigurationError
        from sensor_raytracer.geometry.sphere import Sphere

        with pytest.raises(ConfigurationError):
            Sphere(center=(0.0, 0.0, 0.0), radius=radius)

    def test_non_finite_center_raises(self):
        from sensor_raytracer.errors import ConfigurationError
        from sensor_raytracer.geometry.sphere import Sphere

        with pytest.raises(ConfigurationError):
            Sphere(center=(math.inf, 0.0, 0.0), radius=1.0)


class TestSphereIntersection:
    """Tests for hit_sphere on the Python side."""

    def test_direct_hit(self):
        """Ray from z=10 toward a radius-2 sphere at the origin hits at t=8."""
        from sensor_raytracer.core.ray import Ray, vec3
        from sensor_raytracer.geometry.sphere import Sphere, hit_sphere

        sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=2.0)
        ray = Ray(vec3(0.0, 0.0, 10.0), vec3(0.0, 0.0, -1.0))

        hit = hit_sphere(ray, sphere, 0.0, 10_000.0)

        assert hit is not None
        assert hit.t == 8.0
        assert hit.point.tolist() == [0.0, 0.0, 2.0]
        assert hit.normal.tolist() == [0.0, 0.0, 1.0]

    def test_miss(self):
        """Ray passing beside the sphere reports no hit."""
        from sensor_raytracer.core.ray import Ray, vec3
        from sensor_raytracer.geometry.sphere import Sphere, hit_sphere

        sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=2.0)
        ray = Ray(vec3(5.0, 5.0, 5.0), vec3(1.0, 0.0, 0.0))

        assert hit_sphere(ray, sphere, 0.0, 10_000.0) is None

    def test_tangent_ray_hits_once(self):
        """A ray grazing the sphere has a zero discriminant and one hit."""
        from sensor_raytracer.core.ray import Ray, vec3
        from sensor_raytracer.geometry.sphere import Sphere, hit_sphere

        sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=2.0)
        ray = Ray(vec3(2.0, 0.0, 10.0), vec3(0.0, 0.0, -1.0))

        hit = hit_sphere(ray, sphere, 0.0, 10_000.0)

        assert hit is not None
        assert hit.t == 10.0
        assert hit.point.tolist() == [2.0, 0.0, 0.0]
        assert hit.normal.tolist() == [1.0, 0.0, 0.0]
        # Both roots coincide, so there is no second hit further along
        assert hit_sphere(ray, sphere, 10.5, 10_000.0) is None

    def test_tangent_with_rounding_noise_hits(self):
        """A discriminant that is slightly negative from rounding counts as zero."""
        from sensor_raytracer.core.ray import Ray, vec3
        from sensor_raytracer.geometry.sphere import Sphere, hit_sphere

        sphere = Sphere(center=vec3(0.1, 0.2, 0.0), radius=0.3)
        ray = Ray(vec3(0.4, 0.2, 5.0), vec3(0.0, 0.0, -1.0))

        hit = hit_sphere(ray, sphere, 0.0, 10_000.0)

        assert hit is not None
        assert hit.t == pytest.approx(5.0, abs=1e-6)

    def test_origin_inside_takes_farther_root(self):
        """From inside, the nearer root is negative so the farther one is used."""
        from sensor_raytracer.core.ray import Ray, vec3
        from sensor_raytracer.geometry.sphere import Sphere, hit_sphere

        sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=2.0)
        ray = Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 1.0))

        hit = hit_sphere(ray, sphere, 0.0, 10_000.0)

        assert hit is not None
        assert hit.t == 2.0
        # Normal is outward even from inside
        assert hit.normal.tolist() == [0.0, 0.0, 1.0]

    def test_t_min_skips_to_farther_root(self):
        """When the nearer root is below t_min the farther root is returned."""
        from sensor_raytracer.core.ray import Ray, vec3
        from sensor_raytracer.geometry.sphere import Sphere, hit_sphere

        sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=2.0)
        ray = Ray(vec3(0.0, 0.0, 10.0), vec3(0.0, 0.0, -1.0))

        hit = hit_sphere(ray, sphere, 9.0, 10_000.0)

        assert hit is not None
        assert hit.t == 12.0
        assert hit.point.tolist() == [0.0, 0.0, -2.0]
        assert hit.normal.tolist() == [0.0, 0.0, -1.0]

    def test_t_max_excludes_both_roots(self):
        """Both roots beyond t_max is a miss."""
        from sensor_raytracer.core.ray import Ray, vec3
        from sensor_raytracer.geometry.sphere import Sphere, hit_sphere

        sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=2.0)
        ray = Ray(vec3(0.0, 0.0, 10.0), vec3(0.0, 0.0, -1.0))

        assert hit_sphere(ray, sphere, 0.0, 5.0) is None

    def test_range_is_inclusive(self):
        """A root exactly at t_max is accepted."""
        from sensor_raytracer.core.ray import Ray, vec3
        from sensor_raytracer.geometry.sphere import Sphere, hit_sphere

        sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=2.0)
        ray = Ray(vec3(0.0, 0.0, 10.0), vec3(0.0, 0.0, -1.0))

        hit = hit_sphere(ray, sphere, 0.0, 8.0)
        assert hit is not None
        assert hit.t == 8.0

    def test_sphere_behind_ray_misses(self):
        from sensor_raytracer.core.ray import Ray, vec3
        from sensor_raytracer.geometry.sphere import Sphere, hit_sphere

        sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=2.0)
        ray = Ray(vec3(0.0, 0.0, 10.0), vec3(0.0, 0.0, 1.0))

        assert hit_sphere(ray, sphere, 0.0, 10_000.0) is None

    def test_unnormalized_direction(self):
        """Distances are in units of the direction's length."""
        from sensor_raytracer.core.ray import Ray, vec3
        from sensor_raytracer.geometry.sphere import Sphere, hit_sphere

        sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=2.0)
        ray = Ray(vec3(0.0, 0.0, 10.0), vec3(0.0, 0.0, -2.0))

        hit = hit_sphere(ray, sphere, 0.0, 10_000.0)
        assert hit is not None
        assert hit.t == 4.0
        assert hit.point.tolist() == [0.0, 0.0, 2.0]

    def test_zero_direction_raises(self):
        """A zero-length direction is rejected instead of producing NaN."""
        from sensor_raytracer.core.ray import Ray, vec3
        from sensor_raytracer.errors import InvalidRayError
        from sensor_raytracer.geometry.sphere import Sphere, hit_sphere

        sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=2.0)
        ray = Ray(vec3(0.0, 0.0, 10.0), vec3(0.0, 0.0, 0.0))

        with pytest.raises(InvalidRayError):
            hit_sphere(ray, sphere, 0.0, 10_000.0)

    def test_intersect_method_delegates(self):
        from sensor_raytracer.core.ray import Ray, vec3
        from sensor_raytracer.geometry.sphere import Sphere

        sphere = Sphere(center=vec3(0.0, 0.0, 0.0), radius=2.0)
        ray = Ray(vec3(0.0, 0.0, 10.0), vec3(0.0, 0.0, -1.0))

        assert sphere.intersect(ray, 0.0, 10_000.0).t == 8.0

    def test_normal_is_unit_length(self):
        from sensor_raytracer.core.ray import length, make_ray
        from sensor_raytracer.geometry.sphere import Sphere, hit_sphere

        sphere = Sphere(center=(1.0, -2.0, 0.5), radius=1.5)
        ray = make_ray((5.0, 3.0, 4.0), np.subtract((1.2, -1.9, 0.4), (5.0, 3.0, 4.0)))

        hit = hit_sphere(ray, sphere, 0.0, 10_000.0)
        assert hit is not None
        assert length(hit.normal) == pytest.approx(1.0)


class TestSphereKernel:
    """Tests for the @ti.func twin used by the frame kernel."""

    def test_kernel_direct_hit(self):
        from sensor_raytracer.geometry.sphere import hit_sphere_kernel, vec3

        hit = ti.field(dtype=ti.i32, shape=())
        t_val = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            did_hit, t = hit_sphere_kernel(
                vec3(0.0, 0.0, 10.0), vec3(0.0, 0.0, -1.0), vec3(0.0, 0.0, 0.0), 2.0, 0.0, 10000.0
            )
            hit[None] = did_hit
            t_val[None] = t

        test_kernel()
        assert hit[None] == 1
        assert abs(t_val[None] - 8.0) < 1e-5

    def test_kernel_miss(self):
        from sensor_raytracer.geometry.sphere import hit_sphere_kernel, vec3

        hit = ti.field(dtype=ti.i32, shape=())

        @ti.kernel
        def test_kernel():
            did_hit, _t = hit_sphere_kernel(
                vec3(5.0, 5.0, 5.0), vec3(1.0, 0.0, 0.0), vec3(0.0, 0.0, 0.0), 2.0, 0.0, 10000.0
            )
            hit[None] = did_hit

        test_kernel()
        assert hit[None] == 0

    def test_kernel_inside_takes_farther_root(self):
        from sensor_raytracer.geometry.sphere import hit_sphere_kernel, vec3

        hit = ti.field(dtype=ti.i32, shape=())
        t_val = ti.field(dtype=ti.f32, shape=())

        @ti.kernel
        def test_kernel():
            did_hit, t = hit_sphere_kernel(
                vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 1.0), vec3(0.0, 0.0, 0.0), 2.0, 0.0, 10000.0
            )
            hit[None] = did_hit
            t_val[None] = t

        test_kernel()
        assert hit[None] == 1
        assert abs(t_val[None] - 2.0) < 1e-5
