"""Unit tests for rays and host-side vector helpers.

Tests cover:
- Vector construction and read-only storage
- Dot, cross, length and normalize
- Ray evaluation and bitwise comparison
- Zero-length direction rejection
"""

import math

import numpy as np
import pytest


class TestVectorHelpers:
    """Tests for the vec3 helper functions."""

    def test_vec3_is_read_only(self):
        """Vectors cannot be modified in place."""
        from sensor_raytracer.core.ray import vec3

        v = vec3(1.0, 2.0, 3.0)
        assert v.dtype == np.float64
        with pytest.raises(ValueError):
            v[0] = 5.0

    def test_as_vec3_accepts_tuples(self):
        """as_vec3 converts any 3-element sequence."""
        from sensor_raytracer.core.ray import as_vec3

        v = as_vec3((1, 2, 3))
        assert v.tolist() == [1.0, 2.0, 3.0]

    def test_as_vec3_rejects_wrong_size(self):
        """as_vec3 raises for anything but three components."""
        from sensor_raytracer.core.ray import as_vec3

        with pytest.raises(ValueError):
            as_vec3((1.0, 2.0))

    def test_dot_and_cross(self):
        """Dot and cross products of the unit axes."""
        from sensor_raytracer.core.ray import cross, dot, vec3

        x = vec3(1.0, 0.0, 0.0)
        y = vec3(0.0, 1.0, 0.0)
        assert dot(x, y) == 0.0
        assert dot(x, x) == 1.0
        assert cross(x, y).tolist() == [0.0, 0.0, 1.0]

    def test_normalize(self):
        """normalize returns a unit vector in the same direction."""
        from sensor_raytracer.core.ray import length, normalize, vec3

        n = normalize(vec3(3.0, 0.0, 4.0))
        assert math.isclose(length(n), 1.0)
        assert np.allclose(n, [0.6, 0.0, 0.8])

    def test_normalize_zero_vector_raises(self):
        """A zero vector has no direction."""
        from sensor_raytracer.core.ray import normalize, vec3
        from sensor_raytracer.errors import InvalidRayError

        with pytest.raises(InvalidRayError):
            normalize(vec3(0.0, 0.0, 0.0))


class TestRay:
    """Tests for the Ray dataclass."""

    def test_ray_at(self):
        """at(t) returns origin + t * direction."""
        from sensor_raytracer.core.ray import Ray, vec3

        ray = Ray(vec3(0.0, 0.0, 10.0), vec3(0.0, 0.0, -1.0))
        assert ray.at(8.0).tolist() == [0.0, 0.0, 2.0]
        assert ray.at(0.0).tolist() == [0.0, 0.0, 10.0]

    def test_make_ray_normalizes(self):
        """make_ray stores a unit direction."""
        from sensor_raytracer.core.ray import length, make_ray

        ray = make_ray((1.0, 2.0, 3.0), (0.0, 0.0, -2.0))
        assert math.isclose(length(ray.direction), 1.0)
        assert ray.direction.tolist() == [0.0, 0.0, -1.0]

    def test_make_ray_zero_direction_raises(self):
        """A zero-length direction cannot be normalized."""
        from sensor_raytracer.core.ray import make_ray
        from sensor_raytracer.errors import InvalidRayError

        with pytest.raises(InvalidRayError):
            make_ray((0.0, 0.0, 0.0), (0.0, 0.0, 0.0))

    def test_ray_is_immutable(self):
        """Ray fields cannot be reassigned or written through."""
        import dataclasses

        from sensor_raytracer.core.ray import Ray, vec3

        ray = Ray(vec3(0.0, 0.0, 0.0), vec3(1.0, 0.0, 0.0))
        with pytest.raises(dataclasses.FrozenInstanceError):
            ray.origin = vec3(1.0, 1.0, 1.0)
        with pytest.raises(ValueError):
            ray.direction[0] = 2.0

    def test_same_as_is_bitwise(self):
        """same_as compares the exact stored bits."""
        from sensor_raytracer.core.ray import Ray, vec3

        a = Ray(vec3(0.0, 0.0, 0.0), vec3(1.0, 0.0, 0.0))
        b = Ray((0.0, 0.0, 0.0), (1.0, 0.0, 0.0))
        c = Ray(vec3(0.0, 0.0, 0.0), vec3(1.0, 1e-16, 0.0))
        assert a.same_as(b)
        assert not a.same_as(c)

    def test_equality_and_hash_follow_values(self):
        """Rays with the same origin and direction are equal and hash alike."""
        from sensor_raytracer.core.ray import Ray, vec3

        a = Ray(vec3(0.0, 0.0, 0.0), vec3(1.0, 0.0, 0.0))
        b = Ray((0.0, 0.0, 0.0), (1.0, 0.0, 0.0))
        c = Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 1.0, 0.0))

        assert a == b
        assert a != c
        assert hash(a) == hash(b)
        assert len({a, b, c}) == 2
        assert a != (a.origin, a.direction)

    def test_check_direction(self):
        """check_direction returns |d|^2 and rejects zero directions."""
        from sensor_raytracer.core.ray import Ray, check_direction, vec3
        from sensor_raytracer.errors import InvalidRayError

        assert check_direction(Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 2.0, 0.0))) == 4.0
        with pytest.raises(InvalidRayError):
            check_direction(Ray(vec3(0.0, 0.0, 0.0), vec3(0.0, 0.0, 0.0)))
        with pytest.raises(InvalidRayError):
            check_direction(Ray(vec3(0.0, 0.0, 0.0), vec3(math.nan, 0.0, 0.0)))
