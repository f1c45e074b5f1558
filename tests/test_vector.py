"""Tests for vectors, rays, bounding boxes and the random helpers."""

import math

import numpy as np
import pytest

from pathtrace.core import AABB, Ray, Vector3, reflect, reflectance, refract
from pathtrace.core.utils import make_rng, random_in_unit_disk, random_unit_vector


class TestVector3:
    """Vector arithmetic."""

    def test_arithmetic(self):
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(4.0, 5.0, 6.0)
        assert a + b == Vector3(5.0, 7.0, 9.0)
        assert b - a == Vector3(3.0, 3.0, 3.0)
        assert a * 2 == Vector3(2.0, 4.0, 6.0)
        assert 2 * a == a * 2
        assert a * b == Vector3(4.0, 10.0, 18.0)
        assert -a == Vector3(-1.0, -2.0, -3.0)
        assert a.dot(b) == 32.0
        assert Vector3(1, 0, 0).cross(Vector3(0, 1, 0)) == Vector3(0, 0, 1)

    def test_numpy_scalars_scale(self):
        v = Vector3(1.0, 2.0, 3.0)
        assert v * np.int64(2) == Vector3(2.0, 4.0, 6.0)
        assert v * np.float32(0.5) == Vector3(0.5, 1.0, 1.5)

    def test_indexing(self):
        v = Vector3(7.0, 8.0, 9.0)
        assert (v[0], v[1], v[2]) == (7.0, 8.0, 9.0)
        assert list(v) == [7.0, 8.0, 9.0]
        with pytest.raises(IndexError):
            v[3]

    def test_normalize(self):
        n = Vector3(3.0, 0.0, 4.0).normalize()
        assert n.length() == pytest.approx(1.0)
        assert n.x == pytest.approx(0.6)

    def test_normalize_zero_vector_stays_zero(self):
        n = Vector3(0.0, 0.0, 0.0).normalize()
        assert n == Vector3(0.0, 0.0, 0.0)
        assert not n.has_nan()

    def test_near_zero(self):
        assert Vector3(1e-9, -1e-9, 0.0).near_zero()
        assert not Vector3(1e-3, 0.0, 0.0).near_zero()


class TestOptics:
    """Reflection, refraction and Schlick's approximation."""

    def test_reflect(self):
        r = reflect(Vector3(1, -1, 0), Vector3(0, 1, 0))
        assert r == Vector3(1, 1, 0)

    def test_refract_head_on_keeps_direction(self):
        out = refract(Vector3(0, -1, 0), Vector3(0, 1, 0), 1 / 1.5)
        assert out.x == pytest.approx(0.0)
        assert out.y == pytest.approx(-1.0)

    def test_refract_total_internal_reflection(self):
        uv = Vector3(1, -0.1, 0).normalize()
        assert refract(uv, Vector3(0, 1, 0), 1.5) is None

    def test_reflectance_limits(self):
        assert reflectance(1.0, 1.0) == pytest.approx(0.0)
        assert reflectance(0.0, 1.5) == pytest.approx(1.0)
        assert reflectance(1.0, 1 / 1.5) == pytest.approx(0.04)


class TestRay:
    def test_at(self):
        ray = Ray(Vector3(1, 0, 0), Vector3(0, 2, 0), time=0.25)
        assert ray.at(1.5) == Vector3(1, 3, 0)
        assert ray.time == 0.25

    def test_is_read_only(self):
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, 1))
        with pytest.raises(AttributeError):
            ray.origin = Vector3(1, 1, 1)


class TestAABB:
    """Slab test and box unions."""

    @pytest.fixture
    def box(self):
        return AABB(Vector3(-1, -1, -1), Vector3(1, 1, 1))

    def test_corners_are_reordered(self):
        box = AABB(Vector3(1, -2, 3), Vector3(-1, 2, -3))
        assert box.minimum == Vector3(-1, -2, -3)
        assert box.maximum == Vector3(1, 2, 3)

    def test_hit_returns_interval(self, box):
        ray = Ray(Vector3(-5, 0, 0), Vector3(1, 0, 0))
        t0, t1 = box.hit(ray, 0.001, math.inf)
        assert t0 == pytest.approx(4.0)
        assert t1 == pytest.approx(6.0)

    def test_hit_respects_t_max(self, box):
        ray = Ray(Vector3(-5, 0, 0), Vector3(1, 0, 0))
        assert box.hit(ray, 0.001, 3.0) is None

    def test_parallel_ray_outside_slab_misses(self, box):
        ray = Ray(Vector3(-5, 2, 0), Vector3(1, 0, 0))
        assert box.hit(ray, 0.001, math.inf) is None

    def test_ray_behind_origin_misses(self, box):
        ray = Ray(Vector3(-5, 0, 0), Vector3(-1, 0, 0))
        assert box.hit(ray, 0.001, math.inf) is None

    def test_nan_direction_misses(self, box):
        ray = Ray(Vector3(-5, 0, 0), Vector3(float("nan"), 0, 0))
        assert box.hit(ray, 0.001, math.inf) is None

    def test_surrounding_box(self):
        a = AABB(Vector3(0, 0, 0), Vector3(1, 1, 1))
        b = AABB(Vector3(-1, 2, 0), Vector3(0, 3, 5))
        union = AABB.surrounding_box(a, b)
        assert union.minimum == Vector3(-1, 0, 0)
        assert union.maximum == Vector3(1, 3, 5)

    def test_surrounding_box_ignores_nan_bounds(self):
        nan = float("nan")
        broken = AABB(Vector3(nan, nan, nan), Vector3(nan, nan, nan))
        good = AABB(Vector3(0, 0, 0), Vector3(1, 1, 1))
        for union in (AABB.surrounding_box(broken, good), AABB.surrounding_box(good, broken)):
            assert union.minimum == good.minimum
            assert union.maximum == good.maximum

    def test_longest_axis(self):
        assert AABB(Vector3(0, 0, 0), Vector3(1, 5, 2)).longest_axis() == 1


class TestRandomHelpers:
    """Per-stream generators and sampling helpers."""

    def test_same_stream_same_sequence(self):
        a = make_rng(42, 3)
        b = make_rng(42, 3)
        assert [a.random() for _ in range(5)] == [b.random() for _ in range(5)]

    def test_streams_differ(self):
        a = make_rng(42, 3)
        b = make_rng(42, 4)
        assert [a.random() for _ in range(5)] != [b.random() for _ in range(5)]

    def test_unit_vector_has_unit_length(self, rng):
        for _ in range(100):
            assert random_unit_vector(rng).length() == pytest.approx(1.0)

    def test_unit_disk(self, rng):
        for _ in range(100):
            p = random_in_unit_disk(rng)
            assert p.z == 0.0
            assert p.x * p.x + p.y * p.y < 1.0
