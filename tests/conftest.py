"""Shared fixtures for the path tracer tests.

Everything random is seeded so each test sees the same numbers on every run.
"""

import math
import random

import pytest

from pathtrace.camera import Camera
from pathtrace.core import Ray, Vector3
from pathtrace.geometry import HitRecord, HittableList, MovingSphere, Sphere
from pathtrace.materials import Dielectric, Lambertian, Metal


@pytest.fixture
def rng():
    """A seeded generator for materials and cameras."""
    return random.Random(1234)


@pytest.fixture
def grey():
    return Lambertian(Vector3(0.5, 0.5, 0.5))


def make_record(normal, front_face=True, p=None):
    """Build a hit record by hand, as a shape would after an intersection."""
    rec = HitRecord()
    rec.p = p if p is not None else Vector3(0.0, 0.0, 0.0)
    rec.normal = normal
    rec.outward_normal = normal if front_face else -normal
    rec.front_face = front_face
    rec.t = 1.0
    return rec


def random_spheres(rng, count, moving=0):
    """A scattered field of small spheres, some of them moving."""
    material = Lambertian(Vector3(0.5, 0.5, 0.5))
    objects = []
    for i in range(count):
        center = Vector3(rng.uniform(-10, 10), rng.uniform(-10, 10), rng.uniform(-10, 10))
        radius = rng.uniform(0.2, 1.5)
        if i < moving:
            offset = Vector3(rng.uniform(-1, 1), rng.uniform(-1, 1), rng.uniform(-1, 1))
            objects.append(MovingSphere(center, center + offset, 0.0, 1.0, radius, material))
        else:
            objects.append(Sphere(center, radius, material))
    return objects


def random_rays(rng, count, time_range=(0.0, 0.0)):
    """Rays from outside the sphere field aimed at random points inside it."""
    rays = []
    for _ in range(count):
        theta = rng.uniform(0, 2 * math.pi)
        z = rng.uniform(-1, 1)
        r = math.sqrt(1 - z * z)
        origin = Vector3(r * math.cos(theta), r * math.sin(theta), z) * 30.0
        target = Vector3(rng.uniform(-8, 8), rng.uniform(-8, 8), rng.uniform(-8, 8))
        rays.append(Ray(origin, target - origin, rng.uniform(*time_range)))
    return rays


@pytest.fixture
def small_scene():
    """A ground sphere with a diffuse, a metal and a glass ball on top."""
    world = HittableList()
    world.add(Sphere(Vector3(0, -100.5, -1), 100, Lambertian(Vector3(0.8, 0.8, 0.0))))
    world.add(Sphere(Vector3(0, 0, -1), 0.5, Lambertian(Vector3(0.1, 0.2, 0.5))))
    world.add(Sphere(Vector3(-1, 0, -1), 0.5, Dielectric(1.5)))
    world.add(Sphere(Vector3(1, 0, -1), 0.5, Metal(Vector3(0.8, 0.6, 0.2), 0.3)))
    return world


@pytest.fixture
def small_camera():
    """Looks at small_scene; 3:2 so it matches a 6x4 image."""
    return Camera(Vector3(0, 0.5, 2), Vector3(0, 0, -1), Vector3(0, 1, 0), 60.0, 1.5)
