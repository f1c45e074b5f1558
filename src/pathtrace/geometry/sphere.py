# geometry/sphere.py
import math
from typing import Optional, Tuple
from pathtrace.core.vector import Vector3
from pathtrace.core.ray import Ray
from pathtrace.core.aabb import AABB
from pathtrace.geometry.hittable import Hittable, HitRecord

def sphere_uv(p: Vector3) -> Tuple[float, float]:
    """
    Texture coordinates for a point p on the unit sphere centered at the
    origin. u runs around the Y axis starting from X=-1, v runs from Y=-1
    (v=0) to Y=+1 (v=1).
    """
    theta = math.acos(max(-1.0, min(1.0, -p.y)))
    phi = math.atan2(-p.z, p.x) + math.pi
    return phi / (2 * math.pi), theta / math.pi

class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def center_at(self, time: float) -> Vector3:
        return self.center

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if not abs(self.radius) > 1e-12:
            return None
        center = self.center_at(ray.time)
        oc = ray.origin - center
        a = ray.direction.length_squared()
        if not a > 1e-300:
            return None
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius
        discriminant = half_b * half_b - a * c

        # Also rejects NaN, which compares false against everything.
        if not discriminant >= 0:
            return None

        sqrt_disc = math.sqrt(discriminant)
        # Find the nearest root that lies in the acceptable range
        root = (-half_b - sqrt_disc) / a
        if not (t_min <= root <= t_max):
            root = (-half_b + sqrt_disc) / a
            if not (t_min <= root <= t_max):
                return None

        rec = HitRecord()
        rec.t = root
        rec.p = ray.at(root)
        outward_normal = (rec.p - center) / self.radius
        rec.set_face_normal(ray, outward_normal)
        # Hollow spheres flip the normal but not the texture.
        rec.u, rec.v = sphere_uv((rec.p - center) / abs(self.radius))
        rec.material = self.material
        return rec

    def bounding_box(self, time0: float = 0.0, time1: float = 0.0) -> AABB:
        # The bounding box of a sphere is center ± radius
        r = abs(self.radius)
        offset = Vector3(r, r, r)
        return AABB(self.center - offset, self.center + offset)

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius})"

class MovingSphere(Sphere):
    """
    A sphere whose center moves linearly from center0 at time0 to center1 at
    time1. Rays sample the position at their own timestamp, which produces
    motion blur when the camera shutter is open over an interval.
    """
    def __init__(self, center0: Vector3, center1: Vector3, time0: float, time1: float,
                 radius: float, material):
        super().__init__(center0, radius, material)
        self.center0 = center0
        self.center1 = center1
        self.time0 = time0
        self.time1 = time1

    def center_at(self, time: float) -> Vector3:
        span = self.time1 - self.time0
        if span == 0:
            return self.center0
        return self.center0 + (self.center1 - self.center0) * ((time - self.time0) / span)

    def bounding_box(self, time0: float = 0.0, time1: float = 0.0) -> AABB:
        r = abs(self.radius)
        offset = Vector3(r, r, r)
        c0 = self.center_at(time0)
        c1 = self.center_at(time1)
        box0 = AABB(c0 - offset, c0 + offset)
        box1 = AABB(c1 - offset, c1 + offset)
        return AABB.surrounding_box(box0, box1)

    def __repr__(self) -> str:
        return (f"MovingSphere({self.center0!r} @ {self.time0}, "
                f"{self.center1!r} @ {self.time1}, {self.radius})")
