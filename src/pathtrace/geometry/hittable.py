# geometry/hittable.py
from typing import Optional
from pathtrace.core.aabb import AABB
from pathtrace.core.vector import Vector3
from pathtrace.core.ray import Ray

class HitRecord:
    """
    Where and how a ray met a surface: the point, both normals, the ray
    parameter, texture coordinates and the material to scatter with.
    """
    __slots__ = ("p", "normal", "outward_normal", "t", "u", "v", "front_face", "material")

    def __init__(self, p: Vector3 = None, normal: Vector3 = None,
                 t: float = 0, front_face: bool = True, material = None,
                 u: float = 0.0, v: float = 0.0):
        self.p = p
        self.normal = normal    # Surface normal, always facing the incoming ray
        self.outward_normal = normal  # Geometric normal pointing out of the surface
        self.t = t
        self.front_face = front_face  # True when the ray arrived from outside
        self.material = material
        self.u = u              # Texture coordinates
        self.v = v

    def set_face_normal(self, ray: Ray, outward_normal: Vector3):
        """
        Store outward_normal and orient normal against the incoming ray.
        """
        self.outward_normal = outward_normal
        self.front_face = ray.direction.dot(outward_normal) < 0
        self.normal = outward_normal if self.front_face else -outward_normal

    def __repr__(self) -> str:
        return (f"HitRecord(t={self.t}, p={self.p!r}, normal={self.normal!r}, "
                f"front_face={self.front_face})")

class Hittable:
    """
    Anything a ray can intersect: primitives, the BVH and the scene itself.
    """
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")

    def bounding_box(self, time0: float = 0.0, time1: float = 0.0) -> AABB:
        """
        Box enclosing the object over the whole [time0, time1] interval.
        """
        raise NotImplementedError("bounding_box() must be implemented by subclasses.")
