# geometry/world.py
from typing import Iterable, List, Optional
from pathtrace.core.aabb import AABB
from pathtrace.core.ray import Ray
from pathtrace.geometry.bvh import BVHNode, EmptySceneError
from pathtrace.geometry.hittable import Hittable, HitRecord

class HittableList(Hittable):
    """
    The scene: an ordered list of Hittable objects. Once build_bvh() has been
    called, queries for rays inside the BVH's time interval go through it;
    anything else (and every query on an empty scene) tests each object in
    turn.
    """
    def __init__(self, objects: Optional[Iterable[Hittable]] = None):
        self.objects: List[Hittable] = list(objects) if objects is not None else []
        self.bvh_root: Optional[BVHNode] = None

    def add(self, obj: Hittable):
        self.objects.append(obj)
        self.bvh_root = None

    def clear(self):
        self.objects.clear()
        self.bvh_root = None

    def __len__(self) -> int:
        return len(self.objects)

    def build_bvh(self, time0: float = 0.0, time1: float = 0.0) -> BVHNode:
        """
        Wraps all objects in a BVH whose boxes hold for any time in
        [time0, time1]. Raises EmptySceneError for an empty scene.
        """
        self.bvh_root = BVHNode.build(self.objects, time0, time1)
        return self.bvh_root

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        bvh = self.bvh_root
        if bvh is not None and bvh.covers(ray.time, ray.time):
            return bvh.hit(ray, t_min, t_max)
        return self.hit_linear(ray, t_min, t_max)

    def hit_linear(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        """
        Brute-force closest-hit scan over every object.
        """
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record

    def bounding_box(self, time0: float = 0.0, time1: float = 0.0) -> AABB:
        if not self.objects:
            raise EmptySceneError("an empty scene has no bounding box")
        box = self.objects[0].bounding_box(time0, time1)
        for obj in self.objects[1:]:
            box = AABB.surrounding_box(box, obj.bounding_box(time0, time1))
        return box
