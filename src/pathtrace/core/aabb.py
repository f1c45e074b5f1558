# core/aabb.py
import math
from typing import Optional, Tuple
from pathtrace.core.vector import Vector3

class AABB:
    """
    Axis-aligned bounding box. The corners are reordered on construction so
    that minimum <= maximum on every axis.
    """
    __slots__ = ("minimum", "maximum")

    def __init__(self, a: Vector3, b: Vector3):
        self.minimum = Vector3(min(a.x, b.x), min(a.y, b.y), min(a.z, b.z))
        self.maximum = Vector3(max(a.x, b.x), max(a.y, b.y), max(a.z, b.z))

    @staticmethod
    def point(p: Vector3) -> "AABB":
        return AABB(p, p)

    def hit(self, ray, t_min: float, t_max: float) -> Optional[Tuple[float, float]]:
        """
        Slab test. Returns the parametric interval (t0, t1) over which the ray
        is inside the box, clipped to [t_min, t_max], or None on a miss.
        Any NaN along the way counts as a miss.
        """
        origin = ray.origin
        direction = ray.direction
        for axis in range(3):
            o = origin[axis]
            d = direction[axis]
            lo = self.minimum[axis]
            hi = self.maximum[axis]
            if d == 0.0:
                # Parallel to the slab: inside it or never.
                if not (lo <= o <= hi):
                    return None
                continue
            inv_d = 1.0 / d
            t0 = (lo - o) * inv_d
            t1 = (hi - o) * inv_d
            if math.isnan(t0) or math.isnan(t1):
                return None
            if inv_d < 0:
                t0, t1 = t1, t0
            if t0 > t_min:
                t_min = t0
            if t1 < t_max:
                t_max = t1
            if not t_max > t_min:
                return None
        return t_min, t_max

    def centroid(self) -> Vector3:
        return (self.minimum + self.maximum) * 0.5

    def diagonal(self) -> Vector3:
        return self.maximum - self.minimum

    def longest_axis(self) -> int:
        d = self.diagonal()
        if d.x > d.y and d.x > d.z:
            return 0
        if d.y > d.z:
            return 1
        return 2

    def __repr__(self) -> str:
        return f"AABB({self.minimum!r}, {self.maximum!r})"

    def __reduce__(self):
        return (AABB, (self.minimum, self.maximum))

    @staticmethod
    def surrounding_box(box0: "AABB", box1: "AABB") -> "AABB":
        # A NaN bound never wins, so one broken object cannot poison the
        # boxes of its neighbours.
        small = Vector3(
            _lower(box0.minimum.x, box1.minimum.x),
            _lower(box0.minimum.y, box1.minimum.y),
            _lower(box0.minimum.z, box1.minimum.z)
        )
        big = Vector3(
            _upper(box0.maximum.x, box1.maximum.x),
            _upper(box0.maximum.y, box1.maximum.y),
            _upper(box0.maximum.z, box1.maximum.z)
        )
        return AABB(small, big)

def _lower(a: float, b: float) -> float:
    return b if (b < a or a != a) else a

def _upper(a: float, b: float) -> float:
    return b if (b > a or a != a) else a
