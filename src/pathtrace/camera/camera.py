# camera/camera.py
import math
import random
from pathtrace.core.vector import Vector3
from pathtrace.core.ray import Ray
from pathtrace.core.utils import random_in_unit_disk

class Camera:
    """
    Thin-lens camera. Looks from look_from towards look_at with vertical
    field of view vfov (degrees). A non-zero aperture gives depth of field
    focused at focus_dist; a shutter interval [time0, time1] gives motion blur.

    All state is fixed at construction, so a single camera can be shared by
    every render worker.
    """
    def __init__(self, look_from: Vector3, look_at: Vector3, vup: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: float = 1.0, time0: float = 0.0, time1: float = 0.0):
        if not (0.0 < vfov < 180.0):
            raise ValueError(f"vertical field of view must be in (0, 180) degrees, got {vfov}")
        if not aspect_ratio > 0:
            raise ValueError(f"aspect ratio must be positive, got {aspect_ratio}")
        if not focus_dist > 0:
            raise ValueError(f"focus distance must be positive, got {focus_dist}")
        if time1 < time0:
            raise ValueError(f"shutter closes before it opens: [{time0}, {time1}]")

        self.vfov = vfov
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture
        self.focus_dist = focus_dist
        self.lens_radius = aperture / 2.0
        self.time0 = time0
        self.time1 = time1

        # Compute viewport dimensions based on fov
        viewport_height = 2.0 * math.tan(math.radians(vfov) / 2)
        viewport_width = aspect_ratio * viewport_height

        self.origin = look_from
        self.w = (look_from - look_at).normalize()
        if self.w.near_zero():
            raise ValueError("look_from and look_at must be different points")
        self.u = vup.cross(self.w).normalize()
        if self.u.near_zero():
            raise ValueError("vup must not be parallel to the viewing direction")
        self.v = self.w.cross(self.u)

        # Scale by focus distance
        self.horizontal = self.u * (viewport_width * focus_dist)
        self.vertical = self.v * (viewport_height * focus_dist)
        self.lower_left_corner = (self.origin -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * focus_dist)

    def get_ray(self, s: float, t: float, rng: random.Random) -> Ray:
        """
        Ray through normalized viewport coordinates (s, t), with (0, 0) at the
        lower-left corner. The lens sample and shutter time come from rng.
        """
        if self.lens_radius > 0:
            rd = random_in_unit_disk(rng) * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y
        else:
            offset = Vector3(0.0, 0.0, 0.0)

        ray_origin = self.origin + offset
        direction = (self.lower_left_corner +
                     self.horizontal * s +
                     self.vertical * t -
                     ray_origin)

        if self.time1 > self.time0:
            time = rng.uniform(self.time0, self.time1)
        else:
            time = self.time0
        return Ray(ray_origin, direction, time)
