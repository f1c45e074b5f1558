# renderer/integrator.py
import math
import random
from typing import Optional
from pathtrace.core.ray import Ray
from pathtrace.core.vector import Vector3, BLACK, WHITE
from pathtrace.geometry.hittable import Hittable

# Minimum hit distance for secondary rays; keeps a scattered ray from hitting
# the surface it just left ("shadow acne").
T_MIN = 0.001

SKY_HORIZON = WHITE
SKY_ZENITH = Vector3(0.5, 0.7, 1.0)

def sky_color(ray: Ray) -> Vector3:
    """
    Vertical gradient from white at the horizon to light blue overhead,
    used when the scene has no explicit background color.
    """
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return SKY_HORIZON * (1.0 - t) + SKY_ZENITH * t

def ray_color(ray: Ray, background: Optional[Vector3], world: Hittable, depth: int,
              rng: random.Random) -> Vector3:
    """
    Radiance arriving along ray, estimated with one random path.

    Each bounce spends one unit of depth; once the budget is used up the path
    contributes nothing, which bounds both the recursion and the cost per
    sample.
    """
    if depth <= 0:
        return BLACK

    rec = world.hit(ray, T_MIN, math.inf)
    if rec is None:
        return background if background is not None else sky_color(ray)

    material = rec.material
    emitted = material.emitted(rec.u, rec.v, rec.p)
    scatter = material.scatter(ray, rec, rng)
    if scatter is None:
        return emitted

    scattered, attenuation = scatter
    return emitted + attenuation * ray_color(scattered, background, world, depth - 1, rng)
