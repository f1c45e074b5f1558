# materials/material.py
import random
from typing import Optional, Tuple
from pathtrace.core.ray import Ray
from pathtrace.core.vector import Vector3, BLACK
from pathtrace.geometry.hittable import HitRecord

class Material:
    """
    Abstract material class. Subclasses must implement scatter().
    Surfaces that give off light also override emitted().
    """
    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> Optional[Tuple[Ray, Vector3]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the ray is absorbed.
        All randomness is drawn from rng, which belongs to the calling worker.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    def emitted(self, u: float, v: float, p: Vector3) -> Vector3:
        return BLACK
