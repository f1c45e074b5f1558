# materials/dielectric.py
import random
from typing import Optional, Tuple
from pathtrace.core.ray import Ray
from pathtrace.core.vector import Vector3, WHITE, reflect, refract, reflectance
from pathtrace.geometry.hittable import HitRecord
from pathtrace.materials.material import Material

class Dielectric(Material):
    """
    Clear refractive material (glass, water). Chooses between reflection and
    refraction per sample with probability given by Schlick's approximation.
    An optional tint colors the transmitted light; by default nothing is absorbed.
    """
    def __init__(self, ref_idx: float, tint: Vector3 = None):
        self.ref_idx = ref_idx
        self.tint = tint if tint is not None else WHITE

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> Optional[Tuple[Ray, Vector3]]:
        attenuation = self.tint

        # Determine if we're entering or exiting the material
        refraction_ratio = 1.0 / self.ref_idx if rec.front_face else self.ref_idx

        unit_direction = ray_in.direction.normalize()

        # Calculate cosine using the angle between incoming ray and normal
        cos_theta = min(-unit_direction.dot(rec.normal), 1.0)
        sin_theta = max(0.0, 1.0 - cos_theta * cos_theta) ** 0.5

        # Total internal reflection, or the reflect branch of the Fresnel draw.
        if (refraction_ratio * sin_theta > 1.0
                or reflectance(cos_theta, refraction_ratio) > rng.random()):
            direction = reflect(unit_direction, rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, refraction_ratio)
            if direction is None or direction.has_nan():
                direction = reflect(unit_direction, rec.normal)

        return Ray(rec.p, direction, ray_in.time), attenuation
