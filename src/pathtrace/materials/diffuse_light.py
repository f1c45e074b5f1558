# materials/diffuse_light.py
import random
from typing import Optional, Tuple, Union
from pathtrace.core.ray import Ray
from pathtrace.core.vector import Vector3
from pathtrace.geometry.hittable import HitRecord
from pathtrace.materials.material import Material
from pathtrace.materials.textures import Texture, as_texture

class DiffuseLight(Material):
    """
    Emissive material that provides constant radiance with optional texture support.

    The texture can be used to create patterns in the emitted light, and
    brightness scales whatever the texture returns.
    """
    def __init__(self, emit: Union[Vector3, Texture], brightness: float = 1.0):
        self.texture = as_texture(emit)
        self.brightness = brightness

    def scatter(self, ray_in: Ray, rec: HitRecord, rng: random.Random) -> Optional[Tuple[Ray, Vector3]]:
        """
        Emissive materials do not scatter rays.
        """
        return None

    def emitted(self, u: float, v: float, p: Vector3) -> Vector3:
        color = self.texture.value(u, v, p)
        if self.brightness == 1.0:
            return color
        return color * self.brightness
