from pathtrace.core.vector import Vector3, Color, reflect, refract, reflectance
from pathtrace.core.ray import Ray
from pathtrace.core.aabb import AABB
