from pathtrace.geometry.hittable import Hittable, HitRecord
from pathtrace.geometry.sphere import Sphere, MovingSphere, sphere_uv
from pathtrace.geometry.bvh import BVHNode, EmptySceneError
from pathtrace.geometry.world import HittableList
