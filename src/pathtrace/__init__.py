"""CPU path tracer for sphere scenes with a BVH and row-parallel rendering."""

from pathtrace.config import QUALITY_LEVELS, RenderConfig
from pathtrace.core import AABB, Color, Ray, Vector3
from pathtrace.camera import Camera
from pathtrace.geometry import (
    BVHNode,
    EmptySceneError,
    HitRecord,
    Hittable,
    HittableList,
    MovingSphere,
    Sphere,
)
from pathtrace.materials import (
    CheckerTexture,
    Dielectric,
    DiffuseLight,
    ImageTexture,
    Lambertian,
    Material,
    Metal,
    NoiseTexture,
    SolidTexture,
    Texture,
    UVTexture,
    load_texture,
)
from pathtrace.renderer import Framebuffer, Renderer, ray_color

__version__ = "0.1.0"
