from pathtrace.materials.material import Material
from pathtrace.materials.lambertian import Lambertian
from pathtrace.materials.metal import Metal
from pathtrace.materials.dielectric import Dielectric
from pathtrace.materials.diffuse_light import DiffuseLight
from pathtrace.materials.textures import (
    Texture,
    SolidTexture,
    CheckerTexture,
    NoiseTexture,
    ImageTexture,
    UVTexture,
    Perlin,
)
from pathtrace.materials.texture_loader import load_texture, create_image_material
