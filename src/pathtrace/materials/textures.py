# materials/textures.py
import math
from typing import Optional, Union
import numpy as np
from PIL import Image
from pathtrace.core.vector import Vector3

class Texture:
    """Base class for all textures."""
    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        """Color of the texture at surface coordinates (u, v) and point p."""
        raise NotImplementedError("value() must be implemented by texture subclasses.")

class SolidTexture(Texture):
    """A solid color texture."""
    def __init__(self, color: Vector3):
        self.color = color

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        return self.color

def as_texture(albedo: Union[Vector3, Texture]) -> Texture:
    """
    Wraps a plain color in a SolidTexture; textures pass through unchanged.
    """
    if isinstance(albedo, Texture):
        return albedo
    return SolidTexture(albedo)

class CheckerTexture(Texture):
    """
    A 3D checker pattern in world space. Cells are ``scale`` units wide, so
    the pattern repeats every ``2 * scale`` units along each axis.
    """
    def __init__(self, even: Union[Vector3, Texture], odd: Union[Vector3, Texture], scale: float = 1.0):
        if not scale > 0:
            raise ValueError(f"checker scale must be positive, got {scale}")
        self.even = as_texture(even)
        self.odd = as_texture(odd)
        self.scale = scale

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        inv = 1.0 / self.scale
        try:
            cell = (math.floor(p.x * inv) + math.floor(p.y * inv) + math.floor(p.z * inv))
        except (ValueError, OverflowError):
            # NaN or infinite coordinates have no cell.
            return self.odd.value(u, v, p)
        texture = self.even if cell % 2 == 0 else self.odd
        return texture.value(u, v, p)

class UVTexture(Texture):
    """Maps (u, v) straight to (red, blue). Handy when checking texture coordinates."""
    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        return Vector3(u, 0.0, v)

class Perlin:
    """
    Gradient noise over 3D space with random unit gradients on a lattice and
    three permutation tables. Tables come from a seeded NumPy generator so a
    scene built twice with the same seed renders identically.
    """
    POINT_COUNT = 256

    def __init__(self, seed: Optional[int] = None):
        rng = np.random.default_rng(seed)
        gradients = rng.uniform(-1.0, 1.0, size=(self.POINT_COUNT, 3))
        norms = np.linalg.norm(gradients, axis=1, keepdims=True)
        norms[norms == 0] = 1.0
        gradients = gradients / norms
        self.gradients = [Vector3(float(g[0]), float(g[1]), float(g[2])) for g in gradients]
        self.perm_x = rng.permutation(self.POINT_COUNT).tolist()
        self.perm_y = rng.permutation(self.POINT_COUNT).tolist()
        self.perm_z = rng.permutation(self.POINT_COUNT).tolist()

    def noise(self, p: Vector3) -> float:
        if not p.is_finite():
            return 0.0
        fx, fy, fz = math.floor(p.x), math.floor(p.y), math.floor(p.z)
        u = p.x - fx
        v = p.y - fy
        w = p.z - fz
        i, j, k = int(fx), int(fy), int(fz)

        # Hermite smoothing of the interpolation weights.
        uu = u * u * (3 - 2 * u)
        vv = v * v * (3 - 2 * v)
        ww = w * w * (3 - 2 * w)

        accum = 0.0
        for di in range(2):
            for dj in range(2):
                for dk in range(2):
                    g = self.gradients[
                        self.perm_x[(i + di) & 255]
                        ^ self.perm_y[(j + dj) & 255]
                        ^ self.perm_z[(k + dk) & 255]
                    ]
                    weight = Vector3(u - di, v - dj, w - dk)
                    accum += ((di * uu + (1 - di) * (1 - uu))
                              * (dj * vv + (1 - dj) * (1 - vv))
                              * (dk * ww + (1 - dk) * (1 - ww))
                              * g.dot(weight))
        return accum

    def turbulence(self, p: Vector3, depth: int = 7) -> float:
        accum = 0.0
        temp_p = p
        weight = 1.0
        for _ in range(depth):
            accum += weight * self.noise(temp_p)
            weight *= 0.5
            temp_p = temp_p * 2
        return abs(accum)

class NoiseTexture(Texture):
    """
    Marble-like procedural texture: a sine stripe along z perturbed by Perlin
    turbulence, shading between black and ``color``.
    """
    def __init__(self, scale: float = 1.0, color: Vector3 = None, turbulence: float = 10.0,
                 seed: Optional[int] = None):
        self.noise = Perlin(seed)
        self.scale = scale
        self.color = color if color is not None else Vector3(1.0, 1.0, 1.0)
        self.turbulence = turbulence

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        t = self.turbulence * self.noise.turbulence(p)
        value = 0.5 * (1 + math.sin(self.scale * p.z + t))
        if value != value:
            value = 0.0
        return self.color * value

class ImageTexture(Texture):
    """
    A texture backed by an RGB image. ``data`` is a (height, width, 3) float
    array in [0, 1]; row 0 is the top of the image, so v=1 maps to the top.
    """
    def __init__(self, data: np.ndarray):
        data = np.asarray(data, dtype=np.float64)
        if data.ndim != 3 or data.shape[2] < 3 or data.shape[0] == 0 or data.shape[1] == 0:
            raise ValueError(f"image texture needs a (height, width, 3) array, got shape {data.shape}")
        self.data = data[:, :, :3]
        self.height, self.width = self.data.shape[0], self.data.shape[1]

    @classmethod
    def from_image(cls, img: Image.Image) -> "ImageTexture":
        if img.mode != 'RGB':
            img = img.convert('RGB')
        # Convert to numpy array for faster access
        return cls(np.asarray(img, dtype=np.float64) / 255.0)

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        # Clamp texture coordinates to [0,1]; NaN lands on 0.
        u = min(max(u, 0.0), 1.0) if u == u else 0.0
        v = 1.0 - (min(max(v, 0.0), 1.0) if v == v else 0.0)

        # Convert to pixel coordinates
        x = min(int(u * self.width), self.width - 1)
        y = min(int(v * self.height), self.height - 1)

        color = self.data[y, x]
        return Vector3(float(color[0]), float(color[1]), float(color[2]))
