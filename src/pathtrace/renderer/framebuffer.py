# renderer/framebuffer.py
from typing import Sequence
import numpy as np
from PIL import Image
from pathtrace.core.vector import Vector3
from pathtrace.renderer.tone_mapping import (
    auto_exposure_tone_mapping,
    gamma_correct,
    quantize,
    reinhard_tone_mapping,
)

class Framebuffer:
    """
    Averaged linear radiance per pixel, stored row-major as a
    (height, width, 3) float array. Row 0 is the top of the image.

    Each row is written exactly once by the renderer.
    """
    def __init__(self, width: int, height: int):
        if width <= 0 or height <= 0:
            raise ValueError(f"framebuffer dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.float64)
        self._written = np.zeros(height, dtype=bool)

    def write_row(self, row: int, colors: Sequence[Sequence[float]]):
        if self._written[row]:
            raise ValueError(f"row {row} has already been written")
        values = np.asarray(colors, dtype=np.float64)
        if values.shape != (self.width, 3):
            raise ValueError(f"row {row} needs shape ({self.width}, 3), got {values.shape}")
        self.pixels[row] = values
        self._written[row] = True

    def is_complete(self) -> bool:
        return bool(self._written.all())

    def pixel(self, x: int, y: int) -> Vector3:
        r, g, b = self.pixels[y, x]
        return Vector3(float(r), float(g), float(b))

    def to_rgb8(self, tone_map: str = "gamma") -> np.ndarray:
        """
        Finalize for display: square-root gamma and byte quantization by
        default. "reinhard" compresses highlights first; "auto" also picks
        the exposure from the average luminance.
        """
        if tone_map == "gamma":
            return quantize(gamma_correct(self.pixels))
        if tone_map == "reinhard":
            return reinhard_tone_mapping(self.pixels)
        if tone_map == "auto":
            return auto_exposure_tone_mapping(self.pixels)
        raise ValueError(f"unknown tone map: {tone_map!r}")

    def to_image(self, tone_map: str = "gamma") -> Image.Image:
        """
        The finalized image as a Pillow image, ready for an encoder.
        """
        return Image.fromarray(self.to_rgb8(tone_map))
