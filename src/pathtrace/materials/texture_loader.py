# materials/texture_loader.py
import logging
import os
from PIL import Image, UnidentifiedImageError
from pathtrace.materials.textures import ImageTexture

logger = logging.getLogger(__name__)

def load_texture(image_path: str) -> ImageTexture:
    """
    Decode an image file into an ImageTexture. Palette, grayscale and alpha
    images are converted to RGB on the way in.

    Raises:
        FileNotFoundError: nothing exists at image_path
        ValueError: the file exists but Pillow cannot decode it
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            texture = ImageTexture.from_image(img)
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Error loading texture {image_path}: {e}") from e

    logger.info("Loaded texture %s (%dx%d)", image_path, texture.width, texture.height)
    return texture

def create_image_material(image_path: str, material_class, **material_params):
    """
    Shortcut for ``material_class(load_texture(image_path), **material_params)``,
    e.g. ``create_image_material("earth.jpg", Metal, fuzz=0.2)``.
    """
    texture = load_texture(image_path)
    return material_class(texture, **material_params)
