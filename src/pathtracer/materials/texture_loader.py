# materials/texture_loader.py
import logging
import os

import numpy as np
from PIL import Image, UnidentifiedImageError

from pathtracer.core.vector import Vector3
from pathtracer.materials.textures import CheckerTexture, ImageTexture, Texture

logger = logging.getLogger(__name__)

# Loud magenta/black checker standing in for textures that failed to load
FALLBACK_ODD = Vector3(1.0, 0.0, 1.0)
FALLBACK_EVEN = Vector3(0.0, 0.0, 0.0)


def fallback_texture() -> CheckerTexture:
    return CheckerTexture(FALLBACK_ODD, FALLBACK_EVEN, scale=10.0)


def decode_image(image_path: str) -> np.ndarray:
    """
    Decode an image file into a (height, width, 3) float array in [0, 1].

    Raises:
        FileNotFoundError: If the image file doesn't exist
        ValueError: If the image cannot be decoded
    """
    if not os.path.exists(image_path):
        raise FileNotFoundError(f"Texture file not found: {image_path}")

    try:
        with Image.open(image_path) as img:
            # Convert to RGB if necessary
            if img.mode != 'RGB':
                img = img.convert('RGB')
            return np.asarray(img, dtype=np.float64) / 255.0
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Error loading texture {image_path}: {e}") from e


def load_image_texture(image_path: str) -> Texture:
    """
    Load an image file as a texture. A missing or unreadable file does not
    abort the render: a warning is logged and a magenta checker is returned.
    """
    try:
        pixels = decode_image(image_path)
    except (FileNotFoundError, ValueError) as e:
        logger.warning("%s; using fallback checker texture", e)
        return fallback_texture()
    logger.debug("Loaded texture %s (%dx%d)", image_path, pixels.shape[1], pixels.shape[0])
    return ImageTexture(pixels)
