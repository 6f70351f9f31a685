# renderer/image_io.py
import logging
import os

import numpy as np
from PIL import Image

from pathtracer.renderer.tone_mapping import tone_map

logger = logging.getLogger(__name__)


def save_image(path: str, image: np.ndarray, tone_mapping: str = "gamma") -> str:
    """
    Tone map a linear (height, width, 3) image and write it with Pillow.
    The format follows the file extension (.png, .ppm, .jpg, ...).
    """
    pixels = tone_map(image, tone_mapping)
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    Image.fromarray(pixels).save(path)
    logger.info("Wrote %dx%d image to %s", pixels.shape[1], pixels.shape[0], path)
    return path
