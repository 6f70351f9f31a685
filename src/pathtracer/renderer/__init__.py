from pathtracer.renderer.config import Background, CameraSettings, RenderConfig
from pathtracer.renderer.image_io import save_image
from pathtracer.renderer.raytracer import Renderer, radiance
from pathtracer.renderer.tone_mapping import gamma_correct, reinhard_tone_mapping, to_uint8

__all__ = [
    "Background",
    "CameraSettings",
    "RenderConfig",
    "Renderer",
    "gamma_correct",
    "radiance",
    "reinhard_tone_mapping",
    "save_image",
    "to_uint8",
]
