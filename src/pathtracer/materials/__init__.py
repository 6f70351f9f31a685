from pathtracer.materials.blank import Blank
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.isotropic import Isotropic
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal
from pathtracer.materials.textures import (
    CheckerTexture,
    ConstantTexture,
    ImageTexture,
    NoiseTexture,
    Texture,
)

__all__ = [
    "Blank",
    "CheckerTexture",
    "ConstantTexture",
    "Dielectric",
    "DiffuseLight",
    "ImageTexture",
    "Isotropic",
    "Lambertian",
    "Material",
    "Metal",
    "NoiseTexture",
    "Texture",
]
