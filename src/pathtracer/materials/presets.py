# materials/presets.py
from typing import Callable, Dict

from pathtracer.core.vector import Vector3
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal


class MetalPresets:
    """Reflective materials used by the built-in scenes and the "preset" material kind."""

    @staticmethod
    def bronze() -> Metal:
        # The large polished sphere of the random scene
        return Metal(Vector3(0.7, 0.6, 0.5), fuzz=0.0)

    @staticmethod
    def gold() -> Metal:
        return Metal(Vector3(0.83, 0.69, 0.22), fuzz=0.15)

    @staticmethod
    def mirror() -> Metal:
        return Metal(Vector3(0.95, 0.95, 0.95))

    @staticmethod
    def brushed_steel() -> Metal:
        return Metal(Vector3(0.6, 0.62, 0.64), fuzz=0.4)


class DielectricPresets:
    """Clear materials by refractive index."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

    @staticmethod
    def water() -> Dielectric:
        return Dielectric(1.33)

    @staticmethod
    def crystal() -> Dielectric:
        return Dielectric(1.8)

    @staticmethod
    def diamond() -> Dielectric:
        return Dielectric(2.4)


class LightPresets:
    """Emitters. Intensities above 1 are needed to light a closed room."""

    @staticmethod
    def white(intensity: float = 4.0) -> DiffuseLight:
        return DiffuseLight(Vector3(1.0, 1.0, 1.0) * intensity)

    @staticmethod
    def warm(intensity: float = 4.0) -> DiffuseLight:
        return DiffuseLight(Vector3(1.0, 0.85, 0.6) * intensity)

    @staticmethod
    def ceiling_panel(smoke: bool = False) -> DiffuseLight:
        """The Cornell box light; the larger smoke-box panel is dimmer."""
        return LightPresets.white(7.0 if smoke else 15.0)


class ColorPresets:
    """Wall colors of the Cornell box."""

    RED = Vector3(0.65, 0.05, 0.05)
    GREEN = Vector3(0.12, 0.45, 0.15)
    WHITE = Vector3(0.73, 0.73, 0.73)

    @staticmethod
    def matte(color: Vector3) -> Lambertian:
        return Lambertian(color)


# Lookup table for scene files: {"type": "preset", "name": "gold"}
MATERIAL_PRESETS: Dict[str, Callable[[], Material]] = {
    "bronze": MetalPresets.bronze,
    "gold": MetalPresets.gold,
    "mirror": MetalPresets.mirror,
    "brushed_steel": MetalPresets.brushed_steel,
    "glass": DielectricPresets.glass,
    "water": DielectricPresets.water,
    "crystal": DielectricPresets.crystal,
    "diamond": DielectricPresets.diamond,
    "light": LightPresets.white,
    "warm_light": LightPresets.warm,
    "red": lambda: ColorPresets.matte(ColorPresets.RED),
    "green": lambda: ColorPresets.matte(ColorPresets.GREEN),
    "white": lambda: ColorPresets.matte(ColorPresets.WHITE),
}
