# materials/textures.py
import math
from typing import Optional

import numpy as np

from pathtracer.core.perlin import Perlin
from pathtracer.core.vector import Vector3


class Texture:
    """Base class for all textures: a color field over (u, v, point)."""
    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        """Sample the texture at the given texture coordinates and hit point."""
        raise NotImplementedError("value() must be implemented by texture subclasses.")


def as_texture(value) -> Texture:
    """Wrap a plain color (Vector3 or RGB triple) in a ConstantTexture."""
    if isinstance(value, Texture):
        return value
    if isinstance(value, Vector3):
        return ConstantTexture(value)
    return ConstantTexture(Vector3(*value))


class ConstantTexture(Texture):
    """A solid color texture."""
    def __init__(self, color: Vector3):
        self.color = color

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        return self.color

    def __repr__(self) -> str:
        return f"ConstantTexture({self.color!r})"


class CheckerTexture(Texture):
    """
    Three-dimensional checker pattern. The sign of sin(sx)·sin(sy)·sin(sz)
    picks the `odd` texture (negative) or the `even` one.
    """
    def __init__(self, odd, even, scale: float = 10.0):
        self.odd = as_texture(odd)
        self.even = as_texture(even)
        self.scale = scale

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        s = self.scale
        sines = math.sin(s * p.x) * math.sin(s * p.y) * math.sin(s * p.z)
        if sines < 0:
            return self.odd.value(u, v, p)
        return self.even.value(u, v, p)


class ImageTexture(Texture):
    """
    A texture backed by a decoded bitmap: a row-major (height, width, 3)
    array of RGB values in [0, 1], row 0 at the top of the image.
    """
    def __init__(self, pixels):
        data = np.asarray(pixels, dtype=np.float64)
        if data.size == 0:
            data = np.zeros((0, 0, 3))
        elif data.ndim != 3 or data.shape[2] < 3:
            raise ValueError(f"Expected a (height, width, 3) pixel array, got shape {data.shape}")
        self.data = data[:, :, :3]
        self.height, self.width = self.data.shape[:2]

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        # Without texture data return solid cyan as a debugging aid
        if self.width == 0 or self.height == 0:
            return Vector3(0, 1, 1)

        # Handle texture wrapping
        u = u % 1.0
        v = 1.0 - (v % 1.0)  # Flip V so v = 1 is the top row

        # Convert to pixel coordinates
        x = min(max(int(u * self.width), 0), self.width - 1)
        y = min(max(int(v * self.height), 0), self.height - 1)

        r, g, b = self.data[y, x]
        return Vector3(r, g, b)


class NoiseTexture(Texture):
    """
    Marble-like procedural texture: a sine stripe along z phase-shifted by
    seven octaves of Perlin turbulence.
    """
    def __init__(self, scale: float = 1.0, seed: Optional[int] = None):
        self.scale = scale
        self.noise = Perlin(seed)

    def value(self, u: float, v: float, p: Vector3) -> Vector3:
        intensity = 0.5 * (1.0 + math.sin(self.scale * p.z + 10.0 * self.noise.turbulence(p, 7)))
        return Vector3(intensity, intensity, intensity)
