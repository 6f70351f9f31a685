# materials/material.py
from typing import TYPE_CHECKING, Optional, Tuple

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3

if TYPE_CHECKING:
    from pathtracer.geometry.hittable import HitRecord

BLACK = Vector3(0, 0, 0)


class Material:
    """
    Abstract material class. Subclasses must implement scatter().
    Materials are shared by many primitives and never change after construction.
    """
    def scatter(self, ray_in: Ray, rec: "HitRecord") -> Optional[Tuple[Ray, Vector3]]:
        """
        Computes the scattered ray and attenuation.
        Returns a tuple (scattered_ray, attenuation) or None if the path is absorbed.
        """
        raise NotImplementedError("scatter() must be implemented by subclasses.")

    def emitted(self, u: float, v: float, p: Vector3) -> Vector3:
        """Light emitted at the hit point; black unless overridden."""
        return BLACK

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"
