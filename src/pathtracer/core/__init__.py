from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3

__all__ = ["Ray", "Vector3"]
