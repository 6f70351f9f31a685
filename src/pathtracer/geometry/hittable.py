# geometry/hittable.py
from typing import Optional

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.materials.blank import Blank

# Shared placeholder so a record never carries a null material.
BLANK = Blank()


class HitRecord:
    """
    Records details of a ray-object intersection.

    Every hit() call builds its own record, so decorators may rewrite `p` and
    `normal` of the record returned by the object they wrap.
    """
    __slots__ = ("t", "p", "normal", "u", "v", "material")

    def __init__(self, t: float = 0.0, p: Vector3 = None, normal: Vector3 = None,
                 u: float = 0.0, v: float = 0.0, material=None):
        self.t = t              # Ray parameter at intersection
        self.p = p if p is not None else Vector3.zero()
        self.normal = normal if normal is not None else Vector3.zero()
        self.u = u              # Texture coordinates
        self.v = v
        self.material = material if material is not None else BLANK

    def __repr__(self) -> str:
        return (f"HitRecord(t={self.t}, p={self.p!r}, normal={self.normal!r}, "
                f"u={self.u}, v={self.v}, material={self.material!r})")


class Hittable:
    """
    Abstract class for objects that can be hit by a ray.

    hit() returns the closest intersection with t_min < t < t_max, or None.
    It must not modify the object, so one scene can be queried from many
    workers at once.
    """
    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        raise NotImplementedError("hit() must be implemented by subclasses.")
