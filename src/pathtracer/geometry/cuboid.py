# geometry/cuboid.py
from typing import Optional

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.rect import XYRect, XZRect, YZRect
from pathtracer.geometry.world import HittableList


class Cuboid(Hittable):
    """
    Axis-aligned box spanning [origin, origin + size], built from six
    rectangles whose normals point out of the box.
    """
    def __init__(self, origin: Vector3, size: Vector3, material):
        self.origin = origin
        self.size = size
        self.material = material

        lo = origin
        hi = origin + size
        self.faces = HittableList([
            XYRect(lo.x, hi.x, lo.y, hi.y, lo.z, material, flip_normal=True),
            XYRect(lo.x, hi.x, lo.y, hi.y, hi.z, material),
            XZRect(lo.x, hi.x, lo.z, hi.z, lo.y, material, flip_normal=True),
            XZRect(lo.x, hi.x, lo.z, hi.z, hi.y, material),
            YZRect(lo.y, hi.y, lo.z, hi.z, lo.x, material, flip_normal=True),
            YZRect(lo.y, hi.y, lo.z, hi.z, hi.x, material),
        ])

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return self.faces.hit(ray, t_min, t_max)

    def __repr__(self) -> str:
        return f"Cuboid({self.origin!r}, {self.size!r})"
