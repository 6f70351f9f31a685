# geometry/plane.py
from typing import Optional

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord


class Plane(Hittable):
    """
    Infinite one-sided plane through `point`. Only rays travelling against
    the normal (approaching from the side it faces) register a hit.
    """
    def __init__(self, point: Vector3, normal: Vector3, material):
        self.point = point
        self.normal = normal.normalize()
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        denominator = -ray.direction.dot(self.normal)
        if denominator <= 1e-6:
            return None
        t = (ray.origin - self.point).dot(self.normal) / denominator
        if t <= t_min or t >= t_max:
            return None
        return HitRecord(t=t, p=ray.at(t), normal=self.normal, material=self.material)
