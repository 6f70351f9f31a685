# geometry/constant_medium.py
import math
import random
from typing import Optional

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.materials.isotropic import Isotropic
from pathtracer.materials.material import Material

# Offset past the entry hit when searching for the exit hit.
EXIT_SEARCH_OFFSET = 0.0001

# Media have no surface; any fixed normal will do for the isotropic phase function.
ARBITRARY_NORMAL = Vector3(1, 0, 0)


class ConstantMedium(Hittable):
    """
    Homogeneous participating medium (fog, smoke) filling a closed boundary.

    A ray travelling through the boundary scatters after an exponentially
    distributed distance with rate `density`; if that happens before the ray
    leaves the volume a hit is reported with the medium's phase function as
    material. The boundary itself should carry a Blank material.
    """
    def __init__(self, boundary: Hittable, density: float, albedo):
        self.boundary = boundary
        self.density = density
        if isinstance(albedo, Material):
            self.phase_function = albedo
        else:
            self.phase_function = Isotropic(albedo)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        if self.density <= 0.0:
            return None

        rec1 = self.boundary.hit(ray, -math.inf, math.inf)
        if rec1 is None:
            return None
        rec2 = self.boundary.hit(ray, rec1.t + EXIT_SEARCH_OFFSET, math.inf)
        if rec2 is None:
            return None

        t_enter = max(rec1.t, t_min)
        t_exit = min(rec2.t, t_max)
        if t_enter >= t_exit:
            return None
        t_enter = max(t_enter, 0.0)

        ray_length = ray.direction.length()
        if ray_length == 0.0:
            return None
        distance_inside_boundary = (t_exit - t_enter) * ray_length
        # 1 - random() lies in (0, 1], keeping the logarithm finite
        hit_distance = -math.log(1.0 - random.random()) / self.density
        if hit_distance >= distance_inside_boundary:
            return None

        t = t_enter + hit_distance / ray_length
        return HitRecord(t=t, p=ray.at(t), normal=ARBITRARY_NORMAL,
                         material=self.phase_function)
