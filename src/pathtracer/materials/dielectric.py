# materials/dielectric.py
import math
import random
from typing import Optional, Tuple

from pathtracer.core.ray import Ray
from pathtracer.core.utils import reflect, refract, schlick
from pathtracer.core.vector import Vector3
from pathtracer.materials.material import Material


class Dielectric(Material):
    """
    Clear refractive material (glass, water). Each scatter either reflects
    or refracts, picking reflection with the Schlick Fresnel probability and
    always on total internal reflection.
    """
    def __init__(self, ref_idx: float, attenuation: Vector3 = None):
        self.ref_idx = ref_idx
        # Glass doesn't absorb light by default
        self.attenuation = attenuation if attenuation is not None else Vector3(1.0, 1.0, 1.0)

    def scatter(self, ray_in: Ray, rec) -> Optional[Tuple[Ray, Vector3]]:
        direction = ray_in.direction
        length = direction.length()
        if length == 0.0 or self.ref_idx <= 0.0:
            return None
        reflected = reflect(direction, rec.normal)
        d_dot_n = direction.dot(rec.normal) / length

        if d_dot_n > 0:
            # Exiting: flip the normal, refract from the medium into air
            outward_normal = -rec.normal
            ni_over_nt = self.ref_idx
            # Cosine of the transmitted angle on the outside
            cosine = math.sqrt(max(0.0, 1.0 - self.ref_idx * self.ref_idx * (1.0 - d_dot_n * d_dot_n)))
        else:
            outward_normal = rec.normal
            ni_over_nt = 1.0 / self.ref_idx
            cosine = -d_dot_n

        refracted = refract(direction, outward_normal, ni_over_nt)
        if refracted is None:
            reflect_prob = 1.0
        else:
            reflect_prob = schlick(cosine, self.ref_idx)

        if random.random() < reflect_prob:
            return Ray(rec.p, reflected, ray_in.time), self.attenuation
        return Ray(rec.p, refracted, ray_in.time), self.attenuation

    def __repr__(self) -> str:
        return f"Dielectric({self.ref_idx})"
