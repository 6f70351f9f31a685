# camera/camera.py
import math
import random
from typing import Optional

from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_in_unit_disk
from pathtracer.core.vector import Vector3


class Camera:
    """
    Thin-lens camera. Rays start on a disk of radius aperture/2 around
    `look_from` and pass through the point of the viewport at `focus_dist`,
    so only the focus plane is sharp. Each ray gets a random time inside the
    shutter interval [t0, t1].

    The camera is fixed after construction; get_ray() only reads it.
    """
    def __init__(self, look_from: Vector3, look_at: Vector3, vup: Vector3,
                 vfov: float, aspect_ratio: float, aperture: float = 0.0,
                 focus_dist: Optional[float] = None, t0: float = 0.0, t1: float = 0.0):
        self.look_from = look_from
        self.look_at = look_at
        self.vup = vup
        self.vfov = vfov  # Vertical field of view in degrees
        self.aspect_ratio = aspect_ratio
        self.aperture = aperture
        self.focus_dist = focus_dist if focus_dist is not None else (look_from - look_at).length()
        self.lens_radius = aperture / 2.0
        self.t0 = t0
        self.t1 = t1

        # Orthonormal basis: w points backwards, u right, v up
        self.w = (look_from - look_at).normalize()
        self.u = vup.cross(self.w).normalize()
        self.v = self.w.cross(self.u)

        # Viewport dimensions from the field of view, scaled to the focus plane
        half_height = math.tan(math.radians(vfov) / 2)
        half_width = aspect_ratio * half_height

        self.origin = look_from
        self.horizontal = self.u * (2.0 * half_width * self.focus_dist)
        self.vertical = self.v * (2.0 * half_height * self.focus_dist)
        self.lower_left_corner = (self.origin -
                                  self.horizontal * 0.5 -
                                  self.vertical * 0.5 -
                                  self.w * self.focus_dist)

    def get_ray(self, s: float, t: float, rng=random) -> Ray:
        """
        Generates the ray through normalized viewport coordinates (s, t),
        with (0, 0) the lower-left corner and (1, 1) the upper-right one.
        """
        if self.lens_radius > 0:
            rd = random_in_unit_disk(rng) * self.lens_radius
            offset = self.u * rd.x + self.v * rd.y
        else:
            offset = Vector3(0, 0, 0)

        ray_origin = self.origin + offset
        ray_direction = (self.lower_left_corner +
                         self.horizontal * s +
                         self.vertical * t -
                         ray_origin)
        time = self.t0 if self.t1 == self.t0 else rng.uniform(self.t0, self.t1)
        return Ray(ray_origin, ray_direction, time)

    def __repr__(self) -> str:
        return (f"Camera(look_from={self.look_from!r}, look_at={self.look_at!r}, "
                f"vfov={self.vfov}, aspect_ratio={self.aspect_ratio}, "
                f"aperture={self.aperture}, focus_dist={self.focus_dist})")
