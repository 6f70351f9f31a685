# geometry/sphere.py
import math
from typing import Optional, Tuple

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord


def get_sphere_uv(normal: Vector3) -> Tuple[float, float]:
    """
    Longitude/latitude texture coordinates of a point on the unit sphere.
    u runs around the y axis, v from the south pole (0) to the north pole (1).
    """
    phi = math.atan2(normal.z, normal.x)
    theta = math.asin(max(-1.0, min(1.0, normal.y)))
    u = 1.0 - (phi + math.pi) / (2.0 * math.pi)
    v = (theta + math.pi / 2.0) / math.pi
    return u, v


def hit_sphere(center: Vector3, radius: float, material, ray: Ray,
               t_min: float, t_max: float) -> Optional[HitRecord]:
    if radius == 0.0:
        return None
    oc = ray.origin - center
    a = ray.direction.dot(ray.direction)
    if a == 0.0:
        return None
    half_b = oc.dot(ray.direction)
    c = oc.dot(oc) - radius * radius
    discriminant = half_b * half_b - a * c

    if discriminant <= 0:
        return None

    sqrt_disc = math.sqrt(discriminant)
    # Find the nearest root that lies in the acceptable range
    root = (-half_b - sqrt_disc) / a
    if root <= t_min or root >= t_max:
        root = (-half_b + sqrt_disc) / a
        if root <= t_min or root >= t_max:
            return None

    p = ray.at(root)
    normal = (p - center) / radius
    u, v = get_sphere_uv(normal)
    return HitRecord(t=root, p=p, normal=normal, u=u, v=v, material=material)


class Sphere(Hittable):
    """
    Represents a sphere defined by its center, radius, and material.
    """
    def __init__(self, center: Vector3, radius: float, material):
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return hit_sphere(self.center, self.radius, self.material, ray, t_min, t_max)

    def __repr__(self) -> str:
        return f"Sphere({self.center!r}, {self.radius})"


class MovingSphere(Hittable):
    """
    A sphere whose center moves linearly from center0 at time t0 to center1
    at time t1. Combined with the camera's shutter jitter this gives motion blur.
    """
    def __init__(self, center0: Vector3, center1: Vector3, t0: float, t1: float,
                 radius: float, material):
        self.center0 = center0
        self.center1 = center1
        self.t0 = t0
        self.t1 = t1
        self.radius = radius
        self.material = material

    def center(self, time: float) -> Vector3:
        if self.t1 == self.t0:
            return self.center0
        return self.center0 + (self.center1 - self.center0) * ((time - self.t0) / (self.t1 - self.t0))

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return hit_sphere(self.center(ray.time), self.radius, self.material, ray, t_min, t_max)
