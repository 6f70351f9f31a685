# geometry/transform.py
import math
from typing import Optional, Sequence, Union

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord


class Translate(Hittable):
    """
    Moves the wrapped object by `offset`. The incoming ray is shifted into
    the object's frame; the hit point is shifted back out.
    """
    def __init__(self, obj: Hittable, offset: Vector3):
        self.obj = obj
        self.offset = offset

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        moved = Ray(ray.origin - self.offset, ray.direction, ray.time)
        rec = self.obj.hit(moved, t_min, t_max)
        if rec is None:
            return None
        rec.p = rec.p + self.offset
        return rec


class AxisRotate(Hittable):
    """
    Rotation of the wrapped object by `angle` degrees about one coordinate
    axis. Rays enter through the inverse rotation; the hit point and normal
    leave through the forward rotation. Rotations keep direction length, so
    the reported t is valid in both frames.
    """
    def __init__(self, obj: Hittable, angle: float):
        self.obj = obj
        self.angle = angle
        radians = math.radians(angle)
        self.sin_theta = math.sin(radians)
        self.cos_theta = math.cos(radians)

    def rotate(self, v: Vector3, sin_theta: float) -> Vector3:
        raise NotImplementedError("rotate() must be implemented by subclasses.")

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        local = Ray(self.rotate(ray.origin, -self.sin_theta),
                    self.rotate(ray.direction, -self.sin_theta),
                    ray.time)
        rec = self.obj.hit(local, t_min, t_max)
        if rec is None:
            return None
        rec.p = self.rotate(rec.p, self.sin_theta)
        rec.normal = self.rotate(rec.normal, self.sin_theta)
        return rec


class RotateX(AxisRotate):
    def rotate(self, v: Vector3, sin_theta: float) -> Vector3:
        c = self.cos_theta
        return Vector3(v.x, c * v.y - sin_theta * v.z, sin_theta * v.y + c * v.z)


class RotateY(AxisRotate):
    def rotate(self, v: Vector3, sin_theta: float) -> Vector3:
        c = self.cos_theta
        return Vector3(c * v.x + sin_theta * v.z, v.y, -sin_theta * v.x + c * v.z)


class RotateZ(AxisRotate):
    def rotate(self, v: Vector3, sin_theta: float) -> Vector3:
        c = self.cos_theta
        return Vector3(c * v.x - sin_theta * v.y, sin_theta * v.x + c * v.y, v.z)


class Rotate(Hittable):
    """
    Rotation by Euler angles in degrees, applied to the object about X,
    then Y, then Z. Axes with a zero angle are not wrapped.
    """
    def __init__(self, obj: Hittable, angles: Union[Vector3, Sequence[float]]):
        ax, ay, az = angles
        self.angles = Vector3(ax, ay, az)
        wrapped = obj
        for cls, angle in ((RotateX, ax), (RotateY, ay), (RotateZ, az)):
            if angle:
                wrapped = cls(wrapped, angle)
        self.obj = wrapped

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return self.obj.hit(ray, t_min, t_max)
