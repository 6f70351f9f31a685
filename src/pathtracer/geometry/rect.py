# geometry/rect.py
from typing import Optional

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable, HitRecord

_UNIT_AXES = {
    'x': Vector3(1, 0, 0),
    'y': Vector3(0, 1, 0),
    'z': Vector3(0, 0, 1),
}


class AARect(Hittable):
    """
    Axis-aligned rectangle lying in the plane `axis = k`, bounded by
    [a0, a1] x [b0, b1] on the two remaining axes. Subclasses fix the axes.
    The normal points along +axis, or -axis when flip_normal is set.
    """
    axis = 'z'
    a_axis = 'x'
    b_axis = 'y'

    def __init__(self, a0: float, a1: float, b0: float, b1: float, k: float,
                 material, flip_normal: bool = False):
        self.a0, self.a1 = min(a0, a1), max(a0, a1)
        self.b0, self.b1 = min(b0, b1), max(b0, b1)
        self.k = k
        self.material = material
        self.flip_normal = flip_normal
        normal = _UNIT_AXES[self.axis]
        self.normal = -normal if flip_normal else normal

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        d = getattr(ray.direction, self.axis)
        # A ray running parallel to the plane never crosses it.
        if d == 0.0:
            return None
        t = (self.k - getattr(ray.origin, self.axis)) / d
        if t <= t_min or t >= t_max:
            return None

        a = getattr(ray.origin, self.a_axis) + t * getattr(ray.direction, self.a_axis)
        b = getattr(ray.origin, self.b_axis) + t * getattr(ray.direction, self.b_axis)
        if a < self.a0 or a > self.a1 or b < self.b0 or b > self.b1:
            return None

        width = self.a1 - self.a0
        height = self.b1 - self.b0
        u = (a - self.a0) / width if width > 0 else 0.0
        v = (b - self.b0) / height if height > 0 else 0.0
        return HitRecord(t=t, p=ray.at(t), normal=self.normal, u=u, v=v,
                         material=self.material)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}({self.a0}, {self.a1}, {self.b0}, {self.b1}, "
                f"k={self.k}, flip_normal={self.flip_normal})")


class XYRect(AARect):
    """Rectangle at z = k spanning x in [x0, x1] and y in [y0, y1]."""
    axis, a_axis, b_axis = 'z', 'x', 'y'


class XZRect(AARect):
    """Rectangle at y = k spanning x in [x0, x1] and z in [z0, z1]."""
    axis, a_axis, b_axis = 'y', 'x', 'z'


class YZRect(AARect):
    """Rectangle at x = k spanning y in [y0, y1] and z in [z0, z1]."""
    axis, a_axis, b_axis = 'x', 'y', 'z'
