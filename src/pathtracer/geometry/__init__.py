from pathtracer.geometry.constant_medium import ConstantMedium
from pathtracer.geometry.cuboid import Cuboid
from pathtracer.geometry.hittable import HitRecord, Hittable
from pathtracer.geometry.mesh import Triangle, TriangleMesh, load_obj, read_obj
from pathtracer.geometry.plane import Plane
from pathtracer.geometry.rect import XYRect, XZRect, YZRect
from pathtracer.geometry.sphere import MovingSphere, Sphere
from pathtracer.geometry.transform import Rotate, RotateX, RotateY, RotateZ, Translate
from pathtracer.geometry.world import HittableList

__all__ = [
    "ConstantMedium",
    "Cuboid",
    "HitRecord",
    "Hittable",
    "HittableList",
    "MovingSphere",
    "Plane",
    "Rotate",
    "RotateX",
    "RotateY",
    "RotateZ",
    "Sphere",
    "Translate",
    "Triangle",
    "TriangleMesh",
    "XYRect",
    "XZRect",
    "YZRect",
    "load_obj",
    "read_obj",
]
