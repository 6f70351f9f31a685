# geometry/mesh.py
import logging
from typing import List, Optional, Sequence, Tuple

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.errors import SceneError
from pathtracer.geometry.hittable import Hittable, HitRecord
from pathtracer.geometry.world import HittableList

logger = logging.getLogger(__name__)

# Determinant threshold below which the ray is treated as parallel.
EPSILON = 1e-6

Face = Tuple[int, int, int]


class Triangle(Hittable):
    """
    Single triangle intersected with the Möller–Trumbore algorithm.

    The reported (u, v) are the barycentric weights of v1 and v2. With
    per-vertex normals the shading normal is their barycentric blend,
    otherwise the flat face normal.
    """
    def __init__(self, v0: Vector3, v1: Vector3, v2: Vector3, material,
                 normals: Optional[Sequence[Vector3]] = None):
        self.v0 = v0
        self.v1 = v1
        self.v2 = v2
        self.material = material
        self.edge1 = v1 - v0
        self.edge2 = v2 - v0
        self.face_normal = self.edge1.cross(self.edge2).normalize()
        self.normals = tuple(normals) if normals is not None else None

    def get_normal(self, u: float, v: float) -> Vector3:
        """Interpolate normal at the given barycentric coordinates."""
        if self.normals is None:
            return self.face_normal
        n0, n1, n2 = self.normals
        w = 1.0 - u - v
        normal = (n0 * w + n1 * u + n2 * v).normalize()
        if normal.squared_length() == 0.0:
            return self.face_normal
        return normal

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        h = ray.direction.cross(self.edge2)
        a = self.edge1.dot(h)

        # Ray parallel to the triangle, or a degenerate triangle
        if -EPSILON < a < EPSILON:
            return None

        f = 1.0 / a
        s = ray.origin - self.v0
        u = f * s.dot(h)
        if u < 0.0 or u > 1.0:
            return None

        q = s.cross(self.edge1)
        v = f * ray.direction.dot(q)
        if v < 0.0 or u + v > 1.0:
            return None

        t = f * self.edge2.dot(q)
        # Line intersection, but outside the ray interval
        if t <= t_min or t >= t_max:
            return None

        return HitRecord(t=t, p=ray.at(t), normal=self.get_normal(u, v), u=u, v=v,
                         material=self.material)

    def __repr__(self) -> str:
        return f"Triangle({self.v0!r}, {self.v1!r}, {self.v2!r})"


def compute_vertex_normals(vertices: Sequence[Vector3], faces: Sequence[Face]) -> List[Vector3]:
    """
    Smooth normals: every face adds its un-normalized cross product (so larger
    faces weigh more) to its three vertices, then each sum is normalized.
    """
    accum = [Vector3.zero() for _ in vertices]
    for i0, i1, i2 in faces:
        face_normal = (vertices[i1] - vertices[i0]).cross(vertices[i2] - vertices[i0])
        accum[i0] = accum[i0] + face_normal
        accum[i1] = accum[i1] + face_normal
        accum[i2] = accum[i2] + face_normal
    return [n.normalize() for n in accum]


class TriangleMesh(Hittable):
    """Represents a 3D mesh composed of triangles, built from an indexed face list."""
    def __init__(self, vertices: Sequence[Vector3], faces: Sequence[Face], material,
                 smooth: bool = False):
        self.vertices = [v if isinstance(v, Vector3) else Vector3(*v) for v in vertices]
        self.faces = [tuple(int(i) for i in face) for face in faces]
        self.material = material
        self.smooth = smooth

        count = len(self.vertices)
        for face in self.faces:
            if len(face) != 3:
                raise ValueError(f"Mesh faces must be index triples, got {face}")
            if any(i < 0 or i >= count for i in face):
                raise ValueError(f"Face {face} references a vertex outside 0..{count - 1}")

        self.vertex_normals = compute_vertex_normals(self.vertices, self.faces) if smooth else None

        triangles = []
        for i0, i1, i2 in self.faces:
            normals = None
            if self.vertex_normals is not None:
                normals = (self.vertex_normals[i0], self.vertex_normals[i1], self.vertex_normals[i2])
            triangles.append(Triangle(self.vertices[i0], self.vertices[i1], self.vertices[i2],
                                      material, normals))
        self.triangles = HittableList(triangles)

    def __len__(self) -> int:
        return len(self.triangles)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> Optional[HitRecord]:
        return self.triangles.hit(ray, t_min, t_max)


def read_obj(filename: str, scale: float = 1.0) -> Tuple[List[Vector3], List[Face]]:
    """
    Read vertex positions and triangulated faces from a Wavefront OBJ file.

    Polygons are fan-triangulated. Texture and normal indices (`v/vt/vn`)
    are ignored; negative (relative) indices are resolved.
    """
    vertices: List[Vector3] = []
    faces: List[Face] = []

    def vertex_index(token: str, line_num: int) -> int:
        raw = int(token.split('/')[0])
        # OBJ indices are 1-based, negative ones count back from the end
        index = raw - 1 if raw > 0 else len(vertices) + raw
        if index < 0 or index >= len(vertices):
            raise SceneError(f"{filename}:{line_num}: vertex index {raw} out of range")
        return index

    try:
        with open(filename, 'r', encoding='utf-8') as f:
            for line_num, line in enumerate(f, 1):
                values = line.split()
                if not values or values[0].startswith('#'):
                    continue
                try:
                    if values[0] == 'v':
                        vertices.append(Vector3(float(values[1]) * scale,
                                                float(values[2]) * scale,
                                                float(values[3]) * scale))
                    elif values[0] == 'f':
                        indices = [vertex_index(v, line_num) for v in values[1:]]
                        if len(indices) < 3:
                            raise SceneError(f"{filename}:{line_num}: face needs three vertices")
                        for i in range(1, len(indices) - 1):
                            faces.append((indices[0], indices[i], indices[i + 1]))
                except SceneError:
                    raise
                except (IndexError, ValueError) as e:
                    raise SceneError(f"{filename}:{line_num}: cannot parse '{line.strip()}'") from e
    except (OSError, UnicodeDecodeError) as e:
        raise SceneError(f"Cannot read mesh file {filename}: {e}") from e

    logger.info("Loaded %s: %d vertices, %d triangles", filename, len(vertices), len(faces))
    return vertices, faces


def load_obj(filename: str, material, scale: float = 1.0, smooth: bool = False) -> TriangleMesh:
    """Load a 3D model from an OBJ file."""
    vertices, faces = read_obj(filename, scale)
    return TriangleMesh(vertices, faces, material, smooth=smooth)
