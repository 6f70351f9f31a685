# scene/loader.py
import json
import logging
import os
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3
from pathtracer.errors import ConfigError, SceneError
from pathtracer.geometry import (
    ConstantMedium,
    Cuboid,
    Hittable,
    HittableList,
    MovingSphere,
    Plane,
    Rotate,
    Sphere,
    Translate,
    Triangle,
    XYRect,
    XZRect,
    YZRect,
    load_obj,
)
from pathtracer.materials import (
    Blank,
    CheckerTexture,
    ConstantTexture,
    Dielectric,
    DiffuseLight,
    Isotropic,
    Lambertian,
    Material,
    Metal,
    NoiseTexture,
    Texture,
)
from pathtracer.materials.presets import MATERIAL_PRESETS
from pathtracer.materials.texture_loader import load_image_texture
from pathtracer.renderer.config import CameraSettings, RenderConfig

logger = logging.getLogger(__name__)

RECTANGLES = {"xy": XYRect, "xz": XZRect, "yz": YZRect}

_MISSING = object()


@dataclass
class Scene:
    """Everything a scene file describes: objects, render settings and camera."""
    world: HittableList
    config: RenderConfig = field(default_factory=RenderConfig)
    camera: CameraSettings = field(default_factory=CameraSettings)

    def build_camera(self) -> Camera:
        return self.camera.build(self.config)


def read_number(value: Any, name: str, default: Any = _MISSING) -> float:
    """
    Read a numeric field. Besides plain numbers the string "a,b" is accepted
    and yields a uniform random value in [a, b] (bounds in either order).
    """
    if value is None:
        if default is _MISSING:
            raise SceneError(f"missing required field '{name}'")
        return default
    if isinstance(value, bool):
        raise SceneError(f"'{name}' must be a number, got {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            bounds = [float(part) for part in value.replace(" ", "").split(",")[:2]]
        except ValueError:
            raise SceneError(f"'{name}' must be a number or an \"a,b\" range, got {value!r}") from None
        if len(bounds) == 1 or bounds[0] == bounds[1]:
            return bounds[0]
        lo, hi = sorted(bounds)
        return random.uniform(lo, hi)
    raise SceneError(f"'{name}' must be a number, got {value!r}")


def read_vector(block: Mapping[str, Any], name: str, default: Any = _MISSING,
                keys=("x", "y", "z")) -> Vector3:
    """Read an {"x":.., "y":.., "z":..} mapping (or a 3-element list) from `block`."""
    value = block.get(name)
    if value is None:
        if default is _MISSING:
            raise SceneError(f"missing required field '{name}'")
        return default
    if isinstance(value, (list, tuple)) and len(value) == 3:
        components = value
    elif isinstance(value, Mapping):
        components = [value.get(key) for key in keys]
    else:
        raise SceneError(f"'{name}' must be a mapping with keys {keys}, got {value!r}")
    return Vector3(*(read_number(c, f"{name}.{key}") for c, key in zip(components, keys)))


def read_color(block: Mapping[str, Any], name: str, default: Any = _MISSING) -> Vector3:
    return read_vector(block, name, default, keys=("r", "g", "b"))


class SceneLoader:
    """
    Builds a world from a parsed scene document.

    Each object list ("spheres", "cuboids", ...) is read entry by entry; an
    entry that cannot be built is logged and skipped so one typo does not
    lose the whole scene. Relative texture and mesh paths are resolved
    against `base_dir`.
    """
    def __init__(self, base_dir: str = "."):
        self.base_dir = base_dir
        self.object_loaders: Dict[str, Callable[[Mapping[str, Any]], Hittable]] = {
            "spheres": self.load_sphere,
            "moving_spheres": self.load_moving_sphere,
            "planes": self.load_plane,
            "rectangles": self.load_rectangle,
            "cuboids": self.load_cuboid,
            "triangles": self.load_triangle,
            "meshes": self.load_mesh,
        }

    def resolve(self, path: str) -> str:
        return path if os.path.isabs(path) else os.path.join(self.base_dir, path)

    # Materials and textures

    def load_texture(self, block: Mapping[str, Any], kind: str) -> Texture:
        if kind == "constant":
            return ConstantTexture(read_color(block, "color", Vector3(0.0, 0.0, 0.0)))
        if kind == "checkered":
            return CheckerTexture(read_color(block, "odd"), read_color(block, "even"),
                                  read_number(block.get("scale"), "scale", 10.0))
        if kind == "image":
            filename = block.get("filename")
            if not isinstance(filename, str):
                raise SceneError("image texture needs a 'filename'")
            return load_image_texture(self.resolve(filename))
        if kind == "noise":
            seed = read_number(block.get("seed"), "seed", None)
            return NoiseTexture(read_number(block.get("scale"), "scale", 1.0),
                                seed=int(seed) if seed is not None else None)
        raise SceneError(f"unknown texture '{kind}'")

    def load_material(self, block: Any) -> Material:
        """
        Material blocks look like {"type": "metal/checkered", "fuzz": 0.1, ...}.
        A kind without a texture part uses a constant color.
        """
        if not isinstance(block, Mapping) or not isinstance(block.get("type"), str):
            raise SceneError("missing material 'type'")
        kind, _, texture_kind = block["type"].partition("/")
        texture_kind = texture_kind or "constant"

        if kind == "preset":
            name = block.get("name")
            if not isinstance(name, str) or name not in MATERIAL_PRESETS:
                raise SceneError(f"unknown material preset {name!r}")
            return MATERIAL_PRESETS[name]()
        if kind == "dielectric":
            refractive_index = read_number(block.get("refractive_index"), "refractive_index", 1.5)
            if refractive_index <= 0.0:
                raise SceneError(f"'refractive_index' must be positive, got {refractive_index}")
            return Dielectric(refractive_index, read_color(block, "color", None))
        if kind == "matte":
            return Lambertian(self.load_texture(block, texture_kind))
        if kind == "metal":
            return Metal(self.load_texture(block, texture_kind),
                         read_number(block.get("fuzz"), "fuzz", 0.0))
        if kind == "light":
            return DiffuseLight(self.load_texture(block, texture_kind))
        if kind == "isotropic":
            return Isotropic(self.load_texture(block, texture_kind))
        raise SceneError(f"unknown material '{kind}'")

    # Objects

    def read_radius(self, item: Mapping[str, Any]) -> float:
        radius = read_number(item.get("radius"), "radius")
        if radius <= 0.0:
            raise SceneError(f"'radius' must be positive, got {radius}")
        return radius

    def load_sphere(self, item: Mapping[str, Any]) -> Hittable:
        return Sphere(read_vector(item, "center", Vector3(0.0, 0.0, 0.0)),
                      self.read_radius(item),
                      self.surface_material(item))

    def load_moving_sphere(self, item: Mapping[str, Any]) -> Hittable:
        return MovingSphere(read_vector(item, "center0"), read_vector(item, "center1"),
                            read_number(item.get("t0"), "t0", 0.0),
                            read_number(item.get("t1"), "t1", 1.0),
                            self.read_radius(item),
                            self.surface_material(item))

    def load_plane(self, item: Mapping[str, Any]) -> Hittable:
        return Plane(read_vector(item, "point", Vector3(0.0, 0.0, 0.0)),
                     read_vector(item, "normal"), self.surface_material(item))

    def load_rectangle(self, item: Mapping[str, Any]) -> Hittable:
        axes = item.get("axes")
        if not isinstance(axes, str) or axes not in RECTANGLES:
            raise SceneError(f"rectangle 'axes' must be one of {sorted(RECTANGLES)}, got {axes!r}")
        return RECTANGLES[axes](read_number(item.get("a0"), "a0"), read_number(item.get("a1"), "a1"),
                                read_number(item.get("b0"), "b0"), read_number(item.get("b1"), "b1"),
                                read_number(item.get("k"), "k", 0.0), self.surface_material(item),
                                flip_normal=bool(item.get("flip_normal", False)))

    def load_cuboid(self, item: Mapping[str, Any]) -> Hittable:
        return Cuboid(read_vector(item, "origin", Vector3(0.0, 0.0, 0.0)),
                      read_vector(item, "size"), self.surface_material(item))

    def load_triangle(self, item: Mapping[str, Any]) -> Hittable:
        vertices = item.get("vertices")
        if not isinstance(vertices, list) or len(vertices) != 3:
            raise SceneError("triangle needs exactly three 'vertices'")
        points = [read_vector({"vertex": v}, "vertex") for v in vertices]
        return Triangle(*points, self.surface_material(item))

    def load_mesh(self, item: Mapping[str, Any]) -> Hittable:
        filename = item.get("filename")
        if not isinstance(filename, str):
            raise SceneError("mesh needs a 'filename'")
        return load_obj(self.resolve(filename), self.surface_material(item),
                        scale=read_number(item.get("scale"), "scale", 1.0),
                        smooth=bool(item.get("smooth", False)))

    def surface_material(self, item: Mapping[str, Any]) -> Material:
        # A volume's boundary only bounds the medium, it never shades
        if item.get("density") is not None:
            return Blank()
        return self.load_material(item.get("material"))

    def load_object(self, kind: str, item: Mapping[str, Any]) -> Hittable:
        """Build one object and apply its optional density, rotation and position."""
        if not isinstance(item, Mapping):
            raise SceneError(f"expected an object, got {item!r}")
        obj = self.object_loaders[kind](item)

        if item.get("density") is not None:
            obj = ConstantMedium(obj, read_number(item["density"], "density"),
                                 self.load_material(item.get("material")))
        if item.get("rotation") is not None:
            angles = read_vector(item, "rotation")
            if angles != Vector3(0.0, 0.0, 0.0):
                obj = Rotate(obj, angles)
        if item.get("position") is not None:
            obj = Translate(obj, read_vector(item, "position"))
        return obj

    def load_objects(self, document: Mapping[str, Any]) -> List[Hittable]:
        objects = []
        for kind in self.object_loaders:
            items = document.get(kind) or []
            if not isinstance(items, list):
                logger.error("'%s' must be a list; ignoring it", kind)
                continue
            for index, item in enumerate(items):
                try:
                    objects.append(self.load_object(kind, item))
                except (SceneError, ValueError) as e:
                    logger.error("Skipping %s[%d]: %s", kind, index, e)
            logger.debug("Loaded %d %s", len(items), kind)
        return objects

    def load(self, document: Mapping[str, Any]) -> Scene:
        if not isinstance(document, Mapping):
            raise SceneError("scene document must be a JSON object")
        try:
            config = RenderConfig.from_dict(document.get("config") or {})
            camera = CameraSettings.from_dict(document.get("camera") or {})
        except ConfigError as e:
            raise SceneError(str(e)) from e

        world = HittableList(self.load_objects(document))
        logger.info("Scene has %d top-level object(s)", len(world))
        return Scene(world, config, camera)


def load_scene(path: str) -> Scene:
    """
    Load a JSON scene file.

    Raises:
        SceneError: If the file cannot be read, is not valid JSON or has an
            invalid config or camera block.
    """
    logger.info("Loading scene from %s", path)
    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except OSError as e:
        raise SceneError(f"Cannot read scene file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise SceneError(f"Invalid JSON in scene file {path}: {e}") from e

    return SceneLoader(os.path.dirname(os.path.abspath(path))).load(document)


def load_scene_dict(document: Mapping[str, Any], base_dir: Optional[str] = None) -> Scene:
    return SceneLoader(base_dir or os.getcwd()).load(document)
