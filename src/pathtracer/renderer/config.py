# renderer/config.py
import enum
import math
from dataclasses import dataclass, field, fields
from typing import Any, Mapping, Optional, Tuple

from pathtracer.camera.camera import Camera
from pathtracer.core.vector import Vector3
from pathtracer.errors import ConfigError

TONE_MAPPINGS = ("gamma", "reinhard", "auto")


class Background(enum.Enum):
    """What a ray that escapes the scene sees."""
    SKY = "sky"      # white-to-blue gradient
    BLACK = "black"  # nothing; the scene is lit by its own emitters


@dataclass
class RenderConfig:
    width: int = 200
    height: int = 100
    samples: int = 100
    max_depth: int = 50
    background: Background = Background.SKY
    output: str = "output.png"
    workers: Optional[int] = None  # None means one per CPU
    seed: Optional[int] = None
    tone_mapping: str = "gamma"

    def __post_init__(self):
        if not isinstance(self.background, Background):
            try:
                self.background = Background(str(self.background).lower())
            except ValueError:
                raise ConfigError(f"Unknown background '{self.background}', "
                                  f"expected one of {[b.value for b in Background]}") from None
        for name in ("width", "height", "samples"):
            value = _as_int(getattr(self, name), name)
            if value < 1:
                raise ConfigError(f"{name} must be at least 1, got {value}")
            setattr(self, name, value)
        self.max_depth = _as_int(self.max_depth, "max_depth")
        if self.max_depth < 0:
            raise ConfigError(f"max_depth must not be negative, got {self.max_depth}")
        if self.workers is not None:
            self.workers = _as_int(self.workers, "workers")
            if self.workers < 1:
                raise ConfigError(f"workers must be at least 1, got {self.workers}")
        if self.seed is not None:
            self.seed = _as_int(self.seed, "seed")
        if self.tone_mapping not in TONE_MAPPINGS:
            raise ConfigError(f"Unknown tone mapping '{self.tone_mapping}', expected one of {TONE_MAPPINGS}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "RenderConfig":
        """Build a config from the `config` block of a scene file; unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")
        return cls(**dict(values))


@dataclass
class CameraSettings:
    look_from: Vector3 = field(default_factory=lambda: Vector3(13.0, 3.0, 5.0))
    look_at: Vector3 = field(default_factory=lambda: Vector3(0.0, 0.5, 0.0))
    vup: Vector3 = field(default_factory=lambda: Vector3(0.0, 1.0, 0.0))
    vfov: float = 20.0
    aspect_ratio: Optional[float] = None  # None: derived from the image size
    aperture: float = 0.05
    focus_dist: Optional[float] = None    # None: distance between look_from and look_at
    t0: float = 0.0
    t1: float = 1.0

    def __post_init__(self):
        if not 0.0 < self.vfov < 180.0:
            raise ConfigError(f"fov must lie strictly between 0 and 180 degrees, got {self.vfov}")
        if self.aperture < 0.0:
            raise ConfigError(f"aperture must not be negative, got {self.aperture}")
        if self.t1 < self.t0:
            raise ConfigError(f"shutter closes (t1={self.t1}) before it opens (t0={self.t0})")
        if (self.look_from - self.look_at).length() == 0.0:
            raise ConfigError("camera look-from and look-to points coincide")
        if self.vup.cross(self.look_from - self.look_at).length() == 0.0:
            raise ConfigError(f"camera up vector {self.vup!r} is zero or parallel to the view direction")

    @classmethod
    def from_dict(cls, values: Mapping[str, Any]) -> "CameraSettings":
        """Build camera settings from the `camera` block of a scene file."""
        kwargs = {}
        for key, name in (("from", "look_from"), ("to", "look_at"), ("vertical", "vup")):
            if key in values:
                kwargs[name] = parse_vector(values[key], key)
        for key, name in (("fov", "vfov"), ("aspect_ratio", "aspect_ratio"),
                          ("aperture", "aperture"), ("focus_distance", "focus_dist"),
                          ("t0", "t0"), ("t1", "t1")):
            if key in values:
                kwargs[name] = _as_float(values[key], key)
        return cls(**kwargs)

    def build(self, config: RenderConfig) -> Camera:
        aspect = self.aspect_ratio if self.aspect_ratio is not None else config.aspect_ratio
        return Camera(self.look_from, self.look_at, self.vup, self.vfov, aspect,
                      aperture=self.aperture, focus_dist=self.focus_dist,
                      t0=self.t0, t1=self.t1)


def parse_vector(value: Any, name: str = "vector") -> Vector3:
    """Accept {"x":.., "y":.., "z":..} mappings or three-element sequences."""
    if isinstance(value, Vector3):
        return value
    if isinstance(value, Mapping):
        try:
            components: Tuple = (value["x"], value["y"], value["z"])
        except KeyError as e:
            raise ConfigError(f"{name} is missing component {e.args[0]}") from None
    elif isinstance(value, (list, tuple)) and len(value) == 3:
        components = tuple(value)
    else:
        raise ConfigError(f"{name} must be an x/y/z mapping or a 3-element list, got {value!r}")
    return Vector3(*(_as_float(c, name) for c in components))


def _as_float(value: Any, name: str) -> float:
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number, got {value!r}")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be a number, got {value!r}") from None


def _as_int(value: Any, name: str) -> int:
    number = _as_float(value, name)
    if not math.isfinite(number) or number != int(number):
        raise ConfigError(f"{name} must be a whole number, got {value!r}")
    return int(number)
