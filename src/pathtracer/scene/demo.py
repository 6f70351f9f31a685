# scene/demo.py
import random
from typing import Sequence

from pathtracer.core.vector import Vector3
from pathtracer.geometry import (
    ConstantMedium,
    Cuboid,
    HittableList,
    MovingSphere,
    Plane,
    Rotate,
    Sphere,
    Translate,
    XYRect,
    XZRect,
    YZRect,
)
from pathtracer.materials import (
    Blank,
    CheckerTexture,
    DiffuseLight,
    Lambertian,
    Metal,
    NoiseTexture,
)
from pathtracer.materials.presets import ColorPresets, DielectricPresets, LightPresets, MetalPresets
from pathtracer.materials.texture_loader import load_image_texture
from pathtracer.renderer.config import Background, CameraSettings, RenderConfig
from pathtracer.scene.loader import Scene

HERO_CENTER = Vector3(4.0, 0.2, 0.0)


def _random_color() -> Vector3:
    return Vector3(random.random() * random.random(),
                   random.random() * random.random(),
                   random.random() * random.random())


def _noise_texture(scale: float) -> NoiseTexture:
    # Lattice seeded from `random` so a seeded run rebuilds the same marble
    return NoiseTexture(scale, seed=random.randrange(2 ** 32))


def _random_checker() -> CheckerTexture:
    return CheckerTexture(_random_color(), _random_color(), random.random() * 15.0 + 10.0)


def random_scene(image_textures: Sequence[str] = ()) -> HittableList:
    """
    A marble floor covered with small spheres (moving, textured, metal and
    glass) around four large feature spheres. Image textures are used for
    some of the spheres when file paths are given.
    """
    textures = [load_image_texture(path) for path in image_textures]
    world = HittableList()
    world.add(Plane(Vector3(0.0, 0.0, 0.0), Vector3(0.0, 1.0, 0.0), Lambertian(_noise_texture(10.0))))

    for a in range(-11, 11):
        for b in range(-11, 11):
            choose_mat = random.random()
            center = Vector3(a + 0.9 * random.random(), 0.2, b + 0.9 * random.random())
            if (center - HERO_CENTER).length() <= 0.9:
                continue

            if choose_mat < 0.4:
                choose_texture = random.random()
                if choose_texture < 0.25:
                    albedo = _random_color()
                elif choose_texture < 0.5:
                    albedo = _noise_texture(10.0 + 10.0 * random.random())
                elif choose_texture < 0.75 and textures:
                    albedo = random.choice(textures)
                else:
                    albedo = _random_checker()
                center1 = center + Vector3(0.0, 0.5 * random.random(), 0.0)
                world.add(MovingSphere(center, center1, 0.0, 1.0, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.8:
                choose_texture = random.random()
                if choose_texture < 0.33:
                    albedo = _random_color()
                elif choose_texture < 0.66:
                    albedo = _noise_texture(10.0 + 10.0 * random.random())
                else:
                    albedo = _random_checker()
                world.add(Sphere(center, 0.2, Lambertian(albedo)))
            elif choose_mat < 0.95:
                albedo = Vector3(0.5 * (1.0 + random.random()),
                                 0.5 * (1.0 + random.random()),
                                 0.5 * (1.0 + random.random()))
                world.add(Sphere(center, 0.2, Metal(albedo, 0.5 * random.random())))
            else:
                world.add(Sphere(center, 0.2, DielectricPresets.diamond()))

    feature = textures[0] if textures else _noise_texture(4.0)
    world.add(Sphere(Vector3(0.0, 1.0, 0.0), 1.0, Lambertian(feature)))
    world.add(Sphere(Vector3(-4.0, 1.0, 0.0), 1.0, MetalPresets.bronze()))
    world.add(Sphere(Vector3(4.0, 1.0, 0.0), 1.0, DielectricPresets.crystal()))
    world.add(Sphere(Vector3(-8.0, 1.0, 0.0), 1.0,
                     Lambertian(CheckerTexture(Vector3(0.05, 0.05, 0.05), Vector3(0.95, 0.05, 0.95), 10.0))))
    return world


def cornell_box(smoke: bool = False) -> HittableList:
    """
    The Cornell box: red and green side walls, a ceiling light and two
    rotated boxes. With `smoke` the boxes become dark and light fog volumes.
    """
    red = ColorPresets.matte(ColorPresets.RED)
    white = ColorPresets.matte(ColorPresets.WHITE)
    green = ColorPresets.matte(ColorPresets.GREEN)
    light = LightPresets.ceiling_panel(smoke)

    world = HittableList()
    world.add(YZRect(0.0, 555.0, 0.0, 555.0, 555.0, green, flip_normal=True))
    world.add(YZRect(0.0, 555.0, 0.0, 555.0, 0.0, red))
    if smoke:
        world.add(XZRect(113.0, 443.0, 127.0, 432.0, 554.0, light, flip_normal=True))
    else:
        world.add(XZRect(213.0, 343.0, 227.0, 332.0, 554.0, light, flip_normal=True))
    world.add(XZRect(0.0, 555.0, 0.0, 555.0, 555.0, white, flip_normal=True))
    world.add(XZRect(0.0, 555.0, 0.0, 555.0, 0.0, white))
    world.add(XYRect(0.0, 555.0, 0.0, 555.0, 555.0, white, flip_normal=True))

    short_box = Cuboid(Vector3(0.0, 0.0, 0.0), Vector3(165.0, 165.0, 165.0), Blank() if smoke else white)
    tall_box = Cuboid(Vector3(0.0, 0.0, 0.0), Vector3(165.0, 330.0, 165.0), Blank() if smoke else white)
    if smoke:
        short_box = ConstantMedium(short_box, 0.01, Vector3(1.0, 1.0, 1.0))
        tall_box = ConstantMedium(tall_box, 0.01, Vector3(0.0, 0.0, 0.0))
    world.add(Translate(Rotate(short_box, Vector3(0.0, -18.0, 0.0)), Vector3(130.0, 0.0, 65.0)))
    world.add(Translate(Rotate(tall_box, Vector3(0.0, 15.0, 0.0)), Vector3(265.0, 0.0, 295.0)))
    return world


def random_scene_settings() -> CameraSettings:
    return CameraSettings(look_from=Vector3(13.0, 2.0, 5.0), look_at=Vector3(0.0, 0.5, 0.0),
                          vfov=20.0, aperture=0.05, t0=0.0, t1=1.0)


def cornell_settings() -> CameraSettings:
    return CameraSettings(look_from=Vector3(278.0, 278.0, -800.0), look_at=Vector3(278.0, 278.0, 0.0),
                          vfov=40.0, aperture=0.0, t0=0.0, t1=1.0)


DEMOS = {
    "random": lambda: (random_scene(), Background.SKY, random_scene_settings()),
    "cornell": lambda: (cornell_box(), Background.BLACK, cornell_settings()),
    "cornell-smoke": lambda: (cornell_box(smoke=True), Background.BLACK, cornell_settings()),
}


def demo_scene(name: str, config: RenderConfig = None) -> Scene:
    """Build one of the named demo scenes; the render config's background is set to match."""
    if name not in DEMOS:
        raise KeyError(f"Unknown demo scene '{name}', expected one of {sorted(DEMOS)}")
    world, background, camera = DEMOS[name]()
    config = config or RenderConfig()
    config.background = background
    return Scene(world, config, camera)
