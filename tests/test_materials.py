"""Unit tests for materials and textures.

Tests cover:
- Schlick reflectance limits and the dielectric reflect/refract choice
- Metal fuzz clamping and absorption below the surface
- Lambertian scatter direction and texture attenuation
- Emission of lights, absorption of Blank
- Constant, checker, image and noise textures plus the image fallback
"""

import math

import numpy as np
import pytest
from PIL import Image

from pathtracer.core.ray import Ray
from pathtracer.core.utils import schlick
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.materials import (
    Blank,
    CheckerTexture,
    ConstantTexture,
    Dielectric,
    DiffuseLight,
    ImageTexture,
    Isotropic,
    Lambertian,
    Metal,
    NoiseTexture,
)
from pathtracer.materials.presets import MATERIAL_PRESETS, DielectricPresets, MetalPresets
from pathtracer.materials.texture_loader import (
    FALLBACK_ODD,
    decode_image,
    load_image_texture,
)


def floor_record(material=None):
    """A hit on the y=0 floor at the origin, normal pointing up."""
    return HitRecord(t=1.0, p=Vector3(0, 0, 0), normal=Vector3(0, 1, 0), u=0.25, v=0.75,
                     material=material)


class TestSchlick:
    """Tests for the Fresnel approximation."""

    def test_normal_incidence_is_r0(self):
        r0 = ((1.0 - 1.5) / (1.0 + 1.5)) ** 2
        assert math.isclose(schlick(1.0, 1.5), r0)

    def test_grazing_incidence_approaches_one(self):
        assert schlick(1e-6, 1.5) > 0.999

    def test_negative_cosine_is_clamped(self):
        assert schlick(-0.5, 1.5) == schlick(0.0, 1.5)


class TestDielectric:
    """Tests for refraction and reflection through glass."""

    def test_total_internal_reflection_always_reflects(self):
        glass = Dielectric(1.5)
        # Leaving the glass at a grazing angle
        ray = Ray(Vector3(0, 0, 0), Vector3(1, 0.1, 0))
        for _ in range(50):
            scattered, attenuation = glass.scatter(ray, floor_record(glass))
            assert scattered.direction.is_close(Vector3(1, -0.1, 0))
            assert attenuation == Vector3(1, 1, 1)

    def test_normal_incidence_mostly_refracts(self):
        glass = Dielectric(1.5)
        ray = Ray(Vector3(0, 1, 0), Vector3(0, -1, 0))
        refracted = 0
        for _ in range(500):
            scattered, _ = glass.scatter(ray, floor_record(glass))
            if scattered.direction.y < 0:
                refracted += 1
        # Reflectance at normal incidence is r0 = 0.04
        assert refracted > 440

    def test_scattered_ray_keeps_time(self):
        glass = Dielectric(1.5)
        scattered, _ = glass.scatter(Ray(Vector3(0, 1, 0), Vector3(0.3, -1, 0), time=0.7),
                                     floor_record(glass))
        assert scattered.time == 0.7

    def test_presets(self):
        assert DielectricPresets.diamond().ref_idx == 2.4
        assert isinstance(MATERIAL_PRESETS["glass"](), Dielectric)

    def test_non_positive_index_absorbs(self):
        """A degenerate index never divides by zero; the path just ends."""
        ray = Ray(Vector3(0, 1, 0), Vector3(0.2, -1, 0))
        for index in (0.0, -1.5):
            glass = Dielectric(index)
            assert glass.scatter(ray, floor_record(glass)) is None


class TestMetal:
    """Tests for specular reflection."""

    def test_mirror_reflection(self):
        mirror = Metal(Vector3(0.9, 0.8, 0.7))
        scattered, attenuation = mirror.scatter(Ray(Vector3(-1, 1, 0), Vector3(1, -1, 0)),
                                                floor_record())
        assert scattered.direction.is_close(Vector3(1, 1, 0).normalize())
        assert attenuation == Vector3(0.9, 0.8, 0.7)

    @pytest.mark.parametrize("fuzz, expected", [(-1.0, 0.0), (0.3, 0.3), (5.0, 1.0)])
    def test_fuzz_is_clamped(self, fuzz, expected):
        assert Metal(Vector3(1, 1, 1), fuzz).fuzz == expected

    def test_below_surface_is_absorbed(self):
        """A ray that reflects into the surface does not scatter."""
        mirror = Metal(Vector3(1, 1, 1))
        rec = floor_record()
        # Reflecting an upward ray about an upward normal points down
        assert mirror.scatter(Ray(Vector3(0, -1, 0), Vector3(0, 1, 0)), rec) is None

    def test_presets_are_metal(self):
        assert MetalPresets.gold().fuzz == 0.15
        assert isinstance(MATERIAL_PRESETS["mirror"](), Metal)


class TestDiffuse:
    """Tests for Lambertian, Isotropic, DiffuseLight and Blank."""

    def test_lambertian_scatters_into_upper_hemisphere_region(self):
        matte = Lambertian(Vector3(0.5, 0.5, 0.5))
        for _ in range(100):
            scattered, attenuation = matte.scatter(Ray(Vector3(0, 1, 0), Vector3(0, -1, 0)),
                                                   floor_record())
            # normal + point in unit sphere never points below the surface
            assert scattered.direction.y >= 0
            assert attenuation == Vector3(0.5, 0.5, 0.5)

    def test_lambertian_uses_texture(self):
        checker = CheckerTexture(Vector3(1, 0, 0), Vector3(0, 1, 0))
        matte = Lambertian(checker)
        rec = floor_record()
        _, attenuation = matte.scatter(Ray(Vector3(0, 1, 0), Vector3(0, -1, 0)), rec)
        assert attenuation == checker.value(rec.u, rec.v, rec.p)

    def test_isotropic_scatters_anywhere(self):
        fog = Isotropic(Vector3(0.3, 0.3, 0.3))
        directions = [fog.scatter(Ray(Vector3(0, 0, 0), Vector3(1, 0, 0)), floor_record())[0].direction
                      for _ in range(200)]
        assert any(d.y < 0 for d in directions)
        assert any(d.y > 0 for d in directions)

    def test_light_emits_and_absorbs(self, light):
        assert light.scatter(Ray(Vector3(0, 1, 0), Vector3(0, -1, 0)), floor_record()) is None
        assert light.emitted(0.0, 0.0, Vector3(0, 0, 0)) == Vector3(4, 3, 2)

    def test_non_emitters_are_black(self, white):
        assert white.emitted(0.5, 0.5, Vector3(1, 1, 1)) == Vector3(0, 0, 0)

    def test_blank_neither_scatters_nor_emits(self):
        blank = Blank()
        assert blank.scatter(Ray(Vector3(0, 1, 0), Vector3(0, -1, 0)), floor_record()) is None
        assert blank.emitted(0.0, 0.0, Vector3(0, 0, 0)) == Vector3(0, 0, 0)

    def test_default_record_material_is_blank(self):
        assert isinstance(HitRecord().material, Blank)


class TestTextures:
    """Tests for the texture variants."""

    def test_constant(self):
        assert ConstantTexture(Vector3(0.1, 0.2, 0.3)).value(0, 0, Vector3(9, 9, 9)) == Vector3(0.1, 0.2, 0.3)

    def test_checker_alternates(self):
        checker = CheckerTexture(Vector3(1, 0, 0), Vector3(0, 0, 1), scale=1.0)
        p = Vector3(1.0, 1.0, 1.0)          # all sines positive
        q = Vector3(-1.0, 1.0, 1.0)         # one sine negative
        assert checker.value(0, 0, p) == Vector3(0, 0, 1)
        assert checker.value(0, 0, q) == Vector3(1, 0, 0)

    def test_image_lookup_flips_v(self):
        pixels = np.zeros((2, 2, 3))
        pixels[0, 0] = (1, 0, 0)  # top-left
        pixels[1, 0] = (0, 1, 0)  # bottom-left
        texture = ImageTexture(pixels)
        assert texture.value(0.1, 0.9, Vector3(0, 0, 0)) == Vector3(1, 0, 0)
        assert texture.value(0.1, 0.1, Vector3(0, 0, 0)) == Vector3(0, 1, 0)

    def test_image_wraps_coordinates(self):
        pixels = np.random.rand(4, 4, 3)
        texture = ImageTexture(pixels)
        p = Vector3(0, 0, 0)
        assert texture.value(1.3, 0.6, p) == texture.value(0.3, 0.6, p)
        assert texture.value(-0.7, -0.4, p) == texture.value(0.3, 0.6, p)

    def test_empty_image_is_cyan(self):
        assert ImageTexture(np.zeros((0, 0, 3))).value(0.5, 0.5, Vector3(0, 0, 0)) == Vector3(0, 1, 1)

    def test_noise_is_gray_in_unit_range(self):
        texture = NoiseTexture(4.0, seed=7)
        for p in (Vector3(0.1, 0.2, 0.3), Vector3(-3.5, 1.25, 8.0), Vector3(10, -10, 0.5)):
            color = texture.value(0, 0, p)
            assert color.x == color.y == color.z
            assert 0.0 <= color.x <= 1.0

    def test_noise_seed_is_reproducible(self):
        p = Vector3(0.37, 1.1, -2.4)
        assert NoiseTexture(2.0, seed=3).value(0, 0, p) == NoiseTexture(2.0, seed=3).value(0, 0, p)

    def test_perlin_noise_vanishes_on_lattice(self):
        """Gradient noise is zero at integer lattice points."""
        noise = NoiseTexture(1.0, seed=11).noise
        assert abs(noise.noise(Vector3(2.0, -3.0, 5.0))) < 1e-12
        assert noise.turbulence(Vector3(0.5, 0.25, 0.125)) >= 0.0


class TestTextureLoader:
    """Tests for decoding image files into textures."""

    def test_decode_png(self, tmp_path):
        path = tmp_path / "red.png"
        Image.new("RGB", (3, 2), (255, 0, 0)).save(path)
        pixels = decode_image(str(path))
        assert pixels.shape == (2, 3, 3)
        assert pixels[0, 0].tolist() == [1.0, 0.0, 0.0]

    def test_grayscale_converted_to_rgb(self, tmp_path):
        path = tmp_path / "gray.png"
        Image.new("L", (2, 2), 51).save(path)
        texture = load_image_texture(str(path))
        assert isinstance(texture, ImageTexture)
        assert texture.value(0.5, 0.5, Vector3(0, 0, 0)).is_close(Vector3(0.2, 0.2, 0.2))

    def test_missing_file_falls_back(self, tmp_path, caplog):
        texture = load_image_texture(str(tmp_path / "nope.png"))
        assert isinstance(texture, CheckerTexture)
        assert texture.odd.value(0, 0, Vector3(0, 0, 0)) == FALLBACK_ODD
        assert "fallback" in caplog.text

    def test_corrupt_file_falls_back(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"not an image")
        assert isinstance(load_image_texture(str(path)), CheckerTexture)
