"""Unit tests for the path tracer and the image renderer.

Tests cover:
- Background colors for escaping rays
- Emission, absorption and the depth cutoff in radiance()
- Image shape, row orientation and seeded reproducibility
- Serial and multi-process renders agree
"""

import multiprocessing

import numpy as np
import pytest

from pathtracer.camera import Camera
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry import Hittable, HittableList, Sphere, XYRect
from pathtracer.materials import DiffuseLight, Metal
from pathtracer.renderer import Background, RenderConfig, Renderer, radiance
from pathtracer.renderer.raytracer import ProgressLog, background_color, render_row


def looking_down_z(aspect=2.0):
    return Camera(Vector3(0, 0, 0), Vector3(0, 0, -1), Vector3(0, 1, 0), 90.0, aspect)


class UpwardFailure(Hittable):
    """Raises for any ray travelling upwards, like a broken primitive would."""
    def hit(self, ray, t_min, t_max):
        if ray.direction.y > 0:
            raise RuntimeError("upward ray")
        return None


class TestBackground:
    """Tests for rays that leave the scene."""

    def test_sky_gradient(self):
        up = Ray(Vector3(0, 0, 0), Vector3(0, 3, 0))
        down = Ray(Vector3(0, 0, 0), Vector3(0, -1, 0))
        assert background_color(up, Background.SKY) == Vector3(0.5, 0.7, 1.0)
        assert background_color(down, Background.SKY) == Vector3(1.0, 1.0, 1.0)

    def test_black_background(self):
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 1, 0))
        assert background_color(ray, Background.BLACK) == Vector3(0, 0, 0)

    def test_miss_returns_background(self):
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 1, 0))
        assert radiance(ray, HittableList()) == Vector3(0.5, 0.7, 1.0)
        assert radiance(ray, HittableList(), background=Background.BLACK) == Vector3(0, 0, 0)


class TestRadiance:
    """Tests for the recursive path estimator."""

    def test_emitter_returns_exact_emission(self, light):
        world = HittableList([Sphere(Vector3(0, 0, -3), 1.0, light)])
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        assert radiance(ray, world, background=Background.BLACK) == Vector3(4, 3, 2)

    def test_emission_counted_at_depth_limit(self, light):
        world = HittableList([Sphere(Vector3(0, 0, -3), 1.0, light)])
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        assert radiance(ray, world, depth=50, max_depth=50) == Vector3(4, 3, 2)

    def test_depth_cutoff_returns_black_for_non_emitters(self, white):
        world = HittableList([Sphere(Vector3(0, 0, -3), 1.0, white)])
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        assert radiance(ray, world, max_depth=0) == Vector3(0, 0, 0)

    def test_mirror_reflects_light(self):
        """A mirror facing a light returns attenuation times the emission."""
        mirror = Metal(Vector3(0.5, 0.5, 0.5))
        lamp = DiffuseLight(Vector3(2, 2, 2))
        world = HittableList([
            XYRect(-10, 10, -10, 10, -5, mirror),
            XYRect(-10, 10, -10, 10, 5, lamp, flip_normal=True),
        ])
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        assert radiance(ray, world, background=Background.BLACK).is_close(Vector3(1, 1, 1))

    def test_white_sphere_under_sky_is_gray(self, white):
        world = HittableList([Sphere(Vector3(0, 0, -3), 1.0, white)])
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        total = Vector3(0, 0, 0)
        n = 200
        for _ in range(n):
            total = total + radiance(ray, world)
        mean = total / n
        for channel in mean:
            assert 0.3 < channel <= 1.0
        # Gray, not white: the sky's blue channel is always 1, red and green are not
        assert mean.x < 1.0
        assert mean.y < 1.0

    def test_absorbing_surface_under_black_sky(self, gray):
        world = HittableList([Sphere(Vector3(0, 0, -3), 1.0, gray)])
        ray = Ray(Vector3(0, 0, 0), Vector3(0, 0, -1))
        assert radiance(ray, world, background=Background.BLACK) == Vector3(0, 0, 0)


class TestRenderer:
    """Tests for whole-image rendering."""

    def config(self, **kwargs):
        params = dict(width=8, height=4, samples=2, max_depth=5, workers=1, seed=42)
        params.update(kwargs)
        return RenderConfig(**params)

    def test_image_shape_and_range(self, white):
        world = HittableList([Sphere(Vector3(0, 0, -2), 0.5, white)])
        image = Renderer(self.config()).render(world, looking_down_z())
        assert image.shape == (4, 8, 3)
        assert np.all(np.isfinite(image))
        assert image.min() >= 0.0
        assert image.max() <= 1.0 + 1e-9

    def test_row_zero_is_top(self):
        """Upper rows look further up the sky, so they are bluer (less red)."""
        image = Renderer(self.config(samples=4)).render(HittableList(), looking_down_z())
        assert image[0, :, 0].mean() < image[-1, :, 0].mean()
        assert np.allclose(image[:, :, 2], 1.0)

    def test_seeded_renders_repeat(self, white):
        world = HittableList([Sphere(Vector3(0, 0, -2), 0.5, white)])
        first = Renderer(self.config()).render(world, looking_down_z())
        second = Renderer(self.config()).render(world, looking_down_z())
        assert np.array_equal(first, second)

    def test_render_row_width(self, white):
        world = HittableList([Sphere(Vector3(0, 0, -2), 0.5, white)])
        row = render_row(world, looking_down_z(), self.config(), 0)
        assert row.shape == (8, 3)

    def test_parallel_matches_serial(self, white):
        """With a seed every row has a fixed stream, so worker count does not matter."""
        world = HittableList([Sphere(Vector3(0, 0, -2), 0.5, white)])
        serial = Renderer(self.config(workers=1)).render(world, looking_down_z())
        parallel = Renderer(self.config(workers=2)).render(world, looking_down_z())
        assert np.array_equal(serial, parallel)

    def test_worker_failure_shuts_down_pool(self, white):
        """An error in a worker propagates and leaves no live worker processes behind."""
        world = HittableList([UpwardFailure(), Sphere(Vector3(0, 0, -2), 0.5, white)])
        with pytest.raises(RuntimeError, match="upward ray"):
            Renderer(self.config(workers=2)).render(world, looking_down_z())
        assert multiprocessing.active_children() == []

    def test_default_workers_uses_cpus(self):
        assert Renderer(RenderConfig()).workers >= 1


class TestProgressLog:
    def test_logs_every_step(self, caplog):
        caplog.set_level("INFO", logger="pathtracer.renderer.raytracer")
        progress = ProgressLog(20)
        for _ in range(20):
            progress.advance()
        messages = [r for r in caplog.records if "Render progress" in r.getMessage()]
        assert len(messages) == 10
        assert "100.0%" in messages[-1].getMessage()
