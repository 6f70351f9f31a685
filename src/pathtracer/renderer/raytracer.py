# renderer/raytracer.py
import logging
import math
import os
import random
import time
from concurrent.futures import ProcessPoolExecutor, as_completed

import numpy as np

from pathtracer.camera.camera import Camera
from pathtracer.core.ray import Ray
from pathtracer.core.vector import Vector3
from pathtracer.geometry.hittable import Hittable
from pathtracer.renderer.config import Background, RenderConfig

logger = logging.getLogger(__name__)

MAX_DEPTH = 50
# Lower bound of the hit interval; keeps scattered rays off their own surface
T_MIN = 0.001

BLACK = Vector3(0.0, 0.0, 0.0)
WHITE = Vector3(1.0, 1.0, 1.0)
SKY_BLUE = Vector3(0.5, 0.7, 1.0)

# Per-process render state, filled by the pool initializer
_worker_state = {}


def background_color(ray: Ray, background: Background) -> Vector3:
    """Color seen by a ray that leaves the scene."""
    if background is Background.BLACK:
        return BLACK
    unit_direction = ray.direction.normalize()
    t = 0.5 * (unit_direction.y + 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t


def radiance(ray: Ray, world: Hittable, depth: int = 0, max_depth: int = MAX_DEPTH,
             background: Background = Background.SKY) -> Vector3:
    """
    Single-sample estimate of the light arriving along `ray`.

    Emission at the hit point is always counted. The path continues through
    the material's scattered ray, weighted by its attenuation, until a
    material absorbs it or `max_depth` bounces have been taken.
    """
    rec = world.hit(ray, T_MIN, math.inf)
    if rec is None:
        return background_color(ray, background)

    emitted = rec.material.emitted(rec.u, rec.v, rec.p)
    if depth >= max_depth:
        return emitted

    scatter_result = rec.material.scatter(ray, rec)
    if scatter_result is None:
        return emitted

    scattered, attenuation = scatter_result
    return emitted + attenuation * radiance(scattered, world, depth + 1, max_depth, background)


def render_row(world: Hittable, camera: Camera, config: RenderConfig, y: int) -> np.ndarray:
    """
    Average `config.samples` jittered samples for every pixel of image row y
    (row 0 is the top of the image). Returns a (width, 3) linear color array.
    """
    width, height = config.width, config.height
    j = height - 1 - y
    row = np.zeros((width, 3), dtype=np.float64)
    for i in range(width):
        color = BLACK
        for _ in range(config.samples):
            s = (i + random.random()) / width
            t = (j + random.random()) / height
            ray = camera.get_ray(s, t)
            color = color + radiance(ray, world, 0, config.max_depth, config.background)
        row[i] = (color.x, color.y, color.z)
    row /= config.samples
    return row


def seed_row(config: RenderConfig, y: int):
    """With a configured seed every row has its own fixed stream, whichever worker runs it."""
    if config.seed is not None:
        random.seed(config.seed * 1_000_003 + y)


def _init_worker(world: Hittable, camera: Camera, config: RenderConfig):
    # Forked workers inherit the parent's generator state; give each its own stream.
    random.seed()
    _worker_state["world"] = world
    _worker_state["camera"] = camera
    _worker_state["config"] = config


def _render_row_task(y: int) -> np.ndarray:
    config = _worker_state["config"]
    seed_row(config, y)
    return render_row(_worker_state["world"], _worker_state["camera"], config, y)


class ProgressLog:
    """Logs completed rows at coarse steps so workers never contend on a counter."""
    def __init__(self, total: int, step_percent: int = 10):
        self.total = total
        self.step = max(1, total * step_percent // 100)
        self.done = 0
        self.start = time.perf_counter()

    def advance(self):
        self.done += 1
        if self.done % self.step == 0 or self.done == self.total:
            elapsed = time.perf_counter() - self.start
            remaining = elapsed / self.done * (self.total - self.done)
            logger.info("Render progress: %5.1f%% (%d/%d rows, %.1fs elapsed, ~%.1fs left)",
                        100.0 * self.done / self.total, self.done, self.total, elapsed, remaining)


class Renderer:
    """
    Renders a scene into a linear-color image buffer.

    Pixels are independent, so rows are spread over a process pool. The
    scene, camera and config are sent to every worker once and only read.
    """
    def __init__(self, config: RenderConfig):
        self.config = config

    @property
    def workers(self) -> int:
        return self.config.workers or os.cpu_count() or 1

    def render(self, world: Hittable, camera: Camera) -> np.ndarray:
        """Returns a (height, width, 3) float array of averaged linear colors, row 0 on top."""
        config = self.config
        image = np.zeros((config.height, config.width, 3), dtype=np.float64)
        progress = ProgressLog(config.height)
        workers = min(self.workers, config.height)

        logger.info("Rendering a %dx%d image at %d samples/pixel on %d worker(s)...",
                    config.width, config.height, config.samples, workers)

        if workers == 1:
            for y in range(config.height):
                seed_row(config, y)
                image[y] = render_row(world, camera, config, y)
                progress.advance()
        else:
            self._render_parallel(world, camera, image, progress, workers)

        logger.info("Render finished in %.1fs", time.perf_counter() - progress.start)
        return image

    def _render_parallel(self, world: Hittable, camera: Camera, image: np.ndarray,
                         progress: ProgressLog, workers: int):
        with ProcessPoolExecutor(max_workers=workers, initializer=_init_worker,
                                 initargs=(world, camera, self.config)) as pool:
            futures = {pool.submit(_render_row_task, y): y for y in range(self.config.height)}
            try:
                for future in as_completed(futures):
                    image[futures[future]] = future.result()
                    progress.advance()
            except KeyboardInterrupt:
                logger.warning("Render interrupted; cancelling remaining rows")
                pool.shutdown(wait=False, cancel_futures=True)
                raise
            except Exception:
                logger.error("A render worker failed; cancelling remaining rows")
                pool.shutdown(cancel_futures=True)
                raise
