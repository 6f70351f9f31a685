# main.py
import argparse
import logging
import random
import sys
from typing import List, Optional

from pathtracer.errors import ConfigError, SceneError
from pathtracer.renderer.config import Background, RenderConfig
from pathtracer.renderer.image_io import save_image
from pathtracer.renderer.raytracer import Renderer
from pathtracer.scene.demo import DEMOS, demo_scene
from pathtracer.scene.loader import Scene, load_scene

logger = logging.getLogger("pathtracer")

# Command-line flags that override fields of the scene's config block
OVERRIDES = ("width", "height", "samples", "max_depth", "output", "workers", "seed", "background")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Render a JSON scene (or a built-in demo) with a Monte-Carlo path tracer.")
    parser.add_argument("scene", nargs="?", help="JSON scene file; the random demo scene is used without one")
    parser.add_argument("--width", type=int, help="image width in pixels")
    parser.add_argument("--height", type=int, help="image height in pixels")
    parser.add_argument("-s", "--samples", type=int, help="samples per pixel")
    parser.add_argument("--max-depth", type=int, help="maximum number of bounces per path")
    parser.add_argument("-o", "--output", help="output image path (format from the extension)")
    parser.add_argument("-j", "--workers", type=int, help="render processes (default: one per CPU)")
    parser.add_argument("--seed", type=int, help="seed for reproducible renders")
    parser.add_argument("--background", choices=[b.value for b in Background],
                        help="what escaping rays see")
    parser.add_argument("--tone-mapping", choices=["gamma", "reinhard", "auto"],
                        help="how linear colors are mapped to 8-bit output")
    parser.add_argument("--demo", choices=sorted(DEMOS), help="render a built-in scene instead of a file")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


class Application:
    def __init__(self, args: argparse.Namespace):
        self.args = args

    def apply_overrides(self, config: RenderConfig) -> RenderConfig:
        """Command-line values win over the scene file's config block."""
        values = {name: getattr(config, name) for name in config.__dataclass_fields__}
        for name in OVERRIDES:
            value = getattr(self.args, name)
            if value is not None:
                values[name] = value
        if self.args.tone_mapping is not None:
            values["tone_mapping"] = self.args.tone_mapping
        return RenderConfig(**values)

    def load(self) -> Scene:
        if self.args.demo:
            return demo_scene(self.args.demo)
        if self.args.scene:
            try:
                return load_scene(self.args.scene)
            except SceneError as e:
                logger.error("%s", e)
                logger.warning("Falling back to the random demo scene")
        return demo_scene("random")

    def seed(self, seed: Optional[int]):
        if seed is not None:
            random.seed(seed)

    def run(self) -> int:
        # Seed before building the scene so random placements repeat as well
        self.seed(self.args.seed)
        scene = self.load()
        try:
            config = self.apply_overrides(scene.config)
        except ConfigError as e:
            logger.error("Invalid render settings: %s", e)
            return 2

        camera = scene.camera.build(config)
        logger.info("=== Rendering ===")
        logger.info("Resolution: %dx%d, samples per pixel: %d, max depth: %d",
                    config.width, config.height, config.samples, config.max_depth)
        logger.debug("Camera: %r", camera)

        image = Renderer(config).render(scene.world, camera)

        try:
            save_image(config.output, image, config.tone_mapping)
        except (OSError, ValueError) as e:
            logger.error("Could not write %s: %s", config.output, e)
            return 1
        return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        return Application(args).run()
    except KeyboardInterrupt:
        logger.warning("Interrupted")
        return 130


if __name__ == "__main__":
    sys.exit(main())
