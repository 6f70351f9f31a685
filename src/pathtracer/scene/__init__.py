from pathtracer.scene.demo import cornell_box, demo_scene, random_scene
from pathtracer.scene.loader import Scene, SceneLoader, load_scene, load_scene_dict

__all__ = [
    "Scene",
    "SceneLoader",
    "cornell_box",
    "demo_scene",
    "load_scene",
    "load_scene_dict",
    "random_scene",
]
