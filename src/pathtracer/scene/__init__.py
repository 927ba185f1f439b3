"""Scene module.

Components:
    scene: Scene container (camera + geometry root)
    presets: Ready-made scenes (three_spheres, one_weekend)
"""

from .presets import PRESETS, create_scene, one_weekend, three_spheres
from .scene import Scene

__all__ = [
    "Scene",
    "PRESETS",
    "create_scene",
    "one_weekend",
    "three_spheres",
]
