"""Scene container: a camera plus the geometry root.

A Scene is assembled once before rendering and treated as read-only while
worker threads trace rays through it.
"""

from __future__ import annotations

from src.pathtracer.camera.thin_lens import Camera
from src.pathtracer.geometry.hittable_list import HittableList


class Scene:
    """A camera and the world it looks at."""

    __slots__ = ("_camera", "_world")

    def __init__(self, camera: Camera, world: HittableList) -> None:
        self._camera = camera
        self._world = world

    @property
    def camera(self) -> Camera:
        return self._camera

    @property
    def world(self) -> HittableList:
        return self._world

    def __repr__(self) -> str:
        return f"Scene(objects={len(self._world)})"
