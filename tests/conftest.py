"""Pytest configuration for path tracer tests.

This module provides shared fixtures for all test modules: a seeded random
generator and a few small scenes cheap enough to render in a unit test.
"""

import numpy as np
import pytest

from src.pathtracer.camera.thin_lens import Camera
from src.pathtracer.core.vec3 import Color, Point3, Vec3
from src.pathtracer.geometry.hittable_list import HittableList
from src.pathtracer.geometry.sphere import Sphere
from src.pathtracer.materials.lambertian import Lambertian
from src.pathtracer.scene.scene import Scene


@pytest.fixture
def rng():
    """Seeded generator so stochastic tests are repeatable."""
    return np.random.default_rng(42)


@pytest.fixture
def pinhole_camera():
    """Pinhole camera at the origin looking down -z."""
    return Camera(
        look_from=Point3(0.0, 0.0, 0.0),
        look_at=Point3(0.0, 0.0, -1.0),
        up=Vec3(0.0, 1.0, 0.0),
        vertical_fov=90.0,
        aspect_ratio=2.0,
    )


@pytest.fixture
def empty_scene(pinhole_camera):
    """Scene with no geometry; every ray sees the sky."""
    return Scene(pinhole_camera, HittableList())


@pytest.fixture
def small_scene(pinhole_camera):
    """One diffuse sphere resting on a large ground sphere."""
    world = HittableList(
        [
            Sphere(Point3(0.0, 0.0, -1.0), 0.5, Lambertian(Color(0.7, 0.3, 0.3))),
            Sphere(Point3(0.0, -100.5, -1.0), 100.0, Lambertian(Color(0.8, 0.8, 0.0))),
        ]
    )
    return Scene(pinhole_camera, world)
