"""Preset scenes.

This module provides factory functions for the two classic sphere scenes:

- ``three_spheres``: a ground plane sphere, a diffuse ball, a hollow glass
  ball (an outer sphere plus an inner negative-radius sphere sharing one
  Dielectric) and a metal ball, seen through a close, strongly defocused lens.
- ``one_weekend``: a large ground sphere covered with a 22x22 grid of small
  randomly placed spheres of random materials, plus three large feature
  spheres (glass, diffuse, metal).

Example:
    >>> import numpy as np
    >>> from src.pathtracer.scene.presets import one_weekend
    >>> scene = one_weekend(16.0 / 9.0, np.random.default_rng(1337))
"""

from __future__ import annotations

from collections.abc import Callable

import numpy as np

from src.pathtracer.camera.thin_lens import Camera
from src.pathtracer.core.vec3 import Color, Point3, Vec3
from src.pathtracer.geometry.hittable_list import HittableList
from src.pathtracer.geometry.sphere import Sphere
from src.pathtracer.materials.dielectric import IOR_GLASS, Dielectric
from src.pathtracer.materials.lambertian import Lambertian
from src.pathtracer.materials.material import Material
from src.pathtracer.materials.metal import Metal
from src.pathtracer.scene.scene import Scene

# =============================================================================
# One Weekend Parameters
# =============================================================================

GRID_EXTENT = 11
MINIBALL_RADIUS = 0.2
MAINBALL_RADIUS = 1.0

# Material selection thresholds for the small spheres
DIFFUSE_PROBABILITY = 0.8
METAL_PROBABILITY = 0.15

# Small spheres are not placed within this distance of the metal feature ball
NO_BALL_RADIUS = 0.9

SceneBuilder = Callable[[float, "np.random.Generator | None"], Scene]


def three_spheres(aspect_ratio: float, rng: np.random.Generator | None = None) -> Scene:
    """Create the three-sphere scene with a hollow glass ball.

    Args:
        aspect_ratio: Width divided by height of the output image.
        rng: Unused; accepted so all presets share one signature.

    Returns:
        The assembled Scene.
    """
    look_from = Point3(3.0, 3.0, 2.0)
    look_at = Point3(0.0, 0.0, -1.0)
    camera = Camera(
        look_from=look_from,
        look_at=look_at,
        up=Vec3(0.0, 1.0, 0.0),
        vertical_fov=20.0,
        aspect_ratio=aspect_ratio,
        aperture=2.0,
        focus_distance=(look_from - look_at).length(),
    )

    material_ground = Lambertian(Color(0.8, 0.8, 0.0))
    material_center = Lambertian(Color(0.1, 0.2, 0.5))
    material_left = Dielectric(IOR_GLASS)
    material_right = Metal(Color(0.8, 0.6, 0.2), 0.0)

    world = HittableList()
    world.add(Sphere(Point3(0.0, -100.5, -1.0), 100.0, material_ground))
    world.add(Sphere(Point3(0.0, 0.0, -1.0), 0.5, material_center))
    # Hollow glass: outer surface plus an inverted inner surface
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), 0.5, material_left))
    world.add(Sphere(Point3(-1.0, 0.0, -1.0), -0.45, material_left))
    world.add(Sphere(Point3(1.0, 0.0, -1.0), 0.5, material_right))

    return Scene(camera, world)


def _random_material(rng: np.random.Generator) -> Material:
    """Pick a random material for a small sphere."""
    choose_mat = rng.random()
    if choose_mat < DIFFUSE_PROBABILITY:
        albedo = Color.random(rng) * Color.random(rng)
        return Lambertian(albedo)
    if choose_mat < DIFFUSE_PROBABILITY + METAL_PROBABILITY:
        albedo = Color.random(rng, 0.5, 1.0)
        fuzz = 0.5 * rng.random()
        return Metal(albedo, fuzz)
    return Dielectric(IOR_GLASS)


def one_weekend(aspect_ratio: float, rng: np.random.Generator | None = None) -> Scene:
    """Create the random small-spheres scene.

    Args:
        aspect_ratio: Width divided by height of the output image.
        rng: Random generator for sphere placement and materials. A fresh
            default generator is used if None.

    Returns:
        The assembled Scene.
    """
    if rng is None:
        rng = np.random.default_rng()

    camera = Camera(
        look_from=Point3(13.0, 2.0, 3.0),
        look_at=Point3(0.0, 0.0, 0.0),
        up=Vec3(0.0, 1.0, 0.0),
        vertical_fov=20.0,
        aspect_ratio=aspect_ratio,
        aperture=0.1,
        focus_distance=10.0,
    )

    world = HittableList()
    world.add(Sphere(Point3(0.0, -1000.0, 0.0), 1000.0, Lambertian(Color(0.5, 0.5, 0.5))))

    no_ball_center = Point3(4.0, MINIBALL_RADIUS, 0.0)
    for a in range(-GRID_EXTENT, GRID_EXTENT):
        for b in range(-GRID_EXTENT, GRID_EXTENT):
            center = Point3(
                a + 0.9 * rng.random(),
                MINIBALL_RADIUS,
                b + 0.9 * rng.random(),
            )
            if (center - no_ball_center).length() < NO_BALL_RADIUS:
                continue
            world.add(Sphere(center, MINIBALL_RADIUS, _random_material(rng)))

    world.add(
        Sphere(Point3(0.0, MAINBALL_RADIUS, 0.0), MAINBALL_RADIUS, Dielectric(IOR_GLASS))
    )
    world.add(
        Sphere(
            Point3(-4.0, MAINBALL_RADIUS, 0.0),
            MAINBALL_RADIUS,
            Lambertian(Color(0.4, 0.2, 0.1)),
        )
    )
    world.add(
        Sphere(
            Point3(4.0, MAINBALL_RADIUS, 0.0),
            MAINBALL_RADIUS,
            Metal(Color(0.7, 0.6, 0.5), 0.0),
        )
    )

    return Scene(camera, world)


PRESETS: dict[str, SceneBuilder] = {
    "three_spheres": three_spheres,
    "one_weekend": one_weekend,
}


def create_scene(
    name: str,
    aspect_ratio: float,
    rng: np.random.Generator | None = None,
) -> Scene:
    """Build a preset scene by name.

    Raises:
        ValueError: If the preset name is unknown.
    """
    try:
        builder = PRESETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown scene preset: {name!r}. Available: {', '.join(sorted(PRESETS))}"
        ) from None
    return builder(aspect_ratio, rng)
