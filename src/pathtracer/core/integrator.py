"""Path tracing integrator for Monte Carlo light transport.

This module turns camera rays into colors by bouncing them through the scene
according to each material's scattering law.

The path tracer follows a ray until one of three things happens:
    - it escapes the scene and picks up the sky gradient,
    - a material absorbs it (contributes black),
    - the bounce budget is exhausted (contributes black).

Each bounce multiplies the returned radiance by the material attenuation.
There are no explicit light sources; the sky dome is the only illumination.

Key features:
    - Material dispatch through the Material.scatter() capability
    - Depth-bounded recursion (no Russian roulette)
    - Self-intersection avoidance via a small minimum hit distance
    - Per-pixel jittered supersampling with gamma 2.0 correction

Example:
    >>> import numpy as np
    >>> from src.pathtracer.core.integrator import ray_color
    >>> from src.pathtracer.scene.presets import three_spheres
    >>>
    >>> scene = three_spheres(16.0 / 9.0)
    >>> rng = np.random.default_rng(0)
    >>> color = ray_color(scene.camera.get_ray(0.5, 0.5, rng), scene.world, 20, rng)
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from src.pathtracer.core.ray import Ray
from src.pathtracer.core.vec3 import BLACK, WHITE, Color

if TYPE_CHECKING:
    import numpy as np

    from src.pathtracer.geometry.hittable import Hittable
    from src.pathtracer.scene.scene import Scene

# =============================================================================
# Rendering Constants
# =============================================================================

# Default maximum ray bounces (path length)
DEFAULT_MAX_DEPTH = 20

# Minimum hit distance; suppresses shadow acne on bounced rays
T_MIN = 0.001
T_MAX = math.inf

# Sky gradient endpoints (bottom and top of the view)
HORIZON_COLOR = WHITE
SKY_COLOR = Color(0.5, 0.7, 1.0)


def background(ray: Ray) -> Color:
    """Compute the sky color seen along an escaping ray.

    Linearly blends from white at the bottom to sky blue at the top based on
    the vertical component of the normalized direction.
    """
    unit_direction = ray.direction.unit()
    t = 0.5 * (unit_direction.y + 1.0)
    return HORIZON_COLOR.mul_add(1.0 - t, SKY_COLOR * t)


def ray_color(ray: Ray, world: Hittable, depth: int, rng: np.random.Generator) -> Color:
    """Estimate the radiance arriving along a ray.

    Args:
        ray: The ray to trace.
        world: The scene geometry.
        depth: Remaining bounce budget. Returns black when <= 0.
        rng: Random generator used by the material scattering.

    Returns:
        The estimated linear color along the ray.
    """
    if depth <= 0:
        return BLACK

    rec = world.hit(ray, T_MIN, T_MAX)
    if rec is None:
        return background(ray)

    scattered = rec.material.scatter(ray, rec, rng)
    if scattered is None:
        return BLACK

    scattered_ray, attenuation = scattered
    return attenuation * ray_color(scattered_ray, world, depth - 1, rng)


def sample_pixel(
    scene: Scene,
    x: int,
    y: int,
    width: int,
    height: int,
    samples_per_pixel: int,
    max_depth: int,
    rng: np.random.Generator,
) -> Color:
    """Compute the final color of one pixel.

    Accumulates ``samples_per_pixel`` jittered camera samples, averages them
    and applies gamma 2.0 correction (component-wise square root).

    Args:
        scene: The scene to render.
        x: Pixel column (0 = left).
        y: Pixel row (0 = bottom).
        width: Image width in pixels.
        height: Image height in pixels.
        samples_per_pixel: Number of samples to average.
        max_depth: Bounce budget per sample.
        rng: Random generator for jitter, lens and scattering.

    Returns:
        The gamma-corrected pixel color.
    """
    camera = scene.camera
    world = scene.world
    # Guard single-pixel dimensions against division by zero
    x_span = max(width - 1, 1)
    y_span = max(height - 1, 1)

    pixel_color = BLACK
    for _ in range(samples_per_pixel):
        s = (x + rng.random()) / x_span
        t = (y + rng.random()) / y_span
        ray = camera.get_ray(s, t, rng)
        pixel_color = pixel_color + ray_color(ray, world, max_depth, rng)

    return (pixel_color / samples_per_pixel).sqrt()


def render_line(
    scene: Scene,
    row: int,
    width: int,
    height: int,
    samples_per_pixel: int,
    max_depth: int,
    rng: np.random.Generator,
) -> list[Color]:
    """Compute every pixel of one image row, left to right."""
    return [
        sample_pixel(scene, x, row, width, height, samples_per_pixel, max_depth, rng)
        for x in range(width)
    ]
