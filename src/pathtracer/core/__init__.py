"""Core rendering module.

This module contains the fundamental building blocks for path tracing:

Components:
    vec3: Vector type, colors and random sampling
    ray: Ray data structure
    integrator: Recursive light transport and per-pixel sampling
    buffer: Row-oriented output buffer with lease/return accounting
    scheduler: Thread pool that drives a render row by row

Note: integrator and scheduler are NOT imported here to avoid circular imports
with the geometry and scene packages. Import them directly:

    from src.pathtracer.core.scheduler import render
"""

from .buffer import Buffer, WorkerFailure
from .ray import Ray
from .vec3 import BLACK, WHITE, Color, Point3, Vec3, refract

__all__ = [
    "Vec3",
    "Point3",
    "Color",
    "BLACK",
    "WHITE",
    "refract",
    "Ray",
    "Buffer",
    "WorkerFailure",
]
