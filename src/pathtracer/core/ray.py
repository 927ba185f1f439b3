"""Ray data structure.

A ray is an origin point and a direction; points along it are
``origin + t * direction``. Rays are created per camera sample and per bounce
and are never mutated.

Example:
    >>> from src.pathtracer.core.ray import Ray
    >>> from src.pathtracer.core.vec3 import Vec3
    >>> ray = Ray(Vec3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
    >>> ray.at(5.0)
    Vec3(x=0.0, y=0.0, z=-5.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from src.pathtracer.core.vec3 import Point3, Vec3


@dataclass(frozen=True, slots=True)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector. Need not be normalized, but must not
            be the zero vector.

    Raises:
        ValueError: If the direction has zero squared length (including
            components so small that it underflows). Intersection math
            divides by the squared direction length, so degenerate rays are
            rejected here rather than producing NaNs downstream.
    """

    origin: Point3
    direction: Vec3

    def __post_init__(self) -> None:
        if self.direction.length_squared() == 0.0:
            raise ValueError("Ray direction must not be the zero vector")

    def at(self, t: float) -> Point3:
        """Compute the point along the ray at parameter t."""
        return self.direction.mul_add(t, self.origin)
