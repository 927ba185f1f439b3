"""Hittable capability and hit record structure.

Every piece of scene geometry implements ``hit(ray, t_min, t_max)``, returning
a HitRecord for the nearest intersection with ``t_min <= t < t_max`` or None.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.pathtracer.core.ray import Ray
from src.pathtracer.core.vec3 import Point3, Vec3

if TYPE_CHECKING:
    from src.pathtracer.materials.material import Material


@dataclass(frozen=True, slots=True)
class HitRecord:
    """Record of a ray-surface intersection.

    Attributes:
        point: The 3D point where the ray hit the surface.
        normal: The unit surface normal, always opposing the incoming ray.
        material: The material of the surface that was hit. Shared with the
            primitive, never copied.
        t: The ray parameter at the intersection.
        front_face: True if the ray hit the outside of the surface (the stored
            normal is the outward normal), False if it hit from inside.
    """

    point: Point3
    normal: Vec3
    material: Material
    t: float
    front_face: bool

    @classmethod
    def from_outward_normal(
        cls,
        ray: Ray,
        t: float,
        point: Point3,
        outward_normal: Vec3,
        material: Material,
    ) -> HitRecord:
        """Build a record, flipping the outward normal to oppose the ray.

        Args:
            ray: The incoming ray.
            t: The ray parameter at the intersection.
            point: The intersection point.
            outward_normal: The geometric normal pointing out of the surface.
            material: The surface material.

        Returns:
            A HitRecord whose normal points against ``ray.direction``.
        """
        front_face = ray.direction.dot(outward_normal) < 0.0
        normal = outward_normal if front_face else -outward_normal
        return cls(point=point, normal=normal, material=material, t=t, front_face=front_face)


class Hittable(ABC):
    """Abstract base for anything a ray can intersect."""

    @abstractmethod
    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Find the nearest intersection with ``t_min <= t < t_max``.

        Args:
            ray: The ray to test.
            t_min: Lower bound of the accepted parameter interval (inclusive).
            t_max: Upper bound of the accepted parameter interval (exclusive).

        Returns:
            A HitRecord for the nearest accepted intersection, or None.
        """
