"""Sphere primitive with analytic ray-sphere intersection.

The intersection is found by substituting the ray equation into the sphere
equation:

    |origin + t * direction - center|^2 = radius^2

which expands to the quadratic ``a*t^2 + 2*h*t + c = 0`` with:

    a = dot(direction, direction)
    h = dot(origin - center, direction)   (half of the traditional b)
    c = |origin - center|^2 - radius^2

The discriminant ``h^2 - a*c`` decides whether the ray meets the sphere. The
smaller root is preferred when it lies in the accepted interval, otherwise the
larger root is tried.

A negative radius flips the outward normal ``(p - center) / radius`` without
changing the hit distances. This models the inner surface of a hollow glass
shell without a separate primitive type.

Example:
    >>> from src.pathtracer.geometry.sphere import Sphere
    >>> from src.pathtracer.materials.lambertian import Lambertian
    >>> from src.pathtracer.core.vec3 import Color, Point3
    >>> sphere = Sphere(Point3(0, 0, -1), 0.5, Lambertian(Color(0.5, 0.5, 0.5)))
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from src.pathtracer.core.ray import Ray
from src.pathtracer.core.vec3 import Point3
from src.pathtracer.geometry.hittable import HitRecord, Hittable

if TYPE_CHECKING:
    from src.pathtracer.materials.material import Material


class Sphere(Hittable):
    """A sphere defined by center point, radius and material.

    Attributes:
        center: The center point of the sphere.
        radius: The radius. Negative values invert the normal (hollow shell).
        material: The surface material, shared with any other primitive that
            references the same instance.
    """

    __slots__ = ("center", "radius", "material")

    def __init__(self, center: Point3, radius: float, material: Material) -> None:
        if radius == 0.0:
            raise ValueError("Sphere radius must be non-zero")
        self.center = center
        self.radius = radius
        self.material = material

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        """Test for ray-sphere intersection in ``[t_min, t_max)``.

        Args:
            ray: The ray to test. Its direction is never zero (enforced by Ray).
            t_min: Minimum accepted t (inclusive), used to avoid self-intersection.
            t_max: Maximum accepted t (exclusive), typically the closest hit so far.

        Returns:
            A HitRecord for the nearest accepted root, or None.
        """
        oc = ray.origin - self.center
        a = ray.direction.length_squared()
        half_b = oc.dot(ray.direction)
        c = oc.length_squared() - self.radius * self.radius

        discriminant = half_b * half_b - a * c
        if discriminant < 0.0:
            return None

        sqrt_d = math.sqrt(discriminant)

        # Nearest root first, then the far one
        root = (-half_b - sqrt_d) / a
        if not t_min <= root < t_max:
            root = (-half_b + sqrt_d) / a
            if not t_min <= root < t_max:
                return None

        point = ray.at(root)
        outward_normal = (point - self.center) / self.radius
        return HitRecord.from_outward_normal(ray, root, point, outward_normal, self.material)

    def __repr__(self) -> str:
        return f"Sphere(center={self.center!r}, radius={self.radius!r}, material={self.material!r})"
