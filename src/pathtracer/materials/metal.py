"""Metal (specular reflective) material.

Metals reflect the incident direction about the surface normal:

    R = I - 2(I . N)N

computed on the unit incident direction. Rough metals perturb the reflection
by ``fuzz * random_in_unit_sphere()``. If the perturbed direction ends up at or
below the surface the ray is absorbed, which is how grazing fuzzy reflections
self-shadow.

Example:
    >>> from src.pathtracer.materials.metal import Metal
    >>> from src.pathtracer.core.vec3 import Color
    >>> gold = Metal(Color(0.8, 0.6, 0.2), fuzz=0.1)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.pathtracer.core.ray import Ray
from src.pathtracer.core.vec3 import Color, Vec3
from src.pathtracer.materials.material import Material, ScatterResult, validate_albedo

if TYPE_CHECKING:
    import numpy as np

    from src.pathtracer.geometry.hittable import HitRecord


@dataclass(frozen=True, slots=True)
class Metal(Material):
    """Metal material with optional fuzzy reflection.

    Attributes:
        albedo: The reflective color (RGB, each component in [0, 1]).
        fuzz: Surface roughness. Clamped to [0, 1] at construction;
            0 is a perfect mirror.

    Raises:
        ValueError: If any albedo component is outside [0, 1].
    """

    albedo: Color
    fuzz: float = 0.0

    def __post_init__(self) -> None:
        validate_albedo(self.albedo)
        object.__setattr__(self, "fuzz", min(max(self.fuzz, 0.0), 1.0))

    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterResult | None:
        reflected = ray_in.direction.reflect(rec.normal)
        if self.fuzz > 0.0:
            reflected = Vec3.random_in_unit_sphere(rng).mul_add(self.fuzz, reflected)

        if reflected.dot(rec.normal) <= 0.0:
            return None
        return Ray(rec.point, reflected), self.albedo
