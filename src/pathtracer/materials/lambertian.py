"""Lambertian (ideal diffuse) material.

Diffuse surfaces scatter incoming light in a random direction drawn from the
unit ball on the outer side of the surface normal and tint it by their albedo.
They never absorb a ray outright.

Example:
    >>> import numpy as np
    >>> from src.pathtracer.materials.lambertian import Lambertian
    >>> from src.pathtracer.core.vec3 import Color
    >>> red = Lambertian(Color(0.8, 0.1, 0.1))
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
class Lambertian(Material):
    """Lambertian diffuse material.

    Attributes:
        albedo: The diffuse reflectance (RGB, each component in [0, 1]).

    Raises:
        ValueError: If any albedo component is outside [0, 1].
    """

    albedo: Color

    def __post_init__(self) -> None:
        validate_albedo(self.albedo)

    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterResult:
        """Scatter into the hemisphere around the normal.

        The attenuation is the albedo. A degenerate (near-zero) sample falls back to
        the surface normal itself.
        """
        scatter_direction = Vec3.random_in_hemisphere(rec.normal, rng)
        if scatter_direction.is_near_zero():
            scatter_direction = rec.normal

        return Ray(rec.point, scatter_direction), self.albedo
