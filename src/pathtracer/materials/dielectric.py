"""Dielectric (glass/water) material with refraction.

This module implements a dielectric BSDF that models transparent materials
such as glass, water and diamond. At each hit the ray either reflects or
refracts:

1. Snell's law: n1 * sin(theta1) = n2 * sin(theta2). When
   ``refraction_ratio * sin(theta) > 1`` refraction is impossible (total
   internal reflection) and the ray must reflect.
2. Otherwise reflection is chosen stochastically with probability given by
   Schlick's approximation of the Fresnel reflectance:

       R(theta) = R0 + (1 - R0) * (1 - cos(theta))^5
       R0 = ((1 - n) / (1 + n))^2

Glass does not tint or absorb light here, so the attenuation is always white.

Common indices of refraction:
    - Air: 1.0
    - Water: 1.33
    - Glass: 1.5
    - Diamond: 2.4

Example:
    >>> from src.pathtracer.materials.dielectric import Dielectric
    >>> glass = Dielectric(1.5)
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from src.pathtracer.core.ray import Ray
from src.pathtracer.core.vec3 import WHITE, refract
from src.pathtracer.materials.material import Material, ScatterResult

if TYPE_CHECKING:
    import numpy as np

    from src.pathtracer.geometry.hittable import HitRecord

# Common index of refraction values
IOR_AIR = 1.0
IOR_WATER = 1.33
IOR_GLASS = 1.5
IOR_DIAMOND = 2.4


def reflectance(cosine: float, ref_idx: float) -> float:
    """Compute Fresnel reflectance using Schlick's approximation.

    Args:
        cosine: Cosine of the angle between the incident direction and normal.
        ref_idx: Ratio of refractive indices.

    Returns:
        The approximate reflectance in [0, 1].
    """
    r0 = (1.0 - ref_idx) / (1.0 + ref_idx)
    r0 = r0 * r0
    return r0 + (1.0 - r0) * (1.0 - cosine) ** 5


@dataclass(frozen=True, slots=True)
class Dielectric(Material):
    """Dielectric material.

    Attributes:
        ir: Index of refraction (must be positive).

    Raises:
        ValueError: If the index of refraction is not positive.
    """

    ir: float

    def __post_init__(self) -> None:
        if self.ir <= 0.0:
            raise ValueError(f"Index of refraction = {self.ir} must be positive.")

    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterResult:
        refraction_ratio = 1.0 / self.ir if rec.front_face else self.ir

        unit_direction = ray_in.direction.unit()
        cos_theta = min((-unit_direction).dot(rec.normal), 1.0)
        sin_theta = math.sqrt(max(0.0, 1.0 - cos_theta * cos_theta))

        cannot_refract = refraction_ratio * sin_theta > 1.0
        if cannot_refract or reflectance(cos_theta, refraction_ratio) > rng.random():
            direction = unit_direction.reflect(rec.normal)
        else:
            direction = refract(unit_direction, rec.normal, refraction_ratio)

        return Ray(rec.point, direction), WHITE
