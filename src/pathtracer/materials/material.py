"""Material capability shared by all scattering models.

A material turns an incoming ray and a surface hit into an outgoing scattered
ray plus a per-channel attenuation color, or returns None to signal that the
ray was absorbed.

Material instances are immutable and may be shared by any number of
primitives.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import TYPE_CHECKING

from src.pathtracer.core.ray import Ray
from src.pathtracer.core.vec3 import Color

if TYPE_CHECKING:
    import numpy as np

    from src.pathtracer.geometry.hittable import HitRecord

# Result of a successful scatter: (scattered_ray, attenuation)
ScatterResult = tuple[Ray, Color]


class Material(ABC):
    """Abstract material. Subclasses must implement scatter()."""

    __slots__ = ()

    @abstractmethod
    def scatter(
        self,
        ray_in: Ray,
        rec: HitRecord,
        rng: np.random.Generator,
    ) -> ScatterResult | None:
        """Compute the scattered ray and attenuation.

        Args:
            ray_in: The incoming ray.
            rec: The hit record for the surface point.
            rng: Random generator for stochastic scattering.

        Returns:
            A tuple (scattered_ray, attenuation), or None if the ray is absorbed.
        """


def validate_albedo(albedo: Sequence[float]) -> None:
    """Check that every albedo component lies in [0, 1].

    Raises:
        ValueError: If any component is outside [0, 1].
    """
    for i, component in enumerate(albedo):
        if component < 0.0 or component > 1.0:
            raise ValueError(
                f"Albedo component {i} = {component} is outside [0, 1]. "
                "This would violate energy conservation."
            )
