"""Three-component vector type and random sampling utilities.

This module provides the immutable Vec3 value type used throughout the
renderer for points, directions and colors, together with the Monte Carlo
sampling helpers needed by the camera and the materials.

All randomness is drawn from an explicit ``numpy.random.Generator`` so that
callers control the stream (one per image row in the scheduler).

Example:
    >>> import numpy as np
    >>> from src.pathtracer.core.vec3 import Vec3
    >>> rng = np.random.default_rng(42)
    >>> v = Vec3(1.0, 2.0, 2.0)
    >>> v.length()
    3.0
    >>> p = Vec3.random_in_unit_sphere(rng)
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import numpy as np

# Rejection samplers give up after this many draws
MAX_REJECTION_ATTEMPTS = 1000

# Threshold used by is_near_zero()
NEAR_ZERO_EPSILON = 1e-8


@dataclass(frozen=True, slots=True)
class Vec3:
    """An immutable 3D vector.

    Attributes:
        x: First component (red channel when used as a color).
        y: Second component (green channel when used as a color).
        z: Third component (blue channel when used as a color).
    """

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    # -------------------------------------------------------------------------
    # Color aliases
    # -------------------------------------------------------------------------

    @property
    def r(self) -> float:
        return self.x

    @property
    def g(self) -> float:
        return self.y

    @property
    def b(self) -> float:
        return self.z

    # -------------------------------------------------------------------------
    # Arithmetic
    # -------------------------------------------------------------------------

    def __add__(self, other: Vec3) -> Vec3:
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, other: Vec3 | float) -> Vec3:
        if isinstance(other, Vec3):
            return Vec3(self.x * other.x, self.y * other.y, self.z * other.z)
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __rmul__(self, other: float) -> Vec3:
        return Vec3(self.x * other, self.y * other, self.z * other)

    def __truediv__(self, t: float) -> Vec3:
        return Vec3(self.x / t, self.y / t, self.z / t)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __getitem__(self, index: int) -> float:
        return (self.x, self.y, self.z)[index]

    def __len__(self) -> int:
        return 3

    def mul_add(self, a: float, b: Vec3) -> Vec3:
        """Compute ``self * a + b`` in a single pass.

        Args:
            a: Scalar multiplier applied to this vector.
            b: Vector added to the scaled result.

        Returns:
            The vector ``self * a + b``.
        """
        return Vec3(self.x * a + b.x, self.y * a + b.y, self.z * a + b.z)

    def dot(self, other: Vec3) -> float:
        """Compute the dot product of two vectors."""
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        """Compute the cross product ``self x other``."""
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length_squared(self) -> float:
        """Compute the squared Euclidean length.

        Cheaper than length() when only comparing magnitudes.
        """
        return self.x * self.x + self.y * self.y + self.z * self.z

    def length(self) -> float:
        """Compute the Euclidean length."""
        return math.sqrt(self.length_squared())

    def unit(self) -> Vec3:
        """Return the vector scaled to unit length.

        The caller must not invoke this on a zero vector; doing so raises
        ZeroDivisionError.
        """
        return self / self.length()

    def sqrt(self) -> Vec3:
        """Component-wise square root (gamma 2.0 correction for colors)."""
        return Vec3(math.sqrt(self.x), math.sqrt(self.y), math.sqrt(self.z))

    def is_zero(self) -> bool:
        """Check whether every component is exactly zero."""
        return self.x == 0.0 and self.y == 0.0 and self.z == 0.0

    def is_near_zero(self) -> bool:
        """Check whether every component is within NEAR_ZERO_EPSILON of zero.

        Useful for detecting degenerate scatter directions.
        """
        s = NEAR_ZERO_EPSILON
        return abs(self.x) < s and abs(self.y) < s and abs(self.z) < s

    def reflect(self, normal: Vec3) -> Vec3:
        """Reflect the unit of this vector about a normal.

        Computes ``unit - 2 * (unit . normal) * normal`` where ``unit`` is this
        vector normalized, so the result is unit length when ``normal`` is.

        Args:
            normal: The surface normal (should be normalized).

        Returns:
            The reflected direction.
        """
        unit = self.unit()
        return unit - normal * (2.0 * unit.dot(normal))

    # -------------------------------------------------------------------------
    # Random sampling
    # -------------------------------------------------------------------------

    @staticmethod
    def random(rng: np.random.Generator, lo: float = 0.0, hi: float = 1.0) -> Vec3:
        """Generate a vector with each component uniform in ``[lo, hi)``."""
        span = hi - lo
        return Vec3(
            lo + span * rng.random(),
            lo + span * rng.random(),
            lo + span * rng.random(),
        )

    @staticmethod
    def random_in_unit_sphere(rng: np.random.Generator) -> Vec3:
        """Generate a uniformly distributed point inside the unit ball.

        Uses rejection sampling on the cube ``[-1, 1)^3``.

        Raises:
            RuntimeError: If no point is accepted within MAX_REJECTION_ATTEMPTS
                draws, which indicates a broken generator.
        """
        for _ in range(MAX_REJECTION_ATTEMPTS):
            p = Vec3.random(rng, -1.0, 1.0)
            if p.length_squared() < 1.0:
                return p
        raise RuntimeError(
            f"Unit sphere sampling failed after {MAX_REJECTION_ATTEMPTS} attempts"
        )

    @staticmethod
    def random_unit_vector(rng: np.random.Generator) -> Vec3:
        """Generate a random unit vector uniformly distributed on the sphere."""
        return Vec3.random_in_unit_sphere(rng).unit()

    @staticmethod
    def random_in_hemisphere(normal: Vec3, rng: np.random.Generator) -> Vec3:
        """Generate a point in the unit ball on the same side as ``normal``.

        Samples the unit ball and flips the result when it points away from
        the normal.
        """
        p = Vec3.random_in_unit_sphere(rng)
        if p.dot(normal) > 0.0:
            return p
        return -p

    @staticmethod
    def random_in_unit_disk(rng: np.random.Generator) -> Vec3:
        """Generate a uniformly distributed point ``(x, y, 0)`` in the unit disk.

        Raises:
            RuntimeError: If no point is accepted within MAX_REJECTION_ATTEMPTS
                draws.
        """
        for _ in range(MAX_REJECTION_ATTEMPTS):
            p = Vec3(2.0 * rng.random() - 1.0, 2.0 * rng.random() - 1.0, 0.0)
            if p.length_squared() < 1.0:
                return p
        raise RuntimeError(
            f"Unit disk sampling failed after {MAX_REJECTION_ATTEMPTS} attempts"
        )


# Type aliases
Point3 = Vec3
Color = Vec3

BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)


def refract(uv: Vec3, normal: Vec3, etai_over_etat: float) -> Vec3:
    """Refract a unit direction through a surface using Snell's law.

    The caller is responsible for checking total internal reflection first.

    Args:
        uv: The incoming direction (must be normalized).
        normal: The surface normal opposing ``uv`` (must be normalized).
        etai_over_etat: Ratio of refractive indices (incident / transmitted).

    Returns:
        The refracted direction.
    """
    cos_theta = min((-uv).dot(normal), 1.0)
    r_out_perp = normal.mul_add(cos_theta, uv) * etai_over_etat
    r_out_parallel = normal * -math.sqrt(abs(1.0 - r_out_perp.length_squared()))
    return r_out_perp + r_out_parallel


def random_double(rng: np.random.Generator, lo: float = 0.0, hi: float = 1.0) -> float:
    """Generate a uniform float in ``[lo, hi)``."""
    return lo + (hi - lo) * rng.random()
