"""Thin-lens camera model for perspective projection with defocus blur.

The camera builds an orthonormal basis (u, v, w) from the view parameters:
- w: points from look_at toward look_from (opposite view direction)
- u: points right in the image plane
- v: points up in the image plane

The virtual image plane sits at ``focus_distance`` in front of the camera, so
objects at that distance are in perfect focus. Ray origins are jittered over a
disk of radius ``aperture / 2`` to produce depth of field; an aperture of 0
degenerates to a pinhole camera.

Example:
    >>> import numpy as np
    >>> from src.pathtracer.camera.thin_lens import Camera
    >>> from src.pathtracer.core.vec3 import Point3, Vec3
    >>> camera = Camera(
    ...     look_from=Point3(0.0, 0.0, 3.0),
    ...     look_at=Point3(0.0, 0.0, 0.0),
    ...     up=Vec3(0.0, 1.0, 0.0),
    ...     vertical_fov=60.0,
    ...     aspect_ratio=16.0 / 9.0,
    ... )
    >>> ray = camera.get_ray(0.5, 0.5, np.random.default_rng(0))
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from src.pathtracer.core.ray import Ray
from src.pathtracer.core.vec3 import Point3, Vec3

if TYPE_CHECKING:
    import numpy as np


class Camera:
    """A thin-lens perspective camera.

    All geometry is precomputed at construction; the camera is read-only
    afterwards and safe to share between worker threads.

    Attributes:
        origin: Camera position in world space.
        lower_left_corner: Lower-left corner of the focus-plane viewport.
        horizontal: Full viewport width vector.
        vertical: Full viewport height vector.
        u: Right basis vector.
        v: Up basis vector.
        w: Backward basis vector.
        lens_radius: Half the aperture.
    """

    def __init__(
        self,
        look_from: Point3,
        look_at: Point3,
        up: Vec3,
        vertical_fov: float,
        aspect_ratio: float,
        aperture: float = 0.0,
        focus_distance: float = 1.0,
    ) -> None:
        """Initialize camera geometry from view parameters.

        Args:
            look_from: Camera position in world space.
            look_at: Point the camera is looking at.
            up: Up direction for camera orientation (typically (0, 1, 0)).
            vertical_fov: Vertical field of view in degrees.
            aspect_ratio: Width divided by height of the output image.
            aperture: Lens diameter. 0 gives a pinhole camera.
            focus_distance: Distance from the camera to the plane in focus.

        Raises:
            ValueError: If the parameters cannot form a valid camera.
        """
        if not 0.0 < vertical_fov < 180.0:
            raise ValueError(f"Vertical field of view = {vertical_fov} must be in (0, 180).")
        if aspect_ratio <= 0.0:
            raise ValueError(f"Aspect ratio = {aspect_ratio} must be positive.")
        if aperture < 0.0:
            raise ValueError(f"Aperture = {aperture} must be non-negative.")
        if focus_distance <= 0.0:
            raise ValueError(f"Focus distance = {focus_distance} must be positive.")

        view = look_from - look_at
        if view.is_near_zero():
            raise ValueError("look_from and look_at must be distinct points.")

        theta = math.radians(vertical_fov)
        h = math.tan(theta / 2.0)
        viewport_height = 2.0 * h
        viewport_width = aspect_ratio * viewport_height

        self.w = view.unit()
        side = up.cross(self.w)
        if side.is_near_zero():
            raise ValueError("Up vector must not be parallel to the view direction.")
        self.u = side.unit()
        self.v = self.w.cross(self.u)

        self.origin = look_from
        self.horizontal = self.u * (focus_distance * viewport_width)
        self.vertical = self.v * (focus_distance * viewport_height)
        self.lower_left_corner = (
            self.origin - (self.horizontal + self.vertical) / 2.0 - self.w * focus_distance
        )
        self.lens_radius = aperture / 2.0

    def get_ray(self, s: float, t: float, rng: np.random.Generator) -> Ray:
        """Generate a ray through normalized image coordinates (s, t).

        - s = 0: left edge, s = 1: right edge
        - t = 0: bottom edge, t = 1: top edge

        Args:
            s: Horizontal image-plane coordinate.
            t: Vertical image-plane coordinate.
            rng: Random generator for the lens sample.

        Returns:
            A ray from a jittered point on the lens toward the focus plane.
        """
        rd = Vec3.random_in_unit_disk(rng) * self.lens_radius
        origin = self.u.mul_add(rd.x, self.v.mul_add(rd.y, self.origin))
        direction = self.horizontal.mul_add(
            s, self.vertical.mul_add(t, self.lower_left_corner - origin)
        )
        return Ray(origin, direction)

    def info(self) -> dict[str, tuple[float, float, float]]:
        """Get the precomputed camera vectors for debugging.

        Returns:
            Dictionary with origin, u, v, w, horizontal, vertical, lower_left.
        """
        return {
            "origin": tuple(self.origin),
            "u": tuple(self.u),
            "v": tuple(self.v),
            "w": tuple(self.w),
            "horizontal": tuple(self.horizontal),
            "vertical": tuple(self.vertical),
            "lower_left": tuple(self.lower_left_corner),
        }
