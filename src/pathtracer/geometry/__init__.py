"""Geometry module for shape primitives.

Components:
    hittable: Hittable interface and HitRecord
    sphere: Sphere primitive with analytic ray-sphere intersection
    hittable_list: Linear aggregate with nearest-hit selection

Ray-object intersection follows the pattern:
    rec = shape.hit(ray, t_min, t_max)  # HitRecord or None
"""

from .hittable import HitRecord, Hittable
from .hittable_list import HittableList
from .sphere import Sphere

__all__ = [
    "Hittable",
    "HitRecord",
    "HittableList",
    "Sphere",
]
