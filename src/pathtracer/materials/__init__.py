"""Materials module for scattering models.

Components:
    material: Base material interface
    lambertian: Ideal diffuse reflection
    metal: Specular reflection with optional fuzz
    dielectric: Glass-like refraction with Schlick reflectance

Each material provides scatter(ray_in, rec, rng), returning
(scattered_ray, attenuation) or None when the ray is absorbed.
"""

from .dielectric import IOR_AIR, IOR_DIAMOND, IOR_GLASS, IOR_WATER, Dielectric, reflectance
from .lambertian import Lambertian
from .material import Material, ScatterResult
from .metal import Metal

__all__ = [
    "Material",
    "ScatterResult",
    "Lambertian",
    "Metal",
    "Dielectric",
    "reflectance",
    "IOR_AIR",
    "IOR_WATER",
    "IOR_GLASS",
    "IOR_DIAMOND",
]
