"""CPU Monte Carlo path tracer.

This package renders static sphere scenes into images by stochastically
sampling light paths, with support for:
- Diffuse, metal and glass materials
- Thin-lens camera with defocus blur
- Multi-threaded row-by-row rendering with reproducible seeding
- Plain-text PPM and PNG output

Subpackages:
    core: Vectors, rays, the integrator, the row buffer and the render scheduler
    geometry: Hittable interface, spheres and the scene aggregate
    materials: Scattering models (Lambertian, metal, dielectric)
    camera: Camera model with ray generation
    scene: Scene container and preset scenes
    preview: Image export and progress display
"""

__version__ = "0.1.0"
