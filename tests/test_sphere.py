"""Unit tests for sphere intersection.

Tests cover:
- Ray hitting sphere from outside (front face)
- Ray missing sphere
- Ray starting inside sphere (back face)
- Interval bounds (inclusive t_min, exclusive t_max)
- Negative radius (inverted normals)
"""

import math

import pytest

from src.pathtracer.core.ray import Ray
from src.pathtracer.core.vec3 import Color, Point3, Vec3
from src.pathtracer.geometry.sphere import Sphere
from src.pathtracer.materials.lambertian import Lambertian

GRAY = Lambertian(Color(0.5, 0.5, 0.5))


class TestSphereBasics:
    """Tests for sphere construction."""

    def test_attributes(self):
        """Sphere stores center, radius and shares its material."""
        sphere = Sphere(Point3(1.0, 2.0, 3.0), 0.5, GRAY)
        assert sphere.center == Point3(1.0, 2.0, 3.0)
        assert sphere.radius == 0.5
        assert sphere.material is GRAY

    def test_zero_radius_rejected(self):
        """A zero radius is degenerate."""
        with pytest.raises(ValueError):
            Sphere(Point3(0.0, 0.0, 0.0), 0.0, GRAY)


class TestSphereIntersection:
    """Tests for ray-sphere intersection."""

    def test_hit_sphere_direct_hit(self):
        """Ray from z=5 toward a unit sphere at origin hits at t=4."""
        sphere = Sphere(Point3(0.0, 0.0, 0.0), 1.0, GRAY)
        ray = Ray(Point3(0.0, 0.0, 5.0), Vec3(0.0, 0.0, -1.0))

        rec = sphere.hit(ray, 0.001, math.inf)

        assert rec is not None
        assert math.isclose(rec.t, 4.0)
        assert rec.point == Point3(0.0, 0.0, 1.0)
        assert rec.normal == Vec3(0.0, 0.0, 1.0)
        assert rec.front_face
        assert rec.material is GRAY

    def test_near_surface_hit(self):
        """Ray toward (0,0,-1) with radius 0.5 hits at t=0.5 with normal +z."""
        sphere = Sphere(Point3(0.0, 0.0, -1.0), 0.5, GRAY)
        ray = Ray(Point3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))

        rec = sphere.hit(ray, 0.001, math.inf)

        assert rec is not None
        assert math.isclose(rec.t, 0.5)
        assert rec.normal == Vec3(0.0, 0.0, 1.0)
        assert rec.front_face

    def test_unnormalized_direction(self):
        """t scales inversely with the direction length."""
        sphere = Sphere(Point3(0.0, 0.0, -1.0), 0.5, GRAY)
        ray = Ray(Point3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -2.0))

        rec = sphere.hit(ray, 0.001, math.inf)

        assert rec is not None
        assert math.isclose(rec.t, 0.25)
        assert rec.point == Point3(0.0, 0.0, -0.5)

    def test_miss(self):
        """Ray passing beside the sphere misses."""
        sphere = Sphere(Point3(0.0, 0.0, -1.0), 0.5, GRAY)
        ray = Ray(Point3(0.0, 2.0, 0.0), Vec3(0.0, 0.0, -1.0))
        assert sphere.hit(ray, 0.001, math.inf) is None

    def test_sphere_behind_ray(self):
        """A sphere behind the origin is not hit."""
        sphere = Sphere(Point3(0.0, 0.0, 3.0), 0.5, GRAY)
        ray = Ray(Point3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
        assert sphere.hit(ray, 0.001, math.inf) is None

    def test_inside_hits_back_face(self):
        """From inside, the far root is used and the normal faces inward."""
        sphere = Sphere(Point3(0.0, 0.0, 0.0), 1.0, GRAY)
        ray = Ray(Point3(0.0, 0.0, 0.0), Vec3(1.0, 0.0, 0.0))

        rec = sphere.hit(ray, 0.001, math.inf)

        assert rec is not None
        assert math.isclose(rec.t, 1.0)
        assert not rec.front_face
        assert rec.normal == Vec3(-1.0, 0.0, 0.0)

    def test_t_max_exclusive(self):
        """A root exactly at t_max is rejected."""
        sphere = Sphere(Point3(0.0, 0.0, -1.0), 0.5, GRAY)
        ray = Ray(Point3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
        # Near root 0.5 is excluded, far root 1.5 is out of range
        assert sphere.hit(ray, 0.001, 0.5) is None

    def test_t_min_inclusive(self):
        """A root exactly at t_min is accepted."""
        sphere = Sphere(Point3(0.0, 0.0, -1.0), 0.5, GRAY)
        ray = Ray(Point3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
        rec = sphere.hit(ray, 0.5, math.inf)
        assert rec is not None
        assert rec.t == 0.5

    def test_far_root_when_near_excluded(self):
        """When the near root is below t_min, the far root is returned."""
        sphere = Sphere(Point3(0.0, 0.0, -1.0), 0.5, GRAY)
        ray = Ray(Point3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
        rec = sphere.hit(ray, 0.6, math.inf)
        assert rec is not None
        assert math.isclose(rec.t, 1.5)

    def test_negative_radius_inverts_normal(self):
        """Negative radius gives the same t with the normal reversed."""
        ray = Ray(Point3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1.0))
        outer = Sphere(Point3(0.0, 0.0, -1.0), 0.5, GRAY).hit(ray, 0.001, math.inf)
        inner = Sphere(Point3(0.0, 0.0, -1.0), -0.5, GRAY).hit(ray, 0.001, math.inf)

        assert outer is not None and inner is not None
        assert inner.t == outer.t
        # Outward normal points toward -z; the stored normal still opposes the ray
        assert not inner.front_face
        assert inner.normal == outer.normal

    def test_normal_is_unit_length(self, rng):
        """Hit normals are unit vectors for off-axis hits."""
        sphere = Sphere(Point3(0.0, 0.0, -3.0), 1.5, GRAY)
        for _ in range(50):
            target = Vec3.random(rng, -0.5, 0.5) + Point3(0.0, 0.0, -3.0)
            ray = Ray(Point3(0.0, 0.0, 0.0), target)
            rec = sphere.hit(ray, 0.001, math.inf)
            assert rec is not None
            assert math.isclose(rec.normal.length(), 1.0, rel_tol=1e-9)
            assert rec.normal.dot(ray.direction) < 0.0

    def test_tiny_direction_hits(self):
        """Rays with very short directions still intersect without dividing by zero."""
        sphere = Sphere(Point3(0.0, 0.0, -1.0), 0.5, GRAY)
        ray = Ray(Point3(0.0, 0.0, 0.0), Vec3(0.0, 0.0, -1e-100))
        rec = sphere.hit(ray, 0.001, math.inf)
        assert rec is not None
        assert math.isclose(rec.t, 0.5e100)
