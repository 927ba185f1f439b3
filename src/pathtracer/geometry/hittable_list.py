"""Aggregate of hittable objects with nearest-hit selection.

Every primitive is tested against every ray in a single linear pass. The upper
bound of the accepted interval shrinks to the closest hit found so far, so the
last accepted record is the nearest one without any sorting.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from src.pathtracer.core.ray import Ray
from src.pathtracer.geometry.hittable import HitRecord, Hittable


class HittableList(Hittable):
    """A list of Hittable objects treated as one.

    Attributes:
        objects: The contained primitives, in insertion order.
    """

    def __init__(self, objects: Iterable[Hittable] = ()) -> None:
        self.objects: list[Hittable] = list(objects)

    def add(self, obj: Hittable) -> None:
        """Append a primitive to the list."""
        self.objects.append(obj)

    def clear(self) -> None:
        """Remove all primitives."""
        self.objects.clear()

    def __len__(self) -> int:
        return len(self.objects)

    def __iter__(self) -> Iterator[Hittable]:
        return iter(self.objects)

    def hit(self, ray: Ray, t_min: float, t_max: float) -> HitRecord | None:
        hit_record = None
        closest_so_far = t_max
        for obj in self.objects:
            rec = obj.hit(ray, t_min, closest_so_far)
            if rec is not None:
                closest_so_far = rec.t
                hit_record = rec
        return hit_record
