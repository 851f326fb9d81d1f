"""Collision shapes: spheres, planes, axis-aligned boxes and terrain."""

from __future__ import annotations

import enum
from typing import Protocol

import numpy as np

from paradox.intersect import IntersectData, PhysicsMaterial


def _vec(value) -> np.ndarray:
    return np.array(value, dtype=float).reshape(3)


class ColliderType(enum.IntEnum):
    SPHERE = 0
    AABB = 1
    PLANE = 2
    TERRAIN = 3


class Direction(enum.IntEnum):
    """Side of a box a sphere hit, with its outward unit vector."""

    XMAX = 0
    XMIN = 1
    ZMAX = 2
    ZMIN = 3

    @property
    def vector(self) -> np.ndarray:
        return _DIRECTION_VECTORS[self].copy()


_DIRECTION_VECTORS = {
    Direction.XMAX: np.array([1.0, 0.0, 0.0]),
    Direction.XMIN: np.array([-1.0, 0.0, 0.0]),
    Direction.ZMAX: np.array([0.0, 0.0, 1.0]),
    Direction.ZMIN: np.array([0.0, 0.0, -1.0]),
}


class UnsupportedCollisionError(TypeError):
    """Raised when no test exists for a pair of collider types."""


class Collider:
    """Base collider with a type, a surface material and a transform."""

    def __init__(self, collider_type: ColliderType, physics_material: PhysicsMaterial | None = None):
        self.collider_type = ColliderType(collider_type)
        self.physics_material = (
            physics_material if physics_material is not None else PhysicsMaterial(0.4, 0.4, 0.0)
        )
        self.translation = np.zeros(3)
        self.scale = np.ones(3)

    @property
    def center(self) -> np.ndarray:
        return np.zeros(3)

    def intersect(self, other: "Collider") -> IntersectData:
        """Test this collider against another, dispatching on both types."""
        pair = (self.collider_type, other.collider_type)
        if pair == (ColliderType.SPHERE, ColliderType.SPHERE):
            return self.intersect_sphere(other)  # type: ignore[attr-defined]
        if pair == (ColliderType.PLANE, ColliderType.SPHERE):
            return self.intersect_sphere(other)  # type: ignore[attr-defined]
        if pair == (ColliderType.TERRAIN, ColliderType.SPHERE):
            return self.intersect_sphere(other)  # type: ignore[attr-defined]
        if pair == (ColliderType.AABB, ColliderType.SPHERE):
            return self.intersect_sphere(other)  # type: ignore[attr-defined]
        if pair == (ColliderType.PLANE, ColliderType.AABB):
            return self.intersect_aabb(other)  # type: ignore[attr-defined]
        raise UnsupportedCollisionError(
            f"no test for given collider types: {int(self.collider_type)} and {int(other.collider_type)}"
        )

    def transform(self, translation, scaling) -> None:
        """Apply a translation and scale; the base collider ignores them."""


class SphereCollider(Collider):
    def __init__(self, center, radius: float, physics_material: PhysicsMaterial | None = None):
        super().__init__(ColliderType.SPHERE, physics_material)
        self._center = _vec(center)
        self.radius = float(radius)
        self._base_radius = float(radius)

    @property
    def center(self) -> np.ndarray:
        return self._center.copy()

    def intersect_sphere(self, other: "SphereCollider") -> IntersectData:
        radius_distance = self.radius + other.radius
        direction = other.center - self._center
        center_distance = float(np.linalg.norm(direction))
        if center_distance > 0.0:
            direction = direction / center_distance
        distance = center_distance - radius_distance
        return IntersectData(distance < 0, direction, distance)

    def set_center(self, center) -> None:
        self._center = _vec(center)

    def set_radius(self, radius: float) -> None:
        self.radius = float(radius)
        self._base_radius = float(radius)

    def transform(self, translation, scaling) -> None:
        self._center = self._center + _vec(translation)
        self.scale = _vec(scaling)
        self.radius = self._base_radius * self.scale[0]


class PlaneCollider(Collider):
    def __init__(self, normal, distance: float, physics_material: PhysicsMaterial | None = None):
        super().__init__(ColliderType.PLANE, physics_material)
        self.normal = _vec(normal)
        self.distance = float(distance)
        self.normalize()

    def normalize(self) -> None:
        """Scale normal to unit length, keeping the plane in place."""
        magnitude = float(np.linalg.norm(self.normal))
        self.normal = self.normal / magnitude
        self.distance = self.distance / magnitude

    def intersect_sphere(self, sphere: SphereCollider) -> IntersectData:
        distance_from_center = abs(float(self.normal @ sphere.center) - self.distance)
        distance_from_sphere = distance_from_center - sphere.radius
        return IntersectData(distance_from_sphere < 0.0, self.normal, distance_from_sphere)

    def intersect_aabb(self, aabb: "AABBCollider") -> IntersectData:
        s = float(aabb.min_bounds[1]) - self.distance
        return IntersectData(s <= 0, self.normal, abs(s))


class AABBCollider(Collider):
    def __init__(self, min_bounds, max_bounds, physics_material: PhysicsMaterial | None = None):
        super().__init__(ColliderType.AABB, physics_material)
        self.min_bounds = _vec(min_bounds)
        self.max_bounds = _vec(max_bounds)
        self._base_min = self.min_bounds.copy()
        self._base_max = self.max_bounds.copy()

    def intersect_aabb(self, other: "AABBCollider") -> IntersectData:
        distances = np.maximum(self.min_bounds - other.max_bounds, other.min_bounds - self.max_bounds)
        max_distance = float(distances.max())
        return IntersectData(max_distance < 0, np.zeros(3), max_distance)

    @staticmethod
    def squared_dist_point_aabb(point, aabb: "AABBCollider") -> float:
        total = 0.0
        for v, bmin, bmax in zip(_vec(point), aabb.min_bounds, aabb.max_bounds):
            half = (bmax - bmin) / 2.0
            if v < bmin or v < half:
                total += (bmin - v) ** 2
            if v > bmax or v > half:
                total += (v - bmax) ** 2
        return float(total)

    def _center_and_extents(self) -> tuple[np.ndarray, np.ndarray]:
        half = (self.max_bounds - self.min_bounds) / 2.0
        return self.min_bounds + half, half

    def closest_point(self, point) -> np.ndarray:
        """Point of the box nearest to ``point``."""
        center, half = self._center_and_extents()
        clamped = np.clip(_vec(point) - center, -half, half)
        return center + clamped

    def vector_direction(self, sphere: SphereCollider) -> Direction:
        """Side of the box facing the sphere's center."""
        center, _ = self._center_and_extents()
        difference = sphere.center - center
        length = float(np.linalg.norm(difference))
        if length > 0.0:
            difference = difference / length
        return max(Direction, key=lambda d: (float(difference @ _DIRECTION_VECTORS[d]), -int(d)))

    def intersect_sphere(self, sphere: SphereCollider) -> IntersectData:
        center = sphere.center
        radius = sphere.radius
        offset = self.closest_point(center) - center
        penetration = radius - float(np.linalg.norm(offset))
        overlaps = bool(
            np.all(center + radius > self.min_bounds) and np.all(center - radius < self.max_bounds)
        )
        if overlaps:
            return IntersectData(True, self.vector_direction(sphere).vector, penetration)
        return IntersectData(False, np.zeros(3), -1000.0)

    def transform(self, translation, scaling) -> None:
        self.scale = _vec(scaling)
        self.translation = self.translation + _vec(translation)
        self.min_bounds = self._base_min * self.scale + self.translation
        self.max_bounds = self._base_max * self.scale + self.translation


class _HeightField(Protocol):
    def height_of_terrain(self, world_x: float, world_z: float) -> float: ...


class TerrainCollider(Collider):
    def __init__(self, terrain: _HeightField, physics_material: PhysicsMaterial | None = None):
        super().__init__(ColliderType.TERRAIN, physics_material)
        self.terrain = terrain

    def intersect_sphere(self, sphere: SphereCollider) -> IntersectData:
        x, y, z = sphere.center
        distance_from_center = float(y) - float(self.terrain.height_of_terrain(float(x), float(z)))
        distance_from_sphere = distance_from_center - sphere.radius
        return IntersectData(distance_from_sphere < 0.0, np.zeros(3), distance_from_sphere)