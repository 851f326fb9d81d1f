"""Steps physics objects and resolves collisions between them."""

from __future__ import annotations

import functools

import numpy as np

from paradox.colliders import ColliderType, UnsupportedCollisionError
from paradox.physics_object import PhysicsObject

_BOUNCE_KEEP = 0.2
_REST_SPEED = 1.0


class PhysicsEngine:
    """Holds physics objects, integrates them and handles their collisions."""

    def __init__(self) -> None:
        self.objects: list[PhysicsObject] = []

    def __len__(self) -> int:
        return len(self.objects)

    def add_object(self, physics_object: PhysicsObject) -> None:
        self.objects.append(physics_object)

    def simulate(self, delta_time: float) -> None:
        for physics_object in self.objects:
            physics_object.integrate(delta_time)

    def handle_collisions(self) -> None:
        """Test every pair once, in insertion order, and respond to hits."""
        for index, first in enumerate(self.objects):
            for second in self.objects[index + 1 :]:
                self._resolve(first, second)

    def update(self, delta_time: float) -> None:
        self.simulate(delta_time)
        self.handle_collisions()

    @staticmethod
    def _resolve(first: PhysicsObject, second: PhysicsObject) -> None:
        a = first.sync_collider()
        b = second.sync_collider()
        try:
            data = a.intersect(b)
        except UnsupportedCollisionError:
            return
        if not data.does_intersect:
            return

        kinds = (a.collider_type, b.collider_type)
        if kinds == (ColliderType.PLANE, ColliderType.SPHERE):
            velocity = second.velocity
            reflected = 2.0 * a.normal * (a.normal * velocity)
            bounced = velocity - reflected
            second.velocity = velocity - (reflected - reflected * _BOUNCE_KEEP)
            if bounced[1] < _REST_SPEED:
                second.gravity_this_step = False
        elif kinds == (ColliderType.PLANE, ColliderType.AABB):
            second.gravity_this_step = False
            second.transform.move((0.0, data.distance, 0.0))
        elif kinds == (ColliderType.TERRAIN, ColliderType.SPHERE):
            x, _, z = second.position
            height = float(a.terrain.height_of_terrain(float(x), float(z)))
            second.transform.move((0.0, height + b.radius, 0.0))
        elif kinds == (ColliderType.AABB, ColliderType.SPHERE):
            second.transform.move(data.distance * np.asarray(data.direction))


@functools.lru_cache(maxsize=None)
def default_engine() -> PhysicsEngine:
    """The shared engine used by the core loop."""
    return PhysicsEngine()