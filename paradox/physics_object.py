"""Rigid body component that moves its game object under forces and gravity."""

from __future__ import annotations

import numpy as np

from paradox.colliders import Collider
from paradox.component import Component

GRAVITY = np.array([0.0, -9.8, 0.0])


def _vec3(value) -> np.ndarray:
    return np.array(value, dtype=float).reshape(3)


class PhysicsObject(Component):
    """Point mass with a velocity and an optional collider.

    The owning game object may carry a ``pending_move`` vector; it is applied
    to the transform at the start of every update and then cleared.
    """

    def __init__(
        self,
        collider: Collider | None = None,
        mass: float = 1.0,
        velocity=(0.0, 0.0, 0.0),
        use_gravity: bool = False,
        *,
        position=None,
    ) -> None:
        super().__init__()
        if collider is not None and position is not None:
            raise ValueError("a physics object with a collider starts at the collider's center")
        self.collider = collider
        if collider is not None:
            start = collider.center
        elif position is not None:
            start = position
        else:
            start = np.zeros(3)
        self._position = _vec3(start)
        self._old_position = self._position.copy()
        self._velocity = _vec3(velocity)
        self.mass = float(mass)
        self.acceleration = np.zeros(3)
        self.use_gravity = bool(use_gravity)
        self.gravity_this_step = True

    @property
    def position(self) -> np.ndarray:
        return self._position.copy()

    @position.setter
    def position(self, value) -> None:
        self._position = _vec3(value)

    @property
    def velocity(self) -> np.ndarray:
        return self._velocity.copy()

    @velocity.setter
    def velocity(self, value) -> None:
        self._velocity = _vec3(value)

    def integrate(self, delta_time: float) -> None:
        """Advance the position by the current velocity."""
        self._position = self._position + self._velocity * delta_time

    def add_force(self, force) -> None:
        """Accumulate the acceleration caused by ``force`` for this step."""
        self.acceleration = self.acceleration + _vec3(force) / self.mass

    def update(self, delta_time: float) -> None:
        """Apply pending moves, gravity and velocity to the owner's transform."""
        transform = self.transform
        pending = getattr(self.parent, "pending_move", None)
        if pending is not None:
            transform.move(pending)
            self.parent.pending_move = np.zeros(3)
        self._position = transform.translation
        if self.use_gravity and self._position[1] > 0.0 and self.gravity_this_step:
            self.add_force(self.mass * GRAVITY)
        self._velocity = self._velocity + self.acceleration * delta_time
        self._position = self._position + self._velocity * delta_time
        transform.translation = self._position
        self.acceleration = np.zeros(3)
        self.gravity_this_step = True

    def sync_collider(self) -> Collider:
        """Move and scale the collider to match the body, then return it."""
        if self.collider is None:
            raise LookupError("physics object has no collider")
        scaling = self.transform.scale
        translation = self._position - self._old_position
        self._old_position = self._position.copy()
        self.collider.transform(translation, scaling)
        return self.collider