"""Result of a collision test and surface properties of colliders."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np


@dataclass(frozen=True, eq=False)
class IntersectData:
    """Outcome of testing two colliders against each other."""

    does_intersect: bool
    direction: np.ndarray = field(default_factory=lambda: np.zeros(3))
    distance: float = 0.0

    def __post_init__(self) -> None:
        direction = np.array(self.direction, dtype=float).reshape(3)
        direction.setflags(write=False)
        object.__setattr__(self, "direction", direction)
        object.__setattr__(self, "does_intersect", bool(self.does_intersect))
        object.__setattr__(self, "distance", float(self.distance))


@dataclass
class PhysicsMaterial:
    """Friction and bounce coefficients of a collider's surface."""

    static_friction: float
    dynamic_friction: float
    bounciness: float