"""Nodes of the scene graph: a transform, components and child objects."""

from __future__ import annotations

from typing import Iterator, TypeVar

import numpy as np

from paradox.component import Component
from paradox.physics_object import PhysicsObject
from paradox.transform import Transform

C = TypeVar("C", bound=Component)


class GameObject:
    """Named object with a transform, components and children.

    ``pending_move`` holds a movement waiting to be applied by a physics
    object on its next update.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.transform = Transform()
        self.children: list[GameObject] = []
        self.components: list[Component] = []
        self.engine = None
        self.scene = None
        self.pending_move = np.zeros(3)

    def __iter__(self) -> Iterator["GameObject"]:
        return iter(self.children)

    def process_events(self) -> None:
        self.transform.update()
        for component in self.components:
            component.process_events()

    def update(self, delta_time: float) -> None:
        for component in self.components:
            component.update(delta_time)

    def render(self, engine) -> None:
        for component in self.components:
            component.render(engine)

    def process_events_all(self) -> None:
        """Process events for this object and, after it, every descendant."""
        self.process_events()
        for child in self.children:
            child.process_events_all()

    def update_all(self, delta_time: float) -> None:
        self.update(delta_time)
        for child in self.children:
            child.update_all(delta_time)

    def render_all(self, engine) -> None:
        self.render(engine)
        for child in self.children:
            child.render_all(engine)

    def add_child(self, child: "GameObject") -> None:
        """Attach ``child`` below this object and register its physics bodies."""
        self.children.append(child)
        child.transform.set_parent(self.transform)
        if self.engine is None:
            return
        child.set_engine(self.engine)
        for component in child.components:
            if isinstance(component, PhysicsObject):
                self.engine.physics_engine.add_object(component)

    def add_component(self, component: Component) -> None:
        self.components.append(component)
        component.set_parent(self)

    def set_engine(self, engine) -> None:
        """Bind this subtree to ``engine``, letting components register with it."""
        if self.engine is engine:
            return
        self.engine = engine
        for component in self.components:
            component.add_to_engine(engine)
        for child in self.children:
            child.set_engine(engine)

    def set_scene(self, scene) -> None:
        if self.scene is scene:
            return
        self.scene = scene
        for child in self.children:
            child.set_scene(scene)

    def find(self, name: str) -> "GameObject | None":
        """First object named ``name`` in this subtree, searched depth first."""
        if self.name == name:
            return self
        for child in self.children:
            found = child.find(name)
            if found is not None:
                return found
        return None

    def get_component(self, kind: type[C]) -> C | None:
        """First attached component of type ``kind``, or None."""
        return next((c for c in self.components if isinstance(c, kind)), None)

    def move(self, delta) -> None:
        """Move the object, deferring to its physics object if it has one."""
        self.pending_move = np.array(delta, dtype=float).reshape(3)
        if self.get_component(PhysicsObject) is None:
            self.transform.move(self.pending_move)
            self.pending_move = np.zeros(3)