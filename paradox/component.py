"""Base class of everything that can be attached to a game object."""

from __future__ import annotations

from typing import Any


class Component:
    """Behaviour or data attached to a game object.

    The base hooks only keep count of how often the owning object drove them.
    """

    def __init__(self) -> None:
        self.parent: Any = None
        self.events_processed = 0
        self.frames_rendered = 0

    def process_events(self) -> None:
        """Handle input events for this frame."""
        self.events_processed += 1

    def update(self, delta_time: float) -> None:
        """Advance the component by ``delta_time`` seconds."""

    def render(self, rendering_engine) -> None:
        """Draw the component."""
        self.frames_rendered += 1

    def add_to_engine(self, engine) -> None:
        """Register the component with an engine."""

    def set_parent(self, parent) -> None:
        self.parent = parent

    @property
    def transform(self):
        """Transform of the game object this component is attached to."""
        if self.parent is None:
            raise LookupError("component is not attached to a game object")
        return self.parent.transform


class Behavior(Component):
    """Base for user scripts attached to game objects."""

    def update(self, delta_time: float) -> None:
        """Scripts override this to act every frame."""