"""A scene: the root of a game-object tree plus forward-rendered extras."""

from __future__ import annotations

from paradox.game_object import GameObject


class ObjectNotFoundError(LookupError):
    """Raised when a scene holds no object with the requested name."""


class Scene:
    """Holds the scene graph; subclasses override ``init`` to populate it."""

    def __init__(self) -> None:
        self._root: GameObject | None = None
        self.forward_renderers: list = []

    @property
    def root(self) -> GameObject:
        if self._root is None:
            self._root = GameObject()
        return self._root

    def init(self) -> None:
        """Set up the scene before the first frame."""

    def process_events(self) -> None:
        self.root.process_events_all()

    def update(self, delta_time: float) -> None:
        self.root.update_all(delta_time)

    def render(self, rendering_engine) -> None:
        rendering_engine.render(self.root)

    def set_engine(self, engine) -> None:
        self.root.set_engine(engine)

    def add_object(self, game_object: GameObject) -> None:
        self.root.add_child(game_object)
        self.root.set_scene(self)

    def find_object(self, name: str) -> GameObject:
        found = self.root.find(name)
        if found is None:
            raise ObjectNotFoundError(f"no such game object with name {name!r} found")
        return found

    def add_forward_renderer(self, renderer) -> None:
        self.forward_renderers.append(renderer)