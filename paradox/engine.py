"""Main loop, clock and the deferred rendering pass over the scene graph."""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

import numpy as np

from paradox.camera import Camera
from paradox.lights import Light
from paradox.physics_engine import PhysicsEngine, default_engine

log = logging.getLogger(__name__)

SECONDS = 10_000_000
"""Clock ticks per second; one tick is 100 nanoseconds."""


def now_ticks() -> int:
    """Wall-clock time since the epoch in 100-nanosecond ticks."""
    return time.time_ns() // 100


def calc_average_normals(indices, vertices, stride: int, normal_offset: int) -> np.ndarray:
    """Fill each vertex's normal with the normalised sum of its faces' normals.

    ``vertices`` is a flat array of ``stride`` floats per vertex; a new array
    is returned.
    """
    rows = np.array(vertices, dtype=float).reshape(-1, stride)
    positions = rows[:, :3]
    normals = rows[:, normal_offset : normal_offset + 3]
    triangles = np.asarray(indices, dtype=int).reshape(-1, 3)
    for i0, i1, i2 in triangles:
        normal = np.cross(positions[i1] - positions[i0], positions[i2] - positions[i0])
        length = float(np.linalg.norm(normal))
        if length > 0.0:
            normal = normal / length
        for index in (i0, i1, i2):
            normals[index] += normal
    lengths = np.linalg.norm(normals, axis=1, keepdims=True)
    np.divide(normals, lengths, out=normals, where=lengths > 0.0)
    return rows.reshape(-1)


class RenderingEngine:
    """Renders the scene graph, then runs one lighting pass per light."""

    def __init__(self, height: int = 800, width: int = 800) -> None:
        self.height = height
        self.width = width
        self.lights: list[Light] = []
        self.active_light: Light = Light()
        self.main_camera: Camera | None = Camera()

    def render(self, root) -> None:
        if self.main_camera is None:
            raise RuntimeError("there is no camera")
        root.render_all(self)
        for light in self.lights:
            self.active_light = light
            render_light = getattr(light, "render_light", None)
            if callable(render_light):
                render_light(self)

    def render_forward(self, renderers) -> None:
        for renderer in renderers:
            renderer.render(self)

    def add_light(self, light: Light) -> None:
        self.lights.append(light)

    def set_main_camera(self, camera: Camera | None) -> None:
        self.main_camera = camera


class Window(Protocol):
    def should_close(self) -> bool: ...

    def update(self) -> None: ...

    def close(self) -> None: ...


class CoreEngine:
    """Fixed-step game loop driving a scene, physics and rendering."""

    def __init__(
        self,
        game,
        window: Window,
        frame_rate: int = 60,
        *,
        height: int = 800,
        width: int = 800,
        physics_engine: PhysicsEngine | None = None,
        clock: Callable[[], int] = now_ticks,
    ) -> None:
        self.game = game
        self.window = window
        self.frame_rate = frame_rate
        self.frame_time = 1.0 / frame_rate
        self.running = False
        self.clock = clock
        self.rendering_engine = RenderingEngine(height, width)
        self.physics_engine = physics_engine if physics_engine is not None else default_engine()
        self.last_fps: int | None = None
        game.set_engine(self)

    def start(self) -> None:
        if self.running:
            return
        self.run()

    def run(self) -> None:
        """Loop until the window asks to close, updating at a fixed step."""
        self.running = True
        frame_counter = 0
        frames = 0
        self.game.init()
        last_time = self.clock()
        unprocessed = 0.0
        while self.running:
            should_render = False
            start_time = self.clock()
            passed = start_time - last_time
            last_time = start_time
            unprocessed += passed / SECONDS
            frame_counter += passed
            self.game.process_events()
            while unprocessed > self.frame_time:
                should_render = True
                unprocessed -= self.frame_time
                self.game.update(self.frame_time)
                self.physics_engine.update(self.frame_time)
                if frame_counter >= SECONDS:
                    self.last_fps = frames
                    log.info("%d frames per second", frames)
                    frames = 0
                    frame_counter = 0
            if should_render:
                self._render()
                frames += 1
            if self.window.should_close():
                self.stop()

    def _render(self) -> None:
        self.game.render(self.rendering_engine)
        self.window.update()

    def stop(self) -> None:
        if not self.running:
            return
        self.window.close()
        self.running = False