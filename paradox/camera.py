"""First-person camera driven by pitch and yaw."""

from __future__ import annotations

import math
from typing import Callable

import numpy as np

from paradox.component import Component

PITCH_LIMIT = 89.0

_FACES = {
    0: (0.0, 90.0),
    1: (0.0, -90.0),
    2: (-90.0, 180.0),
    3: (90.0, 180.0),
    4: (0.0, 180.0),
    5: (0.0, 0.0),
}


def _vec3(value) -> np.ndarray:
    return np.array(value, dtype=float).reshape(3)


def _normalized(v: np.ndarray) -> np.ndarray:
    length = float(np.linalg.norm(v))
    return v / length if length > 0.0 else v


def perspective(fov: float, aspect_ratio: float, near: float, far: float) -> np.ndarray:
    """OpenGL projection matrix; ``fov`` is the vertical field of view in degrees."""
    q = 1.0 / math.tan(math.radians(0.5 * fov))
    matrix = np.zeros((4, 4))
    matrix[0, 0] = q / aspect_ratio
    matrix[1, 1] = q
    matrix[2, 2] = (near + far) / (near - far)
    matrix[2, 3] = (2.0 * near * far) / (near - far)
    matrix[3, 2] = -1.0
    return matrix


def look_at(eye, center, up) -> np.ndarray:
    """Right-handed view matrix looking from ``eye`` towards ``center``."""
    eye = _vec3(eye)
    f = _normalized(_vec3(center) - eye)
    s = _normalized(np.cross(f, _vec3(up)))
    u = np.cross(s, f)
    matrix = np.eye(4)
    matrix[0, :3] = s
    matrix[1, :3] = u
    matrix[2, :3] = -f
    matrix[0, 3] = -float(s @ eye)
    matrix[1, 3] = -float(u @ eye)
    matrix[2, 3] = float(f @ eye)
    return matrix


class Camera(Component):
    """Camera with a projection and a view built from pitch and yaw in degrees."""

    def __init__(
        self,
        world_up=(0.0, 1.0, 0.0),
        pitch: float = 0.0,
        yaw: float = -90.0,
        turn_speed: float = 1.0,
        move_speed: float = 1.0,
        fov: float = 45.0,
        aspect_ratio: float = 1.0,
        near: float = 0.1,
        far: float = 1000.0,
        pointer: Callable[[], tuple[float, float]] | None = None,
    ) -> None:
        super().__init__()
        self.world_up = _vec3(world_up)
        self.front = np.array([0.0, 0.0, -1.0])
        self.up = np.zeros(3)
        self.right = np.zeros(3)
        self.position = np.zeros(3)
        self.pitch = float(pitch)
        self.yaw = float(yaw)
        self.move_speed = float(move_speed)
        self.turn_speed = float(turn_speed)
        self.distance_from_model = np.array([4.0, 4.0, 4.0])
        self.projection = perspective(fov, aspect_ratio, near, far)
        self.pointer = pointer
        self.update_view()

    def update_view(self) -> None:
        """Recompute front, right and up from pitch and yaw."""
        yaw = math.radians(self.yaw)
        pitch = math.radians(self.pitch)
        self.front = _normalized(
            np.array([math.cos(yaw) * math.cos(pitch), math.sin(pitch), math.sin(yaw) * math.cos(pitch)])
        )
        self.right = _normalized(np.cross(self.front, self.world_up))
        self.up = _normalized(np.cross(self.right, self.front))

    def view_matrix(self) -> np.ndarray:
        return look_at(self.position, self.position + self.front, self.up)

    def update(self, delta_time: float) -> None:
        """Follow the owner's position and apply the pointer's movement."""
        self.position = self.transform.translation
        x_change, y_change = self.pointer() if self.pointer is not None else (0.0, 0.0)
        self.mouse_control(x_change, y_change)

    def add_to_engine(self, engine) -> None:
        engine.rendering_engine.set_main_camera(self)

    def mouse_control(self, x_change: float, y_change: float) -> None:
        """Turn by pointer movement, keeping pitch within the limit."""
        self.yaw += x_change * self.turn_speed
        self.pitch += y_change * self.turn_speed
        self.pitch = min(max(self.pitch, -PITCH_LIMIT), PITCH_LIMIT)
        self.update_view()

    def move_for_reflection(self, change) -> None:
        """Shift the camera and mirror its pitch, as for a reflection pass."""
        self.position = self.position + _vec3(change)
        self.pitch = -self.pitch
        self.update_view()

    def set_position(self, position) -> None:
        """Place the camera at its fixed offset from ``position``."""
        self.position = _vec3(position) + self.distance_from_model

    def set_direction(self, target) -> None:
        """Point the camera at ``target``."""
        self.front = _normalized(_vec3(target) - self.position)

    def switch_to_face(self, face: int) -> None:
        """Aim along one of the six cube-map faces; other values keep the angles."""
        if face in _FACES:
            self.pitch, self.yaw = _FACES[face]
        self.update_view()