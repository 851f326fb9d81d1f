"""Position, orientation and scale of an object in the scene graph."""

from __future__ import annotations

import math

import numpy as np


def _vec3(value) -> np.ndarray:
    return np.array(value, dtype=float).reshape(3)


def _quat(value) -> np.ndarray:
    return np.array(value, dtype=float).reshape(4)


def quat_from_axis_angle(axis, angle: float) -> np.ndarray:
    """Quaternion ``(x, y, z, w)`` rotating by ``angle`` radians about ``axis``."""
    axis = _vec3(axis)
    length = float(np.linalg.norm(axis))
    if length > 0.0:
        axis = axis / length
    half = angle / 2.0
    return np.append(axis * math.sin(half), math.cos(half))


def quat_multiply(a, b) -> np.ndarray:
    """Hamilton product ``a * b``; the result rotates by ``b`` first, then ``a``."""
    ax, ay, az, aw = _quat(a)
    bx, by, bz, bw = _quat(b)
    return np.array(
        [
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
            aw * bw - ax * bx - ay * by - az * bz,
        ]
    )


def translation_matrix(offset) -> np.ndarray:
    """4x4 matrix moving points by ``offset``."""
    matrix = np.eye(4)
    matrix[:3, 3] = _vec3(offset)
    return matrix


def rotation_matrix(rotation) -> np.ndarray:
    """4x4 matrix of the rotation held by a unit quaternion ``(x, y, z, w)``."""
    x, y, z, w = _quat(rotation)
    return np.array(
        [
            [1 - 2 * (y * y + z * z), 2 * (x * y - z * w), 2 * (x * z + y * w), 0.0],
            [2 * (x * y + z * w), 1 - 2 * (x * x + z * z), 2 * (y * z - x * w), 0.0],
            [2 * (x * z - y * w), 2 * (y * z + x * w), 1 - 2 * (x * x + y * y), 0.0],
            [0.0, 0.0, 0.0, 1.0],
        ]
    )


def scale_matrix(scale) -> np.ndarray:
    """4x4 matrix scaling each axis by the matching component of ``scale``."""
    return np.diag(np.append(_vec3(scale), 1.0))


class Transform:
    """Translation, rotation and scale, optionally relative to a parent transform."""

    def __init__(self) -> None:
        self._translation = np.zeros(3)
        self._rotation = np.array([0.0, 0.0, 0.0, 1.0])
        self._scale = np.ones(3)
        self._old_translation = np.zeros(3)
        self._old_rotation = np.zeros(4)
        self._old_scale = np.zeros(3)
        self.parent: Transform | None = None
        self._parent_matrix = np.eye(4)

    @property
    def translation(self) -> np.ndarray:
        return self._translation.copy()

    @translation.setter
    def translation(self, value) -> None:
        self._translation = _vec3(value)

    @property
    def rotation(self) -> np.ndarray:
        return self._rotation.copy()

    @rotation.setter
    def rotation(self, value) -> None:
        self._rotation = _quat(value)

    @property
    def scale(self) -> np.ndarray:
        return self._scale.copy()

    @scale.setter
    def scale(self, value) -> None:
        self._scale = _vec3(value)

    def update(self) -> None:
        """Remember the current state so that later changes can be detected."""
        if np.any(self._old_translation != 0.0):
            self._old_translation = self._translation.copy()
            self._old_scale = self._scale.copy()
            self._old_rotation = self._rotation.copy()
        else:
            self._old_translation = self._translation + 0.1
            self._old_rotation = np.zeros(4)
            self._old_scale = self._scale + 1.0

    def has_changed(self) -> bool:
        if self.parent is not None and self.parent.has_changed():
            return True
        if not np.array_equal(self._scale, self._old_scale):
            return True
        if not np.array_equal(self._rotation, self._old_rotation):
            return True
        return not np.array_equal(self._translation, self._old_translation)

    def get_transformation(self) -> np.ndarray:
        """World matrix: parent, then translation, rotation and scale."""
        return (
            self.get_parent_matrix()
            @ translation_matrix(self._translation)
            @ rotation_matrix(self._rotation)
            @ scale_matrix(self._scale)
        )

    def get_parent_matrix(self) -> np.ndarray:
        """Parent's matrix, refreshed only when the parent has changed."""
        if self.parent is not None and self.parent.has_changed():
            self._parent_matrix = self.parent.get_transformation()
        return self._parent_matrix.copy()

    def set_parent(self, parent: "Transform | None") -> None:
        self.parent = parent

    def rotate(self, axis, angle: float) -> None:
        """Rotate by ``angle`` radians about ``axis`` on top of the current rotation."""
        rotation = quat_multiply(quat_from_axis_angle(axis, angle), self._rotation)
        length = float(np.linalg.norm(rotation))
        self._rotation = rotation / length if length > 0.0 else rotation

    def move(self, delta) -> None:
        self._translation = self._translation + _vec3(delta)