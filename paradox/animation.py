"""Skeletal animation: keyframe interpolation and bone matrices for a node tree."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from itertools import pairwise
from typing import Callable, Sequence

import numpy as np

from paradox.transform import rotation_matrix, scale_matrix, translation_matrix

DEFAULT_TICKS_PER_SECOND = 25.0


def _vec3(value) -> np.ndarray:
    return np.array(value, dtype=float).reshape(3)


def _quat(value) -> np.ndarray:
    return np.array(value, dtype=float).reshape(4)


def _mat4(value) -> np.ndarray:
    return np.array(value, dtype=float).reshape(4, 4)


@dataclass(frozen=True, eq=False)
class VectorKey:
    """A 3-vector value at a time given in animation ticks."""

    time: float
    value: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "time", float(self.time))
        object.__setattr__(self, "value", _vec3(self.value))


@dataclass(frozen=True, eq=False)
class QuaternionKey:
    """A rotation ``(x, y, z, w)`` at a time given in animation ticks."""

    time: float
    value: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "time", float(self.time))
        object.__setattr__(self, "value", _quat(self.value))


@dataclass(eq=False)
class NodeAnimation:
    """Keyframes animating one node of the hierarchy."""

    node_name: str
    position_keys: list[VectorKey]
    rotation_keys: list[QuaternionKey]
    scaling_keys: list[VectorKey]


@dataclass(eq=False)
class AnimationNode:
    """Node of the skeleton hierarchy with its rest transformation."""

    name: str
    transformation: np.ndarray = field(default_factory=lambda: np.eye(4))
    children: list["AnimationNode"] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.transformation = _mat4(self.transformation)


@dataclass(eq=False)
class Animation:
    """An animation clip; a ``ticks_per_second`` of zero means the default rate."""

    duration: float
    ticks_per_second: float = 0.0
    channels: list[NodeAnimation] = field(default_factory=list)


@dataclass(eq=False)
class Bone:
    """A bone with its offset matrix and its last computed final matrix."""

    name: str
    offset_matrix: np.ndarray = field(default_factory=lambda: np.eye(4))
    final_transformation: np.ndarray = field(default_factory=lambda: np.eye(4))

    def __post_init__(self) -> None:
        self.offset_matrix = _mat4(self.offset_matrix)
        self.final_transformation = _mat4(self.final_transformation)


def nlerp(start, end, factor: float) -> np.ndarray:
    """Linear blend of two quaternions, normalised to unit length."""
    blended = _quat(start) * (1.0 - factor) + _quat(end) * factor
    length = float(np.linalg.norm(blended))
    return blended / length if length > 0.0 else blended


def find_key_index(animation_time: float, keys: Sequence) -> int:
    """Index of the key whose interval contains ``animation_time``."""
    if not keys:
        raise ValueError("no keys to search")
    for index, (_, following) in enumerate(pairwise(keys)):
        if animation_time < following.time:
            return index
    raise ValueError(f"animation time {animation_time} is not before the last key")


def _interpolate(
    animation_time: float,
    keys: Sequence,
    blend: Callable[[np.ndarray, np.ndarray, float], np.ndarray],
) -> np.ndarray:
    if len(keys) == 1:
        return keys[0].value.copy()
    index = find_key_index(animation_time, keys)
    start, end = keys[index], keys[index + 1]
    factor = (animation_time - start.time) / (end.time - start.time)
    if not 0.0 <= factor <= 1.0:
        raise ValueError(f"interpolation factor {factor} outside [0, 1]")
    return blend(start.value, end.value, factor)


def interpolate_vector(animation_time: float, keys: Sequence[VectorKey]) -> np.ndarray:
    """Position or scale at ``animation_time``, blended linearly between keys."""
    return _interpolate(animation_time, keys, lambda a, b, f: a + f * (b - a))


def interpolate_rotation(animation_time: float, keys: Sequence[QuaternionKey]) -> np.ndarray:
    """Rotation at ``animation_time``, blended with ``nlerp`` between keys."""
    return _interpolate(animation_time, keys, nlerp)


class Animator:
    """Plays an animation over a node hierarchy and computes bone matrices."""

    def __init__(
        self,
        root: AnimationNode,
        animation: Animation,
        bones: Sequence[Bone],
        global_inverse_transform=None,
    ) -> None:
        self.root = root
        self.animation = animation
        self.bones = list(bones)
        self.global_inverse_transform = (
            np.eye(4) if global_inverse_transform is None else _mat4(global_inverse_transform)
        )
        self.final_transforms = [np.eye(4) for _ in self.bones]
        self.timer = 0.0

    def update(self, delta: float) -> None:
        """Advance the clock by ``delta`` seconds and recompute the bones."""
        self.timer += delta
        self.bone_transforms(self.timer)

    def bone_transforms(self, time_in_seconds: float) -> list[np.ndarray]:
        """Final matrix of every bone, in bone order, at a time in seconds."""
        ticks = self.animation.ticks_per_second or DEFAULT_TICKS_PER_SECOND
        animation_time = math.fmod(time_in_seconds * ticks, self.animation.duration)
        self.read_node_hierarchy(animation_time, self.root, np.eye(4))
        self.final_transforms = [bone.final_transformation.copy() for bone in self.bones]
        return [matrix.copy() for matrix in self.final_transforms]

    def read_node_hierarchy(self, animation_time: float, node: AnimationNode, parent_transform) -> None:
        """Walk the tree from ``node``, storing final matrices of the bones met."""
        node_transform = node.transformation
        channel = self.find_node_anim(node.name)
        if channel is not None:
            scaling = interpolate_vector(animation_time, channel.scaling_keys)
            rotation = interpolate_rotation(animation_time, channel.rotation_keys)
            position = interpolate_vector(animation_time, channel.position_keys)
            node_transform = (
                translation_matrix(position) @ rotation_matrix(rotation) @ scale_matrix(scaling)
            )
        global_transform = _mat4(parent_transform) @ node_transform
        bone = self.find_bone(node.name)
        if bone is not None:
            bone.final_transformation = (
                self.global_inverse_transform @ global_transform @ bone.offset_matrix
            )
        for child in node.children:
            self.read_node_hierarchy(animation_time, child, global_transform)

    def find_node_anim(self, node_name: str) -> NodeAnimation | None:
        return next((c for c in self.animation.channels if c.node_name == node_name), None)

    def find_bone(self, name: str) -> Bone | None:
        return next((b for b in self.bones if b.name == name), None)