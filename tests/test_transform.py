import math

import numpy as np
import pytest

from paradox.transform import (
    Transform,
    quat_from_axis_angle,
    quat_multiply,
    rotation_matrix,
    scale_matrix,
    translation_matrix,
)


def _apply(matrix, point):
    return (matrix @ np.append(np.asarray(point, dtype=float), 1.0))[:3]


def test_default_transformation_is_identity():
    np.testing.assert_allclose(Transform().get_transformation(), np.eye(4))


def test_translation_matrix_moves_points():
    offset = np.array([1.5, -2.0, 3.0])
    point = np.array([0.5, 0.25, -4.0])
    np.testing.assert_allclose(_apply(translation_matrix(offset), point), point + offset)


def test_scale_matrix_scales_points():
    scale = np.array([2.0, 3.0, 0.5])
    point = np.array([1.0, -1.0, 4.0])
    np.testing.assert_allclose(_apply(scale_matrix(scale), point), scale * point)


@pytest.mark.parametrize("axis,angle", [((0, 1, 0), 0.7), ((1, 1, 0), 2.1), ((0, 0, 3), -1.2)])
def test_rotation_matrix_is_proper_rotation(axis, angle):
    r = rotation_matrix(quat_from_axis_angle(axis, angle))[:3, :3]
    np.testing.assert_allclose(r @ r.T, np.eye(3), atol=1e-12)
    assert np.linalg.det(r) == pytest.approx(1.0)
    axis = np.asarray(axis, dtype=float)
    np.testing.assert_allclose(r @ axis, axis, atol=1e-12)


def test_multiply_by_identity_keeps_quaternion():
    q = quat_from_axis_angle((1, 2, 3), 0.9)
    identity = np.array([0.0, 0.0, 0.0, 1.0])
    np.testing.assert_allclose(quat_multiply(identity, q), q)
    np.testing.assert_allclose(quat_multiply(q, identity), q)


def test_rotate_composes_angles_about_same_axis():
    t = Transform()
    t.rotate((0, 0, 1), 0.4)
    t.rotate((0, 0, 1), 0.8)
    expected = rotation_matrix(quat_from_axis_angle((0, 0, 1), 1.2))
    np.testing.assert_allclose(rotation_matrix(t.rotation), expected, atol=1e-12)
    assert np.linalg.norm(t.rotation) == pytest.approx(1.0)


def test_move_accumulates():
    t = Transform()
    t.move((1, 2, 3))
    t.move((0.5, 0.5, 0.5))
    np.testing.assert_allclose(t.translation, np.array([1, 2, 3]) + 0.5)


def test_setters_accept_sequences():
    t = Transform()
    t.translation = (4, 5, 6)
    t.scale = [2, 2, 2]
    np.testing.assert_allclose(t.translation, [4, 5, 6])
    np.testing.assert_allclose(t.scale, [2, 2, 2])


def test_change_tracking_across_updates():
    t = Transform()
    t.update()
    assert t.has_changed() is True
    t.update()
    assert t.has_changed() is False
    t.move((1, 0, 0))
    assert t.has_changed() is True


def test_child_follows_changed_parent():
    parent = Transform()
    parent.translation = (10, 0, 0)
    child = Transform()
    child.translation = (0, 2, 0)
    child.set_parent(parent)
    np.testing.assert_allclose(
        _apply(child.get_transformation(), (0, 0, 0)), parent.translation + child.translation
    )


def test_stable_parent_matrix_is_not_refreshed():
    parent = Transform()
    parent.translation = (1, 2, 3)
    parent.update()
    parent.update()
    child = Transform()
    child.set_parent(parent)
    np.testing.assert_allclose(child.get_parent_matrix(), Transform().get_transformation())


def test_rotation_matrix_turns_quarter():
    r = rotation_matrix(quat_from_axis_angle((0, 1, 0), math.pi))
    np.testing.assert_allclose(_apply(r, (1, 0, 0)), (-1, 0, 0), atol=1e-12)