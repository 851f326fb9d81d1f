import numpy as np
import pytest

from paradox.camera import PITCH_LIMIT, Camera, look_at, perspective
from paradox.transform import Transform


def _apply(matrix, point):
    return matrix @ np.append(np.asarray(point, dtype=float), 1.0)


@pytest.mark.parametrize("pitch,yaw", [(0.0, -90.0), (30.0, 45.0), (-60.0, 200.0)])
def test_view_basis_is_orthonormal(pitch, yaw):
    camera = Camera(pitch=pitch, yaw=yaw)
    for v in (camera.front, camera.right, camera.up):
        assert np.linalg.norm(v) == pytest.approx(1.0)
    assert camera.front @ camera.right == pytest.approx(0.0, abs=1e-12)
    assert camera.front @ camera.up == pytest.approx(0.0, abs=1e-12)
    assert camera.right @ camera.up == pytest.approx(0.0, abs=1e-12)


def test_pitch_is_clamped():
    camera = Camera()
    camera.mouse_control(0.0, 1000.0)
    assert camera.pitch == PITCH_LIMIT == 89.0
    camera.mouse_control(0.0, -5000.0)
    assert camera.pitch == -89.0


def test_mouse_control_scales_by_turn_speed():
    camera = Camera(yaw=10.0, turn_speed=0.5)
    camera.mouse_control(4.0, 2.0)
    assert camera.yaw == pytest.approx(10.0 + 4.0 * 0.5)
    assert camera.pitch == pytest.approx(2.0 * 0.5)


@pytest.mark.parametrize(
    "face,pitch,yaw",
    [(0, 0, 90), (1, 0, -90), (2, -90, 180), (3, 90, 180), (4, 0, 180), (5, 0, 0)],
)
def test_switch_to_face(face, pitch, yaw):
    camera = Camera(pitch=12.0, yaw=34.0)
    camera.switch_to_face(face)
    assert (camera.pitch, camera.yaw) == (pitch, yaw)
    assert np.linalg.norm(camera.front) == pytest.approx(1.0)


def test_unknown_face_keeps_angles():
    camera = Camera(pitch=12.0, yaw=34.0)
    camera.switch_to_face(9)
    assert (camera.pitch, camera.yaw) == (12.0, 34.0)


def test_move_for_reflection():
    camera = Camera(pitch=25.0)
    camera.move_for_reflection((0.0, -3.0, 0.0))
    assert camera.pitch == -25.0
    np.testing.assert_allclose(camera.position, [0.0, -3.0, 0.0])


def test_set_position_adds_model_offset():
    camera = Camera()
    camera.set_position((1.0, 2.0, 3.0))
    np.testing.assert_allclose(camera.position - np.array([1.0, 2.0, 3.0]), camera.distance_from_model)
    np.testing.assert_allclose(camera.distance_from_model, [4.0, 4.0, 4.0])


def test_set_direction_points_at_target():
    camera = Camera()
    camera.position = np.array([1.0, 1.0, 1.0])
    target = np.array([4.0, 5.0, 1.0])
    camera.set_direction(target)
    expected = (target - camera.position) / np.linalg.norm(target - camera.position)
    np.testing.assert_allclose(camera.front, expected)


def test_view_matrix_places_camera_at_origin():
    camera = Camera(pitch=10.0, yaw=30.0)
    camera.position = np.array([2.0, -1.0, 5.0])
    view = camera.view_matrix()
    np.testing.assert_allclose(_apply(view, camera.position)[:3], 0.0, atol=1e-12)
    np.testing.assert_allclose(_apply(view, camera.position + camera.front)[:3], [0.0, 0.0, -1.0], atol=1e-12)


def test_look_at_rotation_is_orthonormal():
    r = look_at((1, 2, 3), (4, 0, -2), (0, 1, 0))[:3, :3]
    np.testing.assert_allclose(r @ r.T, np.eye(3), atol=1e-12)


def test_perspective_maps_near_and_far_planes():
    proj = perspective(60.0, 1.5, 0.5, 50.0)
    near_clip = _apply(proj, (0.0, 0.0, -0.5))
    far_clip = _apply(proj, (0.0, 0.0, -50.0))
    assert near_clip[2] / near_clip[3] == pytest.approx(-1.0)
    assert far_clip[2] / far_clip[3] == pytest.approx(1.0)


def test_update_follows_parent_and_pointer():
    class Owner:
        transform = Transform()

    Owner.transform.translation = (3.0, 4.0, 5.0)
    camera = Camera(yaw=0.0, turn_speed=0.5, pointer=lambda: (2.0, 0.0))
    camera.set_parent(Owner())
    camera.update(0.1)
    np.testing.assert_allclose(camera.position, [3.0, 4.0, 5.0])
    assert camera.yaw == pytest.approx(2.0 * 0.5)


def test_add_to_engine_sets_main_camera():
    class Rendering:
        def __init__(self):
            self.main_camera = None

        def set_main_camera(self, camera):
            self.main_camera = camera

    class Engine:
        rendering_engine = Rendering()

    engine = Engine()
    camera = Camera()
    camera.add_to_engine(engine)
    assert engine.rendering_engine.main_camera is camera