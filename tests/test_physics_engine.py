import numpy as np

from paradox.colliders import AABBCollider, PlaneCollider, SphereCollider, TerrainCollider
from paradox.physics_engine import PhysicsEngine, default_engine
from paradox.physics_object import PhysicsObject
from paradox.transform import Transform


class _Owner:
    def __init__(self):
        self.transform = Transform()
        self.pending_move = np.zeros(3)


def _body(collider, velocity=(0.0, 0.0, 0.0)):
    body = PhysicsObject(collider, 1.0, velocity)
    body.set_parent(_Owner())
    return body


class _FlatTerrain:
    def __init__(self, height):
        self.height = height

    def height_of_terrain(self, world_x, world_z):
        return self.height


def test_default_engine_is_shared():
    before = len(default_engine())
    default_engine().add_object(_body(SphereCollider((100.0, 100.0, 100.0), 1.0)))
    assert len(default_engine()) == before + 1


def test_add_object_counts():
    engine = PhysicsEngine()
    engine.add_object(_body(SphereCollider((0, 0, 0), 1.0)))
    engine.add_object(_body(SphereCollider((5, 0, 0), 1.0)))
    assert len(engine) == 2


def test_simulate_integrates_all():
    engine = PhysicsEngine()
    body = _body(SphereCollider((0, 0, 0), 1.0), velocity=(1.0, 2.0, 3.0))
    engine.add_object(body)
    engine.simulate(1.0)
    assert np.allclose(body.position, [1.0, 2.0, 3.0])


def test_sphere_bounces_off_plane():
    engine = PhysicsEngine()
    plane = _body(PlaneCollider((0, 1, 0), 0.0))
    ball = _body(SphereCollider((0.0, 0.5, 0.0), 1.0), velocity=(1.0, -2.0, 0.0))
    engine.add_object(plane)
    engine.add_object(ball)
    engine.handle_collisions()
    assert ball.velocity[1] > 0.0
    assert ball.velocity[0] == 1.0
    assert ball.gravity_this_step is True


def test_slow_sphere_rests_on_plane():
    engine = PhysicsEngine()
    engine.add_object(_body(PlaneCollider((0, 1, 0), 0.0)))
    ball = _body(SphereCollider((0.0, 0.5, 0.0), 1.0), velocity=(0.0, -0.1, 0.0))
    engine.add_object(ball)
    engine.handle_collisions()
    assert ball.gravity_this_step is False


def test_plane_pushes_box_up():
    plane_collider = PlaneCollider((0, 1, 0), 0.0)
    box_collider = AABBCollider((-1, -1, -1), (1, 1, 1))
    expected = plane_collider.intersect_aabb(box_collider)
    engine = PhysicsEngine()
    engine.add_object(_body(plane_collider))
    box = _body(box_collider)
    engine.add_object(box)
    engine.handle_collisions()
    assert box.gravity_this_step is False
    assert np.allclose(box.transform.translation, [0.0, expected.distance, 0.0])


def test_box_pushes_sphere_out():
    box_collider = AABBCollider((-1, -1, -1), (1, 1, 1))
    sphere_collider = SphereCollider((1.5, 0.0, 0.0), 1.0)
    expected = box_collider.intersect_sphere(sphere_collider)
    engine = PhysicsEngine()
    engine.add_object(_body(box_collider))
    ball = _body(sphere_collider)
    engine.add_object(ball)
    engine.handle_collisions()
    assert expected.does_intersect
    assert np.allclose(ball.transform.translation, expected.distance * expected.direction)


def test_terrain_lifts_sphere():
    terrain_height = 2.0
    radius = 0.5
    engine = PhysicsEngine()
    engine.add_object(_body(TerrainCollider(_FlatTerrain(terrain_height))))
    ball = _body(SphereCollider((0.0, 1.0, 0.0), radius))
    engine.add_object(ball)
    engine.handle_collisions()
    assert np.allclose(ball.transform.translation, [0.0, terrain_height + radius, 0.0])


def test_unsupported_pair_is_skipped():
    engine = PhysicsEngine()
    ball = _body(SphereCollider((0.0, 0.5, 0.0), 1.0), velocity=(0.0, -2.0, 0.0))
    engine.add_object(ball)
    engine.add_object(_body(PlaneCollider((0, 1, 0), 0.0)))
    engine.handle_collisions()
    assert np.array_equal(ball.velocity, [0.0, -2.0, 0.0])
    assert np.array_equal(ball.transform.translation, np.zeros(3))


def test_separate_spheres_untouched():
    engine = PhysicsEngine()
    a = _body(SphereCollider((0, 0, 0), 1.0), velocity=(1.0, 0.0, 0.0))
    b = _body(SphereCollider((10, 0, 0), 1.0))
    engine.add_object(a)
    engine.add_object(b)
    engine.update(1.0)
    assert np.allclose(a.position, [1.0, 0.0, 0.0])
    assert np.array_equal(b.transform.translation, np.zeros(3))