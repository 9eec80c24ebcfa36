import pytest

from particlesim.player import INITIAL_POSITION, PlayerController
from particlesim.rigid import RigidBody
from particlesim.vector import Vector3


@pytest.mark.parametrize(
    "key, direction",
    [
        ("w", Vector3(1, 0, 0)),
        ("s", Vector3(-1, 0, 0)),
        ("a", Vector3(0, 0, -1)),
        ("d", Vector3(0, 0, 1)),
    ],
)
def test_keys_apply_torque(key, direction):
    player = PlayerController(10)
    player.add_force(key)
    assert player.body.torque == direction * (10 * 2000)


def test_unknown_key_applies_no_torque():
    player = PlayerController(10)
    player.add_force("x")
    assert player.body.torque == Vector3()


def test_torque_accumulates():
    player = PlayerController(1)
    player.add_force("w")
    player.add_force("w")
    assert player.body.torque == Vector3(4000, 0, 0)


def test_default_body_starts_at_initial_position():
    assert PlayerController(1).position == INITIAL_POSITION


def test_collision_same_position():
    player = PlayerController(1, RigidBody(position=Vector3(1, 1, 1)))
    assert player.collides_with(Vector3(1, 1, 1), 0.5, True)
    assert player.collides_with(Vector3(1, 1, 1), 0.5, False)


def test_no_collision_far_away():
    player = PlayerController(1, RigidBody(position=Vector3()))
    assert not player.collides_with(Vector3(100, 0, 0), 1.0, True)


def test_collision_boundary_is_strict():
    player = PlayerController(1, RigidBody(position=Vector3()))
    assert not player.collides_with(Vector3(3, 0, 0), 1.0, True)
    assert player.collides_with(Vector3(2.9, 0, 0), 1.0, False)


def test_diagonal_within_box_but_outside_sphere():
    player = PlayerController(1, RigidBody(position=Vector3()))
    assert not player.collides_with(Vector3(2.5, 2.5, 2.5), 1.0, True)


def test_reset_position_stops_motion():
    body = RigidBody(
        position=Vector3(5, -20, 7),
        linear_velocity=Vector3(1, 2, 3),
        angular_velocity=Vector3(4, 5, 6),
    )
    player = PlayerController(1, body)
    player.reset_position()
    assert body.position == INITIAL_POSITION
    assert body.linear_velocity == Vector3()
    assert body.angular_velocity == Vector3()


def test_toggle_flips_enabled():
    player = PlayerController(1)
    before = player.enabled
    player.toggle()
    assert player.enabled is (not before)
    player.toggle()
    assert player.enabled is before