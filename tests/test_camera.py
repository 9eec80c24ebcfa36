import pytest

from particlesim.camera import Camera
from particlesim.vector import Vector3


def assert_close(a, b):
    assert tuple(a) == pytest.approx(tuple(b), abs=1e-9)


def make_camera():
    return Camera(Vector3(1.0, 2.0, 3.0), Vector3(0.0, 0.0, 2.0))


def test_direction_is_normalised():
    cam = make_camera()
    assert_close(cam.direction, Vector3(0.0, 0.0, 1.0))


def test_forward_and_back_round_trip():
    cam = make_camera()
    start = cam.eye
    assert cam.handle_key("w", 0, 0)
    assert_close(cam.eye, start + cam.direction * 2.0)
    assert cam.handle_key("S", 0, 0)
    assert_close(cam.eye, start)


def test_strafe_is_perpendicular_and_reversible():
    cam = make_camera()
    start = cam.eye
    assert cam.handle_key("d", 0, 0, 1.5)
    moved = cam.eye - start
    assert moved.dot(cam.direction) == pytest.approx(0.0)
    assert moved.magnitude() == pytest.approx(2.0 * 1.5)
    assert cam.handle_key("a", 0, 0, 1.5)
    assert_close(cam.eye, start)


def test_unknown_key_not_handled():
    cam = make_camera()
    start = cam.eye
    assert cam.handle_key("x", 0, 0) is False
    assert cam.eye == start


def test_movement_can_be_disabled():
    cam = make_camera()
    start = cam.eye
    cam.toggle_movement()
    assert cam.handle_key("w", 0, 0) is False
    assert cam.eye == start
    cam.toggle_movement()
    assert cam.handle_key("w", 0, 0) is True


def test_analog_move_combines_axes():
    cam = make_camera()
    start = cam.eye
    cam.handle_analog_move(0.0, 3.0)
    assert_close(cam.eye, start + cam.direction * 3.0)
    cam.handle_analog_move(1.0, 0.0)
    sideways = cam.eye - (start + cam.direction * 3.0)
    assert sideways.dot(cam.direction) == pytest.approx(0.0)
    assert sideways.magnitude() == pytest.approx(1.0)


def test_mouse_motion_without_movement_keeps_direction():
    cam = make_camera()
    cam.handle_mouse(0, 0, 40, 20)
    cam.handle_motion(40, 20)
    assert_close(cam.direction, Vector3(0.0, 0.0, 1.0))


def test_horizontal_motion_keeps_unit_length_and_height():
    cam = Camera(Vector3(), Vector3(0.0, -0.65, 1.0))
    before = cam.direction
    cam.handle_motion(37, 0)
    assert cam.direction.magnitude() == pytest.approx(1.0)
    assert cam.direction.y == pytest.approx(before.y)
    assert cam.mouse_x == 37


def test_motion_round_trip_restores_direction():
    cam = make_camera()
    cam.handle_motion(90, 0)
    assert cam.direction.z == pytest.approx(0.0, abs=1e-9)
    cam.handle_motion(0, 0)
    assert_close(cam.direction, Vector3(0.0, 0.0, 1.0))


def test_vertical_motion_tilts_view():
    cam = make_camera()
    cam.handle_motion(0, 10)
    assert cam.direction.y != pytest.approx(0.0)
    assert cam.direction.magnitude() == pytest.approx(1.0)
    assert cam.mouse_y == 10