import math

import pytest

from particlesim.particle import CannonBall, Particle, Projectile
from particlesim.vector import Vector3


def still_particle(**kwargs):
    params = dict(acc=Vector3(), damping=1.0)
    params.update(kwargs)
    return Particle(Vector3(), Vector3(), 1.0, 10.0, **params)


def test_inverse_mass_tracks_mass():
    p = still_particle(mass=8.0)
    assert p.inverse_mass * p.mass == pytest.approx(1.0)
    p.mass = 3.0
    assert p.inverse_mass * p.mass == pytest.approx(1.0)


def test_constant_velocity_motion():
    p = Particle(Vector3(), Vector3(1.0, 0.0, 0.0), 1.0, 10.0, acc=Vector3(), damping=1.0)
    assert p.integrate(0.5) is True
    assert p.pos == Vector3(0.5, 0.0, 0.0)
    assert p.vel == Vector3(1.0, 0.0, 0.0)


def test_implicit_uses_old_velocity_for_position():
    acc = Vector3(0.0, -2.0, 0.0)
    p = still_particle(acc=acc, implicit=True)
    p.integrate(1.0)
    assert p.pos == Vector3()
    assert p.vel == acc


def test_explicit_uses_new_velocity_for_position():
    acc = Vector3(0.0, -2.0, 0.0)
    p = still_particle(acc=acc, implicit=False)
    p.integrate(1.0)
    assert p.vel == acc
    assert p.pos == p.vel


def test_force_is_applied_and_cleared():
    p = still_particle(mass=2.0)
    p.add_force(Vector3(4.0, 0.0, 0.0))
    p.integrate(1.0)
    assert p.vel == Vector3(2.0, 0.0, 0.0)
    assert p.force == Vector3()


def test_forces_accumulate_until_cleared():
    p = still_particle()
    f = Vector3(1.0, 1.0, 0.0)
    p.add_force(f)
    p.add_force(f)
    assert p.force == f * 2
    p.clear_force()
    assert p.force == Vector3()


def test_damping_scales_velocity():
    start = Vector3(3.0, 0.0, 0.0)
    p = Particle(Vector3(), start, 1.0, 10.0, acc=Vector3(), damping=0.5)
    p.integrate(1.0)
    assert p.vel == start * 0.5


def test_lifetime_expiry():
    p = Particle(Vector3(), Vector3(), 1.0, 1.0, acc=Vector3())
    assert p.integrate(0.6) is True
    assert p.integrate(0.6) is False


@pytest.mark.parametrize(
    "pos",
    [
        Vector3(0.0, 50.5, 0.0),
        Vector3(0.0, -10.5, 0.0),
        Vector3(50.5, 0.0, 0.0),
        Vector3(-50.5, 0.0, 0.0),
    ],
)
def test_leaving_region_ends_particle(pos):
    p = Particle(pos, Vector3(), 1.0, 10.0)
    assert p.integrate(0.01) is False


def test_inside_region_survives():
    p = Particle(Vector3(49.0, 49.0, 0.0), Vector3(), 1.0, 10.0)
    assert p.integrate(0.01) is True


def test_box_is_static_and_square():
    start = Vector3(1.0, 2.0, 3.0)
    b = Particle.box(start, 2.0, (0.0, 0.0, 1.0, 1.0), True)
    b.add_force(Vector3(100.0, 0.0, 0.0))
    for _ in range(5):
        assert b.integrate(1.0) is True
    assert b.pos == start
    assert b.inverse_mass == 0.0
    assert b.sphere is False
    assert b.collides_with_player is True
    assert b.time_to_live == math.inf


def test_clone_is_fresh_and_independent():
    p = Particle(Vector3(1.0, 1.0, 1.0), Vector3(0.0, 1.0, 0.0), 0.5, 5.0, mass=7.0)
    p.integrate(0.1)
    p.add_force(Vector3(1.0, 0.0, 0.0))
    c = p.clone()
    assert c is not p
    assert c.age == 0.0
    assert c.force == Vector3()
    assert (c.pos, c.vel, c.mass, c.size) == (p.pos, p.vel, p.mass, p.size)
    c.move(1.0, 0.0, 0.0)
    assert c.pos != p.pos


def test_move_offsets_position():
    p = Particle(Vector3(1.0, 2.0, 3.0), Vector3(), 1.0, 1.0)
    p.move(1.0, -1.0, 2.0)
    assert p.pos == Vector3(1.0, 2.0, 3.0) + Vector3(1.0, -1.0, 2.0)


def test_projectile_ignores_limits():
    pr = Projectile(Vector3(0.0, 100.0, 0.0), 5.0, 1.0, 0.1, Vector3(), 1.0, 2.0)
    assert pr.integrate(1.0) is True
    assert pr.integrate(1.0) is True


def test_projectile_acceleration_scaled_by_mass():
    pr = Projectile(Vector3(), 5.0, 1.0, 10.0, Vector3(0.0, -1.0, 0.0), 1.0, 2.0)
    assert pr.vel == Vector3()
    pr.integrate(1.0)
    assert pr.vel == Vector3(0.0, -2.0, 0.0)
    assert pr.pos == Vector3()


def test_cannonball_launch_velocity():
    speed = 10.0
    ball = CannonBall(Vector3(), speed, 1.0, 5.0, Vector3(), 0.999, 1.0, Vector3(1.0, 0.0, 0.0))
    assert ball.vel == Vector3(speed, speed, 0.0)


def test_cannonball_clone_keeps_type_and_state():
    ball = CannonBall(Vector3(), 3.0, 1.0, 5.0, Vector3(), 1.0, 1.0, Vector3(0.0, 0.0, 1.0))
    ball.integrate(1.0)
    c = ball.clone()
    assert isinstance(c, CannonBall)
    assert c is not ball
    assert (c.pos, c.vel) == (ball.pos, ball.vel)
    c.integrate(1.0)
    assert c.pos != ball.pos