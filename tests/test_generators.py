import random

import pytest

from particlesim.forces import GravityForceGenerator, ParticleForceRegistry
from particlesim.generators import (
    CircleParticleGenerator,
    FireWork,
    GaussianParticleGenerator,
    UniformParticleGenerator,
)
from particlesim.particle import Particle
from particlesim.vector import Vector3


def make_model():
    return Particle(Vector3(), Vector3(), 0.5, 5.0)


def test_uniform_without_randomness_is_exact():
    gen = UniformParticleGenerator(
        "u", make_model(), 4, Vector3(1, 2, 3), Vector3(0, 1, 0),
        Vector3(1, 0, 1), Vector3(0, 5, 0), 0.0, 0.0, rng=random.Random(1),
    )
    particles = gen.generate_particles(0.0)
    assert len(particles) == 4
    for p in particles:
        assert p.pos == Vector3(2, 2, 4)
        assert p.vel == Vector3(0, 6, 0)


def test_uniform_scatter_stays_within_width():
    gen = UniformParticleGenerator(
        "u", make_model(), 50, Vector3(), Vector3(),
        Vector3(), Vector3(), 2.0, 3.0, rng=random.Random(7),
    )
    for p in gen.generate_particles(0.0):
        assert all(0.0 <= c <= 3.0 for c in p.pos)
        assert all(0.0 <= c <= 2.0 for c in p.vel)


def test_gaussian_direction_and_mass():
    gen = GaussianParticleGenerator(
        "g", make_model(), 5, Vector3(3, 0, 0), Vector3(),
        Vector3(1, 0, 1), Vector3(10, 0, 0), 0.0, 0.0, 0.0,
        rng=random.Random(3),
    )
    particles = gen.generate_particles(0.0)
    assert len(particles) == 5
    for p in particles:
        assert p.pos == Vector3(4, 0, 1)
        assert p.vel == Vector3(-10, 0, 0)
        assert 10 <= p.mass <= 29


def test_gaussian_direction_positive_for_negative_x():
    gen = GaussianParticleGenerator(
        "g", make_model(), 2, Vector3(-3, 0, 0), Vector3(),
        Vector3(), Vector3(10, 0, 0), 0.0, 0.0, 0.0,
    )
    assert all(p.vel.x == 10 for p in gen.generate_particles(0.0))


def test_gaussian_interval_timing():
    gen = GaussianParticleGenerator(
        "g", make_model(), 3, Vector3(), Vector3(),
        Vector3(), Vector3(), 1.0, 1.0, 2.0,
    )
    assert len(gen.generate_particles(0.0)) == 3
    assert gen.generate_particles(1.0) == []
    assert len(gen.generate_particles(1.0)) == 3


def test_gaussian_registers_forces():
    registry = ParticleForceRegistry()
    forces = [GravityForceGenerator(Vector3(0, -1, 0)), GravityForceGenerator(Vector3(0, -2, 0))]
    gen = GaussianParticleGenerator(
        "g", make_model(), 3, Vector3(), Vector3(),
        Vector3(), Vector3(), 1.0, 1.0, 0.0, registry, forces,
    )
    particles = gen.generate_particles(0.0)
    assert len(registry) == len(particles) * len(forces)
    registered = {id(p) for _, p in registry}
    assert registered == {id(p) for p in particles}


def test_gaussian_forces_without_registry_rejected():
    with pytest.raises(ValueError):
        GaussianParticleGenerator(
            "g", make_model(), 1, Vector3(), Vector3(), Vector3(), Vector3(),
            1.0, 1.0, 0.0, None, [GravityForceGenerator(Vector3())],
        )


def test_position_spread_zero_removes_scatter():
    gen = GaussianParticleGenerator(
        "g", make_model(), 10, Vector3(5, 6, 7), Vector3(),
        Vector3(), Vector3(), 0.0, 50.0, 0.0, rng=random.Random(2),
    )
    gen.set_position_spread(0, 0, 0)
    assert all(p.pos == Vector3(5, 6, 7) for p in gen.generate_particles(0.0))


def test_enable_player_collisions():
    gen = GaussianParticleGenerator(
        "g", make_model(), 2, Vector3(), Vector3(),
        Vector3(), Vector3(), 1.0, 1.0, 0.0,
    )
    gen.enable_player_collisions()
    assert all(p.collides_with_player for p in gen.generate_particles(0.0))


def test_circle_fires_every_call_and_centres_on_emitter():
    gen = CircleParticleGenerator("c", make_model(), 6, Vector3(1, 1, 1), Vector3(), 0.0, 0.0)
    assert len(gen.generate_particles(0.0)) == 6
    again = gen.generate_particles(0.0)
    assert len(again) == 6
    assert all(p.pos == Vector3(1, 1, 1) for p in again)


def test_move_to_changes_emission_point():
    gen = UniformParticleGenerator(
        "u", make_model(), 1, Vector3(), Vector3(),
        Vector3(), Vector3(), 0.0, 0.0,
    )
    gen.move_to(Vector3(9, 8, 7))
    assert gen.generate_particles(0.0)[0].pos == Vector3(9, 8, 7)


def test_firework_explodes_at_its_position():
    gen = CircleParticleGenerator("c", make_model(), 4, Vector3(), Vector3(), 0.0, 0.0)
    fw = FireWork(Vector3(2, 3, 4), Vector3(0, 10, 0), 1.0, 3.0, [gen, gen])
    burst = fw.explode()
    assert len(burst) == 8
    assert all(p.pos == Vector3(2, 3, 4) for p in burst)


def test_firework_clone_shares_generators():
    gen = CircleParticleGenerator("c", make_model(), 1, Vector3(), Vector3())
    fw = FireWork(Vector3(1, 0, 0), Vector3(0, 5, 0), 0.5, 2.0, [gen], (1, 0, 0, 1))
    fw.mass = 3.0
    copy = fw.clone()
    assert isinstance(copy, FireWork)
    assert copy is not fw
    assert copy.generators[0] is gen
    assert copy.pos == fw.pos and copy.vel == fw.vel
    assert copy.color == fw.color
    assert copy.mass == 20.0