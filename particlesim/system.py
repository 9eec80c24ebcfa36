"""The particle system: templates, emitters, force fields and the demos built on them."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum

from .forces import (
    FloatGenerator,
    ForceGenerator,
    GravityForceGenerator,
    ParticleForceRegistry,
    SpringForceGenerator,
    UniformWindGenerator,
    WhirlWindGenerator,
)
from .generators import (
    CircleParticleGenerator,
    FireWork,
    GaussianParticleGenerator,
    ParticleGenerator,
    UniformParticleGenerator,
)
from .particle import Color, Particle
from .player import PlayerController
from .rigid import RigidBody, RigidBodyForceRegistry
from .vector import Vector3

logger = logging.getLogger(__name__)

RED: Color = (1.0, 0.0, 0.0, 1.0)
GREEN: Color = (0.0, 1.0, 0.0, 1.0)
BLUE: Color = (0.0, 0.0, 1.0, 1.0)
CYAN: Color = (0.0, 1.0, 1.0, 1.0)
ORANGE: Color = (1.0, 0.5, 0.0, 1.0)
PALE_CYAN: Color = (0.5, 1.0, 1.0, 1.0)
WHITE: Color = (1.0, 1.0, 1.0, 1.0)
MAGENTA: Color = (1.0, 0.0, 1.0, 1.0)

ORIGIN = Vector3()
WATER_PARTICLES = 10
LONG_LIFE = 99999.0


class GeneratorKind(Enum):
    """The emitters that ``create_particle_generator`` knows how to build."""

    FOUNTAIN = "fuente"
    FIREWORK = "firework"
    SNOW = "snow"
    LASER = "laser"


@dataclass(frozen=True)
class _GaussianSettings:
    pos_offset: Vector3
    vel_offset: Vector3
    count: int
    random_vel: float
    random_pos: float


@dataclass(frozen=True)
class _UniformSettings:
    pos_width: Vector3
    vel_width: Vector3
    count: int
    random_vel: float
    random_pos: float


_FIREWORK_LAUNCHES: dict[str, tuple[Vector3, float, tuple[str, ...], Color]] = {
    "E": (Vector3(0.0, 10.0, 0.0), 3.0, ("gen1",), RED),
    "R": (Vector3(0.0, 15.0, 0.0), 3.0, ("gen2",), BLUE),
    "T": (Vector3(0.0, 15.0, 0.0), 3.0, ("gen3",), BLUE),
    "Y": (Vector3(0.0, 30.0, 0.0), 3.0, ("gen5",), CYAN),
    "U": (Vector3(0.0, 30.0, 10.0), 1.0, ("gen6",), PALE_CYAN),
    "I": (Vector3(0.0, 40.0, 0.0), 1.0, ("gen3", "gen1"), PALE_CYAN),
}

_SLINKY_COLORS: tuple[Color, ...] = (
    (1.0, 0.0, 0.0, 1.0),
    (0.8, 0.0, 0.2, 1.0),
    (0.5, 0.0, 0.5, 1.0),
    (0.5, 0.0, 0.5, 1.0),
    (0.2, 0.0, 0.8, 1.0),
    (0.0, 0.0, 1.0, 1.0),
)

# (stiffness, index of the particle pulled toward, index of the particle pushed)
_SLINKY_LINKS: tuple[tuple[float, int, int], ...] = (
    (50.0, 0, 1),
    (45.0, 1, 0),
    (40.0, 1, 2),
    (35.0, 2, 1),
    (30.0, 2, 3),
    (25.0, 3, 2),
    (20.0, 3, 4),
    (15.0, 4, 3),
    (10.0, 4, 5),
    (10.0, 5, 4),
)


def _still(pos: Vector3, size: float, color: Color, damping: float, **kwargs) -> Particle:
    """A long-lived particle at rest with no built-in acceleration."""
    return Particle(pos, Vector3(), size, LONG_LIFE, color, Vector3(), damping, **kwargs)


class ParticleSystem:
    """Owns the live particles, their emitters and the forces acting on them."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()

        self.fountain_template = Particle(
            ORIGIN, ORIGIN, 0.8, 5, CYAN, Vector3(0.0, -2.0, 0.0), 0.99
        )
        self.snow_template = Particle(
            ORIGIN, ORIGIN, 0.6, 5, WHITE, Vector3(0.0, -0.5, 0.0), 0.99
        )
        self.laser_template = Particle(ORIGIN, ORIGIN, 0.05, 2, ORANGE, ORIGIN, 0.99)

        self.fountain_settings = _GaussianSettings(
            Vector3(1.0, 0.0, 1.0), Vector3(3.0, 0.0, 6.0), 4, 1.0, 0.5
        )
        self.snow_settings = _UniformSettings(
            Vector3(1.0, 0.0, 1.0), Vector3(6.0, 6.0, 6.0), 4, 100.0, 100.0
        )
        self.laser_settings = _UniformSettings(
            Vector3(1.0, 0.0, 1.0), Vector3(0.0, 25.0, 0.0), 25, 0.1, 3.0
        )

        self.particles: list[Particle] = []
        self.generators: list[ParticleGenerator] = []
        self.registry = ParticleForceRegistry()

        self.gravity = GravityForceGenerator(Vector3(0.0, -9.8, 0.0))
        self.forces: list[ForceGenerator] = [self.gravity]
        self.wind = UniformWindGenerator(
            1.2, 2, Vector3(0.0, 10.0, 0.0), Vector3(-10.0, -10.0, 0.0), 100
        )
        self.whirlwind = WhirlWindGenerator(2, Vector3(0.0, 10.0, 0.0), 1000)
        self.slow_gravity = GravityForceGenerator(Vector3(0.0, -1.0, 0.0))
        self.hard_gravity: GravityForceGenerator | None = None
        self.float_generator: FloatGenerator | None = None

        self.spring_idle: SpringForceGenerator | None = None
        self.spring1: SpringForceGenerator | None = None
        self.spring2: SpringForceGenerator | None = None

        self.cannon_template = Particle(ORIGIN, ORIGIN, 0.5, 5, RED)
        self.cannon_template.collides_with_player = True
        self.drag_template = Particle(ORIGIN, ORIGIN, 0.75, 20, ORANGE)
        self.drag_template.collides_with_player = True
        self.trail_template = Particle(ORIGIN, ORIGIN, 0.05, 2, ORANGE, ORIGIN, 0.99)

        self.cannon_settings = _GaussianSettings(
            Vector3(), Vector3(10.0, 0.0, 0.0), 10, 2.0, 0.2
        )
        self.drag_settings = _GaussianSettings(
            Vector3(1.0, 0.0, 1.0), Vector3(), 3, 1.0, 7.0
        )
        self.trail_settings = _UniformSettings(Vector3(), Vector3(), 25, 0.1, 0.5)
        self.trail_generator: UniformParticleGenerator | None = None

    # Emitters -------------------------------------------------------------

    def create_particle_generator(
        self, kind: GeneratorKind, pos: Vector3, vel: Vector3
    ) -> None:
        """Replace every emitter with a single one of the given kind."""
        self.generators.clear()
        self.trail_generator = None
        match kind:
            case GeneratorKind.FOUNTAIN:
                s = self.fountain_settings
                self.generators.append(
                    GaussianParticleGenerator(
                        kind.value, self.fountain_template.clone(), s.count, pos, vel,
                        s.pos_offset, s.vel_offset, s.random_vel, s.random_pos, 0.0,
                        rng=self.rng,
                    )
                )
            case GeneratorKind.SNOW | GeneratorKind.LASER:
                s = self.snow_settings if kind is GeneratorKind.SNOW else self.laser_settings
                template = (
                    self.snow_template if kind is GeneratorKind.SNOW else self.laser_template
                )
                self.generators.append(
                    UniformParticleGenerator(
                        kind.value, template.clone(), s.count, pos, vel,
                        s.pos_width, s.vel_width, s.random_vel, s.random_pos,
                        rng=self.rng,
                    )
                )
            case GeneratorKind.FIREWORK:
                pass

    def _firework_generators(self) -> dict[str, ParticleGenerator]:
        rng = self.rng
        o = ORIGIN
        gen1 = CircleParticleGenerator(
            "fireWork1", Particle(o, o, 0.5, 3), 10, o, o, rng=rng
        )
        gen2 = CircleParticleGenerator(
            "fireWork2",
            Particle(o, o, 0.5, 0.2, GREEN, Vector3(0.0, -0.02, 0.0)),
            40, o, o, 0.2, 3, rng=rng,
        )
        gen4 = CircleParticleGenerator(
            "fireWork4",
            Particle(o, o, 0.3, 1, GREEN, Vector3(0.0, -0.3, 0.0)),
            10, o, o, rng=rng,
        )
        gen3 = CircleParticleGenerator(
            "fireWork3",
            FireWork(o, Vector3(0.0, 10.0, 0.0), 0.6, 3, [gen4], RED),
            40, o, o, 4, 1, rng=rng,
        )
        gen5 = CircleParticleGenerator(
            "fireWork5",
            FireWork(o, Vector3(0.0, 20.0, 0.0), 0.5, 1, [gen3], ORANGE),
            10, o, o, 0.2, 3, rng=rng,
        )
        gen7 = UniformParticleGenerator(
            "fireWork7", Particle(o, o, 0.3, 0.65), 6, o, o, o,
            Vector3(0.0, -2.5, 0.0), 10, 0.1, rng=rng,
        )
        gen6 = UniformParticleGenerator(
            "fireWork6",
            FireWork(o, Vector3(0.0, 20.0, 0.0), 0.5, 1.25, [gen7], ORANGE),
            10, o, o, o, o, 10, 0.1, rng=rng,
        )
        return {
            "gen1": gen1, "gen2": gen2, "gen3": gen3, "gen4": gen4,
            "gen5": gen5, "gen6": gen6, "gen7": gen7,
        }

    def create_firework(self, key: str) -> None:
        """Launch the firework bound to ``key`` (E, R, T, Y, U or I) from the origin."""
        launch = _FIREWORK_LAUNCHES.get(key)
        if launch is None:
            return
        vel, ttl, names, color = launch
        gens = self._firework_generators()
        self.particles.append(
            FireWork(ORIGIN, vel, 1, ttl, [gens[n] for n in names], color)
        )

    def launch_win_fireworks(self, z: float) -> None:
        """Fire the celebration volley just past depth ``z``."""
        gens = self._firework_generators()
        big = [gens["gen3"], gens["gen1"]]
        self.particles.extend(
            [
                FireWork(Vector3(-20.0, 0.0, z + 5.0), Vector3(0.0, 40.0, 0.0), 1, 1, big, PALE_CYAN),
                FireWork(Vector3(20.0, 0.0, z + 5.0), Vector3(0.0, 40.0, 0.0), 1, 1, big, PALE_CYAN),
                FireWork(Vector3(-15.0, 0.0, z + 30.0), Vector3(0.0, 30.0, 0.0), 1, 3, [gens["gen2"]], CYAN),
                FireWork(Vector3(15.0, 0.0, z + 30.0), Vector3(0.0, 30.0, 0.0), 1, 3, [gens["gen2"]], CYAN),
            ]
        )

    # Force demos ----------------------------------------------------------

    def create_physics_particle(self, key: str) -> Particle:
        """Spawn the demo particle for ``key`` (z, x, c or v) and return it."""
        match key:
            case "z":
                p = Particle(Vector3(0.0, 10.0, 0.0), ORIGIN, 2, 20, MAGENTA, ORIGIN, 0.2)
                self.registry.add(self.gravity, p)
            case "x":
                p = Particle(
                    Vector3(0.0, 10.0, 0.0), Vector3(50.0, 50.0, 0.0), 2, 20, WHITE, ORIGIN, 0.2
                )
                self.registry.add(self.wind, p)
            case "c":
                p = Particle(Vector3(-10.0, 10.0, 0.0), ORIGIN, 1, 20, BLUE, ORIGIN, 0.2)
                self.registry.add(self.whirlwind, p)
            case "v":
                p = Particle(Vector3(0.0, 10.0, 0.0), ORIGIN, 0.5, 15, RED, ORIGIN, 0.2)
                p.mass = self.rng.randrange(100) + 1
                logger.debug("particle mass %s", p.mass)
                p.move(*(self.rng.uniform(-20.0, 20.0) for _ in range(3)))
            case _:
                raise ValueError(f"no physics particle bound to key {key!r}")
        self.particles.append(p)
        return p

    def control_force_generators(self, key: str) -> None:
        """Toggle force fields, start demos or stiffen springs by key."""
        match key:
            case "1":
                self.gravity.toggle()
            case "2":
                self.wind.toggle()
            case "3":
                self.whirlwind.toggle()
            case "5":
                self.spring_demo()
            case "6":
                self.spring_demo_two_particles()
            case "7":
                self.slinky_demo()
            case "8":
                self.float_demo()
            case "9":
                self.slow_gravity.toggle()
            case "o":
                if self.spring_idle is None:
                    raise RuntimeError("no anchored spring has been created")
                self.spring_idle.k += 10
            case "p":
                if self.spring1 is None or self.spring2 is None:
                    raise RuntimeError("no spring pair has been created")
                self.spring1.k += 1
                self.spring2.k += 1

    def spring_demo(self) -> None:
        """One particle hanging from an anchored spring under light gravity."""
        p = _still(Vector3(0.0, 10.0, 0.0), 1, RED, 0.99, mass=2, implicit=False)
        self.spring_idle = SpringForceGenerator.anchored(5, 15, Vector3(0.0, 10.0, 0.0))
        self.registry.add(self.spring_idle, p)
        self.registry.add(self.slow_gravity, p)
        self.particles.append(p)

    def spring_demo_two_particles(self) -> None:
        """Two particles joined by a pair of springs."""
        p1 = _still(Vector3(20.0, 25.0, 0.0), 1, RED, 0.99, mass=2, implicit=False)
        p2 = _still(Vector3(-20.0, 25.0, 0.0), 1, BLUE, 0.99, mass=2, implicit=False)
        self.spring1 = SpringForceGenerator(1, 21, p2)
        self.spring2 = SpringForceGenerator(1, 21, p1)
        self.registry.add(self.spring1, p1)
        self.registry.add(self.spring2, p2)
        self.registry.add(self.slow_gravity, p1)
        self.registry.add(self.slow_gravity, p2)
        self.particles.extend([p1, p2])

    def slinky_demo(self) -> None:
        """A chain of six particles hanging from an anchor, linked by springs."""
        length = 6
        self.slow_gravity.gravity = Vector3(0.0, -16.0, 0.0)
        base = SpringForceGenerator.anchored(55, length, Vector3(0.0, 70.0, 0.0))
        chain = [
            _still(Vector3(0.0, 65.0 - 5.0 * i, 0.0), 1, color, 0.99, mass=2, implicit=False)
            for i, color in enumerate(_SLINKY_COLORS)
        ]
        self.particles.extend(chain)
        for p in chain:
            self.registry.add(self.slow_gravity, p)
        self.registry.add(base, chain[0])
        for k, other, target in _SLINKY_LINKS:
            self.registry.add(SpringForceGenerator(k, length, chain[other]), chain[target])

    def float_demo(self) -> None:
        """Drop a random cube into the shared pool of liquid."""
        if self.float_generator is None:
            self.float_generator = FloatGenerator(1, 1, 1000)
            self.hard_gravity = GravityForceGenerator(Vector3(0.0, -9.8, 0.0))
            self.hard_gravity.toggle()
        rng = self.rng
        side = rng.uniform(0.75, 3.0)
        pos = Vector3(rng.uniform(-45.0, 45.0), 5.0, rng.uniform(-45.0, 45.0))
        p = _still(pos, side, (1.0, 0.0, 1.0 / side, 1.0), 0.35, mass=20)
        p.volume = side ** 3
        self.particles.append(p)
        self.registry.add(self.float_generator, p)
        assert self.hard_gravity is not None
        self.registry.add(self.hard_gravity, p)

    # Simulation -----------------------------------------------------------

    def update(self, t: float) -> None:
        """Apply forces, integrate, burst expired fireworks and run the emitters."""
        self.registry.update_forces(t)

        survivors: list[Particle] = []
        pending = list(self.particles)
        for particle in pending:
            if particle.integrate(t):
                survivors.append(particle)
                continue
            if isinstance(particle, FireWork):
                pending.extend(particle.explode())
            self.registry.remove_particle(particle)
        self.particles = survivors

        for generator in self.generators:
            self.particles.extend(generator.generate_particles(t))

    # Level zones ----------------------------------------------------------

    def create_particle_cannon(self, pos: Vector3, direction: int) -> None:
        """An emitter firing bursts of dangerous balls along x every few seconds."""
        s = self.cannon_settings
        vel = Vector3(direction * 7.0, 3.0, 0.0)
        self.generators.append(
            GaussianParticleGenerator(
                "cannon", self.cannon_template.clone(), s.count, pos, vel,
                s.pos_offset, s.vel_offset, s.random_vel, s.random_pos, 3.0,
                rng=self.rng,
            )
        )

    def create_drag_zone(self, pos: Vector3, direction: int) -> None:
        """An emitter dropping dangerous particles from above ``pos``."""
        s = self.drag_settings
        falling = GravityForceGenerator(Vector3(0.0, -2.0, 0.0))
        generator = GaussianParticleGenerator(
            "dragZone", self.drag_template.clone(), s.count,
            Vector3(pos.x, pos.y + 30.0, pos.z), Vector3(),
            s.pos_offset, s.vel_offset, s.random_vel, s.random_pos, 2.0,
            self.registry, [falling], rng=self.rng,
        )
        generator.set_position_spread(2, 0, 2)
        self.generators.append(generator)

    def create_water_zone(
        self,
        pos: Vector3,
        player_body: RigidBody,
        rigid_registry: RigidBodyForceRegistry,
    ) -> None:
        """A pool at ``pos`` that floats the player and a handful of cubes."""
        self.float_generator = FloatGenerator(1, 1, 1000, pos)
        self.hard_gravity = GravityForceGenerator(Vector3(0.0, -9.8, 0.0))
        rigid_registry.add(self.float_generator, player_body)

        rng = self.rng
        for _ in range(WATER_PARTICLES):
            side = rng.uniform(0.5, 1.0)
            p_pos = Vector3(
                rng.uniform(-20.0, 20.0) + pos.x,
                pos.y + 10.0,
                pos.z + rng.uniform(-10.0, 10.0),
            )
            p = _still(
                p_pos, side, (1.0, 0.0, 1.0 / side, 1.0), 0.35,
                mass=20, collides_with_player=True,
            )
            p.volume = side ** 3
            self.particles.append(p)
            self.registry.add(self.float_generator, p)
            self.registry.add(self.hard_gravity, p)

    def create_bouncy_zone(self, pos: Vector3) -> None:
        """Three spring-driven blocks sweeping across the path."""
        y = pos.y + 2.0
        lanes = (
            (Vector3(pos.x - 15.0, y, pos.z - 10.0), Vector3(pos.x + 15.0, y, pos.z - 10.0)),
            (Vector3(pos.x + 15.0, y, pos.z), Vector3(pos.x - 15.0, y, pos.z)),
            (Vector3(pos.x - 15.0, y, pos.z + 10.0), Vector3(pos.x + 15.0, y, pos.z + 10.0)),
        )
        for start, anchor in lanes:
            p = _still(
                start, 1, RED, 0.99, mass=2, implicit=False, collides_with_player=True
            )
            self.spring_idle = SpringForceGenerator.anchored(5, 10, anchor)
            self.registry.add(self.spring_idle, p)
            self.particles.append(p)

    def update_player_trail(self, pos: Vector3) -> None:
        """Keep a trail emitter following the player, creating it on first use."""
        if self.trail_generator is None:
            s = self.trail_settings
            self.trail_generator = UniformParticleGenerator(
                "trail", self.trail_template.clone(), s.count, pos, Vector3(),
                s.pos_width, s.vel_width, s.random_vel, s.random_pos, rng=self.rng,
            )
            self.generators.append(self.trail_generator)
        self.trail_generator.move_to(pos)

    def check_player_collision(self, player: PlayerController) -> bool:
        """Whether any dangerous particle touches the player."""
        return any(
            p.collides_with_player and player.collides_with(p.pos, p.size, p.sphere)
            for p in self.particles
        )