"""Particle emitters and fireworks that burst into new particles."""

from __future__ import annotations

import random
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Iterable

from .particle import DEFAULT_ACCELERATION, WHITE, Color, Particle
from .vector import Vector3

if TYPE_CHECKING:
    from .forces import ForceGenerator, ParticleForceRegistry


class ParticleGenerator(ABC):
    """Emits batches of copies of a model particle at a fixed interval."""

    def __init__(
        self,
        name: str,
        model: Particle,
        count: int,
        pos: Vector3,
        vel: Vector3,
        random_vel: float = 1.0,
        random_pos: float = 1.0,
        interval: float = 0.0,
        rng: random.Random | None = None,
    ) -> None:
        self.name = name
        self.model = model
        self.count = count
        self.random_vel = random_vel
        self.random_pos = random_pos
        self.interval = interval
        self.rng = rng if rng is not None else random.Random()
        model.pos = pos
        model.vel = vel
        self.last_generate = -interval
        self.current_time = 0.0

    def _batch_due(self, t: float) -> bool:
        """Advance the clock by ``t`` and report whether a batch is due."""
        self.current_time += t
        if self.interval + self.last_generate <= self.current_time:
            self.last_generate = self.current_time
            return True
        return False

    @abstractmethod
    def generate_particles(self, t: float) -> list[Particle]:
        """Advance by ``t`` seconds and return any newly emitted particles."""

    def move_to(self, pos: Vector3) -> None:
        """Place the emitter, and so every future particle, at ``pos``."""
        self.model.pos = pos


class GaussianParticleGenerator(ParticleGenerator):
    """Emits particles normally scattered around the model's position and velocity."""

    def __init__(
        self,
        name: str,
        model: Particle,
        count: int,
        pos: Vector3,
        vel: Vector3,
        pos_offset: Vector3,
        vel_offset: Vector3,
        random_vel: float,
        random_pos: float,
        interval: float,
        registry: ParticleForceRegistry | None = None,
        forces: Iterable[ForceGenerator] = (),
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(
            name, model, count, pos, vel, random_vel, random_pos, interval, rng
        )
        self.pos_offset = pos_offset
        self.vel_offset = vel_offset
        self.forces = list(forces)
        if self.forces and registry is None:
            raise ValueError("forces need a registry to be attached to")
        self.registry = registry
        self.position_spread = Vector3(1.0, 1.0, 1.0)

    def set_position_spread(self, x: float, y: float, z: float) -> None:
        """Scale the random position scatter separately along each axis."""
        self.position_spread = Vector3(x, y, z)

    def enable_player_collisions(self) -> None:
        self.model.collides_with_player = True

    def generate_particles(self, t: float) -> list[Particle]:
        if not self._batch_due(t):
            return []
        rng = self.rng
        gauss_pos = lambda: rng.gauss(0.0, self.random_pos)  # noqa: E731
        gauss_vel = lambda: rng.gauss(0.0, self.random_vel)  # noqa: E731
        direction = 1.0 if self.model.pos.x < 0 else -1.0
        spread, po, vo = self.position_spread, self.pos_offset, self.vel_offset
        particles: list[Particle] = []
        for _ in range(self.count):
            p = self.model.clone()
            p.pos = p.pos + Vector3(
                po.x + gauss_pos() * spread.x,
                po.y + gauss_pos() * spread.y,
                po.z + gauss_pos() * spread.z,
            )
            p.vel = p.vel + Vector3(
                direction * vo.x + gauss_vel(),
                vo.y + gauss_vel(),
                vo.z + gauss_vel(),
            )
            p.mass = rng.randrange(20) + 10
            if self.registry is not None:
                for force in self.forces:
                    self.registry.add(force, p)
            particles.append(p)
        particles.reverse()
        return particles


class UniformParticleGenerator(ParticleGenerator):
    """Emits particles uniformly scattered above fixed position and velocity widths."""

    def __init__(
        self,
        name: str,
        model: Particle,
        count: int,
        pos: Vector3,
        vel: Vector3,
        pos_width: Vector3,
        vel_width: Vector3,
        random_vel: float,
        random_pos: float,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(
            name, model, count, pos, vel, random_vel, random_pos, 0.0, rng
        )
        self.pos_width = pos_width
        self.vel_width = vel_width

    def generate_particles(self, t: float) -> list[Particle]:
        if not self._batch_due(t):
            return []
        rng = self.rng
        uni_pos = lambda: rng.uniform(0.0, self.random_pos)  # noqa: E731
        uni_vel = lambda: rng.uniform(0.0, self.random_vel)  # noqa: E731
        pw, vw = self.pos_width, self.vel_width
        particles: list[Particle] = []
        for _ in range(self.count):
            p = self.model.clone()
            p.pos = p.pos + Vector3(pw.x + uni_pos(), pw.y + uni_pos(), pw.z + uni_pos())
            p.vel = p.vel + Vector3(vw.x + uni_vel(), vw.y + uni_vel(), vw.z + uni_vel())
            particles.append(p)
        particles.reverse()
        return particles


class CircleParticleGenerator(GaussianParticleGenerator):
    """A Gaussian burst centred on the emitter, emitting on every call."""

    def __init__(
        self,
        name: str,
        model: Particle,
        count: int,
        pos: Vector3,
        vel: Vector3,
        random_vel: float = 5.0,
        random_pos: float = 0.1,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(
            name,
            model,
            count,
            pos,
            vel,
            Vector3(),
            Vector3(),
            random_vel,
            random_pos,
            0.0,
            rng=rng,
        )


class FireWork(Particle):
    """A particle that, when it expires, bursts using its generators."""

    def __init__(
        self,
        pos: Vector3,
        vel: Vector3,
        size: float,
        time_to_live: float,
        generators: Iterable[ParticleGenerator],
        color: Color = WHITE,
        acc: Vector3 = DEFAULT_ACCELERATION,
        damping: float = 0.999,
    ) -> None:
        super().__init__(pos, vel, size, time_to_live, color, acc, damping)
        self.generators = list(generators)

    def explode(self) -> list[Particle]:
        """Move each generator to this firework and collect one batch from each."""
        particles: list[Particle] = []
        for generator in self.generators:
            generator.move_to(self.pos)
            particles.extend(generator.generate_particles(0.0))
        return particles

    def clone(self) -> FireWork:
        return FireWork(
            self.pos,
            self.vel,
            self.size,
            self.time_to_live,
            self.generators,
            self.color,
            self.acc,
            self.damping,
        )