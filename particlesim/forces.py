"""Force generators acting on particles and rigid bodies, and their registry."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Iterator

from .particle import WHITE, Particle
from .rigid import RigidBody
from .vector import Vector3

logger = logging.getLogger(__name__)

MASS_EPSILON = 1e-10
GRAVITY = 9.8


def _has_finite_mass(particle: Particle) -> bool:
    return particle.inverse_mass >= MASS_EPSILON


class ForceGenerator(ABC):
    """Base class for anything that pushes particles or rigid bodies."""

    def __init__(self, name: str = "") -> None:
        self.name = name
        self.enabled = True

    @abstractmethod
    def update_force(self, particle: Particle, t: float) -> None:
        """Accumulate this generator's force on ``particle``."""

    def update_rigid(self, body: RigidBody, t: float) -> None:
        """Accumulate this generator's force on a rigid body; none by default."""

    def toggle(self) -> None:
        self.enabled = not self.enabled


class GravityForceGenerator(ForceGenerator):
    """Constant acceleration scaled by each particle's mass."""

    def __init__(self, gravity: Vector3) -> None:
        super().__init__()
        self.gravity = gravity

    def update_force(self, particle: Particle, t: float) -> None:
        if not self.enabled or not _has_finite_mass(particle):
            return
        particle.add_force(self.gravity * particle.mass)


def _drag(relative_velocity: Vector3, k1: float, k2: float) -> Vector3:
    unit, speed = relative_velocity.unit_and_length()
    coefficient = k1 * speed + k2 * speed * speed
    return -unit * coefficient


class DragGenerator(ForceGenerator):
    """Linear plus quadratic drag opposing a particle's velocity."""

    def __init__(self, k1: float = 0.0, k2: float = 0.0) -> None:
        super().__init__()
        self.k1 = k1
        self.k2 = k2

    def update_force(self, particle: Particle, t: float) -> None:
        if not self.enabled or not _has_finite_mass(particle):
            return
        force = _drag(particle.vel, self.k1, self.k2)
        logger.debug("drag force %s", force)
        particle.add_force(force)


class UniformWindGenerator(DragGenerator):
    """Drag relative to a constant air flow inside a cubic zone."""

    def __init__(
        self, k1: float, k2: float, point: Vector3, air: Vector3, extent: int
    ) -> None:
        super().__init__(k1, k2)
        self.point = point
        self.air = air
        # Zone bounds are whole numbers, truncated toward zero.
        self.x_min = int(point.x - extent)
        self.x_max = int(point.x + extent)
        self.y_min = int(point.y - extent)
        self.y_max = int(point.y + extent)
        self.z_min = int(point.z - extent)
        self.z_max = int(point.z + extent)

    def out_of_zone(self, pos: Vector3) -> bool:
        return (
            pos.x < self.x_min
            or pos.x > self.x_max
            or pos.y < self.y_min
            or pos.y > self.y_max
            or pos.z < self.z_min
            or pos.z > self.z_max
        )

    def _applies_to(self, particle: Particle) -> bool:
        return (
            self.enabled
            and _has_finite_mass(particle)
            and not self.out_of_zone(particle.pos)
        )

    def update_force(self, particle: Particle, t: float) -> None:
        if not self._applies_to(particle):
            return
        particle.add_force(_drag(particle.vel - self.air, self.k1, self.k2))


class WhirlWindGenerator(UniformWindGenerator):
    """A rising vortex around ``point``; ``k`` scales both flow and drag."""

    def __init__(
        self,
        k: float,
        point: Vector3,
        extent: int,
        air: Vector3 = Vector3(),
    ) -> None:
        super().__init__(k, k, point, air, extent)

    def update_force(self, particle: Particle, t: float) -> None:
        if not self._applies_to(particle):
            return
        d = particle.pos - self.point
        air = self.k1 * Vector3(
            -d.z - 0.1 * d.x,
            20.0 - d.y,
            d.x - 0.1 * d.z,
        )
        particle.add_force(_drag(particle.vel - air, self.k1, self.k1))


class SpringForceGenerator(ForceGenerator):
    """Hooke spring pulling a particle toward another particle."""

    def __init__(
        self,
        k: float,
        resting_length: float,
        other: Particle,
        min_length: float = 0.25,
    ) -> None:
        super().__init__()
        self.k = k
        self.resting_length = resting_length
        self.other = other
        self.min_length = min_length

    @classmethod
    def anchored(
        cls,
        k: float,
        resting_length: float,
        anchor: Vector3,
        min_length: float = 0.25,
    ) -> SpringForceGenerator:
        """A spring attached to a fixed unit cube placed at ``anchor``."""
        return cls(k, resting_length, Particle.box(anchor, 1.0, WHITE), min_length)

    def update_force(self, particle: Particle, t: float) -> None:
        unit, length = (self.other.pos - particle.pos).unit_and_length()
        stretch = length - self.resting_length
        particle.add_force(unit * (stretch * self.k))


class FloatGenerator(ForceGenerator):
    """Buoyancy from a liquid whose surface sits at ``surface``."""

    x_extent = 30.0
    z_extent = 50.0

    def __init__(
        self,
        height: float,
        volume: float,
        liquid_density: float,
        surface: Vector3 = Vector3(),
    ) -> None:
        super().__init__()
        self.height = height
        self.volume = volume
        self.liquid_density = liquid_density
        self.surface = surface

    def _immersed(self, h: float) -> float:
        h0 = self.surface.y
        if h - h0 > self.height * 0.5:
            return 0.0
        if h0 - h > self.height * 0.5:
            return 1.0
        return (h0 - h) / self.height + 0.5

    def update_force(self, particle: Particle, t: float) -> None:
        immersed = self._immersed(particle.pos.y)
        lift = self.liquid_density * particle.volume * immersed * GRAVITY
        particle.add_force(Vector3(0.0, lift, 0.0))

    def update_rigid(self, body: RigidBody, t: float) -> None:
        p, s = body.position, self.surface
        if (
            p.x < s.x - self.x_extent
            or p.x > s.x + self.x_extent
            or p.z < s.z - self.z_extent
            or p.z > s.z + self.z_extent
        ):
            return
        immersed = self._immersed(p.y)
        lift = self.liquid_density * self.volume * immersed * GRAVITY
        body.add_force(Vector3(0.0, lift, 0.0) / 4)


class HorizontalForceGenerator(ForceGenerator):
    """Pushes rigid bodies along x, flipping direction every ``period`` seconds."""

    def __init__(self, k: float, period: float, positive_first: bool) -> None:
        super().__init__()
        self.k = k
        self.period = period
        self.left = not positive_first
        self.current_time = 0.0
        self.last_change = 0.0

    def update_force(self, particle: Particle, t: float) -> None:
        """Particles are unaffected; this generator only moves rigid bodies."""

    def update_rigid(self, body: RigidBody, t: float) -> None:
        if not self.enabled:
            return
        self.current_time += t
        if self.current_time > self.period + self.last_change:
            self.last_change = self.current_time
            self.left = not self.left
        if self.period == self.last_change:
            body.linear_velocity = Vector3()
        direction = -1.0 if self.left else 1.0
        body.add_force(Vector3(direction, 0.0, 0.0) * (self.k * body.mass))


class ParticleForceRegistry:
    """Pairs of force generators and the particles they act upon."""

    def __init__(self) -> None:
        self._pairs: list[tuple[ForceGenerator, Particle]] = []

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[tuple[ForceGenerator, Particle]]:
        return iter(list(self._pairs))

    def add(self, generator: ForceGenerator, particle: Particle) -> None:
        self._pairs.append((generator, particle))

    def update_forces(self, t: float) -> None:
        for generator, particle in list(self._pairs):
            generator.update_force(particle, t)

    def remove_particle(self, particle: Particle) -> None:
        """Drop every registration that involves ``particle``."""
        self._pairs = [(g, p) for g, p in self._pairs if p is not particle]