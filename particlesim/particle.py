"""Point particles with explicit or semi-implicit Euler integration."""

from __future__ import annotations

import copy
import math

from .vector import Vector3

Color = tuple[float, float, float, float]

WHITE: Color = (1.0, 1.0, 1.0, 1.0)
DEFAULT_ACCELERATION = Vector3(0.0, -2.0, 0.0)

Y_MIN = -10.0
Y_MAX = 50.0
X_LIMIT = 50.0


class Particle:
    """A particle with position, velocity, accumulated force and a lifetime."""

    def __init__(
        self,
        pos: Vector3,
        vel: Vector3,
        size: float,
        time_to_live: float,
        color: Color = WHITE,
        acc: Vector3 = DEFAULT_ACCELERATION,
        damping: float = 0.999,
        mass: float = 20.0,
        implicit: bool = True,
        collides_with_player: bool = False,
        square: bool = False,
    ) -> None:
        self.pos = pos
        self.vel = vel
        self.size = size
        self.time_to_live = time_to_live
        self.color: Color = tuple(color)  # type: ignore[assignment]
        self.acc = acc
        self.damping = damping
        self.implicit = implicit
        self.collides_with_player = collides_with_player
        self.sphere = not square
        self.force = Vector3()
        self.age = 0.0
        self.volume = 0.0
        self.mass = mass

    @classmethod
    def box(
        cls,
        pos: Vector3,
        size: float,
        color: Color = WHITE,
        collides_with_player: bool = False,
    ) -> Particle:
        """A static cube that never moves and never expires."""
        return cls(
            pos,
            Vector3(),
            size,
            math.inf,
            color,
            Vector3(),
            1.0,
            math.inf,
            True,
            collides_with_player,
            True,
        )

    @property
    def mass(self) -> float:
        return self._mass

    @mass.setter
    def mass(self, value: float) -> None:
        self._mass = float(value)
        self._inverse_mass = 1.0 / self._mass if self._mass else math.inf

    @property
    def inverse_mass(self) -> float:
        return self._inverse_mass

    def integrate(self, t: float) -> bool:
        """Advance the particle by ``t`` seconds.

        Returns False once the particle has outlived its lifetime or left
        the allowed region; the caller is expected to discard it.
        """
        self.age += t
        p = self.pos
        if (
            self.age > self.time_to_live
            or p.y < Y_MIN
            or p.y > Y_MAX
            or p.x < -X_LIMIT
            or p.x > X_LIMIT
        ):
            return False

        if self.inverse_mass <= 0.0:
            return True

        if self.implicit:
            self.pos = self.pos + self.vel * t

        total_acc = self.acc + self.force * self.inverse_mass
        self.vel = (self.vel + total_acc * t) * (self.damping ** t)

        if not self.implicit:
            self.pos = self.pos + self.vel * t

        self.clear_force()
        return True

    def clone(self) -> Particle:
        """A fresh particle with the same parameters, age and force reset."""
        return Particle(
            self.pos,
            self.vel,
            self.size,
            self.time_to_live,
            self.color,
            self.acc,
            self.damping,
            self.mass,
            self.implicit,
            self.collides_with_player,
            not self.sphere,
        )

    def add_force(self, force: Vector3) -> None:
        self.force = self.force + force

    def clear_force(self) -> None:
        self.force = Vector3()

    def move(self, dx: float, dy: float, dz: float) -> None:
        """Shift the particle by the given offsets."""
        self.pos = self.pos + Vector3(dx, dy, dz)


class Projectile(Particle):
    """A particle whose acceleration is scaled by its mass and never expires."""

    def __init__(
        self,
        pos: Vector3,
        speed: float,
        size: float,
        time_to_live: float,
        acc: Vector3,
        damping: float,
        mass: float,
    ) -> None:
        super().__init__(pos, Vector3(), size, time_to_live, WHITE, acc, damping)
        self.speed = speed
        self.mass = mass

    def integrate(self, t: float) -> bool:
        self.pos = self.pos + self.vel * t
        self.vel = self.vel * (self.damping ** t) + self.acc * (self.mass * t)
        return True


class CannonBall(Projectile):
    """A projectile launched along a direction with an extra upward push."""

    def __init__(
        self,
        pos: Vector3,
        speed: float,
        size: float,
        time_to_live: float,
        acc: Vector3,
        damping: float,
        mass: float,
        direction: Vector3,
    ) -> None:
        super().__init__(pos, speed, size, time_to_live, acc, damping, mass)
        self.vel = direction * speed + Vector3(0.0, speed, 0.0)

    def clone(self) -> CannonBall:
        return copy.copy(self)