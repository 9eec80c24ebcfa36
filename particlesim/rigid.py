"""Rigid bodies, their force registry and the generators that spawn them."""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, Protocol

from .vector import Vector3


class Shape(Enum):
    BOX = "box"
    SPHERE = "sphere"


@dataclass(eq=False)
class RigidBody:
    """State of a dynamic rigid body together with its pending force and torque."""

    position: Vector3 = Vector3()
    linear_velocity: Vector3 = Vector3()
    angular_velocity: Vector3 = Vector3()
    mass: float = 1.0
    shape: Shape = Shape.BOX
    half_extents: Vector3 = Vector3(1.0, 1.0, 1.0)
    inertia: Vector3 = Vector3(1.0, 1.0, 1.0)
    max_angular_velocity: float | None = None
    force: Vector3 = Vector3()
    torque: Vector3 = Vector3()

    def add_force(self, force: Vector3) -> None:
        self.force = self.force + force

    def add_torque(self, torque: Vector3) -> None:
        self.torque = self.torque + torque

    def reset(self, position: Vector3) -> None:
        """Teleport to ``position`` and stop all motion."""
        self.position = position
        self.linear_velocity = Vector3()
        self.angular_velocity = Vector3()


class RigidForce(Protocol):
    def update_rigid(self, body: RigidBody, t: float) -> None: ...


class RigidBodyForceRegistry:
    """Pairs of force generators and the rigid bodies they act upon."""

    def __init__(self) -> None:
        self._pairs: list[tuple[RigidForce, RigidBody]] = []

    def __len__(self) -> int:
        return len(self._pairs)

    def __iter__(self) -> Iterator[tuple[RigidForce, RigidBody]]:
        return iter(list(self._pairs))

    def add(self, generator: RigidForce, body: RigidBody) -> None:
        self._pairs.append((generator, body))

    def update_forces(self, t: float) -> None:
        for generator, body in list(self._pairs):
            generator.update_rigid(body, t)

    def remove_body(self, body: RigidBody) -> None:
        """Drop every registration that involves ``body``."""
        self._pairs = [(g, b) for g, b in self._pairs if b is not body]


def _box_inertia(size: Vector3) -> Vector3:
    return Vector3(size.y * size.z, size.x * size.z, size.x * size.y)


class RigidBodyGenerator(ABC):
    """Spawns rigid bodies over time; spawned bodies get ``forces`` attached."""

    def __init__(self, forces: Iterable[RigidForce], name: str) -> None:
        self.forces = list(forces)
        self.name = name

    @abstractmethod
    def generate_bodies(self, t: float) -> list[RigidBody]:
        """Advance by ``t`` seconds and return any newly spawned bodies."""


class StaticRigidBodyGenerator(RigidBodyGenerator):
    """Spawns one row of three motionless boxes, once."""

    max_bodies = 3

    def __init__(
        self,
        forces: Iterable[RigidForce],
        name: str,
        pos: Vector3,
        initial_size: float,
        random_size: float,
        spawn_interval: float,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(forces, name)
        self.pos = pos
        self.initial_size = initial_size
        self.random_size = random_size
        self.spawn_interval = spawn_interval
        self.rng = rng if rng is not None else random.Random()
        self.spawned = 0
        self.current_time = 0.0
        self.last_spawn = -1.0

    def generate_bodies(self, t: float) -> list[RigidBody]:
        self.current_time += t
        bodies: list[RigidBody] = []
        if (
            self.spawned < self.max_bodies
            and self.last_spawn + self.spawn_interval <= self.current_time
        ):
            self.last_spawn = self.current_time
            self.spawned += 3
            for i in range(3):
                extra = self.rng.uniform(0.0, self.random_size)
                side = self.initial_size + extra
                size = Vector3(side, side, side)
                body = RigidBody(
                    position=self.pos - Vector3(-15.0 + 15.0 * i, 0.0, 0.0),
                    shape=Shape.BOX,
                    half_extents=size,
                    inertia=_box_inertia(size),
                    max_angular_velocity=0.0,
                )
                bodies.insert(0, body)
        return bodies


class UniformRigidBodyGenerator(RigidBodyGenerator):
    """Spawns boxes or spheres scattered uniformly around a point."""

    max_bodies = 10

    def __init__(
        self,
        forces: Iterable[RigidForce],
        name: str,
        pos: Vector3,
        vel: Vector3,
        initial_size: float,
        random_vel: float,
        random_pos: float,
        random_size: float,
        spawn_interval: float,
        count: float,
        rng: random.Random | None = None,
    ) -> None:
        super().__init__(forces, name)
        self.pos = pos
        self.vel = vel
        self.initial_size = initial_size
        self.random_vel = random_vel
        self.random_pos = random_pos
        self.random_size = random_size
        self.spawn_interval = spawn_interval
        self.count = count
        self.rng = rng if rng is not None else random.Random()
        self.spawned = 0.0
        self.current_time = 0.0
        self.last_spawn = 0.0

    def generate_bodies(self, t: float) -> list[RigidBody]:
        self.current_time += t
        bodies: list[RigidBody] = []
        if (
            self.spawned < self.max_bodies
            and self.last_spawn + self.spawn_interval <= self.current_time
        ):
            self.last_spawn = self.current_time
            self.spawned += self.count
            rng = self.rng
            for _ in range(math.ceil(self.count)):
                extra = rng.uniform(0.0, self.random_size)
                offset = Vector3(
                    rng.uniform(-self.random_pos, self.random_pos),
                    0.0,
                    rng.uniform(-self.random_pos, self.random_pos),
                )
                velocity = self.vel + Vector3(
                    rng.uniform(-self.random_vel, self.random_vel),
                    2.0,
                    rng.uniform(-self.random_vel, self.random_vel),
                )
                side = self.initial_size + extra
                size = Vector3(side, side, side)
                shape = Shape.BOX if rng.randrange(2) == 1 else Shape.SPHERE
                body = RigidBody(
                    position=self.pos + offset,
                    linear_velocity=velocity,
                    shape=shape,
                    half_extents=size,
                    inertia=_box_inertia(size),
                )
                bodies.insert(0, body)
        return bodies