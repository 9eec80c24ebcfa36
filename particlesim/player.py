"""The player: a rolling sphere steered by torque."""

from __future__ import annotations

import math

from .rigid import RigidBody, Shape
from .vector import Vector3

INITIAL_POSITION = Vector3(0.0, 10.0, 0.0)
PLAYER_SIZE = 2.0
TORQUE_SCALE = 2000.0

_KEY_DIRECTIONS = {
    "a": Vector3(0.0, 0.0, -1.0),
    "d": Vector3(0.0, 0.0, 1.0),
    "w": Vector3(1.0, 0.0, 0.0),
    "s": Vector3(-1.0, 0.0, 0.0),
}


def _default_body() -> RigidBody:
    size = Vector3(PLAYER_SIZE, PLAYER_SIZE, PLAYER_SIZE)
    return RigidBody(
        position=INITIAL_POSITION,
        shape=Shape.SPHERE,
        half_extents=size,
        inertia=Vector3(size.y * size.z, size.x * size.z, size.x * size.y),
    )


class PlayerController:
    """Turns key presses into torque on the player's body and tests collisions."""

    size = PLAYER_SIZE

    def __init__(self, k: float, body: RigidBody | None = None) -> None:
        self.k = k
        self.body = body if body is not None else _default_body()
        self.enabled = False

    @property
    def position(self) -> Vector3:
        return self.body.position

    def toggle(self) -> None:
        self.enabled = not self.enabled

    def add_force(self, key: str) -> None:
        """Apply torque for W/A/S/D; other keys apply none."""
        direction = _KEY_DIRECTIONS.get(key, Vector3())
        self.body.add_torque(direction * (self.k * TORQUE_SCALE))

    def collides_with(self, pos: Vector3, size: float, sphere: bool) -> bool:
        """Whether a particle of ``size`` at ``pos`` touches the player."""
        reach = size + self.size
        d = pos - self.body.position
        if abs(d.x) > reach or abs(d.y) > reach or abs(d.z) > reach:
            return False
        # Spheres and boxes are both judged by centre distance.
        return math.sqrt(d.x * d.x + d.y * d.y + d.z * d.z) < reach

    def reset_position(self) -> None:
        self.body.reset(INITIAL_POSITION)