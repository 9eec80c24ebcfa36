"""Immutable three-component vectors for positions, velocities and forces."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Iterator


@dataclass(frozen=True, slots=True)
class Vector3:
    """A 3D vector supporting the usual vector arithmetic."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y
        yield self.z

    def __add__(self, other: object) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: object) -> Vector3:
        if not isinstance(other, Vector3):
            return NotImplemented
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def __mul__(self, scalar: object) -> Vector3:
        if not isinstance(scalar, Real):
            return NotImplemented
        s = float(scalar)
        return Vector3(self.x * s, self.y * s, self.z * s)

    __rmul__ = __mul__

    def __truediv__(self, scalar: object) -> Vector3:
        if not isinstance(scalar, Real):
            return NotImplemented
        s = float(scalar)
        return Vector3(self.x / s, self.y / s, self.z / s)

    def magnitude(self) -> float:
        """Euclidean length of the vector."""
        return math.sqrt(self.dot(self))

    def unit_and_length(self) -> tuple[Vector3, float]:
        """Return the unit vector and the original length.

        A zero vector yields itself and a length of zero.
        """
        length = self.magnitude()
        if length > 0.0:
            return self / length, length
        return Vector3(), 0.0

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vector3) -> Vector3:
        return Vector3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )