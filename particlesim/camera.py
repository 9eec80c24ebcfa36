"""A free-look camera driven by keyboard and mouse input."""

from __future__ import annotations

import math

from .vector import Vector3

UP = Vector3(0.0, 1.0, 0.0)


def _rotate(v: Vector3, angle: float, axis: Vector3) -> Vector3:
    """Rotate ``v`` by ``angle`` radians about the unit vector ``axis``."""
    c, s = math.cos(angle), math.sin(angle)
    return v * c + axis.cross(v) * s + axis * (axis.dot(v) * (1.0 - c))


class Camera:
    """Eye position and viewing direction, with an offset for following targets."""

    def __init__(self, eye: Vector3, direction: Vector3) -> None:
        self.eye = eye
        self.direction, _ = direction.unit_and_length()
        self.offset = Vector3()
        self.mouse_x = 0
        self.mouse_y = 0
        self.can_move = True

    def _side(self) -> Vector3:
        side, _ = self.direction.cross(UP).unit_and_length()
        return side

    def handle_mouse(self, button: int, state: int, x: int, y: int) -> None:
        self.mouse_x = x
        self.mouse_y = y

    def handle_key(self, key: str, x: int = 0, y: int = 0, speed: float = 1.0) -> bool:
        """Move with W/A/S/D; return whether the key was handled."""
        if not self.can_move:
            return False
        step = 2.0 * speed
        side = self._side()
        match key.upper():
            case "W":
                self.eye = self.eye + self.direction * step
            case "S":
                self.eye = self.eye - self.direction * step
            case "A":
                self.eye = self.eye - side * step
            case "D":
                self.eye = self.eye + side * step
            case _:
                return False
        return True

    def handle_analog_move(self, x: float, y: float) -> None:
        side = self._side()
        self.eye = self.eye + self.direction * y + side * x

    def handle_motion(self, x: int, y: int) -> None:
        """Turn the view by the mouse movement since the last event, in degrees."""
        dx = self.mouse_x - x
        dy = self.mouse_y - y
        side = self._side()
        direction = _rotate(self.direction, math.pi * dx / 180.0, UP)
        direction = _rotate(direction, math.pi * dy / 180.0, side)
        self.direction, _ = direction.unit_and_length()
        self.mouse_x = x
        self.mouse_y = y

    def toggle_movement(self) -> None:
        self.can_move = not self.can_move