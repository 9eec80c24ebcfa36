"""Particle and rigid-body force simulation: particles, force fields, emitters and scenes."""

__version__ = "0.1.0"
__all__ = ["camera", "forces", "generators", "particle", "player", "rigid", "system", "vector"]