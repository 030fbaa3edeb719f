"""Spherical position value type and elementary rotations."""

from skyframes.coordinates.rotations import Rx, Ry, Rz, flip
from skyframes.coordinates.spherical import SphericalPosition

__all__ = [
    "Rx",
    "Ry",
    "Rz",
    "SphericalPosition",
    "flip",
]
