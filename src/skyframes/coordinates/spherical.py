"""Spherical position value type shared by every frame.

A :class:`SphericalPosition` is an immutable ``(r, theta, phi)`` triple:
radius, polar angle measured from the +z pole, and azimuth measured from
+x towards +y, angles in radians. Frames own one and replace it wholesale
on every mutation, so handing one out never exposes internal state.

The polar angle is canonically in [0, pi] and the azimuth in [0, 2pi), but
a stored position may sit outside those ranges when a frame tracks a body
continuously; :meth:`SphericalPosition.canonical` folds it back and
:meth:`SphericalPosition.closest_to` picks the equivalent representation
nearest to a previous one.
"""

from __future__ import annotations

import math
from typing import NamedTuple

import jax.numpy as jnp
from jax import Array

from skyframes.config import get_dtype

_TWO_PI = 2.0 * math.pi


class SphericalPosition(NamedTuple):
    """Point in 3D space in spherical coordinates.

    Attributes:
        r: Radius (AU for celestial positions).
        theta: Polar angle from the +z axis [rad].
        phi: Azimuth from +x towards +y [rad].
    """

    r: float = 1.0
    theta: float = 0.0
    phi: float = 0.0

    @classmethod
    def from_cartesian(cls, xyz: Array) -> SphericalPosition:
        """Build a canonical position from a cartesian 3-vector."""
        x, y, z = (float(c) for c in jnp.asarray(xyz))
        rho = math.hypot(x, y)
        # atan2 keeps full precision next to the poles, unlike acos(z/r)
        theta = math.atan2(rho, z)
        phi = math.atan2(y, x) if rho > 0.0 else 0.0
        if phi < 0.0:
            phi += _TWO_PI
        return cls(math.hypot(rho, z), theta, phi)

    def to_cartesian(self) -> Array:
        """Return the cartesian 3-vector ``(x, y, z)``."""
        sin_theta = math.sin(self.theta)
        return jnp.array([
            self.r * sin_theta * math.cos(self.phi),
            self.r * sin_theta * math.sin(self.phi),
            self.r * math.cos(self.theta),
        ], dtype=get_dtype())

    def unit_vector(self) -> Array:
        """Return the cartesian direction with unit length."""
        return SphericalPosition(1.0, self.theta, self.phi).to_cartesian()

    def rotate(self, matrix: Array) -> SphericalPosition:
        """Return the position re-expressed through a 3x3 rotation matrix."""
        rotated = SphericalPosition.from_cartesian(matrix @ self.to_cartesian())
        return rotated._replace(r=self.r)

    def invert(self, axis: str) -> SphericalPosition:
        """Return the position with one cartesian axis negated.

        Computed on the angles directly so it is an exact involution.
        """
        if axis == "x":
            return self._replace(phi=math.pi - self.phi)
        if axis == "y":
            return self._replace(phi=-self.phi)
        if axis == "z":
            return self._replace(theta=math.pi - self.theta)
        raise ValueError(f"Unknown axis {axis!r}. Must be one of: x, y, z")

    def translate(self, offset: SphericalPosition) -> SphericalPosition:
        """Return the vector sum of this position and ``offset``."""
        return SphericalPosition.from_cartesian(self.to_cartesian() + offset.to_cartesian())

    def antipode(self) -> SphericalPosition:
        """Return the position reflected through the origin."""
        return SphericalPosition(self.r, math.pi - self.theta, self.phi + math.pi)

    def shift(self, dphi: float, dtheta: float) -> SphericalPosition:
        """Return the position with angle offsets added (radians)."""
        return self._replace(theta=self.theta + dtheta, phi=self.phi + dphi)

    def is_mirrored(self) -> bool:
        """True if the stored polar angle folds back past a pole.

        Such a representation points the other way in theta, so an offset
        computed on the canonical angles must be negated in theta.
        """
        theta = math.fmod(self.theta, _TWO_PI)
        if theta < 0.0:
            theta += _TWO_PI
        return theta > math.pi

    def canonical(self) -> SphericalPosition:
        """Fold the angles into theta in [0, pi] and phi in [0, 2pi)."""
        theta = math.fmod(self.theta, _TWO_PI)
        if theta < 0.0:
            theta += _TWO_PI
        phi = self.phi
        if theta > math.pi:
            theta = _TWO_PI - theta
            phi += math.pi
        phi = math.fmod(phi, _TWO_PI)
        if phi < 0.0:
            phi += _TWO_PI
        if phi >= _TWO_PI:
            phi = 0.0
        return SphericalPosition(self.r, theta, phi)

    def closest_to(self, previous: SphericalPosition) -> SphericalPosition:
        """Return the equivalent representation nearest to ``previous``.

        Candidates are ``(theta + 2k pi, phi + 2m pi)`` and
        ``(-theta + 2k pi, phi + pi + 2m pi)``; the one with the smallest
        angular step from ``previous`` wins.
        """
        same = self._nearest(self.theta, self.phi, previous)
        mirrored = self._nearest(-self.theta, self.phi + math.pi, previous)

        def step(candidate):
            return ((candidate.theta - previous.theta) ** 2
                    + (candidate.phi - previous.phi) ** 2)

        return same if step(same) <= step(mirrored) else mirrored

    def _nearest(self, theta: float, phi: float,
                 previous: SphericalPosition) -> SphericalPosition:
        theta += _TWO_PI * round((previous.theta - theta) / _TWO_PI)
        phi += _TWO_PI * round((previous.phi - phi) / _TWO_PI)
        return SphericalPosition(self.r, theta, phi)

    def separation(self, other: SphericalPosition) -> float:
        """Angular distance to ``other`` in radians."""
        a = self.unit_vector()
        b = other.unit_vector()
        return float(jnp.arctan2(jnp.linalg.norm(jnp.cross(a, b)), jnp.dot(a, b)))
