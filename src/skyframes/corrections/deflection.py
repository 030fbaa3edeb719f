"""Gravitational deflection of light by the Sun.

Follows the IAU SOFA ``iauLdsun`` formulation for a body at infinity:
``p1 = p + w (e - (e.p) p)`` with ``w = SRS / E / (1 + p.e)``, where ``e``
is the unit Sun-to-observer vector and ``E`` its length in AU.
"""

from __future__ import annotations

import math

import jax.numpy as jnp
from jax import Array

from skyframes.constants import SCHWARZSCHILD_RADIUS_SUN
from skyframes.coordinates import SphericalPosition


def _wrap(angle: float) -> float:
    return math.remainder(angle, 2.0 * math.pi)


def gravitational_deflection(position: SphericalPosition,
                             earth: Array) -> tuple[float, float]:
    """Compute the light-deflection offsets of a position.

    Args:
        position (SphericalPosition): Canonical undeflected position.
        earth (Array): Heliocentric position of the observer, cartesian, in
            the same axes as ``position`` [AU].

    Returns:
        tuple[float, float]: ``(dphi, dtheta)`` in radians.
    """
    p = position.unit_vector()
    em = jnp.linalg.norm(earth)
    e = earth / em

    # Limit the deflection when the body is almost behind the Sun
    dlim = 1e-6 / jnp.maximum(em * em, 1.0)
    pe = jnp.dot(p, e)
    w = SCHWARZSCHILD_RADIUS_SUN / em / jnp.maximum(1.0 + pe, dlim)

    deflected = SphericalPosition.from_cartesian(p + w * (e - pe * p))
    return (_wrap(deflected.phi - position.phi),
            deflected.theta - position.theta)
