"""Atmospheric refraction.

Saemundsson's formula maps a true (airless) altitude to the apparent one.
The inverse is solved by fixed-point iteration seeded with Bennett's
formula, so ``true_altitude(apparent_altitude(h)) == h`` to machine
precision.

Refraction lifts a body whose true altitude is slightly negative above
the horizon. The models therefore apply to every apparent altitude above
0 and to every true altitude above :data:`HORIZON_TRUE_ALTITUDE`, the
true altitude seen exactly on the horizon. Below those limits the body is
not visible and both functions return their input unchanged.
"""

from __future__ import annotations

import logging

import jax.numpy as jnp

from skyframes.constants import DEG2RAD

logger = logging.getLogger(__name__)

_MAX_ITERATIONS = 50
_TOLERANCE = 1e-13


def _saemundsson(true_altitude: float) -> float:
    """Refraction for a true altitude [deg], in degrees."""
    h = true_altitude
    arcmin = 1.02 / jnp.tan((h + 10.3 / (h + 5.11)) * DEG2RAD)
    # Offset so the refraction vanishes at the zenith
    return float(arcmin + 0.0019279) / 60.0


def _bennett(apparent_altitude: float) -> float:
    """Refraction for an apparent altitude [deg], in degrees."""
    h = apparent_altitude
    arcmin = 1.0 / jnp.tan((h + 7.31 / (h + 4.4)) * DEG2RAD)
    return float(arcmin + 0.0013515) / 60.0


def _solve_true(apparent_altitude: float) -> float:
    """True altitude whose Saemundsson refraction lands on ``apparent_altitude``."""
    h = apparent_altitude - _bennett(apparent_altitude)
    for _ in range(_MAX_ITERATIONS):
        updated = apparent_altitude - _saemundsson(h)
        if abs(updated - h) < _TOLERANCE:
            return updated
        h = updated
    return h


HORIZON_TRUE_ALTITUDE = _solve_true(0.0)
"""
True altitude of a body seen exactly on the horizon, about -0.574. Units: *deg*
"""


def apparent_altitude(true_altitude: float) -> float:
    """Apparent altitude of a body seen through the atmosphere.

    Args:
        true_altitude (float): Airless altitude [deg].

    Returns:
        float: Apparent altitude [deg]; the input itself when it is at or
        below :data:`HORIZON_TRUE_ALTITUDE`.

    References:

        1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 16.
    """
    if true_altitude <= HORIZON_TRUE_ALTITUDE:
        logger.debug("Refraction skipped for true altitude %.6f deg", true_altitude)
        return true_altitude
    return true_altitude + _saemundsson(true_altitude)


def true_altitude(apparent_altitude: float) -> float:
    """Airless altitude of a body seen at ``apparent_altitude``.

    Args:
        apparent_altitude (float): Observed altitude [deg].

    Returns:
        float: True altitude [deg], negative for bodies seen within about
        0.57 deg of the horizon; the input itself when it is <= 0.
    """
    if apparent_altitude <= 0.0:
        logger.debug("Refraction skipped for apparent altitude %.6f deg", apparent_altitude)
        return apparent_altitude
    return _solve_true(apparent_altitude)
