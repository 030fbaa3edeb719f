"""Nutation in longitude and obliquity.

Two models are available:

- ``iau2000b``: the truncated IAU 2000B series (about 1 mas accuracy).
- ``lp``: the four-term low precision series from Meeus, ch. 22
  (about 0.5 arcsec accuracy).

Values are returned in milliarcseconds.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array

from skyframes import sofa
from skyframes.config import check_nutation_model
from skyframes.constants import DEG2RAD
from skyframes.coordinates import Rx, Rz
from skyframes.epoch import Epoch


class NutationAngles(NamedTuple):
    """Nutation of an epoch.

    Attributes:
        longitude: Nutation in longitude, delta psi [mas].
        obliquity: Nutation in obliquity, delta epsilon [mas].
    """

    longitude: float
    obliquity: float


def nutation_lp(t: float) -> tuple[Array, Array]:
    """Low precision nutation.

    Args:
        t: Julian centuries since J2000.0.

    Returns:
        Tuple of (dpsi, deps) in arcseconds.

    References:

        1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 22.
    """
    omega = (125.04452 - 1934.136261 * t) * DEG2RAD
    sun = (280.4665 + 36000.7698 * t) * DEG2RAD
    moon = (218.3165 + 481267.8813 * t) * DEG2RAD

    dpsi = (-17.20 * jnp.sin(omega) - 1.32 * jnp.sin(2 * sun)
            - 0.23 * jnp.sin(2 * moon) + 0.21 * jnp.sin(2 * omega))
    deps = (9.20 * jnp.cos(omega) + 0.57 * jnp.cos(2 * sun)
            + 0.10 * jnp.cos(2 * moon) - 0.09 * jnp.cos(2 * omega))
    return dpsi, deps


def nutation(epoch: Epoch, model: str = "iau2000b") -> NutationAngles:
    """Compute the nutation angles at ``epoch``.

    Args:
        epoch (Epoch): Instant of date.
        model (str): ``"iau2000b"`` or ``"lp"``.

    Returns:
        NutationAngles: Angles in milliarcseconds.

    Raises:
        UnknownEnumError: If ``model`` is not recognized.
    """
    model = check_nutation_model(model)

    if model == "iau2000b":
        dpsi, deps = sofa.nut00b(*epoch.jd_parts())
        return NutationAngles(float(dpsi / sofa.DMAS2R), float(deps / sofa.DMAS2R))

    dpsi, deps = nutation_lp(epoch.julian_centuries())
    return NutationAngles(float(dpsi) * 1e3, float(deps) * 1e3)


def nutation_matrix(epsilon: float, dpsi: float, deps: float) -> Array:
    """Rotation from the mean to the true equator and equinox of date.

    ``N = Rx(-(epsilon + deps)) @ Rz(-dpsi) @ Rx(epsilon)``; the inverse
    is ``N.T``.

    Args:
        epsilon: Mean obliquity of date [rad].
        dpsi: Nutation in longitude [rad].
        deps: Nutation in obliquity [rad].

    Returns:
        3x3 rotation matrix.
    """
    return Rx(-(epsilon + deps)) @ Rz(-dpsi) @ Rx(epsilon)
