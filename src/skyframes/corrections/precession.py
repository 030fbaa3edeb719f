"""Equatorial precession angles and matrix.

Three models are available:

- ``iau2006``: Capitaine et al. (2003) P03 angles, adopted by the IAU in 2006.
- ``iau2000``: Lieske (1977) IAU 1976 angles with the IAU 2000 precession-rate
  corrections applied.
- ``iau1976``: Lieske (1977) IAU 1976 angles.

All angles are referred to J2000.0 and returned in arcseconds, the unit
contract the frames rely on when summing corrections onto stored angles.
"""

from __future__ import annotations

from typing import NamedTuple

import jax.numpy as jnp
from jax import Array

from skyframes import sofa
from skyframes.config import check_precession_model
from skyframes.constants import AS2RAD
from skyframes.coordinates import Ry, Rz
from skyframes.epoch import Epoch


class PrecessionAngles(NamedTuple):
    """Precession angles of an epoch relative to J2000.0.

    Attributes:
        zeta: Equatorial precession angle zeta_A [arcsec].
        theta: Equatorial precession angle theta_A [arcsec].
        z: Equatorial precession angle z_A [arcsec].
        epsilon: Mean obliquity of the ecliptic at the epoch [arcsec].
        epsilon0: Mean obliquity of the ecliptic at J2000.0 [arcsec].
    """

    zeta: float
    theta: float
    z: float
    epsilon: float
    epsilon0: float

    def matrix(self) -> Array:
        """Rotation from mean J2000.0 to the mean equator and equinox of the epoch.

        ``P = Rz(-z) @ Ry(theta) @ Rz(-zeta)``; the inverse is ``P.T``.
        """
        return Rz(-self.z * AS2RAD) @ Ry(self.theta * AS2RAD) @ Rz(-self.zeta * AS2RAD)


def precession(epoch: Epoch, model: str = "iau2006") -> PrecessionAngles:
    """Compute precession angles from J2000.0 to ``epoch``.

    Args:
        epoch (Epoch): Target equinox.
        model (str): ``"iau2006"``, ``"iau2000"`` or ``"iau1976"``.

    Returns:
        PrecessionAngles: Angles in arcseconds.

    Raises:
        UnknownEnumError: If ``model`` is not recognized.

    References:

        1. N. Capitaine, P. T. Wallace and J. Chapront, "Expressions for IAU
           2000 precession quantities", *Astron. Astrophys.* 412, 2003.
        2. J. H. Lieske et al., "Expressions for the precession quantities
           based upon the IAU (1976) system of astronomical constants",
           *Astron. Astrophys.* 58, 1977.
    """
    model = check_precession_model(model)
    date1, date2 = epoch.jd_parts()

    if model == "iau2006":
        zeta, z, theta = sofa.p06e(date1, date2)
        eps = sofa.obl06(date1, date2)
        eps0 = sofa.obl06(sofa.DJ00, 0.0)
    else:
        zeta, z, theta = sofa.prec76(date1, date2)
        eps = sofa.obl80(date1, date2)
        eps0 = sofa.obl80(sofa.DJ00, 0.0)
        if model == "iau2000":
            # Project the longitude-rate correction onto the equatorial angles
            dpsipr, depspr = sofa.pr00(date1, date2)
            half_node = 0.5 * dpsipr * jnp.cos(eps0)
            zeta = zeta + half_node
            z = z + half_node
            theta = theta + dpsipr * jnp.sin(eps0)
            eps = eps + depspr

    return PrecessionAngles(
        zeta=float(zeta / sofa.DAS2R),
        theta=float(theta / sofa.DAS2R),
        z=float(z / sofa.DAS2R),
        epsilon=float(eps / sofa.DAS2R),
        epsilon0=float(eps0 / sofa.DAS2R),
    )
