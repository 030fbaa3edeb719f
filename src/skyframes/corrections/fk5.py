"""Reduction from the dynamical (VSOP87) frame to FK5.

Meeus ch. 32 gives the correction in ecliptic coordinates; the equinoctial
form converts through the mean ecliptic of date and back, so the two
frames stay consistent.
"""

from __future__ import annotations

import math

from skyframes.constants import AS2RAD, DEG2RAD
from skyframes.coordinates import Rx, SphericalPosition
from skyframes.epoch import Epoch

_POLE_GUARD = 1e-12


def _ecliptic_offsets(position: SphericalPosition, t: float) -> tuple[float, float]:
    lon = position.phi
    lat = math.pi / 2 - position.theta
    shifted = lon - (1.397 * t + 0.00031 * t * t) * DEG2RAD

    cos_lat = math.cos(lat)
    tan_lat = math.tan(lat) if abs(cos_lat) > _POLE_GUARD else 0.0

    dlon = -0.09033 + 0.03916 * (math.cos(shifted) + math.sin(shifted)) * tan_lat
    dlat = 0.03916 * (math.cos(shifted) - math.sin(shifted))
    return dlon * AS2RAD, -dlat * AS2RAD


def fk5_correction(position: SphericalPosition, epoch: Epoch,
                   system: str = "equinoctial",
                   obliquity: float = 0.0) -> tuple[float, float]:
    """Compute the FK5 frame-bias offsets of a position.

    Args:
        position (SphericalPosition): Canonical position in the dynamical frame.
        epoch (Epoch): Equinox of date.
        system (str): ``"equinoctial"`` or ``"ecliptic"``.
        obliquity (float): Mean obliquity of date [rad], equinoctial form only.

    Returns:
        tuple[float, float]: ``(dphi, dtheta)`` in radians.

    References:

        1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 32.
    """
    t = epoch.julian_centuries()

    if system == "ecliptic":
        return _ecliptic_offsets(position, t)
    if system != "equinoctial":
        raise ValueError(f"Unknown system {system!r}. Must be one of: equinoctial, ecliptic")

    ecliptic = position.rotate(Rx(obliquity))
    dlon, dlat = _ecliptic_offsets(ecliptic, t)
    corrected = ecliptic.shift(dlon, dlat).rotate(Rx(-obliquity))
    return (math.remainder(corrected.phi - position.phi, 2.0 * math.pi),
            corrected.theta - position.theta)
