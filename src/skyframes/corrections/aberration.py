"""Annual aberration.

Displacement of a body's apparent direction caused by the Earth's orbital
velocity, including the eccentricity (E-terms) part, for either the
equinoctial or the ecliptic frame. Offsets are returned in the additive
form the frames store: ``(dphi, dtheta)`` to be added to the azimuth and
polar angle of the canonical position.
"""

from __future__ import annotations

import math

from skyframes.constants import ABERRATION_CONSTANT, AS2RAD, DEG2RAD
from skyframes.coordinates import SphericalPosition
from skyframes.corrections.ephemeris import solar_elements
from skyframes.epoch import Epoch

# Below this cos(latitude) the longitude offset is left at zero
_POLE_GUARD = 1e-12


def annual_aberration(position: SphericalPosition, epoch: Epoch,
                      system: str = "equinoctial",
                      obliquity: float = 0.0) -> tuple[float, float]:
    """Compute the annual aberration offsets of a position.

    Args:
        position (SphericalPosition): Canonical position without aberration.
        epoch (Epoch): Instant of date.
        system (str): ``"equinoctial"`` or ``"ecliptic"``.
        obliquity (float): Obliquity of the ecliptic [rad], used by the
            equinoctial form only.

    Returns:
        tuple[float, float]: ``(dphi, dtheta)`` in radians.

    References:

        1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 23.
    """
    sun = solar_elements(epoch.julian_centuries())
    kappa = ABERRATION_CONSTANT * AS2RAD
    e = sun.eccentricity
    sun_lon = sun.longitude * DEG2RAD
    peri = sun.perihelion * DEG2RAD

    lon = position.phi
    lat = math.pi / 2 - position.theta
    cos_lat = math.cos(lat)

    if system == "ecliptic":
        dlon = (-kappa * math.cos(sun_lon - lon)
                + e * kappa * math.cos(peri - lon))
        dlat = -kappa * math.sin(lat) * (math.sin(sun_lon - lon)
                                         - e * math.sin(peri - lon))
    elif system == "equinoctial":
        cos_eps = math.cos(obliquity)
        tan_eps = math.tan(obliquity)
        sin_ra, cos_ra = math.sin(lon), math.cos(lon)
        sin_dec = math.sin(lat)

        dlon = (-kappa * (cos_ra * math.cos(sun_lon) * cos_eps + sin_ra * math.sin(sun_lon))
                + e * kappa * (cos_ra * math.cos(peri) * cos_eps + sin_ra * math.sin(peri)))
        common = tan_eps * cos_lat - sin_ra * sin_dec
        dlat = (-kappa * (math.cos(sun_lon) * cos_eps * common + cos_ra * sin_dec * math.sin(sun_lon))
                + e * kappa * (math.cos(peri) * cos_eps * common + cos_ra * sin_dec * math.sin(peri)))
    else:
        raise ValueError(f"Unknown system {system!r}. Must be one of: equinoctial, ecliptic")

    dlon = dlon / cos_lat if abs(cos_lat) > _POLE_GUARD else 0.0
    return dlon, -dlat
