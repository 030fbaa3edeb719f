"""Diurnal parallax.

Moves a position between the Earth's center and an observer on its
surface. The observer's geocentric vector is built from the geodetic
latitude and elevation on the reference ellipsoid, rotated into the frame
the position is expressed in, and subtracted (geocentric to topocentric) or
added back (topocentric to geocentric). The two directions are exact
inverses of each other.
"""

from __future__ import annotations

import math

import jax.numpy as jnp
from jax import Array

from skyframes import sofa
from skyframes.constants import AU, DEG2RAD, EARTH_AXIS_RATIO, R_EARTH_EQUATOR
from skyframes.coordinates import SphericalPosition

_SYSTEMS = ("horizontal", "hour_angle", "equinoctial")


def observer_geocentric_terms(latitude: float, elevation: float) -> tuple[float, float]:
    """Return ``(rho sin(phi'), rho cos(phi'))`` in equatorial Earth radii.

    Args:
        latitude: Geodetic latitude [deg].
        elevation: Height above the ellipsoid [m].

    References:

        1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 11.
    """
    lat = latitude * DEG2RAD
    u = math.atan(EARTH_AXIS_RATIO * math.tan(lat))
    height = elevation / R_EARTH_EQUATOR
    rho_sin = EARTH_AXIS_RATIO * math.sin(u) + height * math.sin(lat)
    rho_cos = math.cos(u) + height * math.cos(lat)
    return rho_sin, rho_cos


def observer_position(sidereal: float, latitude: float, elevation: float,
                      system: str = "horizontal") -> Array:
    """Geocentric position of the observer, cartesian, in AU.

    Args:
        sidereal: Local apparent sidereal time [s of time].
        latitude: Geodetic latitude [deg].
        elevation: Height above the ellipsoid [m].
        system: Axes of the result: ``"horizontal"`` (x south, z zenith),
            ``"hour_angle"`` (x meridian, z pole) or ``"equinoctial"``
            (true equator and equinox of date).

    Returns:
        Array: Observer position [AU].
    """
    if system not in _SYSTEMS:
        raise ValueError(f"Unknown system {system!r}. Must be one of: {', '.join(_SYSTEMS)}")

    rho_sin, rho_cos = observer_geocentric_terms(latitude, elevation)
    scale = R_EARTH_EQUATOR / AU

    if system == "horizontal":
        lat = latitude * DEG2RAD
        vector = (rho_cos * math.sin(lat) - rho_sin * math.cos(lat),
                  0.0,
                  rho_cos * math.cos(lat) + rho_sin * math.sin(lat))
    elif system == "hour_angle":
        vector = (rho_cos, 0.0, rho_sin)
    else:
        lst = sidereal * sofa.DS2R
        vector = (rho_cos * math.cos(lst), rho_cos * math.sin(lst), rho_sin)

    return jnp.array(vector) * scale


def diurnal_parallax(position: SphericalPosition, sidereal: float,
                     latitude: float, elevation: float,
                     system: str = "horizontal",
                     to_topocentric: bool = True) -> SphericalPosition:
    """Convert between geocentric and topocentric positions.

    Args:
        position (SphericalPosition): Geocentric position when
            ``to_topocentric`` is True, topocentric otherwise [AU].
        sidereal (float): Local apparent sidereal time [s of time].
        latitude (float): Observer geodetic latitude [deg].
        elevation (float): Observer height above the ellipsoid [m].
        system (str): Axes ``position`` is expressed in, see
            :func:`observer_position`.
        to_topocentric (bool): Direction of the conversion.

    Returns:
        SphericalPosition: The complementary position (canonical angles).
    """
    observer = observer_position(sidereal, latitude, elevation, system)
    vector = position.to_cartesian()
    vector = vector - observer if to_topocentric else vector + observer
    return SphericalPosition.from_cartesian(vector)
