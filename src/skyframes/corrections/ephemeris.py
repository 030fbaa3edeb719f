"""Low precision solar theory.

The Sun's geometric position from Meeus ch. 25 (about 0.01 degree
accuracy), referred to the mean ecliptic and equinox of date. The same
elements feed the annual aberration formulae, and the Earth's heliocentric
position is the Sun's geocentric one reversed.
"""

from __future__ import annotations

import math
from typing import NamedTuple

from skyframes.constants import DEG2RAD
from skyframes.coordinates import SphericalPosition
from skyframes.epoch import Epoch


class SolarElements(NamedTuple):
    """Geometric solar quantities of date.

    Attributes:
        longitude: Sun's true geometric longitude [deg].
        anomaly: Sun's true anomaly [deg].
        distance: Sun-Earth distance [AU].
        eccentricity: Eccentricity of Earth's orbit.
        perihelion: Longitude of Earth's perihelion [deg].
    """

    longitude: float
    anomaly: float
    distance: float
    eccentricity: float
    perihelion: float


def solar_elements(t: float) -> SolarElements:
    """Compute the Sun's geometric elements.

    Args:
        t: Julian centuries since J2000.0.

    Returns:
        SolarElements: Angles normalized into [0, 360).

    References:

        1. J. Meeus, *Astronomical Algorithms (2nd Ed.)*, 1998, ch. 25.
    """
    mean_longitude = 280.46646 + t * (36000.76983 + t * 0.0003032)
    mean_anomaly = 357.52911 + t * (35999.05029 - t * 0.0001537)
    eccentricity = 0.016708634 - t * (0.000042037 + t * 0.0000001267)

    m = mean_anomaly * DEG2RAD
    center = ((1.914602 - t * (0.004817 + t * 0.000014)) * math.sin(m)
              + (0.019993 - 0.000101 * t) * math.sin(2 * m)
              + 0.000289 * math.sin(3 * m))

    true_anomaly = mean_anomaly + center
    distance = (1.000001018 * (1 - eccentricity ** 2)
                / (1 + eccentricity * math.cos(true_anomaly * DEG2RAD)))
    perihelion = 102.93735 + t * (1.71946 + t * 0.00046)

    return SolarElements(
        longitude=(mean_longitude + center) % 360.0,
        anomaly=true_anomaly % 360.0,
        distance=distance,
        eccentricity=eccentricity,
        perihelion=perihelion % 360.0,
    )


def earth_heliocentric_position(epoch: Epoch) -> SphericalPosition:
    """Heliocentric ecliptic position of the Earth.

    Args:
        epoch (Epoch): Instant of date.

    Returns:
        SphericalPosition: Position on the mean ecliptic and equinox of
            date; ``r`` in AU, latitude zero.
    """
    sun = solar_elements(epoch.julian_centuries())
    longitude = (sun.longitude + 180.0) % 360.0
    return SphericalPosition(sun.distance, math.pi / 2, longitude * DEG2RAD)
