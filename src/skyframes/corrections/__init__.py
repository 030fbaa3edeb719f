"""Numeric providers for the physical effects separating the frames.

Each provider keeps the unit contract the frames rely on: precession
angles in arcseconds, nutation in milliarcseconds, sidereal time in seconds
of time, altitudes in degrees, distances in AU.
"""

from skyframes.corrections.aberration import annual_aberration
from skyframes.corrections.deflection import gravitational_deflection
from skyframes.corrections.ephemeris import (
    SolarElements,
    earth_heliocentric_position,
    solar_elements,
)
from skyframes.corrections.fk5 import fk5_correction
from skyframes.corrections.nutation import (
    NutationAngles,
    nutation,
    nutation_lp,
    nutation_matrix,
)
from skyframes.corrections.parallax import (
    diurnal_parallax,
    observer_geocentric_terms,
    observer_position,
)
from skyframes.corrections.precession import PrecessionAngles, precession
from skyframes.corrections.refraction import HORIZON_TRUE_ALTITUDE, apparent_altitude, true_altitude
from skyframes.corrections.sidereal import SiderealTime, sidereal_time

__all__ = [
    "HORIZON_TRUE_ALTITUDE",
    "NutationAngles",
    "PrecessionAngles",
    "SiderealTime",
    "SolarElements",
    "annual_aberration",
    "apparent_altitude",
    "diurnal_parallax",
    "earth_heliocentric_position",
    "fk5_correction",
    "gravitational_deflection",
    "nutation",
    "nutation_lp",
    "nutation_matrix",
    "observer_geocentric_terms",
    "observer_position",
    "precession",
    "sidereal_time",
    "solar_elements",
    "true_altitude",
]
