"""Local sidereal time.

Greenwich mean sidereal time comes from the model matching the frame's
precession model (IAU 2006, IAU 2000 or IAU 1982). The equation of the
equinoxes ``dpsi * cos(epsilon)`` turns it into apparent ("true") sidereal
time, and the observer's east longitude makes it local.
"""

from __future__ import annotations

import math
from typing import NamedTuple

from skyframes import sofa
from skyframes.config import check_precession_model
from skyframes.constants import AS2RAD, DEG2RAD, MAS2RAD
from skyframes.corrections.nutation import nutation
from skyframes.corrections.precession import precession
from skyframes.epoch import Epoch


class SiderealTime(NamedTuple):
    """Local sidereal time of an instant.

    Attributes:
        mean: Local mean sidereal time [s of time, 0 <= t < 86400].
        true: Local apparent sidereal time [s of time, 0 <= t < 86400].
    """

    mean: float
    true: float

    @property
    def true_radians(self) -> float:
        """Local apparent sidereal time as an angle [rad]."""
        return self.true * sofa.DS2R


def sidereal_time(epoch: Epoch, longitude: float = 0.0,
                  precession_model: str = "iau2006",
                  nutation_model: str = "iau2000b") -> SiderealTime:
    """Compute local mean and apparent sidereal time.

    Args:
        epoch (Epoch): Instant, used as both UT1 and TT.
        longitude (float): Observer geographic longitude, east positive [deg].
        precession_model (str): Selects the GMST model and the obliquity.
        nutation_model (str): Selects the nutation in longitude.

    Returns:
        SiderealTime: Seconds of time.
    """
    precession_model = check_precession_model(precession_model)
    date1, date2 = epoch.jd_parts()
    angles = precession(epoch, precession_model)

    if precession_model == "iau2006":
        gmst = sofa.gmst06(date1, date2, date1, date2)
    elif precession_model == "iau2000":
        gmst = sofa.gmst00(date1, date2, date1, date2)
    else:
        gmst = sofa.gmst82(date1, date2)

    dpsi = nutation(epoch, nutation_model).longitude * MAS2RAD
    equation_of_equinoxes = dpsi * math.cos(angles.epsilon * AS2RAD)

    local = float(gmst) + longitude * DEG2RAD
    mean = float(sofa.anp(local))
    true = float(sofa.anp(local + equation_of_equinoxes))
    return SiderealTime(mean / sofa.DS2R, true / sofa.DS2R)
